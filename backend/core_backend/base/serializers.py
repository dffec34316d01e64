from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Model serializer whose Meta may name `select_related_fields` and
    `prefetch_related_fields`; OptimizedQuerysetMixin applies them to the
    viewset queryset.
    """

    class Meta:
        select_related_fields = []
        prefetch_related_fields = []


class FieldsetMixin:
    """
    Trims the serialized fields to `Meta.fieldsets[view_mode]`, where
    `view_mode` comes from the serializer context. A fieldset of "__all__"
    (or an unknown/missing view mode) keeps every field. `Meta.required_fields`
    (default {"id"}) survive any fieldset.

        class Meta:
            fieldsets = {
                "list": ["order_id", "total", "order_status"],
                "detail": "__all__",
            }
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        fieldset = getattr(self.Meta, "fieldsets", {}).get(self.context.get("view_mode"))
        if fieldset is None or fieldset == "__all__":
            return

        keep = set(fieldset) | set(getattr(self.Meta, "required_fields", {"id"}))
        for name in [name for name in self.fields if name not in keep]:
            self.fields.pop(name)


class TimestampedSerializer(BaseModelSerializer):
    """Read-only created_at/updated_at for models that carry both."""

    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
