from rest_framework.viewsets import ViewSetMixin


class OptimizedQuerysetMixin(ViewSetMixin):
    """
    Applies the current serializer's `Meta.select_related_fields` and
    `Meta.prefetch_related_fields` to the viewset queryset.
    """

    def get_queryset(self):
        queryset = super().get_queryset()

        try:
            meta = getattr(self.get_serializer_class(), "Meta", None)
        except (AttributeError, AssertionError):
            return queryset
        if meta is None:
            return queryset

        select_related = list(getattr(meta, "select_related_fields", []))
        prefetch_related = list(getattr(meta, "prefetch_related_fields", []))
        if select_related:
            queryset = queryset.select_related(*select_related)
        if prefetch_related:
            queryset = queryset.prefetch_related(*prefetch_related)
        return queryset
