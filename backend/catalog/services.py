from core_backend.exceptions import ServiceNotFound, ValidationError
from .models import Service


class CatalogService:
    """
    Lookups against the service catalog used by pricing and ordering.
    """

    @staticmethod
    def find_service(service_id) -> Service:
        try:
            return Service.objects.get(pk=service_id)
        except Service.DoesNotExist:
            raise ServiceNotFound(service_id)
        except (ValueError, TypeError):
            raise ValidationError(f"Invalid service id: {service_id!r}")

    @staticmethod
    def find_services_by_ids(service_ids) -> dict:
        """
        Resolve ids to services. Returns a dict keyed by primary key;
        raises ServiceNotFound for the first id that does not resolve.
        """
        ids = []
        for service_id in service_ids:
            try:
                ids.append(int(service_id))
            except (ValueError, TypeError):
                raise ValidationError(f"Invalid service id: {service_id!r}")

        services = {s.pk: s for s in Service.objects.filter(pk__in=set(ids))}
        for service_id in ids:
            if service_id not in services:
                raise ServiceNotFound(service_id)
        return services
