from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        from django.conf import settings

        logger.debug(
            f"Core backend ready (business offset UTC{settings.LAUNDRY_UTC_OFFSET_HOURS:+d})"
        )
