import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class AuthenticationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"

    def ready(self):
        """
        Initialize authentication context.
        """
        # Logging receivers
        import authentication.signals  # noqa: F401

        # Metrics, login history and notification listeners
        try:
            from authentication.infra.events.listeners import register_authentication_listeners

            register_authentication_listeners()
        except Exception as e:
            logger.warning(f"Failed to register authentication listeners: {e}")

        # Initialize OpenTelemetry Tracing
        try:
            from django.conf import settings

            from infrastructure.observability import setup_tracing

            setup_tracing(
                service_name="sellora-backend",
                endpoint=getattr(settings, "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", None),
                enable=getattr(settings, "OTEL_TRACING_ENABLED", False),
            )
        except Exception as e:
            logger.warning(f"Failed to initialize OpenTelemetry tracing: {e}")
