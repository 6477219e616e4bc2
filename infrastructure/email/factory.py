import logging
from typing import Dict, Optional, Type

from django.conf import settings

from .interface import EmailServiceInterface
from .mock_service import MockEmailService
from .smtp_service import SMTPEmailService


logger = logging.getLogger(__name__)


class EmailFactory:
    """Builds the email service named by ``INFRASTRUCTURE["EMAIL_BACKEND_TYPE"]``."""

    backends: Dict[str, Type[EmailServiceInterface]] = {
        "smtp": SMTPEmailService,
        "mock": MockEmailService,
    }

    @classmethod
    def create(cls, backend: Optional[str] = None) -> EmailServiceInterface:
        backend = backend or settings.INFRASTRUCTURE.get("EMAIL_BACKEND_TYPE", "smtp")
        try:
            service_class = cls.backends[backend]
        except KeyError:
            raise ValueError(f"Invalid email backend '{backend}', expected one of {sorted(cls.backends)}") from None
        logger.info(f"Using {service_class.__name__} for email")
        return service_class()
