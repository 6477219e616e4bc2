from .factory import EmailFactory
from .interface import EmailCategory, EmailException, EmailMessage, EmailServiceInterface
from .mock_service import MockEmailService
from .smtp_service import SMTPEmailService

__all__ = [
    "EmailCategory",
    "EmailException",
    "EmailFactory",
    "EmailMessage",
    "EmailServiceInterface",
    "MockEmailService",
    "SMTPEmailService",
]
