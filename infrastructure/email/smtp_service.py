"""
SMTP Email Service
==================

EmailServiceInterface on top of Django's configured EMAIL_BACKEND.
"""

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import EmailMultiAlternatives

from .interface import EmailException, EmailMessage, EmailServiceInterface


logger = logging.getLogger(__name__)


class SMTPEmailService(EmailServiceInterface):
    """
    Configuration (in settings.py):
        EMAIL_BACKEND, EMAIL_HOST, EMAIL_PORT, EMAIL_HOST_USER,
        EMAIL_HOST_PASSWORD, EMAIL_USE_TLS, DEFAULT_FROM_EMAIL
    """

    def __init__(self, default_from: str = None):
        self.default_from = default_from or settings.DEFAULT_FROM_EMAIL

    def build(self, message: EmailMessage) -> EmailMultiAlternatives:
        email = EmailMultiAlternatives(
            subject=message.subject,
            body=message.body,
            from_email=message.from_email or self.default_from,
            to=message.to,
            reply_to=message.reply_to or None,
            headers=message.headers,
        )
        if message.html_body:
            email.attach_alternative(message.html_body, "text/html")
        return email

    def send(self, message: EmailMessage) -> bool:
        try:
            accepted = self.build(message).send(fail_silently=False)
        except (SMTPException, OSError) as e:
            logger.error(f"{message.category} email to {message.to} failed: {e}")
            raise EmailException(f"Email send failed: {e}") from e

        if not accepted:
            logger.warning(f"{message.category} email '{message.subject}' was not accepted by the backend")
            return False
        logger.info(f"{message.category} email '{message.subject}' sent to {len(message.to)} recipient(s)")
        return True
