"""
Email Service Interface
========================

Notification emails sent by Sellora: shop moderation results to
shopkeepers, reservations to shops and pickup readiness to buyers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Optional


class EmailCategory:
    SELLER_STATUS = "seller_status"
    ORDER_RESERVED = "order_reserved"
    ORDER_READY = "order_ready"
    GENERAL = "general"


@dataclass
class EmailMessage:
    """
    One outgoing notification.

    ``to`` accepts a single address or a list. ``category`` travels as the
    ``X-Sellora-Category`` header so bounces can be traced to the flow that
    sent them.
    """

    subject: str
    body: str
    to: List[str]
    category: str = EmailCategory.GENERAL
    from_email: Optional[str] = None
    html_body: Optional[str] = None
    reply_to: List[str] = field(default_factory=list)

    def __post_init__(self):
        if isinstance(self.to, str):
            self.to = [self.to]
        self.to = [address.strip() for address in self.to if address and address.strip()]
        if not self.to:
            raise EmailException(f"Email '{self.subject}' has no recipients")

    @property
    def headers(self) -> dict:
        return {"X-Sellora-Category": self.category}


class EmailServiceInterface(ABC):
    """
    Implementations:
        - SMTPEmailService: Django's configured email backend
        - MockEmailService: keeps messages in memory for tests
    """

    @abstractmethod
    def send(self, message: EmailMessage) -> bool:
        """
        Returns:
            True if the backend accepted the message

        Raises:
            EmailException: If the backend failed
        """

    def send_bulk(self, messages: Iterable[EmailMessage]) -> int:
        """Send several messages; returns how many were accepted."""
        return sum(1 for message in messages if self.send(message))


class EmailException(Exception):
    """Base exception for email operations."""
