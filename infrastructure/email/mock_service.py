"""
Mock Email Service
==================

In-memory outbox for tests and local development.
"""

import logging
from typing import List, Optional

from .interface import EmailMessage, EmailServiceInterface

logger = logging.getLogger(__name__)


class MockEmailService(EmailServiceInterface):
    def __init__(self):
        self.outbox: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> bool:
        logger.info(f"[MOCK EMAIL] {message.category} to {', '.join(message.to)}: {message.subject}")
        self.outbox.append(message)
        return True

    def sent_to(self, address: str) -> List[EmailMessage]:
        address = address.lower()
        return [message for message in self.outbox if address in (to.lower() for to in message.to)]

    def by_category(self, category: str) -> List[EmailMessage]:
        return [message for message in self.outbox if message.category == category]

    def clear_sent_messages(self):
        self.outbox.clear()

    def get_sent_count(self) -> int:
        return len(self.outbox)

    def get_last_message(self) -> Optional[EmailMessage]:
        return self.outbox[-1] if self.outbox else None
