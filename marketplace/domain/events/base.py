import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from django.utils import timezone


@dataclass
class DomainEvent:
    """
    Something that happened in the marketplace, published after the change is saved.

    ``event_type`` is ``<aggregate>.<verb>`` (``order.reserved``). Listeners
    receive ``to_dict()``, so the payload holds ids and strings only.
    """

    event_type: str
    payload: Dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=timezone.now)
    event_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def aggregate(self) -> str:
        return self.event_type.split(".", 1)[0]

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "payload": self.payload,
        }
