from dataclasses import dataclass

from .base import DomainEvent


@dataclass
class OrderReservedEvent(DomainEvent):
    """Event: Product reserved for pickup."""

    def __init__(self, order_id: str, buyer_id: str, seller_id: int, product_id: str):
        super().__init__(
            event_type="order.reserved",
            payload={
                "order_id": order_id,
                "buyer_id": buyer_id,
                "seller_id": seller_id,
                "product_id": product_id,
            },
        )


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    """Event: Order moved to a new status by the seller or the buyer."""

    def __init__(self, order_id: str, old_status: str, new_status: str, actor_id: str):
        super().__init__(
            event_type="order.status_changed",
            payload={
                "order_id": order_id,
                "old_status": old_status,
                "new_status": new_status,
                "actor_id": actor_id,
            },
        )
