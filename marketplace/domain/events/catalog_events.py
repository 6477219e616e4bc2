from dataclasses import dataclass

from .base import DomainEvent


@dataclass
class ProductCreatedEvent(DomainEvent):
    """Event: Shopkeeper listed a product."""

    def __init__(self, product_id: str, seller_id: int, category: str):
        super().__init__(
            event_type="product.created",
            payload={"product_id": product_id, "seller_id": seller_id, "category": category},
        )
