from .order_serializers import (
    OrderBuyerSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    PickupVerifySerializer,
    ReserveSerializer,
    SellerOrderSerializer,
)


__all__ = [
    "OrderBuyerSerializer",
    "OrderSerializer",
    "OrderStatusSerializer",
    "PickupVerifySerializer",
    "ReserveSerializer",
    "SellerOrderSerializer",
]
