from .order import Order, generate_pickup_code


__all__ = [
    "Order",
    "generate_pickup_code",
]
