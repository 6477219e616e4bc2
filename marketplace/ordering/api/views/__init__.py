from .order_views import OrderViewSet, SellerOrderViewSet


__all__ = ["OrderViewSet", "SellerOrderViewSet"]
