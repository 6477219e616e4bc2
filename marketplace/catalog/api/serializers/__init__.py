from .product_serializers import (
    AdminProductSerializer,
    MyProductSerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    ProductSellerSerializer,
    ProductWriteSerializer,
)


__all__ = [
    "AdminProductSerializer",
    "MyProductSerializer",
    "ProductDetailSerializer",
    "ProductListSerializer",
    "ProductSellerSerializer",
    "ProductWriteSerializer",
]
