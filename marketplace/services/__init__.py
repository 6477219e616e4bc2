"""
Marketplace Service Layer

Business logic for the marketplace app, organized into domain services.

Services:
- CatalogService: Product browsing, tracking and CRUD
- OrderService: Reservations, pickup codes and order lifecycle
- SellerAnalyticsService: Shopkeeper dashboard numbers
- AdminStatsService: Platform-wide counters

Usage:
    from infrastructure.container import container

    result = container.catalog_service().browse(category="Fashion", search="kurta")

    if result.ok:
        products = result.value["results"]
    else:
        error = result.error
"""

from .analytics_service import AdminStatsService, SellerAnalyticsService
from .base import BaseService, ErrorCodes, ServiceResult, http_status_for, service_err, service_ok
from .catalog_service import CatalogService
from .order_service import OrderService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    "http_status_for",
    # Error codes
    "ErrorCodes",
    # Services
    "CatalogService",
    "OrderService",
    "SellerAnalyticsService",
    "AdminStatsService",
]
