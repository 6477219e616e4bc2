"""
Dependency Injection Container
================================

Service locator for the storage and email backends and the domain services
built on them. Everything is created on first use and cached until
``reset()``.

Usage:
    from infrastructure.container import container

    catalog = container.catalog_service()
    container.email().send(message)
"""

import logging
from typing import Any, Callable, Dict, Optional

from .email import EmailFactory, EmailServiceInterface
from .storage import StorageFactory, StorageInterface

logger = logging.getLogger(__name__)


def _seller_service(container):
    from authentication.domain.services.seller_service import SellerService

    return SellerService()


def _catalog_service(container):
    from marketplace.services import CatalogService

    return CatalogService(storage=container.storage())


def _order_service(container):
    from marketplace.services import OrderService

    return OrderService()


def _analytics_service(container):
    from marketplace.services import SellerAnalyticsService

    return SellerAnalyticsService()


def _admin_service(container):
    from marketplace.services import AdminStatsService

    return AdminStatsService()


def _chat_service(container):
    from chat.domain.services import ChatService

    return ChatService()


class ServiceContainer:
    """Process-wide singleton; domain modules are imported lazily to avoid app-loading cycles."""

    _instance: Optional["ServiceContainer"] = None

    builders: Dict[str, Callable[["ServiceContainer"], Any]] = {
        "seller": _seller_service,
        "catalog": _catalog_service,
        "order": _order_service,
        "analytics": _analytics_service,
        "admin": _admin_service,
        "chat": _chat_service,
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._reset_state()
            logger.info("Service container initialized")
        return cls._instance

    def _reset_state(self):
        self._storage: Optional[StorageInterface] = None
        self._email: Optional[EmailServiceInterface] = None
        self._services: Dict[str, Any] = {}

    def _service(self, name: str):
        if name not in self._services:
            self._services[name] = self.builders[name](self)
            logger.debug(f"Created {type(self._services[name]).__name__}")
        return self._services[name]

    def storage(self) -> StorageInterface:
        if self._storage is None:
            self._storage = StorageFactory.create()
        return self._storage

    def email(self, backend: Optional[str] = None) -> EmailServiceInterface:
        """Configured email service; passing ``backend`` swaps the cached one."""
        if self._email is None or backend is not None:
            self._email = EmailFactory.create(backend)
        return self._email

    def seller_service(self):
        return self._service("seller")

    def catalog_service(self):
        return self._service("catalog")

    def order_service(self):
        return self._service("order")

    def analytics_service(self):
        return self._service("analytics")

    def admin_service(self):
        return self._service("admin")

    def chat_service(self):
        return self._service("chat")

    def reset(self):
        self._reset_state()
        logger.info("Service container reset")

    def configure_for_testing(self):
        """Local storage and the in-memory mock email service."""
        self.reset()
        self._storage = StorageFactory.create("local")
        self._email = EmailFactory.create("mock")


container = ServiceContainer()
