"""
Service Container Tests
========================

The container hands out cached infrastructure and domain services.
"""

from unittest.mock import MagicMock, patch

from django.test import TestCase, override_settings

from infrastructure.container import ServiceContainer, container
from infrastructure.email import MockEmailService
from infrastructure.storage import LocalStorageAdapter, S3StorageAdapter


class ServiceContainerTest(TestCase):
    def setUp(self):
        container.reset()

    def tearDown(self):
        container.reset()

    def test_container_is_singleton(self):
        self.assertIs(ServiceContainer(), container)

    @patch("infrastructure.storage.s3_adapter.S3Boto3Storage")
    @override_settings(INFRASTRUCTURE={"STORAGE_BACKEND": "s3", "EMAIL_BACKEND_TYPE": "mock"})
    def test_storage_follows_settings_and_is_cached(self, mock_storage_class):
        mock_storage_class.return_value = MagicMock()

        storage = container.storage()

        self.assertIsInstance(storage, S3StorageAdapter)
        self.assertIs(container.storage(), storage)

    def test_configure_for_testing(self):
        container.configure_for_testing()

        self.assertIsInstance(container.storage(), LocalStorageAdapter)
        self.assertIsInstance(container.email(), MockEmailService)

    def test_explicit_email_backend_replaces_cached_one(self):
        container.configure_for_testing()
        first = container.email()

        second = container.email("mock")

        self.assertIsNot(first, second)
        self.assertIs(container.email(), second)

    def test_catalog_service_uses_container_storage(self):
        container.configure_for_testing()

        catalog = container.catalog_service()

        self.assertIs(catalog.storage, container.storage())
        self.assertIs(container.catalog_service(), catalog)

    def test_domain_services_are_cached(self):
        for getter in (
            container.seller_service,
            container.order_service,
            container.analytics_service,
            container.admin_service,
            container.chat_service,
        ):
            with self.subTest(service=getter.__name__):
                self.assertIs(getter(), getter())

    def test_reset_drops_cached_services(self):
        container.configure_for_testing()
        orders = container.order_service()

        container.reset()

        self.assertIsNot(container.order_service(), orders)
