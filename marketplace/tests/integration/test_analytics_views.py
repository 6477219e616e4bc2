from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from activity.models import ClickLog, SearchLog
from infrastructure.container import container
from marketplace.models import Order, Product
from marketplace.tests.factories import (
    AdminFactory,
    OrderFactory,
    PendingSellerFactory,
    ProductFactory,
    SellerFactory,
    UserFactory,
)

User = get_user_model()


class SellerDashboardTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        container.configure_for_testing()

        self.seller = SellerFactory()
        self.url = reverse("marketplace:seller-dashboard")
        self.client.force_authenticate(user=self.seller.user)

    def test_empty_dashboard(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalProducts"], 0)
        self.assertEqual(response.data["conversionRate"], 0)
        self.assertEqual(response.data["clicksPerProduct"], [])
        self.assertEqual(len(response.data["viewsOverTime"]), 7)
        self.assertTrue(all(day["views"] == 0 for day in response.data["viewsOverTime"]))
        self.assertEqual(response.data["pendingOrders"], 0)

    def test_totals_and_conversion_rate(self):
        ProductFactory(seller=self.seller, views=200, clicks=30, category="Fashion")
        ProductFactory(seller=self.seller, views=100, clicks=20, category="Fashion")
        ProductFactory(seller=self.seller, views=0, clicks=0, category="Vehicles", is_active=False)
        ProductFactory(views=999, clicks=999)  # another shop

        response = self.client.get(self.url)

        self.assertEqual(response.data["totalProducts"], 3)
        self.assertEqual(response.data["totalViews"], 300)
        self.assertEqual(response.data["totalClicks"], 50)
        self.assertEqual(response.data["conversionRate"], 17)
        self.assertEqual(
            [dict(row) for row in response.data["productsByCategory"]],
            [{"category": "Fashion", "count": 2}, {"category": "Vehicles", "count": 1}],
        )

    def test_conversion_rate_rounds_halves_up(self):
        ProductFactory(seller=self.seller, views=8, clicks=1)

        response = self.client.get(self.url)

        self.assertEqual(response.data["conversionRate"], 13)

    def test_conversion_rate_without_views(self):
        ProductFactory(seller=self.seller, views=0, clicks=0)

        response = self.client.get(self.url)

        self.assertEqual(response.data["conversionRate"], 0)

    def test_top_five_by_clicks_with_short_names(self):
        for clicks in range(7):
            ProductFactory(seller=self.seller, title=f"Handloom saree {clicks}", clicks=clicks, views=10)

        response = self.client.get(self.url)

        top = response.data["clicksPerProduct"]
        self.assertEqual(len(top), 5)
        self.assertEqual([row["clicks"] for row in top], [6, 5, 4, 3, 2])
        self.assertEqual(top[0]["name"], "Handloom sar...")

    def test_views_over_time_counts_detail_views_per_day(self):
        product = ProductFactory(seller=self.seller)
        ClickLog.record(product, ClickLog.SOURCE_DETAIL)
        ClickLog.record(product, ClickLog.SOURCE_DETAIL)
        ClickLog.record(product, ClickLog.SOURCE_LISTING)
        old = ClickLog.record(product, ClickLog.SOURCE_DETAIL)
        ClickLog.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=30))

        response = self.client.get(self.url)

        days = response.data["viewsOverTime"]
        self.assertEqual(days[-1]["date"], timezone.localdate().isoformat())
        self.assertEqual(days[-1]["views"], 2)
        self.assertEqual(sum(day["views"] for day in days), 2)

    def test_order_counts(self):
        product = ProductFactory(seller=self.seller)
        OrderFactory(product=product)
        OrderFactory(product=product)
        OrderFactory(product=product, status=Order.STATUS_COMPLETED)

        response = self.client.get(self.url)

        self.assertEqual(response.data["pendingOrders"], 2)
        self.assertEqual(response.data["orders"]["completed"], 1)
        self.assertEqual(response.data["orders"]["ready"], 0)

    def test_pending_seller_is_forbidden(self):
        self.client.force_authenticate(user=PendingSellerFactory().user)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_plain_user_is_forbidden(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AdminMarketplaceTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        container.configure_for_testing()

        self.admin = AdminFactory()
        self.seller = SellerFactory(shop_name="Noor Textiles", owner_name="Noor Khan")
        self.product = ProductFactory(seller=self.seller, title="Silk dupatta", views=10, clicks=4)
        self.hidden = ProductFactory(seller=self.seller, title="Wool shawl", is_active=False, views=5, clicks=1)
        PendingSellerFactory()

    def test_stats(self):
        SearchLog.record("dupatta", 1)
        OrderFactory(product=self.product)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse("marketplace:admin-stats"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalSellers"], 2)
        self.assertEqual(response.data["pendingSellers"], 1)
        self.assertEqual(response.data["totalProducts"], 2)
        self.assertEqual(response.data["totalSearches"], 1)
        self.assertEqual(response.data["totalViews"], 15)
        self.assertEqual(response.data["totalClicks"], 5)
        self.assertEqual(response.data["totalOrders"], 1)
        self.assertEqual(response.data["totalUsers"], User.objects.count())

    def test_stats_for_configured_admin_email(self):
        owner = UserFactory(email="owner@sellora.test")
        self.client.force_authenticate(user=owner)

        response = self.client.get(reverse("marketplace:admin-stats"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_stats_forbidden_for_shopkeeper(self):
        self.client.force_authenticate(user=self.seller.user)

        response = self.client.get(reverse("marketplace:admin-stats"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_product_list_includes_hidden_products(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse("marketplace:admin-product-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)
        row = next(item for item in response.data["results"] if item["id"] == str(self.product.id))
        self.assertEqual(row["shop_name"], "Noor Textiles")
        self.assertEqual(row["owner_name"], "Noor Khan")
        self.assertEqual(row["seller_id"], self.seller.id)

    def test_admin_product_list_filters(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse("marketplace:admin-product-list"), {"is_active": "false"})
        self.assertEqual([item["id"] for item in response.data["results"]], [str(self.hidden.id)])

        response = self.client.get(reverse("marketplace:admin-product-list"), {"search": "noor"})
        self.assertEqual(response.data["count"], 2)

    def test_admin_deletes_any_product(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(reverse("marketplace:admin-product-detail", kwargs={"pk": self.product.id}))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Product.objects.filter(id=self.product.id).exists())

    def test_admin_delete_unknown_product(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(
            reverse("marketplace:admin-product-detail", kwargs={"pk": "00000000-0000-0000-0000-000000000000"})
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_non_admin_cannot_moderate(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.get(reverse("marketplace:admin-product-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
