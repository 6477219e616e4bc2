from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from infrastructure.container import container
from marketplace.models import Order
from marketplace.tests.factories import OrderFactory, PendingSellerFactory, ProductFactory, SellerFactory, UserFactory


class OrderReserveTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        container.configure_for_testing()

        self.buyer = UserFactory(email="buyer@example.com")
        self.seller = SellerFactory(
            shop_name="Ganesh Hardware", address="5 MG Road", city="Pune", state="Maharashtra", pincode="411001"
        )
        self.product = ProductFactory(seller=self.seller, title="Cordless drill")
        self.url = reverse("marketplace:order-list")

    def test_reserve_creates_pending_order_with_pickup_code(self):
        self.client.force_authenticate(user=self.buyer)

        response = self.client.post(self.url, {"product_id": str(self.product.id)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(len(response.data["pickup_code"]), 4)
        self.assertEqual(response.data["shop_name"], "Ganesh Hardware")
        self.assertEqual(response.data["shop_address"], "5 MG Road, Pune, Maharashtra, 411001")
        order = Order.objects.get(id=response.data["id"])
        self.assertEqual(order.buyer, self.buyer)
        self.assertEqual(order.seller, self.seller)

    def test_shop_snapshot_survives_shop_rename(self):
        self.client.force_authenticate(user=self.buyer)
        response = self.client.post(self.url, {"product_id": str(self.product.id)}, format="json")

        self.seller.shop_name = "Ganesh Tools"
        self.seller.save()

        self.assertEqual(Order.objects.get(id=response.data["id"]).shop_name, "Ganesh Hardware")

    def test_reserve_emails_the_shopkeeper(self):
        self.client.force_authenticate(user=self.buyer)

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(self.url, {"product_id": str(self.product.id)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        email = container.email().get_last_message()
        self.assertIsNotNone(email)
        self.assertEqual(email.to, [self.seller.user.email])
        self.assertIn("Cordless drill", email.body)
        self.assertNotIn(response.data["pickup_code"], email.body)

    def test_cannot_reserve_own_product(self):
        self.client.force_authenticate(user=self.seller.user)

        response = self.client.post(self.url, {"product_id": str(self.product.id)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "cannot_order_own_product")
        self.assertFalse(Order.objects.exists())

    def test_hidden_product_cannot_be_reserved(self):
        hidden = ProductFactory(seller=self.seller, is_active=False)
        self.client.force_authenticate(user=self.buyer)

        response = self.client.post(self.url, {"product_id": str(hidden.id)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "product_not_found")

    def test_product_of_unapproved_shop_cannot_be_reserved(self):
        product = ProductFactory(seller=PendingSellerFactory())
        self.client.force_authenticate(user=self.buyer)

        response = self.client.post(self.url, {"product_id": str(product.id)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_invalid_product_id(self):
        self.client.force_authenticate(user=self.buyer)

        response = self.client.post(self.url, {"product_id": "not-a-uuid"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("product_id", response.data)

    def test_anonymous_cannot_reserve(self):
        response = self.client.post(self.url, {"product_id": str(self.product.id)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_buyer_lists_own_orders_with_codes(self):
        mine = OrderFactory(buyer=self.buyer, product=self.product)
        OrderFactory(product=self.product)
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["id"], str(mine.id))
        self.assertEqual(response.data[0]["pickup_code"], mine.pickup_code)
        self.assertEqual(response.data[0]["product_title"], "Cordless drill")


class OrderCancelTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        container.configure_for_testing()
        self.order = OrderFactory()
        self.client.force_authenticate(user=self.order.buyer)

    def cancel_url(self, order):
        return reverse("marketplace:order-cancel", kwargs={"pk": order.id})

    def test_buyer_cancels_pending_order(self):
        response = self.client.post(self.cancel_url(self.order))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "cancelled")

    def test_ready_order_cannot_be_cancelled_by_buyer(self):
        self.order.status = Order.STATUS_READY
        self.order.save()

        response = self.client.post(self.cancel_url(self.order))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_order_state")

    def test_other_buyers_order_is_not_found(self):
        other = OrderFactory()

        response = self.client.post(self.cancel_url(other))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        other.refresh_from_db()
        self.assertEqual(other.status, Order.STATUS_PENDING)


class SellerOrderTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        container.configure_for_testing()

        self.seller = SellerFactory()
        self.buyer = UserFactory(email="asha@example.com")
        self.buyer.profile.full_name = "Asha Patil"
        self.buyer.profile.save()
        self.order = OrderFactory(product=ProductFactory(seller=self.seller), buyer=self.buyer)
        self.client.force_authenticate(user=self.seller.user)

    def status_url(self, order):
        return reverse("marketplace:seller-order-set-status", kwargs={"pk": order.id})

    def verify_url(self, order):
        return reverse("marketplace:seller-order-verify-pickup", kwargs={"pk": order.id})

    def test_seller_lists_orders_without_pickup_code(self):
        OrderFactory()  # another shop

        response = self.client.get(reverse("marketplace:seller-order-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertNotIn("pickup_code", response.data[0])
        self.assertEqual(response.data[0]["buyer"]["full_name"], "Asha Patil")
        self.assertEqual(response.data[0]["buyer"]["email"], "asha@example.com")

    def test_buyer_name_falls_back_to_email(self):
        self.buyer.profile.full_name = ""
        self.buyer.profile.save()

        response = self.client.get(reverse("marketplace:seller-order-list"))

        self.assertEqual(response.data[0]["buyer"]["full_name"], "asha@example.com")

    def test_pending_seller_cannot_list_orders(self):
        pending = PendingSellerFactory()
        self.client.force_authenticate(user=pending.user)

        response = self.client.get(reverse("marketplace:seller-order-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_mark_ready_emails_buyer(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.patch(self.status_url(self.order), {"status": "ready"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "ready")
        email = container.email().get_last_message()
        self.assertEqual(email.to, ["asha@example.com"])
        self.assertNotIn(self.order.pickup_code, email.body)

    def test_ready_to_completed(self):
        self.client.patch(self.status_url(self.order), {"status": "ready"}, format="json")

        response = self.client.patch(self.status_url(self.order), {"status": "completed"}, format="json")

        self.assertEqual(response.data["status"], "completed")

    def test_completed_order_is_final(self):
        self.order.status = Order.STATUS_COMPLETED
        self.order.save()

        response = self.client.patch(self.status_url(self.order), {"status": "cancelled"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_order_state")

    def test_moving_back_to_pending_is_rejected(self):
        self.client.patch(self.status_url(self.order), {"status": "ready"}, format="json")

        response = self.client.patch(self.status_url(self.order), {"status": "pending"}, format="json")

        self.assertEqual(response.data["error"], "invalid_order_state")

    def test_unknown_status_is_a_validation_error(self):
        response = self.client.patch(self.status_url(self.order), {"status": "shipped"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("status", response.data)

    def test_other_shops_order_is_forbidden(self):
        other = OrderFactory()

        response = self.client.patch(self.status_url(other), {"status": "ready"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"], "not_order_owner")

    def test_unknown_order(self):
        response = self.client.patch(
            reverse("marketplace:seller-order-set-status", kwargs={"pk": "00000000-0000-0000-0000-000000000000"}),
            {"status": "ready"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_verify_pickup_with_matching_code(self):
        response = self.client.post(self.verify_url(self.order), {"code": self.order.pickup_code}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "completed")

    def test_verify_pickup_from_ready(self):
        self.order.status = Order.STATUS_READY
        self.order.save()

        response = self.client.post(self.verify_url(self.order), {"code": self.order.pickup_code}, format="json")

        self.assertEqual(response.data["status"], "completed")

    def test_verify_pickup_with_wrong_code(self):
        response = self.client.post(self.verify_url(self.order), {"code": "0000"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_pickup_code")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PENDING)

    def test_verify_pickup_on_cancelled_order(self):
        self.order.status = Order.STATUS_CANCELLED
        self.order.save()

        response = self.client.post(self.verify_url(self.order), {"code": self.order.pickup_code}, format="json")

        self.assertEqual(response.data["error"], "invalid_order_state")

    def test_verify_pickup_requires_code(self):
        response = self.client.post(self.verify_url(self.order), {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("code", response.data)
