from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.models import Seller, UserRole
from authentication.tasks.notification_tasks import send_seller_status_email_task
from infrastructure.container import container
from marketplace.tests.factories import AdminFactory, PendingSellerFactory, ProductFactory, SellerFactory, UserFactory


SHOP_FORM = {
    "shop_name": "Rao Electronics",
    "business_type": "Individual",
    "owner_name": "Suresh Rao",
    "phone_number": "9876543210",
    "address": "14 Station Road",
    "city": "Mysuru",
    "state": "Karnataka",
    "pincode": "570001",
}


class BecomeShopkeeperTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        container.configure_for_testing()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)
        self.url = reverse("authentication:become_shopkeeper")

    def test_submit_creates_pending_seller_and_role(self):
        response = self.client.post(self.url, SHOP_FORM, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data["is_resubmission"])
        self.assertEqual(response.data["seller"]["status"], "pending")
        seller = Seller.objects.get(user=self.user)
        self.assertEqual(seller.shop_name, "Rao Electronics")
        self.assertTrue(UserRole.objects.filter(user=self.user, role="shopkeeper").exists())

    def test_phone_and_pincode_formats(self):
        invalid = {**SHOP_FORM, "phone_number": "98765", "pincode": "57000A"}

        response = self.client.post(self.url, invalid, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("phone_number", response.data)
        self.assertIn("pincode", response.data)

    def test_required_fields(self):
        response = self.client.post(self.url, {"shop_name": "Only a name"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("owner_name", "phone_number", "address", "city", "state", "pincode", "business_type"):
            self.assertIn(field, response.data)

    def test_second_submission_is_refused(self):
        self.client.post(self.url, SHOP_FORM, format="json")

        response = self.client.post(self.url, SHOP_FORM, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "seller_already_exists")

    def test_rejected_shop_can_resubmit(self):
        PendingSellerFactory(user=self.user, status=Seller.STATUS_REJECTED, rejection_reason="Blurry photos")

        response = self.client.post(self.url, {**SHOP_FORM, "shop_name": "Rao Mobiles"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["is_resubmission"])
        seller = Seller.objects.get(user=self.user)
        self.assertEqual(seller.status, Seller.STATUS_PENDING)
        self.assertEqual(seller.shop_name, "Rao Mobiles")
        self.assertEqual(seller.rejection_reason, "")

    def test_status_without_shop(self):
        response = self.client.get(reverse("authentication:seller_status"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["has_application"])
        self.assertIsNone(response.data["status"])

    def test_status_shows_rejection_reason(self):
        PendingSellerFactory(user=self.user, status=Seller.STATUS_REJECTED, rejection_reason="Address unclear")

        response = self.client.get(reverse("authentication:seller_status"))

        self.assertTrue(response.data["has_application"])
        self.assertEqual(response.data["status"], "rejected")
        self.assertEqual(response.data["rejection_reason"], "Address unclear")


class SellerModerationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        container.configure_for_testing()
        self.admin = AdminFactory()
        self.pending = PendingSellerFactory(shop_name="Kavya Crafts")
        self.client.force_authenticate(user=self.admin)

    def action_url(self, seller, action):
        return reverse(f"authentication:admin-seller-{action}", kwargs={"pk": seller.id})

    def test_list_filters_by_status(self):
        SellerFactory()

        response = self.client.get(reverse("authentication:admin-seller-list"), {"status": "pending"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["id"] for row in response.data["results"]], [self.pending.id])

    def test_list_search(self):
        SellerFactory(shop_name="Other Shop")

        response = self.client.get(reverse("authentication:admin-seller-list"), {"search": "kavya"})

        self.assertEqual(response.data["count"], 1)

    def test_detail_includes_products(self):
        approved = SellerFactory()
        ProductFactory(seller=approved, title="Brass lamp")

        response = self.client.get(reverse("authentication:admin-seller-detail", kwargs={"pk": approved.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p["title"] for p in response.data["products"]], ["Brass lamp"])

    def test_approve_emails_shopkeeper(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(self.action_url(self.pending, "approve"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["old_status"], "pending")
        self.assertEqual(response.data["seller"]["status"], "approved")
        self.assertEqual(response.data["seller"]["reviewed_by_email"], self.admin.email)
        message = container.email().get_last_message()
        self.assertEqual(message.to, [self.pending.user.email])
        self.assertIn("Kavya Crafts", message.body)

    def test_reject_stores_reason(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                self.action_url(self.pending, "reject"), {"reason": "GST number missing"}, format="json"
            )

        self.assertEqual(response.data["seller"]["status"], "rejected")
        self.assertEqual(response.data["seller"]["rejection_reason"], "GST number missing")
        self.assertIn("GST number missing", container.email().get_last_message().body)

    def test_block_and_unblock(self):
        approved = SellerFactory()

        blocked = self.client.post(self.action_url(approved, "block"), {"reason": "Spam"}, format="json")
        unblocked = self.client.post(self.action_url(approved, "unblock"))

        self.assertEqual(blocked.data["seller"]["status"], "blocked")
        self.assertEqual(unblocked.data["seller"]["status"], "approved")

    def test_unblock_requires_blocked_seller(self):
        response = self.client.post(self.action_url(self.pending, "unblock"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "invalid_transition")

    def test_rejected_is_final_for_admin(self):
        self.client.post(self.action_url(self.pending, "reject"))

        response = self.client.post(self.action_url(self.pending, "approve"))

        self.assertEqual(response.data["error"], "invalid_transition")

    def test_patch_status_matches_actions(self):
        response = self.client.patch(
            reverse("authentication:admin-seller-detail", kwargs={"pk": self.pending.id}),
            {"status": "approved"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.pending.refresh_from_db()
        self.assertTrue(self.pending.is_approved)

    def test_unknown_seller(self):
        response = self.client.post(reverse("authentication:admin-seller-approve", kwargs={"pk": 999999}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "seller_not_found")

    def test_non_admin_is_forbidden(self):
        self.client.force_authenticate(user=SellerFactory().user)

        response = self.client.post(self.action_url(self.pending, "approve"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.pending.refresh_from_db()
        self.assertEqual(self.pending.status, Seller.STATUS_PENDING)

    def test_blocked_shop_products_leave_the_catalog(self):
        approved = SellerFactory()
        ProductFactory(seller=approved)
        self.client.post(self.action_url(approved, "block"))

        response = self.client.get(reverse("marketplace:product-list"))

        self.assertEqual(response.data["count"], 0)


class SellerStatusEmailTaskTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.seller = SellerFactory(email="contact@shop.example")

    def test_uses_shop_contact_email(self):
        self.assertTrue(send_seller_status_email_task(self.seller.id, "approved"))

        self.assertEqual(container.email().get_last_message().to, ["contact@shop.example"])

    def test_pending_status_sends_nothing(self):
        self.assertFalse(send_seller_status_email_task(self.seller.id, "pending"))
        self.assertEqual(container.email().get_sent_count(), 0)

    def test_missing_seller(self):
        self.assertFalse(send_seller_status_email_task(999999, "approved"))
