from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from chat.domain.models import Message
from infrastructure.container import container
from marketplace.tests.factories import MessageFactory, ProductFactory, UserFactory


class ChatViewsTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        container.configure_for_testing()

        self.product = ProductFactory(title="Clay pots")
        self.shopkeeper = self.product.seller.user
        self.buyer = UserFactory(email="nisha@example.com")
        self.client.force_authenticate(user=self.buyer)

    def send(self, content, receiver=None, product=None):
        return self.client.post(
            reverse("chat:message-list"),
            {
                "receiver_id": str((receiver or self.shopkeeper).id),
                "product_id": str((product or self.product).id),
                "content": content,
            },
            format="json",
        )

    def test_send_message(self):
        response = self.send("Do you deliver to Thane?")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["content"], "Do you deliver to Thane?")
        self.assertEqual(str(response.data["sender_id"]), str(self.buyer.id))
        self.assertFalse(response.data["is_read"])

    def test_send_empty_message(self):
        response = self.send("  ")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "empty_message")

    def test_send_too_long(self):
        response = self.send("a" * 2001)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "message_too_long")

    def test_send_to_self(self):
        response = self.send("hello", receiver=self.buyer)

        self.assertEqual(response.data["error"], "invalid_receiver")

    def test_send_requires_ids(self):
        response = self.client.post(reverse("chat:message-list"), {"content": "hi"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("receiver_id", response.data)
        self.assertIn("product_id", response.data)

    def test_history(self):
        self.send("first")
        self.client.force_authenticate(user=self.shopkeeper)
        self.send("second", receiver=self.buyer)

        response = self.client.get(
            reverse("chat:message-list"), {"peer_id": str(self.buyer.id), "product_id": str(self.product.id)}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual([m["content"] for m in response.data["results"]], ["first", "second"])

    def test_history_requires_peer_and_product(self):
        response = self.client.get(reverse("chat:message-list"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("peer_id", response.data)

    def test_mark_read(self):
        MessageFactory(sender=self.shopkeeper, receiver=self.buyer, product=self.product)
        MessageFactory(sender=self.shopkeeper, receiver=self.buyer, product=self.product)

        response = self.client.post(
            reverse("chat:message-read"),
            {"peer_id": str(self.shopkeeper.id), "product_id": str(self.product.id)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"marked_read": 2})
        self.assertFalse(Message.objects.filter(is_read=False).exists())

    def test_unread_count(self):
        MessageFactory(receiver=self.buyer)
        MessageFactory(receiver=self.buyer, is_read=True)

        response = self.client.get(reverse("chat:message-unread-count"))

        self.assertEqual(response.data, {"unread": 1})

    def test_conversations(self):
        self.send("Is the big one left?")
        self.client.force_authenticate(user=self.shopkeeper)

        response = self.client.get(reverse("chat:conversation-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        entry = response.data[0]
        self.assertEqual(entry["peer_id"], str(self.buyer.id))
        self.assertEqual(entry["peer_email"], "nisha@example.com")
        self.assertEqual(entry["product_title"], "Clay pots")
        self.assertEqual(entry["unread_count"], 1)

    def test_chat_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse("chat:conversation-list"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
