from unittest.mock import AsyncMock, MagicMock

from django.test import TestCase

from chat.domain.models import Message
from chat.domain.services.chat_service import ChatService, conversation_group
from marketplace.tests.factories import MessageFactory, ProductFactory, UserFactory


class ConversationGroupTest(TestCase):
    def test_same_group_for_both_participants(self):
        self.assertEqual(
            conversation_group("p-1", "user-a", "user-b"),
            conversation_group("p-1", "user-b", "user-a"),
        )

    def test_group_differs_per_product(self):
        self.assertNotEqual(
            conversation_group("p-1", "user-a", "user-b"),
            conversation_group("p-2", "user-a", "user-b"),
        )

    def test_group_name_fits_channel_layer_limit(self):
        product = ProductFactory()
        buyer, seller = UserFactory(), UserFactory()

        group = conversation_group(product.id, buyer.id, seller.id)

        self.assertTrue(group.startswith(f"chat_{product.id.hex}_"))
        self.assertLess(len(group), 100)


class ChatServiceTest(TestCase):
    def setUp(self):
        self.channel_layer = MagicMock()
        self.channel_layer.group_send = AsyncMock()
        self.service = ChatService(channel_layer=self.channel_layer)

        self.product = ProductFactory(title="Teak chair")
        self.shopkeeper = self.product.seller.user
        self.buyer = UserFactory(email="buyer@example.com")

    def test_send_persists_and_broadcasts(self):
        result = self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "  Is this available?  ")

        self.assertTrue(result.ok)
        message = Message.objects.get()
        self.assertEqual(message.content, "Is this available?")
        self.assertEqual(message.receiver, self.shopkeeper)
        self.assertFalse(message.is_read)

        self.channel_layer.group_send.assert_awaited_once()
        group, event = self.channel_layer.group_send.await_args.args
        self.assertEqual(group, conversation_group(self.product.id, self.buyer.id, self.shopkeeper.id))
        self.assertEqual(event["type"], "chat.message")
        self.assertEqual(event["message"]["id"], str(message.id))
        self.assertEqual(event["message"]["content"], "Is this available?")

    def test_send_rejects_blank_content(self):
        result = self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "   ")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, "empty_message")
        self.assertFalse(Message.objects.exists())
        self.channel_layer.group_send.assert_not_awaited()

    def test_send_rejects_non_text_content(self):
        result = self.service.send(self.buyer, self.shopkeeper.id, self.product.id, 42)

        self.assertEqual(result.error, "validation_error")
        self.assertFalse(Message.objects.exists())

    def test_send_rejects_long_content(self):
        result = self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "x" * 2001)

        self.assertEqual(result.error, "message_too_long")

    def test_send_accepts_maximum_length(self):
        result = self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "x" * 2000)

        self.assertTrue(result.ok)

    def test_cannot_message_yourself(self):
        result = self.service.send(self.buyer, self.buyer.id, self.product.id, "hi")

        self.assertEqual(result.error, "invalid_receiver")

    def test_unknown_receiver(self):
        result = self.service.send(self.buyer, "00000000-0000-0000-0000-000000000000", self.product.id, "hi")

        self.assertEqual(result.error, "invalid_receiver")

    def test_unknown_product(self):
        result = self.service.send(self.buyer, self.shopkeeper.id, "00000000-0000-0000-0000-000000000000", "hi")

        self.assertEqual(result.error, "product_not_found")

    def test_broadcast_failure_keeps_message(self):
        self.channel_layer.group_send.side_effect = RuntimeError("layer down")

        with self.assertLogs("chat.domain.services.chat_service", level="ERROR"):
            result = self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "hello")

        self.assertTrue(result.ok)
        self.assertTrue(Message.objects.filter(id=result.value.id).exists())

    def test_history_is_oldest_first_and_scoped_to_conversation(self):
        first = self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "first").value
        second = self.service.send(self.shopkeeper, self.buyer.id, self.product.id, "second").value
        MessageFactory(sender=self.buyer, receiver=self.shopkeeper)  # other product
        MessageFactory(sender=UserFactory(), receiver=self.shopkeeper, product=self.product)  # other buyer

        page = self.service.history(self.buyer, self.shopkeeper.id, self.product.id).value

        self.assertEqual(page["count"], 2)
        self.assertEqual([m.id for m in page["results"]], [first.id, second.id])

    def test_history_pagination(self):
        for i in range(3):
            self.service.send(self.buyer, self.shopkeeper.id, self.product.id, f"msg {i}")

        page = self.service.history(self.shopkeeper, self.buyer.id, self.product.id, page=2, page_size=2).value

        self.assertEqual(page["num_pages"], 2)
        self.assertEqual([m.content for m in page["results"]], ["msg 2"])
        self.assertTrue(page["has_previous"])
        self.assertFalse(page["has_next"])

    def test_mark_read_only_touches_received_messages(self):
        self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "one")
        self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "two")
        self.service.send(self.shopkeeper, self.buyer.id, self.product.id, "reply")
        self.channel_layer.group_send.reset_mock()

        result = self.service.mark_read(self.shopkeeper, self.buyer.id, self.product.id)

        self.assertEqual(result.value, 2)
        self.assertEqual(Message.objects.filter(is_read=False).count(), 1)
        group, event = self.channel_layer.group_send.await_args.args
        self.assertEqual(event["type"], "chat.read")
        self.assertEqual(event["receipt"]["reader_id"], str(self.shopkeeper.id))
        self.assertEqual(event["receipt"]["count"], 2)

    def test_mark_read_without_unread_messages_sends_no_receipt(self):
        result = self.service.mark_read(self.shopkeeper, self.buyer.id, self.product.id)

        self.assertEqual(result.value, 0)
        self.channel_layer.group_send.assert_not_awaited()

    def test_conversations_one_entry_per_peer_and_product(self):
        self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "hello")
        self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "still there?")
        other_buyer = UserFactory()
        self.service.send(other_buyer, self.shopkeeper.id, self.product.id, "price?")

        entries = self.service.conversations(self.shopkeeper).value

        self.assertEqual(len(entries), 2)
        latest = entries[0]
        self.assertEqual(latest["peer_id"], str(other_buyer.id))
        self.assertEqual(latest["product_title"], "Teak chair")
        self.assertEqual(latest["unread_count"], 1)
        buyer_entry = entries[1]
        self.assertEqual(buyer_entry["peer_email"], "buyer@example.com")
        self.assertEqual(buyer_entry["last_message"]["content"], "still there?")
        self.assertEqual(buyer_entry["unread_count"], 2)

    def test_sender_sees_no_unread_in_own_conversation(self):
        self.service.send(self.buyer, self.shopkeeper.id, self.product.id, "hello")

        entries = self.service.conversations(self.buyer).value

        self.assertEqual(entries[0]["peer_id"], str(self.shopkeeper.id))
        self.assertEqual(entries[0]["unread_count"], 0)

    def test_unread_count(self):
        MessageFactory(receiver=self.buyer)
        MessageFactory(receiver=self.buyer, is_read=True)
        MessageFactory(receiver=self.shopkeeper)

        self.assertEqual(self.service.unread_count(self.buyer), 1)
