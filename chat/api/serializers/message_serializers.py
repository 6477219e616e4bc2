from rest_framework import serializers

from chat.domain.models import Message


class MessageSerializer(serializers.ModelSerializer):
    sender_id = serializers.UUIDField(read_only=True)
    receiver_id = serializers.UUIDField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Message
        fields = ("id", "sender_id", "receiver_id", "product_id", "content", "is_read", "created_at")
        read_only_fields = fields


class SendMessageSerializer(serializers.Serializer):
    receiver_id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    # Length and blank checks live in the service so REST and websocket agree
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ConversationPeerSerializer(serializers.Serializer):
    peer_id = serializers.UUIDField()
    product_id = serializers.UUIDField()


class ConversationSerializer(serializers.Serializer):
    """Inbox entry, documentation only"""

    peer_id = serializers.UUIDField()
    peer_name = serializers.CharField()
    peer_email = serializers.EmailField()
    product_id = serializers.UUIDField()
    product_title = serializers.CharField()
    last_message = serializers.DictField()
    unread_count = serializers.IntegerField()


class MessagePageSerializer(serializers.Serializer):
    """Paginated history, documentation only"""

    count = serializers.IntegerField()
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    num_pages = serializers.IntegerField()
    has_next = serializers.BooleanField()
    has_previous = serializers.BooleanField()
    results = MessageSerializer(many=True)
