from django.urls import re_path

from chat.api.consumers import ChatConsumer


UUID = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"

websocket_urlpatterns = [
    re_path(rf"^ws/chat/(?P<product_id>{UUID})/(?P<peer_id>{UUID})/$", ChatConsumer.as_asgi()),
]
