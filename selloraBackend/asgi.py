"""
ASGI config for selloraBackend project.

HTTP goes to the regular Django application; websockets go through the
throttling and JWT handshake middleware into the chat routes.
"""

import os

import django
from channels.auth import AuthMiddlewareStack
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator
from django.core.asgi import get_asgi_application


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "selloraBackend.settings")

# Initialize Django ASGI application early to ensure the AppRegistry
# is populated before importing code that may import ORM models.
django.setup()

django_asgi_app = get_asgi_application()

from chat.api.routing import websocket_urlpatterns  # noqa: E402
from chat.middleware import ChannelThrottlingMiddleware, HandshakeAuthMiddleware  # noqa: E402


application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
        "websocket": ChannelThrottlingMiddleware(
            AllowedHostsOriginValidator(
                AuthMiddlewareStack(HandshakeAuthMiddleware(URLRouter(websocket_urlpatterns)))
            )
        ),
    }
)
