import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken, TokenError


logger = logging.getLogger(__name__)


def token_from_scope(scope):
    """``?token=<access token>`` from the handshake query string, or None."""
    query_string = scope.get("query_string", b"").decode()
    tokens = parse_qs(query_string).get("token")
    return tokens[0] if tokens else None


class HandshakeAuthMiddleware:
    """
    Authenticate websocket connections with a JWT access token passed as the
    ``token`` query parameter. Sits inside AuthMiddlewareStack, so a session
    user is kept when there is one; otherwise the scope user stays anonymous
    and the consumer closes with 4001.
    """

    def __init__(self, inner):
        self.inner = inner

    async def __call__(self, scope, receive, send):
        user = scope.get("user")
        if user is None or isinstance(user, AnonymousUser) or not user.is_authenticated:
            token = token_from_scope(scope)
            scope["user"] = AnonymousUser()
            if token:
                authenticated = await self.get_user_from_token(token)
                if authenticated is not None:
                    scope["user"] = authenticated
                    logger.debug(f"Authenticated user {authenticated.id} via WebSocket JWT")
                else:
                    logger.debug("Invalid JWT token provided in WebSocket handshake")

        return await self.inner(scope, receive, send)

    @database_sync_to_async
    def get_user_from_token(self, token):
        jwt_auth = JWTAuthentication()
        try:
            validated_token = jwt_auth.get_validated_token(token)
            return jwt_auth.get_user(validated_token)
        except (InvalidToken, TokenError, AuthenticationFailed):
            return None
