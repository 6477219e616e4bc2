import logging

import redis
from asgiref.sync import sync_to_async
from django.conf import settings

from chat.infra.observability.metrics import chat_ws_throttled_total


logger = logging.getLogger(__name__)

THROTTLE_CLOSE_CODE = 4029


class ChannelThrottlingMiddleware:
    """
    Fixed-window limit on websocket handshakes per client IP.

    Counters live in Redis under ``ws_throttle:{ip}``. When Redis cannot be
    reached the connection is allowed.
    """

    def __init__(self, inner, limit=None, window=None, redis_url=None):
        self.inner = inner
        self.limit = limit or settings.WS_THROTTLE_LIMIT
        self.window = window or settings.WS_THROTTLE_WINDOW
        self.redis_url = redis_url or f"{settings.REDIS_URL}/3"
        self._redis_client = None

    @property
    def redis(self):
        if self._redis_client is None:
            self._redis_client = redis.from_url(self.redis_url, socket_connect_timeout=1, socket_timeout=1)
        return self._redis_client

    async def __call__(self, scope, receive, send):
        if scope["type"] == "websocket":
            client = scope.get("client")
            if client:
                ip = client[0]
                if not await self.is_allowed(ip):
                    logger.warning(f"WebSocket connection throttled for IP: {ip}")
                    chat_ws_throttled_total.inc()
                    await send({"type": "websocket.close", "code": THROTTLE_CLOSE_CODE})
                    return

        return await self.inner(scope, receive, send)

    async def is_allowed(self, ip: str) -> bool:
        # sync redis client, so keep it off the event loop
        return await sync_to_async(self._check_redis)(f"ws_throttle:{ip}")

    def _check_redis(self, key: str) -> bool:
        try:
            pipe = self.redis.pipeline()
            pipe.incr(key)
            pipe.expire(key, self.window, nx=True)
            count = pipe.execute()[0]
        except redis.RedisError as e:
            logger.error(f"Error checking WS throttle in Redis: {e}")
            return True
        return count <= self.limit
