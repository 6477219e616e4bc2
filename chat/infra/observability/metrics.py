from prometheus_client import Counter, Gauge


# Messaging Metrics
chat_messages_sent_total = Counter("chat_messages_sent_total", "Messages persisted", ["transport"])
chat_messages_read_total = Counter("chat_messages_read_total", "Messages marked as read")
chat_broadcast_failures_total = Counter("chat_broadcast_failures_total", "Channel layer sends that failed")

# Websocket Metrics
chat_ws_connections_total = Counter("chat_ws_connections_total", "Websocket handshakes", ["result"])
chat_ws_active_connections = Gauge("chat_ws_active_connections", "Open chat websockets")
chat_ws_throttled_total = Counter("chat_ws_throttled_total", "Websocket handshakes rejected by the throttle")
