from prometheus_client import Counter, Histogram


# Catalog Metrics
products_created_total = Counter("marketplace_products_created_total", "Products listed", ["category"])
product_views_total = Counter("marketplace_product_views_total", "Product detail views")
product_clicks_total = Counter("marketplace_product_clicks_total", "Product card clicks")
searches_total = Counter("marketplace_searches_total", "Searches with a non-empty query")
image_upload_failures_total = Counter("marketplace_image_upload_failures_total", "Product image upload failures")

# Order Metrics
orders_reserved_total = Counter("marketplace_orders_reserved_total", "Orders reserved for pickup")
order_transitions_total = Counter(
    "marketplace_order_transitions_total", "Order status transitions", ["from_status", "to_status"]
)
pickup_verifications_total = Counter(
    "marketplace_pickup_verifications_total", "Pickup code verifications", ["result"]
)

# Performance Metrics
catalog_request_duration = Histogram(
    "marketplace_catalog_request_seconds",
    "Catalog service call duration",
    ["operation"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

service_call_duration = Histogram(
    "sellora_service_call_seconds",
    "Service method duration by outcome (ok, error code, exception)",
    ["service", "method", "outcome"],
    buckets=[0.005, 0.025, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)
