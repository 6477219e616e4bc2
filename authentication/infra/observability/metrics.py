"""
Prometheus Metrics

Metrics for authentication and shopkeeper moderation. Exposed together with the
marketplace metrics at /api/marketplace/metrics/.
"""

from prometheus_client import Counter, Histogram

# ===== Login Metrics =====

login_total = Counter("auth_login_total", "Total login attempts", ["status"])
"""
Labels: status (success/failed)

Example:
    login_total.labels(status='success').inc()
"""

login_failed = Counter("auth_login_failed", "Failed login attempts", ["reason"])
"""
Labels: reason (user_not_found, wrong_password, inactive)
"""

login_duration = Histogram(
    "auth_login_duration_seconds", "Login request duration in seconds", buckets=[0.1, 0.5, 1.0, 2.0, 5.0]
)


# ===== Registration Metrics =====

registration_total = Counter("auth_registration_total", "Total registration attempts", ["status"])


# ===== Shopkeeper Metrics =====

seller_applications_total = Counter(
    "seller_applications_total", "Shopkeeper applications submitted", ["resubmission"]
)

seller_transitions_total = Counter(
    "seller_status_transitions_total", "Seller moderation transitions", ["from_status", "to_status"]
)
"""
Example:
    seller_transitions_total.labels(from_status='pending', to_status='approved').inc()
"""
