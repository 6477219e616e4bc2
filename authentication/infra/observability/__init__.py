"""
Observability Infrastructure

Prometheus metrics for the authentication context. Tracing lives in
``infrastructure.observability``.
"""

from .metrics import (
    login_duration,
    login_failed,
    login_total,
    registration_total,
    seller_applications_total,
    seller_transitions_total,
)

__all__ = [
    "login_total",
    "login_failed",
    "login_duration",
    "registration_total",
    "seller_applications_total",
    "seller_transitions_total",
]
