"""
Base classes and utilities for the service layer.

This module provides the ServiceResult pattern (inspired by Rust's Result type)
and BaseService class for the marketplace and chat services.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

from marketplace.infra.observability.metrics import service_call_duration

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(order)
        >>> if result.ok:
        ...     return Response(OrderSerializer(result.value).data, 201)

        >>> result = service_err("invalid_pickup_code", "Pickup code does not match")
        >>> print(result.error)  # "invalid_pickup_code"
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None

    def to_dict(self) -> dict:
        """Error body for API responses: ``{"error": code, "detail": message}``."""
        if self.ok:
            return {"data": self.value}
        return {"error": self.error, "detail": self.error_detail}


def service_ok(value: T) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Example:
        >>> return service_ok(product)
    """
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "product_not_found", "invalid_order_state")
        error_detail: Human-readable error message

    Example:
        >>> return service_err("product_not_found", f"Product {id} does not exist")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for the marketplace and chat services.

    Gives each service a logger named after its module and class, and the
    ``log_performance`` decorator, which times a call, logs the outcome and
    records it in the ``sellora_service_call_seconds`` histogram.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            service = self.__class__.__name__
            started = time.perf_counter()
            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - started
                service_call_duration.labels(service, func.__name__, "exception").observe(elapsed)
                self.logger.error(f"{service}.{func.__name__} raised after {elapsed * 1000:.1f}ms: {e}", exc_info=True)
                raise

            elapsed = time.perf_counter() - started
            if isinstance(result, ServiceResult) and not result.ok:
                outcome = result.error
                self.logger.warning(f"{service}.{func.__name__} -> {result.error} ({elapsed * 1000:.1f}ms)")
            else:
                outcome = "ok"
                self.logger.debug(f"{service}.{func.__name__} ok ({elapsed * 1000:.1f}ms)")
            service_call_duration.labels(service, func.__name__, outcome).observe(elapsed)
            return result

        return wrapper


# Common error codes for marketplace and chat services
class ErrorCodes:
    """Standard error codes used across marketplace services."""

    # Product errors
    PRODUCT_NOT_FOUND = "product_not_found"
    INVALID_PRODUCT_DATA = "invalid_product_data"
    INVALID_IMAGE = "invalid_image"
    TOO_MANY_IMAGES = "too_many_images"
    IMAGE_UPLOAD_FAILED = "image_upload_failed"

    # Order errors
    ORDER_NOT_FOUND = "order_not_found"
    INVALID_ORDER_STATE = "invalid_order_state"
    INVALID_PICKUP_CODE = "invalid_pickup_code"
    CANNOT_ORDER_OWN_PRODUCT = "cannot_order_own_product"

    # Chat errors
    EMPTY_MESSAGE = "empty_message"
    MESSAGE_TOO_LONG = "message_too_long"
    INVALID_RECEIVER = "invalid_receiver"

    # Permission errors
    PERMISSION_DENIED = "permission_denied"
    NOT_PRODUCT_OWNER = "not_product_owner"
    NOT_ORDER_OWNER = "not_order_owner"

    # Validation errors
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"

    # Internal errors
    INTERNAL_ERROR = "internal_error"
    DATABASE_ERROR = "database_error"


# HTTP status per error code, used by the views
ERROR_HTTP_STATUS = {
    ErrorCodes.PRODUCT_NOT_FOUND: 404,
    ErrorCodes.ORDER_NOT_FOUND: 404,
    ErrorCodes.PERMISSION_DENIED: 403,
    ErrorCodes.NOT_PRODUCT_OWNER: 403,
    ErrorCodes.NOT_ORDER_OWNER: 403,
    ErrorCodes.INTERNAL_ERROR: 500,
    ErrorCodes.DATABASE_ERROR: 500,
    ErrorCodes.IMAGE_UPLOAD_FAILED: 502,
}


def http_status_for(result: ServiceResult) -> int:
    """HTTP status for a failed result (400 unless mapped above)."""
    return ERROR_HTTP_STATUS.get(result.error, 400)
