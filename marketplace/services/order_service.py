"""
OrderService - Reservations and Pickup Codes

Order lifecycle for in-person pickup:

    pending -> ready -> completed
       |         |
       +---------+--> cancelled

A buyer reserves a visible product and receives a 4-digit pickup code. The
owning shopkeeper moves the order along and completes it by checking the code
the buyer shows at the counter.
"""

import logging
from typing import List

from django.db import transaction

from infrastructure.observability import tracer
from marketplace.domain.events import OrderReservedEvent, OrderStatusChangedEvent, publish
from marketplace.infra.observability.metrics import pickup_verifications_total
from marketplace.ordering.domain.models.order import Order
from utils.rbac import get_seller

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from .catalog_service import CatalogService


logger = logging.getLogger(__name__)


class OrderService(BaseService):
    """
    Service for pickup orders.

    Responsibilities:
    - Reserve a product (buyer)
    - List orders for the buyer and for the shopkeeper
    - Status transitions and pickup verification (owning shopkeeper)
    - Cancel a pending order (buyer)
    """

    @BaseService.log_performance
    @transaction.atomic
    def reserve(self, buyer, product_id) -> ServiceResult[Order]:
        """
        Reserve a product for pickup.

        Returns:
            ServiceResult with the new pending Order (carrying its pickup code),
            or product_not_found / cannot_order_own_product
        """
        with tracer.start_as_current_span("order_reserve") as span:
            span.set_attribute("product.id", str(product_id))

            product = CatalogService.visible_products().filter(id=product_id).first()
            if product is None:
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

            seller = product.seller
            if seller.user_id == buyer.id:
                return service_err(ErrorCodes.CANNOT_ORDER_OWN_PRODUCT, "You cannot reserve your own product")

            order = Order.objects.create(
                product=product,
                buyer=buyer,
                seller=seller,
                shop_name=seller.shop_name,
                shop_address=seller.full_address,
            )

            self.logger.info(f"Order {order.id} reserved by buyer {buyer.id} for product {product.id}")
            publish(OrderReservedEvent(str(order.id), str(buyer.id), seller.id, str(product.id)))
            return service_ok(order)

    def buyer_orders(self, buyer) -> List[Order]:
        return list(
            Order.objects.select_related("product", "seller").filter(buyer=buyer).order_by("-created_at")
        )

    def seller_orders(self, user) -> ServiceResult[List[Order]]:
        """The approved shopkeeper's orders with product and buyer profile loaded."""
        seller = get_seller(user)
        if seller is None or not seller.is_approved:
            return service_err(ErrorCodes.PERMISSION_DENIED, "An approved shop is required")
        orders = (
            Order.objects.select_related("product", "buyer", "buyer__profile")
            .filter(seller=seller)
            .order_by("-created_at")
        )
        return service_ok(list(orders))

    def _lock_seller_order(self, order_id, user) -> ServiceResult[Order]:
        order = Order.objects.select_for_update().select_related("seller").filter(id=order_id).first()
        if order is None:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")
        if order.seller.user_id != user.id or not order.seller.is_approved:
            return service_err(ErrorCodes.NOT_ORDER_OWNER, "This order belongs to another shop")
        return service_ok(order)

    def _apply_status(self, order: Order, new_status: str, actor) -> Order:
        old_status = order.status
        order.status = new_status
        order.save(update_fields=["status", "updated_at"])
        self.logger.info(f"Order {order.id} {old_status} -> {new_status} by {actor.id}")
        publish(OrderStatusChangedEvent(str(order.id), old_status, new_status, str(actor.id)))
        return order

    @BaseService.log_performance
    @transaction.atomic
    def update_status(self, order_id, user, new_status: str) -> ServiceResult[Order]:
        """
        Move an order to ``new_status`` (owning shopkeeper).

        Allowed: pending -> ready | completed | cancelled, ready -> completed | cancelled.
        """
        with tracer.start_as_current_span("order_update_status") as span:
            span.set_attribute("order.new_status", new_status)
            locked = self._lock_seller_order(order_id, user)
            if not locked.ok:
                return locked
            order = locked.value

            if not order.can_transition_to(new_status):
                return service_err(
                    ErrorCodes.INVALID_ORDER_STATE, f"Cannot move order from {order.status} to {new_status}"
                )
            return service_ok(self._apply_status(order, new_status, user))

    @BaseService.log_performance
    @transaction.atomic
    def verify_pickup(self, order_id, user, code: str) -> ServiceResult[Order]:
        """Complete a pending or ready order when the buyer's code matches."""
        locked = self._lock_seller_order(order_id, user)
        if not locked.ok:
            return locked
        order = locked.value

        if order.status not in (Order.STATUS_PENDING, Order.STATUS_READY):
            return service_err(ErrorCodes.INVALID_ORDER_STATE, f"Order is already {order.status}")

        if (code or "").strip() != order.pickup_code:
            pickup_verifications_total.labels(result="mismatch").inc()
            return service_err(ErrorCodes.INVALID_PICKUP_CODE, "Pickup code does not match")

        pickup_verifications_total.labels(result="match").inc()
        return service_ok(self._apply_status(order, Order.STATUS_COMPLETED, user))

    @BaseService.log_performance
    @transaction.atomic
    def cancel_by_buyer(self, order_id, buyer) -> ServiceResult[Order]:
        order = Order.objects.select_for_update().filter(id=order_id).first()
        if order is None or order.buyer_id != buyer.id:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")
        if order.status != Order.STATUS_PENDING:
            return service_err(ErrorCodes.INVALID_ORDER_STATE, "Only pending orders can be cancelled")
        return service_ok(self._apply_status(order, Order.STATUS_CANCELLED, buyer))
