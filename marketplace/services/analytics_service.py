"""
Seller analytics and admin statistics.
"""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from activity.models import ClickLog, SearchLog
from authentication.models import Seller
from marketplace.catalog.domain.models.catalog import Product
from marketplace.ordering.domain.models.order import Order
from utils.rbac import get_seller

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


User = get_user_model()

TOP_PRODUCTS = 5
NAME_LIMIT = 12
VIEWS_WINDOW_DAYS = 7


def short_name(title: str) -> str:
    return title[:NAME_LIMIT] + "..." if len(title) > NAME_LIMIT else title


def conversion_rate(clicks: int, views: int) -> int:
    """Clicks per 100 views, halves rounded up; 0 without views."""
    if not views:
        return 0
    return int((Decimal(clicks * 100) / Decimal(views)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class SellerAnalyticsService(BaseService):
    """Dashboard numbers for an approved shopkeeper."""

    @BaseService.log_performance
    def dashboard(self, user) -> ServiceResult[Dict[str, Any]]:
        seller = get_seller(user)
        if seller is None or not seller.is_approved:
            return service_err(ErrorCodes.PERMISSION_DENIED, "An approved shop is required")

        products = Product.objects.filter(seller=seller)
        totals = products.aggregate(total_views=Sum("views"), total_clicks=Sum("clicks"))
        total_views = totals["total_views"] or 0
        total_clicks = totals["total_clicks"] or 0

        top = products.order_by("-clicks", "-created_at")[:TOP_PRODUCTS]
        clicks_per_product = [
            {"name": short_name(product.title), "clicks": product.clicks, "views": product.views} for product in top
        ]

        by_category: Dict[str, int] = {}
        for row in products.values("category").annotate(count=Count("id")):
            category = row["category"] or "Other"
            by_category[category] = by_category.get(category, 0) + row["count"]

        order_counts = {status: 0 for status, _ in Order.STATUS_CHOICES}
        for row in Order.objects.filter(seller=seller).values("status").annotate(count=Count("id")):
            order_counts[row["status"]] = row["count"]

        return service_ok(
            {
                "totalProducts": products.count(),
                "totalViews": total_views,
                "totalClicks": total_clicks,
                "conversionRate": conversion_rate(total_clicks, total_views),
                "clicksPerProduct": clicks_per_product,
                "productsByCategory": [
                    {"category": category, "count": count} for category, count in sorted(by_category.items())
                ],
                "viewsOverTime": self.views_over_time(seller),
                "orders": order_counts,
                "pendingOrders": order_counts[Order.STATUS_PENDING],
            }
        )

    def views_over_time(self, seller: Seller, days: int = VIEWS_WINDOW_DAYS):
        """Detail views per day for the last ``days`` days, oldest first, zero-filled."""
        today = timezone.localdate()
        start = today - timedelta(days=days - 1)
        rows = (
            ClickLog.objects.filter(
                product__seller=seller, source=ClickLog.SOURCE_DETAIL, created_at__date__gte=start
            )
            .annotate(day=TruncDate("created_at"))
            .values("day")
            .annotate(views=Count("id"))
        )
        per_day = {row["day"]: row["views"] for row in rows}
        window = [start + timedelta(days=offset) for offset in range(days)]
        return [{"date": day.isoformat(), "views": per_day.get(day, 0)} for day in window]


class AdminStatsService(BaseService):
    """Platform-wide counters for the admin panel."""

    @BaseService.log_performance
    def stats(self) -> ServiceResult[Dict[str, Any]]:
        product_totals = Product.objects.aggregate(total_views=Sum("views"), total_clicks=Sum("clicks"))
        return service_ok(
            {
                "totalUsers": User.objects.count(),
                "totalSellers": Seller.objects.count(),
                "pendingSellers": Seller.objects.filter(status=Seller.STATUS_PENDING).count(),
                "totalProducts": Product.objects.count(),
                "totalSearches": SearchLog.objects.count(),
                "totalViews": product_totals["total_views"] or 0,
                "totalClicks": product_totals["total_clicks"] or 0,
                "totalOrders": Order.objects.count(),
            }
        )
