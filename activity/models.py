import logging

from django.conf import settings
from django.db import models

logger = logging.getLogger(__name__)


def _known_user(user):
    """The user when authenticated, else None (anonymous visitors are logged without one)."""
    if user is not None and getattr(user, 'is_authenticated', False):
        return user
    return None


class SearchLog(models.Model):
    """One row per non-empty catalog search."""

    query = models.CharField(max_length=255)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, related_name='search_logs', null=True, blank=True
    )
    results_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['-created_at'], name='activity_search_created_idx')]

    def __str__(self):
        return f"'{self.query}' ({self.results_count} results)"

    @classmethod
    def record(cls, query, results_count, user=None):
        query = (query or '').strip()
        if not query:
            return None
        return cls.objects.create(query=query[:255], results_count=results_count, user=_known_user(user))


class ClickLog(models.Model):
    """Product interaction: a card click on a listing or a detail page view."""

    SOURCE_LISTING = 'listing'
    SOURCE_DETAIL = 'detail'

    SOURCE_CHOICES = [
        (SOURCE_LISTING, 'Listing card click'),
        (SOURCE_DETAIL, 'Detail page view'),
    ]

    product = models.ForeignKey('marketplace.Product', on_delete=models.CASCADE, related_name='click_logs')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, related_name='click_logs', null=True, blank=True
    )
    source = models.CharField(max_length=10, choices=SOURCE_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='activity_click_created_idx'),
            models.Index(fields=['product', 'source', 'created_at'], name='activity_click_product_idx'),
        ]

    def __str__(self):
        return f"{self.source} on {self.product_id}"

    @classmethod
    def record(cls, product, source, user=None):
        return cls.objects.create(product=product, source=source, user=_known_user(user))
