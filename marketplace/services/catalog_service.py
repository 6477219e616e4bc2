"""
CatalogService - Product Browse, Tracking & CRUD

Handles public browsing with search logging, detail views and card clicks
(counters plus click logs), and shopkeeper product CRUD with image uploads
through the storage abstraction.
"""

import logging
import os
import secrets
import time
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.paginator import Paginator
from django.db import transaction
from django.db.models import F, Q

from activity.models import ClickLog, SearchLog
from authentication.models import Seller
from infrastructure.container import container
from infrastructure.observability import tracer
from infrastructure.storage.interface import StorageException
from marketplace.catalog.domain.models.catalog import Product
from marketplace.domain.events import ProductCreatedEvent, publish
from marketplace.infra.observability.metrics import (
    catalog_request_duration,
    image_upload_failures_total,
    product_clicks_total,
    product_views_total,
    searches_total,
)
from utils.rbac import get_seller, is_admin

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "price", "category", "city", "state", "phone_number", "is_active")


def image_settings() -> Dict[str, Any]:
    return settings.SELLORA_PRODUCT_IMAGES


class CatalogService(BaseService):
    """
    Service for managing product catalog operations.

    Responsibilities:
    - Browse visible products with category filter, search and pagination
    - Product detail (view counter + detail click log)
    - Card clicks (click counter + listing click log)
    - Create products (approved shopkeepers only)
    - Update / delete products (owner only)
    - Upload product images via storage abstraction

    All operations return ServiceResult.
    """

    def __init__(self, storage=None):
        """
        Initialize CatalogService.

        Args:
            storage: Storage abstraction (injected via DI container)
        """
        super().__init__()
        self.storage = storage or container.storage()

    @staticmethod
    def visible_products():
        """Active products of approved shops: what buyers may see."""
        return Product.objects.select_related("seller").filter(
            is_active=True, seller__status=Seller.STATUS_APPROVED
        )

    @BaseService.log_performance
    def browse(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
        user=None,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        List visible products, newest first.

        Args:
            category: Category name; "all" or empty means no filter
            search: Case-insensitive substring of title or description
            page: Page number (1-indexed, clamped to the valid range)
            page_size: Items per page
            user: Requesting user, recorded on the search log

        Returns:
            ServiceResult with {results, count, page, page_size, num_pages, has_next, has_previous}
        """
        with tracer.start_as_current_span("catalog_browse") as span, catalog_request_duration.labels(
            operation="browse"
        ).time():
            try:
                queryset = self.visible_products()

                if category and category.lower() != "all":
                    queryset = queryset.filter(category=category)
                    span.set_attribute("filter.category", category)

                search = (search or "").strip()
                if search:
                    queryset = queryset.filter(Q(title__icontains=search) | Q(description__icontains=search))
                    span.set_attribute("search.query_length", len(search))

                queryset = queryset.order_by("-created_at")
                paginator = Paginator(queryset, page_size)
                page_obj = paginator.get_page(page)

                if search:
                    SearchLog.record(search, paginator.count, user=user)
                    searches_total.inc()

                span.set_attribute("results.count", paginator.count)
                return service_ok(
                    {
                        "results": list(page_obj.object_list),
                        "count": paginator.count,
                        "page": page_obj.number,
                        "page_size": page_size,
                        "num_pages": paginator.num_pages,
                        "has_next": page_obj.has_next(),
                        "has_previous": page_obj.has_previous(),
                    }
                )

            except Exception as e:
                self.logger.error(f"Error browsing products: {e}", exc_info=True)
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    def _find_for_user(self, product_id, user=None) -> Optional[Product]:
        """Visible product, or the caller's own product whatever its state."""
        product = self.visible_products().filter(id=product_id).first()
        if product is None and user is not None and getattr(user, "is_authenticated", False):
            product = Product.objects.select_related("seller").filter(id=product_id, seller__user=user).first()
        return product

    @BaseService.log_performance
    def get_product(self, product_id, user=None, track_view: bool = True) -> ServiceResult[Product]:
        """
        Get product details by ID.

        Args:
            product_id: Product UUID
            user: Requesting user (owners can open their hidden products)
            track_view: Increment ``views`` and write a detail ClickLog

        Returns:
            ServiceResult with Product instance, or product_not_found
        """
        with tracer.start_as_current_span("catalog_get_product") as span:
            span.set_attribute("product.id", str(product_id))
            product = self._find_for_user(product_id, user)
            if product is None:
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

            # Owners opening their own listing are not counted
            is_owner = user is not None and product.seller.user_id == getattr(user, "id", None)
            if track_view and not is_owner:
                Product.objects.filter(pk=product.pk).update(views=F("views") + 1)
                product.refresh_from_db(fields=["views"])
                ClickLog.record(product, ClickLog.SOURCE_DETAIL, user=user)
                product_views_total.inc()

            return service_ok(product)

    def track_click(self, product_id, user=None) -> ServiceResult[int]:
        """Card click on a listing: increments ``clicks`` and writes a listing ClickLog."""
        product = self.visible_products().filter(id=product_id).first()
        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        Product.objects.filter(pk=product.pk).update(clicks=F("clicks") + 1)
        product.refresh_from_db(fields=["clicks"])
        ClickLog.record(product, ClickLog.SOURCE_LISTING, user=user)
        product_clicks_total.inc()
        return service_ok(product.clicks)

    @BaseService.log_performance
    def create_product(self, user, data: Dict[str, Any], images: Optional[List] = None) -> ServiceResult[Product]:
        """
        Create a new product (approved shopkeeper only).

        Missing city, state and phone number default from the seller.
        Images are validated and uploaded before the row is written; a failed
        upload removes the images already stored.

        Example:
            >>> result = catalog_service.create_product(
            ...     user=shopkeeper,
            ...     data={"title": "Office chair", "price": "2499.00", "category": "Home & Living"},
            ...     images=[image_file],
            ... )
        """
        with tracer.start_as_current_span("catalog_create_product") as span:
            seller = get_seller(user)
            if seller is None or not seller.is_approved:
                return service_err(ErrorCodes.PERMISSION_DENIED, "Only approved shopkeepers can list products")

            images = images or []
            validation = self._validate_images(images)
            if not validation.ok:
                return validation

            upload = self._upload_images(images)
            if not upload.ok:
                return upload
            urls = upload.value
            span.set_attribute("images.count", len(urls))

            try:
                with transaction.atomic():
                    product = Product.objects.create(
                        seller=seller,
                        title=data["title"].strip(),
                        description=data.get("description", ""),
                        price=data["price"],
                        category=data.get("category") or "Other",
                        city=data.get("city") or seller.city,
                        state=data.get("state") or seller.state,
                        phone_number=data.get("phone_number") or seller.phone_number,
                        is_active=data.get("is_active", True),
                        image_url=urls[0] if urls else "",
                        images=urls,
                    )
            except Exception as e:
                self.logger.error(f"Error creating product: {e}", exc_info=True)
                self._delete_images(urls)
                return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

            self.logger.info(f"Created product: {product.title} (id={product.id}) by seller {seller.id}")
            publish(ProductCreatedEvent(str(product.id), seller.id, product.category))
            return service_ok(product)

    @BaseService.log_performance
    def update_product(
        self, product_id, user, data: Dict[str, Any], images: Optional[List] = None
    ) -> ServiceResult[Product]:
        """
        Update a product (owner only).

        A non-empty ``images`` list replaces the stored images; the old ones are
        deleted from storage after the row is saved.
        """
        product = Product.objects.select_related("seller").filter(id=product_id).first()
        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        if product.seller.user_id != user.id:
            return service_err(ErrorCodes.NOT_PRODUCT_OWNER, "You can only edit your own products")

        old_urls = []
        if images:
            validation = self._validate_images(images)
            if not validation.ok:
                return validation
            upload = self._upload_images(images)
            if not upload.ok:
                return upload
            old_urls = list(product.images or [])
            product.images = upload.value
            product.image_url = upload.value[0]

        for key in EDITABLE_FIELDS:
            if key in data:
                setattr(product, key, data[key])
        product.save()

        if old_urls:
            self._delete_images(old_urls)

        self.logger.info(f"Updated product {product.id} by user {user.id}")
        return service_ok(product)

    @BaseService.log_performance
    def delete_product(self, product_id, user) -> ServiceResult[bool]:
        """Delete a product and its stored images. Owners, and admins for moderation."""
        product = Product.objects.select_related("seller").filter(id=product_id).first()
        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        if product.seller.user_id != user.id and not is_admin(user):
            return service_err(ErrorCodes.NOT_PRODUCT_OWNER, "You can only delete your own products")

        urls = list(product.images or [])
        if product.image_url and product.image_url not in urls:
            urls.append(product.image_url)
        product.delete()
        self._delete_images(urls)

        self.logger.info(f"Deleted product {product_id} by user {user.id}")
        return service_ok(True)

    def my_products(self, user) -> ServiceResult[List[Product]]:
        """The shopkeeper's own products including inactive ones, newest first."""
        seller = get_seller(user)
        if seller is None:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You do not have a shop")
        return service_ok(list(Product.objects.filter(seller=seller).order_by("-created_at")))

    # ===== Images =====

    def _validate_images(self, images: List) -> ServiceResult[bool]:
        limits = image_settings()
        if len(images) > limits["MAX_COUNT"]:
            return service_err(ErrorCodes.TOO_MANY_IMAGES, f"At most {limits['MAX_COUNT']} images are allowed")

        for image in images:
            content_type = getattr(image, "content_type", "") or ""
            if not content_type.startswith("image/"):
                return service_err(ErrorCodes.INVALID_IMAGE, f"{getattr(image, 'name', 'file')} is not an image")
            if getattr(image, "size", 0) > limits["MAX_BYTES"]:
                max_mb = limits["MAX_BYTES"] // (1024 * 1024)
                return service_err(ErrorCodes.INVALID_IMAGE, f"{image.name} is larger than {max_mb}MB")
        return service_ok(True)

    @staticmethod
    def build_image_path(filename: str) -> str:
        """``products/{timestamp}-{random}.{ext}``"""
        ext = os.path.splitext(filename or "")[1].lstrip(".").lower() or "jpg"
        return f"{image_settings()['PATH_PREFIX']}/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"

    def _upload_images(self, images: List) -> ServiceResult[List[str]]:
        """
        Upload product images using storage abstraction.

        Returns:
            ServiceResult with the public URLs in upload order
        """
        urls = []
        for image in images:
            path = self.build_image_path(getattr(image, "name", ""))
            try:
                stored = self.storage.upload(file=image, path=path, content_type=image.content_type)
            except StorageException as e:
                self.logger.error(f"Failed to upload image {getattr(image, 'name', '')}: {e}")
                image_upload_failures_total.inc()
                self._delete_images(urls)
                return service_err(ErrorCodes.IMAGE_UPLOAD_FAILED, "Image upload failed, please try again")
            urls.append(stored.url)

        self.logger.info(f"Uploaded {len(urls)} product images")
        return service_ok(urls)

    def _delete_images(self, urls: List[str]):
        for url in urls:
            key = self.storage.key_from_url(url)
            if key is None:
                continue
            try:
                self.storage.delete(key)
            except StorageException as e:
                self.logger.warning(f"Could not delete stored image {key}: {e}")
