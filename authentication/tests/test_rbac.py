from unittest.mock import MagicMock

import pytest
from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import PermissionDenied

from authentication.models import Seller, UserRole
from authentication.permissions import AdminRequired, ApprovedSellerRequired
from marketplace.tests.factories import AdminFactory, PendingSellerFactory, SellerFactory, UserFactory
from utils.rbac import (
    build_role_set,
    get_seller,
    highest_role,
    invalidate_role_cache,
    is_admin,
    is_approved_seller,
    is_shopkeeper,
    pick_highest_role,
    require_admin,
)


@pytest.mark.unit
class TestPickHighestRole:
    def test_empty_is_user(self):
        assert pick_highest_role([]) == "user"

    def test_admin_wins(self):
        assert pick_highest_role(["user", "admin", "shopkeeper"]) == "admin"

    def test_shopkeeper_over_user(self):
        assert pick_highest_role({"user", "shopkeeper"}) == "shopkeeper"


@pytest.mark.django_db
class TestRoleSet:
    def test_anonymous_has_no_roles(self):
        assert build_role_set(AnonymousUser()) == set()
        assert get_seller(AnonymousUser()) is None

    def test_plain_user(self):
        assert build_role_set(UserFactory()) == {"user"}

    def test_role_rows(self):
        user = UserFactory()
        UserRole.objects.create(user=user, role="shopkeeper")

        assert highest_role(user) == "shopkeeper"

    def test_seller_row_without_role_row(self):
        seller = PendingSellerFactory()
        UserRole.objects.filter(user=seller.user).delete()

        assert is_shopkeeper(seller.user)
        assert not is_approved_seller(seller.user)

    def test_staff_is_admin(self):
        assert is_admin(AdminFactory())

    def test_configured_admin_email_is_case_insensitive(self, settings):
        settings.SELLORA_ADMIN_EMAILS = ["owner@sellora.test"]

        assert is_admin(UserFactory(email="Owner@Sellora.test"))

    def test_roles_are_cached_until_invalidated(self):
        user = UserFactory()
        assert not is_shopkeeper(user)

        UserRole.objects.create(user=user, role="shopkeeper")
        assert not is_shopkeeper(user)

        invalidate_role_cache(user)
        assert is_shopkeeper(user)

    def test_require_admin(self):
        with pytest.raises(PermissionDenied):
            require_admin(UserFactory())
        require_admin(AdminFactory())


@pytest.mark.django_db
class TestPermissions:
    def request_for(self, user):
        return MagicMock(user=user)

    def test_admin_required(self):
        permission = AdminRequired()

        assert permission.has_permission(self.request_for(AdminFactory()), None)
        assert not permission.has_permission(self.request_for(UserFactory()), None)
        assert not permission.has_permission(self.request_for(AnonymousUser()), None)

    def test_approved_seller_required(self):
        permission = ApprovedSellerRequired()

        assert permission.has_permission(self.request_for(SellerFactory().user), None)
        assert not permission.has_permission(self.request_for(PendingSellerFactory().user), None)

    def test_blocked_seller_loses_selling_rights(self):
        seller = SellerFactory(status=Seller.STATUS_BLOCKED)

        assert not ApprovedSellerRequired().has_permission(self.request_for(seller.user), None)
