from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.tests.factories import AdminFactory, ProductFactory, UserFactory

from .models import ClickLog, SearchLog


class SearchLogModelTest(TestCase):
    def test_record_trims_query(self):
        log = SearchLog.record('  kurta  ', 3)

        self.assertEqual(log.query, 'kurta')
        self.assertEqual(log.results_count, 3)
        self.assertIsNone(log.user)

    def test_blank_query_is_not_recorded(self):
        self.assertIsNone(SearchLog.record('   ', 0))
        self.assertFalse(SearchLog.objects.exists())

    def test_long_query_is_truncated(self):
        log = SearchLog.record('x' * 300, 0)

        self.assertEqual(len(log.query), 255)


class ClickLogModelTest(TestCase):
    def test_anonymous_click_has_no_user(self):
        log = ClickLog.record(ProductFactory(), ClickLog.SOURCE_LISTING, user=AnonymousUser())

        self.assertIsNone(log.user)

    def test_authenticated_click_keeps_user(self):
        user = UserFactory()

        log = ClickLog.record(ProductFactory(), ClickLog.SOURCE_DETAIL, user=user)

        self.assertEqual(log.user, user)


class ActivityAdminViewsTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = AdminFactory()

    def test_search_logs_newest_first(self):
        SearchLog.record('lamp', 2)
        SearchLog.record('chair', 0, user=self.admin)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse('activity:search_logs'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({row['query'] for row in response.data}, {'lamp', 'chair'})
        chair = next(row for row in response.data if row['query'] == 'chair')
        self.assertEqual(chair['user_email'], self.admin.email)

    def test_click_logs_include_product_and_seller(self):
        product = ProductFactory(title='Brass diya')
        ClickLog.record(product, ClickLog.SOURCE_LISTING)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(reverse('activity:click_logs'))

        self.assertEqual(response.data[0]['product_title'], 'Brass diya')
        self.assertEqual(response.data[0]['seller_id'], product.seller_id)
        self.assertEqual(response.data[0]['source'], 'listing')

    def test_logs_are_admin_only(self):
        self.client.force_authenticate(user=UserFactory())

        self.assertEqual(self.client.get(reverse('activity:search_logs')).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.get(reverse('activity:click_logs')).status_code, status.HTTP_403_FORBIDDEN)
