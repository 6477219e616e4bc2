import django_filters
from django.db.models import Q

from authentication.domain.models import Seller


class SellerFilter(django_filters.FilterSet):
    """Admin seller list filters."""

    status = django_filters.ChoiceFilter(choices=Seller.STATUS_CHOICES)
    city = django_filters.CharFilter(field_name="city", lookup_expr="iexact")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Seller
        fields = ["status", "city"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(shop_name__icontains=value)
            | Q(owner_name__icontains=value)
            | Q(email__icontains=value)
            | Q(user__email__icontains=value)
        )
