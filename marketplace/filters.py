import django_filters
from django.db.models import Q

from .models import Product


class ProductFilter(django_filters.FilterSet):
    """
    Filter for the admin product list
    """

    category = django_filters.ChoiceFilter(choices=Product.CATEGORY_CHOICES)
    seller = django_filters.NumberFilter(field_name="seller__id")
    is_active = django_filters.BooleanFilter()

    # Search in title, description and shop name
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Product
        fields = ["category", "seller", "is_active"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) | Q(description__icontains=value) | Q(seller__shop_name__icontains=value)
        )
