import django_filters

from quarry.core.filters import search_filter
from .models import Customer


class CustomerFilter(django_filters.FilterSet):
    q = django_filters.CharFilter(method='filter_search')
    customer_type = django_filters.ChoiceFilter(choices=Customer.CUSTOMER_TYPE_CHOICES)
    city = django_filters.CharFilter(field_name='city', lookup_expr='iexact')
    is_active = django_filters.BooleanFilter(field_name='is_active')

    filter_search = search_filter('company_name', 'contact_person', 'email', 'phone', 'city', 'tax_id')

    class Meta:
        model = Customer
        fields = []
