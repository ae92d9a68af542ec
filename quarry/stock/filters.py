import django_filters

from quarry.core.filters import RecordFilter, search_filter
from .models import ProductionStock, PurchaseRequest


class ProductionStockFilter(RecordFilter):
    date_from = django_filters.DateFilter(field_name='stock_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='stock_date', lookup_expr='lte')
    status = None
    material_type = django_filters.CharFilter(field_name='material_type', lookup_expr='iexact')
    location = django_filters.CharFilter(field_name='location', lookup_expr='icontains')

    class Meta:
        model = ProductionStock
        fields = []


class PurchaseRequestFilter(RecordFilter):
    date_from = django_filters.DateFilter(field_name='created_at', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='created_at', lookup_expr='date__lte')
    status = django_filters.ChoiceFilter(choices=PurchaseRequest.STATUS_CHOICES)
    priority = django_filters.ChoiceFilter(choices=PurchaseRequest.PRIORITY_CHOICES)
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('request_number', 'material_name', 'supplier_suggestion')

    class Meta:
        model = PurchaseRequest
        fields = []
