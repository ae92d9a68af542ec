import django_filters
from django.db.models import F

from quarry.core.filters import RecordFilter, search_filter
from .models import FuelRecord, InventoryItem, SafetyIncident


class FuelRecordFilter(RecordFilter):
    vehicle_number = django_filters.CharFilter(field_name='vehicle_number', lookup_expr='icontains')
    fuel_type = django_filters.ChoiceFilter(choices=FuelRecord.FUEL_TYPE_CHOICES)
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('record_number', 'vehicle_number', 'supplier', 'receipt_number')

    class Meta:
        model = FuelRecord
        fields = []


class InventoryItemFilter(django_filters.FilterSet):
    category = django_filters.CharFilter(field_name='category', lookup_expr='iexact')
    location = django_filters.CharFilter(field_name='location', lookup_expr='icontains')
    low_stock = django_filters.BooleanFilter(method='filter_low_stock')
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('item_name', 'item_code', 'supplier', 'given_to')

    def filter_low_stock(self, queryset, name, value):
        if value:
            return queryset.filter(quantity__lte=F('minimum_quantity'))
        return queryset.filter(quantity__gt=F('minimum_quantity'))

    class Meta:
        model = InventoryItem
        fields = []


class SafetyIncidentFilter(RecordFilter):
    status = django_filters.ChoiceFilter(choices=SafetyIncident.STATUS_CHOICES)
    severity = django_filters.ChoiceFilter(choices=SafetyIncident.SEVERITY_CHOICES)
    incident_type = django_filters.CharFilter(field_name='incident_type', lookup_expr='iexact')

    class Meta:
        model = SafetyIncident
        fields = []
