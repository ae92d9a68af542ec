import django_filters
from django.utils import timezone

from quarry.core.filters import RecordFilter, search_filter
from .models import Invoice, DispatchEntry, AccountTransaction, PAYMENT_MODE_CHOICES


class InvoiceFilter(RecordFilter):
    date_from = django_filters.DateFilter(field_name='invoice_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='invoice_date', lookup_expr='lte')
    status = django_filters.ChoiceFilter(choices=Invoice.STATUS_CHOICES)
    customer = django_filters.NumberFilter(field_name='customer_id')
    overdue = django_filters.BooleanFilter(method='filter_overdue')
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('invoice_number', 'customer_name')

    def filter_overdue(self, queryset, name, value):
        overdue = queryset.filter(due_date__lt=timezone.localdate()).exclude(status='paid')
        return overdue if value else queryset.exclude(pk__in=overdue.values('pk'))

    class Meta:
        model = Invoice
        fields = []


class DispatchEntryFilter(RecordFilter):
    date_from = django_filters.DateFilter(field_name='dispatch_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='dispatch_date', lookup_expr='lte')
    status = django_filters.ChoiceFilter(field_name='delivery_status', choices=DispatchEntry.DELIVERY_STATUS_CHOICES)
    material_type = django_filters.CharFilter(field_name='material_type', lookup_expr='iexact')
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('dispatch_number', 'customer_name', 'destination', 'vehicle_number', 'driver_name')

    class Meta:
        model = DispatchEntry
        fields = []


class AccountTransactionFilter(RecordFilter):
    date_from = django_filters.DateFilter(field_name='transaction_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='transaction_date', lookup_expr='lte')
    status = django_filters.ChoiceFilter(choices=AccountTransaction.STATUS_CHOICES)
    transaction_type = django_filters.ChoiceFilter(choices=AccountTransaction.TRANSACTION_TYPE_CHOICES)
    payment_method = django_filters.ChoiceFilter(choices=PAYMENT_MODE_CHOICES)
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('invoice_number', 'customer_name', 'reason')

    class Meta:
        model = AccountTransaction
        fields = []
