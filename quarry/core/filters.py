import django_filters
from django.db.models import Q


class RecordFilter(django_filters.FilterSet):
    """Date range and status filters shared by the record list endpoints.

    Subclasses whose date column is not called ``date`` redeclare
    ``date_from``/``date_to`` with the right ``field_name``.
    """
    date_from = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='date', lookup_expr='lte')
    status = django_filters.CharFilter(field_name='status', lookup_expr='exact')
    created_by = django_filters.NumberFilter(field_name='created_by_id', lookup_expr='exact')


def search_filter(*fields):
    """Build a filter method that ORs icontains lookups over fields"""
    def _filter(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        query = Q()
        for field in fields:
            query |= Q(**{f'{field}__icontains': value})
        return queryset.filter(query)

    return _filter
