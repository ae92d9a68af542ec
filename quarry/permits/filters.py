from datetime import timedelta

import django_filters
from django.utils import timezone

from quarry.core.filters import search_filter
from .models import Permit

MAX_EXPIRY_WINDOW_DAYS = 3650


class PermitFilter(django_filters.FilterSet):
    permit_type = django_filters.ChoiceFilter(choices=Permit.PERMIT_TYPE_CHOICES)
    status = django_filters.ChoiceFilter(choices=Permit.STATUS_CHOICES)
    expiring_within = django_filters.NumberFilter(
        method='filter_expiring_within', min_value=0, max_value=MAX_EXPIRY_WINDOW_DAYS
    )
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('company_name', 'description')

    def filter_expiring_within(self, queryset, name, value):
        """Permits that are still valid but expire within `value` days"""
        today = timezone.localdate()
        return queryset.filter(expiry_date__gte=today, expiry_date__lte=today + timedelta(days=int(value)))

    class Meta:
        model = Permit
        fields = []
