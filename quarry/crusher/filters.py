import django_filters

from quarry.core.filters import RecordFilter
from .models import CrusherProduction, EBReport


class CrusherProductionFilter(RecordFilter):
    status = django_filters.ChoiceFilter(choices=CrusherProduction.STATUS_CHOICES)
    shift = django_filters.ChoiceFilter(choices=CrusherProduction.SHIFT_CHOICES)
    crusher_type = django_filters.ChoiceFilter(choices=CrusherProduction.CRUSHER_TYPE_CHOICES)
    material_source = django_filters.ChoiceFilter(choices=CrusherProduction.MATERIAL_SOURCE_CHOICES)

    class Meta:
        model = CrusherProduction
        fields = []


class EBReportFilter(RecordFilter):
    date_from = django_filters.DateFilter(field_name='report_date', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='report_date', lookup_expr='lte')
    status = None

    class Meta:
        model = EBReport
        fields = []
