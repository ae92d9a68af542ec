import django_filters

from quarry.core.filters import RecordFilter, search_filter
from .models import (
    DrillingRecord, BlastingRecord, LoadingRecord, TransportRecord, JCBOperation,
    Worker, AttendanceRecord, MediaRecord,
)


class DrillingRecordFilter(RecordFilter):
    location = django_filters.CharFilter(field_name='location', lookup_expr='icontains')
    material_type = django_filters.CharFilter(field_name='material_type', lookup_expr='iexact')
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('location', 'equipment_used', 'notes')

    class Meta:
        model = DrillingRecord
        fields = []


class BlastingRecordFilter(RecordFilter):
    material_type = django_filters.CharFilter(field_name='material_type', lookup_expr='iexact')
    pg_unit = django_filters.ChoiceFilter(choices=BlastingRecord.PG_UNIT_CHOICES)

    class Meta:
        model = BlastingRecord
        fields = []


class LoadingRecordFilter(RecordFilter):
    vehicle = django_filters.CharFilter(field_name='vehicle_used', lookup_expr='icontains')
    owner = django_filters.CharFilter(field_name='vehicle_owner_name', lookup_expr='icontains')
    material_type = django_filters.CharFilter(field_name='material_type', lookup_expr='iexact')

    class Meta:
        model = LoadingRecord
        fields = []


class TransportRecordFilter(RecordFilter):
    vehicle_type = django_filters.CharFilter(field_name='vehicle_type', lookup_expr='iexact')
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('from_location', 'to_location', 'material_transported')

    class Meta:
        model = TransportRecord
        fields = []


class JCBOperationFilter(RecordFilter):
    operator = django_filters.CharFilter(field_name='operator_name', lookup_expr='icontains')
    vehicle_number = django_filters.CharFilter(field_name='vehicle_number', lookup_expr='icontains')

    class Meta:
        model = JCBOperation
        fields = []


class WorkerFilter(django_filters.FilterSet):
    is_active = django_filters.BooleanFilter(field_name='is_active')
    search = django_filters.CharFilter(method='filter_search')

    filter_search = search_filter('name', 'employee_id')

    class Meta:
        model = Worker
        fields = []


class AttendanceRecordFilter(RecordFilter):
    status = django_filters.ChoiceFilter(choices=AttendanceRecord.STATUS_CHOICES)
    worker = django_filters.NumberFilter(field_name='workers__id', distinct=True)
    location = django_filters.CharFilter(field_name='location', lookup_expr='icontains')

    class Meta:
        model = AttendanceRecord
        fields = []


class MediaRecordFilter(RecordFilter):
    date_from = django_filters.DateFilter(field_name='date_taken', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='date_taken', lookup_expr='lte')
    status = None
    record_type = django_filters.ChoiceFilter(choices=MediaRecord.RECORD_TYPE_CHOICES)
    media_type = django_filters.ChoiceFilter(choices=MediaRecord.MEDIA_TYPE_CHOICES)

    class Meta:
        model = MediaRecord
        fields = []
