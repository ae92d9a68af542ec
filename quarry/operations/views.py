import logging

from django.db.models import Count
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import JSONParser, FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated

from quarry.core.records import (
    list_records, create_record, record_detail, summary_response, sum_of, ratio,
)
from quarry.core.roles import ModuleAccess, scope_to_user
from .filters import (
    DrillingRecordFilter, BlastingRecordFilter, LoadingRecordFilter, TransportRecordFilter,
    JCBOperationFilter, WorkerFilter, AttendanceRecordFilter, MediaRecordFilter,
)
from .models import (
    DrillingRecord, BlastingRecord, LoadingRecord, TransportRecord, JCBOperation,
    Worker, AttendanceRecord, MediaRecord,
)
from .serializers import (
    DrillingRecordSerializer, BlastingRecordSerializer, LoadingRecordSerializer,
    TransportRecordSerializer, JCBOperationSerializer, WorkerSerializer,
    AttendanceRecordSerializer, MediaRecordSerializer,
)

logger = logging.getLogger(__name__)

DETAIL_METHODS = ['GET', 'PUT', 'PATCH', 'DELETE']


def _approval_rows(model, user):
    return scope_to_user(model.objects.select_related('created_by', 'reviewed_by'), user)


# Drilling
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('drilling')])
def drilling_list_create(request):
    """List drilling records or record a new drilling entry"""
    if request.method == 'GET':
        queryset = _approval_rows(DrillingRecord, request.user)
        return list_records(request, queryset, DrillingRecordSerializer, DrillingRecordFilter)
    return create_record(request, DrillingRecordSerializer, 'DrillingRecord')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('drilling')])
def drilling_detail(request, pk):
    queryset = _approval_rows(DrillingRecord, request.user)
    return record_detail(request, queryset, pk, DrillingRecordSerializer, 'DrillingRecord')


def summarize_drilling(queryset):
    total_holes = int(sum_of(queryset, 'holes_drilled'))
    total_depth = sum_of(queryset, 'total_depth')
    return {
        'record_count': queryset.count(),
        'total_holes': total_holes,
        'total_depth': total_depth,
        'total_diesel': sum_of(queryset, 'diesel_consumed'),
        'total_production_tons': sum_of(queryset, 'approx_production_tons'),
        'average_depth_per_hole': ratio(total_depth, total_holes),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('drilling')])
def drilling_summary(request):
    queryset = _approval_rows(DrillingRecord, request.user)
    return summary_response(request, queryset, DrillingRecordFilter, summarize_drilling)


# Blasting
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('blasting')])
def blasting_list_create(request):
    """List blasting records or record explosives used in a blast"""
    if request.method == 'GET':
        queryset = _approval_rows(BlastingRecord, request.user)
        return list_records(request, queryset, BlastingRecordSerializer, BlastingRecordFilter)
    return create_record(request, BlastingRecordSerializer, 'BlastingRecord')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('blasting')])
def blasting_detail(request, pk):
    queryset = _approval_rows(BlastingRecord, request.user)
    return record_detail(request, queryset, pk, BlastingRecordSerializer, 'BlastingRecord')


def summarize_blasting(queryset):
    return {
        'record_count': queryset.count(),
        'total_ed': int(sum_of(queryset, 'ed_nos')),
        'total_edet': int(sum_of(queryset, 'edet_nos')),
        'total_nonel_3m': int(sum_of(queryset, 'nonel_3m_nos')),
        'total_nonel_4m': int(sum_of(queryset, 'nonel_4m_nos')),
        'total_pg': sum_of(queryset, 'pg_nos'),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('blasting')])
def blasting_summary(request):
    queryset = _approval_rows(BlastingRecord, request.user)
    return summary_response(request, queryset, BlastingRecordFilter, summarize_blasting)


# Breaking/Loading
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('loading')])
def loading_list_create(request):
    if request.method == 'GET':
        queryset = _approval_rows(LoadingRecord, request.user)
        return list_records(request, queryset, LoadingRecordSerializer, LoadingRecordFilter)
    return create_record(request, LoadingRecordSerializer, 'LoadingRecord')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('loading')])
def loading_detail(request, pk):
    queryset = _approval_rows(LoadingRecord, request.user)
    return record_detail(request, queryset, pk, LoadingRecordSerializer, 'LoadingRecord')


def summarize_loading(queryset):
    owners = queryset.exclude(vehicle_owner_name='').values('vehicle_owner_name').distinct().count()
    vehicles = queryset.exclude(vehicle_used='').values('vehicle_used').distinct().count()
    return {
        'record_count': queryset.count(),
        'total_hours_worked': sum_of(queryset, 'hours_worked'),
        'unique_owners': owners,
        'unique_vehicles': vehicles,
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('loading')])
def loading_summary(request):
    queryset = _approval_rows(LoadingRecord, request.user)
    return summary_response(request, queryset, LoadingRecordFilter, summarize_loading)


# Transport
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('transport')])
def transport_list_create(request):
    if request.method == 'GET':
        queryset = _approval_rows(TransportRecord, request.user)
        return list_records(request, queryset, TransportRecordSerializer, TransportRecordFilter)
    return create_record(request, TransportRecordSerializer, 'TransportRecord')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('transport')])
def transport_detail(request, pk):
    queryset = _approval_rows(TransportRecord, request.user)
    return record_detail(request, queryset, pk, TransportRecordSerializer, 'TransportRecord')


def summarize_transport(queryset):
    return {
        'total_trips': queryset.count(),
        'total_distance': sum_of(queryset, 'distance_km'),
        'total_fuel': sum_of(queryset, 'fuel_consumed'),
        'total_quantity': sum_of(queryset, 'quantity'),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('transport')])
def transport_summary(request):
    queryset = _approval_rows(TransportRecord, request.user)
    return summary_response(request, queryset, TransportRecordFilter, summarize_transport)


# JCB operations
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('jcb_operations')])
def jcb_list_create(request):
    if request.method == 'GET':
        queryset = _approval_rows(JCBOperation, request.user)
        return list_records(request, queryset, JCBOperationSerializer, JCBOperationFilter)
    return create_record(request, JCBOperationSerializer, 'JCBOperation', reference_field='vehicle_number')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('jcb_operations')])
def jcb_detail(request, pk):
    queryset = _approval_rows(JCBOperation, request.user)
    return record_detail(request, queryset, pk, JCBOperationSerializer, 'JCBOperation',
                         reference_field='vehicle_number')


def summarize_jcb(queryset):
    return {
        'record_count': queryset.count(),
        'total_hours': sum_of(queryset, 'total_hours'),
        'total_fuel': sum_of(queryset, 'fuel_consumed'),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('jcb_operations')])
def jcb_summary(request):
    queryset = _approval_rows(JCBOperation, request.user)
    return summary_response(request, queryset, JCBOperationFilter, summarize_jcb)


# Workers and attendance
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('attendance')])
def worker_list_create(request):
    """Workers are shared by everyone who can take attendance"""
    if request.method == 'GET':
        return list_records(request, Worker.objects.all(), WorkerSerializer, WorkerFilter)
    return create_record(request, WorkerSerializer, 'Worker', owner_field=None)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('attendance')])
def attendance_list_create(request):
    if request.method == 'GET':
        queryset = scope_to_user(
            AttendanceRecord.objects.select_related('created_by').prefetch_related('workers'),
            request.user
        )
        return list_records(request, queryset, AttendanceRecordSerializer, AttendanceRecordFilter)
    return create_record(request, AttendanceRecordSerializer, 'AttendanceRecord')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('attendance')])
def attendance_detail(request, pk):
    queryset = scope_to_user(AttendanceRecord.objects.prefetch_related('workers'), request.user)
    return record_detail(request, queryset, pk, AttendanceRecordSerializer, 'AttendanceRecord')


def summarize_attendance(queryset):
    total_days = queryset.values('date').distinct().count()
    total_hours = sum_of(queryset, 'hours_worked')
    worker_slots = queryset.aggregate(total=Count('workers'))['total'] or 0
    distinct_workers = Worker.objects.filter(attendance_records__in=queryset).distinct().count()
    return {
        'record_count': queryset.count(),
        'total_days': total_days,
        'total_hours': total_hours,
        'total_workers': distinct_workers,
        'average_hours_per_day': ratio(total_hours, total_days),
        'average_workers_per_day': ratio(worker_slots, total_days),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('attendance')])
def attendance_summary(request):
    queryset = scope_to_user(AttendanceRecord.objects.all(), request.user)
    return summary_response(request, queryset, AttendanceRecordFilter, summarize_attendance)


# Media
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('media')])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def media_list_create(request):
    """List site photos/videos or upload one"""
    if request.method == 'GET':
        queryset = scope_to_user(MediaRecord.objects.select_related('created_by'), request.user)
        return list_records(request, queryset, MediaRecordSerializer, MediaRecordFilter)
    return create_record(request, MediaRecordSerializer, 'MediaRecord', audit_action='upload')


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, ModuleAccess('media')])
def media_detail(request, pk):
    queryset = scope_to_user(MediaRecord.objects.all(), request.user)
    return record_detail(request, queryset, pk, MediaRecordSerializer, 'MediaRecord')


def summarize_media(queryset):
    today = timezone.localdate()
    return {
        'total_photos': queryset.filter(media_type='photo').count(),
        'total_videos': queryset.filter(media_type='video').count(),
        'this_month': queryset.filter(created_at__year=today.year, created_at__month=today.month).count(),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('media')])
def media_summary(request):
    queryset = scope_to_user(MediaRecord.objects.all(), request.user)
    return summary_response(request, queryset, MediaRecordFilter, summarize_media)
