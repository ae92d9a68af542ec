import logging

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from quarry.core.records import (
    list_records, create_record, record_detail, summary_response, sum_of, ratio,
)
from quarry.core.roles import ModuleAccess, GROUP_FOR_ROLE, DIRECTOR, scope_to_user
from quarry.core.utils import notify
from .filters import CrusherProductionFilter, EBReportFilter
from .models import CrusherProduction, EBReport, PF_WARNING_THRESHOLD
from .serializers import CrusherProductionSerializer, EBReportSerializer

User = get_user_model()
logger = logging.getLogger(__name__)

DETAIL_METHODS = ['GET', 'PUT', 'PATCH', 'DELETE']


# Crusher production
def _production_rows(user):
    return scope_to_user(CrusherProduction.objects.select_related('created_by'), user)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('crusher_production')])
def production_list_create(request):
    if request.method == 'GET':
        return list_records(request, _production_rows(request.user), CrusherProductionSerializer,
                            CrusherProductionFilter)
    return create_record(request, CrusherProductionSerializer, 'CrusherProduction')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('crusher_production')])
def production_detail(request, pk):
    return record_detail(request, _production_rows(request.user), pk, CrusherProductionSerializer,
                         'CrusherProduction')


def summarize_production(queryset):
    total_input = sum_of(queryset, 'material_input')
    total_output = sum_of(queryset, 'total_output')
    return {
        'record_count': queryset.count(),
        'total_input': total_input,
        'total_output': total_output,
        'total_hours': sum_of(queryset, 'machine_working_hours'),
        'total_downtime': sum_of(queryset, 'machine_downtime'),
        'average_efficiency': ratio(total_output, total_input, scale=100),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('crusher_production')])
def production_summary(request):
    return summary_response(request, _production_rows(request.user), CrusherProductionFilter,
                            summarize_production)


# EB reports
def _eb_rows(user):
    return scope_to_user(EBReport.objects.select_related('created_by'), user)


def warn_high_power_factor(report, submitter):
    """Notify the submitter and the directors about PF readings above the threshold"""
    flagged = report.high_power_factors()
    if not flagged:
        return 0

    recipients = {submitter.pk: submitter}
    for director in User.objects.filter(groups__name=GROUP_FOR_ROLE[DIRECTOR], is_active=True):
        recipients.setdefault(director.pk, director)

    sent = 0
    for reading_type, pf in flagged:
        logger.warning(f"EB report {report.pk}: {reading_type} PF {pf} exceeds {PF_WARNING_THRESHOLD}")
        for user in recipients.values():
            notify(
                user,
                title='High Power Factor Warning',
                message=f'{reading_type.capitalize()} PF ({pf}) exceeds {PF_WARNING_THRESHOLD}',
                type='pf_warning',
                metadata={
                    'pf_value': float(pf),
                    'reading_type': reading_type,
                    'report_id': report.pk,
                    'report_date': report.report_date.isoformat(),
                },
            )
            sent += 1
    return sent


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('eb_reports')])
def eb_list_create(request):
    """List EB reports or file a new one; high PF readings raise notifications"""
    if request.method == 'GET':
        return list_records(request, _eb_rows(request.user), EBReportSerializer, EBReportFilter)

    response = create_record(request, EBReportSerializer, 'EBReport')
    if response.status_code == status.HTTP_201_CREATED:
        report = EBReport.objects.get(pk=response.data['id'])
        response.data['pf_warnings'] = warn_high_power_factor(report, request.user)
    return response


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('eb_reports')])
def eb_detail(request, pk):
    return record_detail(request, _eb_rows(request.user), pk, EBReportSerializer, 'EBReport')


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('eb_reports')])
def eb_latest_reading(request):
    """Last report's ending reading, used to pre-fill the next starting reading"""
    latest = EBReport.objects.order_by('-report_date', '-created_at').first()
    if latest is None:
        return Response({'report_date': None, 'ending_reading': None})
    return Response({
        'report_id': latest.pk,
        'report_date': latest.report_date,
        'ending_reading': latest.ending_reading,
    })


def summarize_eb(queryset):
    total_units = sum_of(queryset, 'units_consumed')
    total_cost = sum_of(queryset, 'total_cost')
    return {
        'report_count': queryset.count(),
        'total_units': total_units,
        'total_cost': total_cost,
        'average_cost_per_unit': ratio(total_cost, total_units),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('eb_reports')])
def eb_summary(request):
    return summary_response(request, _eb_rows(request.user), EBReportFilter, summarize_eb)
