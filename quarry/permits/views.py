from datetime import timedelta

from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from quarry.core.records import list_records, create_record, record_detail, summary_response, sum_of
from quarry.core.roles import ModuleAccess
from .filters import PermitFilter
from .models import Permit
from .serializers import PermitSerializer

EXPIRY_WARNING_DAYS = 30


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('permits')])
def permit_list_create(request):
    if request.method == 'GET':
        return list_records(request, Permit.objects.all(), PermitSerializer, PermitFilter)
    return create_record(request, PermitSerializer, 'Permit', reference_field='company_name')


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, ModuleAccess('permits')])
def permit_detail(request, pk):
    return record_detail(request, Permit.objects.all(), pk, PermitSerializer, 'Permit',
                         reference_field='company_name')


def summarize_permits(queryset):
    today = timezone.localdate()
    return {
        'total': queryset.count(),
        'active': queryset.filter(status='active').count(),
        'expired': queryset.filter(expiry_date__lt=today).count(),
        'expiring_soon': queryset.filter(
            expiry_date__gte=today, expiry_date__lte=today + timedelta(days=EXPIRY_WARNING_DAYS)
        ).count(),
        'total_quantity_mt': sum_of(queryset, 'quantity_in_mt'),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('permits')])
def permit_summary(request):
    return summary_response(request, Permit.objects.all(), PermitFilter, summarize_permits)
