import logging

from django.db.models import F
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from quarry.core.records import (
    list_records, create_record, record_detail, summary_response, sum_of, ratio,
)
from quarry.core.roles import ModuleAccess, IsReviewer, scope_to_user
from quarry.core.utils import create_audit_log
from .filters import FuelRecordFilter, InventoryItemFilter, SafetyIncidentFilter
from .models import FuelRecord, InventoryItem, SafetyIncident
from .serializers import (
    FuelRecordSerializer, InventoryItemSerializer, SafetyIncidentSerializer,
    SafetyIncidentImageSerializer, SafetyStatusSerializer,
)

logger = logging.getLogger(__name__)

DETAIL_METHODS = ['GET', 'PUT', 'PATCH', 'DELETE']


# Fuel
def _fuel_rows(user):
    return scope_to_user(FuelRecord.objects.select_related('created_by', 'reviewed_by'), user)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('fuel')])
def fuel_list_create(request):
    """List fuel fills or record a new one (record number is assigned)"""
    if request.method == 'GET':
        return list_records(request, _fuel_rows(request.user), FuelRecordSerializer, FuelRecordFilter)
    return create_record(request, FuelRecordSerializer, 'FuelRecord', reference_field='record_number')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('fuel')])
def fuel_detail(request, pk):
    return record_detail(request, _fuel_rows(request.user), pk, FuelRecordSerializer, 'FuelRecord',
                         reference_field='record_number')


def summarize_fuel(queryset):
    total_liters = sum_of(queryset, 'quantity_liters')
    total_cost = sum_of(queryset, 'total_cost')
    return {
        'record_count': queryset.count(),
        'total_liters': total_liters,
        'total_cost': total_cost,
        'average_cost_per_liter': ratio(total_cost, total_liters),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('fuel')])
def fuel_summary(request):
    return summary_response(request, _fuel_rows(request.user), FuelRecordFilter, summarize_fuel)


# Inventory
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('inventory')])
def inventory_list_create(request):
    """Inventory is shared site stock, so it is not scoped to the creator"""
    if request.method == 'GET':
        queryset = InventoryItem.objects.select_related('created_by')
        return list_records(request, queryset, InventoryItemSerializer, InventoryItemFilter)
    return create_record(request, InventoryItemSerializer, 'InventoryItem', reference_field='item_code')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('inventory')])
def inventory_detail(request, pk):
    return record_detail(request, InventoryItem.objects.all(), pk, InventoryItemSerializer, 'InventoryItem',
                         reference_field='item_code')


def summarize_inventory(queryset):
    low_stock = queryset.filter(quantity__lte=F('minimum_quantity')).count()
    total = queryset.count()
    return {
        'total_items': total,
        'low_stock_items': low_stock,
        'in_stock_items': total - low_stock,
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('inventory')])
def inventory_summary(request):
    return summary_response(request, InventoryItem.objects.all(), InventoryItemFilter, summarize_inventory)


# Safety incidents
def _incident_rows(user):
    return scope_to_user(
        SafetyIncident.objects.select_related('created_by').prefetch_related('images'), user
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('safety')])
def safety_list_create(request):
    if request.method == 'GET':
        return list_records(request, _incident_rows(request.user), SafetyIncidentSerializer, SafetyIncidentFilter)
    response = create_record(request, SafetyIncidentSerializer, 'SafetyIncident')
    if response.status_code == status.HTTP_201_CREATED and response.data.get('severity') == 'Critical':
        logger.warning(f"Critical safety incident {response.data['id']} reported by {request.user.username}")
    return response


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('safety')])
def safety_detail(request, pk):
    return record_detail(request, _incident_rows(request.user), pk, SafetyIncidentSerializer, 'SafetyIncident')


@api_view(['POST'])
@permission_classes([IsAuthenticated, ModuleAccess('safety'), IsReviewer])
def safety_status_change(request, pk):
    """Move an incident forward: reported -> investigating -> resolved -> closed"""
    incident = get_object_or_404(SafetyIncident, pk=pk)
    serializer = SafetyStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    new_status = serializer.validated_data['status']
    if not incident.can_move_to(new_status):
        return Response(
            {'error': f'Cannot change status from {incident.status} to {new_status}.'},
            status=status.HTTP_400_BAD_REQUEST
        )

    old_status = incident.status
    incident.status = new_status
    update_fields = ['status', 'updated_at']
    if 'corrective_action' in serializer.validated_data:
        incident.corrective_action = serializer.validated_data['corrective_action']
        update_fields.append('corrective_action')
    incident.save(update_fields=update_fields)

    logger.info(f"Safety incident {incident.pk}: {old_status} -> {new_status} by {request.user.username}")
    create_audit_log(
        request=request,
        action='status_change',
        model_name='SafetyIncident',
        object_id=incident.pk,
        object_name=str(incident),
        changes={'status': {'old': old_status, 'new': new_status}},
    )
    return Response(SafetyIncidentSerializer(incident, context={'request': request}).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, ModuleAccess('safety')])
@parser_classes([MultiPartParser, FormParser])
def safety_image_upload(request, pk):
    """Attach an image to an incident"""
    incident = get_object_or_404(_incident_rows(request.user), pk=pk)
    serializer = SafetyIncidentImageSerializer(data=request.data, context={'request': request})
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    image = serializer.save(incident=incident, uploaded_by=request.user)
    create_audit_log(
        request=request,
        action='upload',
        model_name='SafetyIncidentImage',
        object_id=image.pk,
        object_name=str(incident),
    )
    return Response(SafetyIncidentImageSerializer(image, context={'request': request}).data,
                    status=status.HTTP_201_CREATED)


def summarize_safety(queryset):
    today = timezone.localdate()
    return {
        'total': queryset.count(),
        'critical': queryset.filter(severity='Critical').count(),
        'resolved': queryset.filter(status__in=[SafetyIncident.STATUS_RESOLVED, SafetyIncident.STATUS_CLOSED]).count(),
        'this_month': queryset.filter(date__year=today.year, date__month=today.month).count(),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('safety')])
def safety_summary(request):
    return summary_response(request, _incident_rows(request.user), SafetyIncidentFilter, summarize_safety)
