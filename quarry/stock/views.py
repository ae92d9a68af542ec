from django.db.models import Sum
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from quarry.core.records import list_records, create_record, record_detail, summary_response, sum_of
from quarry.core.roles import ModuleAccess
from .filters import ProductionStockFilter, PurchaseRequestFilter
from .models import ProductionStock, PurchaseRequest
from .serializers import ProductionStockSerializer, PurchaseRequestSerializer

DETAIL_METHODS = ['GET', 'PUT', 'PATCH', 'DELETE']


# Production stock
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('stock')])
def production_stock_list_create(request):
    if request.method == 'GET':
        queryset = ProductionStock.objects.select_related('created_by')
        return list_records(request, queryset, ProductionStockSerializer, ProductionStockFilter)
    return create_record(request, ProductionStockSerializer, 'ProductionStock')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('stock')])
def production_stock_detail(request, pk):
    return record_detail(request, ProductionStock.objects.all(), pk, ProductionStockSerializer, 'ProductionStock')


def summarize_production_stock(queryset):
    by_material = queryset.values('material_type', 'unit').annotate(
        total=Sum('quantity')
    ).order_by('material_type')
    return {
        'record_count': queryset.count(),
        'total_quantity': sum_of(queryset, 'quantity'),
        'by_material': [
            {'material_type': row['material_type'], 'unit': row['unit'], 'quantity': float(row['total'] or 0)}
            for row in by_material
        ],
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('stock')])
def production_stock_summary(request):
    return summary_response(request, ProductionStock.objects.all(), ProductionStockFilter,
                            summarize_production_stock)


# Purchase requests
def _request_rows():
    return PurchaseRequest.objects.select_related('created_by', 'reviewed_by')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('stock')])
def purchase_request_list_create(request):
    if request.method == 'GET':
        return list_records(request, _request_rows(), PurchaseRequestSerializer, PurchaseRequestFilter)
    return create_record(request, PurchaseRequestSerializer, 'PurchaseRequest', reference_field='request_number')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('stock')])
def purchase_request_detail(request, pk):
    return record_detail(request, _request_rows(), pk, PurchaseRequestSerializer, 'PurchaseRequest',
                         reference_field='request_number')


def summarize_purchase_requests(queryset):
    return {
        'total': queryset.count(),
        'pending': queryset.filter(status=PurchaseRequest.STATUS_PENDING).count(),
        'approved': queryset.filter(status=PurchaseRequest.STATUS_APPROVED).count(),
        'rejected': queryset.filter(status=PurchaseRequest.STATUS_REJECTED).count(),
        'total_estimated_cost': sum_of(queryset.exclude(status=PurchaseRequest.STATUS_REJECTED), 'estimated_cost'),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('stock')])
def purchase_request_summary(request):
    return summary_response(request, _request_rows(), PurchaseRequestFilter, summarize_purchase_requests)
