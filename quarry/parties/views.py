from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from quarry.core.records import list_records, create_record, record_detail, sum_of
from quarry.core.roles import ModuleAccess
from quarry.sales.serializers import InvoiceListSerializer
from .filters import CustomerFilter
from .models import Customer
from .serializers import CustomerSerializer


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('customers')])
def customer_list_create(request):
    """List customers (?q= searches name, contact, email, phone, city, GSTIN) or add one"""
    if request.method == 'GET':
        return list_records(request, Customer.objects.all(), CustomerSerializer, CustomerFilter)
    return create_record(request, CustomerSerializer, 'Customer', reference_field='company_name')


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, ModuleAccess('customers')])
def customer_detail(request, pk):
    return record_detail(request, Customer.objects.all(), pk, CustomerSerializer, 'Customer',
                         reference_field='company_name')


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('customers')])
def customer_statement(request, pk):
    """Customer's invoices with billed, paid and outstanding totals"""
    customer = get_object_or_404(Customer, pk=pk)
    invoices = customer.invoices.order_by('-invoice_date', '-created_at')

    total_billed = sum_of(invoices, 'total_amount')
    total_paid = sum_of(invoices, 'amount_paid')
    outstanding = round(total_billed - total_paid, 2)
    return Response({
        'customer': CustomerSerializer(customer).data,
        'invoices': InvoiceListSerializer(invoices, many=True).data,
        'summary': {
            'invoice_count': invoices.count(),
            'total_billed': total_billed,
            'total_paid': total_paid,
            'outstanding_balance': outstanding,
            'credit_limit': float(customer.credit_limit),
            'over_credit_limit': bool(customer.credit_limit) and outstanding > float(customer.credit_limit),
        },
    })
