import logging

from django.db import transaction
from django.db.models import Count
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from quarry.core.models import Setting
from quarry.core.records import (
    list_records, create_record, record_detail, summary_response, sum_of,
)
from quarry.core.roles import ModuleAccess, scope_to_user
from quarry.core.utils import create_audit_log
from .filters import InvoiceFilter, DispatchEntryFilter, AccountTransactionFilter
from .models import Invoice, InvoicePayment, DispatchEntry, AccountTransaction
from .receipts import ReceiptError, render_invoice_receipt, DEFAULT_PAPER_WIDTH
from .serializers import (
    InvoiceSerializer, InvoiceListSerializer, InvoicePaymentSerializer, PaymentInputSerializer,
    DispatchEntrySerializer, AccountTransactionSerializer,
)

logger = logging.getLogger(__name__)

DETAIL_METHODS = ['GET', 'PUT', 'PATCH', 'DELETE']


# Invoices
def _invoice_rows(user):
    return scope_to_user(
        Invoice.objects.select_related('customer', 'created_by').prefetch_related('payments'), user
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('sales')])
def invoice_list_create(request):
    """List invoices or raise a new one (number, totals and status are derived)"""
    if request.method == 'GET':
        return list_records(request, _invoice_rows(request.user), InvoiceListSerializer, InvoiceFilter)
    with transaction.atomic():
        return create_record(request, InvoiceSerializer, 'Invoice', reference_field='invoice_number')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('sales')])
def invoice_detail(request, pk):
    return record_detail(request, _invoice_rows(request.user), pk, InvoiceSerializer, 'Invoice',
                         reference_field='invoice_number')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('sales')])
def invoice_payments(request, pk):
    """
    List payments on an invoice, or record a new one.

    The amount must be positive and may not exceed the outstanding balance.
    """
    invoice = get_object_or_404(_invoice_rows(request.user), pk=pk)

    if request.method == 'GET':
        return Response(InvoicePaymentSerializer(invoice.payments.all(), many=True).data)

    serializer = PaymentInputSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data
    amount = data['amount']

    with transaction.atomic():
        invoice = Invoice.objects.select_for_update().get(pk=invoice.pk)
        balance = invoice.balance
        if amount <= 0:
            return Response({'error': 'Payment amount must be greater than zero.'},
                            status=status.HTTP_400_BAD_REQUEST)
        if amount > balance:
            return Response(
                {'error': f'Payment of {amount} exceeds the outstanding balance of {balance}.'},
                status=status.HTTP_400_BAD_REQUEST
            )

        payment = InvoicePayment.objects.create(
            invoice=invoice,
            amount=amount,
            payment_mode=data.get('payment_mode', ''),
            payment_date=data.get('payment_date') or timezone.localdate(),
            notes=data.get('notes', ''),
            recorded_by=request.user,
        )
        old_status = invoice.status
        invoice.amount_paid += amount
        if data.get('payment_mode'):
            invoice.payment_mode = data['payment_mode']
        invoice.payment_date = payment.payment_date
        invoice.save()

    logger.info(f"Payment of {amount} recorded on {invoice.invoice_number} by {request.user.username}")
    create_audit_log(
        request=request,
        action='payment_add',
        model_name='Invoice',
        object_id=invoice.pk,
        object_name=invoice.invoice_number,
        object_reference=invoice.invoice_number,
        changes={
            'amount': str(amount),
            'amount_paid': str(invoice.amount_paid),
            'status': {'old': old_status, 'new': invoice.status},
        },
    )
    return Response(InvoiceSerializer(invoice, context={'request': request}).data,
                    status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('sales')])
def invoice_receipt(request, pk):
    """Thermal printer receipt as text/plain (?width=80|58, ?show_company=false)"""
    invoice = get_object_or_404(_invoice_rows(request.user), pk=pk)
    show_company = request.query_params.get('show_company', 'true').lower() != 'false'
    company_name = Setting.get_value('company_name') if show_company else None
    try:
        text = render_invoice_receipt(
            invoice,
            paper_width=request.query_params.get('width', DEFAULT_PAPER_WIDTH),
            company_name=company_name,
        )
    except ReceiptError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    return HttpResponse(text, content_type='text/plain; charset=utf-8')


def summarize_invoices(queryset):
    total_amount = sum_of(queryset, 'total_amount')
    total_paid = sum_of(queryset, 'amount_paid')
    counts = {row['status']: row['count'] for row in queryset.order_by().values('status').annotate(count=Count('id'))}
    return {
        'invoice_count': queryset.count(),
        'total_amount': total_amount,
        'total_paid': total_paid,
        'total_balance': round(total_amount - total_paid, 2),
        'paid_count': counts.get('paid', 0),
        'partial_count': counts.get('partial', 0),
        'unpaid_count': counts.get('unpaid', 0),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('sales')])
def invoice_summary(request):
    return summary_response(request, _invoice_rows(request.user), InvoiceFilter, summarize_invoices)


# Dispatch list
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('dispatch')])
def dispatch_list_create(request):
    if request.method == 'GET':
        queryset = DispatchEntry.objects.select_related('created_by')
        return list_records(request, queryset, DispatchEntrySerializer, DispatchEntryFilter)
    return create_record(request, DispatchEntrySerializer, 'DispatchEntry', reference_field='dispatch_number')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('dispatch')])
def dispatch_detail(request, pk):
    return record_detail(request, DispatchEntry.objects.all(), pk, DispatchEntrySerializer, 'DispatchEntry',
                         reference_field='dispatch_number')


def summarize_dispatch(queryset):
    return {
        'record_count': queryset.count(),
        'total_dispatched': sum_of(queryset, 'quantity_dispatched'),
        'total_received': sum_of(queryset, 'quantity_received'),
        'total_balance': sum_of(queryset, 'balance_quantity'),
        'delivered_count': queryset.filter(delivery_status='delivered').count(),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('dispatch')])
def dispatch_summary(request):
    return summary_response(request, DispatchEntry.objects.all(), DispatchEntryFilter, summarize_dispatch)


# Accounts
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, ModuleAccess('accounts')])
def account_list_create(request):
    if request.method == 'GET':
        queryset = AccountTransaction.objects.select_related('created_by')
        return list_records(request, queryset, AccountTransactionSerializer, AccountTransactionFilter)
    return create_record(request, AccountTransactionSerializer, 'AccountTransaction',
                         reference_field='invoice_number')


@api_view(DETAIL_METHODS)
@permission_classes([IsAuthenticated, ModuleAccess('accounts')])
def account_detail(request, pk):
    return record_detail(request, AccountTransaction.objects.all(), pk, AccountTransactionSerializer,
                         'AccountTransaction', reference_field='invoice_number')


def summarize_accounts(queryset):
    income = queryset.filter(transaction_type__in=AccountTransaction.INCOME_TYPES)
    expense = queryset.filter(transaction_type='expense')
    total_income = sum_of(income, 'amount')
    total_expense = sum_of(expense, 'amount')
    return {
        'record_count': queryset.count(),
        'total_amount': sum_of(queryset, 'amount'),
        'total_paid': sum_of(queryset, 'amount_given'),
        'total_balance': sum_of(queryset, 'balance'),
        'total_income': total_income,
        'total_expense': total_expense,
        'net_balance': round(total_income - total_expense, 2),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('accounts')])
def account_summary(request):
    return summary_response(request, AccountTransaction.objects.all(), AccountTransactionFilter,
                            summarize_accounts)
