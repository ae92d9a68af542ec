import logging
from datetime import datetime, timedelta

from django.db.models import Sum, Count
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from quarry.approvals.registry import APPROVAL_TYPES, get_model
from quarry.core.models import ApprovalRecord, User
from quarry.core.records import sum_of, ratio
from quarry.core.roles import ModuleAccess
from quarry.crusher.models import CrusherProduction, EBReport
from quarry.operations.models import (
    DrillingRecord, BlastingRecord, LoadingRecord, TransportRecord, AttendanceRecord,
)
from quarry.sales.models import Invoice, DispatchEntry, AccountTransaction
from quarry.stock.models import ProductionStock

logger = logging.getLogger(__name__)

DEFAULT_REPORT_DAYS = 30
TOP_LIMIT = 5


def report_period(request, default_days=DEFAULT_REPORT_DAYS):
    """
    Read date_from/date_to (YYYY-MM-DD) from the query string.

    Defaults to the last ``default_days`` days ending today, today included. Raises
    ValueError on a malformed date or an inverted range.
    """
    date_from = request.query_params.get('date_from', None)
    date_to = request.query_params.get('date_to', None)

    if not date_to:
        date_to = timezone.localdate()
    else:
        date_to = datetime.strptime(date_to, '%Y-%m-%d').date()

    if not date_from:
        date_from = date_to - timedelta(days=default_days - 1)
    else:
        date_from = datetime.strptime(date_from, '%Y-%m-%d').date()

    if date_from > date_to:
        raise ValueError('date_from must not be after date_to')
    return date_from, date_to


def _period(date_from, date_to):
    return {'from': date_from.isoformat(), 'to': date_to.isoformat()}


def _bad_period(error):
    return Response({'error': f'Invalid date range: {error}'}, status=status.HTTP_400_BAD_REQUEST)


def _pending_approvals():
    return sum(
        get_model(record_type).objects.filter(status=ApprovalRecord.STATUS_PENDING).count()
        for record_type in APPROVAL_TYPES
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('reports')])
def director_dashboard(request):
    """Site-wide counts and totals for the director's landing page"""
    today = timezone.localdate()
    eb_reports = EBReport.objects.all()
    return Response({
        'drilling_records': DrillingRecord.objects.count(),
        'blasting_records': BlastingRecord.objects.count(),
        'crusher_production_records': CrusherProduction.objects.count(),
        'total_revenue': sum_of(Invoice.objects.all(), 'total_amount'),
        'pending_approvals': _pending_approvals(),
        'active_users': User.objects.filter(is_active=True).count(),
        'today_attendance': AttendanceRecord.objects.filter(date=today).count(),
        'eb_units_consumed': sum_of(eb_reports, 'units_consumed'),
        'eb_total_cost': sum_of(eb_reports, 'total_cost'),
    })


def _contractor_stats(queryset, today):
    week_start = today - timedelta(days=6)
    return {
        'today': queryset.filter(date=today).count(),
        'last_7_days': queryset.filter(date__gte=week_start, date__lte=today).count(),
        'pending': queryset.filter(status=ApprovalRecord.STATUS_PENDING).count(),
        'approved': queryset.filter(status=ApprovalRecord.STATUS_APPROVED).count(),
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def contractor_dashboard(request):
    """Counts over the caller's own drilling, blasting and loading entries"""
    today = timezone.localdate()
    stats = {
        name: _contractor_stats(model.objects.filter(created_by=request.user), today)
        for name, model in (
            ('drilling', DrillingRecord),
            ('blasting', BlastingRecord),
            ('loading', LoadingRecord),
        )
    }
    stats['totals'] = {
        key: sum(section[key] for section in stats.values())
        for key in ('today', 'last_7_days', 'pending', 'approved')
    }
    return Response(stats)


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('reports')])
def production_report(request):
    """Production stock totals by material"""
    try:
        date_from, date_to = report_period(request)
    except ValueError as e:
        return _bad_period(e)

    stock = ProductionStock.objects.filter(stock_date__gte=date_from, stock_date__lte=date_to)
    by_material = stock.order_by().values('material_type', 'unit').annotate(
        total_quantity=Sum('quantity'),
        entries=Count('id'),
    ).order_by('-total_quantity')

    return Response({
        'period': _period(date_from, date_to),
        'summary': {
            'total_quantity': sum_of(stock, 'quantity'),
            'entry_count': stock.count(),
            'material_count': stock.values('material_type').distinct().count(),
        },
        'by_material': [
            {
                'material_type': row['material_type'],
                'unit': row['unit'],
                'total_quantity': float(row['total_quantity'] or 0),
                'entries': row['entries'],
            }
            for row in by_material
        ],
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('reports')])
def sales_report(request):
    """Dispatch totals, delivery rate and top customers/materials"""
    try:
        date_from, date_to = report_period(request)
    except ValueError as e:
        return _bad_period(e)

    dispatches = DispatchEntry.objects.filter(dispatch_date__gte=date_from, dispatch_date__lte=date_to)
    total = dispatches.count()
    delivered = dispatches.filter(delivery_status='delivered').count()
    total_quantity = sum_of(dispatches, 'quantity_dispatched')

    def top_by(field):
        rows = dispatches.exclude(**{field: ''}).order_by().values(field).annotate(
            total_quantity=Sum('quantity_dispatched'),
            dispatch_count=Count('id'),
        ).order_by('-total_quantity')[:TOP_LIMIT]
        return [
            {
                'name': row[field],
                'total_quantity': float(row['total_quantity'] or 0),
                'dispatch_count': row['dispatch_count'],
            }
            for row in rows
        ]

    return Response({
        'period': _period(date_from, date_to),
        'summary': {
            'total_dispatches': total,
            'total_quantity': total_quantity,
            'total_received': sum_of(dispatches, 'quantity_received'),
            'delivered': delivered,
            'pending': dispatches.exclude(delivery_status__in=['delivered', 'cancelled']).count(),
            'delivery_rate': ratio(delivered, total, scale=100),
            'average_per_dispatch': ratio(total_quantity, total),
        },
        'top_customers': top_by('customer_name'),
        'top_materials': top_by('material_type'),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('reports')])
def accounting_report(request):
    """Income against expense with expense reasons and payment methods"""
    try:
        date_from, date_to = report_period(request)
    except ValueError as e:
        return _bad_period(e)

    transactions = AccountTransaction.objects.filter(
        transaction_date__gte=date_from, transaction_date__lte=date_to
    )
    income = transactions.filter(transaction_type__in=AccountTransaction.INCOME_TYPES)
    expense = transactions.filter(transaction_type='expense')
    total_income = sum_of(income, 'amount')
    total_expense = sum_of(expense, 'amount')

    top_expenses = expense.order_by().values('reason').annotate(
        total=Sum('amount'), count=Count('id')
    ).order_by('-total')[:TOP_LIMIT]
    by_method = transactions.order_by().values('payment_method').annotate(
        total=Sum('amount'), count=Count('id')
    ).order_by('-total')

    return Response({
        'period': _period(date_from, date_to),
        'summary': {
            'total_income': total_income,
            'total_expense': total_expense,
            'net_balance': round(total_income - total_expense, 2),
            'transaction_count': transactions.count(),
        },
        'top_expense_reasons': [
            {'reason': row['reason'] or 'Unspecified', 'total': float(row['total'] or 0), 'count': row['count']}
            for row in top_expenses
        ],
        'payment_methods': [
            {'method': row['payment_method'] or 'unspecified', 'total': float(row['total'] or 0),
             'count': row['count']}
            for row in by_method
        ],
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('reports')])
def quarry_production_report(request):
    """Drilling, blasting, loading and transport output over a date range"""
    try:
        date_from, date_to = report_period(request)
    except ValueError as e:
        return _bad_period(e)

    def in_period(model):
        return model.objects.filter(date__gte=date_from, date__lte=date_to)

    drilling = in_period(DrillingRecord)
    blasting = in_period(BlastingRecord)
    loading = in_period(LoadingRecord)
    transport = in_period(TransportRecord)

    logger.info(f"Quarry production report {date_from} to {date_to} for {request.user.username}")
    return Response({
        'period': _period(date_from, date_to),
        'drilling': {
            'record_count': drilling.count(),
            'total_holes': int(sum_of(drilling, 'holes_drilled')),
            'total_depth': sum_of(drilling, 'total_depth'),
            'approx_production_tons': sum_of(drilling, 'approx_production_tons'),
        },
        'blasting': {
            'record_count': blasting.count(),
            'total_ed': int(sum_of(blasting, 'ed_nos')),
            'total_edet': int(sum_of(blasting, 'edet_nos')),
            'total_nonel_3m': int(sum_of(blasting, 'nonel_3m_nos')),
            'total_nonel_4m': int(sum_of(blasting, 'nonel_4m_nos')),
            'total_pg': sum_of(blasting, 'pg_nos'),
        },
        'loading': {
            'record_count': loading.count(),
            'total_hours_worked': sum_of(loading, 'hours_worked'),
        },
        'transport': {
            'total_trips': transport.count(),
            'total_quantity': sum_of(transport, 'quantity'),
            'total_distance': sum_of(transport, 'distance_km'),
        },
    })
