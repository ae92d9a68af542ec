"""
Shared plumbing for the form/list endpoints.

Every business module follows the same flow: a POST validates and inserts
one row, a GET filters and pages rows, and a detail endpoint reads, edits
or deletes one row. These helpers keep that flow in one place so the
per-module views only declare what differs.
"""
import logging
from decimal import Decimal

from django.core.paginator import Paginator
from django.db.models import Sum
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response

from .models import ApprovalRecord
from .utils import create_audit_log

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 15
MAX_PAGE_SIZE = 200


def _int_param(request, name, default):
    try:
        value = int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def filter_queryset(request, queryset, filterset_class):
    """Apply a django-filter FilterSet; returns (queryset, errors)"""
    if filterset_class is None:
        return queryset, None
    filterset = filterset_class(request.query_params, queryset=queryset, request=request)
    if not filterset.is_valid():
        return None, filterset.errors
    return filterset.qs, None


def paginated_response(request, queryset, serializer_class, context=None):
    page = _int_param(request, 'page', 1)
    limit = min(_int_param(request, 'limit', DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)

    paginator = Paginator(queryset, limit)
    page_obj = paginator.get_page(page)

    serializer = serializer_class(page_obj, many=True, context=context or {'request': request})
    return Response({
        'results': serializer.data,
        'count': paginator.count,
        'next': page_obj.next_page_number() if page_obj.has_next() else None,
        'previous': page_obj.previous_page_number() if page_obj.has_previous() else None,
        'page': page_obj.number,
        'page_size': limit,
        'total_pages': paginator.num_pages,
    })


def list_records(request, queryset, serializer_class, filterset_class=None):
    queryset, errors = filter_queryset(request, queryset, filterset_class)
    if errors is not None:
        return Response(errors, status=status.HTTP_400_BAD_REQUEST)
    return paginated_response(request, queryset, serializer_class)


def create_record(request, serializer_class, model_name, reference_field=None,
                  owner_field='created_by', audit_action='create', **save_kwargs):
    """Validate request.data and insert one row owned by the caller"""
    serializer = serializer_class(data=request.data, context={'request': request})
    if not serializer.is_valid():
        logger.warning(f"{model_name} rejected for {request.user.username}: {serializer.errors}")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    if owner_field:
        save_kwargs[owner_field] = request.user
    instance = serializer.save(**save_kwargs)
    reference = getattr(instance, reference_field, None) if reference_field else None
    logger.info(f"{model_name} {instance.pk} created by {request.user.username}")
    create_audit_log(
        request=request,
        action=audit_action,
        model_name=model_name,
        object_id=instance.pk,
        object_name=str(instance),
        object_reference=reference,
        changes={'fields': sorted(serializer.validated_data.keys())},
    )
    return Response(serializer_class(instance, context={'request': request}).data,
                    status=status.HTTP_201_CREATED)


def record_detail(request, queryset, pk, serializer_class, model_name, reference_field=None):
    """Retrieve, update or delete a single row"""
    instance = get_object_or_404(queryset, pk=pk)

    if request.method == 'GET':
        serializer = serializer_class(instance, context={'request': request})
        return Response(serializer.data)

    if isinstance(instance, ApprovalRecord) and not instance.is_pending:
        return Response(
            {'error': f'{model_name} has already been {instance.status} and can no longer be changed.'},
            status=status.HTTP_400_BAD_REQUEST
        )

    reference = getattr(instance, reference_field, None) if reference_field else None

    if request.method in ('PUT', 'PATCH'):
        serializer = serializer_class(
            instance,
            data=request.data,
            partial=request.method == 'PATCH',
            context={'request': request}
        )
        if serializer.is_valid():
            serializer.save()
            create_audit_log(
                request=request,
                action='update',
                model_name=model_name,
                object_id=instance.pk,
                object_name=str(instance),
                object_reference=reference,
                changes={'fields': sorted(serializer.validated_data.keys())},
            )
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    # DELETE
    object_id = instance.pk
    object_name = str(instance)
    instance.delete()
    logger.info(f"{model_name} {object_id} deleted by {request.user.username}")
    create_audit_log(
        request=request,
        action='delete',
        model_name=model_name,
        object_id=object_id,
        object_name=object_name,
        object_reference=reference,
    )
    return Response(status=status.HTTP_204_NO_CONTENT)


def summary_response(request, queryset, filterset_class, summarize):
    """Run summarize() over the same filtered rows the list endpoint returns"""
    queryset, errors = filter_queryset(request, queryset, filterset_class)
    if errors is not None:
        return Response(errors, status=status.HTTP_400_BAD_REQUEST)
    return Response(summarize(queryset))


def sum_of(queryset, field):
    """Sum of a numeric column as a float; 0 for an empty queryset"""
    total = queryset.aggregate(total=Sum(field))['total']
    return float(total or Decimal('0'))


def ratio(numerator, denominator, scale=1):
    return round(float(numerator) / float(denominator) * scale, 2) if denominator else 0.0
