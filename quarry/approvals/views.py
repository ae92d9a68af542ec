import heapq
import itertools
import logging

from django.http import Http404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from quarry.core.models import ApprovalRecord
from quarry.core.records import paginated_response
from quarry.core.roles import ModuleAccess, IsReviewer
from .registry import APPROVAL_TYPES, UnknownRecordType, get_model, date_field, type_label
from .serializers import ApprovalItemSerializer, DecisionSerializer
from .services import ApprovalError, decide

logger = logging.getLogger(__name__)

STATUS_VALUES = [value for value, _ in ApprovalRecord.STATUS_CHOICES]


def _queue_item(record_type, record):
    return {
        'record_type': record_type,
        'record_type_label': type_label(record_type),
        'record_id': record.pk,
        'reference': str(record),
        'date': getattr(record, date_field(record_type)),
        'status': record.status,
        'submitted_by': record.created_by.username if record.created_by else None,
        'submitted_at': record.created_at,
        'reviewed_by': record.reviewed_by.username if record.reviewed_by else None,
        'reviewed_at': record.reviewed_at,
    }


class ApprovalQueue:
    """
    Rows from every approval-tracked table, newest submission first.

    Behaves like a queryset for Paginator: count() sums per-table counts and
    slicing reads at most ``stop`` rows from each table before merging.
    """

    def __init__(self, record_types, status_value=None):
        self.querysets = []
        for record_type in record_types:
            queryset = get_model(record_type).objects.select_related('created_by', 'reviewed_by')
            if status_value:
                queryset = queryset.filter(status=status_value)
            self.querysets.append((record_type, queryset.order_by('-created_at', '-pk')))

    def count(self):
        return sum(queryset.count() for _, queryset in self.querysets)

    def __len__(self):
        return self.count()

    def __getitem__(self, index):
        if not isinstance(index, slice) or index.step is not None:
            raise TypeError('ApprovalQueue supports plain slices only')
        start, stop = index.start or 0, index.stop
        if stop is None:
            stop = self.count()
        if stop <= start:
            return []
        streams = [
            [(record.created_at, record.pk, record_type, record) for record in queryset[:stop]]
            for record_type, queryset in self.querysets
        ]
        merged = heapq.merge(*streams, key=lambda row: row[:2], reverse=True)
        return [_queue_item(record_type, record)
                for _, _, record_type, record in itertools.islice(merged, start, stop)]


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('approvals'), IsReviewer])
def approval_list(request):
    """
    List approval-tracked records across modules.

    Query params:
        status: pending, approved or rejected (all when omitted)
        record_type: one of the registered record types (all when omitted)
    """
    status_value = request.query_params.get('status') or None
    if status_value and status_value not in STATUS_VALUES:
        return Response({'status': [f'Must be one of: {", ".join(STATUS_VALUES)}.']},
                        status=status.HTTP_400_BAD_REQUEST)

    record_type = request.query_params.get('record_type') or None
    if record_type and record_type not in APPROVAL_TYPES:
        return Response({'record_type': [f'Must be one of: {", ".join(APPROVAL_TYPES)}.']},
                        status=status.HTTP_400_BAD_REQUEST)

    record_types = [record_type] if record_type else list(APPROVAL_TYPES)
    return paginated_response(request, ApprovalQueue(record_types, status_value), ApprovalItemSerializer)


@api_view(['GET'])
@permission_classes([IsAuthenticated, ModuleAccess('approvals'), IsReviewer])
def approval_summary(request):
    """Pending counts per record type"""
    by_type = {
        record_type: get_model(record_type).objects.filter(status=ApprovalRecord.STATUS_PENDING).count()
        for record_type in APPROVAL_TYPES
    }
    return Response({'total_pending': sum(by_type.values()), 'by_type': by_type})


@api_view(['POST'])
@permission_classes([IsAuthenticated, ModuleAccess('approvals'), IsReviewer])
def approval_decide(request, record_type, pk):
    """Approve or reject one pending record: {"decision": "approved"|"rejected"}"""
    serializer = DecisionSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        model = get_model(record_type)
    except UnknownRecordType:
        raise Http404(f'Unknown record type: {record_type}')

    try:
        record = decide(record_type, pk, serializer.validated_data['decision'], request.user, request=request)
    except model.DoesNotExist:
        raise Http404(f'{type_label(record_type)} record {pk} not found')
    except ApprovalError as e:
        logger.warning(f"Approval rejected for {request.user.username}: {e}")
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(_queue_item(record_type, record))
