import logging

from django.db import transaction

from quarry.core.models import ApprovalRecord
from quarry.core.utils import create_audit_log, notify
from .registry import get_model, type_label

logger = logging.getLogger(__name__)

DECISIONS = (ApprovalRecord.STATUS_APPROVED, ApprovalRecord.STATUS_REJECTED)


class ApprovalError(Exception):
    """Raised when a decision cannot be applied"""


def decide(record_type, pk, decision, reviewer, request=None):
    """
    Apply a one-shot approve/reject decision to a pending record.

    Stamps the reviewer, writes an audit entry and notifies the submitter.
    Raises ApprovalError if the decision is invalid or the record has
    already been decided.
    """
    if decision not in DECISIONS:
        raise ApprovalError(f"Decision must be one of: {', '.join(DECISIONS)}")

    model = get_model(record_type)
    with transaction.atomic():
        record = model.objects.select_for_update().get(pk=pk)
        if not record.is_pending:
            raise ApprovalError(f"{type_label(record_type)} record {pk} has already been {record.status}.")
        record.mark_reviewed(decision, reviewer)

    logger.info(f"{type_label(record_type)} {pk} {decision} by {reviewer.username}")
    create_audit_log(
        request=request,
        user=reviewer,
        action='approve' if decision == ApprovalRecord.STATUS_APPROVED else 'reject',
        model_name=model.__name__,
        object_id=record.pk,
        object_name=str(record),
        changes={'status': {'old': ApprovalRecord.STATUS_PENDING, 'new': decision}},
    )
    if record.created_by_id and record.created_by_id != reviewer.pk:
        notify(
            record.created_by,
            title=f'{type_label(record_type)} record {decision}',
            message=f'Your {type_label(record_type).lower()} record "{record}" was {decision} '
                    f'by {reviewer.get_display_name()}.',
            type='approval',
            metadata={'record_type': record_type, 'record_id': record.pk, 'decision': decision},
        )
    return record
