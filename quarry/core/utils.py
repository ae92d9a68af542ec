"""Utility functions for audit logging and notifications"""
import logging
import re

from django.db import IntegrityError, transaction
from django.db.models.functions import Length
from django.utils import timezone

from .models import AuditLog, Notification

logger = logging.getLogger(__name__)


def get_client_ip(request):
    """Extract client IP address from request"""
    if not request or not hasattr(request, 'META'):
        return None
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def create_audit_log(request=None, action=None, model_name=None, object_id=None,
                     changes=None, user=None, object_name=None, object_reference=None):
    """
    Create an audit log entry

    Args:
        request: Django request object (for user and IP) - optional if user is provided
        action: Action type (create, update, delete, approve, reject, etc.)
        model_name: Name of the model being acted upon
        object_id: ID of the object (as string)
        changes: Dictionary of changes made
        user: Optional user override (defaults to request.user if request provided)
        object_name: Human-readable name of the object
        object_reference: Reference identifier (e.g., invoice number, dispatch number)
    """
    try:
        audit_user = None
        if user:
            audit_user = user
        elif request and hasattr(request, 'user'):
            audit_user = request.user

        ip_address = get_client_ip(request) if request else None

        if not action or not model_name or not object_id:
            logger.warning(
                f"Audit log creation skipped: missing required fields "
                f"(action={action}, model_name={model_name}, object_id={object_id})"
            )
            return None

        return AuditLog.objects.create(
            user=audit_user if audit_user and audit_user.is_authenticated else None,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            object_name=object_name,
            object_reference=object_reference,
            changes=changes or {},
            ip_address=ip_address
        )
    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log: {str(e)}")
        return None


def notify(user, title, message, type='general', metadata=None):
    """Create a notification for a user; silently skipped when user is None"""
    if user is None:
        return None
    return Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        metadata=metadata or {},
    )


SEQUENCE_ATTEMPTS = 5


def next_sequence_number(model, field, prefix, width=3):
    """
    Next number in a PREFIX-NNN series, e.g. INV-2026-001.

    Only the highest existing numeric value with the same prefix is read;
    non-numeric suffixes are ignored. Longer numbers sort above shorter ones
    so the series keeps counting past the padding width.
    """
    latest = (
        model.objects
        .filter(**{f'{field}__regex': rf'^{re.escape(prefix)}[0-9]+$'})
        .annotate(number_length=Length(field))
        .order_by('-number_length', f'-{field}')
        .values_list(field, flat=True)
        .first()
    )
    highest = int(latest[len(prefix):]) if latest else 0
    return f"{prefix}{str(highest + 1).zfill(width)}"


def save_with_sequence_number(instance, field, prefix, save, width=3, attempts=SEQUENCE_ATTEMPTS):
    """
    Assign the next number in the series to `field` and call `save`.

    Two concurrent inserts can read the same highest number; the loser hits
    the unique constraint, so the number is recomputed and the insert retried.
    """
    model = type(instance)
    for attempt in range(1, attempts + 1):
        setattr(instance, field, next_sequence_number(model, field, prefix, width))
        try:
            with transaction.atomic():
                save()
            return
        except IntegrityError:
            if attempt == attempts:
                raise
            logger.warning(f"{model.__name__} {field} {getattr(instance, field)} already taken, retrying")


def current_year_prefix(code):
    return f"{code}-{timezone.now().year}-"
