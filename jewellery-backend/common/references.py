# jewellery-backend/common/references.py
import logging
from typing import Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 4


def reference_prefix(prefix: str, year: Optional[int] = None) -> str:
    year = year or timezone.now().year
    return f"{prefix.upper()}-{year}-"


def next_reference(queryset, field: str, prefix: str, year: Optional[int] = None) -> str:
    """
    Next `<PREFIX>-<year>-<seq>` value for `field` across `queryset`.

    The sequence is max(existing) + 1 for that prefix/year, not a row count, so
    gaps left by deleted or hand-entered rows are never reused.
    """
    head = reference_prefix(prefix, year)
    max_seq = 0
    for value in queryset.filter(**{f"{field}__startswith": head}).values_list(field, flat=True):
        tail = (value or "").rsplit("-", 1)[-1]
        if tail.isdigit():
            max_seq = max(max_seq, int(tail))
    return f"{head}{max_seq + 1:0{SEQUENCE_WIDTH}d}"


def save_with_reference(instance, field: str, prefix: str, year: Optional[int] = None):
    """
    Assign the next reference and insert `instance`.

    Two writers can read the same max sequence; the unique constraint on
    `field` rejects the loser, which re-reads and retries inside a savepoint.
    """
    model = type(instance)
    attempts = int(getattr(settings, "REFERENCE_RETRY_ATTEMPTS", 5))
    for attempt in range(1, attempts + 1):
        value = next_reference(model._default_manager.all(), field, prefix, year)
        setattr(instance, field, value)
        try:
            with transaction.atomic():
                instance.save(force_insert=True)
            return instance
        except IntegrityError:
            if not model._default_manager.filter(**{field: value}).exists():
                raise
            logger.warning("Reference %s already taken (attempt %s/%s)", value, attempt, attempts)
    raise IntegrityError(f"Could not allocate a unique {field} for prefix {prefix}")
