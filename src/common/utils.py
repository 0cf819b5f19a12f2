import secrets
import time
import typing as t

from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction

T = t.TypeVar("T", bound=models.Model)

_BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def get_or_create_with_race_protection(
    model: type[T],
    lookup_filter: models.Q,
    defaults: dict[str, t.Any],
) -> tuple[T, bool]:
    """Get or create a model instance with protection against race conditions.

    Attempts to retrieve an instance matching the lookup filter. If not found,
    creates one using the defaults. Handles IntegrityError from race conditions
    by retrying the lookup. The create runs in its own savepoint, so the helper is
    safe to call inside an outer ``transaction.atomic`` block. A uniqueness
    ValidationError from ``full_clean`` is handled like an IntegrityError.

    Args:
        model: The Django model class
        lookup_filter: Q object for filtering the lookup
        defaults: Dictionary of field values for creating the instance

    Returns:
        Tuple of (instance, created) where created is True if the instance was created
    """
    manager: models.Manager[T] = getattr(model, "objects")
    instance = manager.filter(lookup_filter).first()
    if instance:
        return instance, False

    try:
        with transaction.atomic():
            return manager.create(**defaults), True
    except (IntegrityError, ValidationError):
        # Race condition: another request created it between our check and create
        instance = manager.filter(lookup_filter).first()
        if not instance:
            raise
        return instance, False


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if number < 0:
        raise ValueError("Only non-negative integers can be encoded.")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_reference(prefix: str, random_bytes: int) -> str:
    """Generate a human-readable reference such as ``FEL-m3x1k2ab-9F3C``.

    The middle part is the current time in milliseconds in base 36, the suffix is
    ``random_bytes`` of randomness rendered as uppercase hex.
    """
    timestamp = to_base36(time.time_ns() // 1_000_000)
    return f"{prefix}-{timestamp}-{secrets.token_hex(random_bytes).upper()}"
