"""Atomic claims on bounded resources.

A ledger key names a bounded resource (the registration slots of an event, one
participant's allowance of a merch item, ...). Each key has a counter row with the
units accepted across all claimants, and one row per claimant with the units it
currently holds. Both rows are changed with conditional ``UPDATE`` statements whose
``WHERE`` clause carries the headroom check, so the decision and the write are a
single statement at the database. Two requests racing for the last unit cannot both
see a matching row.
"""

import typing as t
from enum import StrEnum
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone
from pydantic import BaseModel

from common.utils import get_or_create_with_race_protection
from events.models import CapacityClaim, CapacityCounter

logger = structlog.get_logger(__name__)


class ClaimRejection(StrEnum):
    CEILING = "ceiling"
    CLAIMANT_CEILING = "claimant_ceiling"


class ClaimResult(BaseModel):
    accepted: bool
    reason: ClaimRejection | None = None
    claimant_units: int
    total_units: int


class _ClaimRejected(Exception):
    def __init__(self, reason: ClaimRejection) -> None:
        self.reason = reason
        super().__init__(reason)


def _counter(key: str) -> CapacityCounter:
    counter, _ = get_or_create_with_race_protection(CapacityCounter, Q(key=key), {"key": key})
    return counter


def _claim(counter: CapacityCounter, claimant: UUID) -> CapacityClaim:
    claim, _ = get_or_create_with_race_protection(
        CapacityClaim, Q(counter=counter, claimant=claimant), {"counter": counter, "claimant": claimant}
    )
    return claim


def try_claim(
    key: str,
    claimant: UUID,
    units: int = 1,
    *,
    ceiling: int | None = None,
    claimant_ceiling: int | None = None,
) -> ClaimResult:
    """Try to take ``units`` under ``key`` for ``claimant``.

    Args:
        key: The ledger key of the bounded resource.
        claimant: Who takes the units, usually a user id.
        units: How many units to take.
        ceiling: Upper bound for the units held under ``key`` by everybody. None means unbounded.
        claimant_ceiling: Upper bound for the units held under ``key`` by ``claimant``.

    Returns:
        A ClaimResult. When the claim is rejected nothing is written.
    """
    if units < 1:
        raise ValueError("A claim must request at least one unit.")
    try:
        with transaction.atomic():
            counter = _counter(key)
            claim = _claim(counter, claimant)
            now = timezone.now()

            claim_qs = CapacityClaim.objects.filter(pk=claim.pk)
            if claimant_ceiling is not None:
                claim_qs = claim_qs.filter(units__lte=claimant_ceiling - units)
            if not claim_qs.update(units=F("units") + units, updated_at=now):
                raise _ClaimRejected(ClaimRejection.CLAIMANT_CEILING)

            counter_qs = CapacityCounter.objects.filter(pk=counter.pk)
            if ceiling is not None:
                counter_qs = counter_qs.filter(claimed__lte=ceiling - units)
            if not counter_qs.update(claimed=F("claimed") + units, updated_at=now):
                # leaves the savepoint, undoing the claimant increment above
                raise _ClaimRejected(ClaimRejection.CEILING)
    except _ClaimRejected as rejected:
        logger.info("capacity_claim_rejected", key=key, claimant=str(claimant), units=units, reason=rejected.reason)
        return ClaimResult(accepted=False, reason=rejected.reason, **_holdings(key, claimant))

    logger.debug("capacity_claim_accepted", key=key, claimant=str(claimant), units=units)
    return ClaimResult(accepted=True, **_holdings(key, claimant))


def release(key: str, claimant: UUID, units: int) -> bool:
    """Give back ``units`` previously taken by ``claimant`` under ``key``.

    Returns:
        False if the claimant does not hold that many units, in which case nothing changes.
    """
    with transaction.atomic():
        now = timezone.now()
        released = CapacityClaim.objects.filter(counter__key=key, claimant=claimant, units__gte=units).update(
            units=F("units") - units, updated_at=now
        )
        if not released:
            logger.warning("capacity_release_mismatch", key=key, claimant=str(claimant), units=units)
            return False
        CapacityCounter.objects.filter(key=key, claimed__gte=units).update(claimed=F("claimed") - units, updated_at=now)
    return True


def drop_keys(*prefixes: str) -> int:
    """Delete every counter, and its claims, whose key starts with one of ``prefixes``.

    Returns:
        The number of counters removed.
    """
    if not prefixes:
        return 0
    query = Q()
    for prefix in prefixes:
        query |= Q(key__startswith=prefix)
    dropped = CapacityCounter.objects.filter(query).count()
    CapacityCounter.objects.filter(query).delete()
    return dropped


def _holdings(key: str, claimant: UUID) -> dict[str, t.Any]:
    return {"claimant_units": units_held(key, claimant), "total_units": units_claimed(key)}


def units_claimed(key: str) -> int:
    """Units held under ``key`` by all claimants."""
    return CapacityCounter.objects.filter(key=key).values_list("claimed", flat=True).first() or 0


def units_held(key: str, claimant: UUID) -> int:
    """Units held under ``key`` by ``claimant``."""
    return (
        CapacityClaim.objects.filter(counter__key=key, claimant=claimant).values_list("units", flat=True).first() or 0
    )
