"""Tests for the capacity ledger."""

import uuid

import pytest

from events.models import CapacityClaim, CapacityCounter
from events.service import capacity_ledger
from events.service.capacity_ledger import ClaimRejection

pytestmark = pytest.mark.django_db

KEY = "registrations:test"


def test_claims_are_accepted_up_to_the_ceiling() -> None:
    claimants = [uuid.uuid4() for _ in range(5)]

    results = [capacity_ledger.try_claim(KEY, claimant, ceiling=3) for claimant in claimants]

    assert [r.accepted for r in results] == [True, True, True, False, False]
    assert results[3].reason == ClaimRejection.CEILING
    assert capacity_ledger.units_claimed(KEY) == 3


def test_rejected_claim_leaves_no_units_behind() -> None:
    first, second = uuid.uuid4(), uuid.uuid4()
    capacity_ledger.try_claim(KEY, first, ceiling=1)

    result = capacity_ledger.try_claim(KEY, second, ceiling=1)

    assert not result.accepted
    assert result.claimant_units == 0
    assert result.total_units == 1
    assert capacity_ledger.units_held(KEY, second) == 0


def test_claimant_ceiling_is_enforced_per_claimant() -> None:
    claimant, other = uuid.uuid4(), uuid.uuid4()

    assert capacity_ledger.try_claim(KEY, claimant, 2, claimant_ceiling=3).accepted
    rejected = capacity_ledger.try_claim(KEY, claimant, 2, claimant_ceiling=3)
    assert not rejected.accepted
    assert rejected.reason == ClaimRejection.CLAIMANT_CEILING
    assert rejected.claimant_units == 2

    assert capacity_ledger.try_claim(KEY, claimant, 1, claimant_ceiling=3).accepted
    assert capacity_ledger.try_claim(KEY, other, 3, claimant_ceiling=3).accepted
    assert capacity_ledger.units_claimed(KEY) == 6


def test_claimant_ceiling_rejection_does_not_touch_the_counter() -> None:
    claimant = uuid.uuid4()
    capacity_ledger.try_claim(KEY, claimant, claimant_ceiling=1)

    capacity_ledger.try_claim(KEY, claimant, claimant_ceiling=1)

    assert CapacityCounter.objects.get(key=KEY).claimed == 1


def test_ceiling_rejection_rolls_back_claimant_increment() -> None:
    """The claimant row is bumped first; a full counter must undo that bump."""
    holder, latecomer = uuid.uuid4(), uuid.uuid4()
    capacity_ledger.try_claim(KEY, holder, ceiling=1, claimant_ceiling=1)

    result = capacity_ledger.try_claim(KEY, latecomer, ceiling=1, claimant_ceiling=1)

    assert result.reason == ClaimRejection.CEILING
    assert capacity_ledger.units_held(KEY, latecomer) == 0
    assert CapacityClaim.objects.filter(counter__key=KEY, units__gt=0).count() == 1


def test_unbounded_key_accepts_everything() -> None:
    for _ in range(10):
        assert capacity_ledger.try_claim(KEY, uuid.uuid4(), 5).accepted
    assert capacity_ledger.units_claimed(KEY) == 50


def test_release_returns_units() -> None:
    claimant = uuid.uuid4()
    capacity_ledger.try_claim(KEY, claimant, 2, ceiling=2)

    assert capacity_ledger.release(KEY, claimant, 2)

    assert capacity_ledger.units_claimed(KEY) == 0
    assert capacity_ledger.try_claim(KEY, uuid.uuid4(), 2, ceiling=2).accepted


def test_release_more_than_held_changes_nothing() -> None:
    claimant = uuid.uuid4()
    capacity_ledger.try_claim(KEY, claimant, 1)

    assert not capacity_ledger.release(KEY, claimant, 2)
    assert not capacity_ledger.release(KEY, uuid.uuid4(), 1)
    assert capacity_ledger.units_held(KEY, claimant) == 1
    assert capacity_ledger.units_claimed(KEY) == 1


def test_keys_are_independent() -> None:
    claimant = uuid.uuid4()
    capacity_ledger.try_claim("merch:a:Hoodie", claimant, claimant_ceiling=1)

    assert capacity_ledger.try_claim("merch:a:Cap", claimant, claimant_ceiling=1).accepted
    assert capacity_ledger.units_claimed("unknown") == 0


def test_claim_must_request_units() -> None:
    with pytest.raises(ValueError):
        capacity_ledger.try_claim(KEY, uuid.uuid4(), 0)
