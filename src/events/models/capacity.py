from django.db import models

from common.models import TimeStampedModel


class CapacityCounter(TimeStampedModel):
    """Units accepted so far under a ledger key, across all claimants.

    Rows are only ever changed through conditional ``UPDATE`` statements issued by
    ``events.service.capacity_ledger``; never via ``save()``.
    """

    key = models.CharField(max_length=255, unique=True)
    claimed = models.PositiveIntegerField(default=0)

    def __str__(self) -> str:
        return f"{self.key}: {self.claimed}"


class CapacityClaim(TimeStampedModel):
    """Units currently held by one claimant under a ledger key."""

    counter = models.ForeignKey(CapacityCounter, on_delete=models.CASCADE, related_name="claims")
    claimant = models.UUIDField(db_index=True)
    units = models.PositiveIntegerField(default=0)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["counter", "claimant"], name="unique_capacity_claim_per_claimant"),
        ]

    def __str__(self) -> str:
        return f"{self.claimant} holds {self.units} of {self.counter_id}"
