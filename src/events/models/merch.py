from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from accounts.models import FelicityUser
from common.models import TimeStampedModel

from .event import Event


class MerchOrderQuerySet(models.QuerySet["MerchOrder"]):
    def holding_allowance(self) -> "MerchOrderQuerySet":
        """Orders that count against a participant's per-item allowance."""
        return self.filter(status__in=[MerchOrder.Status.PENDING, MerchOrder.Status.APPROVED])


class MerchOrder(TimeStampedModel):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"

    order_id = models.CharField(max_length=40, unique=True)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="merch_orders")
    participant = models.ForeignKey(FelicityUser, on_delete=models.CASCADE, related_name="merch_orders")
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    payment_proof_url = models.CharField(max_length=2048)
    reviewer_comment = models.TextField(blank=True, default="")
    reviewed_by = models.ForeignKey(
        FelicityUser, on_delete=models.SET_NULL, null=True, blank=True, related_name="reviewed_merch_orders"
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    objects = MerchOrderQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.order_id

    @property
    def ticket_id(self) -> str | None:
        """Ticket issued on approval, if any."""
        ticket = getattr(self, "ticket", None)
        return ticket.ticket_id if ticket else None


class MerchOrderLine(models.Model):
    order = models.ForeignKey(MerchOrder, on_delete=models.CASCADE, related_name="lines")
    item_name = models.CharField(max_length=255)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    variant = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.item_name}"

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity
