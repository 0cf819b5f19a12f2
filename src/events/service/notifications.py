"""Outbound notifications.

Mail is handed to the Celery queue and never awaited. Dispatch waits for the
surrounding transaction to commit, so a message never announces an allocation that
was rolled back. A failure to enqueue is reported back as ``False`` and never undoes
the allocation.
"""

from decimal import Decimal

import structlog
from django.db import transaction

from accounts.models import FelicityUser
from common.tasks import send_email
from events.exceptions import NotificationUnavailableError
from events.models import Event, MerchOrder

logger = structlog.get_logger(__name__)

SIGNATURE = "-- Felicity Event Management Platform"


def send_notification(*, recipient: str, subject: str, body: str) -> None:
    """Enqueue an email.

    Raises:
        NotificationUnavailableError: If the message could not be handed to the queue.
    """
    try:
        send_email.delay(to=recipient, subject=subject, body=body)
    except Exception as e:
        raise NotificationUnavailableError() from e


def notify(*, recipient: str, subject: str, body: str) -> bool:
    """Best-effort variant of ``send_notification``, run once the current transaction commits.

    Outside a transaction the message is enqueued right away and the return value says
    whether that worked. Inside one it is only scheduled: the result is ``True`` and a
    later enqueue failure is logged, since the caller has to answer before its commit.
    """
    enqueued = True

    def dispatch() -> None:
        nonlocal enqueued
        try:
            send_notification(recipient=recipient, subject=subject, body=body)
        except NotificationUnavailableError:
            logger.warning("notification_dispatch_failed", subject=subject, exc_info=True)
            enqueued = False

    transaction.on_commit(dispatch)
    return enqueued


def notify_registration_confirmed(*, participant: FelicityUser, event: Event, ticket_id: str, name: str) -> bool:
    body = "\n".join(
        [
            f"Hi {name},",
            "",
            f'You are registered for "{event.name}".',
            f"Ticket ID: {ticket_id}",
            f"Starts: {event.start_date.strftime('%a %d %b %Y %H:%M') if event.start_date else 'TBA'}",
            f"Fee: {event.registration_fee if event.registration_fee > Decimal('0') else 'Free'}",
            "",
            "Show the QR code of this ticket at the venue.",
            "",
            SIGNATURE,
        ]
    )
    return notify(recipient=participant.email, subject=f"Ticket Confirmation - {event.name}", body=body)


def notify_order_approved(*, order: MerchOrder, ticket_id: str) -> bool:
    event = order.event
    body = "\n".join(
        [
            f"Hi {order.participant.display_name},",
            "",
            f'Your merch order ({order.order_id}) for "{event.name}" has been approved.',
            f"Ticket ID: {ticket_id}",
            "",
            "Present this ticket at the venue.",
            "",
            SIGNATURE,
        ]
    )
    return notify(recipient=order.participant.email, subject=f"Order Approved - {event.name}", body=body)


def notify_order_rejected(*, order: MerchOrder) -> bool:
    event = order.event
    lines = [
        f"Hi {order.participant.display_name},",
        "",
        f'Your merch order ({order.order_id}) for "{event.name}" has been rejected.',
    ]
    if order.reviewer_comment:
        lines.append(f"Comment from the organizer: {order.reviewer_comment}")
    lines += ["", SIGNATURE]
    return notify(recipient=order.participant.email, subject=f"Order Rejected - {event.name}", body="\n".join(lines))
