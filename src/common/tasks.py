"""Common tasks."""

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives

from common.models import EmailLog

logger = structlog.get_logger(__name__)


@shared_task
def send_email(*, to: str | list[str], subject: str, body: str) -> None:
    """Send a plain-text email and record it in the email log.

    Args:
        to (str | list[str]): The recipient address or addresses.
        subject (str): The email subject.
        body (str): The email body.
    """
    recipients = [to] if isinstance(to, str) else to
    safe_recipients = [to_safe_email_address(email) for email in recipients]
    email_msg = EmailMultiAlternatives(
        subject=subject,
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        bcc=safe_recipients,
    )
    email_msg.send(fail_silently=False)
    email_logs: list[EmailLog] = []
    for recipient in safe_recipients:
        el = EmailLog(to=recipient, subject=subject, test_only=not settings.ENABLE_LIVE_EMAILS)
        el.set_body(body=body)
        email_logs.append(el)
    EmailLog.objects.bulk_create(email_logs)
    logger.info("email_sent", recipients=len(safe_recipients), subject=subject)


def to_safe_email_address(email: str) -> str:
    """Convert an email address to a safe format for sending.

    Unless live emails are enabled, the address is folded into a plus-alias of the
    internal catch-all mailbox so that no real participant is ever contacted.
    """
    if settings.ENABLE_LIVE_EMAILS:
        return email
    safe_email = email.replace("@", "_at_").replace(".", "_dot_")
    user, domain = settings.INTERNAL_CATCHALL_EMAIL.split("@", 1)
    return f"{user}+{safe_email}@{domain}"
