"""Dynamic registration forms.

A form may be rewritten only while its event has no registrations. The check and
the write happen under a row lock on the event, the same lock registrations take,
so a registration cannot slip in between them.
"""

import typing as t
from decimal import Decimal, InvalidOperation

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from events.exceptions import FormSchemaLockedError
from events.models import Event, FormResponse, FormSchema, Registration

logger = structlog.get_logger(__name__)

FIELD_TYPES = ("text", "textarea", "number", "select", "checkbox", "file")


def is_locked(event: Event) -> bool:
    """Whether the form of ``event`` is frozen by existing registrations."""
    return Registration.objects.filter(event=event).exists()


def get_form_fields(event: Event) -> list[dict[str, t.Any]]:
    form = FormSchema.objects.filter(event=event).first()
    return list(form.fields) if form else []


def normalize_form_fields(fields: list[dict[str, t.Any]]) -> list[dict[str, t.Any]]:
    """Validate field definitions and return them in canonical form.

    Raises:
        ValidationError: Keyed by ``fields``, listing every problem found.
    """
    errors: list[str] = []
    seen: set[str] = set()
    normalized = []
    for position, field in enumerate(fields, start=1):
        label = str(field.get("label") or "").strip()
        field_type = field.get("type")
        options = [str(option).strip() for option in field.get("options") or []]
        if not label or not field_type:
            errors.append(f"Field {position}: each field needs a label and a type.")
            continue
        if field_type not in FIELD_TYPES:
            errors.append(f"Field {position}: invalid type '{field_type}'. Use one of {', '.join(FIELD_TYPES)}.")
            continue
        if label in seen:
            errors.append(f"Field {position}: duplicate label '{label}'.")
            continue
        seen.add(label)
        if field_type == "select" and not any(options):
            errors.append(f"Field {position}: select fields need at least one option.")
            continue
        if field_type != "select" and any(options):
            errors.append(f"Field {position}: only select fields may declare options.")
            continue
        normalized.append(
            {
                "label": label,
                "type": field_type,
                "required": bool(field.get("required", False)),
                "options": [option for option in options if option] if field_type == "select" else [],
            }
        )
    if errors:
        raise ValidationError({"fields": errors})
    return normalized


@transaction.atomic
def save_form(event: Event, fields: list[dict[str, t.Any]]) -> FormSchema:
    """Create or replace the form of ``event``.

    Raises:
        FormSchemaLockedError: If the event already has registrations.
        ValidationError: If the field definitions are malformed.
    """
    Event.objects.select_for_update(of=("self",)).filter(pk=event.pk).first()
    if is_locked(event):
        logger.info("form_write_rejected_locked", event_id=str(event.pk))
        raise FormSchemaLockedError()
    normalized = normalize_form_fields(fields)
    form, created = FormSchema.objects.update_or_create(event=event, defaults={"fields": normalized})
    logger.info("form_saved", event_id=str(event.pk), fields=len(normalized), created=created)
    return form


def _is_empty(value: t.Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def validate_answers(fields: list[dict[str, t.Any]], answers: dict[str, t.Any]) -> None:
    """Check submitted answers against the form fields.

    Required fields must be non-empty, select answers must be one of the declared
    options and number answers must be numeric. Answers to unknown labels are ignored.

    Raises:
        ValidationError: Keyed by field label.
    """
    errors: dict[str, list[str]] = {}
    for field in fields:
        label = field["label"]
        value = answers.get(label)
        if _is_empty(value):
            if field.get("required"):
                errors[label] = [f"'{label}' is required."]
            continue
        if field["type"] == "select" and value not in field.get("options", []):
            errors[label] = [f"Invalid option for '{label}'."]
        elif field["type"] == "number":
            try:
                Decimal(str(value))
            except InvalidOperation:
                errors[label] = [f"'{label}' must be a number."]
    if errors:
        raise ValidationError(errors)


def list_responses(event: Event) -> QuerySet[FormResponse]:
    return FormResponse.objects.filter(event=event).select_related("participant", "registration")
