"""Tests for registration forms and the lock taken by the first registration."""

import pytest
from django.core.exceptions import ValidationError

from accounts.models import FelicityUser
from events.exceptions import FormSchemaLockedError
from events.models import Event, FormSchema
from events.service import form_service
from events.service.registration import RegistrationAllocator

pytestmark = pytest.mark.django_db

T_SHIRT = {"label": "T-shirt size", "type": "select", "required": True, "options": ["S", "M", "L"]}


def test_save_form_normalizes_fields(draft_event: Event) -> None:
    form = form_service.save_form(
        draft_event,
        [{"label": "  Team name ", "type": "text", "required": True}, {"label": "Age", "type": "number"}, T_SHIRT],
    )

    assert form.fields == [
        {"label": "Team name", "type": "text", "required": True, "options": []},
        {"label": "Age", "type": "number", "required": False, "options": []},
        T_SHIRT,
    ]


def test_save_form_replaces_previous_version(draft_event: Event) -> None:
    form_service.save_form(draft_event, [T_SHIRT])
    form_service.save_form(draft_event, [{"label": "Team name", "type": "text"}])

    assert FormSchema.objects.filter(event=draft_event).count() == 1
    assert [field["label"] for field in form_service.get_form_fields(draft_event)] == ["Team name"]


@pytest.mark.parametrize(
    "fields",
    [
        [{"label": "Team", "type": "dropdown"}],
        [{"label": "", "type": "text"}],
        [{"label": "Team", "type": "text"}, {"label": "Team", "type": "textarea"}],
        [{"label": "Size", "type": "select", "options": []}],
        [{"label": "Name", "type": "text", "options": ["a"]}],
    ],
)
def test_malformed_fields(draft_event: Event, fields: list[dict[str, object]]) -> None:
    with pytest.raises(ValidationError) as exc_info:
        form_service.save_form(draft_event, fields)

    assert "fields" in exc_info.value.message_dict
    assert not FormSchema.objects.filter(event=draft_event).exists()


def test_form_is_editable_after_publishing(published_event: Event) -> None:
    form_service.save_form(published_event, [T_SHIRT])

    assert form_service.is_locked(published_event) is False


def test_first_registration_locks_the_form(participant: FelicityUser, published_event: Event) -> None:
    form_service.save_form(published_event, [T_SHIRT])
    RegistrationAllocator(participant, published_event, {"T-shirt size": "M"}).register()

    assert form_service.is_locked(published_event) is True
    with pytest.raises(FormSchemaLockedError):
        form_service.save_form(published_event, [{"label": "Team name", "type": "text"}])
    assert form_service.get_form_fields(published_event) == [T_SHIRT]


def test_event_without_form(draft_event: Event) -> None:
    assert form_service.get_form_fields(draft_event) == []
    assert form_service.is_locked(draft_event) is False


class TestValidateAnswers:
    FIELDS = [
        T_SHIRT,
        {"label": "Age", "type": "number", "required": False, "options": []},
        {"label": "Skills", "type": "checkbox", "required": True, "options": []},
    ]

    def test_valid_answers(self) -> None:
        form_service.validate_answers(self.FIELDS, {"T-shirt size": "S", "Age": "21", "Skills": ["guitar"]})

    def test_optional_fields_may_be_blank(self) -> None:
        form_service.validate_answers(self.FIELDS, {"T-shirt size": "S", "Age": "", "Skills": True})

    def test_errors_are_keyed_by_label(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            form_service.validate_answers(self.FIELDS, {"T-shirt size": "XXL", "Age": "twenty", "Skills": []})

        assert set(exc_info.value.message_dict) == {"T-shirt size", "Age", "Skills"}

    def test_unknown_labels_are_ignored(self) -> None:
        form_service.validate_answers(self.FIELDS, {"T-shirt size": "L", "Skills": "x", "Favourite band": "Queen"})
