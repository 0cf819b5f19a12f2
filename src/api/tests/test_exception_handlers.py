import orjson
import pytest
from django.core.exceptions import ValidationError
from django.test import RequestFactory

from api.exception_handlers import handle_django_validation_error, handle_felicity_error, obfuscate
from events.exceptions import RegistrationLimitReachedError


def test_obfuscate_hides_credentials() -> None:
    headers = {"Authorization": "Bearer abc", "Content-Type": "application/json"}

    assert obfuscate(headers) == {"Authorization": "********", "Content-Type": "application/json"}
    assert headers["Authorization"] == "Bearer abc"


@pytest.mark.parametrize(
    "error,expected",
    [
        (ValidationError({"end_date": ["Must be after the start."]}), {"end_date": ["Must be after the start."]}),
        (ValidationError("No valid fields to update."), {"__all__": ["No valid fields to update."]}),
    ],
)
def test_validation_error_shape(rf: RequestFactory, error: ValidationError, expected: dict[str, list[str]]) -> None:
    response = handle_django_validation_error(rf.post("/api/events/"), error)

    assert response.status_code == 400
    assert orjson.loads(response.content) == {"errors": expected}


def test_domain_error_carries_status_and_code(rf: RequestFactory) -> None:
    response = handle_felicity_error(rf.post("/api/events/"), RegistrationLimitReachedError())

    assert response.status_code == 409
    assert orjson.loads(response.content) == {
        "detail": str(RegistrationLimitReachedError.default_message),
        "code": "registration_limit_reached",
    }
