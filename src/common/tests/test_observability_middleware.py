import structlog
from django.http import HttpRequest, HttpResponse
from django.test import RequestFactory

from common.middleware import StructlogContextMiddleware


def test_binds_request_context_and_echoes_request_id(rf: RequestFactory) -> None:
    seen: dict[str, object] = {}

    def view(request: HttpRequest) -> HttpResponse:
        seen.update(structlog.contextvars.get_contextvars())
        return HttpResponse("ok")

    request = rf.get("/api/events/", HTTP_X_FORWARDED_FOR="10.0.0.7, 172.16.0.1")
    response = StructlogContextMiddleware(view)(request)

    assert seen["path"] == "/api/events/"
    assert seen["ip_address"] == "10.0.0.7"
    assert response["X-Request-ID"] == seen["request_id"]
    assert structlog.contextvars.get_contextvars() == {}


def test_keeps_incoming_request_id(rf: RequestFactory) -> None:
    request = rf.get("/api/healthcheck", HTTP_X_REQUEST_ID="abc-123")

    response = StructlogContextMiddleware(lambda r: HttpResponse("ok"))(request)

    assert response["X-Request-ID"] == "abc-123"
