import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.models import FelicityUser
from accounts.service.profile import resolve_organizer_profile
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.base import OrganizerEventBaseController
from events.controllers.permissions import EventOwnerPermission, RolePermission
from events.service import event_service


@api_controller(
    "/organizer/events",
    auth=JWTAuth(),
    permissions=[RolePermission(FelicityUser.Role.ORGANIZER), EventOwnerPermission()],
    tags=["Organizer"],
)
class OrganizerEventController(OrganizerEventBaseController):
    """Event lifecycle for the owning organizer.

    Handles creation, phase-restricted edits, publishing and analytics.
    """

    @route.get("/", url_name="organizer_list_events", response=list[schema.EventInListSchema])
    def list_events(self) -> QuerySet[models.Event]:
        """Events owned by the caller, drafts included. Admins see every event."""
        return models.Event.objects.owned_by(self.user())

    @route.post(
        "/",
        url_name="organizer_create_event",
        response={201: schema.EventDetailSchema, 400: ValidationErrorResponse},
        throttle=WriteThrottle(),
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, models.Event]:
        """Create a Draft event. It stays invisible to participants until published."""
        organizer = resolve_organizer_profile(self.user())
        return 201, event_service.create_event(organizer, payload.model_dump())

    @route.get("/{uuid:event_id}", url_name="organizer_get_event", response=schema.EventDetailSchema)
    def get_event(self, event_id: UUID) -> models.Event:
        return self.get_one(event_id)

    @route.patch(
        "/{uuid:event_id}",
        url_name="organizer_update_event",
        response={200: schema.EventDetailSchema, 400: ValidationErrorResponse},
        throttle=WriteThrottle(),
    )
    def update_event(self, event_id: UUID, payload: schema.EventEditSchema) -> models.Event:
        """Update the fields present in the body.

        Which fields may change depends on the phase. Drafts are fully editable; Published events accept
        description, deadline, limit and status override; Ongoing and Completed events only a status
        override. Any disallowed field rejects the whole request.
        """
        event = self.get_one(event_id)
        return event_service.update_event(event, payload.model_dump(exclude_unset=True))

    @route.post(
        "/{uuid:event_id}/publish",
        url_name="organizer_publish_event",
        response={200: schema.EventDetailSchema, 400: ValidationErrorResponse},
        throttle=WriteThrottle(),
    )
    def publish_event(self, event_id: UUID) -> models.Event:
        """Publish a Draft. Start, end and registration deadline must be set and consistent."""
        event = self.get_one(event_id)
        return event_service.publish_event(event)

    @route.get("/{uuid:event_id}/analytics", url_name="organizer_event_analytics", response=schema.EventAnalyticsSchema)
    def analytics(self, event_id: UUID) -> dict[str, t.Any]:
        event = self.get_one(event_id)
        return event_service.analytics(event)
