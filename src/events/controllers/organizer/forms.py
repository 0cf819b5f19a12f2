from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.models import FelicityUser
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.base import OrganizerEventBaseController
from events.controllers.permissions import EventOwnerPermission, RolePermission
from events.service import form_service


@api_controller(
    "/organizer/events/{uuid:event_id}/form",
    auth=JWTAuth(),
    permissions=[RolePermission(FelicityUser.Role.ORGANIZER), EventOwnerPermission()],
    tags=["Organizer"],
)
class OrganizerFormController(OrganizerEventBaseController):
    @route.get("", url_name="organizer_get_form", response=schema.FormRetrieveSchema)
    def get_form(self, event_id: UUID) -> schema.FormRetrieveSchema:
        event = self.get_one(event_id)
        return schema.FormRetrieveSchema(
            fields=form_service.get_form_fields(event),  # type: ignore[arg-type]
            locked=form_service.is_locked(event),
        )

    @route.put(
        "",
        url_name="organizer_save_form",
        response={200: schema.FormRetrieveSchema, 400: ValidationErrorResponse},
        throttle=WriteThrottle(),
    )
    def save_form(self, event_id: UUID, payload: schema.FormUpdateSchema) -> schema.FormRetrieveSchema:
        """Replace the registration form.

        The form is frozen once the first registration exists; later writes are rejected with 409.
        """
        event = self.get_one(event_id)
        form = form_service.save_form(event, [field.model_dump() for field in payload.fields])
        return schema.FormRetrieveSchema(fields=form.fields, locked=False)

    @route.get("/responses", url_name="organizer_form_responses", response=list[schema.FormResponseSchema])
    def list_responses(self, event_id: UUID) -> QuerySet[models.FormResponse]:
        event = self.get_one(event_id)
        return form_service.list_responses(event)
