from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts import schema
from accounts.models import FelicityUser, OrganizerProfile
from accounts.service import organizer as organizer_service
from common.controllers import UserAwareController
from common.schema import ResponseMessage, ValidationErrorResponse
from common.throttling import WriteThrottle
from events.controllers.permissions import RolePermission


@api_controller(
    "/admin/organizers",
    auth=JWTAuth(),
    permissions=[RolePermission(FelicityUser.Role.ADMIN)],
    tags=["Admin"],
)
class AdminOrganizerController(UserAwareController):
    """Organizer account management. Organizers cannot sign up on their own."""

    @route.get("", url_name="admin_list_organizers", response=list[schema.OrganizerAdminSchema])
    def list_organizers(self) -> QuerySet[OrganizerProfile]:
        return organizer_service.list_organizers()

    @route.post(
        "",
        url_name="admin_create_organizer",
        response={201: schema.OrganizerCreatedSchema, 400: ValidationErrorResponse},
        throttle=WriteThrottle(),
    )
    def create_organizer(self, payload: schema.OrganizerCreateSchema) -> tuple[int, OrganizerProfile]:
        """Create an organizer account and its profile.

        The login email is derived from the name and the password is generated. Both are
        returned once in this response; share them with the club.
        """
        return 201, organizer_service.create_organizer(payload)

    @route.patch(
        "/{uuid:organizer_id}/disable",
        url_name="admin_disable_organizer",
        response=schema.OrganizerAdminSchema,
        throttle=WriteThrottle(),
    )
    def set_disabled(self, organizer_id: UUID, payload: schema.OrganizerDisableSchema) -> OrganizerProfile:
        """Disable or re-enable an organizer. Disabled organizers can neither log in nor use their tokens."""
        return organizer_service.set_disabled(organizer_id, payload.is_disabled)

    @route.delete(
        "/{uuid:organizer_id}",
        url_name="admin_delete_organizer",
        response=ResponseMessage,
        throttle=WriteThrottle(),
    )
    def delete_organizer(self, organizer_id: UUID) -> ResponseMessage:
        """Delete an organizer together with all of its events."""
        deleted = organizer_service.delete_organizer(organizer_id)
        return ResponseMessage(message=f"Organizer and {deleted} event(s) deleted.")
