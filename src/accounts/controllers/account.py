from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts import schema
from accounts.models import FelicityUser, OrganizerProfile, ParticipantProfile
from accounts.service import profile as profile_service
from common.controllers import UserAwareController
from events.controllers.permissions import RolePermission


@api_controller("/me", auth=JWTAuth(), tags=["Account"])
class AccountController(UserAwareController):
    @route.get("/", response=schema.FelicityUserSchema, url_name="me")
    def me(self) -> FelicityUser:
        """Return the authenticated user's account with its role."""
        return self.user()

    @route.get(
        "/profile",
        response=schema.ParticipantProfileSchema,
        url_name="participant_profile",
        permissions=[RolePermission("participant")],
    )
    def participant_profile(self) -> ParticipantProfile:
        """Return the participant profile used for event eligibility."""
        return profile_service.resolve_participant_profile(self.user())

    @route.get(
        "/organizer-profile",
        response=schema.OrganizerProfileSchema,
        url_name="organizer_profile",
        permissions=[RolePermission("organizer")],
    )
    def organizer_profile(self) -> OrganizerProfile:
        return profile_service.resolve_organizer_profile(self.user())
