"""This module contains the controllers for the authentication app."""

import structlog
from ninja_extra import api_controller, route
from ninja_jwt.controller import TokenObtainPairController

from accounts import schema
from accounts.models import FelicityUser
from accounts.service import account as account_service
from common.throttling import AuthThrottle, UserRegistrationThrottle

logger = structlog.get_logger(__name__)


@api_controller("/auth", tags=["Auth"], throttle=AuthThrottle())
class AuthController(TokenObtainPairController):
    """Token pair issuance (``/auth/pair``, ``/auth/refresh``) plus participant signup."""

    @route.post(
        "/register",
        response={201: schema.FelicityUserSchema},
        url_name="register_participant",
        throttle=UserRegistrationThrottle(),
    )
    def register(self, payload: schema.ParticipantSignupSchema) -> tuple[int, FelicityUser]:
        """Create a participant account.

        IIIT participants must use an institute email address. The participant profile is created
        together with the account, so the new user can register for events right after logging in.
        """
        return 201, account_service.register_participant(payload)
