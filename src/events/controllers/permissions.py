from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from accounts.models import FelicityUser
from events import models


class RolePermission(BasePermission):
    """Allow users with the given role. Admins pass every role check."""

    message = "You do not have the required role."

    def __init__(self, role: str) -> None:
        """Store the role."""
        self.role = role

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Check the role of the authenticated user."""
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.role in (self.role, FelicityUser.Role.ADMIN)  # type: ignore[union-attr]


class EventOwnerPermission(BasePermission):
    message = "Not your event."

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Must implement abstract method. This is due to an error in Ninja Extra.

        This Method will be ignored, only has_object_permission will be called.
        """
        return True

    def has_object_permission(self, request: HttpRequest, controller: ControllerBase, obj: models.Event) -> bool:
        """The organizer who owns the event, or an admin."""
        user = request.user
        if user.role == FelicityUser.Role.ADMIN:  # type: ignore[union-attr]
            return True
        return bool(obj.organizer.user_id == user.id)
