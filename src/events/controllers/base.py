import typing as t
from uuid import UUID

from django.db.models import QuerySet

from common.controllers import UserAwareController
from events import models
from events.exceptions import EventNotFoundError


class PublicEventBaseController(UserAwareController):
    """Base controller for participant-facing event endpoints.

    Drafts are hidden from everyone except through the organizer endpoints.
    """

    def get_queryset(self) -> QuerySet[models.Event]:
        return models.Event.objects.published()

    def get_one(self, event_id: UUID) -> models.Event:
        """Fetch a visible event. Drafts are reported as missing."""
        event = self.get_queryset().filter(pk=event_id).first()
        if event is None:
            raise EventNotFoundError()
        return event


class OrganizerEventBaseController(UserAwareController):
    """Base controller for organizer endpoints.

    ``get_one`` runs the object permissions of the route, so ownership is enforced on every lookup.
    """

    def get_queryset(self) -> QuerySet[models.Event]:
        return models.Event.objects.all()

    def get_one(self, event_id: UUID) -> models.Event:
        """Wrapper helper."""
        return t.cast(models.Event, self.get_object_or_exception(self.get_queryset(), pk=event_id))
