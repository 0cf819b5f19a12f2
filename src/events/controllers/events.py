from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.models import FelicityUser
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.base import PublicEventBaseController
from events.controllers.permissions import RolePermission
from events.service import form_service, merch_service
from events.service.registration import RegistrationAllocator, RegistrationResult


@api_controller("/events", auth=JWTAuth(), tags=["Events"])
class EventController(PublicEventBaseController):
    @route.get("/", url_name="list_events", response=list[schema.EventInListSchema])
    def list_events(self) -> QuerySet[models.Event]:
        """Browse events that have been published."""
        return self.get_queryset().order_by("start_date")

    @route.get("/{uuid:event_id}", url_name="get_event", response=schema.EventDetailSchema)
    def get_event(self, event_id: UUID) -> models.Event:
        """Event detail. ``status`` is derived from the dates at request time."""
        return self.get_one(event_id)

    @route.get("/{uuid:event_id}/form", url_name="get_event_form", response=schema.FormRetrieveSchema)
    def get_form(self, event_id: UUID) -> schema.FormRetrieveSchema:
        """The registration form to fill in before registering."""
        event = self.get_one(event_id)
        return schema.FormRetrieveSchema(
            fields=form_service.get_form_fields(event),  # type: ignore[arg-type]
            locked=form_service.is_locked(event),
        )

    @route.post(
        "/{uuid:event_id}/register",
        url_name="register_for_event",
        response={201: schema.RegistrationResultSchema, 400: ValidationErrorResponse},
        permissions=[RolePermission(FelicityUser.Role.PARTICIPANT)],
        throttle=WriteThrottle(),
    )
    def register(
        self, event_id: UUID, payload: schema.RegistrationCreateSchema
    ) -> tuple[int, RegistrationResult]:
        """Register for an event and receive a ticket.

        The event must be Published, before its deadline, below its registration limit and open to the
        participant's type. Answers must satisfy the event form. A failed confirmation email does not undo
        the registration; ``email_sent`` reports it.
        """
        event = self.get_one(event_id)
        return 201, RegistrationAllocator(self.user(), event, payload.answers).register()

    @route.get(
        "/{uuid:event_id}/merch",
        url_name="list_merch_items",
        response=list[schema.MerchItemViewSchema],
        permissions=[RolePermission(FelicityUser.Role.PARTICIPANT)],
    )
    def list_merch(self, event_id: UUID) -> list[merch_service.MerchItemView]:
        """Merch items with how many units the caller has ordered and may still order."""
        event = self.get_one(event_id)
        return merch_service.items_for_participant(event, self.user())

    @route.post(
        "/{uuid:event_id}/merch/orders",
        url_name="create_merch_order",
        response={201: schema.MerchOrderSchema, 400: ValidationErrorResponse},
        permissions=[RolePermission(FelicityUser.Role.PARTICIPANT)],
        throttle=WriteThrottle(),
    )
    def create_merch_order(
        self, event_id: UUID, payload: schema.MerchOrderCreateSchema
    ) -> tuple[int, models.MerchOrder]:
        """Place an order. It stays PENDING until an organizer reviews the payment proof."""
        event = self.get_one(event_id)
        lines = [merch_service.OrderLine(**line.model_dump()) for line in payload.items]
        return 201, merch_service.create_order(self.user(), event, lines, payload.payment_proof_url)
