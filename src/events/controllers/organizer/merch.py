from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.models import FelicityUser
from common.controllers import UserAwareController
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.base import OrganizerEventBaseController
from events.controllers.permissions import EventOwnerPermission, RolePermission
from events.service import merch_service


@api_controller(
    "/organizer/events/{uuid:event_id}/merch",
    auth=JWTAuth(),
    permissions=[RolePermission(FelicityUser.Role.ORGANIZER), EventOwnerPermission()],
    tags=["Organizer"],
)
class OrganizerMerchController(OrganizerEventBaseController):
    @route.get("", url_name="organizer_list_merch_items", response=list[schema.MerchItemSchema])
    def list_items(self, event_id: UUID) -> QuerySet[models.MerchItem]:
        event = self.get_one(event_id)
        return event.merch_items.all()

    @route.put(
        "",
        url_name="organizer_replace_merch_items",
        response={200: list[schema.MerchItemSchema], 400: ValidationErrorResponse},
        throttle=WriteThrottle(),
    )
    def replace_items(self, event_id: UUID, payload: schema.MerchItemsUpdateSchema) -> list[models.MerchItem]:
        """Replace the item catalogue. Items are matched by name; unlisted items are removed.

        Saving items turns the event into a MERCH event, which is only allowed while it is a Draft.
        """
        event = self.get_one(event_id)
        return merch_service.replace_items(event, [item.model_dump() for item in payload.items])

    @route.get("/orders", url_name="organizer_list_merch_orders", response=list[schema.MerchOrderSchema])
    def list_orders(
        self, event_id: UUID, status: models.MerchOrder.Status | None = None
    ) -> QuerySet[models.MerchOrder]:
        event = self.get_one(event_id)
        return merch_service.list_orders(event, status)


@api_controller(
    "/organizer/merch/orders",
    auth=JWTAuth(),
    permissions=[RolePermission(FelicityUser.Role.ORGANIZER)],
    tags=["Organizer"],
    throttle=WriteThrottle(),
)
class OrganizerOrderReviewController(UserAwareController):
    """Payment review. Ownership of the order's event is checked by the merch service."""

    @route.post("/{order_id}/approve", url_name="organizer_approve_order", response=schema.MerchApprovalSchema)
    def approve(self, order_id: str) -> merch_service.ApprovalResult:
        """Approve a PENDING order: stock is consumed and a merch ticket is issued.

        If any item ran out in the meantime nothing changes and the order stays PENDING.
        """
        return merch_service.approve_order(order_id, self.user())

    @route.post("/{order_id}/reject", url_name="organizer_reject_order", response=schema.MerchOrderSchema)
    def reject(self, order_id: str, payload: schema.MerchOrderRejectSchema) -> models.MerchOrder:
        return merch_service.reject_order(order_id, self.user(), payload.comment)
