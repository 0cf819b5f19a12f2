from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.models import FelicityUser
from common.controllers import UserAwareController
from events import models, schema
from events.controllers.permissions import RolePermission
from events.service import merch_service


@api_controller(
    "/me/registrations",
    auth=JWTAuth(),
    permissions=[RolePermission(FelicityUser.Role.PARTICIPANT)],
    tags=["Participant"],
)
class MyRegistrationsController(UserAwareController):
    @route.get("/", url_name="my_registrations", response=list[schema.MyRegistrationSchema])
    def list_registrations(self) -> QuerySet[models.Registration]:
        """The caller's registrations with their tickets, most recent first."""
        return models.Registration.objects.filter(participant=self.user()).select_related("event", "ticket")


@api_controller(
    "/me/merch/orders",
    auth=JWTAuth(),
    permissions=[RolePermission(FelicityUser.Role.PARTICIPANT)],
    tags=["Participant"],
)
class MyMerchOrdersController(UserAwareController):
    @route.get("/", url_name="my_merch_orders", response=list[schema.MerchOrderSchema])
    def list_orders(self) -> QuerySet[models.MerchOrder]:
        return merch_service.orders_for_participant(self.user())
