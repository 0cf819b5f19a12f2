from .events import EventController
from .me import MyMerchOrdersController, MyRegistrationsController
from .organizer import ORGANIZER_CONTROLLERS

EVENT_CONTROLLERS: list[type] = [
    EventController,
    MyRegistrationsController,
    MyMerchOrdersController,
    *ORGANIZER_CONTROLLERS,
]

__all__ = ["EVENT_CONTROLLERS", "EventController", "MyMerchOrdersController", "MyRegistrationsController"]
