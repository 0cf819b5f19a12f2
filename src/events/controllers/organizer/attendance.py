from uuid import UUID

from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.models import FelicityUser
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.base import OrganizerEventBaseController
from events.controllers.permissions import EventOwnerPermission, RolePermission
from events.service import attendance_service


@api_controller(
    "/organizer/events/{uuid:event_id}/attendance",
    auth=JWTAuth(),
    permissions=[RolePermission(FelicityUser.Role.ORGANIZER), EventOwnerPermission()],
    tags=["Organizer"],
)
class OrganizerAttendanceController(OrganizerEventBaseController):
    """Check-in desk. A ticket can be checked in once; repeats are answered with 409."""

    @route.get("", url_name="organizer_attendance_dashboard", response=schema.AttendanceDashboardSchema)
    def dashboard(self, event_id: UUID) -> attendance_service.AttendanceDashboard:
        event = self.get_one(event_id)
        return attendance_service.dashboard(event)

    @route.get("/records", url_name="organizer_attendance_records", response=list[schema.AttendanceRecordSchema])
    def list_records(self, event_id: UUID) -> list[models.AttendanceRecord]:
        event = self.get_one(event_id)
        return list(attendance_service.list_records(event))

    @route.post(
        "/scan",
        url_name="organizer_scan_ticket",
        response={201: schema.AttendanceRecordSchema, 400: ValidationErrorResponse},
        throttle=WriteThrottle(),
    )
    def scan(self, event_id: UUID, payload: schema.ScanAttendanceSchema) -> tuple[int, models.AttendanceRecord]:
        """Check a ticket in from its QR payload, or from the ticket id when the code is unreadable."""
        event = self.get_one(event_id)
        record = attendance_service.record_scan(
            event, self.user(), qr_payload=payload.qr_payload, ticket_id=payload.ticket_id
        )
        return 201, record

    @route.post(
        "/manual",
        url_name="organizer_manual_check_in",
        response={201: schema.AttendanceRecordSchema, 400: ValidationErrorResponse},
        throttle=WriteThrottle(),
    )
    def manual(self, event_id: UUID, payload: schema.ManualAttendanceSchema) -> tuple[int, models.AttendanceRecord]:
        """Check a ticket in by hand. The record is flagged as an override and keeps the note."""
        event = self.get_one(event_id)
        return 201, attendance_service.record_manual(event, self.user(), payload.ticket_id, payload.note)
