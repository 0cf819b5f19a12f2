"""Events schema package.

Schemas are grouped by workflow and re-exported here.
"""

from .attendance import (
    AttendanceDashboardSchema,
    AttendanceRecordSchema,
    ManualAttendanceSchema,
    ScanAttendanceSchema,
)
from .event import (
    EventAnalyticsSchema,
    EventCreateSchema,
    EventDetailSchema,
    EventEditSchema,
    EventInListSchema,
    MinimalEventSchema,
)
from .merch import (
    MerchApprovalSchema,
    MerchItemEditSchema,
    MerchItemSchema,
    MerchItemsUpdateSchema,
    MerchItemViewSchema,
    MerchOrderCreateSchema,
    MerchOrderLineSchema,
    MerchOrderRejectSchema,
    MerchOrderSchema,
    OrderLineInputSchema,
)
from .registration import (
    FormFieldSchema,
    FormResponseSchema,
    FormRetrieveSchema,
    FormUpdateSchema,
    MyRegistrationSchema,
    RegistrationCreateSchema,
    RegistrationResultSchema,
)

__all__ = [
    "AttendanceDashboardSchema",
    "AttendanceRecordSchema",
    "EventAnalyticsSchema",
    "EventCreateSchema",
    "EventDetailSchema",
    "EventEditSchema",
    "EventInListSchema",
    "FormFieldSchema",
    "FormResponseSchema",
    "FormRetrieveSchema",
    "FormUpdateSchema",
    "ManualAttendanceSchema",
    "MerchApprovalSchema",
    "MerchItemEditSchema",
    "MerchItemSchema",
    "MerchItemViewSchema",
    "MerchItemsUpdateSchema",
    "MerchOrderCreateSchema",
    "MerchOrderLineSchema",
    "MerchOrderRejectSchema",
    "MerchOrderSchema",
    "MinimalEventSchema",
    "MyRegistrationSchema",
    "OrderLineInputSchema",
    "RegistrationCreateSchema",
    "RegistrationResultSchema",
    "ScanAttendanceSchema",
]
