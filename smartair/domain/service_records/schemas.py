"""Service record schemas"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

# Staff-entered records use Title Case statuses
RecordStatus = Literal["Scheduled", "Completed", "In Progress"]


class ServiceRecordCreate(BaseModel):
    aircon_unit_id: int
    service_date: date
    description: str = Field(..., min_length=1, max_length=255)
    technician_id: int
    next_due_date: date
    status: RecordStatus
    cost: float = Field(0.0, ge=0)


class ServiceRecordUpdate(BaseModel):
    aircon_unit_id: Optional[int] = None
    service_date: Optional[date] = None
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    technician_id: Optional[int] = None
    next_due_date: Optional[date] = None
    status: Optional[RecordStatus] = None
    cost: Optional[float] = Field(None, ge=0)


class ServiceRecordResponse(BaseModel):
    id: int
    aircon_unit_id: int
    booking_id: Optional[int] = None
    service_date: date
    description: str
    technician_id: Optional[int] = None
    next_due_date: Optional[date] = None
    status: str
    cost: float

    class Config:
        from_attributes = True
