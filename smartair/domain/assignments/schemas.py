"""Booking assignment schemas"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import blank_to_none, validate_time_of_day

AssignmentStatus = Literal["assigned", "in_progress", "completed", "cancelled"]


class AssignmentCreate(BaseModel):
    booking_id: int
    technician_id: int
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("scheduled_time", "notes", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator("scheduled_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_of_day(v)


class AssignmentUpdate(BaseModel):
    technician_id: Optional[int] = None
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    completion_date: Optional[datetime] = None
    actual_cost: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = Field(None, max_length=1000)
    status: Optional[AssignmentStatus] = None

    @field_validator("scheduled_time", "notes", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator("scheduled_time")
    @classmethod
    def validate_time(cls, v):
        return validate_time_of_day(v)


class AssignmentStatusUpdate(BaseModel):
    status: Optional[str] = None


class AssignmentResponse(BaseModel):
    id: int
    booking_id: int
    technician_id: int
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    completion_date: Optional[datetime] = None
    actual_cost: Optional[float] = None
    notes: Optional[str] = None
    status: str
    assigned_date: Optional[datetime] = None

    # Joined from the booking and technician rows
    technician_name: Optional[str] = None
    customer_name: Optional[str] = None
    service_type: Optional[str] = None
    preferred_date: Optional[date] = None
    preferred_time: Optional[str] = None
    service_address: Optional[str] = None
    booking_status: Optional[str] = None

    class Config:
        from_attributes = True


class AssignmentStatusResponse(AssignmentResponse):
    service_record_id: Optional[int] = None
    warnings: list[str] = []
