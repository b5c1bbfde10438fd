"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import (
    blank_to_none,
    validate_local_phone,
    validate_not_past,
    validate_postal_code,
)

ServiceType = Literal["maintenance", "repair", "installation", "inspection"]
TimeSlot = Literal["morning", "afternoon", "evening"]
BookingStatus = Literal["pending", "confirmed", "assigned", "in_progress", "completed", "cancelled"]


class BookingCreate(BaseModel):
    """Schema for creating a booking (status is always forced to pending)"""

    customer_id: Optional[int] = None
    aircon_unit_id: Optional[int] = None
    service_type: ServiceType
    preferred_date: date
    preferred_time: TimeSlot
    service_address: str = Field(..., min_length=5, max_length=500)
    postal_code: Optional[str] = None
    contact_phone: str
    aircon_brand: Optional[str] = Field(None, min_length=1, max_length=50)
    aircon_model: Optional[str] = Field(None, min_length=1, max_length=50)
    issue_description: Optional[str] = Field(None, min_length=5, max_length=1000)
    technician_id: Optional[int] = None

    @field_validator(
        "postal_code", "aircon_brand", "aircon_model", "issue_description", "technician_id",
        mode="before",
    )
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator("preferred_date")
    @classmethod
    def validate_preferred_date(cls, v):
        return validate_not_past(v)

    @field_validator("postal_code")
    @classmethod
    def validate_postal(cls, v):
        return validate_postal_code(v)

    @field_validator("contact_phone")
    @classmethod
    def validate_phone(cls, v):
        return validate_local_phone(v)


class BookingDetailsUpdate(BaseModel):
    """Fields a customer may edit on their own booking; only provided fields change"""

    service_type: Optional[ServiceType] = None
    preferred_date: Optional[date] = None
    preferred_time: Optional[TimeSlot] = None
    service_address: Optional[str] = Field(None, min_length=5, max_length=500)
    postal_code: Optional[str] = None
    contact_phone: Optional[str] = None
    aircon_brand: Optional[str] = Field(None, min_length=1, max_length=50)
    aircon_model: Optional[str] = Field(None, min_length=1, max_length=50)
    issue_description: Optional[str] = Field(None, min_length=5, max_length=1000)

    @field_validator(
        "postal_code", "aircon_brand", "aircon_model", "issue_description",
        mode="before",
    )
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator("preferred_date")
    @classmethod
    def validate_preferred_date(cls, v):
        return validate_not_past(v)

    @field_validator("postal_code")
    @classmethod
    def validate_postal(cls, v):
        return validate_postal_code(v)

    @field_validator("contact_phone")
    @classmethod
    def validate_phone(cls, v):
        return validate_local_phone(v)


class BookingUpdate(BookingDetailsUpdate):
    """Staff edit: may also set status and technician directly"""

    status: Optional[BookingStatus] = None
    technician_id: Optional[int] = None

    @field_validator("technician_id", mode="before")
    @classmethod
    def technician_blank_as_none(cls, v):
        return blank_to_none(v)


class BookingStatusUpdate(BaseModel):
    """Status is checked by the lifecycle service so bad values map to InvalidStatus"""

    status: Optional[str] = None


class BookingResponse(BaseModel):
    """Schema for booking response"""

    id: int
    customer_id: int
    aircon_unit_id: Optional[int] = None
    service_type: str
    preferred_date: date
    preferred_time: str
    service_address: str
    postal_code: Optional[str] = None
    contact_phone: str
    aircon_brand: Optional[str] = None
    aircon_model: Optional[str] = None
    issue_description: Optional[str] = None
    technician_id: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Joined from the customer and unit rows
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    unit_brand: Optional[str] = None
    unit_model: Optional[str] = None
    serial_number: Optional[str] = None

    class Config:
        from_attributes = True


class BookingStatusResponse(BookingResponse):
    """Booking after a status change, plus any side-effect diagnostics"""

    service_record_id: Optional[int] = None
    warnings: list[str] = []
