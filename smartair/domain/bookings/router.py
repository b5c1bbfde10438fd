"""Booking router - FastAPI endpoints for booking operations"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import User
from ...models_booking import Booking
from ...permissions import require_permission
from ...services.booking_lifecycle import StatusUpdateResult
from .schemas import (
    BookingCreate,
    BookingResponse,
    BookingStatusResponse,
    BookingStatusUpdate,
    BookingUpdate,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])

def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)

def to_booking_response(booking: Booking) -> BookingResponse:
    response = BookingResponse.model_validate(booking)
    if booking.customer is not None:
        response.customer_name = booking.customer.name
        response.customer_phone = booking.customer.phone
        response.customer_email = booking.customer.email
    if booking.aircon_unit is not None:
        response.unit_brand = booking.aircon_unit.brand
        response.unit_model = booking.aircon_unit.model
        response.serial_number = booking.aircon_unit.serial_number
    return response

def to_status_response(result: StatusUpdateResult) -> BookingStatusResponse:
    return BookingStatusResponse(
        **to_booking_response(result.booking).model_dump(),
        service_record_id=result.service_record.id if result.service_record else None,
        warnings=result.warnings,
    )

# ============================================================================
# QUERIES
# ============================================================================

@router.get("", response_model=list[BookingResponse])
async def get_bookings(
    _: User = Depends(require_permission("bookings", "read")),
    service: BookingService = Depends(get_booking_service),
):
    """Get all bookings, newest first"""
    return [to_booking_response(b) for b in service.get_bookings()]

@router.get("/filter", response_model=list[BookingResponse])
async def get_bookings_with_filters(
    customer_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
    service_type: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    _: User = Depends(require_permission("bookings", "read")),
    service: BookingService = Depends(get_booking_service),
):
    """Get bookings matching the given filters"""
    bookings = service.get_bookings_with_filters(
        customer_id=customer_id,
        status=status,
        service_type=service_type,
        start_date=start_date,
        end_date=end_date,
    )
    return [to_booking_response(b) for b in bookings]

@router.get("/customer/{customer_id}", response_model=list[BookingResponse])
async def get_bookings_by_customer(
    customer_id: int,
    _: User = Depends(require_permission("bookings", "read")),
    service: BookingService = Depends(get_booking_service),
):
    return [to_booking_response(b) for b in service.get_bookings_by_customer(customer_id)]

@router.get("/status/{status}", response_model=list[BookingResponse])
async def get_bookings_by_status(
    status: str,
    _: User = Depends(require_permission("bookings", "read")),
    service: BookingService = Depends(get_booking_service),
):
    return [to_booking_response(b) for b in service.get_bookings_by_status(status)]

@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("bookings", "read")),
    service: BookingService = Depends(get_booking_service),
):
    return to_booking_response(service.get_booking(booking_id))

# ============================================================================
# MUTATIONS
# ============================================================================

@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    _: User = Depends(require_permission("bookings", "create")),
    service: BookingService = Depends(get_booking_service),
):
    """Create a booking in pending status"""
    return to_booking_response(service.create_booking(data))

@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    data: BookingUpdate,
    booking_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("bookings", "update")),
    service: BookingService = Depends(get_booking_service),
):
    """Edit booking fields"""
    return to_booking_response(service.update_booking(booking_id, data))

@router.put("/{booking_id}/status", response_model=BookingStatusResponse)
async def update_booking_status(
    data: BookingStatusUpdate,
    booking_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("bookings", "update")),
    service: BookingService = Depends(get_booking_service),
):
    """Change booking status; completing a booking generates its service record"""
    return to_status_response(service.update_status(booking_id, data.status))

@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("bookings", "delete")),
    service: BookingService = Depends(get_booking_service),
):
    return service.delete_booking(booking_id)
