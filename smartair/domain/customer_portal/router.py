"""Customer self-service router"""

from datetime import date

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..bookings.router import to_booking_response, to_status_response
from ..bookings.schemas import (
    BookingCreate,
    BookingDetailsUpdate,
    BookingResponse,
    BookingStatusResponse,
)
from ..service_records.schemas import ServiceRecordResponse
from .service import CustomerPortalService

router = APIRouter(prefix="/api/customer", tags=["Customer"])


def get_portal_service(db: Session = Depends(get_db)) -> CustomerPortalService:
    """Dependency injection for CustomerPortalService"""
    return CustomerPortalService(db)


@router.get("/bookings", response_model=list[BookingResponse])
async def get_my_bookings(
    current_user: User = Depends(get_current_user),
    service: CustomerPortalService = Depends(get_portal_service),
):
    return [to_booking_response(b) for b in service.get_my_bookings(current_user)]


@router.post("/bookings", response_model=BookingResponse, status_code=201)
async def create_my_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: CustomerPortalService = Depends(get_portal_service),
):
    return to_booking_response(service.create_my_booking(current_user, data))


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_my_booking(
    booking_id: int = Path(..., gt=0),
    current_user: User = Depends(get_current_user),
    service: CustomerPortalService = Depends(get_portal_service),
):
    return to_booking_response(service.get_my_booking(current_user, booking_id))


@router.put("/bookings/{booking_id}", response_model=BookingResponse)
async def update_my_booking(
    data: BookingDetailsUpdate,
    booking_id: int = Path(..., gt=0),
    current_user: User = Depends(get_current_user),
    service: CustomerPortalService = Depends(get_portal_service),
):
    return to_booking_response(service.update_my_booking(current_user, booking_id, data))


@router.put("/bookings/{booking_id}/cancel", response_model=BookingStatusResponse)
async def cancel_my_booking(
    booking_id: int = Path(..., gt=0),
    current_user: User = Depends(get_current_user),
    service: CustomerPortalService = Depends(get_portal_service),
):
    return to_status_response(service.cancel_my_booking(current_user, booking_id))


@router.get("/availability")
async def get_booking_availability(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    _: User = Depends(get_current_user),
    service: CustomerPortalService = Depends(get_portal_service),
) -> dict[str, dict[str, int]]:
    """Booked count per date and slot; dates with no bookings are omitted"""
    return service.get_availability(start_date, end_date)


@router.get("/availability/calendar")
async def get_booking_calendar(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    _: User = Depends(get_current_user),
    service: CustomerPortalService = Depends(get_portal_service),
) -> list[dict]:
    return service.get_calendar(start_date, end_date)


@router.get("/service-records", response_model=list[ServiceRecordResponse])
async def get_my_service_history(
    current_user: User = Depends(get_current_user),
    service: CustomerPortalService = Depends(get_portal_service),
):
    return service.get_my_service_history(current_user)
