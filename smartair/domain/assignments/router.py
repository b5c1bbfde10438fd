"""Booking assignment router"""

from datetime import date

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import User
from ...models_booking import BookingAssignment
from ...permissions import require_permission
from ...services.booking_lifecycle import AssignmentStatusResult
from .schemas import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentStatusResponse,
    AssignmentStatusUpdate,
    AssignmentUpdate,
)
from .service import AssignmentService

router = APIRouter(prefix="/api/booking-assignments", tags=["Booking Assignments"])


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    """Dependency injection for AssignmentService"""
    return AssignmentService(db)


def to_assignment_response(assignment: BookingAssignment) -> AssignmentResponse:
    response = AssignmentResponse.model_validate(assignment)
    if assignment.technician is not None:
        response.technician_name = assignment.technician.name
    booking = assignment.booking
    if booking is not None:
        response.service_type = booking.service_type
        response.preferred_date = booking.preferred_date
        response.preferred_time = booking.preferred_time
        response.service_address = booking.service_address
        response.booking_status = booking.status
        if booking.customer is not None:
            response.customer_name = booking.customer.name
    return response


def to_status_response(result: AssignmentStatusResult) -> AssignmentStatusResponse:
    return AssignmentStatusResponse(
        **to_assignment_response(result.assignment).model_dump(),
        service_record_id=result.service_record.id if result.service_record else None,
        warnings=result.warnings,
    )


@router.get("", response_model=list[AssignmentResponse])
async def get_assignments(
    _: User = Depends(require_permission("bookingAssignments", "read")),
    service: AssignmentService = Depends(get_assignment_service),
):
    return [to_assignment_response(a) for a in service.get_assignments()]


@router.get("/date/{scheduled_date}", response_model=list[AssignmentResponse])
async def get_assignments_by_date(
    scheduled_date: date,
    _: User = Depends(require_permission("bookingAssignments", "read")),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Assignments scheduled on a given YYYY-MM-DD date"""
    return [to_assignment_response(a) for a in service.get_assignments_by_date(scheduled_date)]


@router.get("/booking/{booking_id}", response_model=AssignmentResponse)
async def get_assignment_for_booking(
    booking_id: int,
    _: User = Depends(require_permission("bookingAssignments", "read")),
    service: AssignmentService = Depends(get_assignment_service),
):
    return to_assignment_response(service.get_assignment_for_booking(booking_id))


@router.get("/technician/{technician_id}", response_model=list[AssignmentResponse])
async def get_assignments_by_technician(
    technician_id: int,
    _: User = Depends(require_permission("bookingAssignments", "read")),
    service: AssignmentService = Depends(get_assignment_service),
):
    return [to_assignment_response(a) for a in service.get_assignments_by_technician(technician_id)]


@router.get("/status/{status}", response_model=list[AssignmentResponse])
async def get_assignments_by_status(
    status: str,
    _: User = Depends(require_permission("bookingAssignments", "read")),
    service: AssignmentService = Depends(get_assignment_service),
):
    return [to_assignment_response(a) for a in service.get_assignments_by_status(status)]


@router.get("/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment(
    assignment_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("bookingAssignments", "read")),
    service: AssignmentService = Depends(get_assignment_service),
):
    return to_assignment_response(service.get_assignment(assignment_id))


@router.post("", response_model=AssignmentResponse, status_code=201)
async def create_assignment(
    data: AssignmentCreate,
    _: User = Depends(require_permission("bookingAssignments", "create")),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Assign a technician to a booking; the booking moves to assigned"""
    return to_assignment_response(service.create_assignment(data))


@router.put("/{assignment_id}", response_model=AssignmentStatusResponse)
async def update_assignment(
    data: AssignmentUpdate,
    assignment_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("bookingAssignments", "update")),
    service: AssignmentService = Depends(get_assignment_service),
):
    return to_status_response(service.update_assignment(assignment_id, data))


@router.put("/{assignment_id}/status", response_model=AssignmentStatusResponse)
async def update_assignment_status(
    data: AssignmentStatusUpdate,
    assignment_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("bookingAssignments", "update")),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Change assignment status; completed cascades to the booking"""
    return to_status_response(service.update_status(assignment_id, data.status))


@router.delete("/{assignment_id}")
async def delete_assignment(
    assignment_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("bookingAssignments", "delete")),
    service: AssignmentService = Depends(get_assignment_service),
):
    return service.delete_assignment(assignment_id)
