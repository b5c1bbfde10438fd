"""
Booking lifecycle

Owns booking status changes, technician assignment and the service record
generated when a booking is completed.

Booking statuses: pending → confirmed → assigned → in_progress → completed,
with cancelled reachable from anywhere. Transitions are not restricted: any
status in the set may be written over any other, including reopening a
completed or cancelled booking.

A booking reaches completed either directly or through its assignment.
Both paths run the same service record step, which is guarded so that one
booking yields at most one generated record. That step is best-effort: a
failure is logged and reported back as a warning, and never undoes the
status change that triggered it.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.assignments.repository import AssignmentRepository
from ..domain.bookings.repository import BookingRepository
from ..domain.service_records.repository import ServiceRecordRepository
from ..domain.service_records.service import calculate_next_service_date
from ..models_booking import (
    ASSIGNMENT_STATUSES,
    BOOKING_STATUSES,
    Booking,
    BookingAssignment,
    ServiceRecord,
)
from ..shared.errors import Conflict, InvalidStatus, NotFound

logger = logging.getLogger(__name__)


@dataclass
class StatusUpdateResult:
    """Outcome of a booking status change plus its side-effect diagnostics"""

    booking: Booking
    service_record: Optional[ServiceRecord] = None
    service_record_created: bool = False
    warnings: list[str] = field(default_factory=list)


@dataclass
class AssignmentStatusResult:
    assignment: BookingAssignment
    booking_result: Optional[StatusUpdateResult] = None

    @property
    def warnings(self) -> list[str]:
        return self.booking_result.warnings if self.booking_result else []

    @property
    def service_record(self) -> Optional[ServiceRecord]:
        return self.booking_result.service_record if self.booking_result else None


class BookingLifecycleService:
    """Status machine and side effects for bookings and their assignments"""

    def __init__(self, db: Session):
        self.db = db
        self.bookings = BookingRepository()
        self.assignments = AssignmentRepository()
        self.service_records = ServiceRecordRepository()

    def update_status(self, booking_id: int, new_status: Optional[str]) -> StatusUpdateResult:
        """Set a booking's status; completing it generates the first service record"""
        if new_status not in BOOKING_STATUSES:
            raise InvalidStatus(new_status, BOOKING_STATUSES)

        booking = self.bookings.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise NotFound("Booking not found")

        previous = booking.status
        booking = self.bookings.update_booking_status(self.db, booking, new_status)
        logger.info(f"🔄 Booking #{booking_id} status: {previous} → {new_status}")

        result = StatusUpdateResult(booking=booking)
        if new_status == "completed":
            self._ensure_service_record(booking, result)
        return result

    def assign_technician(
        self,
        booking_id: int,
        technician_id: int,
        scheduled_date: Optional[date] = None,
        scheduled_time: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> BookingAssignment:
        """Create the booking's single assignment and move the booking to assigned"""
        booking = self.bookings.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise NotFound(f"Booking with id {booking_id} does not exist.")

        if not self.bookings.technician_exists(self.db, technician_id):
            raise NotFound(f"Technician with id {technician_id} does not exist.")

        if self.assignments.get_assignment_by_booking_id(self.db, booking_id):
            raise Conflict(f"Booking {booking_id} is already assigned.")

        assignment = self.assignments.create_assignment(
            self.db,
            booking_id=booking_id,
            technician_id=technician_id,
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            notes=notes,
            status="assigned",
        )
        booking.status = "assigned"
        booking.updated_at = datetime.utcnow()

        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost the race against a concurrent assignment; booking_id is unique
            self.db.rollback()
            logger.warning(f"⚠️ Concurrent assignment detected for booking #{booking_id}: {e}")
            raise Conflict(f"Booking {booking_id} is already assigned.") from e

        self.db.refresh(assignment)
        logger.info(f"👷 Technician {technician_id} assigned to booking #{booking_id}")
        return assignment

    def update_assignment_status(
        self, assignment_id: int, new_status: Optional[str]
    ) -> AssignmentStatusResult:
        """Set an assignment's status; completing it also completes the booking"""
        if new_status not in ASSIGNMENT_STATUSES:
            raise InvalidStatus(new_status, ASSIGNMENT_STATUSES)

        assignment = self.assignments.get_assignment_by_id(self.db, assignment_id)
        if not assignment:
            raise NotFound("Booking assignment not found")

        assignment = self.assignments.update_assignment(self.db, assignment, status=new_status)
        logger.info(f"🔄 Assignment {assignment_id} status → {new_status}")

        result = AssignmentStatusResult(assignment=assignment)
        if new_status == "completed":
            result.booking_result = self.update_status(assignment.booking_id, "completed")
            self.db.refresh(assignment)
        return result

    def _ensure_service_record(self, booking: Booking, result: StatusUpdateResult) -> None:
        """Create the completion record unless this booking already has one"""
        booking_id = booking.id
        try:
            existing = self.service_records.get_service_records_by_booking_id(self.db, booking_id)
            if existing:
                logger.info(f"ℹ️ Service record already exists for booking #{booking_id}")
                result.service_record = existing[0]
                return

            if booking.aircon_unit_id is None:
                raise ValueError("booking has no aircon unit on file")

            technician_id = booking.technician_id
            if technician_id is None and booking.assignment is not None:
                technician_id = booking.assignment.technician_id

            record = self.service_records.create_service_record(
                self.db,
                booking_id=booking_id,
                aircon_unit_id=booking.aircon_unit_id,
                service_date=booking.preferred_date,
                description=f"{booking.service_type} service completed for booking #{booking_id}",
                technician_id=technician_id,
                next_due_date=calculate_next_service_date(booking.preferred_date, booking.service_type),
                status="completed",
                cost=0.00,  # placeholder, edited later by staff
            )
            result.service_record = record
            result.service_record_created = True
            logger.info(f"✅ Auto-created service record {record.id} for booking #{booking_id}")
        except (SQLAlchemyError, ValueError) as e:
            self.db.rollback()
            logger.error(f"⚠️ Failed to create service record for booking #{booking_id}: {e}")
            result.warnings.append(f"Failed to create service record for booking #{booking_id}: {e}")
