"""Booking assignment service"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from ...models_booking import BookingAssignment
from ...services.booking_lifecycle import AssignmentStatusResult, BookingLifecycleService
from ...shared.errors import NotFound, ReferentialViolation
from ..bookings.repository import BookingRepository
from .repository import AssignmentRepository
from .schemas import AssignmentCreate, AssignmentUpdate

logger = logging.getLogger(__name__)


class AssignmentService:
    """Service layer for technician assignments"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AssignmentRepository()
        self.lifecycle = BookingLifecycleService(db)

    def get_assignments(self) -> list[BookingAssignment]:
        return self.repo.get_assignments(self.db)

    def get_assignment(self, assignment_id: int) -> BookingAssignment:
        assignment = self.repo.get_assignment_by_id(self.db, assignment_id)
        if not assignment:
            raise NotFound("Booking assignment not found")
        return assignment

    def get_assignment_for_booking(self, booking_id: int) -> BookingAssignment:
        assignment = self.repo.get_assignment_by_booking_id(self.db, booking_id)
        if not assignment:
            raise NotFound("No assignment found for this booking")
        return assignment

    def get_assignments_by_technician(self, technician_id: int) -> list[BookingAssignment]:
        return self.repo.get_assignments_by_technician_id(self.db, technician_id)

    def get_assignments_by_status(self, status: str) -> list[BookingAssignment]:
        return self.repo.get_assignments_by_status(self.db, status)

    def get_assignments_by_date(self, scheduled_date: date) -> list[BookingAssignment]:
        return self.repo.get_assignments_by_date(self.db, scheduled_date)

    def create_assignment(self, data: AssignmentCreate) -> BookingAssignment:
        assignment = self.lifecycle.assign_technician(
            data.booking_id,
            data.technician_id,
            scheduled_date=data.scheduled_date,
            scheduled_time=data.scheduled_time,
            notes=data.notes,
        )
        return self.get_assignment(assignment.id)

    def update_assignment(self, assignment_id: int, data: AssignmentUpdate) -> AssignmentStatusResult:
        """
        Edit assignment fields. A status change is routed through the
        lifecycle so completing here cascades to the booking as well.
        """
        assignment = self.get_assignment(assignment_id)
        updates = data.model_dump(exclude_unset=True)
        new_status = updates.pop("status", None)

        technician_id = updates.get("technician_id")
        if technician_id is not None and not BookingRepository.technician_exists(self.db, technician_id):
            raise ReferentialViolation(f"Technician with id {technician_id} does not exist.")

        if updates:
            assignment = self.repo.update_assignment(self.db, assignment, **updates)

        if new_status is not None and new_status != assignment.status:
            return self.lifecycle.update_assignment_status(assignment_id, new_status)
        return AssignmentStatusResult(assignment=assignment)

    def update_status(self, assignment_id: int, status) -> AssignmentStatusResult:
        return self.lifecycle.update_assignment_status(assignment_id, status)

    def delete_assignment(self, assignment_id: int) -> dict:
        assignment = self.get_assignment(assignment_id)
        self.repo.delete_assignment(self.db, assignment)
        logger.info(f"🗑️ Assignment {assignment_id} deleted")
        return {"message": "Booking assignment deleted successfully!"}
