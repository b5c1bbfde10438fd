"""Booking assignment repository"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models_booking import Booking, BookingAssignment


class AssignmentRepository:
    """Repository for booking assignment database operations"""

    @staticmethod
    def _query(db: Session):
        return db.query(BookingAssignment).options(
            joinedload(BookingAssignment.booking).joinedload(Booking.customer),
            joinedload(BookingAssignment.technician),
        )

    @staticmethod
    def get_assignments(db: Session) -> list[BookingAssignment]:
        return (
            AssignmentRepository._query(db)
            .order_by(BookingAssignment.assigned_date.desc(), BookingAssignment.id.desc())
            .all()
        )

    @staticmethod
    def get_assignment_by_id(db: Session, assignment_id: int) -> Optional[BookingAssignment]:
        return AssignmentRepository._query(db).filter(BookingAssignment.id == assignment_id).first()

    @staticmethod
    def get_assignment_by_booking_id(db: Session, booking_id: int) -> Optional[BookingAssignment]:
        return AssignmentRepository._query(db).filter(BookingAssignment.booking_id == booking_id).first()

    @staticmethod
    def get_assignments_by_technician_id(db: Session, technician_id: int) -> list[BookingAssignment]:
        return (
            AssignmentRepository._query(db)
            .filter(BookingAssignment.technician_id == technician_id)
            .order_by(BookingAssignment.scheduled_date.asc())
            .all()
        )

    @staticmethod
    def get_assignments_by_status(db: Session, status: str) -> list[BookingAssignment]:
        return (
            AssignmentRepository._query(db)
            .filter(BookingAssignment.status == status)
            .order_by(BookingAssignment.scheduled_date.asc())
            .all()
        )

    @staticmethod
    def get_assignments_by_date(db: Session, scheduled_date: date) -> list[BookingAssignment]:
        return (
            AssignmentRepository._query(db)
            .filter(BookingAssignment.scheduled_date == scheduled_date)
            .order_by(BookingAssignment.scheduled_time.asc())
            .all()
        )

    @staticmethod
    def create_assignment(db: Session, **assignment_data) -> BookingAssignment:
        """Add without committing; the caller commits with the booking change"""
        assignment = BookingAssignment(**assignment_data)
        db.add(assignment)
        return assignment

    @staticmethod
    def update_assignment(db: Session, assignment: BookingAssignment, **updates) -> BookingAssignment:
        for key, value in updates.items():
            if hasattr(assignment, key):
                setattr(assignment, key, value)
        db.commit()
        db.refresh(assignment)
        return assignment

    @staticmethod
    def delete_assignment(db: Session, assignment: BookingAssignment) -> None:
        db.delete(assignment)
        db.commit()
