"""Booking repository - Database operations for bookings"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import AirconUnit, Customer, Technician
from ...models_booking import Booking


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def _query(db: Session):
        return db.query(Booking).options(
            joinedload(Booking.customer), joinedload(Booking.aircon_unit)
        )

    @staticmethod
    def get_bookings(db: Session) -> list[Booking]:
        """Get all bookings, newest first"""
        return BookingRepository._query(db).order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        return BookingRepository._query(db).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_bookings_by_customer_id(db: Session, customer_id: int) -> list[Booking]:
        return (
            BookingRepository._query(db)
            .filter(Booking.customer_id == customer_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all()
        )

    @staticmethod
    def get_bookings_by_status(db: Session, status: str) -> list[Booking]:
        return (
            BookingRepository._query(db)
            .filter(Booking.status == status)
            .order_by(Booking.preferred_date.asc())
            .all()
        )

    @staticmethod
    def get_bookings_with_filters(
        db: Session,
        customer_id: Optional[int] = None,
        status: Optional[str] = None,
        service_type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Booking]:
        """Get bookings matching every filter that is set"""
        query = BookingRepository._query(db)

        if customer_id:
            query = query.filter(Booking.customer_id == customer_id)
        if status:
            query = query.filter(Booking.status == status)
        if service_type:
            query = query.filter(Booking.service_type == service_type)
        if start_date:
            query = query.filter(Booking.preferred_date >= start_date)
        if end_date:
            query = query.filter(Booking.preferred_date <= end_date)

        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def get_bookings_in_range(db: Session, start_date: date, end_date: date) -> list[Booking]:
        """Bookings whose preferred_date falls in [start_date, end_date]"""
        return (
            db.query(Booking)
            .filter(Booking.preferred_date >= start_date, Booking.preferred_date <= end_date)
            .all()
        )

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        booking = Booking(**booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def update_booking(db: Session, booking: Booking, **updates) -> Booking:
        """Update a booking with provided fields"""
        for key, value in updates.items():
            if hasattr(booking, key):
                setattr(booking, key, value)
        booking.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def update_booking_status(db: Session, booking: Booking, status: str) -> Booking:
        booking.status = status
        booking.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def delete_booking(db: Session, booking: Booking) -> None:
        """Hard delete; the assignment goes with it"""
        db.delete(booking)
        db.commit()

    # Referential checks
    @staticmethod
    def customer_exists(db: Session, customer_id: int) -> bool:
        return db.query(Customer.id).filter(Customer.id == customer_id).first() is not None

    @staticmethod
    def technician_exists(db: Session, technician_id: int) -> bool:
        return db.query(Technician.id).filter(Technician.id == technician_id).first() is not None

    @staticmethod
    def unit_belongs_to_customer(db: Session, aircon_unit_id: int, customer_id: int) -> bool:
        return (
            db.query(AirconUnit.id)
            .filter(AirconUnit.id == aircon_unit_id, AirconUnit.customer_id == customer_id)
            .first()
            is not None
        )
