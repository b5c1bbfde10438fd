"""Booking service - Business logic for booking operations"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models_booking import Booking
from ...services.booking_lifecycle import BookingLifecycleService, StatusUpdateResult
from ...shared.errors import NotFound, ReferentialViolation
from .repository import BookingRepository
from .schemas import BookingCreate, BookingDetailsUpdate

logger = logging.getLogger(__name__)

# Columns that an explicit null in an edit must not clear
REQUIRED_FIELDS = {
    "service_type",
    "preferred_date",
    "preferred_time",
    "service_address",
    "contact_phone",
    "status",
}


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.lifecycle = BookingLifecycleService(db)

    def get_bookings(self) -> list[Booking]:
        return self.repo.get_bookings(self.db)

    def get_booking(self, booking_id: int) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise NotFound("Booking not found")
        return booking

    def get_bookings_by_customer(self, customer_id: int) -> list[Booking]:
        return self.repo.get_bookings_by_customer_id(self.db, customer_id)

    def get_bookings_by_status(self, status: str) -> list[Booking]:
        return self.repo.get_bookings_by_status(self.db, status)

    def get_bookings_with_filters(
        self,
        customer_id: Optional[int] = None,
        status: Optional[str] = None,
        service_type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Booking]:
        return self.repo.get_bookings_with_filters(
            self.db,
            customer_id=customer_id,
            status=status,
            service_type=service_type,
            start_date=start_date,
            end_date=end_date,
        )

    def create_booking(self, data: BookingCreate, customer_id: Optional[int] = None) -> Booking:
        """Create a pending booking after checking the customer, unit and technician"""
        booking_data = data.model_dump()
        if customer_id is not None:
            booking_data["customer_id"] = customer_id

        customer_id = booking_data.get("customer_id")
        if customer_id is None:
            raise ReferentialViolation("Customer ID is required")
        if not self.repo.customer_exists(self.db, customer_id):
            raise ReferentialViolation(f"Customer with id {customer_id} does not exist in database.")

        unit_id = booking_data.get("aircon_unit_id")
        if unit_id and not self.repo.unit_belongs_to_customer(self.db, unit_id, customer_id):
            raise ReferentialViolation(
                f"Aircon unit with id {unit_id} does not exist or does not belong to this customer."
            )

        self._check_technician(booking_data.get("technician_id"))

        booking_data["status"] = "pending"
        booking = self.repo.create_booking(self.db, **booking_data)
        logger.info(f"📥 Booking #{booking.id} created for customer {customer_id}")
        return self.get_booking(booking.id)

    def update_booking(self, booking_id: int, data: BookingDetailsUpdate) -> Booking:
        """
        Edit booking fields. A status sent here is stored as-is; lifecycle
        side effects only run through update_status.
        """
        booking = self.get_booking(booking_id)
        updates = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in REQUIRED_FIELDS
        }

        if "technician_id" in updates:
            self._check_technician(updates["technician_id"])

        return self.repo.update_booking(self.db, booking, **updates)

    def update_status(self, booking_id: int, status: Optional[str]) -> StatusUpdateResult:
        return self.lifecycle.update_status(booking_id, status)

    def delete_booking(self, booking_id: int) -> dict:
        booking = self.get_booking(booking_id)
        self.repo.delete_booking(self.db, booking)
        logger.info(f"🗑️ Booking #{booking_id} deleted")
        return {"message": "Booking deleted successfully!"}

    def _check_technician(self, technician_id: Optional[int]) -> None:
        if technician_id and not self.repo.technician_exists(self.db, technician_id):
            raise ReferentialViolation(f"Technician with id {technician_id} does not exist.")
