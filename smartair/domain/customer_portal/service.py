"""Customer self-service - bookings and history scoped to the caller's profile"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from ...models import Customer, User
from ...models_booking import Booking, ServiceRecord
from ...services.booking_lifecycle import StatusUpdateResult
from ...shared.errors import Forbidden, NotFound
from ..bookings.schemas import BookingCreate, BookingDetailsUpdate
from ..bookings.service import BookingService
from ..scheduling.availability_service import AvailabilityService
from ..service_records.service import ServiceRecordService

logger = logging.getLogger(__name__)


class CustomerPortalService:
    def __init__(self, db: Session):
        self.db = db
        self.bookings = BookingService(db)
        self.availability = AvailabilityService(db)
        self.service_records = ServiceRecordService(db)

    def get_customer(self, user: User) -> Customer:
        customer = self.db.query(Customer).filter(Customer.user_id == user.id).first()
        if not customer:
            raise NotFound("Customer profile not found")
        return customer

    def get_my_bookings(self, user: User) -> list[Booking]:
        customer = self.get_customer(user)
        return self.bookings.get_bookings_by_customer(customer.id)

    def create_my_booking(self, user: User, data: BookingCreate) -> Booking:
        customer = self.get_customer(user)
        # Technicians are assigned by staff; customer_id comes from the caller profile below
        data = data.model_copy(update={"technician_id": None})
        return self.bookings.create_booking(data, customer_id=customer.id)

    def get_my_booking(self, user: User, booking_id: int) -> Booking:
        customer = self.get_customer(user)
        booking = self.bookings.get_booking(booking_id)
        if booking.customer_id != customer.id:
            logger.warning(f"🚫 Customer {customer.id} tried to access booking #{booking_id}")
            raise Forbidden("Access denied. This booking does not belong to you.")
        return booking

    def update_my_booking(self, user: User, booking_id: int, data: BookingDetailsUpdate) -> Booking:
        self.get_my_booking(user, booking_id)
        return self.bookings.update_booking(booking_id, data)

    def cancel_my_booking(self, user: User, booking_id: int) -> StatusUpdateResult:
        self.get_my_booking(user, booking_id)
        return self.bookings.update_status(booking_id, "cancelled")

    def get_my_service_history(self, user: User) -> list[ServiceRecord]:
        customer = self.get_customer(user)
        return self.service_records.get_by_customer(customer.id)

    def get_availability(self, start_date: date, end_date: date) -> dict[str, dict[str, int]]:
        return self.availability.get_availability(start_date, end_date)

    def get_calendar(self, start_date: date, end_date: date) -> list[dict]:
        return self.availability.get_calendar(start_date, end_date)
