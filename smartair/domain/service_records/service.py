"""Service record service - CRUD plus the next-due-date rule"""

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...models_booking import ServiceRecord
from ...shared.errors import NotFound, ReferentialViolation
from ..bookings.repository import BookingRepository
from .repository import ServiceRecordRepository
from .schemas import ServiceRecordCreate, ServiceRecordUpdate

logger = logging.getLogger(__name__)

# Months until the next service is due, keyed by the completed service type
NEXT_SERVICE_MONTHS = {
    "maintenance": 3,
    "repair": 6,
    "installation": 1,  # first check after install
    "inspection": 6,
}
DEFAULT_NEXT_SERVICE_MONTHS = 3


def add_months(start: date, months: int) -> date:
    """
    Add calendar months, rolling day overflow into the following month.

    A day that does not exist in the target month is normalised forward:
    2025-01-31 plus one month is 2025-03-03, not 2025-02-28.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=start.day - 1)


def calculate_next_service_date(service_date: date, service_type: Optional[str]) -> date:
    months = NEXT_SERVICE_MONTHS.get((service_type or "").lower(), DEFAULT_NEXT_SERVICE_MONTHS)
    return add_months(service_date, months)


class ServiceRecordService:
    """Service layer for service record operations"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRecordRepository()

    def get_service_records(self, **filters) -> list[ServiceRecord]:
        if any(value is not None for value in filters.values()):
            return self.repo.get_service_records_with_filters(self.db, **filters)
        return self.repo.get_service_records(self.db)

    def get_service_record(self, record_id: int) -> ServiceRecord:
        record = self.repo.get_service_record_by_id(self.db, record_id)
        if not record:
            raise NotFound("Service record not found")
        return record

    def get_by_booking(self, booking_id: int) -> list[ServiceRecord]:
        return self.repo.get_service_records_by_booking_id(self.db, booking_id)

    def get_by_aircon_unit(self, aircon_unit_id: int) -> list[ServiceRecord]:
        return self.repo.get_service_records_by_aircon_unit_id(self.db, aircon_unit_id)

    def get_by_technician(self, technician_id: int) -> list[ServiceRecord]:
        return self.repo.get_service_records_by_technician_id(self.db, technician_id)

    def get_by_customer(self, customer_id: int) -> list[ServiceRecord]:
        return self.repo.get_service_records_by_customer_id(self.db, customer_id)

    def get_due(self, overdue: bool = False, today: Optional[date] = None) -> list[ServiceRecord]:
        return self.repo.get_service_records_by_due_date(self.db, today or date.today(), overdue)

    def create_service_record(self, data: ServiceRecordCreate) -> ServiceRecord:
        self._check_references(data.aircon_unit_id, data.technician_id)
        record = self.repo.create_service_record(self.db, **data.model_dump())
        logger.info(f"📝 Service record {record.id} created for unit {record.aircon_unit_id}")
        return record

    def update_service_record(self, record_id: int, data: ServiceRecordUpdate) -> ServiceRecord:
        record = self.get_service_record(record_id)
        updates = data.model_dump(exclude_unset=True)
        self._check_references(updates.get("aircon_unit_id"), updates.get("technician_id"))
        return self.repo.update_service_record(self.db, record, **updates)

    def delete_service_record(self, record_id: int) -> dict:
        record = self.get_service_record(record_id)
        self.repo.delete_service_record(self.db, record)
        return {"message": "Service record deleted successfully!"}

    def _check_references(self, aircon_unit_id: Optional[int], technician_id: Optional[int]) -> None:
        if aircon_unit_id is not None and not self.repo.aircon_unit_exists(self.db, aircon_unit_id):
            raise ReferentialViolation(f"Aircon unit with id {aircon_unit_id} does not exist.")
        if technician_id is not None and not BookingRepository.technician_exists(self.db, technician_id):
            raise ReferentialViolation(f"Technician with id {technician_id} does not exist.")
