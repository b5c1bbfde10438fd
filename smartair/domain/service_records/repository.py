"""Service record repository - Database operations for service records"""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import AirconUnit
from ...models_booking import ServiceRecord


class ServiceRecordRepository:
    """Repository for service record database operations"""

    @staticmethod
    def get_service_records(db: Session) -> list[ServiceRecord]:
        return db.query(ServiceRecord).order_by(ServiceRecord.id).all()

    @staticmethod
    def get_service_record_by_id(db: Session, record_id: int) -> Optional[ServiceRecord]:
        return db.query(ServiceRecord).filter(ServiceRecord.id == record_id).first()

    @staticmethod
    def get_service_records_by_booking_id(db: Session, booking_id: int) -> list[ServiceRecord]:
        """Records generated from a booking; used as the idempotency guard"""
        return db.query(ServiceRecord).filter(ServiceRecord.booking_id == booking_id).all()

    @staticmethod
    def get_service_records_by_aircon_unit_id(db: Session, aircon_unit_id: int) -> list[ServiceRecord]:
        return db.query(ServiceRecord).filter(ServiceRecord.aircon_unit_id == aircon_unit_id).all()

    @staticmethod
    def get_service_records_by_technician_id(db: Session, technician_id: int) -> list[ServiceRecord]:
        return db.query(ServiceRecord).filter(ServiceRecord.technician_id == technician_id).all()

    @staticmethod
    def get_service_records_by_customer_id(db: Session, customer_id: int) -> list[ServiceRecord]:
        return (
            db.query(ServiceRecord)
            .join(AirconUnit, ServiceRecord.aircon_unit_id == AirconUnit.id)
            .filter(AirconUnit.customer_id == customer_id)
            .order_by(ServiceRecord.service_date.desc())
            .all()
        )

    @staticmethod
    def get_service_records_by_due_date(
        db: Session, today: date, overdue: bool = False
    ) -> list[ServiceRecord]:
        """Open records whose next service is overdue, or upcoming (soonest first)"""
        query = db.query(ServiceRecord).filter(func.lower(ServiceRecord.status) != "completed")
        if overdue:
            return query.filter(ServiceRecord.next_due_date < today).all()
        return (
            query.filter(ServiceRecord.next_due_date >= today)
            .order_by(ServiceRecord.next_due_date.asc())
            .all()
        )

    @staticmethod
    def get_service_records_with_filters(
        db: Session,
        aircon_unit_id: Optional[int] = None,
        technician_id: Optional[int] = None,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ServiceRecord]:
        query = db.query(ServiceRecord)

        if aircon_unit_id:
            query = query.filter(ServiceRecord.aircon_unit_id == aircon_unit_id)
        if technician_id:
            query = query.filter(ServiceRecord.technician_id == technician_id)
        if status:
            query = query.filter(ServiceRecord.status == status)
        if start_date:
            query = query.filter(ServiceRecord.service_date >= start_date)
        if end_date:
            query = query.filter(ServiceRecord.service_date <= end_date)

        return query.order_by(ServiceRecord.service_date.desc()).all()

    @staticmethod
    def create_service_record(db: Session, **record_data) -> ServiceRecord:
        record = ServiceRecord(**record_data)
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def update_service_record(db: Session, record: ServiceRecord, **updates) -> ServiceRecord:
        for key, value in updates.items():
            if hasattr(record, key):
                setattr(record, key, value)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def delete_service_record(db: Session, record: ServiceRecord) -> None:
        db.delete(record)
        db.commit()

    @staticmethod
    def aircon_unit_exists(db: Session, aircon_unit_id: int) -> bool:
        return db.query(AirconUnit.id).filter(AirconUnit.id == aircon_unit_id).first() is not None
