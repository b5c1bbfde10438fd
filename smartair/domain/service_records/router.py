"""Service record router"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import User
from ...permissions import require_permission
from ...shared.errors import InvalidRange
from .schemas import ServiceRecordCreate, ServiceRecordResponse, ServiceRecordUpdate
from .service import ServiceRecordService

router = APIRouter(prefix="/api/servicerecords", tags=["Service Records"])


def get_service_record_service(db: Session = Depends(get_db)) -> ServiceRecordService:
    """Dependency injection for ServiceRecordService"""
    return ServiceRecordService(db)


@router.get("", response_model=list[ServiceRecordResponse])
async def get_service_records(
    aircon_unit_id: Optional[int] = Query(None),
    technician_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    _: User = Depends(require_permission("serviceRecords", "read")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    """List service records, optionally filtered"""
    if start_date and end_date and end_date < start_date:
        raise InvalidRange("end_date must not be before start_date")
    return service.get_service_records(
        aircon_unit_id=aircon_unit_id,
        technician_id=technician_id,
        status=status,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/duedate", response_model=list[ServiceRecordResponse])
async def get_service_records_by_due_date(
    overdue: bool = Query(False),
    _: User = Depends(require_permission("serviceRecords", "read")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    """Open records that are overdue, or upcoming soonest first"""
    return service.get_due(overdue=overdue)


@router.get("/booking/{booking_id}", response_model=list[ServiceRecordResponse])
async def get_service_records_by_booking(
    booking_id: int,
    _: User = Depends(require_permission("serviceRecords", "read")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    return service.get_by_booking(booking_id)


@router.get("/airconunit/{aircon_unit_id}", response_model=list[ServiceRecordResponse])
async def get_service_records_by_unit(
    aircon_unit_id: int,
    _: User = Depends(require_permission("serviceRecords", "read")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    return service.get_by_aircon_unit(aircon_unit_id)


@router.get("/technician/{technician_id}", response_model=list[ServiceRecordResponse])
async def get_service_records_by_technician(
    technician_id: int,
    _: User = Depends(require_permission("serviceRecords", "read")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    return service.get_by_technician(technician_id)


@router.get("/{record_id}", response_model=ServiceRecordResponse)
async def get_service_record(
    record_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("serviceRecords", "read")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    return service.get_service_record(record_id)


@router.post("", response_model=ServiceRecordResponse, status_code=201)
async def create_service_record(
    data: ServiceRecordCreate,
    _: User = Depends(require_permission("serviceRecords", "create")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    return service.create_service_record(data)


@router.put("/{record_id}", response_model=ServiceRecordResponse)
async def update_service_record(
    data: ServiceRecordUpdate,
    record_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("serviceRecords", "update")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    return service.update_service_record(record_id, data)


@router.delete("/{record_id}")
async def delete_service_record(
    record_id: int = Path(..., gt=0),
    _: User = Depends(require_permission("serviceRecords", "delete")),
    service: ServiceRecordService = Depends(get_service_record_service),
):
    return service.delete_service_record(record_id)
