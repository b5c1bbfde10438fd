"""
Tests for booking status changes, technician assignment and the
service record generated on completion
"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from smartair.models_booking import BOOKING_STATUSES, BookingAssignment, ServiceRecord
from smartair.services.booking_lifecycle import BookingLifecycleService
from smartair.shared.errors import Conflict, InvalidStatus, NotFound


def records_for(db, booking_id):
    return db.query(ServiceRecord).filter(ServiceRecord.booking_id == booking_id).all()


@pytest.mark.unit
class TestStatusTransitions:
    """Any status in the set may follow any other"""

    def test_every_pair_of_statuses_is_accepted(self, db, make_booking, seed):
        booking = make_booking(aircon_unit_id=None)
        lifecycle = BookingLifecycleService(db)

        for status in BOOKING_STATUSES:
            for following in BOOKING_STATUSES:
                lifecycle.update_status(booking.id, status)
                result = lifecycle.update_status(booking.id, following)
                assert result.booking.status == following

    def test_cancelled_booking_can_be_reopened(self, db, make_booking):
        booking = make_booking(status="cancelled")
        result = BookingLifecycleService(db).update_status(booking.id, "pending")
        assert result.booking.status == "pending"
        assert result.service_record is None
        assert result.warnings == []

    def test_unknown_status_rejected(self, db, make_booking):
        booking = make_booking()
        with pytest.raises(InvalidStatus) as exc_info:
            BookingLifecycleService(db).update_status(booking.id, "done")

        assert exc_info.value.status_code == 400
        assert "completed" in exc_info.value.detail["validStatuses"]
        db.refresh(booking)
        assert booking.status == "pending"

    def test_missing_status_rejected(self, db, make_booking):
        booking = make_booking()
        with pytest.raises(InvalidStatus):
            BookingLifecycleService(db).update_status(booking.id, None)

    def test_status_checked_before_booking_lookup(self, db, seed):
        with pytest.raises(InvalidStatus):
            BookingLifecycleService(db).update_status(9999, "bogus")

    def test_unknown_booking(self, db, seed):
        with pytest.raises(NotFound) as exc_info:
            BookingLifecycleService(db).update_status(9999, "confirmed")
        assert exc_info.value.status_code == 404


@pytest.mark.unit
class TestCompletionServiceRecord:
    """Completing a booking generates exactly one service record"""

    def test_maintenance_booking_generates_record(self, db, make_booking, seed):
        booking = make_booking(
            service_type="maintenance",
            preferred_date=date(2025, 6, 15),
            technician_id=seed["technician"].id,
            status="in_progress",
        )

        result = BookingLifecycleService(db).update_status(booking.id, "completed")

        assert result.booking.status == "completed"
        assert result.service_record_created is True
        assert result.warnings == []

        record = result.service_record
        assert record.booking_id == booking.id
        assert record.aircon_unit_id == seed["unit"].id
        assert record.technician_id == seed["technician"].id
        assert record.service_date == date(2025, 6, 15)
        assert record.next_due_date == date(2025, 9, 15)
        assert record.status == "completed"
        assert Decimal(record.cost) == Decimal("0.00")
        assert record.description == f"maintenance service completed for booking #{booking.id}"

    def test_installation_due_date_rolls_past_short_month(self, db, make_booking):
        booking = make_booking(service_type="installation", preferred_date=date(2025, 1, 31))

        result = BookingLifecycleService(db).update_status(booking.id, "completed")

        assert result.service_record.next_due_date == date(2025, 3, 3)

    def test_completing_twice_keeps_single_record(self, db, make_booking):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)

        first = lifecycle.update_status(booking.id, "completed")
        lifecycle.update_status(booking.id, "in_progress")
        second = lifecycle.update_status(booking.id, "completed")

        assert first.service_record_created is True
        assert second.service_record_created is False
        assert second.service_record.id == first.service_record.id
        assert len(records_for(db, booking.id)) == 1

    def test_completed_twice_in_a_row(self, db, make_booking):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)

        lifecycle.update_status(booking.id, "completed")
        repeat = lifecycle.update_status(booking.id, "completed")

        assert repeat.service_record_created is False
        assert repeat.warnings == []
        assert len(records_for(db, booking.id)) == 1

    def test_booking_without_unit_still_completes(self, db, make_booking):
        booking = make_booking(aircon_unit_id=None, aircon_brand="LG", aircon_model="Dual")

        result = BookingLifecycleService(db).update_status(booking.id, "completed")

        assert result.booking.status == "completed"
        assert result.service_record is None
        assert len(result.warnings) == 1
        assert f"booking #{booking.id}" in result.warnings[0]
        assert records_for(db, booking.id) == []

    def test_technician_taken_from_assignment(self, db, make_booking, seed):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)
        lifecycle.assign_technician(booking.id, seed["technician"].id)

        result = lifecycle.update_status(booking.id, "completed")

        assert result.service_record.technician_id == seed["technician"].id

    def test_non_completed_status_creates_nothing(self, db, make_booking):
        booking = make_booking()
        BookingLifecycleService(db).update_status(booking.id, "confirmed")
        assert records_for(db, booking.id) == []


@pytest.mark.unit
class TestAssignTechnician:
    def test_assign_moves_booking_to_assigned(self, db, make_booking, seed):
        booking = make_booking(status="confirmed")

        assignment = BookingLifecycleService(db).assign_technician(
            booking.id, seed["technician"].id, scheduled_date=date(2025, 3, 5), scheduled_time="09:30"
        )

        db.refresh(booking)
        assert booking.status == "assigned"
        assert assignment.status == "assigned"
        assert assignment.booking_id == booking.id
        assert assignment.scheduled_time == "09:30"

    def test_second_assignment_conflicts(self, db, make_booking, seed):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)
        lifecycle.assign_technician(booking.id, seed["technician"].id)

        with pytest.raises(Conflict) as exc_info:
            lifecycle.assign_technician(booking.id, seed["technician"].id)

        assert exc_info.value.status_code == 409
        count = db.query(BookingAssignment).filter(BookingAssignment.booking_id == booking.id).count()
        assert count == 1

    def test_unknown_booking(self, db, seed):
        with pytest.raises(NotFound):
            BookingLifecycleService(db).assign_technician(9999, seed["technician"].id)

    def test_unknown_technician(self, db, make_booking):
        booking = make_booking()
        with pytest.raises(NotFound):
            BookingLifecycleService(db).assign_technician(booking.id, 9999)

        db.refresh(booking)
        assert booking.status == "pending"


@pytest.mark.unit
class TestAssignmentStatus:
    def test_completed_assignment_completes_booking(self, db, make_booking, seed):
        booking = make_booking(preferred_date=date(2025, 6, 15))
        lifecycle = BookingLifecycleService(db)
        assignment = lifecycle.assign_technician(booking.id, seed["technician"].id)

        result = lifecycle.update_assignment_status(assignment.id, "completed")

        db.refresh(booking)
        assert result.assignment.status == "completed"
        assert booking.status == "completed"
        assert result.service_record is not None
        assert result.service_record.booking_id == booking.id
        assert len(records_for(db, booking.id)) == 1

    def test_in_progress_assignment_leaves_booking(self, db, make_booking, seed):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)
        assignment = lifecycle.assign_technician(booking.id, seed["technician"].id)

        result = lifecycle.update_assignment_status(assignment.id, "in_progress")

        db.refresh(booking)
        assert booking.status == "assigned"
        assert result.booking_result is None
        assert result.warnings == []

    def test_invalid_assignment_status(self, db, make_booking, seed):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)
        assignment = lifecycle.assign_technician(booking.id, seed["technician"].id)

        with pytest.raises(InvalidStatus):
            lifecycle.update_assignment_status(assignment.id, "confirmed")

    def test_unknown_assignment(self, db, seed):
        with pytest.raises(NotFound):
            BookingLifecycleService(db).update_assignment_status(9999, "completed")


@pytest.mark.unit
class TestCompletionPaths:
    """Direct and assignment completion share one service record per booking"""

    def test_direct_then_assignment_completion(self, db, make_booking, seed):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)
        assignment = lifecycle.assign_technician(booking.id, seed["technician"].id)

        direct = lifecycle.update_status(booking.id, "completed")
        cascaded = lifecycle.update_assignment_status(assignment.id, "completed")

        assert direct.service_record_created is True
        assert cascaded.booking_result.service_record_created is False
        assert cascaded.service_record.id == direct.service_record.id
        assert len(records_for(db, booking.id)) == 1

    def test_assignment_then_direct_completion(self, db, make_booking, seed):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)
        assignment = lifecycle.assign_technician(booking.id, seed["technician"].id)

        cascaded = lifecycle.update_assignment_status(assignment.id, "completed")
        direct = lifecycle.update_status(booking.id, "completed")

        assert cascaded.booking_result.service_record_created is True
        assert direct.service_record_created is False
        assert direct.service_record.id == cascaded.service_record.id
        assert len(records_for(db, booking.id)) == 1

    def test_database_error_reported_as_warning(self, db, make_booking, monkeypatch):
        booking = make_booking()
        lifecycle = BookingLifecycleService(db)

        def fail_insert(*args, **kwargs):
            raise SQLAlchemyError("disk I/O error")

        monkeypatch.setattr(lifecycle.service_records, "create_service_record", fail_insert)

        result = lifecycle.update_status(booking.id, "completed")

        db.refresh(booking)
        assert booking.status == "completed"
        assert result.service_record is None
        assert result.service_record_created is False
        assert len(result.warnings) == 1
        assert "disk I/O error" in result.warnings[0]
        assert records_for(db, booking.id) == []
