"""Availability service - per-day slot occupancy from existing bookings"""

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...config import SLOT_CAPACITY
from ...models_booking import TIME_SLOTS
from ...shared.errors import InvalidRange
from ..bookings.repository import BookingRepository

logger = logging.getLogger(__name__)

# Longest window the calendar view will expand day by day
MAX_CALENDAR_DAYS = 366


def _empty_slots() -> dict[str, int]:
    return {slot: 0 for slot in TIME_SLOTS}


class AvailabilityService:
    """Aggregates booking counts per (date, slot)"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    def get_availability(self, start_date: date, end_date: date) -> dict[str, dict[str, int]]:
        """
        Count non-cancelled bookings per date and slot in [start_date, end_date].

        Dates without bookings are left out of the map; callers treat a
        missing key as fully open.
        """
        if end_date < start_date:
            raise InvalidRange("endDate must not be before startDate")

        availability: dict[str, dict[str, int]] = {}
        for booking in self.repo.get_bookings_in_range(self.db, start_date, end_date):
            if (booking.status or "").lower() == "cancelled":
                continue

            day = availability.setdefault(booking.preferred_date.isoformat(), _empty_slots())
            slot = (booking.preferred_time or "").lower()
            if slot in day:
                day[slot] += 1

        logger.debug(f"📅 Availability {start_date}..{end_date}: {len(availability)} busy days")
        return availability

    def get_calendar(
        self,
        start_date: date,
        end_date: date,
        today: Optional[date] = None,
        capacity: int = SLOT_CAPACITY,
    ) -> list[dict]:
        """One entry per day with slot counts and the calendar's past/available flags"""
        if (end_date - start_date).days >= MAX_CALENDAR_DAYS:
            raise InvalidRange(f"Calendar range must not exceed {MAX_CALENDAR_DAYS} days")

        today = today or date.today()
        availability = self.get_availability(start_date, end_date)

        days = []
        current = start_date
        while current <= end_date:
            slots = availability.get(current.isoformat(), _empty_slots())
            past = current < today
            days.append(
                {
                    "date": current.isoformat(),
                    "slots": slots,
                    "past": past,
                    "available": not past and any(count < capacity for count in slots.values()),
                }
            )
            current += timedelta(days=1)
        return days
