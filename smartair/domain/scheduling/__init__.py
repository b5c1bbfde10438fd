"""
Scheduling Domain

Read-only slot occupancy used by the customer booking calendar.

Each day has three fixed slots (morning, afternoon, evening). Counts come
from non-cancelled bookings; nothing here blocks a booking, the per-slot
cap is applied by the calendar view only.
"""
