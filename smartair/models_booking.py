"""
Booking lifecycle models: bookings, technician assignments and the
service records produced when work is completed.
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

TIME_SLOTS = ("morning", "afternoon", "evening")

# Status values are plain tags; any value in the set may follow any other
BOOKING_STATUSES = ("pending", "confirmed", "assigned", "in_progress", "completed", "cancelled")
ASSIGNMENT_STATUSES = ("assigned", "in_progress", "completed", "cancelled")


class Booking(Base):
    """A customer's request for a service visit"""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    aircon_unit_id = Column(Integer, ForeignKey("aircon_units.id"), nullable=True)
    technician_id = Column(Integer, ForeignKey("technicians.id"), nullable=True)

    service_type = Column(String(20), nullable=False)
    preferred_date = Column(Date, nullable=False, index=True)
    preferred_time = Column(String(20), nullable=False)  # morning, afternoon, evening

    service_address = Column(Text, nullable=False)
    postal_code = Column(String(10), nullable=True)
    contact_phone = Column(String(20), nullable=False)

    # Used when the customer has no unit on file
    aircon_brand = Column(String(50), nullable=True)
    aircon_model = Column(String(50), nullable=True)
    issue_description = Column(Text, nullable=True)

    # pending → confirmed → assigned → in_progress → completed, cancelled from anywhere
    status = Column(String(20), default="pending", nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("Customer", back_populates="bookings")
    aircon_unit = relationship("AirconUnit")
    technician = relationship("Technician")
    assignment = relationship(
        "BookingAssignment", back_populates="booking", uselist=False, cascade="all, delete-orphan"
    )
    service_records = relationship("ServiceRecord", back_populates="booking")


class BookingAssignment(Base):
    """Link between a booking and the technician performing it"""

    __tablename__ = "booking_assignments"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, unique=True)
    technician_id = Column(Integer, ForeignKey("technicians.id"), nullable=False, index=True)

    scheduled_date = Column(Date, nullable=True, index=True)
    scheduled_time = Column(String(5), nullable=True)  # HH:MM
    completion_date = Column(DateTime, nullable=True)
    actual_cost = Column(Numeric(10, 2), nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(String(20), default="assigned", nullable=False, index=True)
    assigned_date = Column(DateTime, server_default=func.now())

    booking = relationship("Booking", back_populates="assignment")
    technician = relationship("Technician", back_populates="assignments")


class ServiceRecord(Base):
    """Historical record of a service on a unit, with the next due date"""

    __tablename__ = "service_records"

    id = Column(Integer, primary_key=True, index=True)
    aircon_unit_id = Column(Integer, ForeignKey("aircon_units.id"), nullable=False, index=True)
    technician_id = Column(Integer, ForeignKey("technicians.id"), nullable=True, index=True)
    # Set only on records generated from a completed booking
    booking_id = Column(
        Integer, ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True, index=True
    )

    service_date = Column(Date, nullable=False)
    description = Column(String(255), nullable=False)
    next_due_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False)
    cost = Column(Numeric(10, 2), default=0, nullable=False)

    aircon_unit = relationship("AirconUnit", back_populates="service_records")
    technician = relationship("Technician")
    booking = relationship("Booking", back_populates="service_records")
