"""
Reference entities consumed by the booking core: users, customers,
technicians and their aircon units.
"""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="Customer")  # Admin, Technician, Customer
    created_at = Column(DateTime, server_default=func.now())

    customer = relationship("Customer", back_populates="user", uselist=False)
    technician = relationship("Technician", back_populates="user", uselist=False)


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, unique=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="customer")
    aircon_units = relationship("AirconUnit", back_populates="customer")
    bookings = relationship("Booking", back_populates="customer")


class Technician(Base):
    __tablename__ = "technicians"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, unique=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    specialization = Column(String(100), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="technician")
    assignments = relationship("BookingAssignment", back_populates="technician")


class AirconUnit(Base):
    __tablename__ = "aircon_units"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    brand = Column(String(50), nullable=False)
    model = Column(String(50), nullable=False)
    serial_number = Column(String(100), nullable=True)
    location = Column(String(255), nullable=True)  # e.g. "Master bedroom"
    installation_date = Column(Date, nullable=True)

    customer = relationship("Customer", back_populates="aircon_units")
    service_records = relationship("ServiceRecord", back_populates="aircon_unit")
