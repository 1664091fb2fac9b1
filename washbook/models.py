from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# User roles
ROLE_ADMIN = "ADMIN"
ROLE_STAFF = "STAFF"
ROLE_CUSTOMER = "CUSTOMER"
USER_ROLES = (ROLE_ADMIN, ROLE_STAFF, ROLE_CUSTOMER)

# Booking statuses
BOOKING_PENDING = "PENDING"
BOOKING_CONFIRMED = "CONFIRMED"
BOOKING_IN_PROGRESS = "IN_PROGRESS"
BOOKING_COMPLETED = "COMPLETED"
BOOKING_CANCELLED = "CANCELLED"
BOOKING_NO_SHOW = "NO_SHOW"
BOOKING_STATUSES = (
    BOOKING_PENDING,
    BOOKING_CONFIRMED,
    BOOKING_IN_PROGRESS,
    BOOKING_COMPLETED,
    BOOKING_CANCELLED,
    BOOKING_NO_SHOW,
)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    role = Column(String(20), default=ROLE_CUSTOMER, nullable=False)  # ADMIN, STAFF, CUSTOMER
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="customer")


class AdminSetting(Base):
    """Key/value configuration edited from the admin settings page"""

    __tablename__ = "admin_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, index=True, nullable=False)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    scheduled_date = Column(Date, nullable=False, index=True)  # Day of the job
    scheduled_time = Column(DateTime, nullable=False)  # Local start time
    estimated_end = Column(DateTime, nullable=False)
    total_duration = Column(Integer, nullable=False)  # Minutes, all services combined
    status = Column(String(20), default=BOOKING_PENDING, nullable=False, index=True)
    total_price = Column(Float, nullable=True)
    customer_notes = Column(Text, nullable=True)
    admin_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("User", back_populates="bookings")
