# File: app\models\user.py
# Project: swapify-admin-backend

from __future__ import annotations
from enum import Enum as PyEnum
from sqlalchemy import String, Boolean, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base

class UserStatus(PyEnum):
    active = "active"
    inactive = "inactive"
    pending = "pending"

class User(Base):
    """Marketplace customer (buyer / seller). Staff only read and moderate these."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(120), index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    user_password: Mapped[str] = mapped_column(String(255))
    full_name: Mapped[str | None] = mapped_column(String(120), nullable=True, index=True)
    phone_number: Mapped[str | None] = mapped_column(String(30), nullable=True)
    user_avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)

    country: Mapped[str | None] = mapped_column(String(80), nullable=True)
    state: Mapped[str | None] = mapped_column(String(120), nullable=True)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True)
    pincode: Mapped[str | None] = mapped_column(String(12), nullable=True)
    address: Mapped[str | None] = mapped_column(String(300), nullable=True)

    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")
    # CRM fields
    status: Mapped[UserStatus] = mapped_column(Enum(UserStatus), default=UserStatus.pending, index=True)
    segment: Mapped[str] = mapped_column(String(60), default="Standard", server_default="Standard")
    join_date: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    last_visit: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True), nullable=True, onupdate=func.now())
