# File: app\models\staff.py
# Project: swapify-admin-backend

from __future__ import annotations
from enum import Enum as PyEnum
from sqlalchemy import String, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base

class StaffRole(PyEnum):
    manager = "manager"
    admin = "admin"

class StaffAccount(Base):
    """Dashboard operator. Exactly one manager; admins are region scoped."""
    __tablename__ = "staff_accounts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(120), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    role: Mapped[StaffRole] = mapped_column(Enum(StaffRole), nullable=False, default=StaffRole.admin, index=True)
    # free-text locality picked by an admin; None until the first selection
    region: Mapped[str | None] = mapped_column(String(200), nullable=True)

    full_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    profile_image: Mapped[str | None] = mapped_column(String, nullable=True)

    last_login: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True), nullable=True, onupdate=func.now())
