# File: app/models/offer.py
from __future__ import annotations
from enum import Enum as PyEnum
from sqlalchemy import String, Float, Enum, DateTime, ForeignKey, func, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base

class OfferStatus(PyEnum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    withdrawn = "withdrawn"

class Offer(Base):
    __tablename__ = "offers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    listing_id: Mapped[int] = mapped_column(ForeignKey("listings.id", ondelete="CASCADE"))
    buyer_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    seller_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    offer_amount: Mapped[float] = mapped_column(Float)
    contact_name: Mapped[str] = mapped_column(String(100))
    contact_phone: Mapped[str] = mapped_column(String(20))
    message: Mapped[str] = mapped_column(String(500))
    status: Mapped[OfferStatus] = mapped_column(Enum(OfferStatus), default=OfferStatus.pending, index=True)

    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True), nullable=True, onupdate=func.now())

Index("ix_offers_listing_created", Offer.listing_id, Offer.created_at)
Index("ix_offers_buyer_created", Offer.buyer_id, Offer.created_at)
Index("ix_offers_seller_created", Offer.seller_id, Offer.created_at)
