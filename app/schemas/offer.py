from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from app.models.offer import OfferStatus


class PartyLite(BaseModel):
    """Buyer / seller summary embedded on offers."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None


class ListingLite(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    price: float
    category: str
    cover_image: str
    city: Optional[str] = None
    state: Optional[str] = None
    location_display_name: Optional[str] = None


class OfferOut(BaseModel):
    id: int
    listing_id: int
    buyer_id: Optional[int] = None
    seller_id: Optional[int] = None
    offer_amount: float
    contact_name: str
    contact_phone: str
    message: str
    status: OfferStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    buyer: Optional[PartyLite] = None
    seller: Optional[PartyLite] = None
    listing: Optional[ListingLite] = None


class OfferPagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class PaginatedOffersOut(BaseModel):
    offers: list[OfferOut]
    pagination: OfferPagination
    region_filter: str


class OfferStatusPatch(BaseModel):
    status: Optional[str] = None
