from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from app.models.listing import ListingStatus


class ListingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    seller_id: Optional[int] = None
    seller_no: str
    price: float
    currency: str
    category: str
    subcategory: Optional[str] = None
    cover_image: str

    location_display_name: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    status: ListingStatus
    deleted: bool
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class ListingPagination(BaseModel):
    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool


class PaginatedListingsOut(BaseModel):
    listings: list[ListingOut]
    pagination: ListingPagination
    region_filter: str


class ListingStatusPatch(BaseModel):
    # validated against ListingStatus in the handler so bad values give a 400
    status: Optional[str] = None
