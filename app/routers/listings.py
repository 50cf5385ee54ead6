# File: app/routers/listings.py
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.regions import EntityKind, build_region_filter, region_label, to_clause
from app.core.security import get_current_principal, require_manager
from app.db.session import get_db
from app.models.listing import Listing, ListingStatus
from app.schemas.listing import ListingOut, ListingPagination, ListingStatusPatch, PaginatedListingsOut
from app.schemas.principal import Principal

log = logging.getLogger(__name__)

router = APIRouter(prefix="/listings", tags=["listings"])


def _scoped_listing(db: Session, principal: Principal, listing_id: int) -> Listing:
    """Fetch a listing the caller may see; out-of-region reads look like missing rows."""
    predicate = build_region_filter(principal, EntityKind.listing)
    obj = db.scalars(
        select(Listing).where(Listing.id == listing_id, to_clause(predicate, Listing))
    ).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Listing not found or access denied")
    return obj


@router.get("", response_model=PaginatedListingsOut)
def list_listings(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    include_deleted: bool = Query(default=False),
):
    predicate = build_region_filter(principal, EntityKind.listing)
    conditions = [to_clause(predicate, Listing)]

    if not include_deleted:
        conditions.append(Listing.deleted.is_(False))

    if search and search.strip():
        term = search.strip()
        conditions.append(or_(
            Listing.title.icontains(term, autoescape=True),
            Listing.description.icontains(term, autoescape=True),
            Listing.seller_no.icontains(term, autoescape=True),
            Listing.location_display_name.icontains(term, autoescape=True),
        ))

    if category and category != "all":
        conditions.append(Listing.category == category)

    if status and status != "all":
        try:
            conditions.append(Listing.status == ListingStatus(status))
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid status value")

    total = db.scalar(select(func.count()).select_from(Listing).where(*conditions)) or 0
    rows = db.scalars(
        select(Listing)
        .where(*conditions)
        .order_by(Listing.created_at.desc(), Listing.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    return PaginatedListingsOut(
        listings=[ListingOut.model_validate(r) for r in rows],
        pagination=ListingPagination(
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_count=total,
            has_next_page=page * limit < total,
            has_prev_page=page > 1,
        ),
        region_filter=region_label(principal),
    )


@router.get("/{listing_id}")
def get_listing(listing_id: int, db: Session = Depends(get_db),
                principal: Principal = Depends(get_current_principal)):
    obj = _scoped_listing(db, principal, listing_id)
    return {"listing": ListingOut.model_validate(obj).model_dump(mode="json")}


@router.put("/{listing_id}/status")
def update_listing_status(listing_id: int, body: ListingStatusPatch,
                          db: Session = Depends(get_db),
                          principal: Principal = Depends(get_current_principal)):
    if not body.status:
        raise HTTPException(status_code=400, detail="Status is required")
    try:
        new_status = ListingStatus(body.status)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid status value")

    obj = _scoped_listing(db, principal, listing_id)
    obj.status = new_status
    db.commit(); db.refresh(obj)
    log.info("listing %s set to %s by %s", obj.id, new_status.value, principal.username)
    return {
        "message": "Listing status updated successfully",
        "listing": ListingOut.model_validate(obj).model_dump(mode="json"),
    }


@router.delete("/{listing_id}")
def delete_listing(listing_id: int, db: Session = Depends(get_db),
                   principal: Principal = Depends(require_manager)):
    obj = db.get(Listing, listing_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Listing not found")
    obj.deleted = True
    db.commit()
    log.info("listing %s soft-deleted by %s", listing_id, principal.username)
    return {"message": "Listing deleted successfully"}
