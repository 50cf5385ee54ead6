# File: app/routers/offers.py
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.regions import EntityKind, build_region_filter, to_clause
from app.core.security import get_current_principal, require_manager
from app.db.session import get_db
from app.models.listing import Listing
from app.models.offer import Offer, OfferStatus
from app.models.user import User
from app.schemas.offer import (
    ListingLite,
    OfferOut,
    OfferPagination,
    OfferStatusPatch,
    PaginatedOffersOut,
    PartyLite,
)
from app.schemas.principal import Principal
from app.services.scoping import listing_visible, visible_listing_ids

log = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/offers", tags=["admin-offers"])


def _offers_label(principal: Principal) -> str:
    if principal.is_manager:
        return "All Regions"
    return f"{principal.region or ''} (Listings Only)"


def _enrich(db: Session, offers: list[Offer]) -> list[OfferOut]:
    """Attach buyer, seller and listing summaries with one query per table."""
    user_ids = {o.buyer_id for o in offers} | {o.seller_id for o in offers}
    user_ids.discard(None)
    listing_ids = {o.listing_id for o in offers}

    users = {u.id: u for u in db.scalars(select(User).where(User.id.in_(user_ids)))} if user_ids else {}
    listings = {l.id: l for l in db.scalars(select(Listing).where(Listing.id.in_(listing_ids)))} if listing_ids else {}

    out = []
    for o in offers:
        buyer = users.get(o.buyer_id)
        seller = users.get(o.seller_id)
        listing = listings.get(o.listing_id)
        out.append(OfferOut(
            id=o.id,
            listing_id=o.listing_id,
            buyer_id=o.buyer_id,
            seller_id=o.seller_id,
            offer_amount=o.offer_amount,
            contact_name=o.contact_name,
            contact_phone=o.contact_phone,
            message=o.message,
            status=o.status,
            created_at=o.created_at,
            updated_at=o.updated_at,
            buyer=PartyLite.model_validate(buyer) if buyer else None,
            seller=PartyLite.model_validate(seller) if seller else None,
            listing=ListingLite.model_validate(listing) if listing else None,
        ))
    return out


def _empty(page: int, limit: int, principal: Principal) -> PaginatedOffersOut:
    return PaginatedOffersOut(
        offers=[],
        pagination=OfferPagination(page=page, limit=limit, total=0, pages=0),
        region_filter=_offers_label(principal),
    )


@router.get("", response_model=PaginatedOffersOut)
def list_offers(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    status: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
):
    conditions = []

    if status and status != "all":
        try:
            conditions.append(Offer.status == OfferStatus(status))
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid status value")

    # offers follow their listing into (or out of) the admin's region
    allowed = visible_listing_ids(db, principal)
    if allowed is not None:
        if not allowed:
            return _empty(page, limit, principal)
        conditions.append(Offer.listing_id.in_(allowed))

    if search and search.strip():
        term = search.strip()
        # buyers and sellers are searched across every region
        user_ids = list(db.scalars(select(User.id).where(or_(
            User.full_name.icontains(term, autoescape=True),
            User.username.icontains(term, autoescape=True),
            User.email.icontains(term, autoescape=True),
        ))))
        listing_pred = build_region_filter(principal, EntityKind.listing)
        listing_ids = list(db.scalars(select(Listing.id).where(
            or_(
                Listing.title.icontains(term, autoescape=True),
                Listing.category.icontains(term, autoescape=True),
            ),
            to_clause(listing_pred, Listing),
        )))
        if not user_ids and not listing_ids:
            return _empty(page, limit, principal)

        matches = []
        if user_ids:
            matches += [Offer.buyer_id.in_(user_ids), Offer.seller_id.in_(user_ids)]
        if listing_ids:
            matches.append(Offer.listing_id.in_(listing_ids))
        conditions.append(or_(*matches))

    total = db.scalar(select(func.count()).select_from(Offer).where(*conditions)) or 0
    offers = db.scalars(
        select(Offer)
        .where(*conditions)
        .order_by(Offer.created_at.desc(), Offer.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    return PaginatedOffersOut(
        offers=_enrich(db, list(offers)),
        pagination=OfferPagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
        region_filter=_offers_label(principal),
    )


@router.get("/{offer_id}")
def get_offer(offer_id: int, db: Session = Depends(get_db),
              principal: Principal = Depends(get_current_principal)):
    offer = db.get(Offer, offer_id)
    if not offer or not listing_visible(db, principal, offer.listing_id):
        raise HTTPException(status_code=404, detail="Offer not found")
    return {"offer": _enrich(db, [offer])[0].model_dump(mode="json")}


@router.put("/{offer_id}/status")
def update_offer_status(offer_id: int, body: OfferStatusPatch,
                        db: Session = Depends(get_db),
                        principal: Principal = Depends(get_current_principal)):
    if not body.status:
        raise HTTPException(status_code=400, detail="Status is required")
    try:
        new_status = OfferStatus(body.status)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid status value")

    offer = db.get(Offer, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found")
    if not listing_visible(db, principal, offer.listing_id):
        raise HTTPException(status_code=403, detail="Access denied - Offer listing not in your region")

    offer.status = new_status
    db.commit(); db.refresh(offer)
    log.info("offer %s set to %s by %s", offer.id, new_status.value, principal.username)
    return {
        "message": "Offer status updated successfully",
        "offer": _enrich(db, [offer])[0].model_dump(mode="json"),
    }


@router.delete("/{offer_id}")
def delete_offer(offer_id: int, db: Session = Depends(get_db),
                 principal: Principal = Depends(require_manager)):
    offer = db.get(Offer, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found")
    db.delete(offer); db.commit()
    log.info("offer %s deleted by %s", offer_id, principal.username)
    return {"message": "Offer deleted successfully"}
