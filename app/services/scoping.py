# File: app/services/scoping.py
"""Region-scoped lookups shared by the listing and offer routers.

Offers carry no location of their own; they are visible to an admin only
through their listing, so the listing filter is resolved first and offers
are restricted by listing id membership.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.regions import EntityKind, MatchAll, build_region_filter, to_clause
from app.models.listing import Listing
from app.schemas.principal import Principal


def visible_listing_ids(db: Session, principal: Principal) -> Optional[List[int]]:
    """Ids of listings in the principal's region, or None when unrestricted."""
    predicate = build_region_filter(principal, EntityKind.listing)
    if isinstance(predicate, MatchAll):
        return None
    return list(db.scalars(select(Listing.id).where(to_clause(predicate, Listing))))


def listing_visible(db: Session, principal: Principal, listing_id: int) -> bool:
    predicate = build_region_filter(principal, EntityKind.listing)
    found = db.scalar(
        select(Listing.id).where(Listing.id == listing_id, to_clause(predicate, Listing))
    )
    return found is not None
