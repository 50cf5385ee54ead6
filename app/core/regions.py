# app/core/regions.py
"""Region scoping for staff queries.

``build_region_filter`` turns a principal and the kind of entity being listed
into a small predicate tree; ``to_clause`` compiles that tree into a
SQLAlchemy boolean expression for a mapped model.

Region matching is deliberately loose. The region label an admin picks and the
locality stored on a listing are both free text and rarely agree on
granularity ("Koramangala" vs "Bangalore"), so a listing is in scope when any
of its location fields contains the region, or the region contains the
field, compared case-insensitively. Admins may therefore see a few listings
from a neighbouring area, but never miss local ones.

Case folding is done by the database. Postgres ILIKE folds non-ASCII letters;
SQLite lower() and LIKE fold ASCII only, so "münchen" and "MÜNCHEN" match each
other on Postgres but not on SQLite.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from sqlalchemy import String, and_, false, func, literal, or_, true
from sqlalchemy.sql.elements import ColumnElement

from app.schemas.principal import Principal

REGION_FIELDS = ("city", "state", "location_display_name")
LIKE_ESCAPE = "/"


class EntityKind(str, Enum):
    listing = "listing"
    user = "user"


@dataclass(frozen=True)
class MatchAll:
    pass


@dataclass(frozen=True)
class MatchNone:
    pass


@dataclass(frozen=True)
class FieldContains:
    """``field`` contains ``value``."""
    field: str
    value: str


@dataclass(frozen=True)
class ValueContainsField:
    """``value`` contains the (non-empty) content of ``field``."""
    field: str
    value: str


@dataclass(frozen=True)
class AnyOf:
    terms: Tuple["Predicate", ...]


Predicate = Union[MatchAll, MatchNone, FieldContains, ValueContainsField, AnyOf]


def build_region_filter(principal: Principal, kind: EntityKind = EntityKind.listing) -> Predicate:
    if principal.is_manager:
        return MatchAll()
    # customers are shared across regions; only listings (and offers through them) are scoped
    if kind == EntityKind.user:
        return MatchAll()

    region = (principal.region or "").strip()
    if not region:
        return MatchNone()

    terms = []
    for field in REGION_FIELDS:
        terms.append(FieldContains(field, region))
        terms.append(ValueContainsField(field, region))
    return AnyOf(tuple(terms))


def region_label(principal: Principal) -> str:
    if principal.is_manager:
        return "All Regions"
    return principal.region or ""


def _escape_like_column(col):
    for ch in (LIKE_ESCAPE, "%", "_"):
        col = func.replace(col, ch, LIKE_ESCAPE + ch)
    return col


def to_clause(predicate: Predicate, model) -> ColumnElement[bool]:
    if isinstance(predicate, MatchAll):
        return true()
    if isinstance(predicate, MatchNone):
        return false()
    if isinstance(predicate, FieldContains):
        col = getattr(model, predicate.field)
        return col.icontains(predicate.value, autoescape=True)
    if isinstance(predicate, ValueContainsField):
        col = getattr(model, predicate.field)
        pattern = literal("%", String) + _escape_like_column(col) + literal("%", String)
        return and_(
            col.is_not(None),
            func.length(col) > 0,
            literal(predicate.value, String).ilike(pattern, escape=LIKE_ESCAPE),
        )
    if isinstance(predicate, AnyOf):
        if not predicate.terms:
            return false()
        return or_(*(to_clause(t, model) for t in predicate.terms))
    raise TypeError(f"unsupported predicate: {predicate!r}")
