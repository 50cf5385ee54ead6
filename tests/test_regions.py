import pytest
from sqlalchemy import select

from app.core.regions import (
    REGION_FIELDS,
    AnyOf,
    EntityKind,
    FieldContains,
    MatchAll,
    MatchNone,
    ValueContainsField,
    build_region_filter,
    region_label,
    to_clause,
)
from app.models.listing import Listing
from app.models.staff import StaffRole
from app.schemas.principal import Principal


def principal(role=StaffRole.admin, region=None):
    return Principal(id=1, username="u", email="u@example.com", role=role, region=region)


def matching_ids(db, p, kind=EntityKind.listing):
    pred = build_region_filter(p, kind)
    return set(db.scalars(select(Listing.id).where(to_clause(pred, Listing))))


@pytest.mark.parametrize("region", [None, "", "Pune", "Koramangala, Bangalore"])
@pytest.mark.parametrize("kind", list(EntityKind))
def test_manager_is_never_scoped(region, kind):
    assert build_region_filter(principal(StaffRole.manager, region), kind) == MatchAll()


@pytest.mark.parametrize("region", [None, "Pune"])
def test_admin_user_enumeration_is_unrestricted(region):
    assert build_region_filter(principal(region=region), EntityKind.user) == MatchAll()


@pytest.mark.parametrize("region", [None, "", "   "])
def test_admin_without_region_sees_no_listings(region):
    assert build_region_filter(principal(region=region)) == MatchNone()


def test_admin_with_region_gets_bidirectional_match():
    pred = build_region_filter(principal(region=" Pune "))
    assert isinstance(pred, AnyOf)
    for field in REGION_FIELDS:
        assert FieldContains(field, "Pune") in pred.terms
        assert ValueContainsField(field, "Pune") in pred.terms


def test_filter_is_pure():
    p = principal(region="Koramangala")
    assert build_region_filter(p) == build_region_filter(p)
    assert hash(build_region_filter(p)) == hash(build_region_filter(p))


def test_is_manager():
    assert principal(StaffRole.manager).is_manager
    assert not principal(region="Pune").is_manager


def test_region_label():
    assert region_label(principal(StaffRole.manager, "Pune")) == "All Regions"
    assert region_label(principal(region="Pune")) == "Pune"


def test_match_none_yields_nothing(db, make_listing):
    make_listing(city="Pune")
    make_listing(city="Mumbai")
    assert matching_ids(db, principal(region=None)) == set()


def test_match_all_yields_everything(db, make_listing):
    ids = {make_listing(city="Pune").id, make_listing(city=None).id}
    assert matching_ids(db, principal(StaffRole.manager)) == ids


def test_region_inside_display_name(db, make_listing):
    hit = make_listing(city="Bangalore", location_display_name="Koramangala, Bangalore")
    make_listing(city="Chennai", location_display_name="T Nagar, Chennai")
    assert matching_ids(db, principal(region="Koramangala")) == {hit.id}


def test_region_in_field_is_case_insensitive(db, make_listing):
    hit = make_listing(state="MAHARASHTRA")
    assert matching_ids(db, principal(region="maharashtra")) == {hit.id}


def test_coarser_region_does_not_reach_unrelated_locality(db, make_listing):
    make_listing(city="Koramangala")
    assert matching_ids(db, principal(region="Bangalore")) == set()


def test_coarser_region_matches_same_city(db, make_listing):
    hit = make_listing(city="Bangalore")
    assert matching_ids(db, principal(region="Bangalore")) == {hit.id}


def test_field_contained_in_finer_region(db, make_listing):
    hit = make_listing(city="bangalore")
    make_listing(city="Mysore")
    assert matching_ids(db, principal(region="Koramangala, Bangalore")) == {hit.id}


def test_empty_location_fields_do_not_match_everything(db, make_listing):
    make_listing(city="", state=None, location_display_name="")
    assert matching_ids(db, principal(region="Pune")) == set()


def test_like_wildcards_are_literal(db, make_listing):
    make_listing(city="Pune")
    assert matching_ids(db, principal(region="%")) == set()
    make_listing(city="a_b")
    assert matching_ids(db, principal(region="axb")) == set()


def test_unknown_predicate_is_rejected():
    with pytest.raises(TypeError):
        to_clause(object(), Listing)
