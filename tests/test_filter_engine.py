from homescape.db.repo import get_repository
from homescape.models.filters import FilterCriteria
from homescape.services.filter_engine import apply, matches

from conftest import make_listing


def _pair():
    return [
        make_listing(id=1, price=300000, bedrooms=2, property_type="Condo"),
        make_listing(id=2, price=600000, bedrooms=4, property_type="House"),
    ]


def _ids(listings):
    return [listing.id for listing in listings]


def test_empty_criteria_is_identity():
    listings = get_repository().list_listings()
    assert apply(listings, FilterCriteria()) == listings


def test_price_min_scenario():
    assert _ids(apply(_pair(), FilterCriteria(price_min=400000))) == [2]


def test_bedrooms_is_a_minimum():
    assert _ids(apply(_pair(), FilterCriteria(bedrooms=2))) == [1, 2]
    assert _ids(apply(_pair(), FilterCriteria(bedrooms=3))) == [2]


def test_price_bounds_are_inclusive():
    listings = _pair()
    assert _ids(apply(listings, FilterCriteria(price_min=300000, price_max=600000))) == [1, 2]
    assert _ids(apply(listings, FilterCriteria(price_max=299999))) == []


def test_empty_property_types_is_unconstrained():
    listings = _pair()
    assert apply(listings, FilterCriteria(property_types=[])) == apply(listings, FilterCriteria())
    assert _ids(apply(listings, FilterCriteria(property_types=["House", "Villa"]))) == [2]


def test_zero_threshold_is_active_but_passes_everything():
    listings = _pair()
    assert _ids(apply(listings, FilterCriteria(price_min=0, bedrooms=0, bathrooms=0))) == [1, 2]


def test_inverted_price_range_is_applied_literally():
    assert apply(_pair(), FilterCriteria(price_min=700000, price_max=100000)) == []


def test_search_is_case_insensitive_and_trimmed():
    listings = [
        make_listing(id=1, title="Sunny Loft", city="Denver", state="CO"),
        make_listing(id=2, title="Quiet Cottage", address="9 Elm Road", city="Boulder", state="CO"),
    ]
    assert _ids(apply(listings, FilterCriteria(search_query="  sunny "))) == [1]
    assert _ids(apply(listings, FilterCriteria(search_query="ELM"))) == [2]
    assert _ids(apply(listings, FilterCriteria(search_query="co"))) == [1, 2]
    assert _ids(apply(listings, FilterCriteria(search_query="   "))) == [1, 2]


def test_search_matches_zip_code():
    listings = [make_listing(id=1, zip_code="94105"), make_listing(id=2, zip_code="11201")]
    assert _ids(apply(listings, FilterCriteria(search_query="941"))) == [1]


def test_result_is_ordered_subsequence_and_input_untouched():
    listings = get_repository().list_listings()
    before = [listing.model_dump() for listing in listings]
    criteria = FilterCriteria(bathrooms=2.5, property_types=["House", "Villa", "Townhouse"])
    result = apply(listings, criteria)
    positions = [listings.index(listing) for listing in result]
    assert positions == sorted(positions)
    assert [listing.model_dump() for listing in listings] == before
    assert apply(listings, criteria) == result


def test_soundness_and_completeness_over_dataset():
    listings = get_repository().list_listings()
    criteria_list = [
        FilterCriteria(price_min=1000000),
        FilterCriteria(price_max=1000000, bedrooms=3),
        FilterCriteria(search_query="ca", bathrooms=2),
        FilterCriteria(property_types=["Condo"], price_max=2000000),
    ]
    for criteria in criteria_list:
        result = apply(listings, criteria)
        expected = [
            listing
            for listing in listings
            if (criteria.price_min is None or listing.price >= criteria.price_min)
            and (criteria.price_max is None or listing.price <= criteria.price_max)
            and (criteria.bedrooms is None or listing.bedrooms >= criteria.bedrooms)
            and (criteria.bathrooms is None or listing.bathrooms >= criteria.bathrooms)
            and (not criteria.property_types or listing.property_type in criteria.property_types)
            and (
                criteria.search_query is None
                or any(
                    criteria.search_query in value.lower()
                    for value in (listing.title, listing.address, listing.city, listing.state, listing.zip_code)
                )
            )
        ]
        assert result == expected
        assert all(matches(listing, criteria) for listing in result)
