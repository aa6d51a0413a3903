import pytest

from homescape.errors import NotFound
from homescape.services.comparison import ComparisonSessions, ComparisonSet, comparison_table

from conftest import make_listing


def test_add_duplicate_and_limit_scenario():
    comparison = ComparisonSet()
    first = comparison.add(1)
    assert first.accepted and first.reason is None
    assert comparison.ids == [1]

    duplicate = comparison.add(1)
    assert not duplicate.accepted
    assert duplicate.reason == "duplicate"
    assert comparison.ids == [1]

    assert comparison.add(2).accepted
    assert comparison.add(3).accepted
    over = comparison.add(4)
    assert not over.accepted
    assert over.reason == "limit reached"
    assert comparison.ids == [1, 2, 3]
    assert len(comparison) == 3


def test_duplicate_reported_before_limit():
    comparison = ComparisonSet()
    for listing_id in (1, 2, 3):
        comparison.add(listing_id)
    assert comparison.add(2).reason == "duplicate"


def test_remove_and_clear():
    comparison = ComparisonSet()
    comparison.add(5)
    comparison.add(6)
    comparison.remove(42)
    assert comparison.ids == [5, 6]
    comparison.remove(5)
    assert comparison.ids == [6]
    assert 5 not in comparison
    assert comparison.add(5).accepted
    assert comparison.ids == [6, 5]
    comparison.clear()
    assert comparison.ids == []
    assert len(comparison) == 0


def test_to_listings_keeps_selection_order_and_drops_stale_ids():
    listings = [make_listing(id=i) for i in (1, 2, 3)]
    comparison = ComparisonSet()
    for listing_id in (3, 99, 1):
        comparison.add(listing_id)
    assert [listing.id for listing in comparison.to_listings(listings)] == [3, 1]


def test_suggest_next_skips_members():
    listings = [make_listing(id=i) for i in (1, 2, 3, 4)]
    comparison = ComparisonSet()
    comparison.add(1)
    assert comparison.suggest_next(listings).id == 2
    comparison.add(2)
    comparison.add(3)
    assert comparison.suggest_next(listings) is None


def test_comparison_table_formatting():
    listings = [
        make_listing(id=1, price=1250000, bedrooms=4, bathrooms=2.5, square_feet=3200, lot_size=10000, year_built=2015),
        make_listing(id=2, price=499000, bedrooms=2, bathrooms=1, square_feet=900, lot_size=0, property_type="Condo"),
    ]
    rows = {row.key: row for row in comparison_table(listings)}
    assert list(rows) == ["price", "bedrooms", "bathrooms", "square_feet", "year_built", "property_type", "lot_size"]
    assert rows["price"].values == ["$1,250,000", "$499,000"]
    assert rows["bedrooms"].values == ["4 beds", "2 beds"]
    assert rows["bathrooms"].values == ["2.5 baths", "1 baths"]
    assert rows["square_feet"].values == ["3,200 sqft", "900 sqft"]
    assert rows["year_built"].values == ["2015", "1990"]
    assert rows["property_type"].values == ["House", "Condo"]


def test_sessions_are_independent():
    sessions = ComparisonSessions()
    a = sessions.create()
    b = sessions.create()
    sessions.get(a).add(1)
    assert sessions.get(b).ids == []
    sessions.close(a)
    with pytest.raises(NotFound):
        sessions.get(a)
    assert len(sessions) == 1


def test_sessions_evict_least_recently_used():
    sessions = ComparisonSessions(max_sessions=2)
    first = sessions.create()
    second = sessions.create()
    sessions.get(first).add(4)
    third = sessions.create()

    assert len(sessions) == 2
    with pytest.raises(NotFound):
        sessions.get(second)
    assert sessions.get(first).ids == [4]
    assert sessions.get(third).ids == []
