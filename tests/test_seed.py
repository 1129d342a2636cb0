"""Tests for the sample data set."""

from __future__ import annotations

from sqlalchemy import Engine

from property_db.db import Database
from property_db.repository import get_building, get_listing, search_listings
from property_db.seed import seed_database, table_counts


class TestSeedDatabase:
    """Tests for seed_database."""

    def test_row_counts(self, database: Database, db_engine: Engine) -> None:
        """Test the size of every table after seeding."""
        with database.session() as session:
            seed_database(session)

        with database.session() as session:
            counts = table_counts(session)

        assert counts == {
            "stores": 1,
            "buildings": 1,
            "property_locations": 1,
            "property_routes": 1,
            "property_translations": 1,
            "rooms": 2,
            "property_listings": 2,
            "property_costs": 3,
            "property_monthlies": 3,
            "property_images": 5,
            "property_facilities": 5,
            "property_conditions": 3,
            "property_campaigns": 1,
            "property_dealings": 1,
            "property_advertisement_fees": 0,
            "property_advertisement_reprints": 0,
        }

    def test_seeded_listings(self, database: Database, db_engine: Engine) -> None:
        """Test the price history and building of the seeded listings."""
        with database.session() as session:
            result = seed_database(session)

        with database.session() as session:
            first = get_listing(session, result.listing_ids[0])
            second = get_listing(session, result.listing_ids[1])
            building = get_building(session, result.building_id)

        assert first is not None and second is not None and building is not None
        assert [cost.rent for cost in first.costs] == [120000, 125000]
        assert first.current_cost is not None and first.current_cost.rent == 125000
        assert first.current_monthly is not None
        assert first.current_monthly.monthly_fee == 9500
        assert [image.order_num for image in first.images] == [1, 2, 3]
        assert second.current_cost is not None and second.current_cost.rent == 150000
        assert first.room.room_number == "101"
        assert second.room.room_size == 55.0
        assert building.building_name == "Tokyo Central Tower"
        assert building.prefecture_code == "13"
        assert len(building.rooms) == 2

    def test_seeded_listings_are_searchable(
        self, database: Database, db_engine: Engine
    ) -> None:
        """Test that the seed data answers a typical search."""
        with database.session() as session:
            seed_database(session)

        with database.session() as session:
            results = search_listings(session)

        assert len(results) == 2
        assert {listing.room.building.city_code for listing in results} == {"101"}
