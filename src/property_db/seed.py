"""Sample data set: one store, one building in Tokyo, two rooms, two listings.

Listing 1 carries two cost rows and two monthly rows to show price history.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from property_db.db.models import (
    LISTING_CHILD_MODELS,
    Building,
    Listing,
    Location,
    Room,
    Route,
    Store,
    Translation,
)
from property_db.repository import (
    BuildingCreate,
    CampaignCreate,
    ConditionCreate,
    CostCreate,
    DealingCreate,
    FacilityCreate,
    ImageCreate,
    ListingCreate,
    LocationCreate,
    MonthlyCreate,
    RoomCreate,
    RouteCreate,
    StoreCreate,
    TranslationCreate,
    create_building,
    create_listing,
    create_room,
    create_store,
)
from property_db.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = get_logger(__name__)

SUMMARY_MODELS = (
    Store,
    Building,
    Location,
    Route,
    Translation,
    Room,
    Listing,
    *LISTING_CHILD_MODELS,
)


@dataclass
class SeedResult:
    """Identifiers of the rows created by ``seed_database``."""

    store_id: int
    building_id: int
    room_ids: list[int] = field(default_factory=list)
    listing_ids: list[int] = field(default_factory=list)


def _tokyo_building() -> BuildingCreate:
    return BuildingCreate(
        building_name="Tokyo Central Tower",
        building_type_code="apartment",
        structure_type_code="reinforced_concrete",
        built_year=2020,
        built_month=6,
        max_floor=10,
        prefecture_code="13",
        city_code="101",
        locations=[LocationCreate(longitude="139.7671248", latitude="35.6812362")],
        routes=[
            RouteCreate(
                station_id=1,
                station_code="ST001",
                railroad_id=1,
                railroad_code="RR001",
                transportation_type_code="walk",
                minutes=5,
            )
        ],
        translations=[
            TranslationCreate(
                locale="en",
                address_detail="1-1-1 Chiyoda, Tokyo",
                remarks="Modern building in central Tokyo",
                side_note="Near shopping and restaurants",
                catchphrase="Your perfect home in the heart of Tokyo!",
            )
        ],
    )


def _cost(rent: int, management_fee: int) -> CostCreate:
    return CostCreate(
        rent=rent,
        management_fee=management_fee,
        deposit_price=rent,
        deposit_month=1,
        gratuity_fee_price=rent,
        gratuity_fee_month=1,
        residence_insurance_needed=True,
    )


def seed_database(session: Session) -> SeedResult:
    """Insert the sample data set.

    Args:
        session: Active session; the caller commits.

    Returns:
        Identifiers of the created store, building, rooms and listings.
    """
    store = create_store(session, StoreCreate(name="Tokyo Central Realty"))
    building = create_building(session, _tokyo_building())
    logger.info("Created building: %s", building.building_name)

    room1 = create_room(
        session,
        RoomCreate(
            uuid=uuid.uuid4(),
            building_id=building.id,
            store_id=store.id,
            room_number="101",
            room_size=45.5,
            direction_code="south",
            layout_amount=2,
            layout_type_code="ldk",
            floor=1,
        ),
    )
    room2 = create_room(
        session,
        RoomCreate(
            uuid=uuid.uuid4(),
            building_id=building.id,
            store_id=store.id,
            room_number="201",
            room_size=55.0,
            direction_code="east",
            layout_amount=3,
            layout_type_code="ldk",
            floor=2,
        ),
    )

    listing1 = create_listing(
        session,
        ListingCreate(
            room_id=room1.id,
            store_id=store.id,
            published_at=datetime(2024, 1, 1),
            available_move_in_year=2024,
            available_move_in_month=2,
            available_move_in_timing_code="next_month",
            is_active=True,
            # Price increased after publication
            costs=[_cost(120000, 10000), _cost(125000, 10000)],
            monthlies=[
                MonthlyCreate(
                    is_monthly=True,
                    monthly_day_cost=5000,
                    monthly_cleaning_cost=3000,
                    monthly_bed_cost=2000,
                    monthly_fee=10000,
                ),
                MonthlyCreate(
                    is_monthly=True,
                    monthly_day_cost=4500,
                    monthly_cleaning_cost=3000,
                    monthly_bed_cost=2000,
                    monthly_fee=9500,
                ),
            ],
            images=[
                ImageCreate(
                    url="https://example.com/images/property1-exterior.jpg",
                    type_code="exterior",
                ),
                ImageCreate(
                    url="https://example.com/images/property1-interior.jpg",
                    type_code="interior",
                ),
                ImageCreate(
                    url="https://example.com/images/property1-floorplan.jpg",
                    type_code="floor_plan",
                ),
            ],
            facilities=[
                FacilityCreate(code="elevator"),
                FacilityCreate(code="parking"),
                FacilityCreate(code="auto_lock"),
            ],
            conditions=[
                ConditionCreate(code="earthquake_resistant"),
                ConditionCreate(code="fire_resistant"),
            ],
            campaigns=[CampaignCreate(code="new_year")],
            dealings=[DealingCreate(code="rental_only")],
        ),
    )

    listing2 = create_listing(
        session,
        ListingCreate(
            room_id=room2.id,
            store_id=store.id,
            published_at=datetime(2024, 2, 1),
            available_move_in_year=2024,
            available_move_in_month=3,
            available_move_in_timing_code="next_month",
            is_active=True,
            costs=[_cost(150000, 12000)],
            monthlies=[
                MonthlyCreate(
                    is_monthly=True,
                    monthly_day_cost=6000,
                    monthly_cleaning_cost=4000,
                    monthly_bed_cost=3000,
                    monthly_fee=13000,
                )
            ],
            images=[
                ImageCreate(
                    url="https://example.com/images/property2-exterior.jpg",
                    type_code="exterior",
                ),
                ImageCreate(
                    url="https://example.com/images/property2-interior.jpg",
                    type_code="interior",
                ),
            ],
            facilities=[
                FacilityCreate(code="elevator"),
                FacilityCreate(code="balcony"),
            ],
            conditions=[ConditionCreate(code="earthquake_resistant")],
        ),
    )

    logger.info("Seed data created: 2 rooms, 2 listings")
    return SeedResult(
        store_id=store.id,
        building_id=building.id,
        room_ids=[room1.id, room2.id],
        listing_ids=[listing1.id, listing2.id],
    )


def table_counts(session: Session) -> dict[str, int]:
    """Count the rows in every property table.

    Returns:
        Mapping of table name to row count, physical tables first.
    """
    return {
        model.__tablename__: session.scalar(select(func.count()).select_from(model))
        or 0
        for model in SUMMARY_MODELS
    }
