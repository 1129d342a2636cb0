"""Shared fixtures and factories for the test suite."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from property_db.db import Base, Building, Database, Listing, Room, Store
from property_db.repository import (
    BuildingCreate,
    CostCreate,
    ImageCreate,
    ListingCreate,
    LocationCreate,
    RoomCreate,
    RouteCreate,
    TranslationCreate,
    create_building,
    create_listing,
    create_room,
    create_store,
)

ENV_VARS = (
    "PROPERTY_DATABASE_URL",
    "PROPERTY_MIGRATIONS_DIR",
    "PROPERTY_ENV",
    "PROPERTY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's PROPERTY_* variables out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """URL of a fresh SQLite file database."""
    return f"sqlite:///{tmp_path / 'property.db'}"


@pytest.fixture
def database(database_url: str) -> Iterator[Database]:
    """An unmigrated Database handle, closed after the test."""
    db = Database(database_url)
    yield db
    db.close()


@pytest.fixture
def db_engine(database: Database) -> Engine:
    """Engine with every property table created."""
    engine = database.get_engine()
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(database: Database, db_engine: Engine) -> Iterator[Session]:
    """A plain session on the migrated database; the test commits."""
    session = database.session_factory()
    yield session
    session.rollback()
    session.close()


def make_building_input(**overrides: object) -> BuildingCreate:
    """Factory for a Tokyo building with one location, route and translation."""
    data: dict[str, object] = {
        "building_name": "Tokyo Central Tower",
        "building_type_code": "apartment",
        "structure_type_code": "reinforced_concrete",
        "built_year": 2020,
        "built_month": 6,
        "max_floor": 10,
        "prefecture_code": "13",
        "city_code": "101",
        "locations": [LocationCreate(longitude="139.7671248", latitude="35.6812362")],
        "routes": [
            RouteCreate(
                station_id=1,
                station_code="ST001",
                railroad_id=1,
                railroad_code="RR001",
                transportation_type_code="walk",
                minutes=5,
            )
        ],
        "translations": [
            TranslationCreate(
                locale="en",
                address_detail="1-1-1 Chiyoda, Tokyo",
                catchphrase="Your perfect home in the heart of Tokyo!",
            )
        ],
    }
    data.update(overrides)
    return BuildingCreate(**data)


def make_room_input(building_id: int, store_id: int, **overrides: object) -> RoomCreate:
    """Factory for a 45.5 m2 2LDK room with a fresh UUID."""
    data: dict[str, object] = {
        "uuid": uuid.uuid4(),
        "building_id": building_id,
        "store_id": store_id,
        "room_number": "101",
        "room_size": 45.5,
        "direction_code": "south",
        "layout_amount": 2,
        "layout_type_code": "ldk",
        "floor": 1,
    }
    data.update(overrides)
    return RoomCreate(**data)


def make_listing_input(room_id: int, store_id: int, **overrides: object) -> ListingCreate:
    """Factory for an active listing with one cost and two images."""
    data: dict[str, object] = {
        "room_id": room_id,
        "store_id": store_id,
        "available_move_in_year": 2024,
        "available_move_in_month": 2,
        "costs": [CostCreate(rent=120000, management_fee=10000)],
        "images": [
            ImageCreate(url="https://example.com/exterior.jpg", type_code="exterior"),
            ImageCreate(url="https://example.com/interior.jpg", type_code="interior"),
        ],
    }
    data.update(overrides)
    return ListingCreate(**data)


def create_room_graph(session: Session, **room_overrides: object) -> tuple[Store, Building, Room]:
    """Insert a store, a building and one room, and return them."""
    store = create_store(session)
    building = create_building(session, make_building_input())
    room = create_room(session, make_room_input(building.id, store.id, **room_overrides))
    return store, building, room


@pytest.fixture
def room_graph(db_session: Session) -> tuple[Store, Building, Room]:
    """A committed store, building and room."""
    graph = create_room_graph(db_session)
    db_session.commit()
    return graph


@pytest.fixture
def listing(db_session: Session, room_graph: tuple[Store, Building, Room]) -> Listing:
    """A committed active listing with one cost and two images."""
    store, _, room = room_graph
    created = create_listing(db_session, make_listing_input(room.id, store.id))
    db_session.commit()
    return created
