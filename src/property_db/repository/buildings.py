"""Stores, buildings and rooms: the physical side of the data model."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import joinedload, selectinload

from property_db.db.errors import translate_errors
from property_db.db.models import Building, Location, Room, Route, Store, Translation
from property_db.exceptions import RecordNotFoundError
from property_db.repository.schemas import BuildingCreate, RoomCreate, StoreCreate
from property_db.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = get_logger(__name__)


def create_store(session: Session, data: StoreCreate | None = None) -> Store:
    """Insert a store.

    Args:
        session: Active session; the caller commits.
        data: Store fields. All optional.

    Returns:
        The flushed Store with its id assigned.
    """
    data = data or StoreCreate()
    store = Store(**data.model_dump())
    with translate_errors():
        session.add(store)
        session.flush()
    logger.debug("Created store %d", store.id)
    return store


def delete_store(session: Session, store_id: int) -> None:
    """Delete a store that no room or listing references.

    Raises:
        RecordNotFoundError: If the store does not exist.
        ConstraintViolationError: If rooms or listings still reference it.
    """
    store = session.get(Store, store_id)
    if store is None:
        raise RecordNotFoundError("Store", store_id)
    with translate_errors():
        session.delete(store)
        session.flush()


def create_building(session: Session, data: BuildingCreate) -> Building:
    """Insert a building together with its locations, routes and translations.

    Args:
        session: Active session; the caller commits.
        data: Building fields and nested child rows.

    Returns:
        The flushed Building with its children attached.
    """
    building = Building(
        **data.model_dump(exclude={"locations", "routes", "translations"}),
        locations=[Location(**item.model_dump()) for item in data.locations],
        routes=[Route(**item.model_dump()) for item in data.routes],
        translations=[Translation(**item.model_dump()) for item in data.translations],
    )
    with translate_errors():
        session.add(building)
        session.flush()
    logger.debug("Created building %d (%s)", building.id, building.building_name)
    return building


def get_building(session: Session, building_id: int) -> Building | None:
    """Fetch a building with its locations, routes, translations and rooms.

    Children are loaded with one batched query per relationship.
    """
    stmt = (
        select(Building)
        .where(Building.id == building_id)
        .options(
            selectinload(Building.locations),
            selectinload(Building.routes),
            selectinload(Building.translations),
            selectinload(Building.rooms),
        )
    )
    with translate_errors():
        return session.scalars(stmt).one_or_none()


def delete_building(session: Session, building_id: int) -> None:
    """Delete a building and everything below it.

    Rooms, locations, routes, translations and, through the rooms, every
    listing and listing row are removed by the database cascade.

    Raises:
        RecordNotFoundError: If the building does not exist.
    """
    building = session.get(Building, building_id)
    if building is None:
        raise RecordNotFoundError("Building", building_id)
    with translate_errors():
        session.delete(building)
        session.flush()
    logger.info("Deleted building %d", building_id)


def create_room(session: Session, data: RoomCreate) -> Room:
    """Insert a room with its caller-supplied UUID.

    Raises:
        ConstraintViolationError: If the UUID is taken or the building or
            store does not exist.
    """
    room = Room(**data.model_dump(exclude={"uuid"}), uuid=str(data.uuid))
    with translate_errors():
        session.add(room)
        session.flush()
    logger.debug("Created room %d (%s)", room.id, room.uuid)
    return room


def _room_options() -> tuple:
    return (joinedload(Room.building), joinedload(Room.store), selectinload(Room.listings))


def get_room(session: Session, room_id: int) -> Room | None:
    """Fetch a room with its building, store and listings."""
    stmt = select(Room).where(Room.id == room_id).options(*_room_options())
    with translate_errors():
        return session.scalars(stmt).one_or_none()


def get_room_by_uuid(session: Session, room_uuid: str | UUID) -> Room | None:
    """Fetch a room by its external UUID.

    Args:
        session: Active session.
        room_uuid: UUID in any form accepted by ``uuid.UUID``.

    Returns:
        The Room, or None if no room has that UUID.

    Raises:
        ValueError: If ``room_uuid`` is not a valid UUID.
    """
    canonical = str(room_uuid if isinstance(room_uuid, UUID) else UUID(room_uuid))
    stmt = select(Room).where(Room.uuid == canonical).options(*_room_options())
    with translate_errors():
        return session.scalars(stmt).one_or_none()


def delete_room(session: Session, room_id: int) -> None:
    """Delete a room together with its listings and their rows.

    Raises:
        RecordNotFoundError: If the room does not exist.
    """
    room = session.get(Room, room_id)
    if room is None:
        raise RecordNotFoundError("Room", room_id)
    with translate_errors():
        session.delete(room)
        session.flush()
    logger.info("Deleted room %d", room_id)
