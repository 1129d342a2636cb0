"""Filtered listing search across physical and listing attributes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from property_db.db.errors import translate_errors
from property_db.db.models import Building, Cost, Listing, Room
from property_db.repository.listings import listing_load_options
from property_db.repository.schemas import ListingFilters

if TYPE_CHECKING:
    from sqlalchemy import Subquery
    from sqlalchemy.orm import Session


def _current_cost_subquery() -> Subquery:
    """Current cost per listing: the cost row with the highest id."""
    latest = (
        select(func.max(Cost.id).label("cost_id"))
        .group_by(Cost.listing_id)
        .subquery("latest_cost_ids")
    )
    return (
        select(Cost.listing_id, Cost.rent)
        .join(latest, Cost.id == latest.c.cost_id)
        .subquery("current_cost")
    )


def search_listings(
    session: Session, filters: ListingFilters | None = None
) -> list[Listing]:
    """Search listings. All given filters must match.

    Rent bounds apply to each listing's current cost, so listings without a
    cost never match a rent filter. Results are ordered by listing id and
    come back fully nested, as from ``get_listing``.

    Args:
        session: Active session.
        filters: Search filters. Defaults to all active listings.

    Returns:
        Matching listings, at most ``filters.limit`` of them.
    """
    filters = filters or ListingFilters()

    stmt = select(Listing).join(Listing.room).join(Room.building)
    conditions = []

    if filters.min_rent is not None or filters.max_rent is not None:
        current_cost = _current_cost_subquery()
        stmt = stmt.join(current_cost, current_cost.c.listing_id == Listing.id)
        if filters.min_rent is not None:
            conditions.append(current_cost.c.rent >= filters.min_rent)
        if filters.max_rent is not None:
            conditions.append(current_cost.c.rent <= filters.max_rent)

    if filters.min_room_size is not None:
        conditions.append(Room.room_size >= filters.min_room_size)
    if filters.max_room_size is not None:
        conditions.append(Room.room_size <= filters.max_room_size)

    if filters.prefecture_code is not None:
        conditions.append(Building.prefecture_code == filters.prefecture_code)
    if filters.city_code is not None:
        conditions.append(Building.city_code == filters.city_code)
    if filters.building_type_code is not None:
        conditions.append(Building.building_type_code == filters.building_type_code)
    if filters.layout_type_code is not None:
        conditions.append(Room.layout_type_code == filters.layout_type_code)

    if filters.store_id is not None:
        conditions.append(Listing.store_id == filters.store_id)
    if filters.is_active is not None:
        conditions.append(Listing.is_active == filters.is_active)

    stmt = (
        stmt.where(*conditions)
        .order_by(Listing.id)
        .limit(filters.limit)
        .offset(filters.offset)
        .options(*listing_load_options())
    )

    with translate_errors():
        return list(session.scalars(stmt).all())
