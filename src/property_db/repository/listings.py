"""Listings and the rows attached to them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload, selectinload

from property_db.db.errors import translate_errors
from property_db.db.models import (
    AdvertisementFee,
    AdvertisementReprint,
    Building,
    Campaign,
    Condition,
    Cost,
    Dealing,
    Facility,
    Image,
    Listing,
    Monthly,
    Room,
)
from property_db.exceptions import RecordNotFoundError
from property_db.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.orm import Session
    from sqlalchemy.orm.strategy_options import _AbstractLoad

    from property_db.repository.schemas import (
        CostCreate,
        ImageCreate,
        ListingCreate,
        MonthlyCreate,
    )

logger = get_logger(__name__)

_CHILD_FIELDS = frozenset(
    {
        "costs",
        "monthlies",
        "images",
        "facilities",
        "conditions",
        "campaigns",
        "dealings",
        "advertisement_fees",
        "advertisement_reprints",
    }
)


def listing_load_options() -> list[_AbstractLoad]:
    """Loader options for a fully nested listing fetch.

    Many-to-one hops (store, room, building) are joined into the main
    query; every collection is fetched with one batched ``IN`` query. The
    number of round trips depends only on the relation depth, never on the
    number of listings.
    """
    return [
        joinedload(Listing.store),
        joinedload(Listing.room)
        .joinedload(Room.building)
        .options(
            selectinload(Building.locations),
            selectinload(Building.routes),
            selectinload(Building.translations),
        ),
        selectinload(Listing.costs),
        selectinload(Listing.monthlies),
        selectinload(Listing.images),
        selectinload(Listing.facilities),
        selectinload(Listing.conditions),
        selectinload(Listing.campaigns),
        selectinload(Listing.dealings),
        selectinload(Listing.advertisement_fees),
        selectinload(Listing.advertisement_reprints),
    ]


def _build_images(images: Iterable[ImageCreate], next_position: int) -> list[Image]:
    """Create Image rows, numbering those without an explicit ``order_num``.

    Args:
        images: Image inputs in insertion order.
        next_position: Position assigned to the first unnumbered image.

    Returns:
        Unflushed Image objects.
    """
    built: list[Image] = []
    for image in images:
        data = image.model_dump()
        if data["order_num"] is None:
            data["order_num"] = next_position
        next_position = max(next_position, data["order_num"] + 1)
        built.append(Image(**data))
    return built


def _require_listing(session: Session, listing_id: int) -> Listing:
    listing = session.get(Listing, listing_id)
    if listing is None:
        raise RecordNotFoundError("Listing", listing_id)
    return listing


def create_listing(session: Session, data: ListingCreate) -> Listing:
    """Insert a listing together with all of its attached rows.

    Everything is flushed at once inside the caller's transaction; if any
    row fails, the caller's unit of work rolls all of them back.

    Args:
        session: Active session; the caller commits.
        data: Listing fields and nested rows.

    Returns:
        The flushed Listing.

    Raises:
        ConstraintViolationError: If the room or store does not exist, or a
            campaign code repeats.
    """
    listing = Listing(**data.model_dump(exclude=_CHILD_FIELDS))
    listing.costs = [Cost(**item.model_dump()) for item in data.costs]
    listing.monthlies = [Monthly(**item.model_dump()) for item in data.monthlies]
    listing.images = _build_images(data.images, next_position=1)
    listing.facilities = [Facility(**item.model_dump()) for item in data.facilities]
    listing.conditions = [Condition(**item.model_dump()) for item in data.conditions]
    listing.campaigns = [Campaign(**item.model_dump()) for item in data.campaigns]
    listing.dealings = [Dealing(**item.model_dump()) for item in data.dealings]
    listing.advertisement_fees = [
        AdvertisementFee(**item.model_dump()) for item in data.advertisement_fees
    ]
    listing.advertisement_reprints = [
        AdvertisementReprint(**item.model_dump())
        for item in data.advertisement_reprints
    ]

    with translate_errors():
        session.add(listing)
        session.flush()

    logger.debug(
        "Created listing %d for room %d (%d cost(s), %d image(s))",
        listing.id,
        listing.room_id,
        len(listing.costs),
        len(listing.images),
    )
    return listing


def get_listing(session: Session, listing_id: int) -> Listing | None:
    """Fetch a listing with its store, room, building and every listing row.

    Returns:
        The Listing, or None if it does not exist.
    """
    stmt = (
        select(Listing)
        .where(Listing.id == listing_id)
        .options(*listing_load_options())
    )
    with translate_errors():
        return session.scalars(stmt).one_or_none()


def set_listing_active(session: Session, listing_id: int, active: bool) -> Listing:
    """Activate or retire a listing. Attached rows are left untouched.

    Raises:
        RecordNotFoundError: If the listing does not exist.
    """
    listing = _require_listing(session, listing_id)
    listing.is_active = active
    with translate_errors():
        session.flush()
    logger.info("Listing %d is_active=%s", listing_id, active)
    return listing


def add_cost(session: Session, listing_id: int, data: CostCreate) -> Cost:
    """Record a new price for a listing. It becomes the current cost.

    Raises:
        RecordNotFoundError: If the listing does not exist.
    """
    listing = _require_listing(session, listing_id)
    cost = Cost(**data.model_dump())
    listing.costs.append(cost)
    with translate_errors():
        session.flush()
    return cost


def add_monthly(session: Session, listing_id: int, data: MonthlyCreate) -> Monthly:
    """Record a new monthly-rental price for a listing.

    Raises:
        RecordNotFoundError: If the listing does not exist.
    """
    listing = _require_listing(session, listing_id)
    monthly = Monthly(**data.model_dump())
    listing.monthlies.append(monthly)
    with translate_errors():
        session.flush()
    return monthly


def add_images(
    session: Session, listing_id: int, images: Iterable[ImageCreate]
) -> list[Image]:
    """Attach images to a listing.

    Images without an ``order_num`` are placed after the listing's current
    last image, in the order given.

    Raises:
        RecordNotFoundError: If the listing does not exist.
    """
    listing = _require_listing(session, listing_id)
    with translate_errors():
        current_max = session.scalar(
            select(func.max(Image.order_num)).where(Image.listing_id == listing_id)
        )
    next_position = 1 if current_max is None else current_max + 1

    new_images = _build_images(images, next_position=next_position)
    listing.images.extend(new_images)
    with translate_errors():
        session.flush()
    return new_images


def delete_listing(session: Session, listing_id: int) -> None:
    """Delete a listing and every row attached to it.

    Prefer ``set_listing_active(..., False)`` to retire a listing; deletion
    discards its pricing history.

    Raises:
        RecordNotFoundError: If the listing does not exist.
    """
    listing = _require_listing(session, listing_id)
    with translate_errors():
        session.delete(listing)
        session.flush()
    logger.info("Deleted listing %d", listing_id)
