"""SQLAlchemy ORM models for property-rental listings.

The schema is split by volatility:

* Physical (immutable) tables describe stores, buildings and the rooms inside
  them, together with building locations, transport routes and localized
  copy. These rows are written once and rarely touched.
* Listing (changeable) tables describe rental offers for a room: pricing
  history, media, coded amenities and marketing metadata. A room may have
  any number of listings over its lifetime.

Every ``*_code`` / ``code`` column is a short string key into an enumeration
defined outside this schema (e.g. ``"apartment"``, ``"13"``).

Rows below a building or a listing are removed by ``ON DELETE CASCADE``;
stores are protected by ``ON DELETE RESTRICT``.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from property_db.db.base import Base

CODE_LENGTH = 50


class TimestampMixin:
    """Adds database-defaulted ``created_at`` / ``updated_at`` columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


# ============================================
# Physical property tables
# ============================================


class Store(TimestampMixin, Base):
    """A property-management agency or branch.

    Root tenant boundary: rooms and listings belong to exactly one store.
    A store cannot be deleted while rooms or listings reference it.

    Attributes:
        id: Primary key.
        name: Display name of the agency, if known.
        rooms: Rooms managed by this store.
        listings: Listings published by this store.
    """

    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    rooms: Mapped[list[Room]] = relationship(
        "Room", back_populates="store", passive_deletes="all"
    )
    listings: Mapped[list[Listing]] = relationship(
        "Listing", back_populates="store", passive_deletes="all"
    )

    def __repr__(self) -> str:
        """Return a string representation of the store."""
        return f"<Store(id={self.id}, name='{self.name}')>"


class Building(TimestampMixin, Base):
    """A physical building.

    Attributes:
        id: Primary key.
        building_name: Name of the building.
        building_type_code: Building type (e.g., "apartment").
        structure_type_code: Structure type (e.g., "reinforced_concrete").
        built_year: Year of completion.
        built_month: Month of completion.
        max_floor: Number of floors above ground.
        prefecture_code: Prefecture code (e.g., "13" for Tokyo).
        city_code: City code within the prefecture.
        rooms: Rentable units in this building.
        locations: Geographic coordinates.
        routes: Transport access records.
        translations: Localized copy, one per locale.
    """

    __tablename__ = "buildings"
    __table_args__ = (
        Index("buildings_prefecture_code_idx", "prefecture_code"),
        Index("buildings_city_code_idx", "city_code"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    building_name: Mapped[str] = mapped_column(String(255), nullable=False)
    building_type_code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)
    structure_type_code: Mapped[str] = mapped_column(
        String(CODE_LENGTH), nullable=False
    )
    built_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    built_month: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_floor: Mapped[int | None] = mapped_column(Integer, nullable=True)
    prefecture_code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)
    city_code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)

    # Relationships
    # Rooms are created by building_id alone, so no delete-orphan here
    rooms: Mapped[list[Room]] = relationship(
        "Room",
        back_populates="building",
        cascade="all",
        passive_deletes=True,
        order_by="Room.id",
    )
    locations: Mapped[list[Location]] = relationship(
        "Location",
        back_populates="building",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Location.id",
    )
    routes: Mapped[list[Route]] = relationship(
        "Route",
        back_populates="building",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Route.id",
    )
    translations: Mapped[list[Translation]] = relationship(
        "Translation",
        back_populates="building",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Translation.id",
    )

    def __repr__(self) -> str:
        """Return a string representation of the building."""
        return (
            f"<Building(id={self.id}, building_name='{self.building_name}', "
            f"prefecture_code='{self.prefecture_code}', city_code='{self.city_code}')>"
        )


class Room(TimestampMixin, Base):
    """An individually rentable unit inside a building.

    ``uuid`` is the identity other services use. It is assigned by the
    creator, never generated here.

    Attributes:
        id: Primary key.
        uuid: Caller-supplied UUID string (36 characters).
        building_id: Foreign key to the building.
        store_id: Foreign key to the managing store.
        room_number: Room number as displayed (e.g., "101").
        room_size: Floor area in square meters.
        direction_code: Facing direction.
        layout_amount: Number of rooms in the layout (e.g., 2 for 2LDK).
        layout_type_code: Layout type (e.g., "ldk").
        floor: Floor the room is on.
        building: Relationship to the building.
        store: Relationship to the store.
        listings: Rental listings for this room, historical and current.
    """

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("uuid", name="rooms_uuid_unique"),
        Index("rooms_building_id_idx", "building_id"),
        Index("rooms_store_id_idx", "store_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    uuid: Mapped[str] = mapped_column(String(36), nullable=False)
    building_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False
    )
    store_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stores.id", ondelete="RESTRICT"), nullable=False
    )
    room_number: Mapped[str | None] = mapped_column(String(255), nullable=True)
    room_size: Mapped[float | None] = mapped_column(Float, nullable=True)
    direction_code: Mapped[str | None] = mapped_column(
        String(CODE_LENGTH), nullable=True
    )
    layout_amount: Mapped[float] = mapped_column(Float, nullable=False)
    layout_type_code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)
    floor: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    building: Mapped[Building] = relationship("Building", back_populates="rooms")
    store: Mapped[Store] = relationship("Store", back_populates="rooms")
    listings: Mapped[list[Listing]] = relationship(
        "Listing",
        back_populates="room",
        cascade="all",
        passive_deletes=True,
        order_by="Listing.id",
    )

    def __repr__(self) -> str:
        """Return a string representation of the room."""
        return (
            f"<Room(id={self.id}, uuid='{self.uuid}', "
            f"room_number='{self.room_number}', building_id={self.building_id})>"
        )


class Location(Base):
    """Geographic coordinates of a building."""

    __tablename__ = "property_locations"
    __table_args__ = (
        Index("property_locations_building_id_idx", "building_id"),
        Index("property_locations_longitude_idx", "longitude"),
        Index("property_locations_latitude_idx", "latitude"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    building_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False
    )
    longitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)
    latitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)

    building: Mapped[Building] = relationship("Building", back_populates="locations")

    def __repr__(self) -> str:
        """Return a string representation of the location."""
        return (
            f"<Location(id={self.id}, building_id={self.building_id}, "
            f"longitude={self.longitude}, latitude={self.latitude})>"
        )


class Route(TimestampMixin, Base):
    """Transport access from a building to a station.

    Attributes:
        id: Primary key.
        building_id: Foreign key to the building.
        station_id: Station identifier.
        station_code: Station code.
        railroad_id: Railroad line identifier.
        railroad_code: Railroad line code.
        transportation_type_code: How the station is reached (e.g., "walk").
        minutes: Travel time in minutes.
    """

    __tablename__ = "property_routes"
    __table_args__ = (
        Index("property_routes_building_id_idx", "building_id"),
        Index("property_routes_station_code_idx", "station_code"),
        Index("property_routes_station_id_idx", "station_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    building_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False
    )
    station_id: Mapped[int] = mapped_column(Integer, nullable=False)
    station_code: Mapped[str | None] = mapped_column(
        String(CODE_LENGTH), nullable=True
    )
    railroad_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    railroad_code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)
    transportation_type_code: Mapped[str] = mapped_column(
        String(CODE_LENGTH), nullable=False
    )
    minutes: Mapped[int] = mapped_column(Integer, nullable=False)

    building: Mapped[Building] = relationship("Building", back_populates="routes")

    def __repr__(self) -> str:
        """Return a string representation of the route."""
        return (
            f"<Route(id={self.id}, building_id={self.building_id}, "
            f"station_code='{self.station_code}', minutes={self.minutes})>"
        )


class Translation(TimestampMixin, Base):
    """Localized copy for a building, unique per locale."""

    __tablename__ = "property_translations"
    __table_args__ = (
        UniqueConstraint(
            "building_id", "locale", name="property_translations_building_id_locale_unique"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    building_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False
    )
    locale: Mapped[str] = mapped_column(String(16), nullable=False)
    address_detail: Mapped[str | None] = mapped_column(String(255), nullable=True)
    remarks: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    side_note: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    catchphrase: Mapped[str | None] = mapped_column(String(500), nullable=True)

    building: Mapped[Building] = relationship(
        "Building", back_populates="translations"
    )

    def __repr__(self) -> str:
        """Return a string representation of the translation."""
        return (
            f"<Translation(id={self.id}, building_id={self.building_id}, "
            f"locale='{self.locale}')>"
        )


# ============================================
# Listing tables
# ============================================


class Listing(TimestampMixin, Base):
    """A rental offer for one room, owned by one store.

    Listings are retired by clearing ``is_active``, never by deletion, so
    their pricing and media history survives.

    Attributes:
        id: Primary key.
        room_id: Foreign key to the room on offer.
        store_id: Foreign key to the publishing store.
        published_at: When the listing went public.
        property_updated_at: When the listing content was last refreshed.
        property_next_update_at: When the next refresh is scheduled.
        available_move_in_date: Exact move-in date, if fixed.
        available_move_in_year: Move-in year, if only the period is known.
        available_move_in_month: Move-in month, if only the period is known.
        available_move_in_timing_code: Move-in timing (e.g., "immediate").
        is_active: Whether the listing is currently sellable.
        room: Relationship to the room.
        store: Relationship to the store.
        costs: Pricing history, oldest first.
        monthlies: Monthly-rental pricing history, oldest first.
        images: Photos and floor plans in display order.
        facilities: Coded amenities.
        conditions: Coded structural conditions.
        campaigns: Coded marketing campaigns.
        dealings: Coded transaction types.
        advertisement_fees: Coded advertising fees.
        advertisement_reprints: Coded reprint permissions.
    """

    __tablename__ = "property_listings"
    __table_args__ = (
        Index("property_listings_room_id_idx", "room_id"),
        Index("property_listings_store_id_idx", "store_id"),
        Index("property_listings_published_at_idx", "published_at"),
        Index("property_listings_is_active_idx", "is_active"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    room_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False
    )
    store_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stores.id", ondelete="RESTRICT"), nullable=False
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    property_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    property_next_update_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    available_move_in_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    available_move_in_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    available_move_in_month: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    available_move_in_timing_code: Mapped[str | None] = mapped_column(
        String(CODE_LENGTH), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    # Relationships
    room: Mapped[Room] = relationship("Room", back_populates="listings")
    store: Mapped[Store] = relationship("Store", back_populates="listings")
    costs: Mapped[list[Cost]] = relationship(
        "Cost",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Cost.id",
    )
    monthlies: Mapped[list[Monthly]] = relationship(
        "Monthly",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Monthly.id",
    )
    images: Mapped[list[Image]] = relationship(
        "Image",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: (Image.order_num, Image.id),
    )
    facilities: Mapped[list[Facility]] = relationship(
        "Facility",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Facility.id",
    )
    conditions: Mapped[list[Condition]] = relationship(
        "Condition",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Condition.id",
    )
    campaigns: Mapped[list[Campaign]] = relationship(
        "Campaign",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Campaign.id",
    )
    dealings: Mapped[list[Dealing]] = relationship(
        "Dealing",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Dealing.id",
    )
    advertisement_fees: Mapped[list[AdvertisementFee]] = relationship(
        "AdvertisementFee",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="AdvertisementFee.id",
    )
    advertisement_reprints: Mapped[list[AdvertisementReprint]] = relationship(
        "AdvertisementReprint",
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="AdvertisementReprint.id",
    )

    @property
    def current_cost(self) -> Cost | None:
        """The most recent pricing row, or None if no price was recorded."""
        return self.costs[-1] if self.costs else None

    @property
    def current_monthly(self) -> Monthly | None:
        """The most recent monthly-rental pricing row, if any."""
        return self.monthlies[-1] if self.monthlies else None

    def __repr__(self) -> str:
        """Return a string representation of the listing."""
        return (
            f"<Listing(id={self.id}, room_id={self.room_id}, "
            f"store_id={self.store_id}, is_active={self.is_active})>"
        )


class Cost(TimestampMixin, Base):
    """One pricing snapshot for a listing.

    Price changes are recorded as new rows; the row with the highest id is
    the current price.

    Attributes:
        id: Primary key.
        listing_id: Foreign key to the listing.
        rent: Monthly rent.
        management_fee: Monthly management fee.
        deposit_price: Deposit as an amount.
        deposit_month: Deposit as a number of months' rent.
        gratuity_fee_price: Key money as an amount.
        gratuity_fee_month: Key money as a number of months' rent.
        security_deposit_price: Security deposit as an amount.
        security_deposit_month: Security deposit in months' rent.
        deposit_repayment_fee_price: Non-refundable deposit part as an amount.
        deposit_repayment_fee_month: Non-refundable deposit part in months.
        deposit_repayment_fee_percent: Non-refundable deposit part in percent.
        renewal_fee_amount: Contract renewal fee.
        renewal_fee_type_code: Unit of the renewal fee (e.g., "month").
        residence_insurance_needed: Whether tenant insurance is required.
    """

    __tablename__ = "property_costs"
    __table_args__ = (Index("property_costs_listing_id_idx", "listing_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    rent: Mapped[int | None] = mapped_column(Integer, nullable=True)
    management_fee: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deposit_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deposit_month: Mapped[float | None] = mapped_column(Float, nullable=True)
    gratuity_fee_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gratuity_fee_month: Mapped[float | None] = mapped_column(Float, nullable=True)
    security_deposit_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    security_deposit_month: Mapped[float | None] = mapped_column(Float, nullable=True)
    deposit_repayment_fee_price: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    deposit_repayment_fee_month: Mapped[float | None] = mapped_column(
        Float, nullable=True
    )
    deposit_repayment_fee_percent: Mapped[float | None] = mapped_column(
        Float, nullable=True
    )
    renewal_fee_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    renewal_fee_type_code: Mapped[str | None] = mapped_column(
        String(CODE_LENGTH), nullable=True
    )
    residence_insurance_needed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    listing: Mapped[Listing] = relationship("Listing", back_populates="costs")

    def __repr__(self) -> str:
        """Return a string representation of the cost record."""
        return (
            f"<Cost(id={self.id}, listing_id={self.listing_id}, rent={self.rent}, "
            f"management_fee={self.management_fee})>"
        )


class Monthly(TimestampMixin, Base):
    """One monthly-rental pricing snapshot for a listing."""

    __tablename__ = "property_monthlies"
    __table_args__ = (Index("property_monthlies_listing_id_idx", "listing_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    is_monthly: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    monthly_day_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    monthly_cleaning_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    monthly_bed_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)
    monthly_fee: Mapped[int | None] = mapped_column(Integer, nullable=True)

    listing: Mapped[Listing] = relationship("Listing", back_populates="monthlies")

    def __repr__(self) -> str:
        """Return a string representation of the monthly record."""
        return (
            f"<Monthly(id={self.id}, listing_id={self.listing_id}, "
            f"monthly_fee={self.monthly_fee})>"
        )


class Image(Base):
    """A photo or floor plan of a listing, ordered by ``order_num``."""

    __tablename__ = "property_images"
    __table_args__ = (Index("property_images_listing_id_idx", "listing_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    order_num: Mapped[int] = mapped_column(Integer, nullable=False)
    type_code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    listing: Mapped[Listing] = relationship("Listing", back_populates="images")

    def __repr__(self) -> str:
        """Return a string representation of the image."""
        return (
            f"<Image(id={self.id}, listing_id={self.listing_id}, "
            f"order_num={self.order_num}, type_code='{self.type_code}')>"
        )


class Facility(TimestampMixin, Base):
    """A coded amenity of a listing (elevator, parking, ...)."""

    __tablename__ = "property_facilities"
    __table_args__ = (Index("property_facilities_listing_id_idx", "listing_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)
    status: Mapped[int | None] = mapped_column(Integer, nullable=True)

    listing: Mapped[Listing] = relationship("Listing", back_populates="facilities")

    def __repr__(self) -> str:
        """Return a string representation of the facility."""
        return f"<Facility(id={self.id}, listing_id={self.listing_id}, code='{self.code}')>"


class Condition(TimestampMixin, Base):
    """A coded structural condition of a listing (earthquake-resistant, ...)."""

    __tablename__ = "property_conditions"
    __table_args__ = (Index("property_conditions_listing_id_idx", "listing_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)
    status: Mapped[int | None] = mapped_column(Integer, nullable=True)

    listing: Mapped[Listing] = relationship("Listing", back_populates="conditions")

    def __repr__(self) -> str:
        """Return a string representation of the condition."""
        return (
            f"<Condition(id={self.id}, listing_id={self.listing_id}, code='{self.code}')>"
        )


class Campaign(Base):
    """A coded marketing campaign. Each code appears once per listing."""

    __tablename__ = "property_campaigns"
    __table_args__ = (
        UniqueConstraint(
            "code", "listing_id", name="property_campaigns_code_listing_id_unique"
        ),
        Index("property_campaigns_listing_id_idx", "listing_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)

    listing: Mapped[Listing] = relationship("Listing", back_populates="campaigns")

    def __repr__(self) -> str:
        """Return a string representation of the campaign."""
        return f"<Campaign(id={self.id}, listing_id={self.listing_id}, code='{self.code}')>"


class Dealing(TimestampMixin, Base):
    """A coded transaction type of a listing."""

    __tablename__ = "property_dealings"
    __table_args__ = (Index("property_dealings_listing_id_idx", "listing_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)

    listing: Mapped[Listing] = relationship("Listing", back_populates="dealings")

    def __repr__(self) -> str:
        """Return a string representation of the dealing."""
        return f"<Dealing(id={self.id}, listing_id={self.listing_id}, code='{self.code}')>"


class AdvertisementFee(TimestampMixin, Base):
    """A coded advertising fee of a listing."""

    __tablename__ = "property_advertisement_fees"
    __table_args__ = (
        Index("property_advertisement_fees_listing_id_idx", "listing_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)

    listing: Mapped[Listing] = relationship(
        "Listing", back_populates="advertisement_fees"
    )

    def __repr__(self) -> str:
        """Return a string representation of the advertisement fee."""
        return (
            f"<AdvertisementFee(id={self.id}, listing_id={self.listing_id}, "
            f"code='{self.code}', amount={self.amount})>"
        )


class AdvertisementReprint(TimestampMixin, Base):
    """A coded reprint permission of a listing."""

    __tablename__ = "property_advertisement_reprints"
    __table_args__ = (
        Index("property_advertisement_reprints_listing_id_idx", "listing_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    listing_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("property_listings.id", ondelete="CASCADE"), nullable=False
    )
    code: Mapped[str] = mapped_column(String(CODE_LENGTH), nullable=False)

    listing: Mapped[Listing] = relationship(
        "Listing", back_populates="advertisement_reprints"
    )

    def __repr__(self) -> str:
        """Return a string representation of the reprint permission."""
        return (
            f"<AdvertisementReprint(id={self.id}, listing_id={self.listing_id}, "
            f"code='{self.code}')>"
        )


# Tables below a listing, in the order nested fetches load them
LISTING_CHILD_MODELS: tuple[type[Base], ...] = (
    Cost,
    Monthly,
    Image,
    Facility,
    Condition,
    Campaign,
    Dealing,
    AdvertisementFee,
    AdvertisementReprint,
)
