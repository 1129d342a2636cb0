"""Validated input models for the repository functions."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Code = Annotated[str, Field(min_length=1, max_length=50)]


class _InputModel(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ============================================
# Physical inputs
# ============================================


class StoreCreate(_InputModel):
    """Input for a new store."""

    name: str | None = Field(default=None, max_length=255)


class LocationCreate(_InputModel):
    """Coordinates of a building, in decimal degrees."""

    longitude: Decimal = Field(ge=-180, le=180, max_digits=10, decimal_places=7)
    latitude: Decimal = Field(ge=-90, le=90, max_digits=10, decimal_places=7)


class RouteCreate(_InputModel):
    """Transport access from a building to one station."""

    station_id: int
    station_code: Code | None = None
    railroad_id: int | None = None
    railroad_code: Code
    transportation_type_code: Code
    minutes: int = Field(ge=0)


class TranslationCreate(_InputModel):
    """Localized copy for a building."""

    locale: str = Field(min_length=1, max_length=16)
    address_detail: str | None = Field(default=None, max_length=255)
    remarks: str | None = Field(default=None, max_length=1000)
    side_note: str | None = Field(default=None, max_length=1000)
    catchphrase: str | None = Field(default=None, max_length=500)


class BuildingCreate(_InputModel):
    """Input for a new building and its locations, routes and translations.

    Attributes:
        building_name: Name of the building.
        building_type_code: Building type (e.g., "apartment").
        structure_type_code: Structure type (e.g., "reinforced_concrete").
        built_year: Year of completion.
        built_month: Month of completion (1-12).
        max_floor: Number of floors above ground.
        prefecture_code: Prefecture code (e.g., "13").
        city_code: City code within the prefecture.
        locations: Coordinates to attach.
        routes: Transport access records to attach.
        translations: Localized copy to attach, at most one per locale.
    """

    building_name: str = Field(min_length=1, max_length=255)
    building_type_code: Code
    structure_type_code: Code
    built_year: int | None = Field(default=None, ge=1800, le=2200)
    built_month: int | None = Field(default=None, ge=1, le=12)
    max_floor: int | None = Field(default=None, ge=0)
    prefecture_code: Code
    city_code: Code
    locations: list[LocationCreate] = Field(default_factory=list)
    routes: list[RouteCreate] = Field(default_factory=list)
    translations: list[TranslationCreate] = Field(default_factory=list)

    @field_validator("translations")
    @classmethod
    def validate_unique_locales(
        cls, v: list[TranslationCreate]
    ) -> list[TranslationCreate]:
        """Reject two translations for the same locale."""
        locales = [translation.locale for translation in v]
        if len(locales) != len(set(locales)):
            msg = f"translations must have distinct locales, got {locales}"
            raise ValueError(msg)
        return v


class RoomCreate(_InputModel):
    """Input for a new room.

    ``uuid`` must be supplied by the caller; it is stored in canonical
    lowercase hyphenated form.
    """

    uuid: UUID
    building_id: int
    store_id: int
    room_number: str | None = Field(default=None, max_length=255)
    room_size: float | None = Field(default=None, ge=0)
    direction_code: Code | None = None
    layout_amount: float = Field(ge=0)
    layout_type_code: Code
    floor: int | None = None


# ============================================
# Listing inputs
# ============================================


class CostCreate(_InputModel):
    """One pricing snapshot. Amounts are in the smallest currency unit."""

    rent: int | None = Field(default=None, ge=0)
    management_fee: int | None = Field(default=None, ge=0)
    deposit_price: int | None = Field(default=None, ge=0)
    deposit_month: float | None = Field(default=None, ge=0)
    gratuity_fee_price: int | None = Field(default=None, ge=0)
    gratuity_fee_month: float | None = Field(default=None, ge=0)
    security_deposit_price: int | None = Field(default=None, ge=0)
    security_deposit_month: float | None = Field(default=None, ge=0)
    deposit_repayment_fee_price: int | None = Field(default=None, ge=0)
    deposit_repayment_fee_month: float | None = Field(default=None, ge=0)
    deposit_repayment_fee_percent: float | None = Field(default=None, ge=0, le=100)
    renewal_fee_amount: float | None = Field(default=None, ge=0)
    renewal_fee_type_code: Code | None = None
    residence_insurance_needed: bool = True


class MonthlyCreate(_InputModel):
    """One monthly-rental pricing snapshot."""

    is_monthly: bool | None = None
    monthly_day_cost: int | None = Field(default=None, ge=0)
    monthly_cleaning_cost: int | None = Field(default=None, ge=0)
    monthly_bed_cost: int | None = Field(default=None, ge=0)
    monthly_fee: int | None = Field(default=None, ge=0)


class ImageCreate(_InputModel):
    """A photo or floor plan. Omit ``order_num`` to append after the last image."""

    path: str | None = Field(default=None, max_length=255)
    url: str | None = Field(default=None, max_length=255)
    order_num: int | None = Field(default=None, ge=0)
    type_code: Code


class FacilityCreate(_InputModel):
    code: Code
    status: int | None = None


class ConditionCreate(_InputModel):
    code: Code
    status: int | None = None


class CampaignCreate(_InputModel):
    code: Code


class DealingCreate(_InputModel):
    code: Code


class AdvertisementFeeCreate(_InputModel):
    code: Code
    amount: int = Field(ge=0)


class AdvertisementReprintCreate(_InputModel):
    code: Code


class ListingCreate(_InputModel):
    """Input for a new listing and every row attached to it.

    Attributes:
        room_id: Room on offer.
        store_id: Publishing store.
        published_at: When the listing went public.
        property_updated_at: When the listing content was last refreshed.
        property_next_update_at: When the next refresh is scheduled.
        available_move_in_date: Exact move-in date, if fixed.
        available_move_in_year: Move-in year, if only the period is known.
        available_move_in_month: Move-in month (1-12).
        available_move_in_timing_code: Move-in timing.
        is_active: Whether the listing starts out sellable.
        costs: Pricing history, oldest first. The last entry is current.
        monthlies: Monthly-rental pricing history, oldest first.
        images: Photos and floor plans.
        facilities: Coded amenities.
        conditions: Coded structural conditions.
        campaigns: Coded campaigns, each code at most once.
        dealings: Coded transaction types.
        advertisement_fees: Coded advertising fees.
        advertisement_reprints: Coded reprint permissions.
    """

    room_id: int
    store_id: int
    published_at: datetime | None = None
    property_updated_at: datetime | None = None
    property_next_update_at: datetime | None = None
    available_move_in_date: date | None = None
    available_move_in_year: int | None = Field(default=None, ge=1900, le=2200)
    available_move_in_month: int | None = Field(default=None, ge=1, le=12)
    available_move_in_timing_code: Code | None = None
    is_active: bool = True
    costs: list[CostCreate] = Field(default_factory=list)
    monthlies: list[MonthlyCreate] = Field(default_factory=list)
    images: list[ImageCreate] = Field(default_factory=list)
    facilities: list[FacilityCreate] = Field(default_factory=list)
    conditions: list[ConditionCreate] = Field(default_factory=list)
    campaigns: list[CampaignCreate] = Field(default_factory=list)
    dealings: list[DealingCreate] = Field(default_factory=list)
    advertisement_fees: list[AdvertisementFeeCreate] = Field(default_factory=list)
    advertisement_reprints: list[AdvertisementReprintCreate] = Field(
        default_factory=list
    )


# ============================================
# Search
# ============================================


class ListingFilters(_InputModel):
    """Conjunctive search filters. Range bounds are inclusive.

    Attributes:
        min_rent: Lower bound on the current rent.
        max_rent: Upper bound on the current rent.
        min_room_size: Lower bound on the room size.
        max_room_size: Upper bound on the room size.
        prefecture_code: Exact building prefecture.
        city_code: Exact building city.
        building_type_code: Exact building type.
        layout_type_code: Exact room layout type.
        store_id: Publishing store.
        is_active: Active state to match; None matches both.
        limit: Maximum number of listings returned.
        offset: Number of listings skipped, in id order.
    """

    min_rent: int | None = Field(default=None, ge=0)
    max_rent: int | None = Field(default=None, ge=0)
    min_room_size: float | None = Field(default=None, ge=0)
    max_room_size: float | None = Field(default=None, ge=0)
    prefecture_code: Code | None = None
    city_code: Code | None = None
    building_type_code: Code | None = None
    layout_type_code: Code | None = None
    store_id: int | None = None
    is_active: bool | None = True
    limit: int = Field(default=50, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_ranges(self) -> ListingFilters:
        """Reject ranges whose lower bound exceeds the upper bound."""
        for low, high in (("min_rent", "max_rent"), ("min_room_size", "max_room_size")):
            low_value = getattr(self, low)
            high_value = getattr(self, high)
            if low_value is not None and high_value is not None and low_value > high_value:
                msg = f"{low} ({low_value}) cannot exceed {high} ({high_value})"
                raise ValueError(msg)
        return self
