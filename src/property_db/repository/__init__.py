"""Typed access functions over the property data model.

Every function takes an explicit ``Session`` and leaves committing to the
caller, normally ``Database.session()``. Writes are flushed immediately so
constraint violations surface at the call site.

Public API:
    - Stores: create_store, delete_store
    - Buildings: create_building, get_building, delete_building
    - Rooms: create_room, get_room, get_room_by_uuid, delete_room
    - Listings: create_listing, get_listing, set_listing_active, add_cost,
      add_monthly, add_images, delete_listing
    - Search: search_listings
"""

from __future__ import annotations

from property_db.repository.buildings import (
    create_building,
    create_room,
    create_store,
    delete_building,
    delete_room,
    delete_store,
    get_building,
    get_room,
    get_room_by_uuid,
)
from property_db.repository.listings import (
    add_cost,
    add_images,
    add_monthly,
    create_listing,
    delete_listing,
    get_listing,
    listing_load_options,
    set_listing_active,
)
from property_db.repository.schemas import (
    AdvertisementFeeCreate,
    AdvertisementReprintCreate,
    BuildingCreate,
    CampaignCreate,
    ConditionCreate,
    CostCreate,
    DealingCreate,
    FacilityCreate,
    ImageCreate,
    ListingCreate,
    ListingFilters,
    LocationCreate,
    MonthlyCreate,
    RoomCreate,
    RouteCreate,
    StoreCreate,
    TranslationCreate,
)
from property_db.repository.search import search_listings

__all__ = [
    "AdvertisementFeeCreate",
    "AdvertisementReprintCreate",
    "BuildingCreate",
    "CampaignCreate",
    "ConditionCreate",
    "CostCreate",
    "DealingCreate",
    "FacilityCreate",
    "ImageCreate",
    "ListingCreate",
    "ListingFilters",
    "LocationCreate",
    "MonthlyCreate",
    "RoomCreate",
    "RouteCreate",
    "StoreCreate",
    "TranslationCreate",
    "add_cost",
    "add_images",
    "add_monthly",
    "create_building",
    "create_listing",
    "create_room",
    "create_store",
    "delete_building",
    "delete_listing",
    "delete_room",
    "delete_store",
    "get_building",
    "get_listing",
    "get_room",
    "get_room_by_uuid",
    "listing_load_options",
    "search_listings",
    "set_listing_active",
]
