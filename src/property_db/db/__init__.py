"""Database module for the property data model.

This module provides SQLAlchemy ORM models and the database accessor.

Public API:
    - Base: SQLAlchemy declarative base class
    - Database: Process-wide engine owner and unit-of-work factory
    - create_engine_from_url: Create a SQLAlchemy engine
    - schema_transaction: Transaction for DDL, safe for SQLite table rebuilds
    - translate_errors: Map SQLAlchemy errors to property_db exceptions
    - Store, Building, Room, Location, Route, Translation: physical models
    - Listing, Cost, Monthly, Image, Facility, Condition, Campaign, Dealing,
      AdvertisementFee, AdvertisementReprint: listing models
"""

from __future__ import annotations

from property_db.db.base import (
    Base,
    Database,
    create_engine_from_url,
    display_url,
    schema_transaction,
)
from property_db.db.errors import translate_errors
from property_db.db.models import (
    LISTING_CHILD_MODELS,
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
    Location,
    Monthly,
    Room,
    Route,
    Store,
    Translation,
)

__all__ = [
    "LISTING_CHILD_MODELS",
    "AdvertisementFee",
    "AdvertisementReprint",
    "Base",
    "Building",
    "Campaign",
    "Condition",
    "Cost",
    "Database",
    "Dealing",
    "Facility",
    "Image",
    "Listing",
    "Location",
    "Monthly",
    "Room",
    "Route",
    "Store",
    "Translation",
    "create_engine_from_url",
    "display_url",
    "schema_transaction",
    "translate_errors",
]
