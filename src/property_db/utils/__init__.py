"""Utility module for the property database tools."""

from __future__ import annotations

from property_db.utils.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
