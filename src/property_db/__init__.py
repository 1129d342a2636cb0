"""Relational data model, migrations and typed access for property-rental listings."""

from __future__ import annotations

__version__ = "0.1.0"
