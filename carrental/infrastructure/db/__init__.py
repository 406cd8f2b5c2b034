"""Adaptadores SQL (SQLAlchemy Core, async)."""
