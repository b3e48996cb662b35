"""Pantry Chef backend: pantry, shopping list and recipe discovery API."""

__version__ = "0.1.0"
