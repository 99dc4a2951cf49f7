"""Narration of focused UI elements, nearby entities, paths and detail screens."""

__version__ = "0.1.0"
