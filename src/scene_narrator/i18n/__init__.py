"""Localized message templates."""

from .catalog import MessageCatalog, Translator, load_catalog

__all__ = ["MessageCatalog", "Translator", "load_catalog"]
