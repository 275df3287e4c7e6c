"""Domain models for the application."""

from folio.models.base import Base
from folio.models.translation_entry import TranslationEntry

__all__ = ["Base", "TranslationEntry"]
