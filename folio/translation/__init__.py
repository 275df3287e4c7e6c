"""Translation module: segment splitting, repair, caching and the translator."""

from folio.translation.cache import (
    CacheEntry,
    FileTranslationCache,
    MemoryTranslationCache,
    TranslationCache,
)
from folio.translation.repair import repair_markdown
from folio.translation.splitter import Segment, SegmentKind, join_segments, split_segments
from folio.translation.translator import LLMTranslator, Translator

__all__ = [
    "CacheEntry",
    "FileTranslationCache",
    "LLMTranslator",
    "MemoryTranslationCache",
    "Segment",
    "SegmentKind",
    "TranslationCache",
    "Translator",
    "join_segments",
    "repair_markdown",
    "split_segments",
]
