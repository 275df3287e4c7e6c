"""Filename sanitization for cache files."""

import re
import unicodedata


def sanitize_filename(name: str, max_length: int = 255) -> str:
    """Reduce an arbitrary key to a filesystem-safe ASCII stem.

    Accented characters are folded to ASCII ("é" -> "e"), whitespace, slashes
    and colons become hyphens, and anything outside ``[a-z0-9_-]`` is
    dropped. The result is lowercased.

    Args:
        name: Slug or language code to sanitize
        max_length: Maximum length of the result

    Returns:
        Sanitized stem (without extension)

    Raises:
        ValueError: If name is empty or nothing survives sanitization
    """
    if not name or not name.strip():
        raise ValueError("Name cannot be empty")

    normalized = unicodedata.normalize("NFKD", name)
    ascii_str = normalized.encode("ascii", "ignore").decode("ascii").lower()

    sanitized = re.sub(r"[\s/\\:]+", "-", ascii_str)
    sanitized = re.sub(r"[^a-z0-9_-]", "", sanitized)
    sanitized = re.sub(r"-+", "-", sanitized)
    sanitized = sanitized.strip("_-")

    if not sanitized:
        raise ValueError(f"'{name}' resulted in an empty filename after sanitization")

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length].rstrip("_-")

    return sanitized
