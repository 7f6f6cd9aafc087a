"""Data transfer objects describing the options of a naming service."""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_REPLACEMENT = ""
DEFAULT_MAX_LENGTH = 240
MAX_ALLOWED_LENGTH = 255


@dataclass(frozen=True)
class NamingOptions:
    """Immutable replacement text and byte-length cap shared by every call."""

    replacement: str = DEFAULT_REPLACEMENT
    maxLength: int = DEFAULT_MAX_LENGTH
