"""Turn arbitrary strings into file names that are valid on every platform."""

from __future__ import annotations

from safename.services.naming_service import (
    InvalidReplacementError,
    MaxLengthError,
    NamingConfigError,
    NameInput,
    NamingService,
)
from safename.dtos.naming_options import NamingOptions

__version__ = "1.0.0"

DEFAULT_SERVICE = NamingService()


def name(value: NameInput) -> str:
    """Return the minimal valid file name for ``value`` using the default options."""

    return DEFAULT_SERVICE.name(value)


def clean(value: NameInput) -> str:
    """Return the humanized valid file name for ``value`` using the default options."""

    return DEFAULT_SERVICE.clean(value)


__all__ = [
    "DEFAULT_SERVICE",
    "InvalidReplacementError",
    "MaxLengthError",
    "NamingConfigError",
    "NamingOptions",
    "NamingService",
    "clean",
    "name",
]
