"""Configuration helper for the default naming options."""

from __future__ import annotations

import os
from typing import Mapping, MutableMapping, Optional

from safename.dtos.naming_options import DEFAULT_MAX_LENGTH, DEFAULT_REPLACEMENT, NamingOptions


class NamingConfiguration:
    """Resolve the replacement text and length cap from the environment."""

    REPLACEMENT_KEY = "SAFENAME_REPLACEMENT"
    MAX_LENGTH_KEY = "SAFENAME_MAX_LENGTH"

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """Persist the environment mapping used to read configuration values."""

        self._environ: MutableMapping[str, str] = (
            dict(environ) if environ is not None else dict(os.environ)
        )

    def get_replacement(self) -> str:
        """Return the text used in place of invalid characters."""

        return self._environ.get(self.REPLACEMENT_KEY, DEFAULT_REPLACEMENT)

    def get_max_length(self) -> int:
        """Return the maximum length of a name in UTF-8 bytes."""

        raw = self._environ.get(self.MAX_LENGTH_KEY)
        if raw is None:
            return DEFAULT_MAX_LENGTH
        try:
            return int(raw)
        except ValueError:
            return DEFAULT_MAX_LENGTH

    def build_options(
        self,
        replacement: Optional[str] = None,
        max_length: Optional[int] = None,
    ) -> NamingOptions:
        """Return the options, letting explicit arguments override the environment."""

        return NamingOptions(
            replacement=self.get_replacement() if replacement is None else replacement,
            maxLength=self.get_max_length() if max_length is None else max_length,
        )
