"""Normalize arbitrary names into file names that are portable across platforms.

Two transforms are offered:

``name``
    Minimal changes: control and reserved path characters are replaced, the
    trailing run of whitespace and dots is trimmed and leading dots collapse to
    one.

``clean``
    Everything ``name`` does, plus invisible characters removal, Unicode spaces
    folded to a plain space and repeated separators (`` _-+.!``) collapsed until
    the result is stable.

Whenever the outcome is empty, equals the replacement text or is a reserved
device name, the md5 hex digest of the raw input is returned instead.
"""

from __future__ import annotations

import hashlib
import html
import logging
import re
from typing import Optional, Tuple, Union

from safename.dtos.naming_options import (
    DEFAULT_MAX_LENGTH,
    DEFAULT_REPLACEMENT,
    MAX_ALLOWED_LENGTH,
    NamingOptions,
)
from safename.services import character_classes as chars


logger = logging.getLogger(__name__)

NameInput = Union[str, bytes]


class NamingConfigError(ValueError):
    """Raised when a naming service is built with unusable options."""


class InvalidReplacementError(NamingConfigError):
    """Raised when the replacement text would itself produce an invalid name."""

    CONTROL = "control"
    INVALID = "invalid"

    def __init__(self, reason: str) -> None:
        """Store the reason and build the matching message."""

        if reason == self.CONTROL:
            message = "Control characters exist in replacement"
        else:
            message = 'Invalid characters like `., <, >, :, ", /, \\, |, ?, *` exist in replacement'
        super().__init__(message)
        self.reason = reason


class MaxLengthError(NamingConfigError):
    """Raised when the requested length cap is not between 1 and what filesystems accept."""

    def __init__(self, max_length: int) -> None:
        """Store the rejected value."""

        super().__init__(f"max_length must be between 1 and {MAX_ALLOWED_LENGTH}")
        self.max_length = max_length


def validate_options(options: NamingOptions) -> None:
    """Raise a :class:`NamingConfigError` when ``options`` cannot be used."""

    if chars.contains_control(options.replacement):
        raise InvalidReplacementError(InvalidReplacementError.CONTROL)
    if chars.contains_invalid_path_chars(options.replacement):
        raise InvalidReplacementError(InvalidReplacementError.INVALID)
    if not 1 <= options.maxLength <= MAX_ALLOWED_LENGTH:
        raise MaxLengthError(options.maxLength)


def raw_bytes(value: NameInput) -> bytes:
    """Return the bytes a name stands for.

    ``str`` values may carry lone surrogates (for instance names produced by
    :func:`os.fsdecode`), so they are encoded with ``surrogateescape`` and, when
    that is not enough, with ``surrogatepass``.
    """

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if not isinstance(value, str):
        raise TypeError(f"expected str or bytes, got {type(value).__name__}")
    try:
        return value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return value.encode("utf-8", "surrogatepass")


def to_valid_text(data: bytes, replacement: str) -> str:
    """Decode ``data`` replacing each run of invalid UTF-8 bytes with ``replacement``."""

    text = data.decode("utf-8", "surrogateescape")
    return chars.ESCAPED_BYTES_PATTERN.sub(lambda _match: replacement, text)


def truncate(text: str, max_length: int) -> str:
    """Cap ``text`` to ``max_length`` UTF-8 bytes without splitting a character."""

    encoded = text.encode("utf-8")
    if len(encoded) <= max_length:
        return text
    return encoded[:max_length].decode("utf-8", "ignore")


def fallback_name(data: bytes) -> str:
    """Return the deterministic substitute used for unusable names."""

    return hashlib.md5(data).hexdigest()


class NamingService:
    """Apply the naming transforms with a fixed replacement and length cap."""

    def __init__(
        self,
        replacement: str = DEFAULT_REPLACEMENT,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        """Validate and freeze the options, compiling the replacement pattern once."""

        options = NamingOptions(replacement=replacement, maxLength=max_length)
        validate_options(options)
        self._options = options
        self._repeated_replacement: Optional[re.Pattern[str]] = None
        if replacement:
            self._repeated_replacement = re.compile(f"(?:{re.escape(replacement)}){{2,}}")

    @classmethod
    def from_options(cls, options: NamingOptions) -> "NamingService":
        """Build a service out of a :class:`NamingOptions` instance."""

        return cls(options.replacement, options.maxLength)

    @classmethod
    def with_options(
        cls,
        replacement: str,
        max_length: int,
    ) -> Tuple["NamingService", Optional[NamingConfigError]]:
        """Return a service and the configuration error, if any.

        When the options are rejected a default service is returned alongside the
        error so callers can decide whether to continue with the defaults.
        """

        try:
            return cls(replacement, max_length), None
        except NamingConfigError as exc:
            logger.warning("Opciones de nombre no válidas, se usan los valores por defecto: %s", exc)
            return cls(), exc

    @property
    def options(self) -> NamingOptions:
        """Expose the frozen options of this service."""

        return self._options

    def name(self, value: NameInput) -> str:
        """Return ``value`` with only the changes needed to make it a valid name."""

        data = raw_bytes(value)
        replacement = self._options.replacement

        text = to_valid_text(data, replacement)
        text = html.unescape(text)
        text = chars.ASCII_CONTROL_PATTERN.sub(lambda _match: replacement, text)
        text = chars.INVALID_PATH_CHARS_PATTERN.sub(lambda _match: replacement, text)
        text = chars.trim_trailing(text, replacement)
        text = chars.collapse_leading_dots(text)

        return self._finalize(data, text)

    def clean(self, value: NameInput) -> str:
        """Return a more humane valid name for ``value``.

        Invisible characters are dropped, every kind of space becomes a plain
        space and repeated separators are collapsed.
        """

        data = raw_bytes(value)
        replacement = self._options.replacement

        text = to_valid_text(data, replacement)
        if text:
            text = html.unescape(text)
            text = chars.replace_unicode_controls(text, replacement)
            text = chars.replace_unicode_spaces(text)
            text = chars.INVALID_PATH_CHARS_PATTERN.sub(lambda _match: replacement, text)
            text = self._collapse_until_stable(text)

        return self._finalize(data, text)

    def _collapse_until_stable(self, text: str) -> str:
        """Repeat the collapsing passes until one of them changes nothing."""

        replacement = self._options.replacement
        while True:
            previous = text
            text = chars.collapse_repeated_separators(text)
            if self._repeated_replacement is not None:
                text = self._repeated_replacement.sub(lambda _match: replacement, text)
            text = chars.trim_trailing(text, replacement)
            text = chars.collapse_leading_dots(text)
            if text == previous:
                return text

    def _is_valid(self, text: str) -> bool:
        """Tell whether an intermediate name can be used as is."""

        if not text or text == self._options.replacement:
            return False
        return not chars.is_reserved_name(text)

    def _finalize(self, data: bytes, text: str) -> str:
        """Truncate a valid intermediate name or fall back to the digest of the input."""

        if self._is_valid(text):
            return truncate(text, self._options.maxLength)
        digest = fallback_name(data)
        logger.debug("Nombre no válido %r, se usa el resumen %s", text, digest)
        return digest
