"""Character classes and patterns shared by the naming pipelines."""

from __future__ import annotations

import re
import unicodedata
from typing import Dict, FrozenSet


ASCII_CONTROL_PATTERN = re.compile(r"[\x00-\x1f\x7f]")
INVALID_PATH_CHARS_PATTERN = re.compile(r'[<>:"/\\|?*]+')
LEADING_DOTS_PATTERN = re.compile(r"^\.+")
ESCAPED_BYTES_PATTERN = re.compile(r"[\udc80-\udcff]+")

ASCII_WHITESPACE = "\t\n\v\f\r "
TRAILING_TRIM_CHARS = ASCII_WHITESPACE + "."

UNICODE_CONTROL_CATEGORIES = frozenset({"Cc", "Cf"})
UNICODE_SPACE_CATEGORIES = frozenset({"Zl", "Zp", "Zs"})

# Runs of two or more soft separators and the single character they collapse to.
REPEATED_SEPARATORS_PATTERN = re.compile(
    r"(?P<space>[\t\n\v\f\r ]{2,})"
    r"|(?P<underscore>_{2,})"
    r"|(?P<dash>-{2,})"
    r"|(?P<plus>\+{2,})"
    r"|(?P<dot>\.{2,})"
    r"|(?P<bang>!{2,})"
)
SEPARATOR_REPLACEMENTS: Dict[str, str] = {
    "space": " ",
    "underscore": "_",
    "dash": "-",
    "plus": "+",
    "dot": ".",
    "bang": "!",
}

# https://docs.microsoft.com/en-us/windows/win32/fileio/naming-a-file#naming-conventions
RESERVED_NAMES_BY_LENGTH: Dict[int, FrozenSet[str]] = {
    1: frozenset({"."}),
    2: frozenset({".."}),
    3: frozenset({"con", "prn", "aux", "nul"}),
    4: frozenset(
        {f"com{digit}" for digit in range(1, 10)} | {f"lpt{digit}" for digit in range(1, 10)}
    ),
}


def is_unicode_control(char: str) -> bool:
    """Return ``True`` for characters in the Cc (control) or Cf (format) categories."""

    return unicodedata.category(char) in UNICODE_CONTROL_CATEGORIES


def is_unicode_space(char: str) -> bool:
    """Return ``True`` for line, paragraph and space separators."""

    return unicodedata.category(char) in UNICODE_SPACE_CATEGORIES


def contains_control(text: str) -> bool:
    """Tell whether ``text`` holds a Cc or Cf character, ASCII controls included."""

    return any(is_unicode_control(char) for char in text)


def contains_invalid_path_chars(text: str) -> bool:
    """Tell whether ``text`` holds a reserved path character or a dot."""

    return bool(INVALID_PATH_CHARS_PATTERN.search(text)) or "." in text


def replace_unicode_controls(text: str, replacement: str) -> str:
    """Replace each Cc/Cf character with ``replacement``."""

    return "".join(replacement if is_unicode_control(char) else char for char in text)


def replace_unicode_spaces(text: str) -> str:
    """Replace each Zl/Zp/Zs character with a plain ASCII space."""

    return "".join(" " if is_unicode_space(char) else char for char in text)


def collapse_repeated_separators(text: str) -> str:
    """Collapse every run of repeated soft separators to its single character."""

    return REPEATED_SEPARATORS_PATTERN.sub(lambda match: SEPARATOR_REPLACEMENTS[match.lastgroup], text)


def trim_trailing(text: str, replacement: str) -> str:
    """Replace the trailing run of whitespace and dots with ``replacement``."""

    stripped = text.rstrip(TRAILING_TRIM_CHARS)
    if len(stripped) == len(text):
        return text
    return stripped + replacement


def collapse_leading_dots(text: str) -> str:
    """Reduce a leading run of dots to a single dot."""

    return LEADING_DOTS_PATTERN.sub(".", text)


def is_reserved_name(text: str) -> bool:
    """Return ``True`` when ``text`` is a reserved device or path name."""

    reserved = RESERVED_NAMES_BY_LENGTH.get(len(text.encode("utf-8")))
    if reserved is None:
        return False
    return text.lower() in reserved
