"""Tests for the naming service transforms."""

from dataclasses import FrozenInstanceError
import hashlib
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[2]))

import safename
from safename.dtos.naming_options import NamingOptions
from safename.services.character_classes import is_reserved_name
from safename.services.naming_service import (
    InvalidReplacementError,
    MaxLengthError,
    NamingConfigError,
    NamingService,
)


def _md5(data: bytes) -> str:
    """Return the hex digest used by the fallback."""

    return hashlib.md5(data).hexdigest()


def test_clean_collapses_separators_and_reserved_characters() -> None:
    """Remove reserved characters and collapse repeated separators."""

    service = NamingService()
    assert service.clean(r".....Hello<>:/---\....W|orld?.!..") == ".Hello-.World.!"


def test_name_with_space_replacement_and_short_length() -> None:
    """Replace invalid runs with a space and cap the result to six bytes."""

    service = NamingService(" ", 6)
    assert service.name(".....H<>e:l.!..") == ".H e l"


def test_name_falls_back_to_md5_for_reserved_characters_only() -> None:
    """Return the digest of the input when nothing valid remains."""

    assert NamingService().name('<>:"/\\|?*') == "3e4bde3cb1e4c9cfa2db74bbc536d5e2"


def test_clean_of_empty_string_returns_digest() -> None:
    """Never return an empty name."""

    assert NamingService().clean("") == _md5(b"")
    assert NamingService().name("") == _md5(b"")


@pytest.mark.parametrize("replacement", ["?", ".", "a.b", "<", "/", "|"])
def test_replacement_with_invalid_characters_is_rejected(replacement: str) -> None:
    """Reject replacement text that contains reserved characters or dots."""

    with pytest.raises(InvalidReplacementError) as error:
        NamingService(replacement, 6)
    assert error.value.reason == InvalidReplacementError.INVALID
    assert "Invalid characters" in str(error.value)


@pytest.mark.parametrize("replacement", ["\x07", "a\nb", "\x7f", "\u200b"])
def test_replacement_with_control_characters_is_rejected(replacement: str) -> None:
    """Report control characters separately from other invalid characters."""

    with pytest.raises(InvalidReplacementError) as error:
        NamingService(replacement)
    assert error.value.reason == InvalidReplacementError.CONTROL
    assert "Control characters" in str(error.value)


def test_max_length_above_limit_is_rejected() -> None:
    """Reject length caps that no filesystem accepts."""

    with pytest.raises(MaxLengthError):
        NamingService("", 256)
    assert NamingService("", 255).options.maxLength == 255


@pytest.mark.parametrize("max_length", [0, -1])
def test_max_length_below_one_is_rejected(max_length: int) -> None:
    """Reject caps that would empty or wrap the truncated name."""

    with pytest.raises(MaxLengthError) as error:
        NamingService("", max_length)
    assert "between 1 and 255" in str(error.value)
    assert NamingService("", 1).name("abc") == "a"


def test_config_errors_are_value_errors() -> None:
    """Keep the configuration errors catchable as ``ValueError``."""

    assert issubclass(NamingConfigError, ValueError)
    assert issubclass(InvalidReplacementError, NamingConfigError)
    assert issubclass(MaxLengthError, NamingConfigError)


def test_with_options_returns_default_service_alongside_error() -> None:
    """Let callers continue with defaults when the options are rejected."""

    service, error = NamingService.with_options("?", 6)
    assert isinstance(error, InvalidReplacementError)
    assert service.options == NamingOptions()

    service, error = NamingService.with_options("_", 100)
    assert error is None
    assert service.options == NamingOptions(replacement="_", maxLength=100)


def test_options_are_immutable() -> None:
    """Prevent mutation of the shared options."""

    service = NamingService()
    with pytest.raises(FrozenInstanceError):
        service.options.replacement = "_"  # type: ignore[misc]


@pytest.mark.parametrize("reserved", ["CON", "con", "Prn", "aux", "NUL", "com1", "COM9", "lpt5", "LpT9"])
def test_reserved_device_names_fall_back_to_digest(reserved: str) -> None:
    """Replace DOS device names with the digest of the input."""

    service = NamingService()
    assert service.name(reserved) == _md5(reserved.encode("utf-8"))
    assert service.clean(reserved) == _md5(reserved.encode("utf-8"))


@pytest.mark.parametrize("allowed", ["con.txt", "com10", "lpt0", "console", "auxiliary", "nul_"])
def test_names_only_resembling_reserved_ones_are_kept(allowed: str) -> None:
    """Only exact reserved names are rejected."""

    assert NamingService().name(allowed) == allowed


def test_dot_names_fall_back_to_digest() -> None:
    """Treat ``.`` and ``..`` as unusable."""

    service = NamingService()
    assert service.name(".") == _md5(b".")
    assert service.name("..") == _md5(b"..")
    assert service.clean("...") == _md5(b"...")


def test_name_equal_to_replacement_falls_back_to_digest() -> None:
    """Reject results made only of the replacement text."""

    service = NamingService("_")
    assert service.name("<>") == _md5(b"<>")


def test_name_keeps_repeated_separators() -> None:
    """Leave separators untouched in the minimal transform."""

    assert NamingService().name("a__b  c--d") == "a__b  c--d"


def test_clean_collapses_repeated_separators() -> None:
    """Collapse each kind of separator to a single character."""

    assert NamingService().clean("a__b  c--d++e!!f") == "a_b c-d+e!f"


def test_html_entities_are_decoded_before_filtering() -> None:
    """Resolve entities so encoded reserved characters are still removed."""

    service = NamingService()
    assert service.name("Tom &amp; Jerry") == "Tom & Jerry"
    assert service.name("a&lt;b&gt;c") == "abc"
    assert service.clean("caf&eacute;") == "café"


def test_references_to_forbidden_code_points_decode_to_nothing() -> None:
    """Drop numeric references to control code points instead of replacing them."""

    assert NamingService("_").name("a&#1;b") == "ab"
    assert NamingService("_").clean("a&#1;b") == "ab"


def test_invalid_utf8_runs_become_one_replacement() -> None:
    """Replace each run of undecodable bytes with the replacement text."""

    assert NamingService().name(b"ab\xff\xfecd") == "abcd"
    assert NamingService("_").name(b"ab\xff\xfecd") == "ab_cd"
    assert NamingService("_").clean(b"ab\xffcd\xc3") == "ab_cd_"


def test_surrogate_escaped_strings_are_treated_as_bytes() -> None:
    """Handle names decoded with ``os.fsdecode`` from invalid bytes."""

    service = NamingService()
    assert service.name("ab\udcffcd") == "abcd"
    assert service.name("\udcff") == _md5(b"\xff")


def test_lone_surrogates_are_replaced() -> None:
    """Replace surrogates that cannot be encoded to UTF-8."""

    assert NamingService("_").name("a\ud800b") == "a_b"


def test_bytes_and_str_inputs_are_equivalent() -> None:
    """Give the same answer for a name and its UTF-8 bytes."""

    service = NamingService()
    assert service.name(b"hello world") == service.name("hello world")
    assert service.clean("résumé".encode("utf-8")) == service.clean("résumé")


def test_unsupported_input_type_raises_type_error() -> None:
    """Refuse values that are neither text nor bytes."""

    with pytest.raises(TypeError):
        NamingService().name(42)  # type: ignore[arg-type]


def test_control_characters_are_replaced() -> None:
    """Replace ASCII controls in name and Unicode controls in clean."""

    assert NamingService().name("tab\there\x00") == "tabhere"
    assert NamingService("_").name("line\nbreak") == "line_break"
    assert NamingService().clean("in\u200bvisible\u202e") == "invisible"


def test_name_keeps_unicode_format_characters() -> None:
    """Only ASCII controls are handled by the minimal transform."""

    assert NamingService().name("in\u200bvisible") == "in\u200bvisible"


def test_clean_folds_unicode_spaces() -> None:
    """Turn every kind of space separator into a single plain space."""

    assert NamingService().clean("a\u00a0\u2028b\u3000c") == "a b c"
    assert NamingService("_").clean("a\u00a0b") == "a b"


def test_trailing_whitespace_and_dots_are_trimmed() -> None:
    """Strip the trailing run and put the replacement in its place."""

    assert NamingService().name("report. . ") == "report"
    assert NamingService("_").name("report. ") == "report_"


def test_leading_dots_collapse_to_one() -> None:
    """Keep hidden files hidden but with a single dot."""

    assert NamingService().name("...hidden") == ".hidden"
    assert NamingService().clean("..hidden..file") == ".hidden.file"


def test_clean_collapses_repeated_replacement() -> None:
    """Collapse consecutive copies of the replacement text."""

    assert NamingService("~").clean("a<~>b") == "a~b"
    assert NamingService("xy").clean("a<xy>b") == "axyb"


def test_replacement_is_matched_literally() -> None:
    """Escape regex metacharacters present in the replacement text."""

    assert NamingService("+").clean("x<+>y") == "x+y"
    assert NamingService("$").clean("x<$$>y") == "x$y"


def test_clean_repeats_until_stable() -> None:
    """Collapse separators exposed by trimming in a later pass."""

    assert NamingService("_").clean("name._ ") == "name._"
    assert NamingService().clean("x_<>_y") == "x_y"
    assert NamingService().clean("a. . .") == "a"


def test_truncation_respects_byte_length() -> None:
    """Cap names in bytes without splitting multi-byte characters."""

    assert NamingService("", 5).name("abcdefgh") == "abcde"
    assert NamingService("", 5).name("ééé") == "éé"
    assert len(NamingService().clean("x" * 300)) == 240


SAMPLES = [
    "Hello World.txt",
    "  spaced  out  ",
    "...",
    "con",
    "a<>b",
    "résumé final.pdf",
    "\u200bzero",
    "x" * 300,
    "日本語のファイル",
    "__init__.py",
    "  ",
]


@pytest.mark.parametrize("value", SAMPLES)
def test_transforms_are_idempotent(value: str) -> None:
    """Running a transform on its own output changes nothing."""

    service = NamingService()
    assert service.name(service.name(value)) == service.name(value)
    assert service.clean(service.clean(value)) == service.clean(value)


HOSTILE = [b"", b"\xff", "\x00", "   ", "<>", "&amp;", "\u2028", "." * 300, "é" * 200, "a" + " ." * 50]


@pytest.mark.parametrize("value", HOSTILE)
def test_outputs_are_always_usable(value) -> None:
    """Return non-empty, bounded, non-reserved names for any input."""

    service = NamingService()
    for result in (service.name(value), service.clean(value)):
        assert result
        assert len(result.encode("utf-8")) <= 240
        assert not is_reserved_name(result)
        assert not result.endswith((" ", "."))


def test_transforms_are_deterministic() -> None:
    """Produce the same output for the same input and options."""

    assert NamingService("_").clean("a<b>c  d") == NamingService("_").clean("a<b>c  d")


def test_package_level_helpers_use_default_options() -> None:
    """Expose ``name`` and ``clean`` with the default configuration."""

    assert safename.DEFAULT_SERVICE.options == NamingOptions()
    assert safename.name("a<b") == "ab"
    assert safename.clean(r".....Hello<>:/---\....W|orld?.!..") == ".Hello-.World.!"
