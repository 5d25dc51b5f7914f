"""Style properties, font families and font settings."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

_ASCII_WHITESPACE = " \t\n\x0c\r"
_QUOTES = "\"'"


class GenericFamily(Enum):
    """Generic font family as named in CSS."""

    SERIF = "serif"
    SANS_SERIF = "sans-serif"
    MONOSPACE = "monospace"
    CURSIVE = "cursive"
    FANTASY = "fantasy"
    SYSTEM_UI = "system-ui"
    UI_SERIF = "ui-serif"
    UI_SANS_SERIF = "ui-sans-serif"
    UI_MONOSPACE = "ui-monospace"
    UI_ROUNDED = "ui-rounded"
    EMOJI = "emoji"
    MATH = "math"
    FANGSONG = "fangsong"

    @classmethod
    def parse(cls, s: str) -> Optional["GenericFamily"]:
        """Return the generic family named by ``s``, or None."""
        try:
            return cls(s.strip())
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


class FontStyle(Enum):
    """Slant of a font."""

    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"


# Default weight and stretch of a font.
NORMAL_WEIGHT = 400.0
NORMAL_STRETCH = 1.0


@dataclass(frozen=True)
class NamedFamily:
    """Font family referred to by name."""

    name: str

    def __str__(self) -> str:
        return format_family(self)


FontFamily = Union[NamedFamily, GenericFamily]


@dataclass(frozen=True)
class Setting:
    """Font variation or feature setting: a four character tag and a value."""

    tag: str
    value: float

    def __post_init__(self) -> None:
        if len(self.tag) != 4 or not self.tag.isascii():
            raise ValueError(f"invalid setting tag: {self.tag!r}")


class WhiteSpaceCollapse(Enum):
    """How white space in text is treated."""

    COLLAPSE = "collapse"
    PRESERVE = "preserve"


class PropertyKind(Enum):
    """Kinds of style properties."""

    FONT_STACK = "font_stack"
    FONT_SIZE = "font_size"
    FONT_STRETCH = "font_stretch"
    FONT_STYLE = "font_style"
    FONT_WEIGHT = "font_weight"
    FONT_VARIATIONS = "font_variations"
    FONT_FEATURES = "font_features"
    LOCALE = "locale"
    BRUSH = "brush"
    UNDERLINE = "underline"
    UNDERLINE_OFFSET = "underline_offset"
    UNDERLINE_SIZE = "underline_size"
    UNDERLINE_BRUSH = "underline_brush"
    STRIKETHROUGH = "strikethrough"
    STRIKETHROUGH_OFFSET = "strikethrough_offset"
    STRIKETHROUGH_SIZE = "strikethrough_size"
    STRIKETHROUGH_BRUSH = "strikethrough_brush"
    LINE_HEIGHT = "line_height"
    WORD_SPACING = "word_spacing"
    LETTER_SPACING = "letter_spacing"


@dataclass(frozen=True)
class StyleProperty:
    """A single style property: its kind and its value.

    A font stack value is a CSS source string, a single family or a sequence
    of families. Font settings are a CSS source string or a sequence of
    ``Setting``.
    """

    kind: PropertyKind
    value: Any


@dataclass
class TextStyle:
    """Complete, unresolved text style."""

    font_stack: Any = "sans-serif"
    font_size: float = 16.0
    font_stretch: float = NORMAL_STRETCH
    font_style: FontStyle = FontStyle.NORMAL
    font_weight: float = NORMAL_WEIGHT
    font_variations: Any = ()
    font_features: Any = ()
    locale: Optional[str] = None
    brush: Any = None
    has_underline: bool = False
    underline_offset: Optional[float] = None
    underline_size: Optional[float] = None
    underline_brush: Any = None
    has_strikethrough: bool = False
    strikethrough_offset: Optional[float] = None
    strikethrough_size: Optional[float] = None
    strikethrough_brush: Any = None
    line_height: float = 1.2
    word_spacing: float = 0.0
    letter_spacing: float = 0.0


def parse_family_list(s: str) -> Iterator[FontFamily]:
    """Yield the families of a comma separated CSS font family list."""
    pos = 0
    length = len(s)
    while True:
        while pos < length and (s[pos] in _ASCII_WHITESPACE or s[pos] == ","):
            pos += 1
        if pos >= length:
            return
        first = s[pos]
        if first in _QUOTES:
            start = pos + 1
            close = s.find(first, start)
            if close == -1:
                yield NamedFamily(s[start:].strip())
                return
            yield NamedFamily(s[start:close].strip())
            pos = close + 1
            continue
        comma = s.find(",", pos)
        if comma == -1:
            name = s[pos:].strip()
            pos = length
        else:
            name = s[pos:comma].strip()
            pos = comma + 1
        generic = GenericFamily.parse(name)
        yield generic if generic is not None else NamedFamily(name)


def parse_family(s: str) -> Optional[FontFamily]:
    """Parse the first family of ``s``, a name or a generic family."""
    return next(parse_family_list(s), None)


def format_family(family: FontFamily) -> str:
    """Format a family: names are quoted, generic families are bare."""
    if isinstance(family, GenericFamily):
        return family.value
    escaped = family.name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _parse_setting(entry: str) -> Optional[Setting]:
    entry = entry.strip()
    if not entry or entry[0] not in _QUOTES:
        return None
    close = entry.find(entry[0], 1)
    if close != 5:
        return None
    tag = entry[1:5]
    if not tag.isascii():
        return None
    rest = entry[6:].strip()
    if not rest or rest == "on":
        value = 1.0
    elif rest == "off":
        value = 0.0
    else:
        try:
            value = float(rest)
        except ValueError:
            return None
    return Setting(tag, value)


def parse_settings(source: str) -> list[Setting]:
    """Parse CSS style settings such as ``"wght" 700, "liga" off``.

    Malformed entries are skipped. A missing value, or ``on``, means 1 and
    ``off`` means 0.
    """
    return [
        setting
        for setting in map(_parse_setting, source.split(","))
        if setting is not None
    ]