"""Resolution of style properties against a font collection and shared caches."""

from __future__ import annotations

import re
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Protocol

from .scripts import locale_to_tag
from .style import (
    NORMAL_STRETCH,
    NORMAL_WEIGHT,
    FontStyle,
    GenericFamily,
    NamedFamily,
    PropertyKind,
    Setting,
    StyleProperty,
    TextStyle,
    parse_family_list,
    parse_settings,
)
from .util import nearly_eq

_INVALID_INDEX = -1


class FontCollection(Protocol):
    """What resolution needs from a font collection."""

    def family_by_name(self, name: str) -> Optional[Hashable]:
        """Return the id of the family called ``name``, or None."""

    def generic_families(self, family: GenericFamily) -> Iterable[Hashable]:
        """Return the ids of the families that stand for a generic family."""


@dataclass(frozen=True)
class Resolved:
    """Handle to a sequence stored in a ``Cache``; the default handle is invalid."""

    index: int = _INVALID_INDEX

    @property
    def is_valid(self) -> bool:
        return self.index >= 0


class Cache:
    """Deduplicating store of item sequences, addressed by ``Resolved`` handles."""

    def __init__(self) -> None:
        self._items: list[Any] = []
        self._entries: list[tuple[int, int]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drop every stored sequence; earlier handles become invalid."""
        self._items.clear()
        self._entries.clear()

    def insert(self, items: Sequence[Any]) -> Resolved:
        """Store ``items`` unless an equal sequence exists and return its handle."""
        items = list(items)
        for index, (start, end) in enumerate(self._entries):
            if end - start == len(items) and self._items[start:end] == items:
                return Resolved(index)
        start = len(self._items)
        self._items.extend(items)
        self._entries.append((start, len(self._items)))
        return Resolved(len(self._entries) - 1)

    def get(self, handle: Resolved) -> Optional[list[Any]]:
        """Return the sequence behind ``handle``, or None if there is none."""
        if not 0 <= handle.index < len(self._entries):
            return None
        start, end = self._entries[handle.index]
        return self._items[start:end]


@dataclass(frozen=True)
class ResolvedProperty:
    """A style property whose resources have been resolved."""

    kind: PropertyKind
    value: Any


@dataclass
class ResolvedDecoration:
    """Underline or strikethrough decoration."""

    enabled: bool = False
    offset: Optional[float] = None
    size: Optional[float] = None
    brush: Any = None


@dataclass
class ResolvedStyle:
    """Flattened group of resolved style properties."""

    font_stack: Resolved = field(default_factory=Resolved)
    font_size: float = 16.0
    font_stretch: float = NORMAL_STRETCH
    font_style: FontStyle = FontStyle.NORMAL
    font_weight: float = NORMAL_WEIGHT
    font_variations: Resolved = field(default_factory=Resolved)
    font_features: Resolved = field(default_factory=Resolved)
    locale: Optional[str] = None
    brush: Any = None
    underline: ResolvedDecoration = field(default_factory=ResolvedDecoration)
    strikethrough: ResolvedDecoration = field(default_factory=ResolvedDecoration)
    line_height: float = 1.0
    word_spacing: float = 0.0
    letter_spacing: float = 0.0

    def copy(self) -> "ResolvedStyle":
        """Return an independent copy of this style."""
        return replace(
            self,
            underline=replace(self.underline),
            strikethrough=replace(self.strikethrough),
        )

    def apply(self, prop: ResolvedProperty) -> None:
        """Set the field that ``prop`` describes."""
        target, name = self._slot(prop.kind)
        setattr(target, name, prop.value)

    def check(self, prop: ResolvedProperty) -> bool:
        """Return True if this style already has the value of ``prop``."""
        target, name = self._slot(prop.kind)
        current = getattr(target, name)
        if prop.kind in _FUZZY_KINDS:
            return nearly_eq(current, prop.value)
        return current == prop.value

    def _slot(self, kind: PropertyKind) -> tuple[Any, str]:
        decoration, name = _DECORATION_SLOTS.get(kind, (None, None))
        if decoration is not None:
            return getattr(self, decoration), name
        return self, kind.value


_DECORATION_SLOTS: dict[PropertyKind, tuple[str, str]] = {
    PropertyKind.UNDERLINE: ("underline", "enabled"),
    PropertyKind.UNDERLINE_OFFSET: ("underline", "offset"),
    PropertyKind.UNDERLINE_SIZE: ("underline", "size"),
    PropertyKind.UNDERLINE_BRUSH: ("underline", "brush"),
    PropertyKind.STRIKETHROUGH: ("strikethrough", "enabled"),
    PropertyKind.STRIKETHROUGH_OFFSET: ("strikethrough", "offset"),
    PropertyKind.STRIKETHROUGH_SIZE: ("strikethrough", "size"),
    PropertyKind.STRIKETHROUGH_BRUSH: ("strikethrough", "brush"),
}

_FUZZY_KINDS = frozenset(
    {
        PropertyKind.FONT_SIZE,
        PropertyKind.LINE_HEIGHT,
        PropertyKind.WORD_SPACING,
        PropertyKind.LETTER_SPACING,
    }
)

_SCALED_OPTIONAL_KINDS = frozenset(
    {
        PropertyKind.UNDERLINE_OFFSET,
        PropertyKind.UNDERLINE_SIZE,
        PropertyKind.STRIKETHROUGH_OFFSET,
        PropertyKind.STRIKETHROUGH_SIZE,
    }
)

_SCALED_KINDS = frozenset(
    {PropertyKind.FONT_SIZE, PropertyKind.WORD_SPACING, PropertyKind.LETTER_SPACING}
)


@dataclass
class RangedStyle:
    """Style covering the text range ``start:end``."""

    style: ResolvedStyle
    start: int
    end: int

    def copy(self) -> "RangedStyle":
        return RangedStyle(self.style.copy(), self.start, self.end)


def _scale_optional(value: Optional[float], scale: float) -> Optional[float]:
    return None if value is None else value * scale


def _parse_locale(source: Optional[str]) -> Optional[str]:
    """Parse a locale such as ``en-US`` into a normalised tag, or None."""
    if not source:
        return None
    parts = [part for part in re.split(r"[-_]", source.strip()) if part]
    if not parts:
        return None
    language = parts[0].lower()
    script = region = None
    rest = parts[1:]
    if rest and len(rest[0]) == 4 and rest[0].isalpha():
        script = rest.pop(0).title()
    if rest and len(rest[0]) in (2, 3):
        region = rest.pop(0).upper()
    try:
        return locale_to_tag(language, script, region)
    except ValueError:
        return None


class ResolveContext:
    """Resolves dynamic style properties and keeps their shared resources."""

    def __init__(self) -> None:
        self._families = Cache()
        self._variations = Cache()
        self._features = Cache()

    def resolve_property(
        self, collection: FontCollection, prop: StyleProperty, scale: float
    ) -> ResolvedProperty:
        """Resolve one style property, scaling lengths by ``scale``."""
        kind, value = prop.kind, prop.value
        if kind is PropertyKind.FONT_STACK:
            value = self.resolve_stack(collection, value)
        elif kind is PropertyKind.FONT_VARIATIONS:
            value = self.resolve_variations(value)
        elif kind is PropertyKind.FONT_FEATURES:
            value = self.resolve_features(value)
        elif kind is PropertyKind.LOCALE:
            value = _parse_locale(value)
        elif kind in _SCALED_KINDS:
            value = value * scale
        elif kind in _SCALED_OPTIONAL_KINDS:
            value = _scale_optional(value, scale)
        return ResolvedProperty(kind, value)

    def resolve_entire_style_set(
        self, collection: FontCollection, raw_style: TextStyle, scale: float
    ) -> ResolvedStyle:
        """Resolve a complete text style."""
        return ResolvedStyle(
            font_stack=self.resolve_stack(collection, raw_style.font_stack),
            font_size=raw_style.font_size * scale,
            font_stretch=raw_style.font_stretch,
            font_style=raw_style.font_style,
            font_weight=raw_style.font_weight,
            font_variations=self.resolve_variations(raw_style.font_variations),
            font_features=self.resolve_features(raw_style.font_features),
            locale=_parse_locale(raw_style.locale),
            brush=raw_style.brush,
            underline=ResolvedDecoration(
                enabled=raw_style.has_underline,
                offset=_scale_optional(raw_style.underline_offset, scale),
                size=_scale_optional(raw_style.underline_size, scale),
                brush=raw_style.underline_brush,
            ),
            strikethrough=ResolvedDecoration(
                enabled=raw_style.has_strikethrough,
                offset=_scale_optional(raw_style.strikethrough_offset, scale),
                size=_scale_optional(raw_style.strikethrough_size, scale),
                brush=raw_style.strikethrough_brush,
            ),
            line_height=raw_style.line_height,
            word_spacing=raw_style.word_spacing * scale,
            letter_spacing=raw_style.letter_spacing * scale,
        )

    def resolve_stack(self, collection: FontCollection, stack: Any) -> Resolved:
        """Resolve a font stack: a CSS source string, one family or a sequence."""
        if isinstance(stack, str):
            families: Iterable[Any] = parse_family_list(stack)
        elif isinstance(stack, (NamedFamily, GenericFamily)):
            families = (stack,)
        else:
            families = stack
        ids: list[Hashable] = []
        for family in families:
            if isinstance(family, GenericFamily):
                ids.extend(collection.generic_families(family))
            else:
                family_id = collection.family_by_name(family.name)
                if family_id is not None:
                    ids.append(family_id)
        return self._families.insert(ids)

    def resolve_variations(self, variations: Any) -> Resolved:
        """Resolve font variation settings; an empty set gives the default handle."""
        return self._resolve_settings(self._variations, variations, float)

    def resolve_features(self, features: Any) -> Resolved:
        """Resolve font feature settings; an empty set gives the default handle."""
        return self._resolve_settings(self._features, features, int)

    @staticmethod
    def _resolve_settings(cache: Cache, settings: Any, convert: type) -> Resolved:
        if isinstance(settings, str):
            parsed = [Setting(s.tag, convert(s.value)) for s in parse_settings(settings)]
        else:
            parsed = list(settings)
        if not parsed:
            return Resolved()
        parsed.sort(key=lambda setting: setting.tag.encode("ascii"))
        return cache.insert(parsed)

    def stack(self, handle: Resolved) -> Optional[list[Hashable]]:
        """Return the family ids behind a font stack handle."""
        return self._families.get(handle)

    def variations(self, handle: Resolved) -> Optional[list[Setting]]:
        """Return the variation settings behind a handle."""
        return self._variations.get(handle)

    def features(self, handle: Resolved) -> Optional[list[Setting]]:
        """Return the feature settings behind a handle."""
        return self._features.get(handle)

    def clear(self) -> None:
        """Drop every resolved resource."""
        self._families.clear()
        self._variations.clear()
        self._features.clear()