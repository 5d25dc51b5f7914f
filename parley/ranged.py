"""Range based style application."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Optional

from .resolve import RangedStyle, ResolvedProperty, ResolvedStyle


@dataclass(frozen=True)
class _RangedProperty:
    prop: ResolvedProperty
    start: int
    end: int


@dataclass
class _SplitRange:
    first: Optional[int] = None
    replace_start: int = 0
    replace_len: int = 0
    last: Optional[int] = None


def resolve_range(
    start: Optional[int], end: Optional[int], length: int
) -> tuple[int, int]:
    """Clamp a half-open range to ``0:length``; None means unbounded."""
    lo = 0 if start is None else start
    hi = length if end is None else end
    return min(lo, length), min(hi, length)


def _split_range(ranged: _RangedProperty, spans: list[RangedStyle]) -> _SplitRange:
    split = _SplitRange()
    starts = [span.start for span in spans]
    index = bisect_left(starts, ranged.start)
    if index < len(starts) and starts[index] == ranged.start:
        start_index = index
    else:
        start_index = max(index - 1, 0)
    end_index = next(
        (
            i
            for i in range(start_index, len(spans))
            if spans[i].end >= ranged.end
        ),
        len(spans) - 1,
    )
    if spans[start_index].start < ranged.start:
        split.first = start_index
        split.replace_start = start_index + 1
    else:
        split.replace_start = start_index
    if spans[end_index].end > ranged.end:
        split.last = end_index
        split.replace_len = max(end_index - split.replace_start, 0)
    else:
        split.replace_len = max(end_index + 1 - split.replace_start, 0)
    return split


class RangedStyleBuilder:
    """Builds an ordered sequence of non-overlapping ranged styles."""

    def __init__(self) -> None:
        self._properties: list[_RangedProperty] = []
        self._default_style = ResolvedStyle()
        self._length: Optional[int] = None

    def begin(self, length: int) -> None:
        """Prepare to accept properties for text of ``length`` characters."""
        self._properties.clear()
        self._default_style = ResolvedStyle()
        self._length = length

    def _require_begun(self) -> int:
        if self._length is None:
            raise RuntimeError("builder has not begun")
        return self._length

    def push_default(self, prop: ResolvedProperty) -> None:
        """Apply a property to the whole text."""
        self._require_begun()
        self._default_style.apply(prop)

    def push(
        self, prop: ResolvedProperty, start: Optional[int], end: Optional[int]
    ) -> None:
        """Apply a property to ``start:end``; None leaves a side unbounded."""
        length = self._require_begun()
        lo, hi = resolve_range(start, end, length)
        self._properties.append(_RangedProperty(prop, lo, hi))

    def finish(self) -> list[RangedStyle]:
        """Compute the ranged styles and reset the builder."""
        if self._length is None:
            self._reset()
            return []
        styles = [RangedStyle(self._default_style.copy(), 0, self._length)]
        for ranged in self._properties:
            if ranged.start > ranged.end:
                continue
            self._apply_ranged(ranged, styles)
        merged: list[RangedStyle] = []
        for span in styles:
            if merged and merged[-1].style == span.style:
                merged[-1].end = span.end
            else:
                merged.append(span)
        self._reset()
        return merged

    def _reset(self) -> None:
        self._properties.clear()
        self._default_style = ResolvedStyle()
        self._length = None

    @staticmethod
    def _apply_ranged(ranged: _RangedProperty, styles: list[RangedStyle]) -> None:
        prop = ranged.prop
        split = _split_range(ranged, styles)
        inserted = 0
        if split.first is not None:
            first = split.first
            original = styles[first]
            if not original.style.check(prop):
                new_span = original.copy()
                original_end = original.end
                original.end = ranged.start
                new_span.start = ranged.start
                new_span.style.apply(prop)
                if split.replace_len == 0 and split.last == first:
                    tail = original.copy()
                    tail.start = ranged.end
                    tail.end = original_end
                    new_span.end = ranged.end
                    styles[first + 1:first + 1] = [new_span, tail]
                    return
                styles.insert(first + 1, new_span)
                inserted += 1
        replace_start = split.replace_start + inserted
        replace_end = replace_start + split.replace_len
        for span in styles[replace_start:replace_end]:
            span.style.apply(prop)
        if split.last is not None:
            last = split.last + inserted
            original = styles[last]
            if not original.style.check(prop):
                new_span = original.copy()
                original.start = ranged.end
                new_span.end = ranged.end
                new_span.style.apply(prop)
                styles.insert(last, new_span)