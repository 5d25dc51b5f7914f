"""Hierarchical, tree based style application."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from .resolve import RangedStyle, ResolvedProperty, ResolvedStyle
from .style import WhiteSpaceCollapse

# Characters with the Unicode White_Space property, trimmed at span edges.
_WHITE_SPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000"
)
_ASCII_WHITESPACE_RUN = re.compile(r"[ \t\n\x0c\r]+")


@dataclass
class _Node:
    parent: Optional[int]
    style: ResolvedStyle


class TreeStyleBuilder:
    """Builds text and ranged styles from nested style spans.

    Ranges are measured in characters of the built text.
    """

    def __init__(self) -> None:
        self._tree: list[_Node] = []
        self._flattened: list[RangedStyle] = []
        self._white_space = WhiteSpaceCollapse.PRESERVE
        self._text = ""
        self._uncommitted: list[str] = []
        self._current: Optional[int] = None
        self._is_span_first = False

    def _current_node(self) -> _Node:
        if self._current is None:
            raise RuntimeError("builder has not begun")
        return self._tree[self._current]

    def begin(self, root_style: ResolvedStyle) -> None:
        """Start a new tree whose root has ``root_style``."""
        self._tree = [_Node(None, root_style)]
        self._flattened = []
        self._white_space = WhiteSpaceCollapse.PRESERVE
        self._text = ""
        self._uncommitted = []
        self._current = 0
        self._is_span_first = True

    def set_white_space_mode(self, mode: WhiteSpaceCollapse) -> None:
        """Set how white space in subsequently committed text is treated."""
        self._white_space = mode

    def push_uncommitted_text(self, is_span_last: bool) -> None:
        """Commit pending text with the style of the current span."""
        style = self._current_node().style
        span_text = "".join(self._uncommitted)
        if self._white_space is WhiteSpaceCollapse.COLLAPSE:
            if self._is_span_first:
                span_text = span_text.lstrip(_WHITE_SPACE)
            if is_span_last:
                span_text = span_text.rstrip(_WHITE_SPACE)
            span_text = _ASCII_WHITESPACE_RUN.sub(" ", span_text)

        if not span_text:
            self._is_span_first = False
            return

        start = len(self._text)
        self._flattened.append(
            RangedStyle(style.copy(), start, start + len(span_text))
        )
        self._text += span_text
        self._uncommitted = []
        self._is_span_first = False

    def current_text_len(self) -> int:
        """Length of the text committed so far."""
        return len(self._text)

    def push_style_span(self, style: ResolvedStyle) -> None:
        """Open a child span with ``style``."""
        self.push_uncommitted_text(False)
        self._tree.append(_Node(self._current, style))
        self._current = len(self._tree) - 1
        self._is_span_first = True

    def push_style_modification_span(
        self, properties: Iterable[ResolvedProperty]
    ) -> None:
        """Open a child span: the current style with ``properties`` applied."""
        style = self._current_node().style.copy()
        for prop in properties:
            style.apply(prop)
        self.push_style_span(style)

    def pop_style_span(self) -> None:
        """Close the current span and return to its parent."""
        self.push_uncommitted_text(True)
        parent = self._current_node().parent
        if parent is None:
            raise RuntimeError("popped root style")
        self._current = parent

    def push_text(self, text: str) -> None:
        """Add text to the current span."""
        if text:
            self._current_node()
            self._uncommitted.append(text)

    def finish(self) -> tuple[str, list[RangedStyle]]:
        """Close open spans and return the text with its ranged styles."""
        while self._current_node().parent is not None:
            self.pop_style_span()
        self.push_uncommitted_text(True)
        text, self._text = self._text, ""
        return text, list(self._flattened)