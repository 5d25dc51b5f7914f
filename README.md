# parley

Style resolution for rich text. The package turns CSS-like style
descriptions into flat, non-overlapping runs of resolved styles, each
covering a range of the text.

## Modules

- `parley.style`: the style vocabulary. `GenericFamily` (with
  `GenericFamily.parse`), `NamedFamily`, `FontStyle`, `Setting` (a
  four-character tag and a value), `WhiteSpaceCollapse`, `PropertyKind`,
  `StyleProperty` and `TextStyle`. Parsers for CSS font-family lists
  (`parse_family`, `parse_family_list`) and for font variation and
  feature settings (`parse_settings`, where a missing value or `on` means
  1 and `off` means 0; malformed entries are skipped). `format_family`
  quotes named families and leaves generic ones bare.
- `parley.scripts`: `script_to_tag` maps a script index to its ISO 15924
  tag (`Zzzz` when out of range); `locale_to_tag` joins language, script
  and region subtags, returning `None` for a malformed subtag and raising
  `ValueError` when the tag is longer than 16 bytes.
- `parley.resolve`: `ResolveContext` resolves font stacks, variations and
  features into `Resolved` handles backed by deduplicating `Cache`s, and
  resolves `StyleProperty` and `TextStyle` values (scaling sizes and
  spacings) into `ResolvedProperty` and `ResolvedStyle`.
  `ResolvedStyle.apply` sets a property and `ResolvedStyle.check` tells
  whether the style already has it. `RangedStyle` pairs a style with a
  `start`/`end` range.
- `parley.ranged`: `RangedStyleBuilder` lays ranged properties over a
  default style and returns merged `RangedStyle` spans; `resolve_range`
  clamps a range to the text length.
- `parley.tree`: `TreeStyleBuilder` builds text and its styles from nested
  style spans, optionally collapsing white space.
- `parley.util`: `nearly_eq` and `nearly_zero`, comparisons within
  single-precision epsilon.

## Examples

Parsing font families and settings:

```python
from parley.style import GenericFamily, NamedFamily, Setting, parse_family_list, parse_settings

assert list(parse_family_list("Arial, 'Times New Roman', serif")) == [
    NamedFamily("Arial"),
    NamedFamily("Times New Roman"),
    GenericFamily.SERIF,
]
assert parse_settings('"wght" 700, "liga" off') == [
    Setting("wght", 700.0),
    Setting("liga", 0.0),
]
```

Resolving a font stack needs a font collection: any object with
`family_by_name(name)` returning a family id or `None`, and
`generic_families(family)` returning the ids for a `GenericFamily`.

```python
from parley.resolve import ResolveContext
from parley.style import GenericFamily

class Fonts:
    def family_by_name(self, name):
        return {"Arial": 1}.get(name)

    def generic_families(self, family):
        return [10] if family is GenericFamily.SERIF else []

ctx = ResolveContext()
handle = ctx.resolve_stack(Fonts(), "Arial, Missing, serif")
assert ctx.stack(handle) == [1, 10]
```

Laying a property over part of the text:

```python
from parley.ranged import RangedStyleBuilder
from parley.resolve import ResolvedProperty
from parley.style import PropertyKind

builder = RangedStyleBuilder()
builder.begin(10)
builder.push_default(ResolvedProperty(PropertyKind.FONT_SIZE, 12.0))
builder.push(ResolvedProperty(PropertyKind.UNDERLINE, True), 2, 5)
spans = builder.finish()
assert [(s.start, s.end) for s in spans] == [(0, 2), (2, 5), (5, 10)]
```

Building styled text from nested spans:

```python
from parley.resolve import ResolvedStyle
from parley.style import WhiteSpaceCollapse
from parley.tree import TreeStyleBuilder

builder = TreeStyleBuilder()
builder.begin(ResolvedStyle())
builder.set_white_space_mode(WhiteSpaceCollapse.COLLAPSE)
builder.push_text("  Hello   ")
builder.push_style_span(ResolvedStyle(font_size=24.0))
builder.push_text("world  ")
builder.pop_style_span()
text, styles = builder.finish()
assert text == "Hello world"
assert [(s.start, s.end) for s in styles] == [(0, 6), (6, 11)]
```

## What it does not do

The package stops at resolved, ranged styles. It does not load or select
fonts, ship a font collection, shape glyphs, break lines or lay out text;
those are left to the caller.

## Installation

```
pip install .
```

Run the tests with:

```
pip install .[test]
pytest
```