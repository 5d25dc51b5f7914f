import pytest

from parley.ranged import RangedStyleBuilder, resolve_range
from parley.resolve import ResolvedProperty, ResolvedStyle
from parley.style import PropertyKind


def prop(kind, value):
    return ResolvedProperty(kind, value)


def ranges(spans):
    return [(span.start, span.end) for span in spans]


SIZE_20 = prop(PropertyKind.FONT_SIZE, 20.0)


def test_resolve_range_unbounded():
    assert resolve_range(None, None, 10) == (0, 10)


def test_resolve_range_clamps():
    assert resolve_range(3, 20, 10) == (3, 10)
    assert resolve_range(15, 20, 10) == (10, 10)


def test_finish_without_begin_is_empty():
    assert RangedStyleBuilder().finish() == []


def test_push_without_begin_raises():
    builder = RangedStyleBuilder()
    with pytest.raises(RuntimeError):
        builder.push(SIZE_20, 0, 1)
    with pytest.raises(RuntimeError):
        builder.push_default(SIZE_20)


def test_no_properties_gives_one_default_span():
    builder = RangedStyleBuilder()
    builder.begin(10)
    spans = builder.finish()
    assert ranges(spans) == [(0, 10)]
    assert spans[0].style == ResolvedStyle()


def test_push_default_covers_everything():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push_default(SIZE_20)
    spans = builder.finish()
    assert ranges(spans) == [(0, 10)]
    assert spans[0].style.font_size == 20.0


def test_middle_property_splits_in_three():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, 2, 5)
    spans = builder.finish()
    assert ranges(spans) == [(0, 2), (2, 5), (5, 10)]
    assert [span.style.font_size for span in spans] == [16.0, 20.0, 16.0]


def test_property_at_start_splits_in_two():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, 0, 5)
    spans = builder.finish()
    assert ranges(spans) == [(0, 5), (5, 10)]
    assert spans[0].style.font_size == 20.0


def test_open_ended_property():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, 4, None)
    spans = builder.finish()
    assert ranges(spans) == [(0, 4), (4, 10)]
    assert spans[1].style.font_size == 20.0


def test_property_covering_all_text():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, None, None)
    spans = builder.finish()
    assert ranges(spans) == [(0, 10)]
    assert spans[0].style.font_size == 20.0


def test_property_equal_to_default_does_not_split():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(prop(PropertyKind.FONT_SIZE, 16.0), 3, 6)
    assert ranges(builder.finish()) == [(0, 10)]


def test_reversed_range_is_ignored():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, 5, 2)
    spans = builder.finish()
    assert ranges(spans) == [(0, 10)]
    assert spans[0].style == ResolvedStyle()


def test_overlapping_equal_properties_merge():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, 0, 5)
    builder.push(SIZE_20, 3, 8)
    assert ranges(builder.finish()) == [(0, 8), (8, 10)]


def test_adjacent_equal_properties_merge():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, 2, 5)
    builder.push(SIZE_20, 5, 7)
    assert ranges(builder.finish()) == [(0, 2), (2, 7), (7, 10)]


def test_later_property_wins():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, 0, 10)
    builder.push(prop(PropertyKind.FONT_SIZE, 30.0), 0, 10)
    spans = builder.finish()
    assert ranges(spans) == [(0, 10)]
    assert spans[0].style.font_size == 30.0


def test_finish_resets_builder():
    builder = RangedStyleBuilder()
    builder.begin(10)
    builder.push(SIZE_20, 2, 5)
    builder.finish()
    assert builder.finish() == []


def test_mixed_properties_invariants():
    length = 10
    table = [
        (SIZE_20, prop(PropertyKind.FONT_SIZE, 16.0), 1, 6),
        (prop(PropertyKind.LINE_HEIGHT, 2.0), prop(PropertyKind.LINE_HEIGHT, 1.0), 4, 9),
        (prop(PropertyKind.WORD_SPACING, 3.0), prop(PropertyKind.WORD_SPACING, 0.0), 0, 3),
        (prop(PropertyKind.UNDERLINE, True), prop(PropertyKind.UNDERLINE, False), 7, 10),
    ]
    builder = RangedStyleBuilder()
    builder.begin(length)
    for applied, _default, start, end in table:
        builder.push(applied, start, end)
    spans = builder.finish()

    assert spans[0].start == 0
    assert spans[-1].end == length
    for left, right in zip(spans, spans[1:]):
        assert left.end == right.start
        assert left.style != right.style

    for position in range(length):
        span = next(s for s in spans if s.start <= position < s.end)
        for applied, default, start, end in table:
            expected = applied if start <= position < end else default
            assert span.style.check(expected)