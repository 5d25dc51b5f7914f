import pytest

from parley.scripts import SCRIPT_TAGS, UNKNOWN_SCRIPT, locale_to_tag, script_to_tag


def test_table_size_and_ends():
    assert len(SCRIPT_TAGS) == 157
    assert script_to_tag(0) == "Adlm"
    assert script_to_tag(len(SCRIPT_TAGS) - 1) == "Zzzz"


@pytest.mark.parametrize("index", [157, 1000, -1])
def test_out_of_range_is_unknown(index):
    assert script_to_tag(index) == UNKNOWN_SCRIPT


def test_round_trip_through_index():
    for tag in SCRIPT_TAGS:
        assert script_to_tag(SCRIPT_TAGS.index(tag)) == tag


def test_tags_by_index_are_unique_and_sorted():
    tags = [script_to_tag(index) for index in range(157)]
    assert len(set(tags)) == 157
    assert tags == sorted(tags)
    assert UNKNOWN_SCRIPT in tags


def test_locale_language_only():
    assert locale_to_tag("en") == "en"


def test_locale_with_region_and_script():
    assert locale_to_tag("en", region="US") == "en-US"
    assert locale_to_tag("zh", "Hant", "TW") == "zh-Hant-TW"


@pytest.mark.parametrize(
    "language, script, region",
    [("e", None, None), ("en", "Lat", None), ("en", None, "U"), ("1a", None, None)],
)
def test_locale_malformed_is_none(language, script, region):
    assert locale_to_tag(language, script, region) is None


def test_locale_too_long_raises():
    with pytest.raises(ValueError):
        locale_to_tag("abcdefgh", "Latn", "419x")