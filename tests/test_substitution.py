"""Tests for the range-restricted substitution engine."""

import pytest

from rangecipher.core.exceptions import InvalidRangeSetError
from rangecipher.services.engines.substitution import (
    CodePointRange,
    apply_mappers,
    boundary_set,
    build_mappers,
    pair_boundaries,
    parse_ranges,
    substitute,
)


def reverse(low, high):
    return lambda c: high - (c - low)


def plus_one(low, high):
    return lambda c: low if c == high else c + 1


class TestBoundarySet:
    """Test conversion of boundaries to sorted code points."""

    def test_string_of_boundaries(self):
        assert boundary_set("azAZ") == (ord("A"), ord("Z"), ord("a"), ord("z"))

    def test_mixed_characters_and_code_points(self):
        assert boundary_set([122, "a", 90, "A"]) == (65, 90, 97, 122)

    def test_duplicates_removed(self):
        assert boundary_set("aazz") == (97, 122)

    def test_multi_character_element_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            boundary_set(["az"])

    def test_non_code_point_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            boundary_set([1.5, 2])
        with pytest.raises(InvalidRangeSetError):
            boundary_set([True, 5])

    def test_out_of_unicode_range_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            boundary_set([-1, 10])
        with pytest.raises(InvalidRangeSetError):
            boundary_set([0, 0x110000])


class TestPairBoundaries:
    """Test pairing of boundaries into ranges."""

    def test_pairs_consecutive_boundaries(self):
        ranges = pair_boundaries((10, 20, 30, 40))

        assert ranges == (CodePointRange(10, 20), CodePointRange(30, 40))

    def test_empty_boundaries(self):
        assert pair_boundaries(()) == ()

    @pytest.mark.parametrize("boundaries", [(1,), (1, 2, 3), (1, 2, 3, 4, 5)])
    def test_odd_count_rejected(self, boundaries):
        with pytest.raises(InvalidRangeSetError) as exc_info:
            pair_boundaries(boundaries)

        assert exc_info.value.details["boundaries"] == list(boundaries)

    def test_unsorted_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            pair_boundaries((30, 40, 10, 20))

    def test_duplicates_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            pair_boundaries((10, 10))


class TestCodePointRange:
    """Test the range value type."""

    def test_width_and_membership(self):
        letters = CodePointRange(ord("a"), ord("z"))

        assert letters.width == 26
        assert ord("m") in letters
        assert ord("A") not in letters

    def test_single_code_point_range(self):
        assert CodePointRange(5, 5).width == 1

    def test_inverted_range_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            CodePointRange(20, 10)

    def test_overlaps(self):
        assert CodePointRange(1, 5).overlaps(CodePointRange(5, 9))
        assert not CodePointRange(1, 4).overlaps(CodePointRange(5, 9))


class TestParseRanges:
    """Test resolution of range specifications."""

    def test_default_is_latin_letters(self):
        assert parse_ranges() == (
            CodePointRange(ord("A"), ord("Z")),
            CodePointRange(ord("a"), ord("z")),
        )

    def test_odd_boundary_set_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            parse_ranges("azA")

    def test_explicit_ranges_kept_in_order(self):
        ranges = [CodePointRange(97, 122), CodePointRange(65, 90)]

        assert parse_ranges(ranges) == tuple(ranges)

    def test_overlapping_ranges_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            parse_ranges([CodePointRange(97, 122), CodePointRange(100, 110)])

    def test_mixed_ranges_and_boundaries_rejected(self):
        with pytest.raises(InvalidRangeSetError):
            parse_ranges([CodePointRange(97, 122), 65, 90])


class TestBuildMappers:
    """Test building mappers from a transform rule."""

    def test_one_mapper_per_range(self):
        mappers = build_mappers(reverse, "azAZ09")

        assert len(mappers) == 3

    def test_mappers_follow_range_order(self):
        calls = []

        def recording(low, high):
            calls.append((low, high))
            return lambda c: c

        build_mappers(recording, "azAZ")

        assert calls == [(65, 90), (97, 122)]

    def test_mapper_is_identity_outside_its_range(self):
        (mapper,) = build_mappers(reverse, "az")

        assert mapper(ord("a")) == ord("z")
        assert mapper(ord("A")) == ord("A")
        assert mapper(-5) == -5

    def test_rule_errors_raised_eagerly(self):
        def failing(low, high):
            raise ValueError("bad key")

        with pytest.raises(ValueError):
            build_mappers(failing)


class TestApplyMappers:
    """Test applying mappers over a sequence."""

    def test_is_lazy(self):
        seen = []

        def spy(c):
            seen.append(c)
            return c

        result = apply_mappers([1, 2, 3], [spy])

        assert seen == []
        assert next(result) == 1
        assert seen == [1]

    def test_composes_in_order(self):
        result = list(apply_mappers([1], [lambda c: c + 1, lambda c: c * 10]))

        assert result == [20]

    def test_no_mappers_is_identity(self):
        assert list(apply_mappers([5, 6], [])) == [5, 6]

    def test_each_call_is_independent(self):
        mappers = build_mappers(plus_one)
        code_points = [ord(c) for c in "az"]

        first = list(apply_mappers(code_points, mappers))
        second = list(apply_mappers(code_points, mappers))

        assert first == second == [ord("b"), ord("a")]


class TestSubstitute:
    """Test end-to-end substitution over text."""

    def test_only_configured_ranges_change(self):
        assert substitute("abc ABC 123", plus_one, "az") == "bcd ABC 123"

    def test_default_ranges(self):
        assert substitute("Zz!", plus_one) == "Aa!"

    def test_preserves_length(self):
        text = "héllo wörld \U0001F600"

        assert len(substitute(text, reverse)) == len(text)

    def test_non_ascii_range(self):
        # Greek lowercase alpha..omega
        assert substitute("αβγ abc", plus_one, "αω") == "βγδ abc"

    def test_empty_range_set_is_identity(self):
        assert substitute("Hello", reverse, []) == "Hello"

    def test_invalid_ranges_raise_before_output(self):
        with pytest.raises(InvalidRangeSetError):
            substitute("Hello", reverse, "azA")
