"""
Range-restricted code point substitution.

A cipher is described by a transform rule: a function that receives the
inclusive bounds of one range and returns a mapper permuting the code points
inside it. The engine pairs boundary code points into ranges, builds one
mapper per range and runs every code point of the input through all of them.
Code points outside every range come out unchanged.

    >>> substitute("Hello!", lambda low, high: lambda c: high - (c - low))
    'Svool!'
"""

import logging
import sys
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass

from rangecipher.core.exceptions import InvalidRangeSetError

logger = logging.getLogger(__name__)

Mapper = Callable[[int], int]
TransformRule = Callable[[int, int], Mapper]

DEFAULT_BOUNDARIES = "azAZ"


@dataclass(frozen=True)
class CodePointRange:
    """Inclusive range of code points sharing one substitution rule."""

    low: int
    high: int

    def __post_init__(self) -> None:
        if not 0 <= self.low <= self.high <= sys.maxunicode:
            raise InvalidRangeSetError(
                f"Invalid code point range {self.low}..{self.high}",
                {"low": self.low, "high": self.high},
            )

    @property
    def width(self) -> int:
        return self.high - self.low + 1

    def __contains__(self, code_point: int) -> bool:
        return self.low <= code_point <= self.high

    def overlaps(self, other: "CodePointRange") -> bool:
        return self.low <= other.high and other.low <= self.high

    def __str__(self) -> str:
        return f"{chr(self.low)!r}-{chr(self.high)!r}"


RangeSpec = str | Iterable[int | str] | Iterable[CodePointRange] | None


def boundary_set(boundaries: str | Iterable[int | str]) -> tuple[int, ...]:
    """
    Convert boundaries to a sorted, duplicate-free tuple of code points.

    Accepts integers, single-character strings, or a plain string whose
    characters are the boundaries ("azAZ").

    Raises:
        InvalidRangeSetError: If an element is not a code point
    """
    code_points: set[int] = set()

    for boundary in boundaries:
        if isinstance(boundary, str):
            if len(boundary) != 1:
                raise InvalidRangeSetError(
                    f"Range boundary {boundary!r} must be a single character",
                    {"boundary": boundary},
                )
            boundary = ord(boundary)
        elif isinstance(boundary, bool) or not isinstance(boundary, int):
            raise InvalidRangeSetError(
                f"Range boundary {boundary!r} is not a code point",
                {"boundary": repr(boundary)},
            )

        if not 0 <= boundary <= sys.maxunicode:
            raise InvalidRangeSetError(
                f"Range boundary {boundary} is outside the Unicode range",
                {"boundary": boundary},
            )
        code_points.add(boundary)

    return tuple(sorted(code_points))


def pair_boundaries(boundaries: Sequence[int]) -> tuple[CodePointRange, ...]:
    """
    Pair sorted boundary code points into inclusive ranges.

    (b0, b1, b2, b3, ...) becomes ((b0, b1), (b2, b3), ...).

    Args:
        boundaries: Sorted, duplicate-free code points

    Returns:
        Ranges in ascending order

    Raises:
        InvalidRangeSetError: If the number of boundaries is odd, or they are
            not strictly ascending
    """
    if len(boundaries) % 2 != 0:
        raise InvalidRangeSetError(
            f"Range boundaries must come in pairs, got {len(boundaries)}",
            {"boundaries": list(boundaries)},
        )

    if any(left >= right for left, right in zip(boundaries, boundaries[1:])):
        raise InvalidRangeSetError(
            "Range boundaries must be sorted and free of duplicates",
            {"boundaries": list(boundaries)},
        )

    ranges = tuple(
        CodePointRange(low, high)
        for low, high in zip(boundaries[::2], boundaries[1::2])
    )
    logger.debug("Paired %d boundaries into ranges %s", len(boundaries), ranges)
    return ranges


def parse_ranges(ranges: RangeSpec = None) -> tuple[CodePointRange, ...]:
    """
    Resolve a caller-supplied range specification.

    None selects the default a-z and A-Z ranges. A sequence of
    CodePointRange objects is taken as-is after checking that no two of
    them overlap; anything else is treated as a set of boundaries.
    """
    if ranges is None:
        ranges = DEFAULT_BOUNDARIES

    items = list(ranges)
    if items and all(isinstance(item, CodePointRange) for item in items):
        _check_disjoint(items)
        return tuple(items)

    return pair_boundaries(boundary_set(items))


def _check_disjoint(ranges: Sequence[CodePointRange]) -> None:
    ordered = sorted(ranges, key=lambda r: r.low)
    for first, second in zip(ordered, ordered[1:]):
        if first.overlaps(second):
            raise InvalidRangeSetError(
                f"Ranges {first} and {second} overlap",
                {
                    "first": [first.low, first.high],
                    "second": [second.low, second.high],
                },
            )


def _restrict(mapper: Mapper, code_point_range: CodePointRange) -> Mapper:
    low, high = code_point_range.low, code_point_range.high

    def restricted(code_point: int) -> int:
        if low <= code_point <= high:
            return mapper(code_point)
        return code_point

    return restricted


def build_mappers(rule: TransformRule, ranges: RangeSpec = None) -> tuple[Mapper, ...]:
    """
    Build one mapper per range from a transform rule.

    Each mapper is the identity outside its own range. The rule is invoked
    once per range here, so key errors it raises surface before any text
    is processed.
    """
    return tuple(
        _restrict(rule(code_point_range.low, code_point_range.high), code_point_range)
        for code_point_range in parse_ranges(ranges)
    )


def apply_mappers(code_points: Iterable[int], mappers: Sequence[Mapper]) -> Iterator[int]:
    """
    Lazily run every code point through all mappers, in order.

    Each call returns a fresh iterator; nothing is retained between calls.
    """
    mappers = tuple(mappers)
    for code_point in code_points:
        for mapper in mappers:
            code_point = mapper(code_point)
        yield code_point


def substitute(text: str, rule: TransformRule, ranges: RangeSpec = None) -> str:
    """
    Apply a transform rule to every configured range of the text.

    Args:
        text: Input text
        rule: Transform rule supplied by a cipher
        ranges: Boundaries or ranges; None selects a-z and A-Z

    Returns:
        Transformed text of the same length
    """
    mappers = build_mappers(rule, ranges)
    return "".join(map(chr, apply_mappers(map(ord, text), mappers)))
