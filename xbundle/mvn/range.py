"""Maven version range specifications and version sets."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from xbundle.mvn.package import Version


class TokenKind(enum.Enum):
    OPEN = "open"
    COMMA = "comma"
    CLOSE = "close"
    VERSION = "version"


@dataclass(frozen=True)
class Token:
    """A range token; value is the inclusiveness of a bracket or a version string."""

    kind: TokenKind
    value: bool | str | None = None


_BRACKETS = {
    "[": Token(TokenKind.OPEN, True),
    "(": Token(TokenKind.OPEN, False),
    "]": Token(TokenKind.CLOSE, True),
    ")": Token(TokenKind.CLOSE, False),
    ",": Token(TokenKind.COMMA),
}


def tokenize(text: str) -> Iterator[Token]:
    """Split a range specification into tokens."""
    buffer: list[str] = []
    for char in text:
        token = _BRACKETS.get(char)
        if token is None:
            buffer.append(char)
            continue
        if buffer:
            yield Token(TokenKind.VERSION, "".join(buffer))
            buffer.clear()
        yield token
    if buffer:
        yield Token(TokenKind.VERSION, "".join(buffer))


@dataclass(frozen=True)
class Bound:
    version: str
    inclusive: bool


class RangeKind(enum.Enum):
    EXACT = "exact"
    GREATER = "greater"
    LOWER = "lower"
    BETWEEN = "between"


@dataclass(frozen=True)
class RangeSpec:
    """One parsed range; an exact range has the same inclusive bound on both sides."""

    kind: RangeKind
    lower: Bound | None = None
    upper: Bound | None = None


def _parse_one(tokens: Iterator[Token]) -> RangeSpec | None:
    token = next(tokens, None)
    if token is None:
        return None
    if token.kind is TokenKind.VERSION:
        return RangeSpec(RangeKind.GREATER, lower=Bound(token.value, True))
    if token.kind is not TokenKind.OPEN:
        return None
    inclusive = token.value

    token = next(tokens, None)
    if token is None:
        return None
    if token.kind is TokenKind.VERSION:
        version = token.value
        following = next(tokens, None)
        if following is None:
            return None
        if following.kind is TokenKind.COMMA:
            lower: Bound | None = Bound(version, inclusive)
        elif following.kind is TokenKind.CLOSE and following.value and inclusive:
            bound = Bound(version, True)
            return RangeSpec(RangeKind.EXACT, lower=bound, upper=bound)
        else:
            return None
    elif token.kind is TokenKind.COMMA:
        lower = None
    else:
        return None

    token = next(tokens, None)
    if token is None:
        return None
    if token.kind is TokenKind.CLOSE:
        upper: Bound | None = None
    elif token.kind is TokenKind.VERSION:
        following = next(tokens, None)
        if following is None or following.kind is not TokenKind.CLOSE:
            return None
        upper = Bound(token.value, following.value)
    else:
        return None

    if lower is None and upper is not None:
        return RangeSpec(RangeKind.LOWER, upper=upper)
    if lower is not None and upper is None:
        return RangeSpec(RangeKind.GREATER, lower=lower)
    if lower is not None and upper is not None:
        return RangeSpec(RangeKind.BETWEEN, lower=lower, upper=upper)
    return None


def parse_ranges(text: str) -> list[RangeSpec]:
    """Parse a comma separated list of ranges.

    Parsing stops silently at the first malformed range; a range that is not
    followed by a comma raises ValueError.
    """
    tokens = tokenize(text)
    specs: list[RangeSpec] = []
    first = True
    while True:
        if not first:
            separator = next(tokens, None)
            if separator is None:
                break
            if separator.kind is not TokenKind.COMMA:
                raise ValueError(f"expected ',' between ranges in {text!r}")
        first = False
        spec = _parse_one(tokens)
        if spec is None:
            break
        specs.append(spec)
    return specs


Segment = tuple[Version, "Version | None"]


@dataclass(frozen=True)
class VersionRange:
    """A set of versions as sorted, disjoint half-open segments [start, end)."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def none(cls) -> VersionRange:
        return cls(())

    @classmethod
    def any(cls) -> VersionRange:
        return cls(((Version.lowest(), None),))

    @classmethod
    def exact(cls, version: Version) -> VersionRange:
        return cls(((version, version.bump()),))

    @classmethod
    def higher_than(cls, version: Version) -> VersionRange:
        return cls(((version, None),))

    @classmethod
    def strictly_lower_than(cls, version: Version) -> VersionRange:
        if version == Version.lowest():
            return cls.none()
        return cls(((Version.lowest(), version),))

    @classmethod
    def between(cls, lower: Version, upper: Version) -> VersionRange:
        if lower < upper:
            return cls(((lower, upper),))
        return cls.none()

    def complement(self) -> VersionRange:
        if not self.segments:
            return VersionRange.any()
        lowest = Version.lowest()
        start, end = self.segments[0]
        if start == lowest:
            if end is None:
                return VersionRange.none()
            return VersionRange(_negate(end, self.segments[1:]))
        return VersionRange(_negate(lowest, self.segments))

    def intersection(self, other: VersionRange) -> VersionRange:
        result: list[Segment] = []
        left = iter(self.segments)
        right = iter(other.segments)
        a = next(left, None)
        b = next(right, None)
        while a is not None and b is not None:
            (s1, e1), (s2, e2) = a, b
            start = max(s1, s2)
            if e1 is None:
                end = e2
            elif e2 is None:
                end = e1
            else:
                end = min(e1, e2)
            if end is None or start < end:
                result.append((start, end))
            if e1 is None and e2 is None:
                break
            if e2 is None or (e1 is not None and e1 < e2):
                a = next(left, None)
            elif e1 is None or e2 < e1:
                b = next(right, None)
            else:
                a = next(left, None)
                b = next(right, None)
        return VersionRange(tuple(result))

    def union(self, other: VersionRange) -> VersionRange:
        return self.complement().intersection(other.complement()).complement()

    def contains(self, version: Version) -> bool:
        return any(
            start <= version and (end is None or version < end)
            for start, end in self.segments
        )

    def __contains__(self, version: Version) -> bool:
        return self.contains(version)

    def lowest_version(self) -> Version | None:
        """The smallest version in the set, or None if it is empty."""
        return self.segments[0][0] if self.segments else None

    def __str__(self) -> str:
        if not self.segments:
            return "∅"
        return " | ".join(_describe(start, end) for start, end in self.segments)


def _negate(start: Version, segments: Iterable[Segment]) -> tuple[Segment, ...]:
    result: list[Segment] = []
    for seg_start, seg_end in segments:
        result.append((start, seg_start))
        if seg_end is None:
            return tuple(result)
        start = seg_end
    result.append((start, None))
    return tuple(result)


def _describe(start: Version, end: Version | None) -> str:
    lowest = Version.lowest()
    if end is None:
        return "*" if start == lowest else f">= {start}"
    if end == start.bump():
        return str(start)
    if start == lowest:
        return f"< {end}"
    return f">= {start}, < {end}"


def parse_range(text: str) -> VersionRange:
    """Parse a Maven range specification into a set of versions."""
    result = VersionRange.none()
    for spec in parse_ranges(text):
        if spec.kind is RangeKind.EXACT:
            part = VersionRange.exact(Version.parse(spec.lower.version))
        elif spec.kind is RangeKind.LOWER:
            version = Version.parse(spec.upper.version)
            if spec.upper.inclusive:
                version = version.bump()
            part = VersionRange.strictly_lower_than(version)
        elif spec.kind is RangeKind.GREATER:
            part = VersionRange.higher_than(Version.parse(spec.lower.version))
        else:
            lower = Version.parse(spec.lower.version)
            upper = Version.parse(spec.upper.version)
            if spec.upper.inclusive:
                upper = upper.bump()
            part = VersionRange.between(lower, upper)
        result = result.union(part)
    return result