import pytest

from xbundle.mvn.package import Version
from xbundle.mvn.range import (
    Bound,
    RangeKind,
    RangeSpec,
    Token,
    TokenKind,
    VersionRange,
    parse_range,
    parse_ranges,
    tokenize,
)

RANGES = [
    "(,1.0]",
    "1.0",
    "[1.0]",
    "[1.2,1.3]",
    "[1.0,2.0)",
    "[1.5,)",
    "(,1.0],[1.2,)",
    "(,1.1),(1.1,)",
]


def v(text):
    return Version.parse(text)


def open_(inclusive):
    return Token(TokenKind.OPEN, inclusive)


def close(inclusive):
    return Token(TokenKind.CLOSE, inclusive)


def ver(text):
    return Token(TokenKind.VERSION, text)


COMMA = Token(TokenKind.COMMA)


def inc(text):
    return Bound(text, True)


def exc(text):
    return Bound(text, False)


def lower(bound):
    return RangeSpec(RangeKind.LOWER, upper=bound)


def greater(bound):
    return RangeSpec(RangeKind.GREATER, lower=bound)


def between(lo, hi):
    return RangeSpec(RangeKind.BETWEEN, lower=lo, upper=hi)


def exact(text):
    return RangeSpec(RangeKind.EXACT, lower=inc(text), upper=inc(text))


def test_range_1():
    r = parse_range("(,1.0]")
    assert r.contains(v("1.0"))
    assert not r.contains(v("1.0.1"))
    assert r.contains(v("0.5"))


def test_range_2():
    r = parse_range("1.0")
    assert r.contains(v("1.0"))
    assert r.contains(v("1.0.1"))
    assert not r.contains(v("0.5"))


def test_range_3():
    r = parse_range("[1.0]")
    assert r.contains(v("1.0"))
    assert not r.contains(v("1.0.1"))
    assert not r.contains(v("0.5"))


def test_range_4():
    r = parse_range("[1.2,1.3]")
    assert not r.contains(v("1.0"))
    assert r.contains(v("1.2"))
    assert r.contains(v("1.2.99"))
    assert not r.contains(v("1.4"))


def test_range_5():
    r = parse_range("[1.2,2.0)")
    assert not r.contains(v("1.0"))
    assert r.contains(v("1.2"))
    assert r.contains(v("1.99"))
    assert not r.contains(v("2.0"))


def test_range_6():
    r = parse_range("[1.5,)")
    assert not r.contains(v("1.4"))
    assert r.contains(v("1.5"))
    assert r.contains(v("1.99"))
    assert r.contains(v("2.0"))


def test_range_7():
    r = parse_range("(,1.0],[1.2,)")
    assert r.contains(v("0.99"))
    assert r.contains(v("1.0"))
    assert not r.contains(v("1.0.1"))
    assert not r.contains(v("1.1.99"))
    assert r.contains(v("1.2"))
    assert r.contains(v("2.0"))


def test_parse():
    expected = [
        [lower(inc("1.0"))],
        [greater(inc("1.0"))],
        [exact("1.0")],
        [between(inc("1.2"), inc("1.3"))],
        [between(inc("1.0"), exc("2.0"))],
        [greater(inc("1.5"))],
        [lower(inc("1.0")), greater(inc("1.2"))],
        [lower(exc("1.1")), greater(exc("1.1"))],
    ]
    for text, specs in zip(RANGES, expected):
        assert parse_ranges(text) == specs


def test_tokenize():
    expected = [
        [open_(False), COMMA, ver("1.0"), close(True)],
        [ver("1.0")],
        [open_(True), ver("1.0"), close(True)],
        [open_(True), ver("1.2"), COMMA, ver("1.3"), close(True)],
        [open_(True), ver("1.0"), COMMA, ver("2.0"), close(False)],
        [open_(True), ver("1.5"), COMMA, close(False)],
        [
            open_(False), COMMA, ver("1.0"), close(True), COMMA,
            open_(True), ver("1.2"), COMMA, close(False),
        ],
        [
            open_(False), COMMA, ver("1.1"), close(False), COMMA,
            open_(False), ver("1.1"), COMMA, close(False),
        ],
    ]
    for text, tokens in zip(RANGES, expected):
        assert list(tokenize(text)) == tokens


def test_malformed_range_stops_parsing():
    assert parse_ranges("(1.0]") == []
    assert parse_ranges("[1.0") == []
    assert parse_range("(,)").segments == ()


def test_missing_separator_raises():
    with pytest.raises(ValueError):
        parse_ranges("1.0]x")


def test_invalid_version_raises():
    with pytest.raises(ValueError):
        parse_range("[1.x]")


def test_empty_text_is_empty_range():
    assert parse_range("") == VersionRange.none()


def test_none_and_any():
    assert not VersionRange.none().contains(v("1.0"))
    assert VersionRange.any().contains(v("0.0.0"))
    assert VersionRange.any().contains(v("99.0"))


def test_complement_is_negation():
    r = parse_range("[1.2,2.0)")
    c = r.complement()
    for text in ["0.1", "1.2", "1.5", "2.0", "3.0"]:
        assert c.contains(v(text)) != r.contains(v(text))
    assert c.complement() == r


def test_complement_of_none_is_any():
    assert VersionRange.none().complement() == VersionRange.any()
    assert VersionRange.any().complement() == VersionRange.none()


def test_union_and_intersection_membership():
    a = VersionRange.between(v("1.0"), v("2.0"))
    b = VersionRange.between(v("1.5"), v("3.0"))
    union = a.union(b)
    inter = a.intersection(b)
    for text in ["0.5", "1.0", "1.5", "1.9", "2.0", "2.5", "3.0"]:
        version = v(text)
        assert union.contains(version) == (a.contains(version) or b.contains(version))
        assert inter.contains(version) == (a.contains(version) and b.contains(version))
    assert union == b.union(a)


def test_union_merges_adjacent_segments():
    a = VersionRange.between(v("1.0"), v("2.0"))
    b = VersionRange.between(v("2.0"), v("3.0"))
    assert a.union(b) == VersionRange.between(v("1.0"), v("3.0"))


def test_between_requires_increasing_bounds():
    assert VersionRange.between(v("2.0"), v("1.0")) == VersionRange.none()
    assert VersionRange.between(v("1.0"), v("1.0")) == VersionRange.none()


def test_strictly_lower_than_lowest_is_empty():
    assert VersionRange.strictly_lower_than(Version.lowest()) == VersionRange.none()


def test_exact_contains_only_version():
    r = VersionRange.exact(v("1.2.3"))
    assert r.contains(v("1.2.3"))
    assert not r.contains(v("1.2.4"))
    assert not r.contains(v("1.2.2"))


def test_lowest_version():
    assert parse_range("[1.5,)").lowest_version() == v("1.5")
    assert parse_range("(,1.0]").lowest_version() == Version.lowest()
    assert VersionRange.none().lowest_version() is None


def test_in_operator():
    r = parse_range("[1.0,2.0)")
    assert v("1.5") in r
    assert v("2.0") not in r