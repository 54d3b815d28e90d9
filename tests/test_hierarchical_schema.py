import io

import pytest

from xbundle.pri.binio import PriFormatError
from xbundle.pri.hierarchical_schema import HierarchicalSchema, ResourceMapEntry


def _sample() -> HierarchicalSchema:
    return HierarchicalSchema(
        unique_name="ms-appx://App/",
        name="App",
        scopes=[
            ResourceMapEntry(None, ""),
            ResourceMapEntry(0, "Files"),
            ResourceMapEntry(1, "Assets"),
        ],
        items=[
            ResourceMapEntry(2, "logo.png"),
            ResourceMapEntry(0, "AppName"),
        ],
    )


def _encode(schema: HierarchicalSchema) -> bytes:
    buffer = io.BytesIO()
    schema.write(buffer)
    return buffer.getvalue()


def test_round_trip():
    original = _sample()
    decoded = HierarchicalSchema.read(io.BytesIO(_encode(original)))
    assert decoded == original


def test_round_trip_without_entries():
    original = HierarchicalSchema(unique_name="u", name="n")
    decoded = HierarchicalSchema.read(io.BytesIO(_encode(original)))
    assert decoded == original
    assert decoded.scopes == []
    assert decoded.items == []


def test_parents_survive_round_trip():
    decoded = HierarchicalSchema.read(io.BytesIO(_encode(_sample())))
    assert [entry.parent for entry in decoded.scopes] == [None, 0, 1]
    assert [entry.name for entry in decoded.items] == ["logo.png", "AppName"]


def test_header_layout():
    data = _encode(_sample())
    assert data[:2] == b"\x01\x00"
    assert data[8:24] == b"[def_hnamesx]  \0"
    unique_name = "ms-appx://App/".encode("utf-16-le") + b"\0\0"
    assert data[44 : 44 + len(unique_name)] == unique_name


def test_non_ascii_names_round_trip():
    original = HierarchicalSchema(
        unique_name="ünique",
        name="námé",
        items=[ResourceMapEntry(None, "Grüße")],
    )
    assert HierarchicalSchema.read(io.BytesIO(_encode(original))) == original


def test_bad_version_is_rejected():
    data = bytearray(_encode(_sample()))
    data[0] = 2
    with pytest.raises(PriFormatError):
        HierarchicalSchema.read(io.BytesIO(bytes(data)))


def test_bad_names_header_is_rejected():
    data = bytearray(_encode(_sample()))
    data[8] = ord("x")
    with pytest.raises(PriFormatError):
        HierarchicalSchema.read(io.BytesIO(bytes(data)))


def test_name_length_mismatch_is_rejected():
    data = bytearray(_encode(_sample()))
    data[2] += 1
    with pytest.raises(PriFormatError):
        HierarchicalSchema.read(io.BytesIO(bytes(data)))


def test_truncated_data_is_rejected():
    data = _encode(_sample())
    with pytest.raises(PriFormatError):
        HierarchicalSchema.read(io.BytesIO(data[:40]))