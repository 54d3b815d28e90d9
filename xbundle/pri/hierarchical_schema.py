"""The hierarchical schema section: the tree of resource scopes and items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

from xbundle.pri.binio import (
    PriFormatError,
    expect,
    read_exact,
    read_u8,
    read_u16,
    read_u32,
    write_u8,
    write_u16,
    write_u32,
)

_HNAMES = b"[def_hnamesx]  \0"
_NO_PARENT = 0xFFFF
_MAX_FULL_PATH_LENGTH = 256
_FLAG_SCOPE = 0x10
_FLAG_ASCII = 0x20


@dataclass
class ResourceMapEntry:
    """A named scope or item and the index of its parent scope."""

    parent: int | None = None
    name: str = ""


def _read_utf16z(stream: BinaryIO) -> str:
    chars: list[str] = []
    while True:
        code = read_u16(stream)
        if code == 0:
            return "".join(chars)
        if 0xD800 <= code <= 0xDFFF:
            raise PriFormatError(f"hierarchical schema: invalid character {code:#x}")
        chars.append(chr(code))


def _read_asciiz(stream: BinaryIO) -> str:
    chars: list[str] = []
    while True:
        code = read_u8(stream)
        if code == 0:
            return "".join(chars)
        chars.append(chr(code))


def _write_utf16z(stream: BinaryIO, text: str) -> None:
    for char in text:
        write_u16(stream, ord(char))
    write_u16(stream, 0)


@dataclass(frozen=True)
class _ScopeAndItemInfo:
    parent: int
    full_path_length: int
    is_scope: bool
    name_in_ascii: bool
    name_offset: int
    index: int

    @classmethod
    def read(cls, stream: BinaryIO) -> _ScopeAndItemInfo:
        parent = read_u16(stream)
        full_path_length = read_u16(stream)
        read_u16(stream)  # uppercase first character
        read_u8(stream)  # name length
        flags = read_u8(stream)
        name_offset = read_u16(stream) | ((flags & 0xF) << 16)
        index = read_u16(stream)
        return cls(
            parent=parent,
            full_path_length=full_path_length,
            is_scope=bool(flags & _FLAG_SCOPE),
            name_in_ascii=bool(flags & _FLAG_ASCII),
            name_offset=name_offset,
            index=index,
        )

    def write(self, stream: BinaryIO) -> None:
        write_u16(stream, self.parent)
        write_u16(stream, self.full_path_length)
        write_u16(stream, 0)
        write_u8(stream, 0)
        flags = (self.name_offset >> 16) & 0xF
        if self.is_scope:
            flags |= _FLAG_SCOPE
        if self.name_in_ascii:
            flags |= _FLAG_ASCII
        write_u8(stream, flags)
        write_u16(stream, self.name_offset)
        write_u16(stream, self.index)


def _read_scope_ex_info(stream: BinaryIO) -> tuple[int, int, int]:
    scope_index = read_u16(stream)
    child_count = read_u16(stream)
    first_child_index = read_u16(stream)
    expect(read_u16(stream) == 0, "hierarchical schema: reserved field is not 0")
    return scope_index, child_count, first_child_index


@dataclass
class HierarchicalSchema:
    """The names and parent links of all scopes and items in a resource map."""

    IDENTIFIER: ClassVar[bytes] = b"[mrm_hschemaex] "

    unique_name: str = ""
    name: str = ""
    scopes: list[ResourceMapEntry] = field(default_factory=list)
    items: list[ResourceMapEntry] = field(default_factory=list)

    @classmethod
    def read(cls, stream: BinaryIO) -> HierarchicalSchema:
        expect(read_u16(stream) == 1, "hierarchical schema: unexpected version")
        unique_name_length = read_u16(stream)
        name_length = read_u16(stream)
        expect(read_u16(stream) == 0, "hierarchical schema: reserved field is not 0")
        expect(
            read_exact(stream, len(_HNAMES)) == _HNAMES,
            "hierarchical schema: missing names header",
        )
        read_u16(stream)  # major version
        read_u16(stream)  # minor version
        expect(read_u32(stream) == 0, "hierarchical schema: reserved field is not 0")
        read_u32(stream)  # checksum
        num_scopes = read_u32(stream)
        num_items = read_u32(stream)
        unique_name = _read_utf16z(stream)
        expect(
            len(unique_name) + 1 == unique_name_length,
            "hierarchical schema: unique name length mismatch",
        )
        name = _read_utf16z(stream)
        expect(len(name) + 1 == name_length, "hierarchical schema: name length mismatch")
        expect(read_u16(stream) == 0, "hierarchical schema: reserved field is not 0")
        read_u16(stream)  # max full path length
        expect(read_u16(stream) == 0, "hierarchical schema: reserved field is not 0")
        expect(
            read_u32(stream) == num_scopes + num_items,
            "hierarchical schema: entry count mismatch",
        )
        expect(read_u32(stream) == num_scopes, "hierarchical schema: scope count mismatch")
        expect(read_u32(stream) == num_items, "hierarchical schema: item count mismatch")
        unicode_data_length = read_u32(stream)
        read_u32(stream)
        read_u32(stream)

        infos = [_ScopeAndItemInfo.read(stream) for _ in range(num_scopes + num_items)]
        for _ in range(num_scopes):
            _read_scope_ex_info(stream)
        for _ in range(num_items):
            read_u16(stream)  # item index property to index

        unicode_data_offset = stream.tell()
        ascii_data_offset = unicode_data_offset + unicode_data_length * 2
        scopes = [ResourceMapEntry() for _ in range(num_scopes)]
        items = [ResourceMapEntry() for _ in range(num_items)]
        for info in infos:
            if info.name_in_ascii:
                stream.seek(ascii_data_offset + info.name_offset)
            else:
                stream.seek(unicode_data_offset + info.name_offset * 2)
            entry_name = ""
            if info.full_path_length != 0:
                entry_name = (
                    _read_asciiz(stream) if info.name_in_ascii else _read_utf16z(stream)
                )
            parent = None if info.parent == _NO_PARENT else info.parent
            target = scopes if info.is_scope else items
            if info.index >= len(target):
                kind = "scope" if info.is_scope else "item"
                raise PriFormatError(
                    f"hierarchical schema: {kind} index {info.index} out of range"
                )
            target[info.index] = ResourceMapEntry(parent, entry_name)
        return cls(unique_name, name, scopes, items)

    def write(self, stream: BinaryIO) -> None:
        num_scopes = len(self.scopes)
        num_items = len(self.items)
        write_u16(stream, 1)
        write_u16(stream, len(self.unique_name) + 1)
        write_u16(stream, len(self.name) + 1)
        write_u16(stream, 0)
        stream.write(_HNAMES)
        write_u16(stream, 1)  # major version
        write_u16(stream, 0)  # minor version
        write_u32(stream, 0)
        write_u32(stream, 0)  # checksum
        write_u32(stream, num_scopes)
        write_u32(stream, num_items)
        _write_utf16z(stream, self.unique_name)
        _write_utf16z(stream, self.name)
        write_u16(stream, 0)
        write_u16(stream, _MAX_FULL_PATH_LENGTH)
        write_u16(stream, 0)
        write_u32(stream, num_scopes + num_items)
        write_u32(stream, num_scopes)
        write_u32(stream, num_items)
        write_u32(stream, 0)  # unicode data length
        write_u32(stream, 0)
        write_u32(stream, 0)

        infos: list[_ScopeAndItemInfo] = []
        names = bytearray()
        entries = [(True, i, e) for i, e in enumerate(self.scopes)]
        entries += [(False, i, e) for i, e in enumerate(self.items)]
        for is_scope, index, entry in entries:
            infos.append(
                _ScopeAndItemInfo(
                    parent=_NO_PARENT if entry.parent is None else entry.parent,
                    full_path_length=len(entry.name),
                    is_scope=is_scope,
                    name_in_ascii=False,
                    name_offset=len(names) // 2,
                    index=index,
                )
            )
            for char in entry.name:
                names += (ord(char) & 0xFFFF).to_bytes(2, "little")
            names += b"\0\0"

        for info in infos:
            info.write(stream)
        for index in range(num_scopes):
            write_u16(stream, index)
            write_u16(stream, 0)  # child count
            write_u16(stream, 0)  # first child index
            write_u16(stream, 0)
        for _ in range(num_items):
            write_u16(stream, 0)
        stream.write(bytes(names))