"""The resource map section: items, their decisions and candidate values."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

from xbundle.pri.binio import (
    PriFormatError,
    expect,
    read_u8,
    read_u16,
    read_u32,
    write_u8,
    write_u16,
    write_u32,
)

_CANDIDATE_MARKER = 0x01
_TYPE_ENTRY_SIZE = 4


@dataclass(frozen=True)
class ItemToItemInfoGroup:
    first_item: int = 0
    item_info_group: int = 0


@dataclass(frozen=True)
class ItemInfoGroup:
    group_size: int = 0
    first_item_info: int = 0


@dataclass(frozen=True)
class ItemInfo:
    decision: int = 0
    first_candidate: int = 0


@dataclass(frozen=True)
class CandidateInfo:
    """Where the value of one candidate is stored, and what type it has."""

    resource_value_type: int
    source_file_index: int
    data_item_index: int
    data_item_section: int


class ResourceValueType(enum.IntEnum):
    STRING = 0
    PATH = 1
    EMBEDDED_DATA = 2
    ASCII_STRING = 3
    UTF8_STRING = 4
    ASCII_PATH = 5
    UTF8_PATH = 6


@dataclass(frozen=True)
class Candidate:
    qualifier_set: int
    ty: ResourceValueType
    data_item_section: int
    data_item_index: int


@dataclass(frozen=True)
class CandidateSet:
    resource_map_item: int
    decision_index: int
    candidates: tuple[Candidate, ...] = ()


@dataclass
class ResourceMap:
    """Links schema items to decisions and the candidates that answer them."""

    IDENTIFIER: ClassVar[bytes] = b"[mrm_res_map2_]\0"

    hierarchical_schema_section: int = 0
    decision_info_section: int = 0
    item_to_item_info_groups: list[ItemToItemInfoGroup] = field(default_factory=list)
    item_info_groups: list[ItemInfoGroup] = field(default_factory=list)
    item_infos: list[ItemInfo] = field(default_factory=list)
    candidate_infos: list[CandidateInfo] = field(default_factory=list)

    @classmethod
    def read(cls, stream: BinaryIO) -> ResourceMap:
        environment_references_length = read_u16(stream)
        num_environment_references = read_u16(stream)
        expect(
            environment_references_length == 0,
            "resource map: environment references are not supported",
        )
        expect(
            num_environment_references == 0,
            "resource map: environment references are not supported",
        )
        hierarchical_schema_section = read_u16(stream)
        read_u16(stream)  # hierarchical schema reference length
        decision_info_section = read_u16(stream)
        type_table_size = read_u16(stream)
        item_to_group_count = read_u16(stream)
        group_count = read_u16(stream)
        item_info_count = read_u32(stream)
        num_candidates = read_u32(stream)
        read_u32(stream)  # data length
        large_table_length = read_u32(stream)
        expect(large_table_length == 0, "resource map: large tables are not supported")

        type_table: list[int] = []
        for _ in range(type_table_size):
            expect(
                read_u32(stream) == _TYPE_ENTRY_SIZE,
                "resource map: unexpected resource value type entry",
            )
            type_table.append(read_u32(stream))

        item_to_item_info_groups = [
            ItemToItemInfoGroup(read_u16(stream), read_u16(stream))
            for _ in range(item_to_group_count)
        ]
        item_info_groups = [
            ItemInfoGroup(read_u16(stream), read_u16(stream))
            for _ in range(group_count)
        ]
        item_infos = [
            ItemInfo(read_u16(stream), read_u16(stream))
            for _ in range(item_info_count)
        ]

        candidate_infos: list[CandidateInfo] = []
        for _ in range(num_candidates):
            expect(
                read_u8(stream) == _CANDIDATE_MARKER,
                "resource map: unexpected candidate kind",
            )
            type_index = read_u8(stream)
            if type_index >= len(type_table):
                raise PriFormatError(
                    f"resource map: resource value type index {type_index} out of range"
                )
            candidate_infos.append(
                CandidateInfo(
                    resource_value_type=type_table[type_index],
                    source_file_index=read_u16(stream),
                    data_item_index=read_u16(stream),
                    data_item_section=read_u16(stream),
                )
            )

        return cls(
            hierarchical_schema_section=hierarchical_schema_section,
            decision_info_section=decision_info_section,
            item_to_item_info_groups=item_to_item_info_groups,
            item_info_groups=item_info_groups,
            item_infos=item_infos,
            candidate_infos=candidate_infos,
        )

    def write(self, stream: BinaryIO) -> None:
        type_table = sorted({c.resource_value_type for c in self.candidate_infos})
        type_index = {value_type: i for i, value_type in enumerate(type_table)}

        write_u16(stream, 0)
        write_u16(stream, 0)
        write_u16(stream, self.hierarchical_schema_section)
        write_u16(stream, 0)  # hierarchical schema reference length
        write_u16(stream, self.decision_info_section)
        write_u16(stream, len(type_table))
        write_u16(stream, len(self.item_to_item_info_groups))
        write_u16(stream, len(self.item_info_groups))
        write_u32(stream, len(self.item_infos))
        write_u32(stream, len(self.candidate_infos))
        write_u32(stream, 0)  # data length
        write_u32(stream, 0)  # large table length
        for value_type in type_table:
            write_u32(stream, _TYPE_ENTRY_SIZE)
            write_u32(stream, value_type)
        for mapping in self.item_to_item_info_groups:
            write_u16(stream, mapping.first_item)
            write_u16(stream, mapping.item_info_group)
        for group in self.item_info_groups:
            write_u16(stream, group.group_size)
            write_u16(stream, group.first_item_info)
        for info in self.item_infos:
            write_u16(stream, info.decision)
            write_u16(stream, info.first_candidate)
        for candidate in self.candidate_infos:
            write_u8(stream, _CANDIDATE_MARKER)
            write_u8(stream, type_index[candidate.resource_value_type])
            write_u16(stream, candidate.source_file_index)
            write_u16(stream, candidate.data_item_index)
            write_u16(stream, candidate.data_item_section)