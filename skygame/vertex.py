"""Descriptions of vertex layouts and the attributes they contain."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

GL_FLOAT = 0x1406
FLOAT_SIZE = 4


class VertexAttributeKind(enum.IntEnum):
    """What an attribute feeds: a fixed-function array or a generic slot."""

    POSITION = 0
    NORMAL = 1
    COLOR = 2
    UV = 3
    OTHER = 4
    OTHER_0 = 5
    OTHER_1 = 6
    OTHER_2 = 7
    OTHER_3 = 8
    NORMALIZED_OTHER = 9
    NORMALIZED_OTHER_0 = 10
    NORMALIZED_OTHER_1 = 11
    NORMALIZED_OTHER_2 = 12
    NORMALIZED_OTHER_3 = 13

    @property
    def is_generic(self) -> bool:
        return self >= VertexAttributeKind.OTHER

    @property
    def normalized(self) -> bool:
        return self >= VertexAttributeKind.NORMALIZED_OTHER


_MAX_NUMBERED_SLOT = 4


@dataclass(frozen=True)
class VertexAttribute:
    """One attribute of a vertex: where it sits and how it is read."""

    kind: VertexAttributeKind
    idx: int
    offset: int
    num_elements: int
    data_type: int = GL_FLOAT
    name: Optional[str] = None

    @property
    def normalized(self) -> bool:
        return self.kind.normalized

    def slot(self) -> Optional[int]:
        """The generic attribute slot, or ``None`` for fixed-function kinds.

        Plain generic kinds use the attribute's index; numbered kinds map
        ``_0`` to ``_2`` onto slots 1 to 3.
        """
        if not self.kind.is_generic:
            return None
        base = (
            VertexAttributeKind.NORMALIZED_OTHER
            if self.kind.normalized
            else VertexAttributeKind.OTHER
        )
        if self.kind == base:
            return self.idx
        slot = self.kind - (base + 1) + 1
        if slot >= _MAX_NUMBERED_SLOT:
            raise ValueError(f"{self.kind.name} has no usable attribute slot")
        return slot


class VertexDef:
    """The layout of one vertex: its stride and a fixed number of attributes."""

    def __init__(self, stride: int, num_attributes: int) -> None:
        if stride <= 0:
            raise ValueError("stride must be positive")
        if num_attributes < 0:
            raise ValueError("num_attributes must not be negative")
        self.stride = stride
        self._attributes: List[Optional[VertexAttribute]] = [None] * num_attributes

    @property
    def num_attributes(self) -> int:
        return len(self._attributes)

    def add_attribute(
        self,
        idx: int,
        kind: VertexAttributeKind,
        offset: int,
        num_elements: int,
        data_type: int = GL_FLOAT,
        name: Optional[str] = None,
    ) -> VertexAttribute:
        """Set attribute ``idx`` and return it."""
        if not 0 <= idx < len(self._attributes):
            raise IndexError(f"attribute {idx} outside 0..{len(self._attributes) - 1}")
        attribute = VertexAttribute(
            VertexAttributeKind(kind), idx, offset, num_elements, data_type, name
        )
        self._attributes[idx] = attribute
        return attribute

    def shader_bindings(self) -> List[Tuple[int, str]]:
        """The ``(index, name)`` pairs that bind named generic attributes to a shader."""
        return [
            (attribute.idx, attribute.name)
            for attribute in self
            if attribute.kind.is_generic and attribute.name
        ]

    def __iter__(self) -> Iterator[VertexAttribute]:
        return (attribute for attribute in self._attributes if attribute is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __getitem__(self, idx: int) -> VertexAttribute:
        attribute = self._attributes[idx]
        if attribute is None:
            raise KeyError(f"attribute {idx} has not been set")
        return attribute


# Layout of a loaded mesh vertex: (field, float count), in memory order.
_OBJ_FIELDS = (
    ("location", 3),
    ("uv", 2),
    ("normal", 3),
    ("diffuse", 3),
    ("ambient", 3),
    ("specular", 4),
    ("emissive", 4),
)


def _obj_layout() -> Tuple[dict, int]:
    offsets = {}
    offset = 0
    for field, count in _OBJ_FIELDS:
        offsets[field] = offset
        offset += count * FLOAT_SIZE
    return offsets, offset


def obj_vert_def() -> VertexDef:
    """Layout of mesh vertices bound to named shader inputs."""
    offsets, stride = _obj_layout()
    vd = VertexDef(stride, 7)
    other = VertexAttributeKind.OTHER
    entries = (
        ("location", 3, "in_vertex"),
        ("normal", 3, "in_normal"),
        ("uv", 2, "in_uv"),
        ("diffuse", 3, "in_color"),
        ("ambient", 3, "in_ambient"),
        ("specular", 4, "in_specular"),
        ("emissive", 4, "in_emissive"),
    )
    for i, (field, count, name) in enumerate(entries):
        vd.add_attribute(i, other, offsets[field], count, GL_FLOAT, name)
    return vd


def obj_vert_def_depr() -> VertexDef:
    """Layout of mesh vertices using fixed-function arrays and numbered slots."""
    offsets, stride = _obj_layout()
    vd = VertexDef(stride, 7)
    kind = VertexAttributeKind
    entries = (
        (kind.POSITION, "location", 3),
        (kind.NORMAL, "normal", 3),
        (kind.UV, "uv", 2),
        (kind.COLOR, "diffuse", 3),
        (kind.OTHER_0, "ambient", 3),
        (kind.OTHER_1, "specular", 4),
        (kind.OTHER_2, "emissive", 4),
    )
    for i, (attr_kind, field, count) in enumerate(entries):
        vd.add_attribute(i, attr_kind, offsets[field], count, GL_FLOAT)
    return vd