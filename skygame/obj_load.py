"""Loading of Wavefront OBJ meshes and ``.ssh`` material files."""

from __future__ import annotations

import dataclasses
import os
import re
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, TypeVar, Union

from skygame.files import load_entire_file
from skygame.reporting import LogLevel, log, logf

Vector2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]
Vector4 = Tuple[float, float, float, float]

MATERIAL_DIR = os.path.join("data", "world", "materials")
MATERIAL_EXT = ".ssh"

_WHITESPACE = " \t\r\n"
_FLOAT_CHARS = re.compile(r"[0-9.\-]+")
_INT_CHARS = re.compile(r"[0-9]+")
_SYMBOL_CHARS = re.compile(r"[A-Za-z]+")
_ATOF = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")

_ZERO3: Vector3 = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class MaterialParams:
    """Shading parameters read from a material file."""

    diffuse: Vector3 = _ZERO3
    ambient: Vector3 = _ZERO3
    specular: Vector3 = _ZERO3
    specular_power: float = 0.0
    emissive: Vector3 = _ZERO3
    emissive_brightness: float = 0.0


@dataclass(frozen=True)
class ObjVertex:
    """One vertex of a loaded mesh, carrying its material values."""

    location: Vector3
    uv: Vector2
    normal: Vector3
    diffuse: Vector3
    ambient: Vector3
    specular: Vector4
    emissive: Vector4


@dataclass(frozen=True)
class ObjMesh:
    """A triangle list: every three vertices form one face."""

    vertices: Tuple[ObjVertex, ...]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[ObjVertex]:
        return iter(self.vertices)


# Material keywords, the field each one fills and how many floats it takes.
_MATERIAL_FIELDS = (
    ("Diffuse", "diffuse", 3),
    ("Ambient", "ambient", 3),
    ("Specular", "specular", 3),
    ("SpecularPower", "specular_power", 1),
    ("Emissive", "emissive", 3),
    ("EmissiveBrightness", "emissive_brightness", 1),
)


def _atof(token: str) -> float:
    match = _ATOF.match(token)
    return float(match.group(0)) if match else 0.0


class _Cursor:
    """A read position inside a text being parsed."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def advance(self, count: int) -> None:
        self.pos = min(self.pos + count, len(self.text))

    def _after_whitespace(self) -> int:
        pos = self.pos
        while pos < len(self.text) and self.text[pos] in _WHITESPACE:
            pos += 1
        return pos

    def skip_whitespace(self) -> None:
        self.pos = self._after_whitespace()

    def matches(self, keyword: str) -> bool:
        """True if ``keyword`` starts here and is followed by whitespace."""
        end = self.pos + len(keyword)
        return (
            self.text.startswith(keyword, self.pos)
            and end < len(self.text)
            and self.text[end] in _WHITESPACE
        )

    def skip_line(self) -> None:
        newline = self.text.find("\n", self.pos)
        self.pos = len(self.text) if newline < 0 else newline + 1

    def _scan(self, pattern: "re.Pattern[str]") -> Optional[str]:
        match = pattern.match(self.text, self._after_whitespace())
        if match is None:
            return None
        self.pos = match.end()
        return match.group(0)

    def parse_float(self) -> float:
        token = self._scan(_FLOAT_CHARS)
        return 0.0 if token is None else _atof(token)

    def parse_int(self) -> int:
        token = self._scan(_INT_CHARS)
        return 0 if token is None else int(token)

    def parse_symbol(self) -> Optional[str]:
        return self._scan(_SYMBOL_CHARS)

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise ValueError(f"expected {char!r} at offset {self.pos}")
        self.pos += 1

    def current_line(self) -> str:
        newline = self.text.find("\n", self.pos)
        return self.text[self.pos:] if newline < 0 else self.text[self.pos:newline]


def parse_ssh(text: str, params: Optional[MaterialParams] = None) -> MaterialParams:
    """Apply the material file ``text`` on top of ``params`` and return the result."""
    updates = {}
    cursor = _Cursor(text)
    while not cursor.at_end():
        if cursor.peek() in _WHITESPACE:
            cursor.advance(1)
            continue
        if cursor.peek() == "#":
            cursor.skip_line()
            continue
        for symbol, field, count in _MATERIAL_FIELDS:
            if cursor.matches(symbol):
                cursor.advance(len(symbol))
                values = tuple(cursor.parse_float() for _ in range(count))
                updates[field] = values[0] if count == 1 else values
                break
        else:
            logf(LogLevel.WARN, "Unparsable line while parsing material: %s", cursor.current_line())
        cursor.skip_line()
    return dataclasses.replace(params if params is not None else MaterialParams(), **updates)


def load_ssh(
    name: str,
    params: Optional[MaterialParams] = None,
    material_dir: Union[str, os.PathLike] = MATERIAL_DIR,
) -> MaterialParams:
    """Load the material ``name`` from ``material_dir`` on top of ``params``.

    A missing material file raises :class:`FileNotFoundError`.
    """
    path = os.path.join(os.fspath(material_dir), name + MATERIAL_EXT)
    return parse_ssh(load_entire_file(path, "r"), params)


MaterialLoader = Callable[[str, MaterialParams], Optional[MaterialParams]]

_T = TypeVar("_T")


def _lookup(items: Sequence[_T], index: int, what: str) -> _T:
    if not 0 <= index < len(items):
        raise IndexError(f"face refers to missing {what} {index + 1}")
    return items[index]


def _face_vertex(
    cursor: _Cursor,
    positions: List[Vector3],
    uvs: List[Vector2],
    normals: List[Vector3],
    params: MaterialParams,
) -> ObjVertex:
    cursor.skip_whitespace()
    position = cursor.parse_int() - 1
    cursor.expect("/")
    uv = cursor.parse_int() - 1
    cursor.expect("/")
    normal = cursor.parse_int() - 1
    return ObjVertex(
        location=_lookup(positions, position, "position"),
        uv=_lookup(uvs, uv, "texture coordinate"),
        normal=_lookup(normals, normal, "normal"),
        diffuse=params.diffuse,
        ambient=params.ambient,
        specular=(*params.specular, params.specular_power),
        emissive=(*params.emissive, params.emissive_brightness),
    )


def parse_obj(text: str, material_loader: Optional[MaterialLoader] = None) -> ObjMesh:
    """Parse OBJ ``text`` into a triangle mesh.

    ``material_loader(name, params)`` returns the parameters of a material
    applied on top of ``params``, or ``None`` when the material is unknown;
    unknown materials fall back to ``"Default"``.
    """

    def load(name: str, params: MaterialParams) -> Optional[MaterialParams]:
        return material_loader(name, params) if material_loader is not None else None

    positions: List[Vector3] = []
    uvs: List[Vector2] = []
    normals: List[Vector3] = []
    vertices: List[ObjVertex] = []

    current = load("Default", MaterialParams()) or MaterialParams()

    cursor = _Cursor(text)
    while not cursor.at_end():
        if cursor.peek() in _WHITESPACE:
            cursor.advance(1)
            continue

        if cursor.matches("v"):
            cursor.advance(1)
            positions.append((cursor.parse_float(), cursor.parse_float(), cursor.parse_float()))
        elif cursor.matches("vt"):
            cursor.advance(2)
            uvs.append((cursor.parse_float(), cursor.parse_float()))
        elif cursor.matches("vn"):
            cursor.advance(2)
            normals.append((cursor.parse_float(), cursor.parse_float(), cursor.parse_float()))
        elif cursor.matches("f"):
            cursor.advance(1)
            for _ in range(3):
                vertices.append(_face_vertex(cursor, positions, uvs, normals, current))
        elif cursor.matches("usemtl"):
            cursor.advance(6)
            material = cursor.parse_symbol()
            if material:
                loaded = load(material, current)
                if loaded is None:
                    loaded = load("Default", current)
                if loaded is not None:
                    current = loaded
        cursor.skip_line()

    logf(LogLevel.INFO, "Vertices: %d, Faces: %d.", len(positions), len(vertices) // 3)
    return ObjMesh(tuple(vertices))


def obj_load_mesh(
    filename: Union[str, os.PathLike],
    material_dir: Union[str, os.PathLike] = MATERIAL_DIR,
) -> ObjMesh:
    """Load the OBJ file ``filename``, reading materials from ``material_dir``."""

    def loader(name: str, params: MaterialParams) -> Optional[MaterialParams]:
        try:
            return load_ssh(name, params, material_dir)
        except FileNotFoundError as exc:
            log(LogLevel.WARN, str(exc))
            return None

    return parse_obj(load_entire_file(filename, "r"), loader)