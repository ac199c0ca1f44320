"""Runtime type descriptions used to load objects from data files."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from skygame.reporting import LogLevel, logf


class BasicType(enum.IntEnum):
    """The broad category a reflected value belongs to."""

    UNKNOWN = 0
    INTEGER = 1
    FLOAT = 2
    ENUM = 3
    BOOL = 4
    POINTER = 5
    STATIC_ARRAY = 6
    STRUCT = 7
    STRING = 8


_BASIC_TYPE_NAMES = (
    "Unknown",
    "Integer",
    "Float",
    "Enum",
    "Bool",
    "Pointer",
    "StaticArray",
    "Struct",
    "String",
)


def basictype_to_name(basic_type: BasicType) -> str:
    """Return the display name of ``basic_type``."""
    return _BASIC_TYPE_NAMES[BasicType(basic_type)]


@dataclass(frozen=True)
class Pointer:
    """A field holding an owned, separately constructed object of ``target``."""

    target: Any


@dataclass(frozen=True)
class Member:
    """One reflected field: its kind, the attribute name and the external name."""

    kind: Any
    attr: str
    name: Optional[str] = None

    @property
    def external_name(self) -> str:
        return self.name if self.name is not None else self.attr


FinishLoad = Callable[["Reflect", Any], None]

_registry: Dict[type, Tuple[Member, ...]] = {}


def _call_loaded(reflect: "Reflect", obj: Any) -> None:
    hook = getattr(obj, "persist_finish_loaded", None)
    if callable(hook):
        hook()


def _is_array_kind(kind: Any) -> bool:
    return (
        isinstance(kind, tuple)
        and len(kind) >= 2
        and all(isinstance(dim, int) and not isinstance(dim, bool) and dim > 0 for dim in kind[1:])
    )


def _type_name(kind: Any) -> str:
    if isinstance(kind, Pointer):
        return _type_name(kind.target) + "*"
    if _is_array_kind(kind):
        return _type_name(kind[0]) + "".join(f"[{dim}]" for dim in kind[1:])
    return getattr(kind, "__name__", repr(kind))


class Reflect:
    """Description of one value: its type, name and nested properties."""

    def __init__(
        self,
        kind: Any,
        basic_type: BasicType,
        name: str = "",
        attr: Optional[str] = None,
        parent: Optional["Reflect"] = None,
        array_elems: int = 0,
        finish_load: Optional[FinishLoad] = None,
    ) -> None:
        self.kind = kind
        self.basic_type = basic_type
        self.name = name
        self.type_name = _type_name(kind)
        self.attr = attr
        self.parent = parent
        self.array_elems = array_elems
        self.properties: List[Reflect] = []
        self._finish_load = finish_load

    def __repr__(self) -> str:
        return f"Reflect({self.name!r}, {basictype_to_name(self.basic_type)})"

    def get_property(self, name: str) -> Optional["Reflect"]:
        """Find a property by name, ignoring case; ``None`` if there is none."""
        wanted = name.casefold()
        for prop in self.properties:
            if prop.name.casefold() == wanted:
                return prop
        return None

    def print(self, depth: int = 0) -> None:
        """Log this description and its properties, indented by ``depth``."""
        logf(
            LogLevel.INFO,
            "%s'%s'(%s) @ %s",
            " " * depth,
            self.name,
            self.type_name,
            self.attr if self.attr is not None else "self",
        )
        for prop in self.properties:
            prop.print(depth + 1)

    def subtype(self) -> "Reflect":
        """The description of what a pointer points to."""
        if self.basic_type != BasicType.POINTER or len(self.properties) != 1:
            raise TypeError(f"{self.name!r} is not a pointer")
        return self.properties[0]

    def get_value(self, owner: Any) -> Any:
        """The value this description refers to inside ``owner``."""
        if self.attr is None:
            return owner
        return getattr(owner, self.attr)

    def _set(self, owner: Any, value: Any) -> None:
        if self.attr is None or owner is None:
            raise ValueError(f"{self.name!r} has no field to set")
        setattr(owner, self.attr, value)

    def _expect(self, basic_type: BasicType) -> None:
        if self.basic_type != basic_type:
            raise TypeError(
                f"{self.name!r} is {basictype_to_name(self.basic_type)}, "
                f"not {basictype_to_name(basic_type)}"
            )

    def set_int(self, owner: Any, value: int) -> None:
        """Store an integer in ``owner``."""
        self._expect(BasicType.INTEGER)
        self._set(owner, int(value))

    def set_bool(self, owner: Any, value: bool) -> None:
        """Store a boolean in ``owner``."""
        self._expect(BasicType.BOOL)
        self._set(owner, bool(value))

    def set_float(self, owner: Any, value: float) -> None:
        """Store a float in ``owner``."""
        self._expect(BasicType.FLOAT)
        self._set(owner, float(value))

    def construct(self) -> Any:
        """Make a fresh default value of the described kind."""
        bt = self.basic_type
        if bt == BasicType.BOOL:
            return False
        if bt == BasicType.INTEGER:
            return self.kind()
        if bt == BasicType.FLOAT:
            return self.kind()
        if bt == BasicType.ENUM:
            return next(iter(self.kind))
        if bt == BasicType.POINTER:
            return None
        if bt == BasicType.STRUCT:
            return self.kind()
        raise TypeError(f"{self.name!r} of type {self.type_name} cannot be constructed")

    def construct_child(self, owner: Any) -> Any:
        """Construct the pointed-to object and store it in ``owner`` if given."""
        self._expect(BasicType.POINTER)
        obj = self.subtype().construct()
        if owner is not None and self.attr is not None:
            setattr(owner, self.attr, obj)
        return obj

    def finished_load(self, obj: Any) -> None:
        """Run the load-complete callback for ``obj``, if there is one."""
        if self._finish_load is not None:
            self._finish_load(self, obj)

    def set_onloaded(self, callback: Optional[FinishLoad]) -> None:
        """Replace the load-complete callback."""
        self._finish_load = callback


def _register(cls: type, members: Tuple[Any, ...]) -> None:
    for member in members:
        if not isinstance(member, Member):
            raise TypeError(f"expected Member, got {member!r}")
    _registry[cls] = tuple(members)


def reflect_type(*args: Any) -> Any:
    """Register the members of a class for reflection.

    Use as ``@reflect_type(Member(...), ...)`` or call
    ``reflect_type(cls, Member(...), ...)``; the class is returned.
    """
    if args and isinstance(args[0], type):
        cls = args[0]
        _register(cls, args[1:])
        return cls

    def decorator(cls: type) -> type:
        _register(cls, args)
        return cls

    return decorator


def _build(kind: Any, name: str, attr: Optional[str], parent: Optional[Reflect]) -> Reflect:
    if isinstance(kind, Pointer):
        reflect = Reflect(kind, BasicType.POINTER, name, attr, parent, finish_load=_call_loaded)
        reflect.properties.append(_build(kind.target, name, None, reflect))
        return reflect
    if _is_array_kind(kind):
        return Reflect(kind, BasicType.STATIC_ARRAY, name, attr, parent, array_elems=math.prod(kind[1:]))
    if not isinstance(kind, type):
        raise TypeError(f"cannot reflect {kind!r}")
    if issubclass(kind, bool):
        return Reflect(kind, BasicType.BOOL, name, attr, parent)
    if issubclass(kind, enum.Enum):
        return Reflect(kind, BasicType.ENUM, name, attr, parent, finish_load=_call_loaded)
    if issubclass(kind, int):
        return Reflect(kind, BasicType.INTEGER, name, attr, parent, finish_load=_call_loaded)
    if issubclass(kind, float):
        return Reflect(kind, BasicType.FLOAT, name, attr, parent, finish_load=_call_loaded)
    if issubclass(kind, str):
        return Reflect(kind, BasicType.STRING, name, attr, parent)
    reflect = Reflect(kind, BasicType.STRUCT, name, attr, parent, finish_load=_call_loaded)
    for member in _registry.get(kind, ()):
        reflect.properties.append(_build(member.kind, member.external_name, member.attr, reflect))
    return reflect


def get_reflection(kind: Any) -> Reflect:
    """Build the description of ``kind``: a type, a :class:`Pointer` or an array tuple."""
    return _build(kind, "", None, None)