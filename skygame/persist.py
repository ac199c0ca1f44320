"""Create reflected objects from JSON documents."""

from __future__ import annotations

import json
import os
from typing import Any, List, Optional, Union

from skygame.files import load_entire_file
from skygame.reflect import BasicType, Pointer, Reflect, basictype_to_name, get_reflection
from skygame.reporting import LogLevel, log


class PersistError(ValueError):
    """A document does not fit the description it is loaded into."""


class _JsonObject(list):
    """Key/value pairs of a JSON object, in document order."""


_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1


def _to_int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


class _Handler:
    def __init__(self, reflect: Reflect, path: str) -> None:
        self.reflect: Optional[Reflect] = reflect
        self.root = reflect
        self.path = path
        self.objs: List[Any] = []
        self.ret: Any = None

    def _fail(self, message: str) -> None:
        text = f"Error in {self.path}: {message}"
        log(LogLevel.ERROR, text)
        raise PersistError(text)

    def _check(self) -> Reflect:
        if self.reflect is None:
            self._fail("Received unexpected object after completion.")
        return self.reflect

    def _check_type(self, basic_type: BasicType) -> Reflect:
        reflect = self._check()
        if reflect.basic_type != basic_type:
            self._fail(
                f"Unexpected type, expected {basictype_to_name(reflect.basic_type)} "
                f"but got {basictype_to_name(basic_type)}."
            )
        return reflect

    def _top(self) -> Any:
        if not self.objs:
            self._fail("Value has no object to belong to.")
        return self.objs[-1]

    def _add_obj(self, obj: Any) -> None:
        self.objs.append(obj)
        if self.ret is None:
            self.ret = obj

    def _push(self, reflect: Reflect) -> None:
        self.reflect = reflect

    def _pop(self) -> None:
        reflect = self._check()
        self.reflect = reflect.parent
        if self.reflect is not None and self.reflect.basic_type == BasicType.POINTER:
            self._pop()

    def string(self, text: str) -> None:
        reflect = self._check()
        if reflect.basic_type == BasicType.STRING:
            self._pop()
        elif reflect.basic_type == BasicType.STRUCT:
            prop = reflect.get_property(text)
            if prop is None:
                self._fail(f"Property {text} does not exist.")
            self._push(prop)
        else:
            self._check_type(BasicType.STRING)

    def start_object(self) -> None:
        reflect = self._check()
        if reflect.basic_type == BasicType.STRUCT:
            owner = self._top()
            obj = reflect.get_value(owner)
            if obj is None:
                obj = reflect.construct()
                setattr(owner, reflect.attr, obj)
            self._add_obj(obj)
        elif reflect.basic_type == BasicType.POINTER:
            owner = self.objs[-1] if self.objs else None
            self._add_obj(reflect.construct_child(owner))
            self._push(reflect.subtype())
            self._check_type(BasicType.STRUCT)
        else:
            self._check_type(BasicType.STRUCT)

    def end_object(self) -> None:
        reflect = self._check_type(BasicType.STRUCT)
        reflect.finished_load(self._top())
        self.objs.pop()
        self._pop()

    def null(self) -> None:
        self._check()
        self._pop()

    def boolean(self, value: bool) -> None:
        reflect = self._check_type(BasicType.BOOL)
        reflect.set_bool(self._top(), value)
        self._pop()

    def integer(self, value: int) -> None:
        reflect = self._check()
        if reflect.basic_type == BasicType.INTEGER:
            reflect.set_int(self._top(), value)
            self._pop()
        elif reflect.basic_type == BasicType.FLOAT:
            reflect.set_float(self._top(), float(value))
            self._pop()
        else:
            self._check_type(BasicType.INTEGER)

    def double(self, value: float) -> None:
        reflect = self._check_type(BasicType.FLOAT)
        reflect.set_float(self._top(), value)
        self._pop()


def _emit(value: Any, handler: _Handler) -> None:
    if isinstance(value, _JsonObject):
        handler.start_object()
        for key, item in value:
            handler.string(key)
            _emit(item, handler)
        handler.end_object()
    elif isinstance(value, list):
        for item in value:
            _emit(item, handler)
    elif value is None:
        handler.null()
    elif isinstance(value, bool):
        handler.boolean(value)
    elif isinstance(value, int):
        if _INT64_MIN <= value <= _UINT64_MAX:
            handler.integer(_to_int32(value))
        else:
            handler.double(float(value))
    elif isinstance(value, float):
        handler.double(value)
    else:
        handler.string(value)


def persist_load_json(text: str, reflect: Reflect, path: str = "<string>") -> Any:
    """Build the object described by ``reflect`` from JSON ``text``."""
    try:
        document = json.loads(text, object_pairs_hook=_JsonObject)
    except json.JSONDecodeError as exc:
        message = f"Error in {path}: {exc}"
        log(LogLevel.ERROR, message)
        raise PersistError(message) from exc
    handler = _Handler(reflect, path)
    _emit(document, handler)
    return handler.ret


def persist_create_from_json_reflect(path: Union[str, os.PathLike], reflect: Reflect) -> Any:
    """Build the object described by ``reflect`` from the JSON file at ``path``."""
    text = load_entire_file(path, "r")
    return persist_load_json(text, reflect, os.fspath(path))


def persist_create_from_config(kind: type, path: Union[str, os.PathLike]) -> Any:
    """Create a new ``kind`` object from the JSON file at ``path``."""
    reflect = get_reflection(Pointer(kind))
    reflect.print()
    return persist_create_from_json_reflect(path, reflect)