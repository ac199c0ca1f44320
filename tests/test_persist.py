import json
from dataclasses import dataclass, field
from typing import Optional

import pytest

from skygame.persist import (
    PersistError,
    persist_create_from_config,
    persist_create_from_json_reflect,
    persist_load_json,
)
from skygame.reflect import Member, Pointer, get_reflection, reflect_type

_loaded = []


@dataclass
class InternalObj:
    J: int = 0
    K: float = 0.0
    L: int = 0
    M: int = 0

    def persist_finish_loaded(self):
        assert self.M == 50
        _loaded.append(self)


reflect_type(
    InternalObj,
    Member(int, "J", "J"),
    Member(float, "K", "K"),
    Member(int, "L", "L"),
    Member(int, "M", "M"),
)


@dataclass
class PersistObj:
    X: int = 0
    Y: float = 0.0
    W: bool = False
    O: InternalObj = field(default_factory=InternalObj)
    P: Optional[InternalObj] = None
    S: str = "unchanged"


reflect_type(
    PersistObj,
    Member(int, "X", "X"),
    Member(float, "Y", "Y"),
    Member(bool, "W", "W"),
    Member(InternalObj, "O", "O"),
    Member(Pointer(InternalObj), "P", "P"),
    Member(str, "S", "S"),
)

DOCUMENT = {
    "X": 13,
    "Y": 18,
    "W": True,
    "O": {"J": 7, "K": 24.0, "L": -44, "M": 50},
    "P": {"J": 98, "K": 38.6, "L": 4, "M": 50},
}


@pytest.fixture(autouse=True)
def _reset_loaded():
    _loaded.clear()


def _root():
    return get_reflection(Pointer(PersistObj))


def test_persist_from_config(tmp_path):
    path = tmp_path / "persist.json"
    path.write_text(json.dumps(DOCUMENT))
    p = persist_create_from_config(PersistObj, path)
    assert p.X == 13
    assert p.Y == 18.0
    assert p.W is True
    assert p.O.J == 7
    assert p.O.K == 24.0
    assert p.O.L == -44
    assert p.O.M == 50
    assert p.P.J == 98
    assert p.P.K == 38.6
    assert p.P.L == 4
    assert p.P.M == 50
    assert len(_loaded) == 2


def test_from_json_reflect_file(tmp_path):
    path = tmp_path / "persist.json"
    path.write_text('{"X": 5}')
    p = persist_create_from_json_reflect(path, _root())
    assert p == PersistObj(X=5)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        persist_create_from_json_reflect(tmp_path / "absent.json", _root())


def test_keys_are_case_insensitive():
    p = persist_load_json('{"x": 3, "w": false}', _root())
    assert (p.X, p.W) == (3, False)


def test_null_and_string_values_are_skipped():
    p = persist_load_json('{"X": null, "S": "ignored", "Y": 1.5}', _root())
    assert p.X == 0
    assert p.S == "unchanged"
    assert p.Y == 1.5


def test_large_unsigned_wraps_to_int32():
    p = persist_load_json('{"X": 4294967295}', _root())
    assert p.X == -1


def test_float_into_integer_raises():
    with pytest.raises(PersistError, match="expected Integer but got Float"):
        persist_load_json('{"X": 1.5}', _root())


def test_string_into_integer_raises():
    with pytest.raises(PersistError):
        persist_load_json('{"X": "13"}', _root())


def test_unknown_property_raises():
    with pytest.raises(PersistError, match="Property Q does not exist"):
        persist_load_json('{"Q": 1}', _root())


def test_object_into_scalar_raises():
    with pytest.raises(PersistError):
        persist_load_json('{"X": {"J": 1}}', _root())


def test_data_after_completion_raises():
    with pytest.raises(PersistError, match="after completion"):
        persist_load_json('[{"X": 1}, {"X": 2}]', _root())


def test_invalid_json_raises():
    with pytest.raises(PersistError):
        persist_load_json('{"X": ', _root(), "broken.json")


def test_error_names_path():
    with pytest.raises(PersistError, match="Error in world.json"):
        persist_load_json('{"Q": 1}', _root(), "world.json")