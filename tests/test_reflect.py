import enum
from dataclasses import dataclass, field
from typing import Optional

import pytest

from skygame.reflect import (
    BasicType,
    Member,
    Pointer,
    Reflect,
    basictype_to_name,
    get_reflection,
    reflect_type,
)


class Color(enum.Enum):
    RED = 1
    GREEN = 2


@dataclass
class Inner:
    value: int = 0
    loads: int = 0

    def persist_finish_loaded(self):
        self.loads += 1


reflect_type(Inner, Member(int, "value", "Value"))


@reflect_type(
    Member(int, "count", "Count"),
    Member(float, "speed", "Speed"),
    Member(bool, "flag"),
    Member(Inner, "inner", "Inner"),
    Member(Pointer(Inner), "owned", "Owned"),
)
@dataclass
class Outer:
    count: int = 0
    speed: float = 0.0
    flag: bool = False
    inner: Inner = field(default_factory=Inner)
    owned: Optional[Inner] = None


class Unregistered:
    pass


def test_basictype_names():
    assert basictype_to_name(BasicType.FLOAT) == "Float"
    assert basictype_to_name(BasicType.STATIC_ARRAY) == "StaticArray"
    assert basictype_to_name(BasicType.STRING) == "String"


@pytest.mark.parametrize(
    "kind, expected",
    [
        (int, BasicType.INTEGER),
        (float, BasicType.FLOAT),
        (bool, BasicType.BOOL),
        (str, BasicType.STRING),
        (Color, BasicType.ENUM),
        (Outer, BasicType.STRUCT),
        (Pointer(Outer), BasicType.POINTER),
    ],
)
def test_basic_types(kind, expected):
    assert get_reflection(kind).basic_type == expected


def test_static_array_counts_elements():
    reflect = get_reflection((int, 3, 4))
    assert reflect.basic_type == BasicType.STATIC_ARRAY
    assert reflect.array_elems == 12


def test_struct_properties_in_order():
    reflect = get_reflection(Outer)
    assert [p.name for p in reflect.properties] == ["Count", "Speed", "flag", "Inner", "Owned"]
    assert all(p.parent is reflect for p in reflect.properties)


def test_get_property_ignores_case():
    reflect = get_reflection(Outer)
    assert reflect.get_property("count") is reflect.get_property("COUNT")
    assert reflect.get_property("count").attr == "count"
    assert reflect.get_property("missing") is None


def test_unregistered_struct_has_no_properties():
    reflect = get_reflection(Unregistered)
    assert reflect.basic_type == BasicType.STRUCT
    assert reflect.properties == []


def test_pointer_subtype():
    reflect = get_reflection(Pointer(Outer))
    sub = reflect.subtype()
    assert sub.basic_type == BasicType.STRUCT
    assert sub.parent is reflect
    assert sub.get_property("Speed") is not None and sub.get_property("Speed").basic_type == BasicType.FLOAT


def test_subtype_of_non_pointer_raises():
    with pytest.raises(TypeError):
        get_reflection(Outer).subtype()


def test_setters_store_values():
    reflect = get_reflection(Outer)
    obj = Outer()
    reflect.get_property("Count").set_int(obj, 7)
    reflect.get_property("Speed").set_float(obj, 2.5)
    reflect.get_property("flag").set_bool(obj, True)
    assert (obj.count, obj.speed, obj.flag) == (7, 2.5, True)


def test_setter_type_mismatch_raises():
    reflect = get_reflection(Outer)
    with pytest.raises(TypeError):
        reflect.get_property("Speed").set_int(Outer(), 1)
    with pytest.raises(TypeError):
        reflect.get_property("Count").set_bool(Outer(), True)


def test_get_value_reads_nested_object():
    reflect = get_reflection(Outer)
    obj = Outer()
    assert reflect.get_property("Inner").get_value(obj) is obj.inner
    assert reflect.get_value(obj) is obj


def test_construct_defaults():
    assert get_reflection(Outer).construct() == Outer()
    assert get_reflection(Color).construct() is Color.RED
    assert get_reflection(Pointer(Outer)).construct() is None
    with pytest.raises(TypeError):
        get_reflection((int, 2)).construct()


def test_construct_child_sets_owner_field():
    reflect = get_reflection(Outer)
    owner = Outer()
    child = reflect.get_property("Owned").construct_child(owner)
    assert owner.owned is child
    assert isinstance(child, Inner)


def test_construct_child_without_owner():
    child = get_reflection(Pointer(Inner)).construct_child(None)
    assert child == Inner()


def test_construct_child_requires_pointer():
    with pytest.raises(TypeError):
        get_reflection(Outer).construct_child(Outer())


def test_finished_load_calls_hook():
    obj = Inner()
    get_reflection(Inner).finished_load(obj)
    assert obj.loads == 1


def test_set_onloaded_replaces_callback():
    seen = []
    reflect = get_reflection(Inner)
    reflect.set_onloaded(lambda r, o: seen.append((r, o)))
    obj = Inner()
    reflect.finished_load(obj)
    assert seen == [(reflect, obj)]
    assert obj.loads == 0


def test_print_lists_properties(capsys):
    get_reflection(Outer).print()
    err = capsys.readouterr().err
    assert "'Count'(int)" in err
    assert " 'Owned'(Inner*)" in err


def test_reflect_type_rejects_non_members():
    with pytest.raises(TypeError):
        reflect_type(Unregistered, "not a member")


def test_reflect_is_returned_type():
    assert isinstance(get_reflection(int), Reflect)
    assert get_reflection(int).construct() == 0