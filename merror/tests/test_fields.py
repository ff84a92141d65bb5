# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Static and instance field access."""

from __future__ import annotations

import pytest

import targets
from merror import InvalidArgumentError, MemberNotFoundError, Reflector, TypeMismatchError


@pytest.fixture
def reflector():
	return Reflector(targets.FieldTarget)


def test_static_field(reflector):
	targets.FieldTarget.set_static_text("hoge")

	assert reflector.get_static_field("__text") == "hoge"

	reflector.set_static_field("__text", "あああ")

	assert reflector.get_static_field("__text") == "あああ"
	assert targets.FieldTarget.static_text() == "あああ"


def test_static_field_by_mangled_name(reflector):
	reflector.set_static_field("_FieldTarget__text", "direct")
	assert reflector.get_static_field("__text") == "direct"


def test_unannotated_static_field(reflector):
	reflector.set_static_field("_dummy_count", 7)
	assert targets.FieldTarget._dummy_count == 7


def test_instance_field(reflector):
	obj = targets.FieldTarget(3333)

	assert reflector.get_field(obj, "_num") == 3333

	reflector.set_field(obj, "_num", -1)

	assert reflector.get_field(obj, "_num") == -1
	assert obj.num() == -1


def test_mangled_instance_field(reflector):
	obj = targets.FieldTarget(1)
	assert reflector.get_field(obj, "__secret") == "hidden"
	reflector.set_field(obj, "__secret", "seen")
	assert obj._FieldTarget__secret == "seen"


def test_unannotated_instance_field_accepts_anything(reflector):
	obj = targets.FieldTarget(1)
	reflector.set_field(obj, "loose", "no longer a list")
	assert obj.loose == "no longer a list"


def test_throw_if_field_type_unmatch(reflector):
	obj = targets.FieldTarget(123)

	with pytest.raises(TypeMismatchError) as excinfo:
		reflector.set_field(obj, "_num", "aaaaa")

	assert excinfo.value.declared_type == "int"
	assert excinfo.value.value_type == "str"
	assert reflector.get_field(obj, "_num") == 123


def test_type_mismatch_is_a_type_error(reflector):
	with pytest.raises(TypeError):
		reflector.set_static_field("__text", 12)
	assert reflector.get_static_field("__text") is None


def test_throw_if_field_not_found(reflector):
	obj = targets.FieldTarget(123)

	with pytest.raises(MemberNotFoundError):
		reflector.set_field(obj, "none", None)
	with pytest.raises(MemberNotFoundError) as excinfo:
		reflector.get_field(obj, "none")
	assert excinfo.value.kind == "field"
	assert excinfo.value.scope == "instance"


def test_scopes_do_not_mix(reflector):
	obj = targets.FieldTarget(1)
	with pytest.raises(MemberNotFoundError):
		reflector.get_field(obj, "__text")
	with pytest.raises(MemberNotFoundError):
		reflector.get_static_field("_num")


def test_methods_are_not_fields(reflector):
	obj = targets.FieldTarget(1)
	with pytest.raises(MemberNotFoundError):
		reflector.get_field(obj, "num")
	with pytest.raises(MemberNotFoundError):
		reflector.get_static_field("set_static_text")


def test_declared_but_unassigned_field(reflector):
	obj = targets.FieldTarget(1)
	with pytest.raises(MemberNotFoundError) as excinfo:
		reflector.get_field(obj, "_unset")
	assert excinfo.value.reason == "declared but never assigned"
	reflector.set_field(obj, "_unset", "now set")
	assert reflector.get_field(obj, "_unset") == "now set"


def test_none_instance_falls_back_to_static(reflector):
	reflector.set_field(None, "__text", "via none")
	assert reflector.get_field(None, "__text") == "via none"


def test_foreign_instance_is_rejected(reflector):
	with pytest.raises(InvalidArgumentError):
		reflector.get_field(targets.PlainTarget(), "_num")


def test_inherited_fields():
	reflector = Reflector(targets.DerivedFieldTarget)
	obj = targets.DerivedFieldTarget(5)

	assert reflector.get_field(obj, "_num") == 5
	assert reflector.get_field(obj, "__secret") == "hidden"
	assert reflector.get_field(obj, "_extra") == 0.5

	reflector.set_field(obj, "_extra", 2)
	assert obj._extra == 2

	reflector.set_static_field("__text", "from derived")
	assert targets.FieldTarget.static_text() == "from derived"

	with pytest.raises(MemberNotFoundError):
		reflector.get_static_field("_extra")


def test_slot_fields():
	reflector = Reflector(targets.SlotTarget)
	obj = targets.SlotTarget(10)

	assert reflector.get_field(obj, "_x") == 10
	with pytest.raises(MemberNotFoundError):
		reflector.get_field(obj, "_y")
	reflector.set_field(obj, "_y", 20)
	assert reflector.get_field(obj, "_y") == 20


def test_frozen_dataclass_fields_can_be_written():
	reflector = Reflector(targets.FrozenPoint)
	point = targets.FrozenPoint(1, 2)

	reflector.set_field(point, "x", 5)

	assert point.x == 5
	with pytest.raises(TypeMismatchError):
		reflector.set_field(point, "y", "two")
	assert point.y == 2


def test_unresolvable_annotation_does_not_affect_other_fields():
	reflector = Reflector(targets.LateAnnotationTarget)
	obj = targets.LateAnnotationTarget()

	reflector.set_field(obj, "_num", 5)
	assert reflector.get_field(obj, "_num") == 5
	with pytest.raises(TypeMismatchError):
		reflector.set_field(obj, "_num", "five")


def test_unresolvable_annotation_accepts_anything():
	reflector = Reflector(targets.LateAnnotationTarget)
	obj = targets.LateAnnotationTarget()
	reflector.set_field(obj, "_later", {"a": 1})
	assert obj._later == {"a": 1}


def test_instance_value_shadows_method(reflector):
	obj = targets.FieldTarget(1)
	obj.__dict__["num"] = 5

	assert reflector.get_field(obj, "num") == 5
	reflector.set_field(obj, "num", 6)
	assert obj.num == 6
