# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import Any, ClassVar, Literal, NewType, Optional, TypeVar, Union

import pytest

from merror import Ref
from merror.typing_support import format_type, is_assignable, is_class_var, unwrap_annotation

UserId = NewType("UserId", int)
T = TypeVar("T")


@pytest.mark.parametrize(
	"value, declared, expected",
	[
		(1, int, True),
		("1", int, False),
		(1, float, True),
		(True, float, False),
		(1.0, complex, True),
		(None, Optional[str], True),
		("x", Optional[str], True),
		(3, Optional[str], False),
		(3, str | int, True),
		(b"x", Union[str, int], False),
		("a", Literal["a", "b"], True),
		("c", Literal["a", "b"], False),
		([1], list[int], True),
		((1,), list[int], False),
		(5, UserId, True),
		("5", UserId, False),
		(object(), Any, True),
		(object(), object, True),
		(None, None, True),
		(0, None, False),
		(Ref(1), Ref[int], True),
		(1, Ref[int], False),
		("anything", T, True),
		("s", ClassVar[str], True),
		(1, ClassVar[str], False),
	],
)
def test_is_assignable(value, declared, expected):
	assert is_assignable(value, declared) is expected


def test_unwrap_annotation():
	assert unwrap_annotation(ClassVar[Optional[int]]) == Optional[int]
	assert unwrap_annotation(int) is int


def test_is_class_var_on_strings_and_objects():
	assert is_class_var("ClassVar[int]")
	assert is_class_var("typing.ClassVar[int]")
	assert not is_class_var("int")
	assert is_class_var(ClassVar[int])
	assert is_class_var(ClassVar)
	assert not is_class_var(int)


def test_format_type():
	assert format_type(int) == "int"
	assert format_type(type(None)) == "None"
	assert format_type(Any) == "Any"
	assert format_type(Ref[int]) == "Ref[int]"
	assert format_type(Optional[str]) in ("Optional[str]", "str | None")
