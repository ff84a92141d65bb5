# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""ReflectorParam type inference and by-reference wrapping."""

from __future__ import annotations

from typing import Any, Optional

import pytest

from merror import InvalidArgumentError, Ref, ReflectorParam


@pytest.mark.parametrize("value", [0, "text", 1.5, [1, 2], (3,), True, object()])
def test_inferred_type_is_runtime_type(value):
	param = ReflectorParam.of(value)
	assert param.type is type(value)
	assert param.value is value
	assert not param.is_ref


def test_inferred_none_is_any():
	param = ReflectorParam.of(None)
	assert param.type is Any
	assert param.value is None


def test_is_ref_wraps_declared_type():
	param = ReflectorParam(int, 0, is_ref=True)
	assert param.type == Ref[int]
	assert param.is_ref


def test_is_ref_ignored_for_ref_type():
	param = ReflectorParam(Ref[str], "x", is_ref=True)
	assert param.type == Ref[str]


def test_inferred_by_ref():
	param = ReflectorParam.of(0, is_ref=True)
	assert param.type == Ref[int]
	assert param.value == 0


def test_ref_slot_infers_its_content_type():
	slot = Ref(5)
	param = ReflectorParam.of(slot)
	assert param.type == Ref[int]
	assert param.value is slot
	assert ReflectorParam.of(Ref(None)).type == Ref[Any]


def test_explicit_type_kept_for_none():
	param = ReflectorParam(Optional[str], None)
	assert param.type == Optional[str]


def test_missing_type_is_rejected():
	with pytest.raises(InvalidArgumentError):
		ReflectorParam(None, 1)


def test_value_is_writable():
	param = ReflectorParam(int, 1)
	param.value = 2
	assert param.value == 2
	with pytest.raises(AttributeError):
		param.type = str  # type: ignore[misc]
