# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parameter descriptors for exact overload lookups.

A `ReflectorParam` pairs an argument value with the type used to pick an
overload. By-reference descriptors carry the callee's final write back to
the caller through `value`.
"""

from __future__ import annotations

from typing import Any

from .errors import InvalidArgumentError
from .ref import Ref, is_ref_type, ref_of
from .typing_support import format_type


class ReflectorParam:
	"""
	A parameter descriptor: declared type, value and by-reference flag.

	Args:
	  type_: declared type used for overload matching. Pass `Ref[T]` (or
	    `T` with `is_ref=True`) to select a by-reference parameter.
	  value: argument value; overwritten after the call for by-reference
	    descriptors.
	  is_ref: wrap `type_` into `Ref[type_]`; ignored when `type_` already is
	    a ref type.
	"""

	__slots__ = ("_type", "value")

	def __init__(self, type_: Any, value: Any = None, is_ref: bool = False) -> None:
		if type_ is None:
			raise InvalidArgumentError("ReflectorParam requires a declared type; use typing.Any for untyped values")
		self._type = ref_of(type_) if is_ref else type_
		self.value = value

	@classmethod
	def of(cls, value: Any, is_ref: bool = False) -> "ReflectorParam":
		"""
		Build a descriptor whose type is inferred from `value`.

		`None` infers `typing.Any`. A `Ref` slot infers `Ref[<type of its
		value>]` and is handed to the callee as-is, so the caller's own slot
		observes the write; after the call `value` holds the written value itself.
		"""
		if isinstance(value, Ref):
			inner = Any if value.value is None else type(value.value)
			return cls(Ref[inner], value)
		inferred = Any if value is None else type(value)
		return cls(inferred, value, is_ref=is_ref)

	@property
	def type(self) -> Any:
		return self._type

	@property
	def is_ref(self) -> bool:
		return is_ref_type(self._type)

	def __repr__(self) -> str:
		return f"ReflectorParam({format_type(self._type)}, {self.value!r})"


__all__ = ["ReflectorParam"]
