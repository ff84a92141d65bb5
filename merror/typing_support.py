# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Annotation helpers shared by the member table and the resolver.

Declared types are annotations evaluated one name at a time by `merror.members`.
Assignment checks are shallow: parameterised generics are checked against
their origin only, element types are not inspected.
"""

from __future__ import annotations

import types
import typing
from typing import Any, Annotated, ClassVar, Final, Literal, Union, get_args, get_origin

from .ref import Ref, is_ref_type, ref_target

# Formal parameter types that accept any requested type.
WILDCARD_TYPES = (Any, object)

# PEP 484 numeric tower: an int is acceptable where a float is declared, etc.
_NUMERIC_PROMOTIONS = {
	float: (int,),
	complex: (int, float),
}


def is_wildcard(tp: Any) -> bool:
	if any(tp is w for w in WILDCARD_TYPES):
		return True
	# Bare Ref / Ref[Any] accept any by-reference argument.
	return is_ref_type(tp) and ref_target(tp) is Any


def is_union(tp: Any) -> bool:
	return get_origin(tp) is Union or isinstance(tp, types.UnionType)


def unwrap_annotation(tp: Any) -> Any:
	"""Strip qualifiers that do not change the value type (ClassVar, Final, Annotated)."""
	while True:
		origin = get_origin(tp)
		if origin in (ClassVar, Final):
			args = get_args(tp)
			tp = args[0] if args else Any
		elif origin is Annotated:
			tp = tp.__origin__
		elif tp is ClassVar or tp is Final:
			return Any
		else:
			return tp


def is_class_var(tp: Any) -> bool:
	"""True when an annotation (possibly a string) declares a ClassVar."""
	if isinstance(tp, typing.ForwardRef):
		tp = tp.__forward_arg__
	if isinstance(tp, str):
		head = tp.split("[", 1)[0].strip()
		return head in ("ClassVar", "typing.ClassVar")
	if get_origin(tp) is Annotated:
		return is_class_var(tp.__origin__)
	return tp is ClassVar or get_origin(tp) is ClassVar


def is_assignable(value: Any, declared: Any) -> bool:
	"""
	Return True if `value` may be stored in a member declared as `declared`.

	Unknown typing constructs (Protocols that are not runtime-checkable,
	Callable signatures, ...) are accepted rather than guessed at.
	"""
	declared = unwrap_annotation(declared)
	if is_ref_type(declared):
		return isinstance(value, Ref)
	if is_wildcard(declared):
		return True
	if declared is None or declared is type(None):
		return value is None
	if isinstance(declared, typing.TypeVar):
		return True
	if is_union(declared):
		return any(is_assignable(value, arg) for arg in get_args(declared))
	origin = get_origin(declared)
	if origin is Literal:
		return value in get_args(declared)
	supertype = getattr(declared, "__supertype__", None)
	if supertype is not None:
		# NewType
		return is_assignable(value, supertype)
	if origin is not None:
		if isinstance(origin, type):
			return isinstance(value, origin)
		return True
	if isinstance(declared, type):
		if isinstance(value, declared):
			return True
		promoted = _NUMERIC_PROMOTIONS.get(declared, ())
		return isinstance(value, promoted) and not isinstance(value, bool)
	return True


def format_type(tp: Any) -> str:
	"""Short human name of a type or annotation for messages and listings."""
	if tp is type(None):
		return "None"
	if tp is Any:
		return "Any"
	if isinstance(tp, type) and get_origin(tp) is None:
		return tp.__qualname__
	if is_ref_type(tp):
		return f"Ref[{format_type(ref_target(tp))}]"
	text = repr(tp)
	return text.replace("typing.", "")


def format_signature(param_types: typing.Sequence[Any]) -> typing.Tuple[str, ...]:
	return tuple(format_type(tp) for tp in param_types)


__all__ = [
	"WILDCARD_TYPES",
	"is_wildcard",
	"is_union",
	"unwrap_annotation",
	"is_class_var",
	"is_assignable",
	"format_type",
	"format_signature",
]
