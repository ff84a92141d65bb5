# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
By-reference parameter slots.

Python passes object references by value, so `ref`/`out` parameters are
modelled as an explicit slot: a callee annotated with `Ref[int]` receives a
`Ref` and writes its result through `.value`. The reflector copies that
final value back into the caller's `ReflectorParam` after the call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, get_args, get_origin

T = TypeVar("T")


@dataclass
class Ref(Generic[T]):
	"""Mutable output slot for a by-reference parameter."""

	value: T


def is_ref_type(tp: Any) -> bool:
	"""True for `Ref` itself and any parameterised `Ref[...]`."""
	return tp is Ref or get_origin(tp) is Ref


def ref_of(tp: Any) -> Any:
	"""Return the by-reference form of `tp` (idempotent for ref types)."""
	if is_ref_type(tp):
		return tp
	return Ref[tp]


def ref_target(tp: Any) -> Any:
	"""Element type of a ref type; `Any` for a bare `Ref`."""
	args = get_args(tp)
	return args[0] if args else Any


__all__ = ["Ref", "is_ref_type", "ref_of", "ref_target"]
