# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error taxonomy for reflective member access.

Every failure reaches the immediate caller as one of these exceptions. The
structured ones are dataclasses so tests can assert on the fields instead
of parsing messages. They are not frozen: raising sets `__traceback__`
and `add_note` sets `__notes__`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


class ReflectorError(Exception):
	"""Base class for every failure raised by merror."""


class InvalidArgumentError(ReflectorError, ValueError):
	"""A required input (e.g. the target type) was missing or malformed."""


@dataclass(eq=False)
class TypeNotFoundError(ReflectorError, LookupError):
	"""A named type could not be resolved inside a module."""

	type_name: str
	module_name: str

	def __str__(self) -> str:
		return f"type '{self.type_name}' not found in module '{self.module_name}'"


@dataclass(eq=False)
class MemberNotFoundError(ReflectorError, LookupError):
	"""
	No member matches the requested kind, name, scope and signature.

	`param_types` is only set for signature-resolved members (methods,
	constructors, indexers). `reason` refines the message, e.g. a property
	that exists but has no setter.
	"""

	kind: str
	name: str
	scope: str
	owner: str
	param_types: Tuple[str, ...] | None = None
	reason: str | None = None

	def __str__(self) -> str:
		target = f"{self.owner}.{self.name}"
		if self.param_types is not None:
			target += "(" + ", ".join(self.param_types) + ")"
		msg = f"no {self.scope} {self.kind} {target}"
		if self.reason:
			msg += f": {self.reason}"
		return msg


@dataclass(eq=False)
class TypeMismatchError(ReflectorError, TypeError):
	"""An assigned value is incompatible with the member's declared type."""

	member: str
	declared_type: str
	value_type: str
	value_repr: str

	def __str__(self) -> str:
		return f"cannot assign {self.value_type} value {self.value_repr} to {self.member} (declared {self.declared_type})"


__all__ = [
	"ReflectorError",
	"InvalidArgumentError",
	"TypeNotFoundError",
	"MemberNotFoundError",
	"TypeMismatchError",
]
