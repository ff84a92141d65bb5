# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resolve classes by dotted name inside a module.

Names are either fully qualified (`pkg.mod.Outer.Inner`) or relative to the
module (`Outer.Inner`). Each segment is looked up in the namespace itself,
not through `__all__`, so private (`_Name`) and nested classes resolve too;
`__Name` nested classes are found under their mangled key.
"""

from __future__ import annotations

import importlib
import sys
import types
from typing import Any

from .errors import InvalidArgumentError, TypeNotFoundError
from .members import lookup


def resolve_module(module: types.ModuleType | str | None) -> types.ModuleType:
	if module is None:
		raise InvalidArgumentError("module must not be None")
	if isinstance(module, types.ModuleType):
		return module
	if isinstance(module, str):
		return importlib.import_module(module)
	raise InvalidArgumentError(f"expected a module or module name, got {type(module).__name__}")


def module_of(klass: type) -> types.ModuleType:
	"""Module that defines `klass`."""
	if not isinstance(klass, type):
		raise InvalidArgumentError(f"expected a class, got {klass!r}")
	module = sys.modules.get(klass.__module__)
	if module is None:
		raise TypeNotFoundError(type_name=klass.__qualname__, module_name=klass.__module__)
	return module


def _member(scope: Any, segment: str) -> Any:
	if isinstance(scope, type):
		hit = lookup(scope.__mro__, segment)
		return None if hit is None else hit[2]
	if isinstance(scope, types.ModuleType):
		return vars(scope).get(segment)
	# Plain values are not namespaces.
	return None


def resolve_type(type_full_name: str, module: types.ModuleType | str) -> type:
	"""
	Find the class named `type_full_name` in `module`.

	Raises:
	  InvalidArgumentError: empty name or missing module.
	  TypeNotFoundError: some segment is missing or the result is not a class.
	"""
	if not type_full_name:
		raise InvalidArgumentError("type name must not be empty")
	mod = resolve_module(module)
	qualname = type_full_name
	prefix = mod.__name__ + "."
	if qualname.startswith(prefix):
		qualname = qualname[len(prefix):]
	scope: Any = mod
	for segment in qualname.split("."):
		scope = _member(scope, segment) if segment else None
		if scope is None:
			raise TypeNotFoundError(type_name=type_full_name, module_name=mod.__name__)
	if not isinstance(scope, type):
		raise TypeNotFoundError(type_name=type_full_name, module_name=mod.__name__)
	return scope


__all__ = ["resolve_module", "module_of", "resolve_type"]
