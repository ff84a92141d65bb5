# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reflector: read/write non-public fields and properties, invoke non-public
methods and constructors, and use indexers of one bound class.

Every operation resolves the member against the bound type (see
`merror.members` for the lookup rules and `merror.resolver` for overload
selection) and then performs the access through the raw object protocol,
so `__getattribute__`/`__setattr__` overrides, frozen dataclasses and
metaclasses that forbid direct instantiation are bypassed.

Inferred variants (`invoke`, `new_instance`, `get_indexer`, ...) type each
argument by its runtime type; `*_exact` variants take `ReflectorParam`
descriptors so overloads can be selected explicitly and by-reference
parameters can be read back.
"""

from __future__ import annotations

import logging
import reprlib
import types
from typing import Any, List, Optional, Sequence, Tuple

from .errors import InvalidArgumentError, MemberNotFoundError, TypeMismatchError
from .members import MemberDecl, MemberKind, MemberScope, MemberTable
from .ref import Ref
from .reflector_param import ReflectorParam
from .resolver import resolve_call, resolve_indexer
from .type_binder import module_of, resolve_type
from .typing_support import format_type, is_assignable

logger = logging.getLogger(__name__)


def _infer(args: Sequence[Any]) -> Tuple[ReflectorParam, ...]:
	return tuple(ReflectorParam.of(arg) for arg in args)


def _checked(params: Sequence[Any]) -> Tuple[ReflectorParam, ...]:
	for param in params:
		if not isinstance(param, ReflectorParam):
			raise InvalidArgumentError(f"expected ReflectorParam, got {type(param).__name__}; use the inferred variant for bare values")
	return tuple(params)


def _pack(params: Sequence[ReflectorParam]) -> Tuple[List[Any], List[Optional[Ref]]]:
	"""Argument values for the call; by-reference params travel in Ref slots."""
	values: List[Any] = []
	slots: List[Optional[Ref]] = []
	for param in params:
		if param.is_ref:
			slot = param.value if isinstance(param.value, Ref) else Ref(param.value)
			values.append(slot)
			slots.append(slot)
		else:
			values.append(param.value)
			slots.append(None)
	return values, slots


def _write_back(params: Sequence[ReflectorParam], slots: Sequence[Optional[Ref]]) -> None:
	for param, slot in zip(params, slots):
		# A caller-supplied slot holds the write too; the descriptor gets the value.
		if slot is not None:
			param.value = slot.value


def _index_key(params: Sequence[ReflectorParam]) -> Any:
	if len(params) == 1:
		return params[0].value
	return tuple(param.value for param in params)


class Reflector:
	"""
	Accessor bound to one class. Holds nothing but the class, so one
	instance can serve any number of calls and target objects.

	Raises (from every accessor):
	  MemberNotFoundError: nothing matches the name/scope/signature.
	  TypeMismatchError: a set value does not fit the declared type.
	  InvalidArgumentError: wrong instance type or non-descriptor arguments.
	"""

	def __init__(self, target_type: type) -> None:
		if target_type is None:
			raise InvalidArgumentError("target_type must not be None")
		if not isinstance(target_type, type):
			raise InvalidArgumentError(f"target_type must be a class, got {target_type!r}")
		self._type = target_type
		self._members = MemberTable(target_type)
		logger.debug("bound reflector to %s.%s", target_type.__module__, target_type.__qualname__)

	@classmethod
	def for_name(cls, type_full_name: str, another_type_in_module: type) -> "Reflector":
		"""Bind to `type_full_name` in the module that defines `another_type_in_module`."""
		if another_type_in_module is None:
			raise InvalidArgumentError("another_type_in_module must not be None")
		return cls(resolve_type(type_full_name, module_of(another_type_in_module)))

	@classmethod
	def for_module(cls, type_full_name: str, module: types.ModuleType | str) -> "Reflector":
		"""Bind to `type_full_name` in `module` (a module object or importable name)."""
		return cls(resolve_type(type_full_name, module))

	@property
	def target_type(self) -> type:
		return self._type

	@property
	def members(self) -> MemberTable:
		return self._members

	def __repr__(self) -> str:
		return f"Reflector({self._type.__module__}.{self._type.__qualname__})"

	# Construction ----------------------------------------------------

	def new_instance(self, *args: Any) -> Any:
		"""Construct through the constructor matching the runtime types of `args`."""
		return self.new_instance_exact(*_infer(args))

	def new_instance_exact(self, *params: ReflectorParam) -> Any:
		"""
		Construct through the constructor matching the declared parameter types.

		The instance is allocated with `__new__` and initialised by calling the
		resolved `__init__` directly; the metaclass `__call__` is not involved.
		By-reference descriptors receive their post-construction values.
		"""
		params = _checked(params)
		decl = resolve_call(
			self._members.get_constructor_candidates(),
			[p.type for p in params],
			kind=MemberKind.CONSTRUCTOR,
			name="__init__",
			scope=MemberScope.INSTANCE,
			owner=self._type,
		)
		values, slots = _pack(params)
		klass = self._type
		if decl.attr_name == "__new__":
			instance = decl.impl(klass, *values)
		else:
			new = klass.__new__
			instance = object.__new__(klass) if new is object.__new__ else new(klass, *values)
			if isinstance(instance, klass):
				decl.impl(instance, *values)
		_write_back(params, slots)
		return instance

	# Static members --------------------------------------------------

	def get_static_field(self, name: str) -> Any:
		decl = self._field(name, MemberScope.STATIC)
		return vars(decl.owner)[decl.attr_name]

	def set_static_field(self, name: str, value: Any) -> None:
		decl = self._field(name, MemberScope.STATIC)
		self._check_assignable(decl, value)
		type.__setattr__(decl.owner, decl.attr_name, value)

	def get_static_property(self, name: str) -> Any:
		return self._get_property(self._type, name, MemberScope.STATIC)

	def set_static_property(self, name: str, value: Any) -> None:
		self._set_property(self._type, name, value, MemberScope.STATIC)

	def invoke_static(self, name: str, *args: Any) -> Any:
		"""Call a staticmethod/classmethod chosen by the runtime types of `args`."""
		return self.invoke_static_exact(name, *_infer(args))

	def invoke_static_exact(self, name: str, *params: ReflectorParam) -> Any:
		params = _checked(params)
		decl = self._method(name, MemberScope.STATIC, params)
		values, slots = _pack(params)
		result = decl.impl(*values)
		_write_back(params, slots)
		return result

	# Instance members ------------------------------------------------
	# A None instance falls back to the static member of the same name.

	def get_field(self, instance: Any, name: str) -> Any:
		if instance is None:
			return self.get_static_field(name)
		self._check_instance(instance)
		decl = self._field(name, MemberScope.INSTANCE, instance)
		try:
			return object.__getattribute__(instance, decl.attr_name)
		except AttributeError as exc:
			raise self._missing(MemberKind.FIELD, name, MemberScope.INSTANCE, reason="declared but never assigned") from exc

	def set_field(self, instance: Any, name: str, value: Any) -> None:
		if instance is None:
			self.set_static_field(name, value)
			return
		self._check_instance(instance)
		decl = self._field(name, MemberScope.INSTANCE, instance)
		self._check_assignable(decl, value)
		object.__setattr__(instance, decl.attr_name, value)

	def get_property(self, instance: Any, name: str) -> Any:
		if instance is None:
			return self.get_static_property(name)
		self._check_instance(instance)
		return self._get_property(instance, name, MemberScope.INSTANCE)

	def set_property(self, instance: Any, name: str, value: Any) -> None:
		if instance is None:
			self.set_static_property(name, value)
			return
		self._check_instance(instance)
		self._set_property(instance, name, value, MemberScope.INSTANCE)

	def invoke(self, instance: Any, name: str, *args: Any) -> Any:
		"""Call an instance method chosen by the runtime types of `args`."""
		return self.invoke_exact(instance, name, *_infer(args))

	def invoke_exact(self, instance: Any, name: str, *params: ReflectorParam) -> Any:
		"""
		Call an instance method chosen by the declared parameter types and
		copy by-reference results back into their descriptors.
		"""
		if instance is None:
			return self.invoke_static_exact(name, *params)
		self._check_instance(instance)
		params = _checked(params)
		decl = self._method(name, MemberScope.INSTANCE, params)
		values, slots = _pack(params)
		result = decl.impl(instance, *values)
		_write_back(params, slots)
		return result

	# Indexers --------------------------------------------------------

	def get_indexer(self, instance: Any, *indexes: Any) -> Any:
		return self.get_indexer_exact(instance, *_infer(indexes))

	def get_indexer_exact(self, instance: Any, *params: ReflectorParam) -> Any:
		self._check_instance(instance)
		params = _checked(params)
		decl = resolve_indexer(
			self._members.get_indexer_candidates(setter=False),
			[p.type for p in params],
			owner=self._type,
		)
		return decl.impl(instance, _index_key(params))

	def set_indexer(self, instance: Any, value: Any, *indexes: Any) -> None:
		self.set_indexer_exact(instance, value, *_infer(indexes))

	def set_indexer_exact(self, instance: Any, value: Any, *params: ReflectorParam) -> None:
		self._check_instance(instance)
		params = _checked(params)
		decl = resolve_indexer(
			self._members.get_indexer_candidates(setter=True),
			[p.type for p in params],
			owner=self._type,
		)
		assert decl.signature is not None
		declared = decl.signature.param_types[1]
		if not is_assignable(value, declared):
			raise self._mismatch(f"{self._type.__qualname__}[...]", declared, value)
		decl.impl(instance, _index_key(params), value)

	# Helpers ---------------------------------------------------------

	def _check_instance(self, instance: Any) -> None:
		if not isinstance(instance, self._type):
			raise InvalidArgumentError(
				f"expected an instance of {self._type.__qualname__}, got {type(instance).__qualname__}"
			)

	def _missing(self, kind: MemberKind, name: str, scope: MemberScope, reason: str | None = None) -> MemberNotFoundError:
		return MemberNotFoundError(
			kind=kind.value,
			name=name,
			scope=scope.value,
			owner=self._type.__qualname__,
			reason=reason,
		)

	def _mismatch(self, member: str, declared: Any, value: Any) -> TypeMismatchError:
		return TypeMismatchError(
			member=member,
			declared_type=format_type(declared),
			value_type=type(value).__qualname__,
			value_repr=reprlib.repr(value),
		)

	def _check_assignable(self, decl: MemberDecl, value: Any) -> None:
		declared = self._members.declared_type(decl)
		if not is_assignable(value, declared):
			raise self._mismatch(f"{self._type.__qualname__}.{decl.name}", declared, value)

	def _field(self, name: str, scope: MemberScope, instance: Any = None) -> MemberDecl:
		decl = self._members.find_field(name, scope, instance)
		if decl is None:
			raise self._missing(MemberKind.FIELD, name, scope)
		return decl

	def _property(self, name: str, scope: MemberScope) -> MemberDecl:
		decl = self._members.find_property(name, scope)
		if decl is None:
			raise self._missing(MemberKind.PROPERTY, name, scope)
		return decl

	def _get_property(self, target: Any, name: str, scope: MemberScope) -> Any:
		decl = self._property(name, scope)
		assert decl.prop is not None
		if decl.prop.fget is None:
			raise self._missing(MemberKind.PROPERTY, name, scope, reason="property has no getter")
		return decl.prop.__get__(target, type(target))

	def _set_property(self, target: Any, name: str, value: Any, scope: MemberScope) -> None:
		decl = self._property(name, scope)
		assert decl.prop is not None
		if decl.prop.fset is None:
			raise self._missing(MemberKind.PROPERTY, name, scope, reason="property has no setter")
		self._check_assignable(decl, value)
		decl.prop.__set__(target, value)

	def _method(self, name: str, scope: MemberScope, params: Sequence[ReflectorParam]) -> MemberDecl:
		return resolve_call(
			self._members.get_method_candidates(name, scope),
			[p.type for p in params],
			kind=MemberKind.METHOD,
			name=name,
			scope=scope,
			owner=self._type,
		)


__all__ = ["Reflector"]
