# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Member table for one bound class.

This answers "what is called `name` on this type, in this scope" by walking
the class MRO (or the metaclass MRO for class-level properties) the way
attribute lookup does. It does not resolve overloads; for methods,
constructors and indexers it returns one candidate per registered
signature (`typing.get_overloads`, or the implementation's own signature)
and leaves the choice to `merror.resolver`.

Nothing is cached: every lookup reads the live class dictionaries.
"""

from __future__ import annotations

import inspect
import logging
import sys
import types
import typing
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .typing_support import format_signature, format_type, is_class_var

logger = logging.getLogger(__name__)


class MemberKind(Enum):
	FIELD = "field"
	PROPERTY = "property"
	METHOD = "method"
	CONSTRUCTOR = "constructor"
	INDEXER = "indexer"


class MemberScope(Enum):
	STATIC = "static"
	INSTANCE = "instance"


@dataclass(frozen=True)
class Visibility:
	"""Name-based visibility; `_name` and `__name` are non-public."""

	is_public: bool

	@staticmethod
	def public() -> "Visibility":
		return Visibility(is_public=True)

	@staticmethod
	def private() -> "Visibility":
		return Visibility(is_public=False)

	@staticmethod
	def of_name(name: str) -> "Visibility":
		if is_dunder(name) or not name.startswith("_"):
			return Visibility.public()
		return Visibility.private()


@dataclass(frozen=True)
class Signature:
	"""Formal positional parameter types (receiver excluded) and result type."""

	param_types: Tuple[Any, ...]
	result_type: Any = Any


@dataclass(frozen=True, eq=False)
class MemberDecl:
	"""
	One member of the bound type.

	`attr_name` is the key in `owner.__dict__` (mangled for `__private`
	names); `name` is the name the member was requested or declared by.
	Fields and properties carry `declared_type`; methods, constructors and
	indexers carry a `signature` and the `impl` to call.
	"""

	kind: MemberKind
	scope: MemberScope
	name: str
	attr_name: str
	owner: type
	visibility: Visibility
	declared_type: Any = Any
	signature: Optional[Signature] = None
	impl: Optional[Callable[..., Any]] = None
	prop: Optional[property] = None

	def describe(self) -> str:
		head = f"{self.scope.value} {self.kind.value} {self.owner.__qualname__}.{self.name}"
		if self.signature is not None:
			params = ", ".join(format_signature(self.signature.param_types))
			return f"{head}({params}) -> {format_type(self.signature.result_type)}"
		return f"{head}: {format_type(self.declared_type)}"


def is_dunder(name: str) -> bool:
	return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_mangled_private(name: str) -> bool:
	return name.startswith("__") and not name.endswith("__")


def mangle(owner: type, name: str) -> str:
	"""Apply Python's private name mangling for `owner` (no-op for other names)."""
	stripped = owner.__name__.lstrip("_")
	if not stripped or not is_mangled_private(name):
		return name
	return f"_{stripped}{name}"


def demangle(owner: type, attr: str) -> str:
	prefix = "_" + owner.__name__.lstrip("_")
	if attr.startswith(prefix + "__") and not attr.endswith("__"):
		return attr[len(prefix):]
	return attr


def attribute_names(owner: type, name: str) -> Tuple[str, ...]:
	"""Dictionary keys under which `owner` may store a member called `name`."""
	mangled = mangle(owner, name)
	if mangled == name:
		return (name,)
	return (name, mangled)


def lookup(mro: Tuple[type, ...], name: str) -> Optional[Tuple[type, str, Any]]:
	"""First (owner, attr_name, raw value) along `mro`, as attribute lookup would find it."""
	for owner in mro:
		namespace = vars(owner)
		for attr in attribute_names(owner, name):
			if attr in namespace:
				return owner, attr, namespace[attr]
	return None


def is_plain_value(raw: Any) -> bool:
	"""True for data stored directly in a class dict (no descriptor protocol)."""
	if isinstance(raw, (types.FunctionType, staticmethod, classmethod, property, type)):
		return False
	return not hasattr(type(raw), "__get__")


def own_annotations(obj: Any) -> Dict[str, Any]:
	"""Raw annotations declared directly on a class or function; never evaluated."""
	try:
		return inspect.get_annotations(obj)
	except NameError:
		# Lazily evaluated annotations (3.14+) that name TYPE_CHECKING-only imports.
		import annotationlib
		return annotationlib.get_annotations(obj, format=annotationlib.Format.FORWARDREF)


def evaluate_annotation(annotation: Any, globalns: Dict[str, Any], localns: Dict[str, Any]) -> Any:
	"""
	Evaluate one annotation the way `typing.get_type_hints` does for a single
	name. Names that cannot be resolved (TYPE_CHECKING-only imports, typos)
	make the annotation `Any` instead of failing the whole lookup.
	"""
	if isinstance(annotation, typing.ForwardRef):
		annotation = annotation.__forward_arg__
	if not isinstance(annotation, str):
		return annotation
	try:
		return eval(annotation, globalns, localns)
	except (NameError, AttributeError, SyntaxError, TypeError) as exc:
		logger.debug("cannot evaluate annotation %r: %s", annotation, exc)
		return Any


def _module_namespace(owner: type) -> Dict[str, Any]:
	module = sys.modules.get(owner.__module__)
	return dict(vars(module)) if module is not None else {}


def declares_instance_field(owner: type, attr: str) -> bool:
	annotations = own_annotations(owner)
	return attr in annotations and not is_class_var(annotations[attr])


def _function_hints(func: Any, owner: type) -> Dict[str, Any]:
	"""Evaluated annotations of `func`, one name at a time."""
	if not isinstance(func, types.FunctionType):
		return {}
	localns = dict(vars(owner))
	return {
		name: evaluate_annotation(annotation, func.__globals__, localns)
		for name, annotation in own_annotations(func).items()
	}


def signature_of(func: Any, owner: type, *, skip_receiver: bool) -> Optional[Signature]:
	"""
	Positional signature of `func`, or None when it cannot be called
	positionally (required keyword-only parameters) or exposes no metadata.

	*args/**kwargs do not contribute parameter types. Unannotated parameters
	are `Any`.
	"""
	try:
		sig = inspect.signature(func)
	except ValueError:
		logger.debug("no signature metadata for %r on %s", func, owner.__qualname__)
		return None
	hints = _function_hints(func, owner)
	params = list(sig.parameters.values())
	if skip_receiver and params and params[0].kind in (
		inspect.Parameter.POSITIONAL_ONLY,
		inspect.Parameter.POSITIONAL_OR_KEYWORD,
	):
		params = params[1:]
	param_types: List[Any] = []
	for param in params:
		if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
			continue
		if param.kind is inspect.Parameter.KEYWORD_ONLY:
			if param.default is inspect.Parameter.empty:
				return None
			continue
		param_types.append(hints.get(param.name, Any))
	return Signature(param_types=tuple(param_types), result_type=hints.get("return", Any))


def overload_signatures(func: Any, owner: type, *, skip_receiver: bool) -> List[Signature]:
	"""Signatures registered with `typing.overload` for `func`, else its own."""
	stubs = typing.get_overloads(func) if isinstance(func, types.FunctionType) else []
	result: List[Signature] = []
	for stub in stubs or [func]:
		sig = signature_of(stub, owner, skip_receiver=skip_receiver)
		if sig is not None:
			result.append(sig)
	return result


class MemberTable:
	"""
	Declared-and-inherited members of one class.

	Static members: class attributes, `staticmethod`/`classmethod`, and
	properties declared on the metaclass. Instance members: instance dict
	entries, slots, non-ClassVar annotations, instance properties and plain
	methods. The two scopes never mix.
	"""

	def __init__(self, target_type: type) -> None:
		self._type = target_type

	@property
	def target_type(self) -> type:
		return self._type

	def _decl(self, kind: MemberKind, scope: MemberScope, name: str, owner: type, attr: str, **kw: Any) -> MemberDecl:
		return MemberDecl(
			kind=kind,
			scope=scope,
			name=name,
			attr_name=attr,
			owner=owner,
			visibility=Visibility.of_name(attr),
			**kw,
		)

	def declared_type(self, decl: MemberDecl) -> Any:
		"""Declared value type of a field or property, evaluated on demand."""
		if decl.kind is MemberKind.PROPERTY and decl.prop is not None:
			return _property_type(decl.prop, decl.owner)
		if decl.kind is MemberKind.FIELD:
			return self.field_type(decl.attr_name)
		return Any

	def field_type(self, attr: str) -> Any:
		"""Declared type of a field, `Any` when unannotated or unresolvable."""
		for owner in self._type.__mro__:
			annotations = own_annotations(owner)
			if attr in annotations:
				# Only this annotation is evaluated; others on the class may not resolve.
				return evaluate_annotation(annotations[attr], _module_namespace(owner), dict(vars(owner)))
		return Any

	# Fields / properties ----------------------------------------------

	def find_field(self, name: str, scope: MemberScope, instance: Any = None) -> Optional[MemberDecl]:
		mro = self._type.__mro__
		hit = lookup(mro, name)
		if scope is MemberScope.STATIC:
			if hit is None:
				return None
			owner, attr, raw = hit
			if is_dunder(attr) or not is_plain_value(raw) or declares_instance_field(owner, attr):
				return None
			return self._decl(MemberKind.FIELD, scope, name, owner, attr)

		inst_dict = getattr(instance, "__dict__", None)
		if hit is not None:
			owner, attr, raw = hit
			if isinstance(raw, types.MemberDescriptorType):
				return self._decl(MemberKind.FIELD, scope, name, owner, attr)
			# An instance value hides a non-data descriptor such as a method.
			shadowed = inst_dict is not None and attr in inst_dict and not _is_data_descriptor(raw)
			if not is_plain_value(raw) and not shadowed:
				return None
		for owner in mro:
			for attr in attribute_names(owner, name):
				if is_dunder(attr):
					continue
				if (inst_dict is not None and attr in inst_dict) or declares_instance_field(owner, attr):
					return self._decl(MemberKind.FIELD, scope, name, owner, attr)
		return None

	def find_property(self, name: str, scope: MemberScope) -> Optional[MemberDecl]:
		if scope is MemberScope.STATIC:
			mro = type(self._type).__mro__
		else:
			mro = self._type.__mro__
		hit = lookup(mro, name)
		if hit is None or not isinstance(hit[2], property):
			return None
		owner, attr, prop = hit
		return self._decl(
			MemberKind.PROPERTY,
			scope,
			name,
			owner,
			attr,
			prop=prop,
		)

	# Signature-resolved members --------------------------------------

	def get_method_candidates(self, name: str, scope: MemberScope) -> List[MemberDecl]:
		hit = lookup(self._type.__mro__, name)
		if hit is None:
			return []
		owner, attr, raw = hit
		if scope is MemberScope.STATIC:
			if isinstance(raw, staticmethod):
				func, impl, skip = raw.__func__, raw.__func__, False
			elif isinstance(raw, classmethod):
				func, impl, skip = raw.__func__, raw.__get__(None, self._type), True
			else:
				return []
		else:
			if not _binds_to_instance(raw):
				return []
			func, impl, skip = raw, raw, True
		return [
			self._decl(MemberKind.METHOD, scope, name, owner, attr, signature=sig, impl=impl)
			for sig in overload_signatures(func, owner, skip_receiver=skip)
		]

	def get_constructor_candidates(self) -> List[MemberDecl]:
		"""
		Constructor signatures. `__init__` defines them unless only `__new__`
		is customised; `object.__init__` is the zero-argument default.
		"""
		mro = self._type.__mro__
		init_hit = lookup(mro, "__init__")
		new_hit = lookup(mro, "__new__")
		if init_hit is None:
			return []
		owner, attr, func = init_hit
		if func is object.__init__ and new_hit is not None and isinstance(new_hit[2], staticmethod):
			owner, attr, raw_new = new_hit
			func = raw_new.__func__
		return [
			self._decl(MemberKind.CONSTRUCTOR, MemberScope.INSTANCE, attr, owner, attr, signature=sig, impl=func)
			for sig in overload_signatures(func, owner, skip_receiver=True)
		]

	def get_indexer_candidates(self, *, setter: bool) -> List[MemberDecl]:
		attr_name = "__setitem__" if setter else "__getitem__"
		hit = lookup(self._type.__mro__, attr_name)
		if hit is None:
			return []
		owner, attr, raw = hit
		if not _binds_to_instance(raw):
			return []
		arity = 2 if setter else 1
		sigs = overload_signatures(raw, owner, skip_receiver=True)
		if not sigs and not isinstance(raw, types.FunctionType):
			# Builtin slots (dict, list) expose no signature metadata.
			sigs = [Signature(param_types=(Any,) * arity)]
		return [
			self._decl(MemberKind.INDEXER, MemberScope.INSTANCE, attr, owner, attr, signature=sig, impl=raw)
			for sig in sigs
			if len(sig.param_types) == arity
		]

	# Enumeration -----------------------------------------------------

	def iter_members(self) -> Iterator[MemberDecl]:
		"""Every member visible on the bound type, first declaration wins."""
		seen: set[str] = set()
		for owner in self._type.__mro__:
			if owner is object:
				continue
			names = list(vars(owner)) + [a for a in own_annotations(owner) if a not in vars(owner)]
			for attr in names:
				if attr in seen or is_dunder(attr):
					continue
				seen.add(attr)
				yield from self._members_named(owner, attr)
		for owner in type(self._type).__mro__:
			if owner in (type, object):
				continue
			for attr, raw in vars(owner).items():
				if isinstance(raw, property):
					decl = self.find_property(attr, MemberScope.STATIC)
					if decl is not None:
						yield replace(decl, name=demangle(owner, attr), declared_type=self.declared_type(decl))
		yield from self.get_constructor_candidates()
		yield from self.get_indexer_candidates(setter=False)
		yield from self.get_indexer_candidates(setter=True)

	def _members_named(self, owner: type, attr: str) -> Iterator[MemberDecl]:
		name = demangle(owner, attr)
		for scope in (MemberScope.STATIC, MemberScope.INSTANCE):
			found: List[Optional[MemberDecl]] = [
				self.find_field(attr, scope),
				self.find_property(attr, scope) if scope is MemberScope.INSTANCE else None,
			]
			found.extend(self.get_method_candidates(attr, scope))
			for decl in found:
				if decl is not None:
					yield replace(decl, name=name, declared_type=self.declared_type(decl))


def _binds_to_instance(raw: Any) -> bool:
	"""Plain functions and builtin method descriptors; anything called with the instance first."""
	if isinstance(raw, (staticmethod, classmethod, property, type)):
		return False
	return callable(raw) and hasattr(type(raw), "__get__")


def _is_data_descriptor(raw: Any) -> bool:
	kind = type(raw)
	return hasattr(kind, "__set__") or hasattr(kind, "__delete__")


def _property_type(prop: property, owner: type) -> Any:
	"""Getter return annotation, else the setter's value parameter annotation."""
	if prop.fget is not None:
		hints = _function_hints(prop.fget, owner)
		if "return" in hints:
			return hints["return"]
	if prop.fset is not None:
		sig = signature_of(prop.fset, owner, skip_receiver=True)
		if sig is not None and sig.param_types:
			return sig.param_types[0]
	return Any


__all__ = [
	"MemberKind",
	"MemberScope",
	"Visibility",
	"Signature",
	"MemberDecl",
	"MemberTable",
	"attribute_names",
	"lookup",
	"mangle",
	"demangle",
	"signature_of",
	"overload_signatures",
]
