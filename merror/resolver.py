# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Overload resolution over MemberTable candidates.

Rules:
- Arity must match exactly; there is no default-argument or *args expansion.
- Pass 1 accepts candidates whose formal types all equal the requested types.
- Pass 2 additionally lets wildcard formals (`Any`, `object`, bare `Ref`)
  accept any requested type.
- The first candidate of the first non-empty pass wins. Duplicate
  signatures are not reported as ambiguous.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Sequence, Tuple, get_args, get_origin

from .errors import MemberNotFoundError
from .members import MemberDecl, MemberKind, MemberScope
from .ref import is_ref_type
from .typing_support import format_signature, is_wildcard

logger = logging.getLogger(__name__)


def _formal_matches(formal: Any, requested: Any, *, loose: bool) -> bool:
	if formal == requested:
		return True
	if not loose or not is_wildcard(formal):
		return False
	if is_ref_type(formal):
		return is_ref_type(requested)
	return True


def signature_matches(formals: Sequence[Any], requested: Sequence[Any], *, loose: bool) -> bool:
	if len(formals) != len(requested):
		return False
	return all(_formal_matches(f, r, loose=loose) for f, r in zip(formals, requested))


def index_signatures(decl: MemberDecl, arity: int) -> List[Tuple[Any, ...]]:
	"""
	Index signatures an indexer candidate accepts for `arity` indexes: the key
	annotation itself, plus the tuple element types when several indexes are
	passed as one tuple key.
	"""
	assert decl.signature is not None
	key = decl.signature.param_types[0]
	result: List[Tuple[Any, ...]] = [(key,)]
	if arity < 2:
		return result
	args = get_args(key)
	if get_origin(key) is tuple:
		if len(args) == 2 and args[1] is Ellipsis:
			result.append((args[0],) * arity)
		elif Ellipsis not in args:
			result.append(tuple(args))
	elif key is tuple or is_wildcard(key):
		result.append((Any,) * arity)
	return result


def _pick(
	candidates: Iterable[MemberDecl],
	requested: Sequence[Any],
	shapes: Callable[[MemberDecl], List[Tuple[Any, ...]]],
) -> MemberDecl | None:
	cands = list(candidates)
	for loose in (False, True):
		for decl in cands:
			if any(signature_matches(shape, requested, loose=loose) for shape in shapes(decl)):
				return decl
	return None


def _not_found(kind: MemberKind, name: str, scope: MemberScope, owner: type, requested: Sequence[Any]) -> MemberNotFoundError:
	return MemberNotFoundError(
		kind=kind.value,
		name=name,
		scope=scope.value,
		owner=owner.__qualname__,
		param_types=format_signature(requested),
	)


def resolve_call(
	candidates: Iterable[MemberDecl],
	requested: Sequence[Any],
	*,
	kind: MemberKind,
	name: str,
	scope: MemberScope,
	owner: type,
) -> MemberDecl:
	"""Pick the method/constructor candidate whose parameters match `requested`."""
	decl = _pick(candidates, requested, lambda d: [d.signature.param_types] if d.signature else [])
	if decl is None:
		raise _not_found(kind, name, scope, owner, requested)
	logger.debug("resolved %s", decl.describe())
	return decl


def resolve_indexer(candidates: Iterable[MemberDecl], requested: Sequence[Any], *, owner: type) -> MemberDecl:
	"""Pick the indexer whose index signature matches `requested` (at least one index)."""
	decl = None
	if requested:
		decl = _pick(candidates, requested, lambda d: index_signatures(d, len(requested)))
	if decl is None:
		raise _not_found(MemberKind.INDEXER, "this", MemberScope.INSTANCE, owner, requested)
	logger.debug("resolved indexer %s", decl.describe())
	return decl


__all__ = ["resolve_call", "resolve_indexer", "signature_matches", "index_signatures"]
