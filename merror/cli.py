# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`merror` command line: list the members a Reflector can reach on a class.

  python -m merror pkg.mod:Outer.Inner
  python -m merror pkg.mod.Outer --kind method --json
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from typing import Any, Dict, List, Tuple

from .errors import InvalidArgumentError, ReflectorError
from .members import MemberDecl, MemberKind
from .reflector import Reflector
from .typing_support import format_signature, format_type


def split_type_spec(spec: str) -> Tuple[str, str]:
	"""
	Split `module:Qual.Name`, or a dotted name whose longest importable
	prefix is the module, into (module name, qualified class name).
	"""
	if ":" in spec:
		module_name, _, qualname = spec.partition(":")
		if not module_name or not qualname:
			raise InvalidArgumentError(f"malformed type spec '{spec}'")
		return module_name, qualname
	parts = spec.split(".")
	for cut in range(len(parts) - 1, 0, -1):
		module_name = ".".join(parts[:cut])
		try:
			importlib.import_module(module_name)
		except ModuleNotFoundError as exc:
			# Only a missing candidate module means "try a shorter prefix".
			if exc.name is None or not module_name.startswith(exc.name):
				raise
			continue
		return module_name, ".".join(parts[cut:])
	raise InvalidArgumentError(f"no importable module in type spec '{spec}'")


def member_to_dict(decl: MemberDecl) -> Dict[str, Any]:
	out: Dict[str, Any] = {
		"kind": decl.kind.value,
		"scope": decl.scope.value,
		"name": decl.name,
		"attr_name": decl.attr_name,
		"owner": decl.owner.__qualname__,
		"public": decl.visibility.is_public,
	}
	if decl.signature is not None:
		out["param_types"] = list(format_signature(decl.signature.param_types))
		out["result_type"] = format_type(decl.signature.result_type)
	else:
		out["declared_type"] = format_type(decl.declared_type)
	return out


def main(argv: List[str] | None = None) -> int:
	parser = argparse.ArgumentParser(prog="merror", description="List the members merror can reach on a class")
	parser.add_argument("type_spec", help="module:Qual.Name, or module.Qual.Name")
	parser.add_argument(
		"--kind",
		action="append",
		choices=[kind.value for kind in MemberKind],
		help="Only list members of this kind (repeatable)",
	)
	parser.add_argument("--json", action="store_true", help="Emit a JSON document instead of text")
	args = parser.parse_args(argv)

	try:
		module_name, qualname = split_type_spec(args.type_spec)
		reflector = Reflector.for_module(qualname, module_name)
	except (ReflectorError, ImportError) as exc:
		print(f"{args.type_spec}: error: {exc}", file=sys.stderr)
		return 1

	decls = [d for d in reflector.members.iter_members() if not args.kind or d.kind.value in args.kind]
	target = reflector.target_type
	if args.json:
		doc = {
			"type": f"{target.__module__}.{target.__qualname__}",
			"members": [member_to_dict(d) for d in decls],
		}
		print(json.dumps(doc, indent=2))
	else:
		for decl in decls:
			marker = " " if decl.visibility.is_public else "-"
			print(f"{marker} {decl.describe()}")
	return 0


__all__ = ["main", "split_type_spec", "member_to_dict"]
