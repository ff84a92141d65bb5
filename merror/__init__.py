# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
merror: reflective access to non-public members for test code.

Modules:
  reflector        Reflector, the accessor bound to one class
  reflector_param  ReflectorParam parameter descriptors
  ref              Ref[T] slots for by-reference parameters
  members          member table (lookup by name/scope, overload candidates)
  resolver         exact-signature overload resolution
  type_binder      class lookup by dotted name inside a module
  typing_support   annotation checks and formatting
  errors           error taxonomy
  cli              `python -m merror` member listing
"""

from .errors import (
	InvalidArgumentError,
	MemberNotFoundError,
	ReflectorError,
	TypeMismatchError,
	TypeNotFoundError,
)
from .ref import Ref
from .reflector import Reflector
from .reflector_param import ReflectorParam

__version__ = "0.1.0"

__all__ = [
	"Reflector",
	"ReflectorParam",
	"Ref",
	"ReflectorError",
	"InvalidArgumentError",
	"TypeNotFoundError",
	"MemberNotFoundError",
	"TypeMismatchError",
]
