# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration-level AST for the Go subset irgen reads.

Only what the generator needs is modelled: package clause, imports, type
declarations, and the structure of interface types down to full type
expressions of method parameters. Everything else in a Go file is skipped by
the grammar.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union

from irgen.core.span import Span


@dataclass(frozen=True)
class Located:
	line: int
	column: int


class TypeExpr:
	"""Base class of type expressions."""


@dataclass(frozen=True)
class TypeName(TypeExpr):
	name: str
	package: Optional[str] = None
	args: Tuple[TypeExpr, ...] = ()

	@property
	def is_bare(self) -> bool:
		"""A plain unqualified identifier (what a parameter name parses as)."""
		return self.package is None and not self.args


@dataclass(frozen=True)
class PointerType(TypeExpr):
	elem: TypeExpr


@dataclass(frozen=True)
class SliceType(TypeExpr):
	elem: TypeExpr


@dataclass(frozen=True)
class ArrayType(TypeExpr):
	length: str
	elem: TypeExpr


@dataclass(frozen=True)
class MapType(TypeExpr):
	key: TypeExpr
	value: TypeExpr


@dataclass(frozen=True)
class ChanType(TypeExpr):
	elem: TypeExpr
	direction: str = "both"  # "both", "send" (chan<-), "recv" (<-chan)


@dataclass(frozen=True)
class ParamGroup:
	"""
	One parameter (or result, or struct field) group.

	`names` is empty for an unnamed parameter. Several names share one type:
	`A, B int` is a single group.
	"""

	names: Tuple[str, ...]
	type_expr: TypeExpr
	variadic: bool = False


@dataclass(frozen=True)
class FuncType(TypeExpr):
	params: Tuple[ParamGroup, ...] = ()
	results: Tuple[ParamGroup, ...] = ()


@dataclass(frozen=True)
class StructType(TypeExpr):
	# Struct literals are not parsed field by field; the source text is kept
	# on one line, fields separated by `;`, comments removed.
	source: str


@dataclass(frozen=True)
class MethodSig:
	name: str
	params: Tuple[ParamGroup, ...]
	results: Tuple[ParamGroup, ...]
	loc: Optional[Located] = None

	def param_count(self) -> int:
		"""Number of parameters, counting an unnamed group as one."""
		return sum(max(1, len(group.names)) for group in self.params)

	def param_names(self) -> Iterator[str]:
		for group in self.params:
			yield from group.names


@dataclass(frozen=True)
class EmbeddedElem:
	"""Embedded interface, type union or constraint term inside an interface."""

	source: str
	loc: Optional[Located] = None


@dataclass(frozen=True)
class InterfaceType(TypeExpr):
	elements: Tuple[Union[MethodSig, EmbeddedElem], ...] = ()

	@property
	def methods(self) -> Tuple[MethodSig, ...]:
		return tuple(e for e in self.elements if isinstance(e, MethodSig))

	@property
	def embedded(self) -> Tuple[EmbeddedElem, ...]:
		return tuple(e for e in self.elements if isinstance(e, EmbeddedElem))


@dataclass(frozen=True)
class OpaqueType(TypeExpr):
	"""Any type declaration body other than an interface."""


@dataclass(frozen=True)
class TypeDecl:
	name: str
	type_expr: TypeExpr
	loc: Optional[Located] = None
	file: Optional[str] = None

	@property
	def is_interface(self) -> bool:
		return isinstance(self.type_expr, InterfaceType)

	@property
	def span(self) -> Span:
		return Span.from_loc(self.loc, self.file)


_MAJOR_VERSION = re.compile(r"^v[0-9]+$")
_NOT_IDENT = re.compile(r"[^\w]")


def guess_import_name(path: str) -> str:
	"""
	Package name a file refers to an import by when it gives none.

	Same heuristic as goimports: the last path element, skipping a `vN`
	major-version element, without a `go-` prefix, cut at the first
	character that cannot appear in an identifier.
	"""
	parts = [p for p in path.split("/") if p]
	if not parts:
		return ""
	base = parts[-1]
	if _MAJOR_VERSION.match(base) and len(parts) > 1:
		base = parts[-2]
	if base.startswith("go-"):
		base = base[len("go-"):]
	m = _NOT_IDENT.search(base)
	if m is not None:
		base = base[: m.start()]
	return base


@dataclass(frozen=True)
class ImportSpec:
	path: str
	name: Optional[str] = None  # explicit name: identifier, "_" or "."
	loc: Optional[Located] = None

	@property
	def local_name(self) -> Optional[str]:
		"""Qualifier used in the importing file, or None for `_`/`.` imports."""
		if self.name in ("_", "."):
			return None
		if self.name is not None:
			return self.name
		return guess_import_name(self.path)


@dataclass(frozen=True)
class SourceFile:
	path: str
	package: str
	imports: Tuple[ImportSpec, ...] = ()
	types: Tuple[TypeDecl, ...] = ()


@dataclass(frozen=True)
class SourceUnit:
	"""All files of one package in one directory."""

	package: str
	directory: str
	files: Tuple[SourceFile, ...] = field(default_factory=tuple)

	def type_decls(self) -> Iterator[TypeDecl]:
		for source in self.files:
			yield from source.types

	def file_of(self, decl: TypeDecl) -> Optional[SourceFile]:
		for source in self.files:
			if source.path == decl.file:
				return source
		return None


__all__ = [
	"Located",
	"TypeExpr",
	"TypeName",
	"PointerType",
	"SliceType",
	"ArrayType",
	"MapType",
	"ChanType",
	"ParamGroup",
	"FuncType",
	"StructType",
	"MethodSig",
	"EmbeddedElem",
	"InterfaceType",
	"OpaqueType",
	"TypeDecl",
	"ImportSpec",
	"SourceFile",
	"SourceUnit",
	"guess_import_name",
]
