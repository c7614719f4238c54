# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Locate a named type declaration inside a loaded package."""

from __future__ import annotations

from irgen.core.errors import AmbiguousNameError, NotFoundError
from irgen.parser.ast import SourceUnit, TypeDecl


def find(unit: SourceUnit, name: str) -> TypeDecl:
	"""
	Return the unique type declaration called `name`.

	Raises NotFoundError when no declaration has the name and
	AmbiguousNameError when several do; the latter lists every location.
	"""
	matches = [decl for decl in unit.type_decls() if decl.name == name]
	if not matches:
		raise NotFoundError(f"no type named {name} in package {unit.package}")
	if len(matches) > 1:
		raise AmbiguousNameError(
			f"type {name} declared {len(matches)} times in package {unit.package}",
			span=matches[1].span,
			notes=[f"declared at {decl.span.render()}" for decl in matches],
		)
	return matches[0]


__all__ = ["find"]
