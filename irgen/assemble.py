# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Assembly of the generated compilation unit.

Records come first in consumer-method order, then the dispatch functions in
the same order. Package qualifiers used by the generated types are resolved
against the imports of the file declaring the consumer, then the file
declaring the composite; whatever stays unresolved is reported, not guessed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from irgen.parser.ast import (
	ArrayType,
	ChanType,
	EmbeddedElem,
	FuncType,
	ImportSpec,
	InterfaceType,
	MapType,
	ParamGroup,
	PointerType,
	SliceType,
	SourceUnit,
	StructType,
	TypeDecl,
	TypeExpr,
	TypeName,
)
from irgen.synth import DispatchFunction, VariantRecord

# `pkg.Name` inside source text we keep verbatim (struct literals, embedded
# interface terms).
_QUALIFIED_REF = re.compile(r"(?<![\w.])([^\W\d]\w*)\.[^\W\d]")
_LITERAL = re.compile(r"""'(?:\\.|[^'\\])*'|"(?:\\.|[^"\\])*"|`[^`]*`""")


@dataclass(frozen=True)
class GeneratedUnit:
	package: str
	imports: Tuple[ImportSpec, ...] = ()
	records: Tuple[VariantRecord, ...] = ()
	functions: Tuple[DispatchFunction, ...] = ()
	unresolved: Tuple[str, ...] = ()


def _qualifiers_in_source(text: str) -> Iterator[str]:
	for m in _QUALIFIED_REF.finditer(_LITERAL.sub(" ", text)):
		yield m.group(1)


def _qualifiers_in_groups(groups: Iterable[ParamGroup]) -> Iterator[str]:
	for group in groups:
		yield from qualifiers_in_type(group.type_expr)


def qualifiers_in_type(type_expr: TypeExpr) -> Iterator[str]:
	"""Package qualifiers referenced by `type_expr`, in source order."""
	if isinstance(type_expr, TypeName):
		if type_expr.package is not None:
			yield type_expr.package
		for arg in type_expr.args:
			yield from qualifiers_in_type(arg)
	elif isinstance(type_expr, (PointerType, SliceType, ArrayType, ChanType)):
		if isinstance(type_expr, ArrayType) and "." in type_expr.length:
			yield type_expr.length.split(".", 1)[0]
		yield from qualifiers_in_type(type_expr.elem)
	elif isinstance(type_expr, MapType):
		yield from qualifiers_in_type(type_expr.key)
		yield from qualifiers_in_type(type_expr.value)
	elif isinstance(type_expr, FuncType):
		yield from _qualifiers_in_groups(type_expr.params)
		yield from _qualifiers_in_groups(type_expr.results)
	elif isinstance(type_expr, StructType):
		yield from _qualifiers_in_source(type_expr.source)
	elif isinstance(type_expr, InterfaceType):
		for elem in type_expr.elements:
			if isinstance(elem, EmbeddedElem):
				yield from _qualifiers_in_source(elem.source)
			else:
				yield from _qualifiers_in_groups(elem.params)
				yield from _qualifiers_in_groups(elem.results)


def _used_qualifiers(records: Sequence[VariantRecord], functions: Sequence[DispatchFunction]) -> List[str]:
	seen: Dict[str, None] = {}
	for record in records:
		for q in _qualifiers_in_groups(record.fields):
			seen.setdefault(q, None)
	for func in functions:
		for q in _qualifiers_in_groups(func.params):
			seen.setdefault(q, None)
		for q in _qualifiers_in_groups(func.results):
			seen.setdefault(q, None)
	return list(seen)


def _imports_of(unit: Optional[SourceUnit], decl: TypeDecl) -> Tuple[ImportSpec, ...]:
	if unit is None:
		return ()
	source = unit.file_of(decl)
	return source.imports if source is not None else ()


def resolve_imports(
	qualifiers: Iterable[str],
	candidates: Sequence[Sequence[ImportSpec]],
) -> Tuple[Tuple[ImportSpec, ...], Tuple[str, ...]]:
	"""
	Match each qualifier with an import of the first candidate file declaring it.

	Returns the imports to emit, sorted by path, and the qualifiers no
	candidate file imports.
	"""
	chosen: Dict[Tuple[str, Optional[str]], ImportSpec] = {}
	unresolved: List[str] = []
	for qualifier in qualifiers:
		match = None
		for imports in candidates:
			match = next((spec for spec in imports if spec.local_name == qualifier), None)
			if match is not None:
				break
		if match is None:
			unresolved.append(qualifier)
			continue
		key = (match.path, match.name)
		chosen.setdefault(key, ImportSpec(path=match.path, name=match.name))
	ordered = sorted(chosen.values(), key=lambda spec: (spec.path, spec.name or ""))
	return tuple(ordered), tuple(unresolved)


def assemble(
	package: str,
	composite: TypeDecl,
	consumer: TypeDecl,
	pairs: Sequence[Tuple[VariantRecord, DispatchFunction]],
	unit: Optional[SourceUnit] = None,
) -> GeneratedUnit:
	records = tuple(record for record, _func in pairs)
	functions = tuple(func for _record, func in pairs)
	qualifiers = _used_qualifiers(records, functions)
	candidates: List[Tuple[ImportSpec, ...]] = [_imports_of(unit, consumer)]
	if composite.file != consumer.file:
		candidates.append(_imports_of(unit, composite))
	imports, unresolved = resolve_imports(qualifiers, candidates)
	return GeneratedUnit(
		package=package,
		imports=imports,
		records=records,
		functions=functions,
		unresolved=unresolved,
	)


__all__ = ["GeneratedUnit", "assemble", "qualifiers_in_type", "resolve_imports"]
