# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Go source rendering of a GeneratedUnit.

Output is what gofmt would print for the same declarations: tab indentation,
struct fields aligned with spaces the way gofmt's tabwriter aligns them, one
blank line between top-level declarations and a single trailing newline. The
first line is the standard generated-code marker so tools skip the file.
"""

from __future__ import annotations

from typing import List, Sequence

from irgen.assemble import GeneratedUnit
from irgen.core.errors import RenderError
from irgen.parser.ast import (
	ArrayType,
	ChanType,
	EmbeddedElem,
	FuncType,
	ImportSpec,
	InterfaceType,
	MapType,
	MethodSig,
	ParamGroup,
	PointerType,
	SliceType,
	StructType,
	TypeExpr,
	TypeName,
)
from irgen.synth import CallExpr, DispatchFunction, VariantRecord

MARKER = "// Code generated by irgen; DO NOT EDIT."


def render_type(type_expr: TypeExpr) -> str:
	if isinstance(type_expr, TypeName):
		text = type_expr.name if type_expr.package is None else f"{type_expr.package}.{type_expr.name}"
		if type_expr.args:
			text += "[" + ", ".join(render_type(arg) for arg in type_expr.args) + "]"
		return text
	if isinstance(type_expr, PointerType):
		return "*" + render_type(type_expr.elem)
	if isinstance(type_expr, SliceType):
		return "[]" + render_type(type_expr.elem)
	if isinstance(type_expr, ArrayType):
		return f"[{type_expr.length}]" + render_type(type_expr.elem)
	if isinstance(type_expr, MapType):
		return f"map[{render_type(type_expr.key)}]{render_type(type_expr.value)}"
	if isinstance(type_expr, ChanType):
		return _render_chan(type_expr)
	if isinstance(type_expr, FuncType):
		return "func" + _render_signature(type_expr.params, type_expr.results)
	if isinstance(type_expr, StructType):
		return type_expr.source
	if isinstance(type_expr, InterfaceType):
		return _render_interface(type_expr)
	raise RenderError(f"cannot render type expression {type(type_expr).__name__}")


def _render_chan(chan: ChanType) -> str:
	elem = render_type(chan.elem)
	if chan.direction == "send":
		return f"chan<- {elem}"
	if chan.direction == "recv":
		return f"<-chan {elem}"
	if isinstance(chan.elem, ChanType) and chan.elem.direction == "recv":
		# `chan <-chan T` would parse as `chan<- chan T`.
		return f"chan ({elem})"
	return f"chan {elem}"


def _render_interface(iface: InterfaceType) -> str:
	if not iface.elements:
		return "interface{}"
	items = []
	for elem in iface.elements:
		if isinstance(elem, MethodSig):
			items.append(elem.name + _render_signature(elem.params, elem.results))
		elif isinstance(elem, EmbeddedElem):
			items.append(elem.source)
		else:
			raise RenderError(f"cannot render interface element {type(elem).__name__}")
	return "interface{ " + "; ".join(items) + " }"


def render_group(group: ParamGroup) -> str:
	"""`a, b T`, `xs ...T`, or just the type for an unnamed parameter."""
	type_text = render_type(group.type_expr)
	if group.variadic:
		type_text = "..." + type_text
	if not group.names:
		return type_text
	return ", ".join(group.names) + " " + type_text


def _render_signature(params: Sequence[ParamGroup], results: Sequence[ParamGroup]) -> str:
	text = "(" + ", ".join(render_group(g) for g in params) + ")"
	if not results:
		return text
	if len(results) == 1 and not results[0].names:
		return text + " " + render_group(results[0])
	return text + " (" + ", ".join(render_group(g) for g in results) + ")"


def _render_imports(imports: Sequence[ImportSpec]) -> str:
	def spec(imp: ImportSpec) -> str:
		path = '"' + imp.path.replace("\\", "\\\\").replace('"', '\\"') + '"'
		return f"{imp.name} {path}" if imp.name else path

	if len(imports) == 1:
		return "import " + spec(imports[0])
	lines = ["import ("]
	lines.extend("\t" + spec(imp) for imp in imports)
	lines.append(")")
	return "\n".join(lines)


def render_record(record: VariantRecord) -> str:
	if not record.fields:
		return f"type {record.name} struct{{}}"
	cells = [(", ".join(group.names), render_type(group.type_expr)) for group in record.fields]
	width = max(len(names) for names, _type in cells)
	lines = [f"type {record.name} struct {{"]
	for names, type_text in cells:
		lines.append(f"\t{names.ljust(width)} {type_text}")
	lines.append("}")
	return "\n".join(lines)


def _render_call(call: CallExpr) -> str:
	args = ", ".join(f"{ref.binding}.{ref.field}" for ref in call.args)
	return f"{call.target}.{call.method}({args})"


def render_function(func: DispatchFunction) -> str:
	head = f"func ({func.receiver_binding} *{func.receiver_type}) {func.name}"
	head += _render_signature(func.params, func.results)
	stmt = _render_call(func.body)
	if func.returns:
		stmt = "return " + stmt
	return f"{head} {{\n\t{stmt}\n}}"


def render(unit: GeneratedUnit) -> str:
	"""Render `unit` as a complete Go source file."""
	blocks: List[str] = [MARKER, f"package {unit.package}"]
	if unit.imports:
		blocks.append(_render_imports(unit.imports))
	blocks.extend(render_record(record) for record in unit.records)
	blocks.extend(render_function(func) for func in unit.functions)
	return "\n\n".join(blocks) + "\n"


__all__ = ["MARKER", "render", "render_function", "render_group", "render_record", "render_type"]
