# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Structural contract between the composite and the consumer interface.

The composite must declare exactly one method, the destructuring method,
taking the consumer and returning nothing. Every consumer method describes a
variant: its named, exported parameters become the variant's fields.

Each check raises on the first violation; the order of the checks is part of
the contract since it decides which error a doubly-broken input reports.
"""

from __future__ import annotations

from typing import Tuple

from irgen.core.errors import (
	ArityError,
	DuplicateFieldNameError,
	EmbeddedElementError,
	KindError,
	MethodCountError,
	NonExportableNameError,
	ParamTypeError,
	ResultCountError,
	UnnamedParamError,
	VariadicParamError,
)
from irgen.core.span import Span
from irgen.parser.ast import InterfaceType, MethodSig, TypeDecl, TypeName


def _interface_of(decl: TypeDecl, role: str) -> InterfaceType:
	if not isinstance(decl.type_expr, InterfaceType):
		raise KindError(f"{role} type {decl.name} is not an interface", span=decl.span)
	return decl.type_expr


def _method_span(decl: TypeDecl, method: MethodSig) -> Span:
	return Span.from_loc(method.loc, decl.file)


def validate_composite(decl: TypeDecl) -> MethodSig:
	"""Check the composite declaration and return its destructuring method."""
	iface = _interface_of(decl, "composite")
	methods = iface.methods
	if len(methods) != 1:
		raise MethodCountError(
			f"the composite type should have 1 method (has {len(methods)})",
			span=decl.span,
		)
	if iface.embedded:
		elem = iface.embedded[0]
		raise EmbeddedElementError(
			f"composite type {decl.name} embeds {elem.source}",
			span=Span.from_loc(elem.loc, decl.file),
		)
	return methods[0]


def validate_consumer(decl: TypeDecl) -> Tuple[MethodSig, ...]:
	"""Check the consumer declaration and return its methods in order."""
	iface = _interface_of(decl, "consumer")
	if iface.embedded:
		elem = iface.embedded[0]
		raise EmbeddedElementError(
			f"consumer type {decl.name} embeds {elem.source}",
			span=Span.from_loc(elem.loc, decl.file),
		)
	return iface.methods


def validate_destructuring_method(composite: TypeDecl, method: MethodSig, consumer_name: str) -> None:
	span = _method_span(composite, method)
	count = method.param_count()
	if count != 1:
		raise ArityError(
			f"composite method {method.name} should have 1 argument (has {count})",
			span=span,
		)
	group = method.params[0]
	type_expr = group.type_expr
	if group.variadic or not (isinstance(type_expr, TypeName) and type_expr.is_bare and type_expr.name == consumer_name):
		raise ParamTypeError(
			f"composite method {method.name} has wrong argument type (should be {consumer_name})",
			span=span,
		)
	if method.results:
		raise ResultCountError(
			f"composite method {method.name} should not return anything",
			span=span,
		)


def validate_consumer_method(consumer: TypeDecl, method: MethodSig) -> None:
	span = _method_span(consumer, method)
	if any(not group.names for group in method.params):
		raise UnnamedParamError(f"consumer method {method.name} has unnamed arguments", span=span)
	for name in method.param_names():
		if not name[:1].isupper():
			raise NonExportableNameError(
				f"consumer method {method.name} has non-exported argument {name}",
				span=span,
			)
	if method.results:
		raise ResultCountError(f"consumer method {method.name} should not return anything", span=span)
	seen = set()
	for name in method.param_names():
		if name in seen:
			raise DuplicateFieldNameError(
				f"consumer method {method.name} repeats argument {name}",
				span=span,
			)
		seen.add(name)
	for group in method.params:
		if group.variadic:
			raise VariadicParamError(
				f"consumer method {method.name} has variadic argument {group.names[-1]}",
				span=span,
			)


__all__ = [
	"validate_composite",
	"validate_consumer",
	"validate_destructuring_method",
	"validate_consumer_method",
]
