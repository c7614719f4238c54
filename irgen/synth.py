# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-variant synthesis.

For one consumer method `V(F1 T1, F2 T2)` and the composite's destructuring
method `Accept(c Consumer)` this builds

	type V struct { F1 T1; F2 T2 }
	func (b *V) Accept(consumer Consumer) { consumer.V(b.F1, b.F2) }

as data; rendering is the emitter's job. Inputs are assumed validated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from irgen.naming import CONSUMER_PARAM, BindingNameStrategy
from irgen.parser.ast import MethodSig, ParamGroup


@dataclass(frozen=True)
class VariantRecord:
	"""Struct type generated for one variant."""

	name: str
	fields: Tuple[ParamGroup, ...] = ()

	def field_names(self) -> Iterator[str]:
		for group in self.fields:
			yield from group.names


@dataclass(frozen=True)
class FieldRef:
	binding: str
	field: str


@dataclass(frozen=True)
class CallExpr:
	"""`target.method(args...)`."""

	target: str
	method: str
	args: Tuple[FieldRef, ...] = ()


@dataclass(frozen=True)
class DispatchFunction:
	"""Method on `*receiver_type` that hands the record's fields to the consumer."""

	receiver_binding: str
	receiver_type: str
	name: str
	params: Tuple[ParamGroup, ...]
	results: Tuple[ParamGroup, ...]
	body: CallExpr

	@property
	def returns(self) -> bool:
		return bool(self.results)


def synthesize(
	composite_name: str,
	destructuring_method: MethodSig,
	consumer_method: MethodSig,
	binding: Optional[BindingNameStrategy] = None,
) -> Tuple[VariantRecord, DispatchFunction]:
	strategy = binding if binding is not None else BindingNameStrategy()
	record = VariantRecord(name=consumer_method.name, fields=consumer_method.params)
	field_names = tuple(record.field_names())
	receiver = strategy.binding_for(composite_name, field_names)

	sole = destructuring_method.params[0]
	params = (ParamGroup(names=(CONSUMER_PARAM,), type_expr=sole.type_expr, variadic=sole.variadic),)
	body = CallExpr(
		target=CONSUMER_PARAM,
		method=consumer_method.name,
		args=tuple(FieldRef(binding=receiver, field=name) for name in field_names),
	)
	func = DispatchFunction(
		receiver_binding=receiver,
		receiver_type=record.name,
		name=destructuring_method.name,
		params=params,
		results=destructuring_method.results,
		body=body,
	)
	return record, func


__all__ = ["CallExpr", "DispatchFunction", "FieldRef", "VariantRecord", "synthesize"]
