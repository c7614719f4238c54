# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from irgen.core.errors import (
	ArityError,
	DuplicateFieldNameError,
	EmbeddedElementError,
	KindError,
	MethodCountError,
	NonExportableNameError,
	ParamTypeError,
	ResultCountError,
	ShapeError,
	UnnamedParamError,
	VariadicParamError,
)
from irgen.parser.ast import TypeDecl
from irgen.parser.parser import parse_source
from irgen.validate import (
	validate_composite,
	validate_consumer,
	validate_consumer_method,
	validate_destructuring_method,
)


def _decl(body: str, name: str = "X") -> TypeDecl:
	source = parse_source(f"package p\n\ntype {name} {body}\n", "p.go")
	return source.types[0]


def _composite_method(body: str):
	composite = _decl(body, "Expr")
	return composite, validate_composite(composite)


def test_composite_returns_destructuring_method() -> None:
	composite, method = _composite_method("interface { FeedTo(c ExprConsumer) }")
	assert method.name == "FeedTo"
	validate_destructuring_method(composite, method, "ExprConsumer")


def test_composite_must_be_an_interface() -> None:
	with pytest.raises(KindError, match="composite type X is not an interface") as excinfo:
		validate_composite(_decl("struct{}"))
	assert excinfo.value.span.file == "p.go"
	assert excinfo.value.span.line == 3


@pytest.mark.parametrize("body,count", [("interface{}", 0), ("interface { A(c C); B(c C) }", 2)])
def test_composite_needs_exactly_one_method(body: str, count: int) -> None:
	with pytest.raises(MethodCountError, match=rf"should have 1 method \(has {count}\)"):
		validate_composite(_decl(body))


def test_method_count_is_checked_before_embedding() -> None:
	with pytest.raises(MethodCountError):
		validate_composite(_decl("interface { fmt.Stringer }"))
	with pytest.raises(EmbeddedElementError, match="embeds fmt.Stringer"):
		validate_composite(_decl("interface { fmt.Stringer; FeedTo(c C) }"))


def test_destructuring_method_arity() -> None:
	composite, method = _composite_method("interface { FeedTo(a, b ExprConsumer) }")
	with pytest.raises(ArityError, match=r"should have 1 argument \(has 2\)"):
		validate_destructuring_method(composite, method, "ExprConsumer")
	composite, method = _composite_method("interface { FeedTo() }")
	with pytest.raises(ArityError, match=r"\(has 0\)"):
		validate_destructuring_method(composite, method, "ExprConsumer")


@pytest.mark.parametrize(
	"param",
	["c Other", "c *ExprConsumer", "c pkg.ExprConsumer", "c ...ExprConsumer", "c ExprConsumer[int]"],
)
def test_destructuring_method_parameter_type(param: str) -> None:
	composite, method = _composite_method(f"interface {{ FeedTo({param}) }}")
	with pytest.raises(ParamTypeError, match=r"wrong argument type \(should be ExprConsumer\)"):
		validate_destructuring_method(composite, method, "ExprConsumer")


def test_destructuring_method_may_take_unnamed_parameter() -> None:
	composite, method = _composite_method("interface { FeedTo(ExprConsumer) }")
	validate_destructuring_method(composite, method, "ExprConsumer")


def test_destructuring_method_must_not_return() -> None:
	composite, method = _composite_method("interface { FeedTo(c ExprConsumer) error }")
	with pytest.raises(ResultCountError, match="should not return anything"):
		validate_destructuring_method(composite, method, "ExprConsumer")


def test_consumer_checks() -> None:
	methods = validate_consumer(_decl("interface { Lit(N int); Add(Left, Right Expr) }"))
	assert [m.name for m in methods] == ["Lit", "Add"]
	assert validate_consumer(_decl("interface{}")) == ()
	with pytest.raises(KindError, match="consumer type X is not an interface"):
		validate_consumer(_decl("func(int)"))
	with pytest.raises(EmbeddedElementError):
		validate_consumer(_decl("interface { Base; Lit(N int) }"))


@pytest.mark.parametrize(
	"method,error",
	[
		("Lit(int)", UnnamedParamError),
		("Lit(n int)", NonExportableNameError),
		("Lit(_ int)", NonExportableNameError),
		("Lit(N int) error", ResultCountError),
		("Lit(N int, N string)", DuplicateFieldNameError),
		("Lit(N ...int)", VariadicParamError),
	],
)
def test_consumer_method_rules(method: str, error: type) -> None:
	consumer = _decl(f"interface {{ {method} }}", "ExprConsumer")
	with pytest.raises(error) as excinfo:
		validate_consumer_method(consumer, consumer.type_expr.methods[0])
	assert isinstance(excinfo.value, ShapeError)
	assert excinfo.value.phase == "validate"


def test_consumer_method_rule_order() -> None:
	consumer = _decl("interface { Lit(n int, N int) error }", "ExprConsumer")
	with pytest.raises(NonExportableNameError):
		validate_consumer_method(consumer, consumer.type_expr.methods[0])
	consumer = _decl("interface { Lit(N, N ...int) }", "ExprConsumer")
	with pytest.raises(DuplicateFieldNameError):
		validate_consumer_method(consumer, consumer.type_expr.methods[0])


def test_consumer_method_without_parameters_is_valid() -> None:
	consumer = _decl("interface { None() }", "ExprConsumer")
	validate_consumer_method(consumer, consumer.type_expr.methods[0])
