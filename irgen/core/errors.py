# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error taxonomy for the generator pipeline.

Every stage is fail-fast: the first violated rule raises one of these and the
whole run aborts. Each error knows its stable diagnostic code and the phase
that raised it so the CLI can report it without inspecting the type.
"""

from __future__ import annotations

from typing import Optional

from .diagnostics import Diagnostic
from .span import Span


class IrgenError(Exception):
	"""Base class of every error the pipeline reports to the user."""

	code = "E_IRGEN"
	phase = "generate"

	def __init__(self, message: str, *, span: Optional[Span] = None, notes: Optional[list[str]] = None) -> None:
		super().__init__(message)
		self.message = message
		self.span = span if span is not None else Span()
		self.notes = list(notes or [])

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(
			message=self.message,
			code=self.code,
			phase=self.phase,
			severity="error",
			span=self.span,
			notes=list(self.notes),
		)


class ContextError(IrgenError):
	"""The invocation context (GOFILE/GOPACKAGE or their overrides) is unusable."""

	code = "E_CONTEXT"
	phase = "context"


class LoadError(IrgenError):
	"""The package directory cannot be read or parsed, or lacks the package."""

	code = "E_LOAD"
	phase = "load"


class NotFoundError(IrgenError):
	code = "E_NOT_FOUND"
	phase = "lookup"


class AmbiguousNameError(IrgenError):
	code = "E_AMBIGUOUS_NAME"
	phase = "lookup"


class ShapeError(IrgenError):
	"""A selected declaration violates the composite/consumer contract."""

	code = "E_SHAPE"
	phase = "validate"


class KindError(ShapeError):
	code = "E_KIND"


class MethodCountError(ShapeError):
	code = "E_METHOD_COUNT"


class EmbeddedElementError(ShapeError):
	code = "E_EMBEDDED_ELEMENT"


class ArityError(ShapeError):
	code = "E_ARITY"


class ParamTypeError(ShapeError):
	code = "E_PARAM_TYPE"


class ResultCountError(ShapeError):
	code = "E_RESULT_COUNT"


class UnnamedParamError(ShapeError):
	code = "E_UNNAMED_PARAM"


class NonExportableNameError(ShapeError):
	code = "E_NON_EXPORTABLE_NAME"


class DuplicateFieldNameError(ShapeError):
	code = "E_DUPLICATE_FIELD_NAME"


class VariadicParamError(ShapeError):
	code = "E_VARIADIC_PARAM"


class RenderError(IrgenError):
	"""Internal invariant violation while rendering the generated unit."""

	code = "E_RENDER"
	phase = "emit"


class OutputError(IrgenError):
	"""The output destination could not be written."""

	code = "E_OUTPUT"
	phase = "output"


__all__ = [
	"IrgenError",
	"ContextError",
	"LoadError",
	"NotFoundError",
	"AmbiguousNameError",
	"ShapeError",
	"KindError",
	"MethodCountError",
	"EmbeddedElementError",
	"ArityError",
	"ParamTypeError",
	"ResultCountError",
	"UnnamedParamError",
	"NonExportableNameError",
	"DuplicateFieldNameError",
	"VariadicParamError",
	"RenderError",
	"OutputError",
]
