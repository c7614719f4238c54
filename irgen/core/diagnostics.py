# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostic records surfaced by the command line front-end.

Errors raised by the pipeline are converted into a Diagnostic at the process
boundary; warnings (e.g. an import the generated file needs but that could
not be resolved) are produced directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a generator diagnostic (error/warning)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic (load, lookup, validate, ...).
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def render(self, fallback_file: str | None = None) -> str:
		"""Human-readable one-liner: `file:line:col: severity: message`."""
		span = self.span
		if span.file is None and fallback_file is not None:
			span = Span.from_loc(span, fallback_file)
		text = f"{span.render()}: {self.severity}: {self.message}"
		for note in self.notes:
			text += f"\n\tnote: {note}"
		return text

	def to_json(self) -> dict:
		"""Render to a structured JSON-friendly dict."""
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


__all__ = ["Diagnostic"]
