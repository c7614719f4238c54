# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Receiver binding names for generated dispatch methods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

GO_KEYWORDS = frozenset(
	{
		"break",
		"case",
		"chan",
		"const",
		"continue",
		"default",
		"defer",
		"else",
		"fallthrough",
		"for",
		"func",
		"go",
		"goto",
		"if",
		"import",
		"interface",
		"map",
		"package",
		"range",
		"return",
		"select",
		"struct",
		"switch",
		"type",
		"var",
	}
)

# Name of the dispatch method's sole parameter.
CONSUMER_PARAM = "consumer"

BINDING_STYLES = ("lower", "lower-first")


@dataclass(frozen=True)
class BindingNameStrategy:
	"""
	Derives the receiver name of a dispatch method from the composite's name.

	`lower-first` (the default) lowercases the first letter (`TypeExpr` ->
	`typeExpr`), `lower` the whole name (`typeexpr`). A result that is a Go
	keyword, the consumer parameter or one of the record's fields gets
	`suffix` appended until it is free.
	"""

	style: str = "lower-first"
	suffix: str = "_"

	def __post_init__(self) -> None:
		if self.style not in BINDING_STYLES:
			raise ValueError(f"unknown binding style {self.style!r}")
		if not self.suffix:
			raise ValueError("binding suffix must not be empty")

	def base_name(self, composite_name: str) -> str:
		if self.style == "lower-first":
			return composite_name[:1].lower() + composite_name[1:]
		return composite_name.lower()

	def binding_for(self, composite_name: str, field_names: Iterable[str] = ()) -> str:
		taken = set(GO_KEYWORDS)
		taken.add(CONSUMER_PARAM)
		taken.update(field_names)
		name = self.base_name(composite_name)
		while name in taken:
			name += self.suffix
		return name


__all__ = ["BINDING_STYLES", "BindingNameStrategy", "CONSUMER_PARAM", "GO_KEYWORDS"]
