# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generator pipeline:

Load -> Lookup -> Validate -> Synthesize -> Assemble

Rendering is kept out of `generate` so callers can inspect the unit (e.g. its
unresolved imports) before text is produced. Every stage raises an
`IrgenError` subclass on the first problem; nothing here catches them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from irgen.assemble import GeneratedUnit, assemble
from irgen.emit import render
from irgen.lookup import find
from irgen.parser import load_package
from irgen.synth import DispatchFunction, VariantRecord, synthesize
from irgen.validate import (
	validate_composite,
	validate_consumer,
	validate_consumer_method,
	validate_destructuring_method,
)

if TYPE_CHECKING:
	from irgen.config import Config


def generate(config: "Config") -> GeneratedUnit:
	unit = load_package(config.directory, config.package_name)

	composite = find(unit, config.composite)
	consumer = find(unit, config.consumer)
	destructuring = validate_composite(composite)
	variants = validate_consumer(consumer)
	validate_destructuring_method(composite, destructuring, consumer.name)

	pairs: List[Tuple[VariantRecord, DispatchFunction]] = []
	for method in variants:
		validate_consumer_method(consumer, method)
		pairs.append(synthesize(composite.name, destructuring, method, config.binding))

	return assemble(unit.package, composite, consumer, pairs, unit)


def generate_text(config: "Config") -> Tuple[GeneratedUnit, str]:
	"""Run the pipeline and render the result."""
	generated = generate(config)
	return generated, render(generated)


__all__ = ["generate", "generate_text"]
