# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command line front-end, meant to be run from a `go generate` directive:

	//go:generate irgen Expr ExprConsumer

`go generate` exports GOFILE and GOPACKAGE and runs the command in the
package directory, so by default the output lands next to the input as
`<composite>_impl.go`.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from irgen.core.diagnostics import Diagnostic
from irgen.core.errors import IrgenError, OutputError
from irgen.core.span import Span
from irgen.config import config_from_environ
from irgen.naming import BINDING_STYLES, BindingNameStrategy
from irgen.pipeline import generate_text

PROG = "irgen"


def default_output_name(composite: str) -> str:
	return f"{composite.lower()}_impl.go"


def _report(diagnostics: Sequence[Diagnostic], exit_code: int, as_json: bool) -> int:
	if not diagnostics:
		return exit_code
	if as_json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [d.to_json() for d in diagnostics],
		}
		print(json.dumps(payload), file=sys.stderr)
	else:
		for d in diagnostics:
			print(d.render(fallback_file=PROG), file=sys.stderr)
	return exit_code


def _write_output(text: str, out: Optional[str], composite: str, verbose: bool) -> None:
	"""Write the generated file. `-` means stdout; empty means the default name."""
	if out == "-":
		sys.stdout.write(text)
		return
	path = Path(out or default_output_name(composite))
	try:
		path.write_text(text, encoding="utf-8")
	except OSError as err:
		raise OutputError(f"cannot write {path}: {err.strerror or err}", span=Span(file=str(path))) from err
	if verbose:
		sys.stdout.write(text)


def _unresolved_warnings(qualifiers: Sequence[str]) -> List[Diagnostic]:
	return [
		Diagnostic(
			message=f"no import found for package qualifier {q}; add it to the generated file by hand",
			code="W_UNRESOLVED_IMPORT",
			phase="assemble",
			severity="warning",
		)
		for q in qualifiers
	]


def build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog=PROG,
		description="Generate variant structs and dispatch methods for a composite/consumer interface pair",
	)
	parser.add_argument("composite", metavar="COMPOSITE", help="Name of the composite interface")
	parser.add_argument("consumer", metavar="CONSUMER", help="Name of the consumer interface")
	parser.add_argument(
		"-o",
		"-out",
		"--out",
		dest="out",
		default="",
		help='Output file name (computed if "", stdout if "-")',
	)
	parser.add_argument(
		"-v",
		"--verbose",
		action="store_true",
		help="Copy all output to stdout, besides the output file",
	)
	parser.add_argument(
		"--receiver-style",
		choices=BINDING_STYLES,
		default="lower-first",
		help="How the receiver name is derived from the composite name (default: lower-first)",
	)
	parser.add_argument("--dir", default=None, help="Package directory (default: directory of $GOFILE)")
	parser.add_argument("--package", default=None, help="Package name (default: $GOPACKAGE)")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON on stderr (phase/code/message/severity/file/line/column)",
	)
	return parser


def main(argv: list[str] | None = None) -> int:
	"""
	Generate the implementation file.

	Returns 0 on success (warnings included) and 1 when any stage fails; the
	output file is only created once the whole file has been generated.
	"""
	args = build_arg_parser().parse_args(argv)
	try:
		config = config_from_environ(
			os.environ,
			args.composite,
			args.consumer,
			directory=args.dir,
			package_name=args.package,
			binding=BindingNameStrategy(style=args.receiver_style),
		)
		unit, text = generate_text(config)
	except IrgenError as err:
		return _report([err.to_diagnostic()], 1, args.json)

	warnings = _unresolved_warnings(unit.unresolved)
	try:
		_write_output(text, args.out, config.composite, args.verbose)
	except OutputError as err:
		return _report([*warnings, err.to_diagnostic()], 1, args.json)
	return _report(warnings, 0, args.json)


__all__ = ["build_arg_parser", "default_output_name", "main"]
