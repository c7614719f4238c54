# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Go source loading.

`load_package(directory, package_name)` parses every `*.go` file directly in
`directory` and returns the files whose package clause names
`package_name`. Any file that fails to parse aborts the load.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Union

from lark.exceptions import UnexpectedInput

from irgen.core.errors import LoadError
from irgen.core.span import Span

from . import ast as parser_ast
from .parser import ParseError, parse_source


def _go_files(directory: Path) -> List[Path]:
	try:
		entries = sorted(directory.iterdir(), key=lambda p: p.name)
	except OSError as err:
		raise LoadError(f"cannot read directory {directory}: {err.strerror or err}") from err
	return [p for p in entries if p.suffix == ".go" and p.is_file()]


def parse_file(path: Path) -> parser_ast.SourceFile:
	"""Parse one file, converting every failure into a LoadError."""
	try:
		source = path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		raise LoadError(f"cannot read {path}: {err}", span=Span(file=str(path))) from err
	try:
		return parse_source(source, str(path))
	except ParseError as err:
		raise LoadError(str(err), span=Span.from_loc(err.loc, str(path))) from err
	except UnexpectedInput as err:
		span = Span(
			file=str(path),
			line=getattr(err, "line", None),
			column=getattr(err, "column", None),
		)
		raise LoadError(f"syntax error: {_describe(err)}", span=span) from err


def _describe(err: UnexpectedInput) -> str:
	token = getattr(err, "token", None)
	if token is not None:
		if token.type == "$END":
			return "unexpected end of file"
		if token.type == "_TERMINATOR":
			return "unexpected newline or semicolon"
		return f"unexpected {token.value!r}"
	char = getattr(err, "char", None)
	if char is not None:
		return f"unexpected character {char!r}"
	return "unexpected input"


def load_package(directory: Union[str, Path], package_name: str) -> parser_ast.SourceUnit:
	"""
	Load the files of `package_name` from `directory` (not recursive).

	Raises LoadError if the directory is missing or unreadable, a file fails
	to parse, or no file declares the package.
	"""
	directory = Path(directory)
	if not directory.is_dir():
		raise LoadError(f"no such directory: {directory}")
	by_package: Dict[str, List[parser_ast.SourceFile]] = {}
	for path in _go_files(directory):
		source_file = parse_file(path)
		by_package.setdefault(source_file.package, []).append(source_file)
	files = by_package.get(package_name)
	if not files:
		found = ", ".join(sorted(by_package)) or "none"
		raise LoadError(
			f"no package {package_name} in directory {directory}",
			notes=[f"packages found: {found}"],
		)
	return parser_ast.SourceUnit(package=package_name, directory=str(directory), files=tuple(files))


__all__ = ["ParseError", "load_package", "parse_file", "parse_source"]
