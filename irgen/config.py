# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generator configuration.

`Config` is what the pipeline needs and nothing else; reading `go generate`'s
environment is left to `config_from_environ`, which the command line calls.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, TextIO

from irgen.core.errors import ContextError
from irgen.naming import BindingNameStrategy


@dataclass(frozen=True)
class Config:
	directory: str
	package_name: str
	composite: str
	consumer: str
	binding: BindingNameStrategy = field(default_factory=BindingNameStrategy)
	# Optional sink the rendered text is written to by `generate()`.
	out: Optional[TextIO] = field(default=None, compare=False)

	def generate(self) -> str:
		"""
		Run the whole pipeline and return the rendered file.

		The text is produced in full before anything is written to `out`, so a
		failing run leaves `out` untouched.
		"""
		from irgen.pipeline import generate_text

		_unit, text = generate_text(self)
		if self.out is not None:
			self.out.write(text)
		return text


def config_from_environ(
	environ: Mapping[str, str],
	composite: str,
	consumer: str,
	*,
	directory: Optional[str] = None,
	package_name: Optional[str] = None,
	binding: Optional[BindingNameStrategy] = None,
) -> Config:
	"""
	Build a Config the way `go generate` invokes us.

	GOFILE names the file holding the directive (its directory is the package
	directory), GOPACKAGE the package. `directory`/`package_name` take
	precedence over the variables when given.
	"""
	if directory is None:
		gofile = environ.get("GOFILE", "")
		if not gofile:
			raise ContextError("environment variable GOFILE missing or empty")
		directory = os.path.dirname(gofile) or "."
	if package_name is None:
		package_name = environ.get("GOPACKAGE", "")
		if not package_name:
			raise ContextError("environment variable GOPACKAGE missing or empty")
	if not composite or not consumer:
		raise ContextError("two arguments wanted: COMPOSITE and CONSUMER")
	return Config(
		directory=directory,
		package_name=package_name,
		composite=composite,
		consumer=consumer,
		binding=binding if binding is not None else BindingNameStrategy(),
	)


__all__ = ["Config", "config_from_environ"]
