# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
irgen: closed-variant visitor boilerplate for Go packages.

Given a composite interface with a single method taking a consumer interface,
generates one struct per consumer method plus the composite's method on each
struct, forwarding the struct's fields to the matching consumer method.
"""

from irgen.config import Config, config_from_environ
from irgen.core.errors import IrgenError

__all__ = ["Config", "IrgenError", "config_from_environ"]
