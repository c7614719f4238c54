# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared diagnostics, spans and the error taxonomy."""

from .diagnostics import Diagnostic
from .errors import *  # noqa: F401,F403
from .errors import __all__ as _error_names
from .span import Span

__all__ = ["Diagnostic", "Span", *_error_names]
