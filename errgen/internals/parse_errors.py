"""Shared parse exception handling for the pipeline and CLI."""
from __future__ import annotations

from lark import UnexpectedInput

from errgen.internals.report import Span


def handle_parse_exception(exc: Exception, reporter) -> bool:
    """Handle a parse exception by emitting diagnostics through the reporter.

    Args:
        exc: The exception to handle.
        reporter: Reporter for error/warning collection.

    Returns:
        True if the exception was handled, False otherwise.
    """
    from errgen.internals import errors as er
    from errgen.internals.parser import improve_parse_error

    if isinstance(exc, UnexpectedInput):
        line = getattr(exc, "line", -1)
        col = getattr(exc, "column", -1)
        span = Span(line, col, line, col) if line > 0 and col > 0 else None
        er.emit(reporter, er.ERR.CE0002, span, detail=improve_parse_error(exc))
        return True

    return False
