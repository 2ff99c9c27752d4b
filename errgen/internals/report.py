from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Any

from lark import Token

class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    YELLOW = "\x1b[33m"
    CYAN  = "\x1b[36m"
    GRAY  = "\x1b[90m"

@dataclass
class Span:
    line: int
    col: int
    end_line: int
    end_col: int

@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None

def span_of(t: Any) -> Optional[Span]:
    m = getattr(t, "meta", None)
    if m is not None and not getattr(m, "empty", True):
        return Span(m.line, m.column, m.end_line, m.end_column)
    if isinstance(t, Token):
        line = getattr(t, "line", None)
        col = getattr(t, "column", None)
        end_line = getattr(t, "end_line", None)
        end_col = getattr(t, "end_column", None)
        if line is not None and col is not None:
            return Span(line, col, end_line or line, end_col or col)
    return None


class Reporter:
    def __init__(self, source: Optional[str] = None, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span]):
        self.items.append(Diagnostic("error", code, msg, span))

    def warn(self, code: str, msg: str, span: Optional[Span]):
        self.items.append(Diagnostic("warning", code, msg, span))

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    @property
    def has_warnings(self) -> bool:
        return any(d.kind == "warning" for d in self.items)

    def codes(self) -> List[str]:
        return [d.code for d in self.items]

    def _display_name(self) -> str:
        if self.filename.startswith("<"):
            return self.filename
        # Relative to cwd with ./ prefix when possible, basename otherwise
        try:
            rel_path = Path(self.filename).resolve().relative_to(Path.cwd())
            return f"./{rel_path}"
        except ValueError:
            return Path(self.filename).name

    def _line_text(self, span: Span) -> str:
        lines = self.source.splitlines() if self.source else []
        idx = span.line - 1
        return lines[idx] if 0 <= idx < len(lines) else ""

    def _header(self, d: Diagnostic, use_color: bool) -> str:
        filename = self._display_name()
        loc = f"{filename}:{d.span.line}:{d.span.col}" if d.span else filename
        message = d.message if d.message.endswith('.') else f"{d.message}."
        if not use_color:
            return f"{loc}: {d.kind} [{d.code}]: {message}"
        color = C.RED if d.kind == "error" else C.YELLOW
        return f"{C.CYAN}{loc}{C.RESET}: {C.BOLD}{color}{d.kind}{C.RESET} [{C.DIM}{d.code}{C.RESET}]: {message}"

    def _snippet(self, d: Diagnostic, head: str, use_color: bool, use_unicode: bool) -> List[str]:
        line_text = self._line_text(d.span)
        # 1-based columns; ensure at least one column
        pad = " " * (max(1, d.span.col) - 1)

        if not use_unicode:
            return [head, f"  | {line_text}", f"  ` {pad}^"]

        if use_color:
            mark = C.RED if d.kind == "error" else C.YELLOW
            gray = lambda s: f"{C.GRAY}{s}{C.RESET}"
            paint = lambda s: f"{mark}{s}{C.RESET}"
        else:
            gray = paint = lambda s: s
        return [
            f"{gray('  ╭──┤ ')}{head}",
            f"{gray('  │')} {line_text}",
            f"{gray('  │')} {paint(pad + '┯')}",
            f"{gray('  ╰' + '─' * (len(pad) + 1))}{paint('╯')}",
        ]

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        """Render all diagnostics.

        use_color   → ANSI colorize location/kind/guide/markers
        use_unicode → use │ / ╰ / ╯ and a separate caret line above the guide
        """
        out: List[str] = []
        for d in self.items:
            head = self._header(d, use_color)
            if d.span is None:
                out.append(head)
            else:
                out.extend(self._snippet(d, head, use_color, use_unicode))
        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color is auto-enabled for TTY unless NO_COLOR or TERM=dumb.
        Unicode prefixes (│ / ╰) are auto-enabled for TTY unless NO_UNICODE or TERM=dumb.
        """
        import os, sys
        stream = stream or sys.stderr

        is_tty = getattr(stream, "isatty", lambda: False)()
        dumb = os.getenv("TERM") == "dumb"
        if use_color is None:
            use_color = bool(is_tty and os.getenv("NO_COLOR") is None and not dumb)
        if use_unicode is None:
            use_unicode = bool(is_tty and os.getenv("NO_UNICODE") is None and not dumb)

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)
