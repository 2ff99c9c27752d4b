from __future__ import annotations
from dataclasses import is_dataclass, fields
from typing import Any, List

from errgen.internals.report import Span


def _span(span: Span) -> str:
    return f"@{span.line}:{span.col}"


def _value(val: Any) -> str:
    if isinstance(val, Span):
        return _span(val)
    if isinstance(val, list) and all(isinstance(v, str) for v in val):
        return "[" + ", ".join(repr(v) for v in val) + "]"
    return repr(val)


def _pp(node: Any, indent: int, out: List[str], label: str = "") -> None:
    ind = "  " * indent
    prefix = f"{label}: " if label else ""
    if not is_dataclass(node):
        out.append(f"{ind}{prefix}{_value(node)}")
        return

    loc = getattr(node, "loc", None)
    out.append(f"{ind}{prefix}{node.__class__.__name__}" + (f" {_span(loc)}" if loc else ""))
    for f in fields(node):
        if f.name == "loc":
            continue
        val = getattr(node, f.name)
        if is_dataclass(val) and not isinstance(val, Span):
            _pp(val, indent + 1, out, f.name)
        elif isinstance(val, list) and val and is_dataclass(val[0]):
            out.append(f"{ind}  {f.name}:")
            for child in val:
                _pp(child, indent + 2, out)
        elif val is not None and val != "" and val != []:
            # Unset optionals and empty slices only add noise
            out.append(f"{ind}  {f.name}: {_value(val)}")


def dump_ast(node: Any) -> str:
    """Indented outline of a SourceFile (or any of its nodes)."""
    out: List[str] = []
    _pp(node, 0, out)
    return "\n".join(out)
