# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from errgen.internals.report import Span

# === Core node base ===

@dataclass
class Node:
    loc: Optional[Span]

# === Attribute arguments ===

@dataclass
class PathRef(Node):
    """Qualified reference to a source error type (e.g. std::io::Error)."""
    segments: List[str]
    leading_colon: bool = False      # True for ::std::io::Error

    def __str__(self) -> str:
        prefix = "::" if self.leading_colon else ""
        return prefix + "::".join(self.segments)

@dataclass
class DeclaredError(Node):
    path: PathRef
    alias: Optional[str] = None      # Explicit variant name from path = "Alias"

@dataclass
class DroppedArg(Node):
    text: str                        # Source text of the rejected argument

@dataclass
class Declaration(Node):
    """Ordered source error entries of one attribute, in declaration order."""
    entries: List[DeclaredError] = field(default_factory=list)
    dropped: List[DroppedArg] = field(default_factory=list)

# === Items ===

@dataclass
class FuncItem(Node):
    """A function located by source offsets.

    Only the return type changes on rewrite, so the item is kept as offsets
    into the source and sliced back out around the return type.
    """
    name: str
    vis: str                         # "pub", "pub(crate)", "" for private
    attrs: List[str]                 # Other outer attributes and doc comments
    sig_start: int                   # Offset of the first token after the attributes
    params_end: int                  # Offset just past the parameter list's ')'
    ret: Optional[str]               # Return type text, None when not declared
    ret_start: Optional[int]
    ret_end: Optional[int]
    body_end: int                    # Offset just past the body's closing brace

@dataclass
class AnnotatedItem(Node):
    """An item carrying the expansion attribute.

    `function` is None when the attribute sits on something that is not a
    function with a body; `found` then names what was found instead.
    """
    declaration: Optional[Declaration]   # None when the attribute itself is malformed
    function: Optional[FuncItem]
    start_pos: int                       # Source range replaced by the expansion
    end_pos: int
    indent: str = ""
    found: str = ""
    bodiless: bool = False               # A fn declared without a block
    attr_loc: Optional[Span] = None

@dataclass
class SourceFile(Node):
    items: List[AnnotatedItem]       # Annotated items, in source order
