"""Expansion attribute recognition and argument extraction.

The attribute arguments are a comma separated list of entries::

    #[errors(std::io::Error, bincode::Error = "Codec")]

A bare path yields an entry without alias, ``path = "Alias"`` an entry
whose variant name is the alias verbatim. ``path = <other literal>`` keeps
the entry with a derived name. Every other shape is dropped and recorded on
the Declaration so the caller can decide whether that is worth a diagnostic.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from lark import Tree, Token

from errgen.semantics.ast import Declaration, DeclaredError, DroppedArg, PathRef
from errgen.semantics.ast_builder.utils.tree_navigation import (
    TokenTree, end_of, inner, is_group, is_tok, split_top_level, start_of,
)
from errgen.semantics.ast_builder.utils.string_processing import parse_string_token
from errgen.internals.report import Span, span_of


class MalformedAttribute(Exception):
    """The expansion attribute is not #[name] or #[name(...)]."""


def _span_over(part: List[TokenTree]) -> Optional[Span]:
    first, last = span_of(part[0]), span_of(part[-1])
    if first is None or last is None:
        return None
    return Span(first.line, first.col, last.end_line, last.end_col)


def attribute_arguments(bracket: Tree, attribute: str) -> Tuple[bool, Optional[Tree]]:
    """Check whether an attribute bracket is the expansion attribute.

    Returns:
        (matches, args) where args is the argument paren group, or None
        for a bare #[name].

    Raises:
        MalformedAttribute: name matches but the arguments are not a paren group.
    """
    body = inner(bracket)
    if not body or not is_tok(body[0], "IDENT", attribute):
        return False, None
    # errgen::errors style paths name a different attribute
    if len(body) > 1 and is_tok(body[1], "PATH_SEP"):
        return False, None
    if len(body) == 1:
        return True, None
    if len(body) == 2 and is_group(body[1], "paren"):
        return True, body[1]
    raise MalformedAttribute(attribute)


def parse_path(part: List[TokenTree], pos: int = 0) -> Tuple[Optional[PathRef], int]:
    """Parse [::] IDENT (:: IDENT)* starting at pos.

    Returns:
        (path, next_pos), path is None if no path starts at pos.
    """
    start = pos
    leading = False
    if pos < len(part) and is_tok(part[pos], "PATH_SEP"):
        leading = True
        pos += 1
    segments: List[str] = []
    while pos < len(part) and is_tok(part[pos], "IDENT"):
        segments.append(str(part[pos]))
        pos += 1
        if pos + 1 < len(part) and is_tok(part[pos], "PATH_SEP") and is_tok(part[pos + 1], "IDENT"):
            pos += 1
            continue
        break
    if not segments:
        return None, start
    return PathRef(loc=_span_over(part[start:pos]), segments=segments, leading_colon=leading), pos


def _literal_alias(tok: TokenTree) -> Tuple[bool, Optional[str]]:
    """(is_literal, alias) for the value side of path = value."""
    if not isinstance(tok, Token):
        return False, None
    if tok.type in ("STRING", "RAW_STRING"):
        # Byte strings are literals, but not string literals
        if tok.startswith("b"):
            return True, None
        return True, parse_string_token(str(tok))
    if tok.type in ("NUMBER", "CHAR"):
        return True, None
    if tok.type == "IDENT" and str(tok) in ("true", "false"):
        return True, None
    return False, None


def parse_argument(part: List[TokenTree]) -> Optional[DeclaredError]:
    """Parse one attribute argument, None when it is not a usable entry."""
    path, pos = parse_path(part)
    if path is None:
        return None
    if pos == len(part):
        return DeclaredError(loc=_span_over(part), path=path)
    if pos + 2 == len(part) and is_tok(part[pos], "EQ"):
        is_literal, alias = _literal_alias(part[pos + 1])
        if is_literal:
            return DeclaredError(loc=_span_over(part), path=path, alias=alias)
    return None


def extract_declaration(args: Optional[Tree], source: str) -> Declaration:
    """Build the ordered Declaration from the attribute's argument group."""
    decl = Declaration(loc=span_of(args) if args is not None else None)
    if args is None:
        return decl

    for part in split_top_level(inner(args)):
        if not part:
            # Trailing comma
            continue
        entry = parse_argument(part)
        if entry is not None:
            decl.entries.append(entry)
        else:
            text = source[start_of(part[0]):end_of(part[-1])]
            decl.dropped.append(DroppedArg(loc=_span_over(part), text=text))
    return decl
