"""Function item splitting.

A function is taken apart into verbatim source slices so that the
rewritten function keeps everything it had, only its return type changes:

    [vis] [const] [async] [unsafe] [extern "abi"] fn NAME [<...>] (...) [-> RET] [where ...] { ... }
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from lark import Token

from errgen.semantics.ast import FuncItem
from errgen.semantics.ast_builder.utils.tree_navigation import (
    TokenTree, end_of, is_group, is_tok, start_of,
)
from errgen.internals.report import span_of

if TYPE_CHECKING:
    from errgen.semantics.ast_builder.builder import ASTBuilder

QUALIFIERS = ("const", "async", "unsafe", "default")


@dataclass
class ItemShape:
    """Result of splitting the tokens after an attribute run."""
    end: int                          # Index just past the item's last token tree
    function: Optional[FuncItem]
    found: str = ""                   # What the item is when it is not a usable function
    bodiless: bool = False            # A fn declaration without a block


def skip_visibility(tts: List[TokenTree], pos: int) -> int:
    """Skip `pub`, `pub(crate)`, `pub(in path)`."""
    if pos < len(tts) and is_tok(tts[pos], "IDENT", "pub"):
        pos += 1
        if pos < len(tts) and is_group(tts[pos], "paren"):
            pos += 1
    return pos


def skip_qualifiers(tts: List[TokenTree], pos: int) -> int:
    while pos < len(tts):
        if isinstance(tts[pos], Token) and tts[pos].type == "IDENT" and str(tts[pos]) in QUALIFIERS:
            # `const NAME: T = ...;` is a constant item, not a qualifier
            if str(tts[pos]) == "const" and not _next_is_fn_part(tts, pos + 1):
                return pos
            pos += 1
        elif is_tok(tts[pos], "IDENT", "extern"):
            pos += 1
            if pos < len(tts) and is_tok(tts[pos], "STRING"):
                pos += 1
        else:
            return pos
    return pos


def _next_is_fn_part(tts: List[TokenTree], pos: int) -> bool:
    return pos < len(tts) and isinstance(tts[pos], Token) and tts[pos].type == "IDENT" and \
        str(tts[pos]) in QUALIFIERS + ("extern", "fn")


def skip_generics(tts: List[TokenTree], pos: int) -> int:
    """Skip a balanced <...> list starting at pos (no-op without one)."""
    if pos >= len(tts) or not is_tok(tts[pos], "LT"):
        return pos
    depth = 0
    while pos < len(tts):
        if is_tok(tts[pos], "LT"):
            depth += 1
        elif is_tok(tts[pos], "GT"):
            depth -= 1
            if depth == 0:
                return pos + 1
        pos += 1
    return pos


def scan_until_body(tts: List[TokenTree], pos: int, stop_words=("where",)) -> int:
    """Advance to the body block, a `;`, or a stop word, outside angle brackets.

    Braces inside <...> belong to const generic arguments, not to the body.
    """
    depth = 0
    while pos < len(tts):
        node = tts[pos]
        if is_tok(node, "LT"):
            depth += 1
        elif is_tok(node, "GT") and depth > 0:
            depth -= 1
        elif depth == 0:
            if is_group(node, "brace") or is_tok(node, "SEMI"):
                return pos
            if isinstance(node, Token) and node.type == "IDENT" and str(node) in stop_words:
                return pos
        pos += 1
    return pos


def item_end(tts: List[TokenTree], pos: int) -> int:
    """End of an arbitrary item: its first top-level `;` or `{...}`."""
    stop = scan_until_body(tts, pos, stop_words=())
    return min(stop + 1, len(tts))


def split_item(tts: List[TokenTree], pos: int, attrs: List[str],
               ast_builder: 'ASTBuilder') -> ItemShape:
    """Split the item starting at tts[pos] into a FuncItem when it is a function."""
    src = ast_builder.source
    if pos >= len(tts):
        return ItemShape(end=pos, function=None, found="end of block")

    head_start = pos
    pos = skip_visibility(tts, pos)
    vis = src[start_of(tts[head_start]):end_of(tts[pos - 1])] if pos > head_start else ""
    pos = skip_qualifiers(tts, pos)

    if pos >= len(tts) or not is_tok(tts[pos], "IDENT", "fn"):
        found = ast_builder.describe(tts[pos]) if pos < len(tts) else "end of block"
        return ItemShape(end=item_end(tts, pos), function=None, found=found)

    name_tok = tts[pos + 1] if pos + 1 < len(tts) else None
    if not is_tok(name_tok, "IDENT"):
        return ItemShape(end=item_end(tts, pos), function=None, found="fn without a name")
    name = str(name_tok)

    pos = skip_generics(tts, pos + 2)
    if pos >= len(tts) or not is_group(tts[pos], "paren"):
        return ItemShape(end=item_end(tts, pos), function=None, found=f"fn {name} without parameters")
    params_end = end_of(tts[pos])
    pos += 1

    ret: Optional[str] = None
    ret_start: Optional[int] = None
    ret_end: Optional[int] = None
    if pos < len(tts) and is_tok(tts[pos], "ARROW"):
        first = pos + 1
        pos = scan_until_body(tts, first)
        if pos > first:
            ret_start, ret_end = start_of(tts[first]), end_of(tts[pos - 1])
            ret = src[ret_start:ret_end]

    # The where-clause stays in the verbatim text after the return type
    if pos < len(tts) and is_tok(tts[pos], "IDENT", "where"):
        pos = scan_until_body(tts, pos + 1, stop_words=())

    if pos >= len(tts) or not is_group(tts[pos], "brace"):
        # `fn f();` declares without defining
        return ItemShape(end=min(pos + 1, len(tts)), function=None, found=name, bodiless=True)

    func = FuncItem(
        loc=span_of(tts[head_start]),
        name=name,
        vis=vis,
        attrs=attrs,
        sig_start=start_of(tts[head_start]),
        params_end=params_end,
        ret=ret,
        ret_start=ret_start,
        ret_end=ret_end,
        body_end=end_of(tts[pos]),
    )
    return ItemShape(end=pos + 1, function=func)
