"""Tree navigation utilities for traversing Lark token trees."""
from __future__ import annotations
from typing import List, Optional, Union

from lark import Tree, Token

TokenTree = Union[Tree, Token]

GROUPS = ("paren", "bracket", "brace")


def is_tok(node: object, type_: str, value: Optional[str] = None) -> bool:
    """True if node is a token of the given type (and value, when given)."""
    if not isinstance(node, Token) or node.type != type_:
        return False
    return value is None or str(node) == value


def is_group(node: object, data: Optional[str] = None) -> bool:
    """True if node is a delimiter group (optionally of one kind)."""
    if not isinstance(node, Tree) or node.data not in GROUPS:
        return False
    return data is None or node.data == data


def inner(group: Tree) -> List[TokenTree]:
    """Children of a group without its opening and closing delimiters."""
    if not is_group(group):
        raise NotImplementedError(f"inner: expected a delimiter group, got '{getattr(group, 'data', group)}'")
    return list(group.children[1:-1])


def start_of(node: TokenTree) -> int:
    """Source offset where node begins."""
    if isinstance(node, Token):
        return node.start_pos
    return start_of(node.children[0])


def end_of(node: TokenTree) -> int:
    """Source offset just past the end of node."""
    if isinstance(node, Token):
        return node.end_pos
    return end_of(node.children[-1])


def split_top_level(children: List[TokenTree], sep: str = "COMMA") -> List[List[TokenTree]]:
    """Split a flat token tree list at separator tokens.

    Groups are already nested, so every separator seen here is top-level.
    """
    parts: List[List[TokenTree]] = [[]]
    for ch in children:
        if is_tok(ch, sep):
            parts.append([])
        else:
            parts[-1].append(ch)
    return parts
