"""Main ASTBuilder orchestrator for errgen.

Walks the Lark token trees of a Rust source file and collects every item
that carries the expansion attribute, at any nesting depth (modules, impl
blocks, function bodies). The builder delegates to:

- Attribute recognition and argument extraction: declarations.attributes
- Function splitting: declarations.functions
- Utilities: ast_builder.utils
"""
from __future__ import annotations
import re
from typing import List, Optional, Tuple

from lark import Tree, Token

from errgen.semantics.ast import AnnotatedItem, SourceFile
from errgen.internals.report import span_of
from errgen.semantics.ast_builder.declarations import attributes, functions
from errgen.semantics.ast_builder.utils.tree_navigation import (
    TokenTree, end_of, inner, is_group, is_tok, start_of,
)

_LEADING_WS = re.compile(r"[ \t]*")


class ASTBuilder:
    def __init__(self, source: str, attribute: str = "errors"):
        self.source = source
        self.attribute = attribute

    def build(self, tree: Tree) -> SourceFile:
        """Build SourceFile AST from the token tree of a whole file."""
        assert isinstance(tree, Tree) and tree.data == "start"
        items: List[AnnotatedItem] = []
        self._scan(tree.children, items)
        items.sort(key=lambda it: it.start_pos)
        return SourceFile(loc=span_of(tree), items=items)

    def describe(self, node: TokenTree) -> str:
        """Short human description of a token tree for diagnostics."""
        if isinstance(node, Token):
            return str(node)
        return {"paren": "(...)", "bracket": "[...]", "brace": "{...}"}.get(node.data, node.data)

    # ------------------------
    # Scanning
    # ------------------------

    def _scan(self, tts: List[TokenTree], out: List[AnnotatedItem]) -> None:
        i = 0
        while i < len(tts):
            run_end = self._attribute_run(tts, i)
            if run_end > i:
                item, next_i = self._annotated_item(tts, i, run_end)
                if item is not None:
                    # Annotated functions nested in this item's body
                    for node in tts[run_end:next_i]:
                        if is_group(node):
                            self._scan(inner(node), out)
                    out.append(item)
                    i = max(next_i, run_end)
                    continue
                i = run_end
                continue

            node = tts[i]
            if is_group(node):
                self._scan(inner(node), out)
            elif not isinstance(node, Token):
                from errgen.internals.errors import raise_internal_error
                raise_internal_error("CE0001", node=getattr(node, "data", node))
            i += 1

    def _attribute_run(self, tts: List[TokenTree], i: int) -> int:
        """Index just past a run of outer attributes and doc comments at i."""
        while i < len(tts):
            if is_tok(tts[i], "DOC_COMMENT"):
                i += 1
            elif is_tok(tts[i], "POUND") and i + 1 < len(tts) and is_group(tts[i + 1], "bracket"):
                i += 2
            else:
                break
        return i

    def _annotated_item(self, tts: List[TokenTree], run_start: int,
                        run_end: int) -> Tuple[Optional[AnnotatedItem], int]:
        """Build the AnnotatedItem for an attribute run carrying the attribute."""
        attr_idx: Optional[int] = None
        args: Optional[Tree] = None
        malformed = False
        attrs: List[str] = []

        i = run_start
        while i < run_end:
            if is_tok(tts[i], "DOC_COMMENT"):
                attrs.append(self._text(tts[i], tts[i]))
                i += 1
                continue
            bracket = tts[i + 1]
            matches = False
            if attr_idx is None:
                try:
                    matches, args = attributes.attribute_arguments(bracket, self.attribute)
                except attributes.MalformedAttribute:
                    matches, malformed = True, True
            if matches:
                attr_idx = i
            else:
                attrs.append(self._text(tts[i], bracket))
            i += 2

        if attr_idx is None:
            return None, run_end

        shape = functions.split_item(tts, run_end, attrs, self)
        start = start_of(tts[run_start])
        end = end_of(tts[shape.end - 1]) if shape.end > run_end else end_of(tts[run_end - 1])

        declaration = None
        if not malformed:
            declaration = attributes.extract_declaration(args, self.source)

        attr_node = tts[attr_idx + 1]
        item = AnnotatedItem(
            loc=span_of(tts[run_end]) if run_end < len(tts) else span_of(attr_node),
            declaration=declaration,
            function=shape.function,
            start_pos=start,
            end_pos=end,
            indent=self._indent_at(start),
            found=shape.found,
            bodiless=shape.bodiless,
            attr_loc=self._span_between(tts[attr_idx], attr_node),
        )
        return item, shape.end

    # ------------------------
    # Source helpers
    # ------------------------

    def _text(self, first: TokenTree, last: TokenTree) -> str:
        return self.source[start_of(first):end_of(last)]

    def _span_between(self, first: TokenTree, last: TokenTree):
        a, b = span_of(first), span_of(last)
        if a is None or b is None:
            return a or b
        a.end_line, a.end_col = b.end_line, b.end_col
        return a

    def _indent_at(self, pos: int) -> str:
        line_start = self.source.rfind("\n", 0, pos) + 1
        return _LEADING_WS.match(self.source, line_start).group(0)
