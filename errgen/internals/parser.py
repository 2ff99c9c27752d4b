"""Lark parser setup and AST construction."""
from __future__ import annotations

from pathlib import Path

from lark import Lark, UnexpectedInput

from errgen.semantics.ast_builder import ASTBuilder

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"


def improve_parse_error(e: UnexpectedInput) -> str:
    """Improve tokenizer error messages for common cases."""
    error_text = str(e).strip()
    first_line = error_text.split('\n')[0] if error_text else "unexpected input"

    # An unmatched closer or an unterminated group ends the token tree early
    token = getattr(e, "token", None)
    token_type = getattr(token, "type", None)
    if token_type in ("RPAR", "RSQB", "RBRACE"):
        return f"unbalanced '{token}' at line {e.line}, column {e.column}"
    if token_type == "$END":
        return "unexpected end of input, a delimiter is never closed"

    return first_line


def parse_to_ast(src: str, attribute: str = "errors", dump_parse: bool = False):
    """Parse Rust source into token trees and collect annotated items.

    Returns:
        Tuple of (ast, parse_tree).
    """
    kwargs = dict(
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=False,
        lexer="basic",
    )
    parser = Lark.open(str(GRAMMAR_PATH), **kwargs)
    tree = parser.parse(src)
    if dump_parse:
        print(tree.pretty())

    ast_builder = ASTBuilder(src, attribute=attribute)
    return ast_builder.build(tree), tree
