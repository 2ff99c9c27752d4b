"""
AST Builder module for errgen.

Exports:
    ASTBuilder: Main class collecting annotated items from Lark token trees
    extract_declaration: Attribute argument list -> ordered Declaration
    MalformedAttribute: Raised for attribute shapes other than #[name(...)]
"""
# Main ASTBuilder class
from errgen.semantics.ast_builder.builder import ASTBuilder

from errgen.semantics.ast_builder.declarations.attributes import (
    MalformedAttribute,
    extract_declaration,
)

__all__ = [
    'ASTBuilder',
    'MalformedAttribute',
    'extract_declaration',
]
