"""Validation of annotated items before expansion.

Reports the fatal usage errors (attribute on something that is not a
function with a body, malformed attribute) and applies the configured
policies for dropped arguments and variant names.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from errgen.internals import errors as er
from errgen.internals.report import Reporter, Span
from errgen.semantics.ast import AnnotatedItem, DeclaredError, SourceFile
from errgen.semantics.naming import (
    error_type_name, find_collisions, is_valid_identifier, variant_name,
)


class AttributeCheckPass:
    def __init__(self, reporter: Reporter, attribute: str = "errors",
                 malformed: str = "drop", validate_variants: bool = False):
        self.reporter = reporter
        self.attribute = attribute
        self.malformed = malformed
        self.validate_variants = validate_variants

    def run(self, ast: SourceFile) -> None:
        for item in ast.items:
            self._check_item(item)

    def _emit(self, msg: er.ErrorMessage, span: Optional[Span], **kwargs) -> None:
        er.emit(self.reporter, msg, span, **kwargs)

    def _check_item(self, item: AnnotatedItem) -> None:
        if item.declaration is None:
            self._emit(er.ERR.CE1006, item.attr_loc, attr=self.attribute)
            return

        if item.function is None:
            if item.bodiless:
                self._emit(er.ERR.CE1002, item.loc, attr=self.attribute, name=item.found)
            else:
                self._emit(er.ERR.CE1001, item.loc, attr=self.attribute, found=item.found)
            return

        for dropped in item.declaration.dropped:
            if self.malformed == "warn":
                self._emit(er.ERR.CW1003, dropped.loc, attr=self.attribute, arg=dropped.text)
            elif self.malformed == "error":
                self._emit(er.ERR.CE1003, dropped.loc, attr=self.attribute, arg=dropped.text)

        if self.validate_variants:
            self._check_variants(item)

    def _check_variants(self, item: AnnotatedItem) -> None:
        enum = error_type_name(item.function.name)
        named: List[Tuple[str, DeclaredError]] = [
            (variant_name(entry), entry) for entry in item.declaration.entries
        ]

        for name, entry in named:
            if not is_valid_identifier(name):
                self._emit(er.ERR.CE1005, entry.loc, variant=name, path=str(entry.path))

        for name, paths in find_collisions([(n, e.path) for n, e in named]).items():
            self._emit(er.ERR.CE1004, paths[1].loc, variant=name, enum=enum,
                          paths=", ".join(str(p) for p in paths))
