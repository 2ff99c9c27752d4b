"""Expansion orchestration: parse, check, synthesize, emit, splice."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from errgen.backend.rust_emitter import RustEmitter
from errgen.backend.synthesizer import synthesize
from errgen.compiler.config import ErrgenConfig
from errgen.internals.parse_errors import handle_parse_exception
from errgen.internals.parser import parse_to_ast
from errgen.internals.report import Reporter
from errgen.semantics.ast import AnnotatedItem, SourceFile
from errgen.semantics.passes.attribute_check import AttributeCheckPass


@dataclass
class Expansion:
    """Outcome of expanding one source file.

    `text` is None whenever an error was reported: generation is all or
    nothing.
    """
    text: Optional[str]
    reporter: Reporter
    error_types: List[str] = field(default_factory=list)
    ast: Optional[SourceFile] = None

    @property
    def exit_code(self) -> int:
        """0=success, 1=warnings, 2=errors."""
        if self.reporter.has_errors:
            return 2
        if self.reporter.has_warnings:
            return 1
        return 0


class Splicer:
    """Replaces source ranges, nested replacements applied inside outer ones."""

    def __init__(self, source: str):
        self.source = source
        self.edits: List[Tuple[int, int, str]] = []

    def replace(self, start: int, end: int, text: str) -> None:
        self.edits.append((start, end, text))

    def text(self, start: int, end: int) -> str:
        """Source[start:end] with every replacement inside that range applied."""
        out: List[str] = []
        pos = start
        for s, e, t in sorted(self.edits, key=lambda edit: (edit[0], -edit[1])):
            # Outside the range, or inside a replacement already applied
            if s < pos or e > end:
                continue
            out.append(self.source[pos:s])
            out.append(t)
            pos = e
        out.append(self.source[pos:end])
        return "".join(out)


def expand_item(item: AnnotatedItem, splicer: Splicer, config: ErrgenConfig) -> Tuple[str, str]:
    """(error type name, expansion text) for one checked annotated function."""
    fn = item.function
    if fn.ret is not None:
        head = splicer.text(fn.sig_start, fn.ret_start)
        tail = splicer.text(fn.ret_end, fn.body_end)
    else:
        head = splicer.text(fn.sig_start, fn.params_end)
        tail = splicer.text(fn.params_end, fn.body_end)

    error_type, rewritten = synthesize(item.declaration, fn, head, tail, derives=config.derive)
    emitter = RustEmitter(indent_width=config.indent, base_indent=item.indent)
    return error_type.name, emitter.emit(error_type, rewritten)


def expand_source(source: str, config: Optional[ErrgenConfig] = None,
                  filename: str = "<input>", dump_parse: bool = False,
                  dump_ast: bool = False) -> Expansion:
    """Expand every annotated function in a Rust source text.

    Args:
        source: Rust source text.
        config: Expansion settings (defaults when None).
        filename: Name used in diagnostics.
        dump_parse: Print the raw Lark token tree.
        dump_ast: Print the collected annotated items.

    Returns:
        Expansion with the new source text, or text None on errors.
    """
    config = config or ErrgenConfig()
    reporter = Reporter(source=source, filename=filename)

    try:
        ast, _tree = parse_to_ast(source, attribute=config.attribute, dump_parse=dump_parse)
    except Exception as exc:
        if handle_parse_exception(exc, reporter):
            return Expansion(text=None, reporter=reporter)
        raise

    if dump_ast:
        from errgen.frontend.ast_printer import dump_ast as _dump
        print(_dump(ast))
        print()

    AttributeCheckPass(
        reporter,
        attribute=config.attribute,
        malformed=config.malformed,
        validate_variants=config.validate_variants,
    ).run(ast)
    if reporter.has_errors:
        return Expansion(text=None, reporter=reporter, ast=ast)

    splicer = Splicer(source)
    names = {}
    # Innermost first so outer bodies pick up nested expansions
    for item in sorted(ast.items, key=lambda it: it.end_pos - it.start_pos):
        name, text = expand_item(item, splicer, config)
        splicer.replace(item.start_pos, item.end_pos, text)
        names[item.start_pos] = name

    return Expansion(
        text=splicer.text(0, len(source)),
        reporter=reporter,
        error_types=[names[it.start_pos] for it in ast.items],
        ast=ast,
    )
