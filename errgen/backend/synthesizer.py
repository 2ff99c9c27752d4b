"""Error type synthesis.

Turns a Declaration and the function it annotates into the pieces the
emitter renders: the combined error enum and the rewritten function.
Synthesis never looks inside the function body, it only carries the text.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from errgen.semantics.ast import Declaration, FuncItem, PathRef
from errgen.semantics.naming import error_type_name, variant_name

UNIT = "()"
RESULT_PATH = "std::result::Result"
DEFAULT_DERIVES: Tuple[str, ...] = ("Debug",)


@dataclass(frozen=True)
class ErrorVariant:
    name: str
    path: PathRef

    @property
    def source_type(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class SynthesizedErrorType:
    """One enum variant per Declaration entry, in Declaration order."""
    name: str
    vis: str
    variants: Tuple[ErrorVariant, ...]
    derives: Tuple[str, ...] = DEFAULT_DERIVES

    @property
    def is_empty(self) -> bool:
        return not self.variants


@dataclass(frozen=True)
class RewrittenFunction:
    """The original function text around its new return type.

    `head` runs from the first qualifier to where the return type goes,
    `tail` from there through the closing brace of the body.
    """
    attrs: Tuple[str, ...]
    head: str
    ok_type: str
    error_type: str
    tail: str
    arrow: str = ""              # " -> " when the original declared no return type

    @property
    def return_type(self) -> str:
        return f"{RESULT_PATH}<{self.ok_type}, {self.error_type}>"

    def render(self) -> str:
        return f"{self.head}{self.arrow}{self.return_type}{self.tail}"


def normalize_derives(derives: Optional[Sequence[str]]) -> Tuple[str, ...]:
    """Derive list with Debug first; std::error::Error requires Debug."""
    out = ["Debug"]
    for d in derives or ():
        if d not in out:
            out.append(d)
    return tuple(out)


def synthesize_error_type(declaration: Declaration, function: FuncItem,
                          derives: Optional[Sequence[str]] = None) -> SynthesizedErrorType:
    variants = tuple(
        ErrorVariant(name=variant_name(entry), path=entry.path)
        for entry in declaration.entries
    )
    return SynthesizedErrorType(
        name=error_type_name(function.name),
        vis=function.vis,
        variants=variants,
        derives=normalize_derives(derives),
    )


def rewrite_function(function: FuncItem, error_type: SynthesizedErrorType,
                     head: str, tail: str) -> RewrittenFunction:
    """Wrap the function's return type in Result<_, error_type>.

    Args:
        function: The function being rewritten.
        error_type: Its synthesized error type.
        head: Source text from the signature start up to the return type
            (or up to the end of the parameters when none is declared).
        tail: Source text after the return type through the end of the body.
    """
    return RewrittenFunction(
        attrs=tuple(function.attrs),
        head=head,
        ok_type=function.ret if function.ret is not None else UNIT,
        error_type=error_type.name,
        tail=tail,
        arrow="" if function.ret is not None else " -> ",
    )


def synthesize(declaration: Declaration, function: FuncItem, head: str, tail: str,
               derives: Optional[Sequence[str]] = None) -> Tuple[SynthesizedErrorType, RewrittenFunction]:
    """Synthesize the error type for an annotated function and rewrite it."""
    error_type = synthesize_error_type(declaration, function, derives)
    return error_type, rewrite_function(function, error_type, head, tail)
