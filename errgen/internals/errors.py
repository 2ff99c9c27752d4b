# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from errgen.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL   = "general"
    PARSE     = "parse"
    CONFIG    = "config"
    ATTRIBUTE = "attribute"
    ITEM      = "item"
    NAME      = "name"
    INTERNAL  = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span)
    else:
        r.warn(em.code, text, span)

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal generator errors.

    Internal errors indicate bugs in errgen itself, not problems in the
    Rust source being expanded.

    Args:
        code: Error code (e.g., "CE0001")
        **kwargs: Format parameters for the error message

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal / input errors - CE0xxx range
_add(ErrorMessage("CE0001", Severity.ERROR,
    "unexpected token tree node '{node}'",
    Category.INTERNAL, "The token tree has a shape the scanner does not know (bug)."))

_add(ErrorMessage("CE0002", Severity.ERROR,
    "cannot tokenize source: {detail}",
    Category.PARSE, "The lexer met a character sequence that is not Rust, or delimiters do not balance."))

_add(ErrorMessage("CE0003", Severity.ERROR,
    "invalid configuration: {detail}",
    Category.CONFIG, "errgen.toml or a command line option holds an unsupported value."))

# Attribute usage - CE1xxx range
_add(ErrorMessage("CE1001", Severity.ERROR,
    "the #[{attr}] attribute can only be used on functions, found '{found}'",
    Category.ITEM, "Only `fn` items can be annotated; generation aborts without output."))

_add(ErrorMessage("CE1002", Severity.ERROR,
    "the #[{attr}] attribute needs a function with a body, '{name}' has none",
    Category.ITEM, "Declarations without a block (trait methods, extern items) cannot be rewritten."))

_add(ErrorMessage("CE1003", Severity.ERROR,
    "malformed #[{attr}] argument '{arg}', expected a path or path = \"Alias\"",
    Category.ATTRIBUTE, "Raised instead of dropping the argument when malformed = \"error\"."))

_add(ErrorMessage("CW1003", Severity.WARNING,
    "ignoring malformed #[{attr}] argument '{arg}'",
    Category.ATTRIBUTE, "Reported for each dropped argument when malformed = \"warn\"."))

_add(ErrorMessage("CE1004", Severity.ERROR,
    "variant '{variant}' of '{enum}' is declared more than once ({paths})",
    Category.NAME, "Two source errors derive or alias to the same variant name. Use an alias to disambiguate."))

_add(ErrorMessage("CE1005", Severity.ERROR,
    "'{variant}' is not a valid variant name for '{path}'",
    Category.NAME, "Derived names can come out empty, e.g. for a bare `Error` path. Use an alias."))

_add(ErrorMessage("CE1006", Severity.ERROR,
    "malformed attribute, expected #[{attr}(...)] or #[{attr}]",
    Category.ATTRIBUTE, "The attribute arguments must be a parenthesized list."))
