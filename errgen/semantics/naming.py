"""Variant and type naming for synthesized error types.

Variant names are derived from the source error's path:

    std::io::Error           -> StdIo
    bincode::Error           -> Bincode
    std::num::ParseIntError  -> StdNumParseInt

Every segment has each "Error" substring removed, is camel-cased, and the
segments are concatenated in path order. An explicit alias replaces the
derived name verbatim.

Camel-casing matches the `heck` crate's CamelCase so that names agree with
what the Rust tooling around the generated code produces:

    serde_json -> SerdeJson
    HTTPServer -> HttpServer
    utf8       -> Utf8
"""
from __future__ import annotations
import re
from typing import Dict, List, Tuple

from errgen.semantics.ast import DeclaredError, PathRef

ERROR_WORD = "Error"

# Rust identifiers: XID_start/underscore then XID_continue, or a raw identifier
_IDENT = re.compile(r"^(r#)?[^\W\d]\w*$")
_RUST_KEYWORDS = frozenset({
    "as", "break", "const", "continue", "crate", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
    "super", "trait", "true", "type", "unsafe", "use", "where", "while",
    "async", "await", "dyn", "abstract", "become", "box", "do", "final",
    "macro", "override", "priv", "typeof", "unsized", "virtual", "yield", "try",
})


def split_words(text: str) -> List[str]:
    """Split text into words at the same boundaries heck uses.

    Boundaries are any non-alphanumeric character, a lowercase letter
    followed by an uppercase one, and the last capital of an uppercase run
    that is followed by a lowercase letter (HTTPServer -> HTTP, Server).
    """
    words: List[str] = []
    for chunk in re.split(r"[^\w]|_", text):
        if not chunk:
            continue
        init = 0
        mode = ""  # "", "lower" or "upper"
        for i, c in enumerate(chunk):
            if i + 1 == len(chunk):
                words.append(chunk[init:])
                break
            nxt = chunk[i + 1]
            if c.islower():
                next_mode = "lower"
            elif c.isupper():
                next_mode = "upper"
            else:
                next_mode = mode
            if next_mode == "lower" and nxt.isupper():
                words.append(chunk[init:i + 1])
                init = i + 1
                mode = ""
            elif mode == "upper" and c.isupper() and nxt.islower():
                words.append(chunk[init:i])
                init = i
                mode = ""
            else:
                mode = next_mode
    return [w for w in words if w]


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_camel_case(text: str) -> str:
    """UpperCamelCase: read_int -> ReadInt, ParseInt -> ParseInt."""
    return "".join(capitalize(w) for w in split_words(text))


def clean_segment(segment: str) -> str:
    """Drop every "Error" from a path segment, then camel-case what is left."""
    return to_camel_case(segment.replace(ERROR_WORD, ""))


def derive_variant_name(path: PathRef) -> str:
    """Variant name of a source error path without alias."""
    return "".join(clean_segment(s) for s in path.segments)


def variant_name(entry: DeclaredError) -> str:
    """The alias verbatim when given, the derived name otherwise."""
    if entry.alias is not None:
        return entry.alias
    return derive_variant_name(entry.path)


def error_type_name(fn_name: str) -> str:
    """Name of the synthesized type for a function: read_int -> ReadIntError."""
    return f"{to_camel_case(fn_name)}{ERROR_WORD}"


def is_valid_identifier(name: str) -> bool:
    """True if name can be used as a Rust enum variant."""
    if not _IDENT.match(name):
        return False
    if name.startswith("r#"):
        return name[2:] not in ("crate", "self", "super", "Self")
    return name not in _RUST_KEYWORDS and name != "_"


def find_collisions(names: List[Tuple[str, PathRef]]) -> Dict[str, List[PathRef]]:
    """Variant names used by more than one entry, with the paths using them."""
    seen: Dict[str, List[PathRef]] = {}
    for name, path in names:
        seen.setdefault(name, []).append(path)
    return {name: paths for name, paths in seen.items() if len(paths) > 1}
