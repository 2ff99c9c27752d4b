"""Rust source emission for synthesized error types.

For `#[errors(std::io::Error)] fn load() -> u8` the emitter writes:

    #[derive(Debug)]
    enum LoadError {
        StdIo(std::io::Error),
    }

    #[automatically_derived]
    impl core::fmt::Display for LoadError { ... }

    #[automatically_derived]
    impl std::convert::From<std::io::Error> for LoadError { ... }

    #[automatically_derived]
    impl std::error::Error for LoadError {}

followed by the rewritten function. Generated lines are indented to the
level of the original item; function text is copied as it was.
"""
from __future__ import annotations
from typing import List

from errgen.backend.synthesizer import RewrittenFunction, SynthesizedErrorType

AUTO = "#[automatically_derived]"


class RustEmitter:
    def __init__(self, indent_width: int = 4, base_indent: str = ""):
        self.unit = " " * indent_width
        self.base = base_indent

    def _ind(self, level: int) -> str:
        return self.unit * level

    def emit_enum(self, t: SynthesizedErrorType) -> List[str]:
        vis = f"{t.vis} " if t.vis else ""
        lines = [f"#[derive({', '.join(t.derives)})]"]
        if t.is_empty:
            lines.append(f"{vis}enum {t.name} {{}}")
            return lines
        lines.append(f"{vis}enum {t.name} {{")
        for v in t.variants:
            lines.append(f"{self._ind(1)}{v.name}({v.source_type}),")
        lines.append("}")
        return lines

    def emit_display(self, t: SynthesizedErrorType) -> List[str]:
        lines = [
            AUTO,
            f"impl core::fmt::Display for {t.name} {{",
            f"{self._ind(1)}fn fmt(&self, f: &mut core::fmt::Formatter<'_>) -> core::fmt::Result {{",
        ]
        if t.is_empty:
            # No arms: an empty enum has no values to format
            lines.append(f"{self._ind(2)}match *self {{}}")
        else:
            lines.append(f"{self._ind(2)}match self {{")
            for v in t.variants:
                lines.append(f"{self._ind(3)}Self::{v.name}(e) => write!(f, \"{{}}\", e),")
            lines.append(f"{self._ind(2)}}}")
        lines.append(f"{self._ind(1)}}}")
        lines.append("}")
        return lines

    def emit_from_impls(self, t: SynthesizedErrorType) -> List[List[str]]:
        blocks = []
        for v in t.variants:
            blocks.append([
                AUTO,
                f"impl std::convert::From<{v.source_type}> for {t.name} {{",
                f"{self._ind(1)}fn from(e: {v.source_type}) -> Self {{",
                f"{self._ind(2)}Self::{v.name}(e)",
                f"{self._ind(1)}}}",
                "}",
            ])
        return blocks

    def emit_error_marker(self, t: SynthesizedErrorType) -> List[str]:
        return [AUTO, f"impl std::error::Error for {t.name} {{}}"]

    def emit_function(self, f: RewrittenFunction) -> List[str]:
        return list(f.attrs) + [f.render()]

    def emit(self, t: SynthesizedErrorType, f: RewrittenFunction) -> str:
        """Full expansion text, without indentation before its first line."""
        blocks: List[List[str]] = [self.emit_enum(t), self.emit_display(t)]
        blocks.extend(self.emit_from_impls(t))
        blocks.append(self.emit_error_marker(t))
        blocks.append(self.emit_function(f))

        out: List[str] = []
        for block in blocks:
            if out:
                out.append("")
            out.extend(f"{self.base}{line}" for line in block)
        text = "\n".join(line if line.strip() else "" for line in out)
        return text[len(self.base):]
