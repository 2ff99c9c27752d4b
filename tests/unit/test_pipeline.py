"""
Unit tests for whole-file expansion.
"""

import pytest

from errgen.compiler.pipeline import Splicer


READ_INT = """\
use std::fs;

#[errors(std::io::Error, std::num::ParseIntError)]
fn read_int(path: &str) -> i64 {
    let text = fs::read_to_string(path)?;
    Ok(text.trim().parse()?)
}
"""

READ_INT_EXPANDED = """\
use std::fs;

#[derive(Debug)]
enum ReadIntError {
    StdIo(std::io::Error),
    StdNumParseInt(std::num::ParseIntError),
}

#[automatically_derived]
impl core::fmt::Display for ReadIntError {
    fn fmt(&self, f: &mut core::fmt::Formatter<'_>) -> core::fmt::Result {
        match self {
            Self::StdIo(e) => write!(f, "{}", e),
            Self::StdNumParseInt(e) => write!(f, "{}", e),
        }
    }
}

#[automatically_derived]
impl std::convert::From<std::io::Error> for ReadIntError {
    fn from(e: std::io::Error) -> Self {
        Self::StdIo(e)
    }
}

#[automatically_derived]
impl std::convert::From<std::num::ParseIntError> for ReadIntError {
    fn from(e: std::num::ParseIntError) -> Self {
        Self::StdNumParseInt(e)
    }
}

#[automatically_derived]
impl std::error::Error for ReadIntError {}

fn read_int(path: &str) -> std::result::Result<i64, ReadIntError> {
    let text = fs::read_to_string(path)?;
    Ok(text.trim().parse()?)
}
"""


class TestExpandSource:
    """Test expansion of complete sources"""

    def test_case_study_read_int(self, expand):
        result = expand(READ_INT)
        assert result.exit_code == 0
        assert result.text == READ_INT_EXPANDED
        assert result.error_types == ["ReadIntError"]

    def test_source_without_attribute_unchanged(self, expand):
        source = "// nothing here\nfn main() {\n    println!(\"hi\");\n}\n"
        result = expand(source)
        assert result.text == source
        assert result.error_types == []

    def test_case_study_non_function_aborts(self, expand):
        result = expand("#[errors(std::io::Error)]\nstruct S;\n\n#[errors]\nfn ok() {}\n")
        assert result.text is None
        assert result.exit_code == 2
        assert result.reporter.codes() == ["CE1001"]

    def test_case_study_fully_malformed(self, expand):
        result = expand("#[errors(1, 2)]\nfn f() -> u8 { Ok(0) }\n")
        assert result.exit_code == 0
        assert "enum FError {}" in result.text
        assert "fn f() -> std::result::Result<u8, FError> { Ok(0) }" in result.text

    @pytest.mark.parametrize(
        "policy,codes,exit_code",
        [("drop", [], 0), ("warn", ["CW1003"], 1), ("error", ["CE1003"], 2)],
    )
    def test_malformed_policy(self, expand, policy, codes, exit_code):
        result = expand("#[errors(std::io::Error, Vec<u8>)]\nfn f() {}\n", malformed=policy)
        assert result.reporter.codes() == codes
        assert result.exit_code == exit_code
        assert (result.text is None) == (exit_code == 2)

    def test_collisions_pass_unchecked_by_default(self, expand):
        result = expand("#[errors(a::Error, A::Error)]\nfn f() {}\n")
        assert result.text.count("    A(") == 2

    def test_collisions_rejected_when_validating(self, expand):
        result = expand("#[errors(a::Error, A::Error, b::Error = \"A\")]\nfn f() {}\n", validate_variants=True)
        assert result.reporter.codes() == ["CE1004"]

    def test_all_errors_reported(self, expand):
        result = expand("#[errors]\nstruct A;\n#[errors = 1]\nfn b() {}\ntrait T {\n    #[errors]\n    fn c();\n}\n")
        assert result.reporter.codes() == ["CE1001", "CE1006", "CE1002"]

    def test_parse_error(self, expand):
        result = expand("fn f() { (]\n")
        assert result.reporter.codes() == ["CE0002"]
        assert result.text is None

    def test_nested_expansion(self, expand):
        source = (
            "#[errors(std::io::Error)]\n"
            "fn outer() {\n"
            "    #[errors(std::fmt::Error)]\n"
            "    fn inner() {}\n"
            "}\n"
        )
        result = expand(source)
        assert result.error_types == ["OuterError", "InnerError"]
        assert "    enum InnerError {\n        StdFmt(std::fmt::Error),\n    }" in result.text
        assert "    fn inner() -> std::result::Result<(), InnerError> {}\n}" in result.text
        assert "#[errors" not in result.text

    def test_indent_setting(self, expand):
        result = expand("#[errors(std::io::Error)]\nfn f() {}\n", indent=2)
        assert "\n  StdIo(std::io::Error),\n" in result.text

    def test_formatting_outside_return_type_kept(self, expand):
        source = "#[errors]\npub  fn   spaced ( a : u8 )->u8{a}\n"
        result = expand(source)
        assert "pub  fn   spaced ( a : u8 )->std::result::Result<u8, SpacedError>{a}" in result.text


class TestSplicer:
    """Test nested source replacement"""

    def test_replacements_applied(self):
        splicer = Splicer("abcdef")
        splicer.replace(1, 2, "B")
        splicer.replace(4, 6, "EF!")
        assert splicer.text(0, 6) == "aBcdEF!"

    def test_inner_replacement_superseded_by_outer(self):
        splicer = Splicer("abcdef")
        splicer.replace(2, 3, "C")
        splicer.replace(1, 5, "[" + Splicer("abcdef").text(1, 5) + "]")
        assert splicer.text(0, 6) == "a[bcde]f"

    def test_sub_range_sees_inner_replacement(self):
        splicer = Splicer("abcdef")
        splicer.replace(2, 3, "C")
        assert splicer.text(1, 5) == "bCde"
        assert splicer.text(3, 6) == "def"
