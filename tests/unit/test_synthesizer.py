"""
Unit tests for error type synthesis and function rewriting.
"""

import pytest

from errgen.backend.synthesizer import (
    RewrittenFunction,
    normalize_derives,
    synthesize,
)
from errgen.semantics.ast import Declaration, DeclaredError, FuncItem, PathRef


def entry(text, alias=None):
    return DeclaredError(loc=None, path=PathRef(loc=None, segments=text.split("::")), alias=alias)


def function(name="read_int", vis="", ret="i64"):
    return FuncItem(
        loc=None,
        name=name,
        vis=vis,
        attrs=["#[inline]"],
        sig_start=0,
        params_end=0,
        ret=ret,
        ret_start=None,
        ret_end=None,
        body_end=0,
    )


class TestSynthesizeErrorType:
    """Test the combined error enum model"""

    def test_case_study_read_int(self):
        decl = Declaration(loc=None, entries=[entry("std::io::Error"), entry("std::num::ParseIntError")])
        error_type, _ = synthesize(decl, function(), "fn read_int() -> ", " {}")

        assert error_type.name == "ReadIntError"
        assert [(v.name, v.source_type) for v in error_type.variants] == [
            ("StdIo", "std::io::Error"),
            ("StdNumParseInt", "std::num::ParseIntError"),
        ]

    def test_case_study_alias(self):
        decl = Declaration(loc=None, entries=[entry("bincode::Error", alias="Codec")])
        error_type, _ = synthesize(decl, function(name="load"), "", "")
        assert [(v.name, v.source_type) for v in error_type.variants] == [("Codec", "bincode::Error")]

    def test_empty_declaration(self):
        error_type, fn = synthesize(Declaration(loc=None), function(name="empty"), "", "")
        assert error_type.is_empty
        assert error_type.name == "EmptyError"
        assert fn.return_type == "std::result::Result<i64, EmptyError>"

    def test_duplicates_not_rejected(self):
        decl = Declaration(loc=None, entries=[entry("std::io::Error"), entry("std::io::Error")])
        error_type, _ = synthesize(decl, function(), "", "")
        assert [v.name for v in error_type.variants] == ["StdIo", "StdIo"]

    def test_visibility_copied(self):
        error_type, _ = synthesize(Declaration(loc=None), function(vis="pub(crate)"), "", "")
        assert error_type.vis == "pub(crate)"

    @pytest.mark.parametrize(
        "derives,expected",
        [
            (None, ("Debug",)),
            (["PartialEq"], ("Debug", "PartialEq")),
            (["Clone", "Debug"], ("Debug", "Clone")),
        ],
    )
    def test_normalize_derives(self, derives, expected):
        assert normalize_derives(derives) == expected


class TestRewriteFunction:
    """Test return type wrapping"""

    def test_return_type_wrapped(self):
        _, fn = synthesize(Declaration(loc=None), function(), "fn read_int(s: &str) -> ", " {\n    0\n}")
        assert fn.render() == "fn read_int(s: &str) -> std::result::Result<i64, ReadIntError> {\n    0\n}"
        assert fn.attrs == ("#[inline]",)

    def test_missing_return_type_becomes_unit(self):
        _, fn = synthesize(Declaration(loc=None), function(name="run", ret=None), "fn run()", " {}")
        assert fn.ok_type == "()"
        assert fn.render() == "fn run() -> std::result::Result<(), RunError> {}"

    def test_rendered_pieces(self):
        fn = RewrittenFunction(
            attrs=(), head="fn f() -> ", ok_type="u8", error_type="FError", tail=" {}",
        )
        assert fn.return_type == "std::result::Result<u8, FError>"
        assert fn.render() == "fn f() -> std::result::Result<u8, FError> {}"
