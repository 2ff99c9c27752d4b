"""
Shared fixtures for errgen tests.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from errgen.compiler.config import ErrgenConfig  # noqa: E402
from errgen.compiler.pipeline import expand_source  # noqa: E402
from errgen.internals.parser import parse_to_ast  # noqa: E402



@pytest.fixture
def expand():
    """Expand a source text, config overrides as keyword arguments"""

    def _expand(source, **overrides):
        config = ErrgenConfig().merged(**overrides)
        return expand_source(source, config=config)

    return _expand


@pytest.fixture
def annotated_items():
    """Annotated items collected from a source text"""

    def _items(source, attribute="errors"):
        ast, _ = parse_to_ast(source, attribute=attribute)
        return ast.items

    return _items
