"""errgen - combined error type generator for Rust functions."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("errgen")
    __dev__ = False
except PackageNotFoundError:
    # Development mode - read from pyproject.toml
    import tomllib
    from pathlib import Path
    try:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            __version__ = tomllib.load(f).get("project", {}).get("version", "unknown")
    except (OSError, tomllib.TOMLDecodeError):
        __version__ = "unknown"
    __dev__ = True

from errgen.compiler.pipeline import Expansion, expand_source  # noqa: E402

__all__ = ["Expansion", "expand_source", "__version__"]
