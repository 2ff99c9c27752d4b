"""errgen.toml loading and validation."""
from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_NAME = "errgen.toml"

MALFORMED_POLICIES = ("drop", "warn", "error")

# Attribute names and derive entries are Rust paths
IDENT_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
PATH_PATTERN = re.compile(r"^(::)?[A-Za-z_][A-Za-z0-9_]*(::[A-Za-z_][A-Za-z0-9_]*)*$")


class ConfigError(Exception):
    pass


@dataclass
class ErrgenConfig:
    attribute: str = "errors"
    malformed: str = "drop"
    validate_variants: bool = False
    derive: list[str] = field(default_factory=lambda: ["Debug"])
    indent: int = 4

    def validate(self) -> None:
        if not IDENT_PATTERN.match(self.attribute):
            raise ConfigError(f"Invalid attribute name '{self.attribute}'. Must be a Rust identifier.")
        if self.malformed not in MALFORMED_POLICIES:
            raise ConfigError(
                f"Invalid malformed policy '{self.malformed}'. "
                f"Must be one of: {', '.join(MALFORMED_POLICIES)}."
            )
        for d in self.derive:
            if not PATH_PATTERN.match(d):
                raise ConfigError(f"Invalid derive '{d}'. Must be a trait path such as Debug or PartialEq.")
        if not 1 <= self.indent <= 16:
            raise ConfigError(f"Invalid indent {self.indent}. Must be between 1 and 16.")

    def merged(self, **overrides: Any) -> "ErrgenConfig":
        """Copy with every non-None override applied, validated."""
        values = {k: getattr(self, k) for k in self.__dataclass_fields__}
        values.update({k: v for k, v in overrides.items() if v is not None})
        config = ErrgenConfig(**values)
        config.validate()
        return config


def load_config(directory: Path | None = None) -> ErrgenConfig:
    """Load errgen.toml from the given directory (default: cwd), defaults if absent."""
    if directory is None:
        directory = Path.cwd()
    config_path = directory / CONFIG_NAME
    if not config_path.exists():
        return ErrgenConfig()
    return load_config_file(config_path)


def load_config_file(path: Path) -> ErrgenConfig:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path} is not valid TOML: {e}") from e
    return _parse_config(data)


def load_config_from_string(text: str) -> ErrgenConfig:
    """Load config from a TOML string."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"not valid TOML: {e}") from e
    return _parse_config(data)


def _parse_config(data: dict) -> ErrgenConfig:
    section = data.get("errgen", {})
    if not isinstance(section, dict):
        raise ConfigError("[errgen] must be a table")
    known = {"attribute", "malformed", "validate-variants", "derive", "indent"}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"Unknown [errgen] key(s): {', '.join(unknown)}")

    derive = section.get("derive", ["Debug"])
    if not isinstance(derive, list) or not all(isinstance(d, str) for d in derive):
        raise ConfigError("[errgen] derive must be a list of strings")
    validate_variants = section.get("validate-variants", False)
    if not isinstance(validate_variants, bool):
        raise ConfigError("[errgen] validate-variants must be true or false")
    indent = section.get("indent", 4)
    if not isinstance(indent, int) or isinstance(indent, bool):
        raise ConfigError("[errgen] indent must be an integer")

    config = ErrgenConfig(
        attribute=str(section.get("attribute", "errors")),
        malformed=str(section.get("malformed", "drop")),
        validate_variants=validate_variants,
        derive=list(derive),
        indent=indent,
    )
    config.validate()
    return config
