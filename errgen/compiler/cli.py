"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from errgen.internals.version import print_banner


def _load_effective_config(args: argparse.Namespace, src_path: Path):
    """Config file (explicit or next to the source) with CLI overrides applied."""
    from errgen.compiler.config import load_config, load_config_file

    if args.config:
        config = load_config_file(Path(args.config))
    else:
        config = load_config(src_path.parent)
    return config.merged(
        attribute=args.attribute,
        malformed=args.malformed,
        validate_variants=args.validate_variants,
        derive=args.derive,
    )


def explain_code(code: str) -> int:
    """Print the catalog entry for a diagnostic code.

    Returns:
        0 on success, 2 for an unknown code.
    """
    from errgen.internals.errors import REGISTRY

    msg = REGISTRY.get(code.upper())
    if msg is None:
        print(f"error: unknown diagnostic code '{code}'", file=sys.stderr)
        return 2

    print(f"{msg.code} ({msg.severity.value}, {msg.category.value})")
    print(f"  {msg.text}")
    if msg.doc:
        print()
        print(f"  {msg.doc}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main expander entry point."""
    ap = argparse.ArgumentParser(
        prog="errgen",
        description="Expand #[errors(...)] functions into combined error enums",
    )

    ap.add_argument("source", nargs='?', help="Path to Rust source file (.rs)")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("--dump-parse", action="store_true", help="Print raw Lark token tree")
    ap.add_argument("--dump-ast", action="store_true", help="Print annotated items")
    ap.add_argument("-o", "--out", metavar="OUT",
                    help="Write expanded source to OUT (default: stdout)")
    ap.add_argument("--config", metavar="PATH",
                    help="Config file (default: errgen.toml next to the source)")
    ap.add_argument("--attribute", metavar="NAME",
                    help="Attribute name to expand (default: errors)")
    ap.add_argument(
        "--malformed",
        choices=["drop", "warn", "error"],
        help="What to do with attribute arguments that are not paths or path = \"Alias\"",
    )
    ap.add_argument(
        "--validate-variants",
        action="store_true",
        default=None,
        help="Reject duplicate or invalid variant names",
    )
    ap.add_argument(
        "--derive",
        metavar="TRAIT",
        action="append",
        help="Trait derived on generated enums in addition to Debug (repeatable)",
    )
    ap.add_argument("--explain", metavar="CODE", help="Describe a diagnostic code and exit")
    args = ap.parse_args(argv)

    if args.version:
        print_banner()
        return 0

    if args.explain:
        return explain_code(args.explain)

    if not args.source:
        print("error: source file required", file=sys.stderr)
        return 2

    from errgen.compiler.config import ConfigError
    from errgen.compiler.pipeline import expand_source
    from errgen.internals import errors as er
    from errgen.internals.report import Reporter

    src_path = Path(args.source).resolve()
    try:
        src = src_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"error: cannot read {src_path}: {e}", file=sys.stderr)
        return 2

    try:
        config = _load_effective_config(args, src_path)
    except ConfigError as e:
        reporter = Reporter(source=src, filename=str(src_path))
        er.emit(reporter, er.ERR.CE0003, None, detail=str(e))
        reporter.print()
        return 2

    result = expand_source(
        src,
        config=config,
        filename=str(src_path),
        dump_parse=args.dump_parse,
        dump_ast=args.dump_ast,
    )
    result.reporter.print()

    if result.text is None:
        return result.exit_code

    if args.out:
        Path(args.out).write_text(result.text, encoding="utf-8")
    else:
        sys.stdout.write(result.text)
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
