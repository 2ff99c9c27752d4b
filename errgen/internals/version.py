from __future__ import annotations
import sys, platform, datetime

from errgen import __version__ as app_ver, __dev__ as is_dev

def _get_versions() -> dict[str, str]:
    # lark version (best-effort; don't crash if metadata is missing)
    try:
        import lark
        lark_ver = getattr(lark, "__version__", "unknown")
    except ImportError:
        lark_ver = "unknown"

    return {
        "app": app_ver,
        "python": platform.python_version(),
        "lark": lark_ver,
    }

def print_banner(stream=None) -> None:
    stream = stream or sys.stderr
    v = _get_versions()
    today = datetime.date.today().isoformat()

    # Only use ANSI styling on an interactive terminal
    if getattr(stream, "isatty", lambda: False)():
        BOLD, DIM, RESET = "\x1b[1m", "\x1b[2m", "\x1b[0m"
    else:
        BOLD, DIM, RESET = "", "", ""

    dev_marker = " (dev)" if is_dev else ""
    print(
        f"{BOLD}errgen{RESET} • {v['app']}{dev_marker}\n"
        f"{DIM}Python {v['python']} • lark {v['lark']} • {today}{RESET}",
        file=stream,
    )
