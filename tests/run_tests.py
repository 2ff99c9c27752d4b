#!/usr/bin/env python3
"""
Fixture test runner for errgen.

Runs the expander on every tests/e2e/test_*.rs fixture and verifies
that it returns the expected exit code:
- 0: Success (no errors, no warnings)
- 1: Success with warnings
- 2: Expansion failed with errors

and that its output satisfies the fixture's header directives.

Usage:
    python tests/run_tests.py
    python tests/run_tests.py --verbose
    python tests/run_tests.py --help
"""

import argparse
import json
import shlex
import subprocess
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent))
from fixture_metadata import check_output, expected_exit_code, parse_fixture_metadata  # noqa: E402

PROJECT_ROOT = Path(__file__).parent.parent
E2E_DIR = Path(__file__).parent / "e2e"


def find_fixtures(filter_text: str | None = None) -> list[Path]:
    fixtures = sorted(E2E_DIR.glob("test_*.rs"))
    if filter_text:
        fixtures = [f for f in fixtures if filter_text in f.name]
    return fixtures


def check_fixture(test_file: Path) -> tuple[str, bool, int, int, list[str], str]:
    """Run the expander on one fixture.

    Returns:
        (name, passed, expected exit, actual exit, failure reasons, captured output)
    """
    test_name = test_file.name
    expected = expected_exit_code(test_file)
    metadata = parse_fixture_metadata(test_file)

    cmd = [sys.executable, "-m", "errgen", str(test_file)]
    if metadata.cmd_args:
        cmd.extend(shlex.split(metadata.cmd_args))

    try:
        result = subprocess.run(
            cmd,
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            timeout=metadata.timeout_seconds,
        )
    except subprocess.TimeoutExpired:
        return test_name, False, expected, -1, ["timeout"], "TEST TIMEOUT"

    reasons = []
    if result.returncode != expected:
        reasons.append(f"exit code {result.returncode}, expected {expected}")
    reasons.extend(check_output(metadata, result.stdout, result.stderr))

    output = ""
    if result.stdout:
        output += f"STDOUT:\n{result.stdout}\n"
    if result.stderr:
        output += f"STDERR:\n{result.stderr}\n"

    return test_name, not reasons, expected, result.returncode, reasons, output


def main():
    parser = argparse.ArgumentParser(description="Run errgen fixture tests")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show detailed output for each test")
    parser.add_argument("-j", "--jobs", type=int, default=4,
                        help="Number of parallel test jobs (default: 4)")
    parser.add_argument("--filter", type=str,
                        help="Only run fixtures whose name contains this text")
    parser.add_argument("--json", action="store_true",
                        help="Output results in JSON format")
    args = parser.parse_args()

    fixtures = find_fixtures(args.filter)
    if not fixtures:
        if not args.json:
            print("No test files found!")
        return 1

    if not args.json:
        print(f"Running {len(fixtures)} tests with {args.jobs} parallel jobs...")
        print()

    start_time = time.time()

    results = []
    show_progress = not args.json and not args.verbose
    with ThreadPoolExecutor(max_workers=args.jobs) as executor:
        futures = {executor.submit(check_fixture, f): f for f in fixtures}
        if show_progress:
            pbar = tqdm(total=len(fixtures), desc="Running tests", unit="test",
                        bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]")
        for future in as_completed(futures):
            results.append(future.result())
            if show_progress:
                pbar.update(1)
        if show_progress:
            pbar.close()

    duration = time.time() - start_time
    results.sort()
    failed = [r for r in results if not r[1]]

    if args.json:
        print(json.dumps({
            "total_tests": len(results),
            "passed": len(results) - len(failed),
            "failed": len(failed),
            "duration_seconds": round(duration, 2),
            "failed_tests": [
                {"name": name, "expected_exit_code": exp, "actual_exit_code": act, "reasons": reasons}
                for name, _, exp, act, reasons, _ in failed
            ],
        }, indent=2))
        return 1 if failed else 0

    for name, passed, exp, act, reasons, output in results:
        if passed:
            if args.verbose:
                print(f"✓ {name} (expected: {exp}, actual: {act})")
        else:
            print(f"✗ {name}: {'; '.join(reasons)}")
            if args.verbose and output:
                print(f"  Output: {output}")

    print()
    print(f"Test Results ({duration:.2f}s):")
    print(f"  Passed: {len(results) - len(failed)}")
    print(f"  Failed: {len(failed)}")
    print(f"  Total:  {len(results)}")

    if failed:
        return 1
    print()
    print("All tests passed! ✓")
    return 0


if __name__ == "__main__":
    sys.exit(main())
