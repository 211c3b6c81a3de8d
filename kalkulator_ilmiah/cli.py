from __future__ import annotations

import argparse
import json
from typing import Any

from .config import REPL_COMMANDS, VERSION, Settings
from .engine import Engine
from .logging_config import COMPONENTS, get_logger
from .parser import parse_tokens
from .types import CalculationResult, Snapshot, ValidationError

logger = get_logger("cli")


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Kalkulator Ilmiah health check...")
    print("-" * 50)

    try:
        import numpy

        print(f"[OK] NumPy {numpy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] NumPy import failed: {e}")
        checks_failed += 1

    try:
        import sympy

        print(f"[OK] SymPy {sympy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    checks = [
        ("Left-to-right chaining", "3 + 4 × 2 =", "14"),
        ("Degree-mode sine", "90 sin", "1"),
        ("Division by zero", "5 ÷ 0 =", "0"),
        ("Factorial", "5 x!", "120"),
    ]
    for label, tokens, expected in checks:
        try:
            engine = Engine(Settings())
            engine.dispatch_all(parse_tokens(tokens))
            display = engine.snapshot().display_text
            if display == expected:
                print(f"[OK] {label} works")
                checks_passed += 1
            else:
                print(f"[FAIL] {label}: expected {expected}, got {display}")
                checks_failed += 1
        except Exception as e:
            print(f"[FAIL] {label} check failed: {e}")
            checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_snapshot(snapshot: Snapshot, output_format: str = "human") -> None:
    """Print a snapshot in the specified format.

    Args:
        snapshot: Snapshot to print
        output_format: "json" or "human"
    """
    if output_format == "json":
        print(json.dumps(CalculationResult(ok=True, snapshot=snapshot).to_dict(), ensure_ascii=False))
        return
    status = ("M " if snapshot.memory_indicator_active else "") + snapshot.angle_mode_label
    if snapshot.pending_expression:
        status = f"{status}  {snapshot.pending_expression}"
    print(status)
    print(snapshot.display_text)


def print_error(error: ValidationError, output_format: str = "human") -> None:
    if output_format == "json":
        result = CalculationResult(ok=False, error=error.message, code=error.code)
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        print(f"Error: {error}")


def print_help_text() -> None:
    help_text = """
Type keys separated by spaces, then press Enter. Examples:
  3 + 4 × 2 =        left to right, gives 14
  90 sin             sine in the current angle mode
  2 ^ 10 =           power
  pi MS  MR          store and recall memory

Keys:
  0-9 .              digits and decimal point (12.5 works too)
  + - × * ÷ / ^ mod  operators, = to evaluate
  sin cos tan asin acos atan log ln sqrt
  x² 1/x x! e^x 10^x abs
  pi π e             constants
  MC MR M+ M- MS     memory
  mode               toggle RAD/DEG
  C  AC  CH          clear entry, clear all, clear history
  recall:N           reuse the result of history entry N (0 = newest)

Commands: help, history, state, quit
"""
    print(help_text)


def _print_history(engine: Engine) -> None:
    entries = engine.state.history
    if not entries:
        print("(history is empty)")
        return
    for index, entry in enumerate(entries):
        print(f"{index:>2}: {entry}")


def repl_loop(engine: Engine, output_format: str = "human") -> None:
    """Interactive REPL loop."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("Kalkulator Ilmiah — type 'help' for keys, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue

        lowered = raw.lower()
        if lowered in REPL_COMMANDS:
            if lowered in ("quit", "exit"):
                print("Goodbye.")
                break
            if lowered == "help":
                print_help_text()
            elif lowered == "history":
                _print_history(engine)
            elif lowered == "state":
                print(engine.state)
            continue

        try:
            commands = parse_tokens(raw)
        except ValidationError as e:
            logger.warning("Rejected input %r: %s", raw, e)
            print_error(e, output_format)
            continue
        engine.dispatch_all(commands)
        print_snapshot(engine.snapshot(), output_format)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kalkulator-ilmiah")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Run one sequence of keys and exit (non-interactive)",
        dest="eval_keys",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--radians", action="store_true", help="Start in radian mode (default: degrees)"
    )
    parser.add_argument(
        "--ieee-division",
        action="store_true",
        help="Division and reciprocal by zero give Infinity/NaN instead of 0",
    )
    parser.add_argument(
        "--history-limit", type=int, help="Number of history entries kept (default: 10)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--log-component",
        action="append",
        choices=list(COMPONENTS),
        dest="log_components",
        help="Only show DEBUG/INFO logs from this component (repeatable)",
    )
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    return parser


def _apply_overrides(args: Any) -> None:
    import kalkulator_ilmiah.config as _config

    if args.radians:
        _config.DEFAULT_ANGLE_MODE = "rad"
    if args.ieee_division:
        _config.IEEE_DIVISION = True
    if args.history_limit is not None and args.history_limit >= 0:
        _config.HISTORY_LIMIT = int(args.history_limit)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Kalkulator Ilmiah CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = _build_parser().parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(
        level=args.log_level, log_file=args.log_file, components=args.log_components
    )

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()

    _apply_overrides(args)
    engine = Engine(Settings.from_config())

    if args.eval_keys is not None:
        keys = args.eval_keys.strip()
        if not keys:
            print("Error: Empty input. Please enter at least one key.")
            return 1
        try:
            commands = parse_tokens(keys)
        except ValidationError as e:
            logger.warning("Rejected input %r: %s", keys, e)
            print_error(e, args.format)
            return 1
        engine.dispatch_all(commands)
        print_snapshot(engine.snapshot(), args.format)
        return 0

    repl_loop(engine, output_format=args.format)
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m kalkulator_ilmiah.cli"""
    import sys

    sys.exit(main_entry())
