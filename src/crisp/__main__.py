"""Main entry point for the Crisp interpreter."""

import argparse
from datetime import datetime, timezone
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import List

from crisp.crisp import Crisp
from crisp.crisp_repl import CrispRepl
from crisp.crisp_trace import CrispStdoutTraceWatcher


def setup_logging(log_file: str | None = None) -> None:
    """Configure logging to a rotating file, timestamped under ~/.crisp/logs by default."""
    if log_file is None:
        log_dir = os.path.expanduser("~/.crisp/logs")
        os.makedirs(log_dir, exist_ok=True)

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
        log_file = os.path.join(log_dir, f"{timestamp}.log")
        cleanup_old_logs(log_dir, max_logs=20)

    # Keep up to 5 files of 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,
        backupCount=4,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)

    while len(log_files) > max_logs:
        try:
            os.remove(log_files.pop(0))

        except OSError:
            pass  # Ignore errors removing old logs


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crisp",
        description="Crisp: a small Lisp with positional currying"
    )
    parser.add_argument("files", nargs="*", help="Source files to evaluate before starting the REPL")
    parser.add_argument("--no-repl", action="store_true", help="Exit after evaluating the given files")
    parser.add_argument("--max-depth", type=int, default=250, help="Maximum non-tail evaluation depth")
    parser.add_argument(
        "--strict-else",
        action="store_true",
        help="Fail when an else branch references a parameter with no argument"
    )
    parser.add_argument(
        "--strict-calls",
        action="store_true",
        help="Fail when calling a value that is not a function or operator"
    )
    parser.add_argument(
        "--strict-substitution",
        action="store_true",
        help="Fail instead of partially applying when a referenced parameter has no argument"
    )
    parser.add_argument("--trace", action="store_true", help="Print every reduction step")
    parser.add_argument("--log-file", help="Write the log to this file instead of ~/.crisp/logs")
    return parser


def main(argv: List[str] | None = None) -> int:
    """
    Run the interpreter.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_file)
    logger = logging.getLogger("CrispMain")

    crisp = Crisp(
        max_depth=args.max_depth,
        swallow_else_substitution_errors=not args.strict_else,
        call_non_callable_returns_callee=not args.strict_calls,
        strict_substitution=args.strict_substitution,
        trace_watcher=CrispStdoutTraceWatcher() if args.trace else None
    )
    repl = CrispRepl(crisp)

    failed = False
    for path in args.files:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                source = f.read()

        except OSError as e:
            logger.error("Cannot read '%s': %s", path, e)
            print(f"Cannot read '{path}': {e}", file=sys.stderr)
            return 1

        logger.info("Evaluating '%s'", path)
        try:
            if repl.run_source(source):
                failed = True

        except KeyboardInterrupt:
            logger.warning("Interrupted while evaluating '%s'", path)
            print("Interrupted", file=sys.stderr)
            return 130

    if args.no_repl:
        return 1 if failed else 0

    repl.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
