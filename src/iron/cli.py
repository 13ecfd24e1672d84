"""Command-line interface for running Iron scripts.

Usage:
    iron <file.irl>...          # Run scripts in order
    iron <file.irl> --ast       # Show the parsed tree instead of running
    iron <file.irl> --status    # Print the exit status after each script
    iron                        # Start the interactive REPL
"""

import argparse
import logging
import sys
from pathlib import Path

import iron


def format_error(error, source=None):
    """Format an Iron error with its source location and a caret line.

    Args:
        error: (IronError) Error to describe
        source: (str | None) Source text, read from the error's file when
            not given

    Returns:
        Formatted error message string
    """
    lines = [f"error: {error.message}"]
    pos = error.position
    if pos is None or not pos.start_line:
        return lines[0]

    lines.append(f"  --> {pos.describe()}")
    if source is None and pos.filename:
        try:
            source = Path(pos.filename).read_text(encoding="utf-8")
        except OSError:
            source = None
    if source is not None:
        source_lines = source.splitlines()
        line_idx = pos.start_line - 1
        if 0 <= line_idx < len(source_lines):
            lines.append(f"   | {source_lines[line_idx].rstrip()}")
            if pos.start_column:
                lines.append("   | " + " " * (pos.start_column - 1) + "^")
    return "\n".join(lines)


def run_file(path, mode=iron.Mode.RELEASE, ast=False, rich=False):
    """Run or dump one script.

    Returns:
        (int) Exit status, 1 after reporting an error to stderr
    """
    filepath = Path(path)
    try:
        code = filepath.read_text(encoding="utf-8")
    except OSError as e:
        print(f"error: cannot read {filepath}: {e.strerror or e}", file=sys.stderr)
        return 1

    interp = iron.Interp(mode)
    interp.set_file(filepath)
    interp.load_code(code)
    try:
        if ast:
            interp.dump_ast(rich=rich)
            return 0
        return interp.execute()
    except iron.IronError as e:
        # Errors from imported modules point into their own files
        own_file = e.position is not None and e.position.filename == str(filepath)
        print(format_error(e, code if own_file else None), file=sys.stderr)
        return 1


def build_parser():
    parser = argparse.ArgumentParser(
        prog="iron",
        description="Run Iron scripts, or start a REPL when no file is given.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="scripts to run in order")
    parser.add_argument(
        "-d", "--debug", action="store_true",
        help="log evaluation to stderr and skip the optimize pass",
    )
    parser.add_argument("--ast", action="store_true", help="print the parsed tree instead of running")
    parser.add_argument("--rich", action="store_true", help="render --ast output with rich")
    parser.add_argument("--status", action="store_true", help="print the exit status of each script")
    parser.add_argument(
        "-V", "--version", action="version", version=f"iron v{iron.__version__}"
    )
    return parser


def main(argv=None):
    """Entry point for the iron command.

    Returns:
        (int) Process exit status
    """
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if not args.files:
        from . import repl
        repl.main()
        return 0

    mode = iron.Mode.DEBUG if args.debug else iron.Mode.RELEASE
    status = 0
    for path in args.files:
        status = run_file(path, mode, ast=args.ast, rich=args.rich)
        if args.status:
            print(f"exit status: {status}")
        if status:
            break
    return status


if __name__ == "__main__":
    sys.exit(main())
