# src/minipolar/cli.py
import sys
import argparse
import logging
from pathlib import Path

# Module imports
from minipolar.config import DEFAULT_INPUT_DIR, DEFAULT_OUTPUT_DIR, ENGINES
from minipolar.core.ignore import find_ignore_file, load_ignore_spec
from minipolar.core.report import format_summary, render_report_tree
from minipolar.core.walker import TreeWalker
from minipolar.minifiers.engine import get_minifiers


def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Minify a directory tree of JavaScript, CSS and HTML/EJS into a mirrored output tree."
    )
    parser.add_argument("input_dir", type=str, nargs="?", default=DEFAULT_INPUT_DIR, help="Input root (default: ./src)")
    parser.add_argument("output_dir", type=str, nargs="?", default=DEFAULT_OUTPUT_DIR, help="Output root (default: ./dist)")
    parser.add_argument(
        "--engine",
        choices=ENGINES,
        default="auto",
        help="Minifier backend: Node CLIs, Python libraries, or Node where installed (default: auto)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-file timeout in seconds for Node minifiers")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Extra gitwildmatch pattern to leave out of the output (repeatable)",
    )
    parser.add_argument("--tree", action="store_true", help="Print a tree of processed files after the run")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False):
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)


def main(argv=None):
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args(argv)
        configure_logging(args.verbose, args.quiet)

        input_dir = Path(args.input_dir).resolve()
        output_dir = Path(args.output_dir).resolve()
        if not input_dir.is_dir():
            print(f"Error: Invalid directory '{input_dir}'", file=sys.stderr)
            sys.exit(1)
        if input_dir == output_dir:
            print("Error: Output directory must differ from the input directory", file=sys.stderr)
            sys.exit(1)

        if args.timeout is not None and args.timeout <= 0:
            parser.error("--timeout must be positive")

        print(f"--- minipolar ---")
        print(f"Input:  {input_dir}")
        print(f"Output: {output_dir}")
        print(f"Engine: {args.engine}")

        # 2. Ignore rules
        ignore_spec = load_ignore_spec(find_ignore_file(input_dir), extra_patterns=args.exclude)

        # 3. Walk
        minifiers = get_minifiers(args.engine, timeout=args.timeout)
        walker = TreeWalker(input_dir, output_dir, minifiers, ignore_spec=ignore_spec)
        report = walker.run()

        # 4. Summary
        if args.tree and report.outcomes:
            print()
            print(render_report_tree(report.outcomes, output_dir.name), end="")
        print("-" * 60)
        print(format_summary(report))
        print("-" * 60)
        print("Minification complete!" if not report.failed else "Minification finished with errors.")

        sys.exit(report.exit_code)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
