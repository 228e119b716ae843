"""Command line for converting FHX exports to XML."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from fhxml import __version__
from fhxml.config import ConvertConfig
from fhxml.convert import collect_inputs, convert_file, first_difference, output_path_for
from fhxml.errors import ConversionError
from fhxml.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_MISMATCH = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fhxml",
        description="Convert FHX configuration exports to indented XML.",
    )
    parser.add_argument(
        "input",
        help="Path to an .fhx file or a directory of .fhx files.",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output file (single input only; defaults to the input name with .xml).",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory where XML files are written (defaults to beside each input).",
    )
    parser.add_argument(
        "--indent",
        default="\t",
        help="Indentation characters to use (default: tab).",
    )
    parser.add_argument(
        "--input-encoding",
        default="utf-16",
        help="Encoding of the FHX input (default: utf-16).",
    )
    parser.add_argument(
        "--output-encoding",
        default="utf-8",
        help="Encoding of the XML output (default: utf-8).",
    )
    parser.add_argument(
        "--wrap-root",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Wrap all top-level elements in a single FHX_ROOT element.",
    )
    parser.add_argument(
        "--check",
        metavar="EXEMPLAR",
        help="Compare the produced XML against a reference file (single input only).",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log progress.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.INFO if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run(args: argparse.Namespace) -> int:
    """Convert every requested input; return the process exit code."""
    config = ConvertConfig(
        indent=args.indent,
        wrap_root=args.wrap_root,
        input_encoding=args.input_encoding,
        output_encoding=args.output_encoding,
    )

    try:
        files = collect_inputs(args.input)
    except FileNotFoundError as exc:
        print(f"FAILURE: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if len(files) > 1 and (args.output or args.check):
        print("FAILURE: --output and --check need a single input file", file=sys.stderr)
        return EXIT_FAILURE

    status = EXIT_OK
    for source in files:
        if args.output:
            destination = Path(args.output)
        else:
            destination = output_path_for(source, args.output_dir)
        try:
            result = convert_file(source, destination, config=config)
        except ConversionError as exc:
            print(f"FAILURE: {exc}", file=sys.stderr)
            status = EXIT_FAILURE
            continue
        if not args.quiet:
            print(f"completed! - Time elapsed: {result.elapsed_seconds:.3f}s ({result.output_path})")

    if args.check and status == EXIT_OK:
        status = check_against(destination, Path(args.check), config.output_encoding, args.quiet)
    return status


def check_against(output: Path, exemplar: Path, encoding: str, quiet: bool = False) -> int:
    """Report whether ``output`` matches ``exemplar``; return an exit code."""
    try:
        lineno = first_difference(output, exemplar, encoding)
    except (OSError, UnicodeError) as exc:
        print(f"FAILURE: cannot compare with {exemplar}: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    if lineno is None:
        if not quiet:
            print(f"Output matches {exemplar}")
        return EXIT_OK
    print(f"Output differs from {exemplar} at line {lineno}", file=sys.stderr)
    return EXIT_MISMATCH


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)
    logger.debug("Arguments: %s", args)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
