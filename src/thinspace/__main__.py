"""Command line interface: ``python -m thinspace``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from . import __version__
from .build import BuildOptions, build, process_file, typeset_source
from .constants import THIN_SPACE_CLASS, THIN_SPACE_CSS

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("thinspace")


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thinspace",
        description=(
            "Normalize inter-element whitespace and insert thin-space markers "
            "between wide (CJK) and narrow (Latin) text in HTML documents."
        ),
    )
    parser.add_argument("path", nargs="?", default="-", help="HTML file to process, or '-' for stdin (default)")
    parser.add_argument("-o", "--output", help="Write the result to this file instead of stdout")
    parser.add_argument("--input-dir", help="Process every .html file below this directory")
    parser.add_argument("--output-dir", help="Destination for --input-dir (same relative layout)")
    parser.add_argument("--fragment", action="store_true", help="Parse input as a fragment, not a document")
    parser.add_argument("--marker-tag", default="span", help="Tag name of the inserted marker (default: span)")
    parser.add_argument(
        "--marker-class",
        default=THIN_SPACE_CLASS,
        help=f"Class attribute of the marker; empty for none (default: {THIN_SPACE_CLASS})",
    )
    parser.add_argument(
        "--ascend",
        action="store_true",
        help="Look for neighboring text beyond the parent element",
    )
    parser.add_argument("--keep-comments", action="store_true", help="Do not remove HTML comments")
    parser.add_argument("-j", "--jobs", type=int, default=0, help="Worker threads for --input-dir (default: auto)")
    parser.add_argument("--print-css", action="store_true", help="Print the CSS rule for the default marker and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.print_css:
        sys.stdout.write(THIN_SPACE_CSS + "\n")
        return 0

    if args.jobs < 0:
        parser.error("--jobs must not be negative")

    options = BuildOptions(
        marker_tag=args.marker_tag,
        marker_class=args.marker_class or None,
        ascend=args.ascend,
        drop_comments=not args.keep_comments,
        fragment=args.fragment,
        jobs=args.jobs,
    )

    if args.input_dir or args.output_dir:
        if not (args.input_dir and args.output_dir):
            parser.error("--input-dir and --output-dir must be used together")
        if args.output:
            parser.error("--output cannot be combined with --input-dir")
        try:
            result = build(args.input_dir, args.output_dir, options)
        except NotADirectoryError as e:
            logger.error("%s", e)
            return 1
        logger.info("Wrote %d document(s), %d failed", len(result.written), len(result.failed))
        return 0 if result.ok else 1

    try:
        if args.path == "-":
            rendered = typeset_source(sys.stdin.read(), options)
            if args.output:
                out_path = Path(args.output)
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_text(rendered, encoding="utf-8")
            else:
                sys.stdout.write(rendered)
        elif args.output:
            process_file(args.path, args.output, options)
        else:
            sys.stdout.write(typeset_source(Path(args.path).read_text(encoding="utf-8"), options))
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to typeset %s: %s", args.path, e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
