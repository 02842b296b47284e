"""
cli.py — `color-maze SOURCE DEST`: solve a colour-marked maze image.

The maze image uses
    • white          – floor
    • red            – start region (any size / shape)
    • blue           – goal region
    • anything else  – wall
and the solved copy has the shortest 8-connected path drawn in pure green.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .errors import MazeError
from .pixels import load_image
from .solver import SolveOptions, solve, write_outputs

log = logging.getLogger("color_maze")

ALLOWED_EXTENSIONS = (".png", ".bmp", ".jpg")
USAGE_EXAMPLE = "color-maze 'maze.[png|bmp|jpg]' 'solved.png'"


###############################################################################
# Argument checks
###############################################################################

def check_source(path: Path) -> bool:
    if not path.exists():
        log.error("Specified file does not exist! File: %s", path)
        return False
    if not path.suffix:
        log.error("The specified file has no extension! File: %s", path)
        return False
    if path.suffix.lower() not in ALLOWED_EXTENSIONS:
        log.error("The specified file has an unsupported extension! File: %s", path)
        return False
    return True


def check_destination(path: Path) -> bool:
    if path.exists():
        log.error("File exists at destination! File: %s. Please try again with an empty location.", path)
        return False
    return True


###############################################################################
# CLI
###############################################################################

def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="color-maze",
        description="Draw the shortest path from the red region to the blue region of a maze image",
        epilog=f"example: {USAGE_EXAMPLE}",
    )
    p.add_argument("source", type=Path, help="maze image (.png, .bmp or .jpg)")
    p.add_argument("destination", type=Path, help="where to write the solved image; must not exist")
    p.add_argument("--animate", type=Path, metavar="GIF", help="Save a GIF of the search")
    p.add_argument("--frame-every", type=positive_int, default=500, metavar="N",
                   help="Closed cells between animation frames (default 500)")
    p.add_argument("--max-frames", type=positive_int, default=200, metavar="N",
                   help="Most frames kept in the animation (default 200)")
    p.add_argument("--csv", type=Path, metavar="FILE", help="Write path pixel coordinates (x,y) as CSV")
    p.add_argument("--max-expansions", type=positive_int, metavar="N",
                   help="Give up (no path) after closing this many cells")
    p.add_argument("--show", action="store_true", help="Display the solved maze")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Errors only")
    return p.parse_args(argv)


def configure_logging(args: argparse.Namespace) -> None:
    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args)
    log.debug("input file: %s, output file: %s", args.source, args.destination)

    outputs = [p for p in (args.destination, args.csv, args.animate) if p is not None]
    if not (check_source(args.source) and all(check_destination(p) for p in outputs)):
        return 1

    options = SolveOptions(
        max_expansions=args.max_expansions,
        animate_path=args.animate,
        frame_every=args.frame_every,
        max_frames=args.max_frames,
        csv_path=args.csv,
        show=args.show,
    )
    try:
        solution = solve(load_image(args.source), options)
        write_outputs(solution, args.destination, options)
    except MazeError as e:
        log.error("%s", e)
        return 1

    log.info("length=%d → %s", len(solution.path) - 1, args.destination)
    return 0


if __name__ == "__main__":
    sys.exit(main())
