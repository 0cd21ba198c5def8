"""ptrconfine command-line interface for inspecting confinement geometry"""

import argparse
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from ptrconfine import __version__
from ptrconfine.common.config import ConfigLoader
from ptrconfine.common.logsetup import logging_setup
from ptrconfine.common.settings import settings
from ptrconfine.common.types import Border, Box, MotionDirection, Point
from ptrconfine.constraint.factory import constraintFromConfig_create
from ptrconfine.constraint.recheck import pointer_recheck
from ptrconfine.geometry.confine import motion_trace
from ptrconfine.geometry.outline import outline_extract
from ptrconfine.geometry.region import Region
from ptrconfine.x11.seat import X11PointerSeat

DIRECTION_LABELS = {
    MotionDirection.POSITIVE_X: "+X",
    MotionDirection.NEGATIVE_X: "-X",
    MotionDirection.POSITIVE_Y: "+Y",
    MotionDirection.NEGATIVE_Y: "-Y",
}


def parser_create() -> argparse.ArgumentParser:
    """
    Create fully populated argument parser

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="ptrconfine",
        description="Inspect pointer confinement against a rectangle-union region",
    )

    parser.add_argument("--version", action="version", version=f"ptrconfine {__version__}")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations)",
    )

    parser.add_argument(
        "--min-edge-distance",
        type=float,
        default=None,
        dest="min_edge_distance",
        help="Margin kept from bottom/right borders when clamping (overrides config)",
    )

    parser.add_argument(
        "--fixed-step",
        type=float,
        default=None,
        dest="fixed_step",
        help="Minimal pointer coordinate step, 0 disables the clamp nudge (overrides config)",
    )

    parser.add_argument(
        "--backend",
        type=str,
        default=None,
        help="Confinement strategy name (overrides config)",
    )

    parser.add_argument(
        "--origin",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        default=None,
        help="Absolute position of the region's coordinate space (overrides config)",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )
    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )
    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )
    parser.add_argument(
        "--error", action="store_true", help="Enable error logging (overrides config)"
    )
    parser.add_argument(
        "--critical", action="store_true", help="Enable critical logging (overrides config)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    outline_parser = commands.add_parser("outline", help="Print the border outline of a region")
    outline_parser.add_argument("region", type=str, help="Region YAML file")

    confine_parser = commands.add_parser("confine", help="Confine a motion to a region")
    confine_parser.add_argument("region", type=str, help="Region YAML file")
    confine_parser.add_argument("prev_x", type=float, help="Previous pointer x")
    confine_parser.add_argument("prev_y", type=float, help="Previous pointer y")
    confine_parser.add_argument("x", type=float, help="Requested pointer x")
    confine_parser.add_argument("y", type=float, help="Requested pointer y")

    recover_parser = commands.add_parser(
        "recover", help="Find a safe position for a pointer outside a region"
    )
    recover_parser.add_argument("region", type=str, help="Region YAML file")
    recover_parser.add_argument("x", type=float, help="Pointer x")
    recover_parser.add_argument("y", type=float, help="Pointer y")

    recheck_parser = commands.add_parser(
        "recheck", help="Warp the X11 pointer back into a region if it lies outside"
    )
    recheck_parser.add_argument("region", type=str, help="Region YAML file")
    recheck_parser.add_argument(
        "--display", type=str, default=None, help="X11 display name (default: $DISPLAY)"
    )

    return parser


def logLevelOverride_get(args: argparse.Namespace) -> Optional[str]:
    """
    Resolve explicit log level override flags

    The most restrictive flag wins when several are given.

    Args:
        args: Parsed CLI args

    Returns:
        Selected log level or None
    """
    if args.critical:
        return "CRITICAL"
    if args.error:
        return "ERROR"
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def region_load(file_path: Path) -> Region:
    """
    Load a region description from YAML

    The file holds either `boxes` (row-major [x1, y1, x2, y2] lists, checked
    against the region input contract) or `rectangles` ([x, y, width,
    height] lists, unioned in any order).

    Args:
        file_path: Path to region YAML file

    Returns:
        Parsed region

    Raises:
        ValueError: If neither key is present or an entry is malformed
    """
    data = ConfigLoader.yaml_load(file_path)

    if "boxes" in data:
        boxes = []
        for entry in data["boxes"] or []:
            if len(entry) != 4:
                raise ValueError(f"Box entry must be [x1, y1, x2, y2], got {entry!r}")
            boxes.append(Box(x1=entry[0], y1=entry[1], x2=entry[2], y2=entry[3]))
        return Region.from_boxes(boxes)

    if "rectangles" in data:
        rectangles = []
        for entry in data["rectangles"] or []:
            if len(entry) != 4:
                raise ValueError(f"Rectangle entry must be [x, y, width, height], got {entry!r}")
            rectangles.append((entry[0], entry[1], entry[2], entry[3]))
        return Region.from_rectangles(rectangles)

    raise ValueError(f"Region file {file_path} must define 'boxes' or 'rectangles'")


def border_format(border: Border) -> str:
    """Render a border as a single line"""
    a, b = border.line.a, border.line.b
    blocks = ",".join(
        label for direction, label in DIRECTION_LABELS.items()
        if border.blocking_directions & direction
    )
    kind = "horizontal" if border.isHorizontal_check() else "vertical"
    return f"({a.x:g}, {a.y:g}) -> ({b.x:g}, {b.y:g})  {kind:<10}  blocks {blocks}"


def point_format(point: Point) -> str:
    """Render a point"""
    return f"({point.x:g}, {point.y:g})"


def outlineCommand_run(args: argparse.Namespace) -> None:
    """Print the outline of the region file"""
    outline = outline_extract(region_load(Path(args.region)))
    print(f"{len(outline)} borders")
    for border in outline:
        print(f"  {border_format(border)}")


def confineCommand_run(args: argparse.Namespace) -> None:
    """Print the confined position for one motion"""
    region = region_load(Path(args.region))
    constraint_config = settings.config.constraint
    origin = Point(x=constraint_config.origin[0], y=constraint_config.origin[1])
    result = motion_trace(
        outline_extract(region),
        origin,
        Point(x=args.prev_x, y=args.prev_y),
        Point(x=args.x, y=args.y),
        min_edge_distance=constraint_config.min_edge_distance,
        fixed_step=constraint_config.fixed_step,
    )
    print(point_format(result.position))
    for border in result.clamped_by:
        print(f"  clamped by {border_format(border)}")


def recoverCommand_run(args: argparse.Namespace) -> None:
    """Print the recovered position for one pointer location"""
    region = region_load(Path(args.region))
    constraint = constraintFromConfig_create(settings.config.constraint, region)
    print(point_format(constraint.constraint_ensure(Point(x=args.x, y=args.y))))


def recheckCommand_run(args: argparse.Namespace) -> None:
    """Recheck the live X11 pointer against the region"""
    region = region_load(Path(args.region))
    constraint = constraintFromConfig_create(settings.config.constraint, region)
    with X11PointerSeat(args.display) as seat:
        if pointer_recheck(constraint, seat):
            print(f"warped to {point_format(seat.pointerPosition_get())}")
        else:
            print("pointer inside region")


COMMANDS = {
    "outline": outlineCommand_run,
    "confine": confineCommand_run,
    "recover": recoverCommand_run,
    "recheck": recheckCommand_run,
}


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main entry point for the ptrconfine command

    Args:
        argv: Argument list, defaults to sys.argv[1:]
    """
    args = parser_create().parse_args(argv)

    try:
        config = ConfigLoader.configWithOverrides_load(
            Path(args.config) if args.config else None,
            backend=args.backend,
            min_edge_distance=args.min_edge_distance,
            fixed_step=args.fixed_step,
            origin=args.origin,
            log_level=logLevelOverride_get(args),
        )
        logging_setup(config.logging.level, config.logging.format, config.logging.file)
        settings.initialize(config)

        COMMANDS[args.command](args)
        sys.exit(0)

    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
