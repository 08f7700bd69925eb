"""Command-line entrypoint for terrain_diffraction."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from terrain_diffraction.analysis.path import PathConfig, analyze_path
from terrain_diffraction.config import load_settings
from terrain_diffraction.contracts import DiffractionError
from terrain_diffraction.geometry.normalize import terrain_to_path_xy
from terrain_diffraction.rf.units import Distance, Frequency


def _parse_terrain(value: str) -> list[float]:
    """Parse a comma-separated list of elevations."""
    try:
        return [float(item) for item in value.split(",") if item.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid terrain list: {value}") from exc


def _load_terrain_file(path: str) -> list[float]:
    """Load elevations from a JSON array file."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise argparse.ArgumentTypeError(f"cannot read terrain file {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise argparse.ArgumentTypeError(f"terrain file {path} must contain a JSON array")
    return [float(item) for item in payload]


def _add_path_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--p1", type=float, required=True, help="Transmitter height (m).")
    parser.add_argument("--p2", type=float, required=True, help="Receiver height (m).")
    parser.add_argument("--distance-m", type=float, required=True, help="Ground path distance (m).")
    terrain = parser.add_mutually_exclusive_group(required=True)
    terrain.add_argument("--terrain", type=_parse_terrain, help="Comma-separated elevations (m).")
    terrain.add_argument("--terrain-file", type=_load_terrain_file, help="JSON array of elevations (m).")


def build_parser() -> argparse.ArgumentParser:
    """Create and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="terrain_diffraction",
        description="Line-of-sight diffraction loss over irregular terrain.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command")
    analyze = subparsers.add_parser(
        "analyze",
        help="Estimate free-space, knife-edge and Bullington losses for one path.",
    )
    _add_path_arguments(analyze)
    analyze.add_argument("--frequency-mhz", type=float, required=True)
    analyze.add_argument("--smooth", type=int, default=0, help="Profile smoothing passes.")

    normalize = subparsers.add_parser(
        "normalize",
        help="Print terrain in the frame where the line of sight is the x axis.",
    )
    _add_path_arguments(normalize)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI application."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        return 0

    _configure_logging(args.verbose)
    terrain = args.terrain if args.terrain is not None else args.terrain_file

    try:
        if args.command == "analyze":
            config = PathConfig(
                p1=args.p1,
                p2=args.p2,
                distance=Distance(args.distance_m),
                frequency=Frequency.from_mhz(args.frequency_mhz),
                terrain=tuple(terrain),
                smoothing_passes=args.smooth,
            )
            report = analyze_path(config, load_settings())
            print(json.dumps(report.to_dict(), indent=2))
            return 0

        if args.command == "normalize":
            profile = terrain_to_path_xy(args.p1, args.p2, Distance(args.distance_m), terrain)
            print(
                json.dumps(
                    {"x": list(profile.x), "y": list(profile.y), "path_length_m": profile.path_length},
                    indent=2,
                )
            )
            return 0
    except DiffractionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
