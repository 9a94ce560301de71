import argparse
import sys

from moontide import __version__
from moontide.cli import commands


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to config TOML")
    parser.add_argument("--json", action="store_true", help="Output result as JSON")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        help="Logging verbosity",
    )


def _add_time(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--at", help="ISO 8601 instant (default: now, naive values are UTC)")


def _add_location(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", dest="latitude_deg", type=float, help="Observer latitude in degrees")
    parser.add_argument("--lon", dest="longitude_deg", type=float, help="Observer longitude in degrees")


def _add_tier(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--tier", choices=["simple", "precise"], help="Phase precision tier")


def _add_point(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--point", help="Reference point key (e.g. incheon, busan)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="moontide")
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    phase_parser = subparsers.add_parser("phase", help="Moon phase, illumination and lunar day")
    _add_time(phase_parser)
    _add_tier(phase_parser)
    _add_common(phase_parser)

    position_parser = subparsers.add_parser("position", help="Topocentric Moon position")
    _add_time(position_parser)
    _add_location(position_parser)
    _add_common(position_parser)

    tide_parser = subparsers.add_parser("tide", help="Heuristic high/low tide estimate")
    _add_time(tide_parser)
    _add_point(tide_parser)
    _add_location(tide_parser)
    _add_common(tide_parser)

    range_parser = subparsers.add_parser("range", help="Spring/neap tidal range estimate")
    _add_time(range_parser)
    _add_common(range_parser)

    clock_parser = subparsers.add_parser("clock", help="All readings for one instant")
    _add_time(clock_parser)
    _add_location(clock_parser)
    _add_tier(clock_parser)
    _add_point(clock_parser)
    _add_common(clock_parser)

    sweep_parser = subparsers.add_parser("sweep", help="Step simulated time and print readings")
    _add_time(sweep_parser)
    _add_location(sweep_parser)
    _add_tier(sweep_parser)
    _add_point(sweep_parser)
    sweep_parser.add_argument("--step", choices=sorted(commands.SWEEP_STEPS), default="day")
    sweep_parser.add_argument("--count", type=int, default=30, help="Number of steps")
    _add_common(sweep_parser)

    points_parser = subparsers.add_parser("points", help="List tidal reference points")
    _add_common(points_parser)

    doctor_parser = subparsers.add_parser("doctor", help="Check configuration")
    _add_common(doctor_parser)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"moontide {__version__}")
        return 0

    handlers = {
        "phase": commands.run_phase,
        "position": commands.run_position,
        "tide": commands.run_tide,
        "range": commands.run_range,
        "clock": commands.run_clock,
        "sweep": commands.run_sweep,
        "points": commands.run_points,
        "doctor": commands.run_doctor,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
