import datetime
import json
import logging
import sys
from pathlib import Path

from moontide.clock import evaluate
from moontide.config import load_config
from moontide.ephemeris.phase import compute_moon_phase
from moontide.ephemeris.time import iter_instants
from moontide.ephemeris.topocentric import compute_topocentric
from moontide.errors import CatalogError, ConfigError, MoontideError
from moontide.formatters import (
    format_phase,
    format_text,
    format_tidal_range,
    format_tidal_state,
    format_topocentric,
    to_dict,
)
from moontide.tides.catalog import catalog_from_config
from moontide.tides.estimator import compute_tidal_range, compute_tidal_state
from moontide.types import CoordinateOffset, GeoCoordinate, PrecisionTier
from moontide.util.format import format_offset


SWEEP_STEPS = {
    "day": datetime.timedelta(days=1),
    "hour": datetime.timedelta(hours=1),
}


def _json_envelope(command: str, ok: bool, data=None, error=None) -> dict:
    return {
        "ok": ok,
        "command": command,
        "timestamp_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "data": data,
        "error": error,
    }


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _init_logging(level: str | None) -> None:
    if not level:
        return
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "error": logging.ERROR,
    }
    logging.basicConfig(level=level_map.get(level, logging.INFO))


def _handle_error(command: str, args, code: str, exc: Exception, exit_code: int) -> int:
    message = str(exc)
    if args is not None and getattr(args, "json", False):
        payload = _json_envelope(
            command=command,
            ok=False,
            data=None,
            error={
                "code": code,
                "message": message,
                "details": None,
            },
        )
        _print_json(payload)
    else:
        print(message, file=sys.stderr)
    return exit_code


def _error_code(exc: Exception) -> str:
    if isinstance(exc, CatalogError):
        return "catalog_error"
    if isinstance(exc, ConfigError):
        return "invalid_config"
    return "invalid_argument"


def _config_path_from_args(args) -> Path | None:
    if args is None:
        return None
    path = getattr(args, "config", None)
    return Path(path) if path else None


def _parse_datetime_arg(value: str | None) -> datetime.datetime | None:
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt


def _instant_from_args(args) -> datetime.datetime:
    instant = _parse_datetime_arg(getattr(args, "at", None))
    if instant is None:
        return datetime.datetime.now(datetime.timezone.utc)
    return instant


def _parse_location_args(args) -> GeoCoordinate | None:
    lat = getattr(args, "latitude_deg", None)
    lon = getattr(args, "longitude_deg", None)
    if lat is None and lon is None:
        return None
    if lat is None or lon is None:
        raise ValueError(
            "Both latitude and longitude are required when specifying location"
        )
    return GeoCoordinate(latitude_deg=lat, longitude_deg=lon)


def _coordinate_or_site(args, config) -> GeoCoordinate:
    coordinate = _parse_location_args(args)
    if coordinate is not None:
        return coordinate
    site = config.site_coordinate
    logging.info(
        f"No location given, using site {config.site_name or ''} "
        f"({site.latitude_deg}, {site.longitude_deg})"
    )
    return site


def _tier_from_args(args, config) -> PrecisionTier:
    value = getattr(args, "tier", None)
    if value is None:
        return config.precision
    return PrecisionTier.parse(value)


def _selector_from_args(args, config):
    """Named port from --point, else the observer's longitude, else the default port."""
    catalog = catalog_from_config(config)
    point = getattr(args, "point", None)
    if point:
        return catalog.get(point)
    coordinate = _parse_location_args(args)
    if coordinate is not None:
        return CoordinateOffset(coordinate)
    return catalog.get(config.reference_point)


def _run(command: str, args, body) -> int:
    _init_logging(getattr(args, "log_level", None))
    try:
        config = load_config(_config_path_from_args(args))
        data, lines = body(config)
    except FileNotFoundError as e:
        return _handle_error(command, args, "not_found", e, 1)
    except (ValueError, MoontideError) as e:
        return _handle_error(command, args, _error_code(e), e, 2)

    if getattr(args, "json", False):
        _print_json(_json_envelope(command=command, ok=True, data=data, error=None))
    else:
        print("\n".join(lines))
    return 0


def run_phase(args) -> int:
    def body(config):
        instant = _instant_from_args(args)
        reading = compute_moon_phase(instant, _tier_from_args(args, config))
        lines = [f"Time (UTC):   {instant.isoformat()}"] + format_phase(reading)
        return to_dict(reading), lines

    return _run("phase", args, body)


def run_position(args) -> int:
    def body(config):
        instant = _instant_from_args(args)
        coordinate = _coordinate_or_site(args, config)
        reading = compute_topocentric(instant, coordinate)
        lines = [f"Time (UTC):   {instant.isoformat()}"] + format_topocentric(reading)
        return to_dict(reading), lines

    return _run("position", args, body)


def run_tide(args) -> int:
    def body(config):
        instant = _instant_from_args(args)
        selector = _selector_from_args(args, config)
        state = compute_tidal_state(instant, selector)
        tidal_range = compute_tidal_range(instant, config.timezone)
        point = selector if not isinstance(selector, CoordinateOffset) else None
        lines = format_tidal_state(state, point) + format_tidal_range(tidal_range)
        data = {
            "reference_point": to_dict(point),
            "tidal_state": to_dict(state),
            "tidal_range": to_dict(tidal_range),
        }
        return data, lines

    return _run("tide", args, body)


def run_range(args) -> int:
    def body(config):
        instant = _instant_from_args(args)
        reading = compute_tidal_range(instant, config.timezone)
        return to_dict(reading), format_tidal_range(reading)

    return _run("range", args, body)


def run_clock(args) -> int:
    def body(config):
        instant = _instant_from_args(args)
        reading = evaluate(
            instant,
            _coordinate_or_site(args, config),
            selector=_selector_from_args(args, config),
            tier=_tier_from_args(args, config),
            tz=config.timezone,
        )
        return to_dict(reading), [format_text(reading)]

    return _run("clock", args, body)


def run_sweep(args) -> int:
    def body(config):
        start = _instant_from_args(args)
        step = SWEEP_STEPS[getattr(args, "step", "day")]
        coordinate = _coordinate_or_site(args, config)
        selector = _selector_from_args(args, config)
        tier = _tier_from_args(args, config)
        tz = config.timezone
        rows = []
        lines = []
        for instant in iter_instants(start, step, args.count):
            reading = evaluate(instant, coordinate, selector=selector, tier=tier, tz=tz)
            rows.append(to_dict(reading))
            lines.append(
                f"{instant.isoformat()}  {reading.phase.label.korean:<4} "
                f"{reading.phase.illumination_percent:5.1f}%  "
                f"day {reading.phase.lunar_day:>2}  "
                f"{reading.tidal_state.state.korean} {reading.tidal_state.intensity:3.0f}%  "
                f"{reading.tidal_range.range.korean}"
            )
        return rows, lines

    return _run("sweep", args, body)


def run_points(args) -> int:
    def body(config):
        catalog = catalog_from_config(config)
        lines = []
        for point in catalog:
            coord = ""
            if point.coordinate is not None:
                coord = f"  ({point.coordinate.latitude_deg:.2f}, {point.coordinate.longitude_deg:.2f})"
            origin = "" if point.builtin else "  [custom]"
            lines.append(f"{point.key:12} {point.name:8} {format_offset(point.offset_minutes):>6}{coord}{origin}")
        return [to_dict(p) for p in catalog], lines

    return _run("points", args, body)


def run_doctor(args=None) -> int:
    _init_logging(getattr(args, "log_level", None))

    def check_config():
        try:
            load_config(_config_path_from_args(args))
            return {"ok": True, "detail": "loaded (defaults applied if missing)"}
        except Exception as e:
            return {"ok": False, "detail": f"invalid config: {e}"}

    def check(fn, detail):
        try:
            config = load_config(_config_path_from_args(args))
            fn(config)
            return {"ok": True, "detail": detail(config)}
        except Exception as e:
            return {"ok": False, "detail": str(e)}

    checks = {
        "config": check_config(),
        "site": check(
            lambda c: c.site_coordinate,
            lambda c: f"{c.site_latitude_deg}, {c.site_longitude_deg}",
        ),
        "timezone": check(lambda c: c.timezone, lambda c: c.timezone_name),
        "precision": check(lambda c: c.precision, lambda c: c.precision.value),
        "catalog": check(
            lambda c: catalog_from_config(c).get(c.reference_point),
            lambda c: f"{len(catalog_from_config(c))} reference points",
        ),
    }

    ok = all(c["ok"] for c in checks.values())

    if args is not None and getattr(args, "json", False):
        payload = _json_envelope(
            command="doctor",
            ok=ok,
            data={"checks": checks},
            error=None
            if ok
            else {
                "code": "doctor_failed",
                "message": "one or more checks failed",
                "details": None,
            },
        )
        _print_json(payload)
    else:
        print("Moontide Doctor Report")
        print("======================")

        for name, result in checks.items():
            status = "OK" if result["ok"] else "INVALID"
            print(f"{name:12} : {status} ({result['detail']})")

        if ok:
            print("\nConfiguration ready.")
        else:
            print("\nSome settings are invalid.")

    return 0 if ok else 1
