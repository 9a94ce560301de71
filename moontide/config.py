import logging
from pathlib import Path
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from moontide.errors import ConfigError
from moontide.tides.catalog import DEFAULT_REFERENCE_POINT
from moontide.tides.estimator import DEFAULT_TIMEZONE
from moontide.types import GeoCoordinate, PrecisionTier

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "moontide" / "config.toml"

# Seoul City Hall, used whenever no observer location is supplied.
FALLBACK_LATITUDE_DEG = 37.5665
FALLBACK_LONGITUDE_DEG = 126.9780
FALLBACK_SITE_NAME = "서울"


class Config:
    def __init__(self, data: dict):
        self._data = data

    @property
    def site_latitude_deg(self):
        return self._data.get("site", {}).get("latitude_deg", FALLBACK_LATITUDE_DEG)

    @property
    def site_longitude_deg(self):
        return self._data.get("site", {}).get("longitude_deg", FALLBACK_LONGITUDE_DEG)

    @property
    def site_name(self):
        site = self._data.get("site", {})
        if "name" in site:
            return site["name"]
        if "latitude_deg" in site or "longitude_deg" in site:
            return None
        return FALLBACK_SITE_NAME

    @property
    def site_coordinate(self) -> GeoCoordinate:
        try:
            lat = float(self.site_latitude_deg)
            lon = float(self.site_longitude_deg)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid [site] coordinate: {e}") from e
        return GeoCoordinate(lat, lon)

    @property
    def timezone_name(self) -> str:
        return self._data.get("clock", {}).get("timezone", DEFAULT_TIMEZONE)

    @property
    def timezone(self):
        name = self.timezone_name
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {name}") from e

    @property
    def precision(self) -> PrecisionTier:
        value = self._data.get("clock", {}).get("precision", PrecisionTier.SIMPLE.value)
        try:
            return PrecisionTier.parse(value)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    @property
    def reference_point(self) -> str:
        return self._data.get("clock", {}).get("reference_point", DEFAULT_REFERENCE_POINT)

    @property
    def catalog_path(self):
        path = self._data.get("catalog", {}).get("path", None)
        if not path:
            return None
        return Path(path).expanduser()

    @property
    def reference_points(self) -> list[dict]:
        entries = self._data.get("reference_points", [])
        if not isinstance(entries, list):
            raise ConfigError("[[reference_points]] must be an array of tables")
        return entries


def load_config(path: Path | None = None) -> Config:
    explicit_path = path
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Return default config if default file missing
        logging.debug(f"No config at {path}, using defaults")
        return Config({})

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

    logging.debug(f"Loaded config from {path}")
    return Config(data)
