import csv
import logging
from pathlib import Path
from typing import Iterable, Iterator

from moontide.errors import CatalogError, UnknownReferencePointError
from moontide.types import GeoCoordinate, ReferencePoint


BUILTIN_REFERENCE_POINTS = (
    ReferencePoint("busan", "부산", 70, GeoCoordinate(35.1, 129.0), builtin=True),
    ReferencePoint("gangneung", "강릉", 60, GeoCoordinate(37.7, 128.9), builtin=True),
    ReferencePoint("wonsan", "원산", 30, GeoCoordinate(39.1, 127.4), builtin=True),
    ReferencePoint("incheon", "인천", 0, GeoCoordinate(37.4, 126.6), builtin=True),
    ReferencePoint("gunsan", "군산", -60, GeoCoordinate(35.9, 126.7), builtin=True),
    ReferencePoint("mokpo", "목포", -120, GeoCoordinate(34.8, 126.4), builtin=True),
)

DEFAULT_REFERENCE_POINT = "incheon"


def _normalize_key(key: str) -> str:
    return key.strip().lower()


class ReferenceCatalog:
    """Built-in ports plus user-added reference points, keyed by name."""

    def __init__(self, points: Iterable[ReferencePoint] = ()):
        self._points: dict[str, ReferencePoint] = {
            p.key: p for p in BUILTIN_REFERENCE_POINTS
        }
        for point in points:
            self.add(point)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _normalize_key(key) in self._points

    def __iter__(self) -> Iterator[ReferencePoint]:
        return iter(self._points.values())

    def __len__(self) -> int:
        return len(self._points)

    def keys(self) -> list[str]:
        return list(self._points)

    def points(self) -> list[ReferencePoint]:
        return list(self._points.values())

    def get(self, key: str) -> ReferencePoint:
        try:
            return self._points[_normalize_key(key)]
        except KeyError:
            raise UnknownReferencePointError(f"Unknown reference point: {key}") from None

    def add(self, point: ReferencePoint) -> ReferencePoint:
        key = _normalize_key(point.key)
        if not key:
            raise CatalogError("Reference point key must not be empty")
        existing = self._points.get(key)
        if existing is not None and existing.builtin:
            raise CatalogError(f"Cannot replace built-in reference point: {key}")
        if existing is not None:
            logging.debug(f"Replacing reference point {key}")
        point = ReferencePoint(
            key=key,
            name=point.name,
            offset_minutes=int(point.offset_minutes),
            coordinate=point.coordinate,
            builtin=False,
        )
        self._points[key] = point
        return point

    def remove(self, key: str) -> ReferencePoint:
        point = self.get(key)
        if point.builtin:
            raise CatalogError(f"Cannot remove built-in reference point: {point.key}")
        return self._points.pop(point.key)


def reference_point_from_mapping(data: dict) -> ReferencePoint:
    try:
        key = str(data["key"]).strip()
        offset = int(data["offset_minutes"])
    except KeyError as e:
        raise CatalogError(f"Reference point is missing field {e.args[0]!r}") from None
    except (TypeError, ValueError):
        raise CatalogError(f"Invalid offset_minutes for reference point: {data.get('offset_minutes')!r}") from None
    name = _parse_optional(data.get("name")) or key
    lat = _parse_float(data.get("latitude_deg"))
    lon = _parse_float(data.get("longitude_deg"))
    coordinate = None
    if lat is not None and lon is not None:
        coordinate = GeoCoordinate(lat, lon)
    elif lat is not None or lon is not None:
        raise CatalogError(f"Reference point {key} needs both latitude_deg and longitude_deg")
    return ReferencePoint(key=key, name=name, offset_minutes=offset, coordinate=coordinate)


def load_reference_points_csv(path: Path) -> list[ReferencePoint]:
    if not path.exists():
        raise FileNotFoundError(f"Reference point catalog not found: {path}")
    points: list[ReferencePoint] = []
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            if not (row.get("key") or "").strip():
                logging.warning(f"Skipping row {line_no} of {path}: missing key")
                continue
            points.append(reference_point_from_mapping(row))
    return points


def catalog_from_config(config) -> ReferenceCatalog:
    catalog = ReferenceCatalog()
    for entry in config.reference_points:
        catalog.add(reference_point_from_mapping(entry))
    csv_path = config.catalog_path
    if csv_path is not None:
        for point in load_reference_points_csv(csv_path):
            catalog.add(point)
    return catalog


def _parse_float(value) -> float | None:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    value = value.strip()
    if not value:
        return None
    return float(value)


def _parse_optional(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
