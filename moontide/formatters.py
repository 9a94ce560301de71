import datetime
import enum
import json
from dataclasses import fields, is_dataclass

from .types import (
    ClockReading,
    MoonPhaseReading,
    ReferencePoint,
    TidalRangeReading,
    TidalStateReading,
    TopocentricReading,
)
from .util.format import format_angle, format_offset

# Derived properties exported alongside the dataclass fields.
_EXTRA_PROPERTIES = {
    MoonPhaseReading: ("angle_deg", "is_waxing"),
    TopocentricReading: ("is_visible",),
}


def to_dict(value):
    if is_dataclass(value) and not isinstance(value, type):
        data = {f.name: to_dict(getattr(value, f.name)) for f in fields(value)}
        for name in _EXTRA_PROPERTIES.get(type(value), ()):
            data[name] = getattr(value, name)
        return data
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [to_dict(v) for v in value]
    return value


def format_json(value) -> str:
    return json.dumps(to_dict(value), indent=2, ensure_ascii=False)


def format_phase(reading: MoonPhaseReading) -> list[str]:
    label = reading.label
    trend = "waxing" if reading.is_waxing else "waning"
    return [
        f"Phase:        {label.korean} ({label.english}), {trend}",
        f"Progress:     {reading.phase * 100:.1f}% ({format_angle(reading.angle_deg, precision=1)})",
        f"Illumination: {reading.illumination_percent:.1f}%",
        f"Lunar day:    {reading.lunar_day}",
    ]


def format_topocentric(reading: TopocentricReading) -> list[str]:
    visible = "above horizon" if reading.is_visible else "below horizon"
    return [
        f"RA:           {format_angle(reading.right_ascension_deg, style='hms')}",
        f"Dec:          {format_angle(reading.declination_deg, style='dms')}",
        f"Hour angle:   {format_angle(reading.hour_angle_deg)}",
        f"Altitude:     {format_angle(reading.altitude_deg)} ({visible})",
        f"Azimuth:      {format_angle(reading.azimuth_deg)}",
        f"Parallactic:  {format_angle(reading.parallactic_angle_deg)}",
    ]


def format_tidal_state(reading: TidalStateReading, point: ReferencePoint | None = None) -> list[str]:
    lines = []
    if point is not None:
        lines.append(f"Port:         {point.name} ({format_offset(point.offset_minutes)})")
    lines.append(f"Tide:         {reading.state.korean} ({reading.state.value})")
    lines.append(f"Intensity:    {reading.intensity:.0f}%")
    return lines


def format_tidal_range(reading: TidalRangeReading) -> list[str]:
    return [
        f"Range:        {reading.range.korean} ({reading.range.value})",
        f"Separation:   {format_angle(reading.separation_deg, precision=1)}",
    ]


def format_text(reading: ClockReading) -> str:
    lines: list[str] = []
    lines.append("Moon Clock")
    lines.append("==========")
    lines.append(f"Time (UTC):   {reading.instant.isoformat()}")
    lines.append(
        f"Location:     lat {reading.coordinate.latitude_deg:.4f}°, lon {reading.coordinate.longitude_deg:.4f}°"
    )
    lines.append("")
    lines.extend(format_phase(reading.phase))
    if reading.topocentric is not None:
        lines.append("")
        lines.extend(format_topocentric(reading.topocentric))
    lines.append("")
    lines.extend(format_tidal_state(reading.tidal_state, reading.reference_point))
    lines.extend(format_tidal_range(reading.tidal_range))
    lines.append(f"Moon hand:    {format_angle(reading.moon_cycle_angle_deg, precision=1)}")
    lines.append(f"Sun ring:     {format_angle(reading.sun_cycle_angle_deg, precision=1)}")
    return "\n".join(lines)
