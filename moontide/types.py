from dataclasses import dataclass
import datetime
import enum
from typing import Union

from moontide.errors import InvalidCoordinateError


SIMPLE_SYNODIC_MONTH_DAYS = 29.53059
PRECISE_SYNODIC_MONTH_DAYS = 29.530588861

# Known new moons used as phase origins for each tier.
SIMPLE_REFERENCE_NEW_MOON = datetime.datetime(2024, 12, 1, 6, 21, tzinfo=datetime.timezone.utc)
PRECISE_REFERENCE_NEW_MOON = datetime.datetime(2000, 1, 6, 18, 14, tzinfo=datetime.timezone.utc)


class PrecisionTier(enum.Enum):
    SIMPLE = "simple"
    PRECISE = "precise"

    @property
    def synodic_month_days(self) -> float:
        if self is PrecisionTier.SIMPLE:
            return SIMPLE_SYNODIC_MONTH_DAYS
        return PRECISE_SYNODIC_MONTH_DAYS

    @property
    def reference_new_moon(self) -> datetime.datetime:
        if self is PrecisionTier.SIMPLE:
            return SIMPLE_REFERENCE_NEW_MOON
        return PRECISE_REFERENCE_NEW_MOON

    @classmethod
    def parse(cls, value: "str | PrecisionTier") -> "PrecisionTier":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown precision tier: {value!r} (expected one of {choices})") from None


class PhaseLabel(enum.Enum):
    NEW = "new"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL = "full"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"

    @property
    def english(self) -> str:
        return _PHASE_ENGLISH[self]

    @property
    def korean(self) -> str:
        return _PHASE_KOREAN[self]


_PHASE_ENGLISH = {
    PhaseLabel.NEW: "New Moon",
    PhaseLabel.WAXING_CRESCENT: "Waxing Crescent",
    PhaseLabel.FIRST_QUARTER: "First Quarter",
    PhaseLabel.WAXING_GIBBOUS: "Waxing Gibbous",
    PhaseLabel.FULL: "Full Moon",
    PhaseLabel.WANING_GIBBOUS: "Waning Gibbous",
    PhaseLabel.LAST_QUARTER: "Last Quarter",
    PhaseLabel.WANING_CRESCENT: "Waning Crescent",
}

_PHASE_KOREAN = {
    PhaseLabel.NEW: "삭",
    PhaseLabel.WAXING_CRESCENT: "초승달",
    PhaseLabel.FIRST_QUARTER: "상현달",
    PhaseLabel.WAXING_GIBBOUS: "상현망",
    PhaseLabel.FULL: "망",
    PhaseLabel.WANING_GIBBOUS: "하현망",
    PhaseLabel.LAST_QUARTER: "하현달",
    PhaseLabel.WANING_CRESCENT: "그믐달",
}


class TideState(enum.Enum):
    HIGH = "high"
    LOW = "low"

    @property
    def korean(self) -> str:
        return "만조" if self is TideState.HIGH else "간조"


class TidalRange(enum.Enum):
    SPRING = "spring"
    NEAP = "neap"
    INTERMEDIATE = "intermediate"

    @property
    def korean(self) -> str:
        return _RANGE_KOREAN[self]


_RANGE_KOREAN = {
    TidalRange.SPRING: "사리",
    TidalRange.NEAP: "조금",
    TidalRange.INTERMEDIATE: "중간",
}


@dataclass(frozen=True)
class GeoCoordinate:
    latitude_deg: float
    longitude_deg: float

    def __post_init__(self):
        if not -90.0 <= self.latitude_deg <= 90.0:
            raise InvalidCoordinateError(f"Latitude out of range [-90, 90]: {self.latitude_deg}")
        if not -180.0 <= self.longitude_deg <= 180.0:
            raise InvalidCoordinateError(f"Longitude out of range [-180, 180]: {self.longitude_deg}")


@dataclass(frozen=True)
class ReferencePoint:
    key: str
    name: str
    offset_minutes: int
    coordinate: GeoCoordinate | None = None
    builtin: bool = False


@dataclass(frozen=True)
class NamedOffset:
    """Tidal timing offset taken directly from a reference point."""

    offset_minutes: float


@dataclass(frozen=True)
class CoordinateOffset:
    """Tidal timing offset approximated from an observer's longitude."""

    coordinate: GeoCoordinate


ReferenceSelector = Union[NamedOffset, CoordinateOffset]


@dataclass(frozen=True)
class MoonPhaseReading:
    phase: float
    illumination_percent: float
    lunar_day: int
    label: PhaseLabel
    tier: PrecisionTier

    @property
    def angle_deg(self) -> float:
        return self.phase * 360.0

    @property
    def is_waxing(self) -> bool:
        return self.phase < 0.5


@dataclass(frozen=True)
class TopocentricReading:
    right_ascension_deg: float
    declination_deg: float
    hour_angle_deg: float
    altitude_deg: float
    azimuth_deg: float
    parallactic_angle_deg: float
    ecliptic_longitude_deg: float
    ecliptic_latitude_deg: float

    @property
    def is_visible(self) -> bool:
        return self.altitude_deg > 0.0


@dataclass(frozen=True)
class TidalStateReading:
    state: TideState
    intensity: float
    adjusted_angle_deg: float
    offset_minutes: float


@dataclass(frozen=True)
class TidalRangeReading:
    range: TidalRange
    separation_deg: float


@dataclass(frozen=True)
class ClockReading:
    instant: datetime.datetime
    coordinate: GeoCoordinate
    phase: MoonPhaseReading
    tidal_state: TidalStateReading
    tidal_range: TidalRangeReading
    moon_cycle_angle_deg: float
    sun_cycle_angle_deg: float
    topocentric: TopocentricReading | None = None
    reference_point: ReferencePoint | None = None
