__version__ = "0.3.0"

from .types import (
    ClockReading,
    CoordinateOffset,
    GeoCoordinate,
    MoonPhaseReading,
    NamedOffset,
    PhaseLabel,
    PrecisionTier,
    ReferencePoint,
    TidalRange,
    TidalRangeReading,
    TidalStateReading,
    TideState,
    TopocentricReading,
)
from .ephemeris import compute_moon_phase, compute_topocentric
from .tides import compute_tidal_range, compute_tidal_state
from .clock import evaluate

__all__ = [
    "__version__",
    "ClockReading",
    "CoordinateOffset",
    "GeoCoordinate",
    "MoonPhaseReading",
    "NamedOffset",
    "PhaseLabel",
    "PrecisionTier",
    "ReferencePoint",
    "TidalRange",
    "TidalRangeReading",
    "TidalStateReading",
    "TideState",
    "TopocentricReading",
    "compute_moon_phase",
    "compute_topocentric",
    "compute_tidal_range",
    "compute_tidal_state",
    "evaluate",
]
