from .catalog import (
    BUILTIN_REFERENCE_POINTS,
    DEFAULT_REFERENCE_POINT,
    ReferenceCatalog,
    catalog_from_config,
    load_reference_points_csv,
)
from .estimator import (
    compute_tidal_range,
    compute_tidal_state,
    moon_cycle_angle,
    sun_cycle_angle,
    tidal_range,
    tidal_state,
)

__all__ = [
    "BUILTIN_REFERENCE_POINTS",
    "DEFAULT_REFERENCE_POINT",
    "ReferenceCatalog",
    "catalog_from_config",
    "compute_tidal_range",
    "compute_tidal_state",
    "load_reference_points_csv",
    "moon_cycle_angle",
    "sun_cycle_angle",
    "tidal_range",
    "tidal_state",
]
