from .format import (
    deg_to_dms,
    deg_to_hms,
    format_angle,
    format_offset,
)

__all__ = [
    "deg_to_dms",
    "deg_to_hms",
    "format_angle",
    "format_offset",
]
