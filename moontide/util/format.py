from typing import Tuple


def _seconds_width(precision: int) -> int:
    return 3 + precision if precision > 0 else 2


def _wrap_hours(hours: float) -> float:
    return hours % 24.0


def _split_dms(angle_deg: float, precision: int) -> Tuple[int, int, int, float]:
    sign = -1 if angle_deg < 0 else 1
    a = abs(angle_deg)
    total_seconds = round(a * 3600.0, precision)
    deg = int(total_seconds // 3600)
    rem = total_seconds - deg * 3600
    minutes = int(rem // 60)
    seconds = rem - minutes * 60
    return sign, deg, minutes, seconds


def _split_hms(hours: float, precision: int) -> Tuple[int, int, float]:
    h = _wrap_hours(hours)
    total_seconds = round(h * 3600.0, precision) % (24.0 * 3600.0)
    hours_int = int(total_seconds // 3600)
    rem = total_seconds - hours_int * 3600
    minutes = int(rem // 60)
    seconds = rem - minutes * 60
    return hours_int, minutes, seconds


def deg_to_hms(deg: float, precision: int = 2) -> str:
    h, m, s = _split_hms(deg / 15.0, precision)
    s_fmt = f"{s:0{_seconds_width(precision)}.{precision}f}"
    return f"{h:02d}:{m:02d}:{s_fmt}"


def deg_to_dms(deg: float, precision: int = 2) -> str:
    sign_val, d, m, s = _split_dms(deg, precision)
    sign = "-" if sign_val < 0 else "+"
    s_fmt = f"{s:0{_seconds_width(precision)}.{precision}f}"
    return f"{sign}{d:02d}:{m:02d}:{s_fmt}"


def format_angle(deg: float, style: str = "deg", precision: int = 2) -> str:
    if style == "deg":
        return f"{deg:.{precision}f}°"
    if style == "hms":
        return deg_to_hms(deg, precision=precision)
    if style == "dms":
        return deg_to_dms(deg, precision=precision)
    raise ValueError(f"Unknown angle style: {style}")


def format_offset(offset_minutes: int) -> str:
    """Render a tidal timing offset as signed hours and minutes, e.g. +1:10."""
    if offset_minutes == 0:
        return "0:00"
    sign = "-" if offset_minutes < 0 else "+"
    hours, minutes = divmod(abs(int(offset_minutes)), 60)
    return f"{sign}{hours}:{minutes:02d}"
