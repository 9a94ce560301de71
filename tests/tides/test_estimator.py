import datetime

import pytest

from moontide.tides.catalog import ReferenceCatalog
from moontide.tides.estimator import (
    compute_tidal_range,
    compute_tidal_state,
    longitude_offset_minutes,
    moon_cycle_angle,
    offset_to_degrees,
    sun_cycle_angle,
    tidal_range,
    tidal_state,
)
from moontide.types import (
    CoordinateOffset,
    GeoCoordinate,
    NamedOffset,
    TidalRange,
    TideState,
)

UTC = datetime.timezone.utc
EPOCH = datetime.datetime(1970, 1, 1, tzinfo=UTC)
LUNAR_DAY_US = 89428328500


def _at_moon_angle_quarters(quarters: int, cycles: int = 20000) -> datetime.datetime:
    # A quarter of the lunar day is a whole number of microseconds.
    us = LUNAR_DAY_US * cycles + (LUNAR_DAY_US // 4) * quarters
    return EPOCH + datetime.timedelta(microseconds=us)


def _tz_for_sun_angle(instant: datetime.datetime, angle: float) -> datetime.timezone:
    utc_minutes = instant.hour * 60 + instant.minute
    target = (780 + angle / 360.0 * 1440) % 1440
    offset = (target - utc_minutes) % 1440
    if offset > 720:
        offset -= 1440
    return datetime.timezone(datetime.timedelta(minutes=offset))


def test_moon_cycle_angle_at_epoch():
    assert moon_cycle_angle(EPOCH) == 0.0


def test_moon_cycle_angle_quarter():
    assert moon_cycle_angle(_at_moon_angle_quarters(1)) == pytest.approx(90.0, abs=1e-9)
    assert moon_cycle_angle(_at_moon_angle_quarters(3)) == pytest.approx(270.0, abs=1e-9)


def test_moon_cycle_angle_range(sample_instants):
    for instant in sample_instants:
        assert 0.0 <= moon_cycle_angle(instant) < 360.0


def test_high_tide_at_quarter_with_zero_offset():
    instant = _at_moon_angle_quarters(1)
    incheon = ReferenceCatalog().get("incheon")
    assert incheon.offset_minutes == 0
    reading = compute_tidal_state(instant, incheon)
    assert reading.state is TideState.HIGH
    assert reading.intensity == pytest.approx(100.0, abs=1e-9)


def test_low_tide_on_cardinal_zero():
    reading = tidal_state(_at_moon_angle_quarters(0), 0)
    assert reading.state is TideState.LOW
    assert reading.intensity == pytest.approx(100.0, abs=1e-9)
    reading = tidal_state(_at_moon_angle_quarters(2), 0)
    assert reading.state is TideState.LOW


def test_offset_shifts_adjusted_angle():
    instant = _at_moon_angle_quarters(1)
    reading = tidal_state(instant, 70)
    assert reading.adjusted_angle_deg == pytest.approx(90.0 + offset_to_degrees(70))
    assert reading.intensity == pytest.approx(100.0 - offset_to_degrees(70))
    assert reading.state is TideState.HIGH


def test_negative_offset_wraps():
    reading = tidal_state(_at_moon_angle_quarters(0), -120)
    assert 0.0 <= reading.adjusted_angle_deg < 360.0
    assert reading.adjusted_angle_deg > 359.0
    assert reading.state is TideState.LOW


def test_offset_to_degrees():
    assert offset_to_degrees(89428.3285) == pytest.approx(360.0)
    assert offset_to_degrees(70) == pytest.approx(0.28179, abs=1e-5)
    assert offset_to_degrees(0) == 0.0


def test_longitude_offset_minutes():
    assert longitude_offset_minutes(135.0) == 0.0
    assert longitude_offset_minutes(126.6) == pytest.approx(-33.6)


def test_selectors_resolve_to_offsets():
    instant = datetime.datetime(2025, 5, 5, 5, 5, tzinfo=UTC)
    coordinate = GeoCoordinate(37.4, 126.6)
    expected = tidal_state(instant, (126.6 - 135.0) * 4)
    assert compute_tidal_state(instant, CoordinateOffset(coordinate)) == expected
    assert compute_tidal_state(instant, coordinate) == expected
    assert compute_tidal_state(instant, NamedOffset(-60)) == tidal_state(instant, -60)


def test_unsupported_selector():
    with pytest.raises(TypeError):
        compute_tidal_state(datetime.datetime(2025, 1, 1, tzinfo=UTC), "incheon")


def test_intensity_bounds(sample_instants):
    for instant in sample_instants:
        for offset in range(-180, 181, 15):
            reading = tidal_state(instant, offset)
            assert 0.0 <= reading.intensity <= 100.0
            assert reading.intensity >= 55.0


def test_sun_cycle_angle_true_south_at_1300_local():
    # 13:00 KST
    instant = datetime.datetime(2025, 6, 1, 4, 0, tzinfo=UTC)
    assert sun_cycle_angle(instant, "Asia/Seoul") == pytest.approx(0.0)
    assert sun_cycle_angle(instant) == pytest.approx(0.0)
    assert sun_cycle_angle(instant + datetime.timedelta(hours=6), "Asia/Seoul") == pytest.approx(90.0)
    assert sun_cycle_angle(instant - datetime.timedelta(hours=1), "Asia/Seoul") == pytest.approx(345.0)


def test_sun_cycle_angle_custom_zone():
    instant = datetime.datetime(2025, 6, 1, 13, 0, tzinfo=UTC)
    assert sun_cycle_angle(instant, UTC) == pytest.approx(0.0)
    assert sun_cycle_angle(instant, "UTC") == pytest.approx(0.0)


@pytest.mark.parametrize(
    "sun_angle, expected",
    [
        (90.0, TidalRange.SPRING),
        (270.0, TidalRange.SPRING),
        (180.0, TidalRange.NEAP),
        (0.0, TidalRange.NEAP),
        (135.0, TidalRange.INTERMEDIATE),
        (45.0, TidalRange.INTERMEDIATE),
    ],
)
def test_tidal_range_classification(sun_angle, expected):
    instant = _at_moon_angle_quarters(1)
    tz = _tz_for_sun_angle(instant, sun_angle)
    reading = tidal_range(instant, tz)
    assert reading.range is expected


def test_tidal_range_separation_bounds(sample_instants):
    for instant in sample_instants:
        reading = compute_tidal_range(instant)
        assert 0.0 <= reading.separation_deg <= 180.0


def test_korean_names():
    assert TideState.HIGH.korean == "만조"
    assert TideState.LOW.korean == "간조"
    assert TidalRange.SPRING.korean == "사리"
    assert TidalRange.NEAP.korean == "조금"
