import datetime
import math

from moontide.types import MoonPhaseReading, PhaseLabel, PrecisionTier
from .lunar import precise_moon_phase, simple_phase
from .time import to_julian_date


# Upper bounds, checked in order. The quarter and full windows are
# narrower than the crescent and gibbous ones.
_PHASE_BOUNDARIES = (
    (0.22, PhaseLabel.WAXING_CRESCENT),
    (0.28, PhaseLabel.FIRST_QUARTER),
    (0.47, PhaseLabel.WAXING_GIBBOUS),
    (0.53, PhaseLabel.FULL),
    (0.72, PhaseLabel.WANING_GIBBOUS),
    (0.78, PhaseLabel.LAST_QUARTER),
)


def illumination_percent(phase: float) -> float:
    return (1.0 - math.cos(phase * 2.0 * math.pi)) / 2.0 * 100.0


def lunar_day_index(phase: float, synodic_month_days: float) -> int:
    day = math.floor(phase * synodic_month_days) + 1
    return max(1, min(30, day))


def phase_label(phase: float) -> PhaseLabel:
    if phase < 0.03 or phase > 0.97:
        return PhaseLabel.NEW
    for upper, label in _PHASE_BOUNDARIES:
        if phase < upper:
            return label
    return PhaseLabel.WANING_CRESCENT


def phase_reading(phase: float, tier: PrecisionTier) -> MoonPhaseReading:
    return MoonPhaseReading(
        phase=phase,
        illumination_percent=illumination_percent(phase),
        lunar_day=lunar_day_index(phase, tier.synodic_month_days),
        label=phase_label(phase),
        tier=tier,
    )


def compute_moon_phase(
    instant: datetime.datetime,
    tier: PrecisionTier | str = PrecisionTier.SIMPLE,
) -> MoonPhaseReading:
    tier = PrecisionTier.parse(tier)
    if tier is PrecisionTier.SIMPLE:
        phase = simple_phase(instant)
    else:
        phase = precise_moon_phase(to_julian_date(instant))
    return phase_reading(phase, tier)
