"""
Derived fields - values the scanner export does not contain verbatim.

    halvesAngleAvg / Min / Max   four halves facet angles, step 0.1
    cwDiff                       |crown curve angle - crown wing angle|, step 0.1
    haD                          mean of halves angles 12 and 13, profile rounding (default 0.5)

A derived field is only written when its inputs are numeric. Missing inputs
leave the field absent, never zero.
"""

import logging
from typing import Mapping, Optional

from .measurements import parse_number
from .rounding import mean, round_to_step, to_decimal
from .shapes.profiles import ShapeProfile

logger = logging.getLogger(__name__)

HALVES_KEY = "HALVES_ANGLE_DEG_%d"

# Halves facets read for the statistics. The alternate set applies when the
# first halves angle is not steeper than the first pavilion main angle.
HALVES_INDICES = (1, 8, 9, 16)
HALVES_INDICES_ALT = (4, 5, 12, 13)
HALVES_COMPARE_KEY = "HALVES_ANGLE_DEG_1"
PAVILION_COMPARE_KEY = "PAVILION_ANGLE_DEG_1"

CROWN_CURVE_KEY = "CROWN_FANCY_CURVE_ANGLE_DEG"
CROWN_WING_KEY = "CROWN_FANCY_WING_ANGLE_DEG"

HA_D_INDICES = (12, 13)

HALVES_STEP = 0.1
CW_DIFF_STEP = 0.1
HA_D_DEFAULT_STEP = 0.5


def _number(measurements: Mapping[str, str], key: str) -> Optional[float]:
    return parse_number(measurements.get(key))


def halves_indices(measurements: Mapping[str, str]) -> tuple:
    """Pick the halves facet index set for this export."""
    first_halves = _number(measurements, HALVES_COMPARE_KEY)
    first_pavilion = _number(measurements, PAVILION_COMPARE_KEY)
    if first_halves is not None and first_pavilion is not None and first_halves <= first_pavilion:
        return HALVES_INDICES_ALT
    return HALVES_INDICES


def halves_angle_stats(measurements: Mapping[str, str]) -> dict:
    values = [_number(measurements, HALVES_KEY % i) for i in halves_indices(measurements)]
    values = [v for v in values if v is not None]
    if not values:
        return {}
    return {
        "halvesAngleAvg": round_to_step(mean(values), HALVES_STEP),
        "halvesAngleMin": round_to_step(min(values), HALVES_STEP),
        "halvesAngleMax": round_to_step(max(values), HALVES_STEP),
    }


def crown_wing_diff(measurements: Mapping[str, str]) -> dict:
    curve = _number(measurements, CROWN_CURVE_KEY)
    wing = _number(measurements, CROWN_WING_KEY)
    if curve is None or wing is None:
        return {}
    diff = abs(to_decimal(curve) - to_decimal(wing))
    return {"cwDiff": round_to_step(diff, CW_DIFF_STEP)}


def ha_d(measurements: Mapping[str, str], profile: Optional[ShapeProfile] = None) -> dict:
    values = [_number(measurements, HALVES_KEY % i) for i in HA_D_INDICES]
    if any(v is None for v in values):
        return {}
    rule = profile.rule("haD") if profile else None
    step = rule.rounding if rule and rule.rounding is not None else HA_D_DEFAULT_STEP
    return {"haD": round_to_step(mean(values), step)}


def derive_fields(measurements: Mapping[str, str], profile: Optional[ShapeProfile] = None) -> dict:
    """All derived fields that can be computed from this export."""
    derived = {}
    derived.update(halves_angle_stats(measurements))
    derived.update(crown_wing_diff(measurements))
    derived.update(ha_d(measurements, profile))
    logger.debug("Derived %d field(s): %s", len(derived), sorted(derived))
    return derived
