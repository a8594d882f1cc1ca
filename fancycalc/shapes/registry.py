"""
Shape registry - maps shape names to ShapeProfiles.

The export's SHAPE value is a coarse family ("Pear", "Oval", "Marquise").
Families with a registered detector are split into 8-mains / 4-mains
variants by looking at which pavilion keys the scanner wrote.
"""

import logging
from typing import Callable, Mapping, Optional

from ..config import settings
from .profiles import FieldRule, ShapeProfile, grade_rule

logger = logging.getLogger(__name__)

FALLBACK_SHAPE = "Pear 8 Mains"

# Only written by the scanner when the stone has 8 pavilion mains
CURVE_ANGLE_KEY = "PAVILION_FANCY_CURVE_ANGLE_DEG"

# Fields shared by every fancy shape. Update here to match the grading sheets.
COMMON_FIELDS = {
    "tableWidth": FieldRule(min=48, max=72, step=1, source_key="WIDTH_TABLE_PC", rounding=1),
    "crown": FieldRule(min=28, max=48, step=0.5, source_key="CROWN_FANCY_CURVE_ANGLE_DEG", rounding=0.5),
    "pavilionDepth": FieldRule(min=35, max=55, step=0.2, source_key="PAVILION_DEPTH_PC", rounding=0.2),
    "halvesAngle": FieldRule(min=35.1, max=48, step=0.1),  # derived, dropdown only
    "lowerLHL": FieldRule(min=65, max=85, step=1, source_key="LENGTH_GIRDLE_FACET", rounding=1),
    "starRatio": FieldRule(min=35, max=65, step=1, source_key="STAR_RATIO_PC", rounding=1),
    "haD": FieldRule(min=40, max=42, step=0.5, source_key="HA_D", rounding=0.5),
    "crownHeight": FieldRule(min=0, max=100, step=0.5, source_key="CROWN_FANCY_CURVE_HEIGHT_PC", rounding=0.5),
    "azimuth": grade_rule("AZIMUTH"),
    "symmetry": grade_rule("SYMMETRY"),
}


def _fancy_profile(name: str, pavilion_curve_key: str) -> ShapeProfile:
    """Common fields plus a pavilion curve read from the shape's own export key."""
    fields = dict(COMMON_FIELDS)
    fields["pavilionCurve"] = FieldRule(
        min=0, max=100, step=0.2, source_key=pavilion_curve_key, rounding=0.1,
    )
    return ShapeProfile(name=name, fields=fields)


SHAPE_LIBRARY: dict[str, ShapeProfile] = {
    "Pear 8 Mains": _fancy_profile("Pear 8 Mains", CURVE_ANGLE_KEY),
    "Pear 4 Mains": _fancy_profile("Pear 4 Mains", "PAVILION_FANCY_HEAD_ANGLE_DEG"),
    "Oval 8 Mains": _fancy_profile("Oval 8 Mains", CURVE_ANGLE_KEY),
    "Oval 4 Mains": _fancy_profile("Oval 4 Mains", "PAVILION_FANCY_WING_ANGLE_DEG"),
    "Marq 8 Mains": _fancy_profile("Marq 8 Mains", CURVE_ANGLE_KEY),
    "Marq 4 Mains": _fancy_profile("Marq 4 Mains", "PAVILION_FANCY_WING_ANGLE_DEG"),
}


def _mains_detector(eight_mains: str, four_mains: str) -> Callable[[Mapping[str, str]], str]:
    def detect(measurements: Mapping[str, str]) -> str:
        return eight_mains if CURVE_ANGLE_KEY in measurements else four_mains
    return detect


SHAPE_VARIANTS: dict[str, Callable[[Mapping[str, str]], str]] = {
    "Marquise": _mains_detector("Marq 8 Mains", "Marq 4 Mains"),
    "Oval": _mains_detector("Oval 8 Mains", "Oval 4 Mains"),
    "Pear": _mains_detector("Pear 8 Mains", "Pear 4 Mains"),
}


def resolve_shape_name(measurements: Mapping[str, str], explicit: Optional[str] = None) -> Optional[str]:
    """
    Work out the profile name for an export.

    An explicit shape (picked by the user) beats the export's SHAPE value.
    Either one is run through the family detectors; anything else is taken
    as a profile name as-is. Returns None when no shape is known at all.
    """
    raw = (explicit or measurements.get("SHAPE") or "").strip()
    if not raw:
        return None
    detector = SHAPE_VARIANTS.get(raw)
    if detector:
        return detector(measurements)
    return raw


def default_profile() -> ShapeProfile:
    return SHAPE_LIBRARY.get(settings.DEFAULT_SHAPE) or SHAPE_LIBRARY[FALLBACK_SHAPE]


def get_profile(shape_name: Optional[str]) -> ShapeProfile:
    """Returns the profile for a shape name, or the default profile. Never raises."""
    profile = SHAPE_LIBRARY.get(shape_name) if shape_name else None
    if profile is None:
        fallback = default_profile()
        logger.info("No shape profile for %r - using %s", shape_name, fallback.name)
        return fallback
    return profile


def has_profile(shape_name: str) -> bool:
    """Check if a profile is registered under this exact name."""
    return shape_name in SHAPE_LIBRARY


def list_profiles() -> list[str]:
    """List all registered profile names."""
    return list(SHAPE_LIBRARY.keys())
