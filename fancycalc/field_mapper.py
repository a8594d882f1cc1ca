"""
Field mapper - applies a shape profile's rules to a parsed export.

Numeric rules read their source key, round to the rule's step and store the
string under the field name. Non-numeric rules (grade letters) copy the raw
value. The profile's post-processing hook runs last and may override
anything the generic pass produced.
"""

import logging
from typing import Mapping, Optional

from .derivation import derive_fields
from .measurements import parse_measurements, parse_number
from .rounding import round_to_step
from .shapes.profiles import ShapeProfile
from .shapes.registry import get_profile, resolve_shape_name

logger = logging.getLogger(__name__)

DEFAULT_ROUNDING = 1


def map_fields(measurements: Mapping[str, str], profile: ShapeProfile) -> dict:
    """Normalized fields for one profile. Unmappable fields are left out."""
    fields = {}
    for name, rule in profile.fields.items():
        if not rule.source_key or rule.source_key not in measurements:
            continue
        raw = measurements[rule.source_key]

        if not rule.numeric:
            if raw.strip():
                fields[name] = raw.strip()
            continue

        value = parse_number(raw)
        if value is None:
            logger.debug("Skipping %s - %s=%r is not numeric", name, rule.source_key, raw)
            continue
        rounding = rule.rounding if rule.rounding is not None else DEFAULT_ROUNDING
        fields[name] = round_to_step(value, rounding)

    if profile.post_process is not None:
        overrides = profile.post_process(measurements, dict(fields))
        if overrides:
            fields.update(overrides)
    return fields


def compute_normalized_fields(raw_text: str, shape_override: Optional[str] = None) -> dict:
    """
    Full export pipeline: parse → resolve shape → derive → map.

    Mapped values win over derived values of the same name (an export that
    carries HA_D directly keeps it). The resolved profile name is returned
    under "shape"; the export's own SHAPE value, if any, under "shapeFamily".
    """
    measurements = parse_measurements(raw_text)
    shape_name = resolve_shape_name(measurements, shape_override)
    profile = get_profile(shape_name)

    fields = derive_fields(measurements, profile)
    fields.update(map_fields(measurements, profile))

    fields["shape"] = profile.name
    if measurements.get("SHAPE"):
        fields["shapeFamily"] = measurements["SHAPE"]

    logger.info("Normalized export as %s (%d fields)", profile.name, len(fields))
    return fields
