"""
Grade resolution - KGS, Fish-Eye and Bowtie grades from the lookup tables.

KGS and Fish-Eye come from one exact-match query on (table width, crown
angle, pavilion depth). Bowtie comes from a second query on crown angle
with the halves-angle average bracketed by the row's min/max. Several rows
may match; each grade column reduces to its lowest numeric value, as the
grading sheets require.

The KGS query is load-bearing: a LookupFailure there propagates. A Bowtie
failure is logged and leaves that grade None.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Mapping, Optional

from .lookup import LookupFailure, LookupSource
from .measurements import parse_number
from .models import GRADE_TABLE_MODELS

logger = logging.getLogger(__name__)

# Shape profile name → (KGS/Fish-Eye table, Bowtie table)
GRADE_TABLES = {
    shape: (kgs_model.__tablename__, bowtie_model.__tablename__)
    for shape, (kgs_model, bowtie_model) in GRADE_TABLE_MODELS.items()
}


@dataclass
class GradeResult:
    kgs: Optional[float] = None
    bowtie: Optional[float] = None
    feye: Optional[float] = None

    # Primary / secondary / tertiary naming used by callers that don't care
    # which grading scale is which
    @property
    def primary(self) -> Optional[float]:
        return self.kgs

    @property
    def secondary(self) -> Optional[float]:
        return self.bowtie

    @property
    def tertiary(self) -> Optional[float]:
        return self.feye

    def to_dict(self) -> dict:
        return asdict(self)


def lowest_grade(rows: list[dict], column: str) -> Optional[float]:
    """Lowest numeric value of a column across rows. Non-numeric cells are ignored."""
    values = [parse_number(row.get(column)) for row in rows]
    values = [v for v in values if v is not None]
    return min(values) if values else None


def resolve_grades(lookup: LookupSource, table_width, crown_angle, pavilion_depth,
                   shape: Optional[str], halves_angle_avg=None) -> GradeResult:
    """
    Resolve the three grades for one stone.

    Missing or non-numeric proportions, or a shape without grade tables,
    give an all-None result without touching the lookup source.
    """
    result = GradeResult()

    width = parse_number(table_width)
    crown = parse_number(crown_angle)
    depth = parse_number(pavilion_depth)
    if width is None or crown is None or depth is None:
        logger.debug("Grade lookup skipped - incomplete proportions")
        return result

    tables = GRADE_TABLES.get(shape) if shape else None
    if tables is None:
        logger.info("No grade tables for shape %r", shape)
        return result
    kgs_table, bowtie_table = tables

    # 1. KGS + Fish-Eye - failures propagate
    rows = lookup.query_equals(kgs_table, {
        "table_width": width,
        "crown_angle": crown,
        "pavilion_depth": depth,
    })
    result.kgs = lowest_grade(rows, "kgs")
    result.feye = lowest_grade(rows, "feye")

    # 2. Bowtie - optional, failures are recovered
    halves = parse_number(halves_angle_avg)
    if halves is not None:
        try:
            bowtie_rows = lookup.query_range(
                bowtie_table,
                {"crown_angle": crown},
                ("halves_min", "halves_max", halves),
            )
            result.bowtie = lowest_grade(bowtie_rows, "bowtie")
        except LookupFailure as e:
            logger.warning("Bowtie lookup failed for %s: %s", shape, e)

    return result


def resolve_grades_for_fields(lookup: LookupSource, fields: Mapping[str, str]) -> GradeResult:
    """Resolve grades straight from a normalized field set."""
    return resolve_grades(
        lookup,
        table_width=fields.get("tableWidth"),
        crown_angle=fields.get("crown"),
        pavilion_depth=fields.get("pavilionDepth"),
        shape=fields.get("shape"),
        halves_angle_avg=fields.get("halvesAngleAvg"),
    )
