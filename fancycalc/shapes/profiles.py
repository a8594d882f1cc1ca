"""
Field rules and shape profiles.

FieldRule describes one normalized field: its dropdown domain (min/max/step),
the export key it is read from, and the rounding step applied on the way in.
ShapeProfile groups the rules for one stone outline plus an optional
post-processing hook for that shape's oddities.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ..rounding import to_decimal

# Grade letters used by the non-numeric fields (azimuth, symmetry)
GRADE_LETTERS = ("EX", "VG", "G", "F")

PostProcess = Callable[[Mapping[str, str], dict], dict]


@dataclass(frozen=True)
class FieldRule:
    min: float
    max: float
    step: float
    source_key: Optional[str] = None
    rounding: Optional[float] = None
    numeric: bool = True
    choices: tuple = ()

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(f"FieldRule min {self.min} > max {self.max}")
        if self.numeric and self.step <= 0:
            raise ValueError(f"Numeric FieldRule needs a positive step, got {self.step}")

    def options(self) -> list:
        """
        Dropdown values for this field.

        Numeric rules enumerate min, min+step, ... up to max, at most two
        decimals with trailing zeros dropped ("35.1", "35.2", ... "48").
        Non-numeric rules return their fixed choices.
        """
        if not self.numeric:
            return list(self.choices)
        values = []
        current = to_decimal(self.min)
        stop = to_decimal(self.max)
        step = to_decimal(self.step)
        while current <= stop:
            shown = current.quantize(Decimal("0.01")).normalize()
            values.append(format(shown, "f"))
            current += step
        return values


def grade_rule(source_key: str) -> FieldRule:
    """Non-numeric rule for a grade-letter field copied verbatim from the export."""
    return FieldRule(min=0, max=0, step=0, source_key=source_key,
                     numeric=False, choices=GRADE_LETTERS)


@dataclass(frozen=True)
class ShapeProfile:
    name: str
    fields: Mapping[str, FieldRule]
    post_process: Optional[PostProcess] = field(default=None, compare=False)

    def __post_init__(self):
        # Shared across requests; the rule table is read-only
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def rule(self, field_name: str) -> Optional[FieldRule]:
        return self.fields.get(field_name)
