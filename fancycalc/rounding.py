"""
Step rounding shared by the derivation engine and the field mapper.

A value is snapped to the nearest multiple of a step and formatted with as
many decimals as the step literal carries: step ``1`` gives "60", step
``1.0`` gives "60.0", step ``0.2`` gives "45.2".

Arithmetic runs on the decimal representation of the inputs so that
45.1 / 0.2 is exactly 225.5. Ties round half away from zero.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def step_places(step) -> int:
    """Number of decimal digits in the step literal (1 → 0, 1.0 → 1, 0.25 → 2)."""
    exponent = to_decimal(step).as_tuple().exponent
    return -exponent if exponent < 0 else 0


def round_to_step(value, step) -> str:
    """Round value to the nearest step and return it as a formatted string.

    A zero step means no rounding: the value comes back as given. Raises
    ValueError for NaN or Infinity.
    """
    d_step = abs(to_decimal(step))
    if d_step == 0:
        return str(value)

    d_value = to_decimal(value)
    if not d_value.is_finite():
        raise ValueError(f"Cannot round non-finite value {value!r}")

    with localcontext() as ctx:
        # Every integer digit of the quotient must survive quantize
        ctx.prec = max(ctx.prec, d_value.adjusted() - d_step.adjusted() + 30)
        units = (d_value / d_step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        rounded = units * d_step
        return f"{rounded:.{step_places(step)}f}"


def mean(values) -> Decimal:
    """Decimal mean of a non-empty sequence of numbers."""
    total = sum((to_decimal(v) for v in values), Decimal(0))
    return total / len(values)
