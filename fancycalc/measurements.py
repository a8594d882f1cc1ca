"""
Measurement export parser.

Scanner exports are flat text files, one ``KEY=VALUE`` pair per line:

    SHAPE=Pear
    WIDTH_TABLE_PC=60.4
    CROWN_FANCY_CURVE_ANGLE_DEG=30.2

The first ``=`` is the separator; values may contain more ``=`` characters.
Lines without a separator are dropped. The parser never raises - callers
decide for themselves whether a key they need is missing.
"""

import logging
import math
import re
from typing import Optional

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")

# Leading numeric prefix, same acceptance as a browser's parseFloat
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_measurements(text: str) -> dict:
    """
    Parse a KEY=VALUE export into a {key: value} dict of strings.

    Keys and values are trimmed. Later duplicates win. Empty input → {}.
    """
    measurements = {}
    if not text:
        return measurements

    dropped = 0
    for line in _LINE_SPLIT.split(text):
        if "=" not in line:
            if line.strip():
                dropped += 1
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            dropped += 1
            continue
        measurements[key] = value.strip()

    if dropped:
        logger.debug("Dropped %d malformed export line(s)", dropped)
    return measurements


def decode_export(data: bytes) -> str:
    """Decode an uploaded export: UTF-8 (BOM tolerated), latin-1 fallback."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def parse_number(value) -> Optional[float]:
    """
    Parse a raw measurement value as a number.

    Accepts a leading numeric prefix ("41.5deg" → 41.5) the way the export
    viewer always has. Returns None for anything non-numeric, including
    NaN/Infinity spellings.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return None
    else:
        match = _NUMBER_PREFIX.match(str(value).strip())
        if not match:
            return None
        # "1e400" parses, but overflows to inf
        result = float(match.group(0))
    return result if math.isfinite(result) else None
