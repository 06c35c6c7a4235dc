"""
Core math modules для fixdec

Целочисленные примитивы сдвига и округления мантиссы.
"""

# Scale Table
from fixdec.core.math.scale_table import (
    INT64_MAX,
    INT64_MIN,
    MAX_SCALE_DIGITS,
    POW10,
    check_int64,
    fits_int64,
    pow10,
)

# Rounding
from fixdec.core.math.rounding import (
    RoundRule,
    round_mantissa,
    truncate_divmod,
)

__all__ = [
    # Scale Table — Constants
    "INT64_MAX",
    "INT64_MIN",
    "MAX_SCALE_DIGITS",
    "POW10",
    # Scale Table — Functions
    "check_int64",
    "fits_int64",
    "pow10",
    # Rounding — Types
    "RoundRule",
    # Rounding — Functions
    "round_mantissa",
    "truncate_divmod",
]
