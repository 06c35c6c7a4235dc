"""
fixdec — fixed-point decimal numbers over a 64-bit mantissa.

Exact decimal values stored as mantissa * 10^exponent, with lossless
add/sub/mul, explicit rounding to a coarser exponent under one of five
rounding rules, and a strict canonical text format.
"""

from fixdec.core.adapters import (
    dumps,
    loads,
    marshal_json,
    marshal_parts,
    marshal_text,
    scan,
    unmarshal_json,
    unmarshal_parts,
    unmarshal_text,
    unmarshal_value,
    value,
)
from fixdec.core.codec import DEFAULT_GRAMMAR, LiteralGrammar
from fixdec.core.domain import Number
from fixdec.core.errors import (
    ContractError,
    DecimalError,
    DecimalOverflowError,
    MantissaOverflowError,
    NonFiniteError,
    ParseError,
    PrecisionLossError,
    ScaleOverflowError,
    UnsupportedSourceTypeError,
)
from fixdec.core.math import RoundRule

__version__ = "1.0.0"

__all__ = [
    # Value type
    "Number",
    "RoundRule",
    # Config
    "DEFAULT_GRAMMAR",
    "LiteralGrammar",
    # Errors
    "ContractError",
    "DecimalError",
    "DecimalOverflowError",
    "MantissaOverflowError",
    "NonFiniteError",
    "ParseError",
    "PrecisionLossError",
    "ScaleOverflowError",
    "UnsupportedSourceTypeError",
    # Interchange
    "dumps",
    "loads",
    "marshal_json",
    "marshal_parts",
    "marshal_text",
    "scan",
    "unmarshal_json",
    "unmarshal_parts",
    "unmarshal_text",
    "unmarshal_value",
    "value",
]
