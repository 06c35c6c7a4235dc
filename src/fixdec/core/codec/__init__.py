"""
Codec modules для fixdec

Текстовый формат литерала и float-interop на уровне пары (mantissa, exponent).
"""

# Text Codec
from fixdec.core.codec.text import (
    DEFAULT_GRAMMAR,
    LiteralGrammar,
    format_number,
    parse_number,
)

# Float Interop
from fixdec.core.codec.floats import (
    float_to_parts,
    number_to_float,
)

__all__ = [
    # Text Codec — Config
    "DEFAULT_GRAMMAR",
    "LiteralGrammar",
    # Text Codec — Functions
    "format_number",
    "parse_number",
    # Float Interop — Functions
    "float_to_parts",
    "number_to_float",
]
