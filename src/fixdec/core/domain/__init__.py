"""
Domain models and value objects.

Contains the Number value type (mantissa * 10^exponent).
"""

from fixdec.core.domain.number import Number

__all__ = [
    "Number",
]
