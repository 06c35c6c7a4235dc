"""
FloatInterop — Best-effort конверсия между десятичным числом и float64

- В float: значение за пределами диапазона double насыщается до ±inf,
  ниже наименьшего субнормального схлопывается в 0, иначе округляется
  к ближайшему double. Точность ~15-17 значащих цифр.
- Из float: кратчайшее round-trip десятичное представление (как repr)
  раскладывается на (знак, цифры, экспонента) без хвостовых нулей.
  NaN/Inf не имеют десятичного представления → NonFiniteError.
"""

import logging
import math
from decimal import Decimal

from fixdec.core.errors import NonFiniteError

logger = logging.getLogger(__name__)


def number_to_float(mantissa: int, exponent: int) -> float:
    """
    Приближение mantissa * 10^exponent как float64.

    Examples:
        >>> number_to_float(123456, -3)
        123.456
        >>> number_to_float(1, 309)
        inf
        >>> number_to_float(2, -324)
        0.0
    """
    return float(f"{mantissa}e{exponent}")


def float_to_parts(value: float) -> tuple[int, int]:
    """
    Разложение float на (mantissa, exponent) по кратчайшему repr.

    Args:
        value: Исходный float

    Returns:
        (mantissa, exponent) без хвостовых нулей в мантиссе

    Raises:
        NonFiniteError: Если value — NaN или ±Inf

    Examples:
        >>> float_to_parts(10.0)
        (1, 1)
        >>> float_to_parts(123.456)
        (123456, -3)
        >>> float_to_parts(5e-324)
        (5, -324)
    """
    if not math.isfinite(value):
        logger.debug("non-finite float rejected: %r", value)
        raise NonFiniteError(f"cannot convert {value!r} to decimal number")

    # repr(float) — кратчайшая строка, восстанавливающая тот же double
    sign, digits, exponent = Decimal(repr(value)).as_tuple()

    # Хвостовые нули уходят в экспоненту
    while len(digits) > 1 and digits[-1] == 0:
        digits = digits[:-1]
        exponent += 1

    mantissa = int("".join(map(str, digits)))
    if mantissa == 0:
        return 0, 0
    return (-mantissa if sign else mantissa), exponent
