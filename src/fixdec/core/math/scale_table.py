"""
ScaleTable — Таблица степеней десяти для сдвига мантиссы

Статическая таблица 10^k для k = 0..18: все степени десяти, которые
помещаются в знаковый 64-битный int. Используется при любом сдвиге
мантиссы на k десятичных разрядов вместо возведения в степень.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Lookup O(1), без big-integer fallback
2. k вне таблицы → ScaleOverflowError (сдвиг не представим в int64)
3. Любой результат вне [INT64_MIN, INT64_MAX] → MantissaOverflowError,
   никакого молчаливого wraparound
"""

import logging
from typing import Final

from fixdec.core.errors import MantissaOverflowError, ScaleOverflowError

logger = logging.getLogger(__name__)


# =============================================================================
# ГРАНИЦЫ МАНТИССЫ
# =============================================================================

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1


# =============================================================================
# ТАБЛИЦА 10^k
# =============================================================================

POW10: Final[tuple[int, ...]] = (
    1,
    10,
    100,
    1_000,
    10_000,
    100_000,
    1_000_000,
    10_000_000,
    100_000_000,
    1_000_000_000,
    10_000_000_000,
    100_000_000_000,
    1_000_000_000_000,
    10_000_000_000_000,
    100_000_000_000_000,
    1_000_000_000_000_000,
    10_000_000_000_000_000,
    100_000_000_000_000_000,
    1_000_000_000_000_000_000,
)

# Максимальный сдвиг, представимый таблицей
MAX_SCALE_DIGITS: Final[int] = len(POW10) - 1


def pow10(k: int) -> int:
    """
    Lookup 10^k.

    Args:
        k: Количество десятичных разрядов сдвига (0..18)

    Returns:
        10^k как int (помещается в int64)

    Raises:
        ScaleOverflowError: Если k вне таблицы

    Examples:
        >>> pow10(3)
        1000
        >>> pow10(19)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ScaleOverflowError: ...
    """
    if k < 0 or k > MAX_SCALE_DIGITS:
        logger.debug("scale table lookup failed: k=%d", k)
        raise ScaleOverflowError(k)
    return POW10[k]


def fits_int64(value: int) -> bool:
    """True если value помещается в знаковый 64-битный int."""
    return INT64_MIN <= value <= INT64_MAX


def check_int64(value: int, operation: str) -> int:
    """
    Проверка результата операции на переполнение мантиссы.

    Args:
        value: Результат целочисленной операции
        operation: Имя операции (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        MantissaOverflowError: Если value вне диапазона int64
    """
    if not fits_int64(value):
        logger.debug("mantissa overflow in %s: %d", operation, value)
        raise MantissaOverflowError(operation, value)
    return value
