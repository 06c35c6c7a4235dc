"""
Rounding — Правила округления при сдвиге к более грубой экспоненте

Пять политик округления, применяемых к остатку r от деления мантиссы на
scale = 10^k:

| Правило  | Политика                                                       |
|----------|----------------------------------------------------------------|
| TRUNCATE | частное без изменений (к нулю)                                 |
| FLOOR    | отрицательное значение и r != 0 → на единицу к -inf            |
| CEIL     | положительное значение и r != 0 → на единицу к +inf            |
| MATH     | старшая цифра остатка >= 5 → от нуля (half-away-from-zero)     |
| BANKERS  | r > 5*10^(k-1) → от нуля; r == 5*10^(k-1) → к чётному частному |

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление с усечением к нулю (не floor-деление Python)
2. Остаток всегда неотрицательная величина, знак учитывается отдельно
3. Нулевое частное — обычный 0 (у нуля нет знака)
"""

from enum import Enum

from fixdec.core.math.scale_table import pow10


# =============================================================================
# ТИПЫ
# =============================================================================


class RoundRule(str, Enum):
    """Правило округления при потере точности"""

    TRUNCATE = "truncate"  # к нулю
    FLOOR = "floor"  # к -inf
    CEIL = "ceil"  # к +inf
    MATH = "math"  # к ближайшему, tie от нуля
    BANKERS = "bankers"  # к ближайшему, tie к чётному


# =============================================================================
# ОКРУГЛЕНИЕ МАНТИССЫ
# =============================================================================


def truncate_divmod(mantissa: int, k: int) -> tuple[int, int]:
    """
    Деление мантиссы на 10^k с усечением к нулю.

    Args:
        mantissa: Знаковая мантисса
        k: Количество отбрасываемых разрядов

    Returns:
        (quotient, remainder): quotient со знаком мантиссы,
        remainder — неотрицательная величина остатка

    Raises:
        ScaleOverflowError: Если k вне таблицы степеней десяти
    """
    scale = pow10(k)
    quotient, remainder = divmod(abs(mantissa), scale)
    if mantissa < 0:
        quotient = -quotient
    return quotient, remainder


def round_mantissa(mantissa: int, k: int, rule: RoundRule) -> int:
    """
    Округление мантиссы при отбрасывании k младших разрядов.

    Args:
        mantissa: Знаковая мантисса
        k: Количество отбрасываемых разрядов (k >= 1)
        rule: Правило округления

    Returns:
        Новая мантисса (для экспоненты, большей на k)

    Raises:
        ScaleOverflowError: Если k вне таблицы степеней десяти

    Examples:
        >>> round_mantissa(45, 1, RoundRule.MATH)
        5
        >>> round_mantissa(450000, 5, RoundRule.BANKERS)
        4
        >>> round_mantissa(-12345, 1, RoundRule.FLOOR)
        -1235
    """
    if k < 1:
        raise ValueError(f"k must be positive, got {k}")

    quotient, remainder = truncate_divmod(mantissa, k)
    sign = -1 if mantissa < 0 else 1
    rule = RoundRule(rule)

    if rule is RoundRule.BANKERS:
        tie = 5 * pow10(k - 1)
        if remainder > tie:
            return quotient + sign
        if remainder == tie and quotient % 2 != 0:
            return quotient + sign
        return quotient

    if rule is RoundRule.MATH:
        # Старшая отбрасываемая цифра
        if remainder // pow10(k - 1) >= 5:
            return quotient + sign
        return quotient

    if rule is RoundRule.FLOOR:
        if sign < 0 and remainder != 0:
            return quotient + sign
        return quotient

    if rule is RoundRule.CEIL:
        if sign > 0 and remainder != 0:
            return quotient + sign
        return quotient

    # TRUNCATE
    return quotient
