"""
Тесты для модуля Rounding

Проверяет:
1. Деление с усечением к нулю и неотрицательный остаток
2. Пять правил округления на положительных и отрицательных мантиссах
3. Точность на границе tie (BANKERS vs MATH)
4. Сигнализацию выхода за пределы таблицы
"""

import pytest

from fixdec.core.errors import ScaleOverflowError
from fixdec.core.math.rounding import RoundRule, round_mantissa, truncate_divmod


class TestTruncateDivmod:
    """Тесты для truncate_divmod"""

    def test_positive(self) -> None:
        """Положительная мантисса"""
        assert truncate_divmod(12345, 2) == (123, 45)

    def test_negative_truncates_toward_zero(self) -> None:
        """Отрицательная мантисса: частное к нулю, остаток — величина"""
        assert truncate_divmod(-12345, 2) == (-123, 45)

    def test_zero_quotient_has_no_sign(self) -> None:
        """Нулевое частное — обычный 0"""
        quotient, remainder = truncate_divmod(-5, 1)
        assert quotient == 0
        assert remainder == 5


class TestRoundRule:
    """Тесты для RoundRule"""

    def test_rule_by_name(self) -> None:
        """Правило можно задать строкой (конфигурация/JSON)"""
        assert RoundRule("bankers") is RoundRule.BANKERS
        assert round_mantissa(45, 1, "math") == 5


class TestRoundMantissa:
    """Тесты для round_mantissa"""

    @pytest.mark.parametrize(
        "rule, mantissa, expected",
        [
            (RoundRule.TRUNCATE, 12345, 1234),
            (RoundRule.TRUNCATE, -12345, -1234),
            (RoundRule.FLOOR, 12345, 1234),
            (RoundRule.FLOOR, -12345, -1235),
            (RoundRule.CEIL, 12345, 1235),
            (RoundRule.CEIL, -12345, -1234),
            (RoundRule.MATH, 12345, 1235),
            (RoundRule.MATH, -12345, -1235),
            (RoundRule.MATH, 12344, 1234),
            (RoundRule.BANKERS, 12345, 1234),
            (RoundRule.BANKERS, -12345, -1234),
            (RoundRule.BANKERS, 12355, 1236),
            (RoundRule.BANKERS, -12355, -1236),
        ],
    )
    def test_one_digit(self, rule: RoundRule, mantissa: int, expected: int) -> None:
        """Отбрасывание одного разряда"""
        assert round_mantissa(mantissa, 1, rule) == expected

    @pytest.mark.parametrize("rule", list(RoundRule))
    def test_exact_division_is_never_adjusted(self, rule: RoundRule) -> None:
        """Нулевой остаток: все правила дают точное частное"""
        assert round_mantissa(1230, 1, rule) == 123
        assert round_mantissa(-1230, 1, rule) == -123

    def test_bankers_ties_to_even(self) -> None:
        """BANKERS: tie разрешается к чётному частному"""
        assert round_mantissa(15, 1, RoundRule.BANKERS) == 2
        assert round_mantissa(25, 1, RoundRule.BANKERS) == 2
        assert round_mantissa(35, 1, RoundRule.BANKERS) == 4
        assert round_mantissa(-25, 1, RoundRule.BANKERS) == -2
        assert round_mantissa(-35, 1, RoundRule.BANKERS) == -4

    def test_bankers_compares_full_remainder(self) -> None:
        """BANKERS: сравнивается весь остаток, а не только старшая цифра"""
        assert round_mantissa(450000, 5, RoundRule.BANKERS) == 4
        assert round_mantissa(450001, 5, RoundRule.BANKERS) == 5
        assert round_mantissa(349999, 5, RoundRule.BANKERS) == 3

    def test_math_uses_leading_digit(self) -> None:
        """MATH: решает старшая отбрасываемая цифра"""
        assert round_mantissa(449999, 5, RoundRule.MATH) == 4
        assert round_mantissa(450000, 5, RoundRule.MATH) == 5
        assert round_mantissa(-450000, 5, RoundRule.MATH) == -5

    def test_rounding_to_zero(self) -> None:
        """Округление до нулевого частного даёт 0 без знака"""
        assert round_mantissa(5, 1, RoundRule.BANKERS) == 0
        assert round_mantissa(-5, 1, RoundRule.BANKERS) == 0
        assert round_mantissa(-4, 1, RoundRule.CEIL) == 0

    def test_shift_beyond_table_fails(self) -> None:
        """k = 19 не представим"""
        with pytest.raises(ScaleOverflowError):
            round_mantissa(1, 19, RoundRule.TRUNCATE)

    def test_non_positive_shift_rejected(self) -> None:
        """k должен быть >= 1"""
        with pytest.raises(ValueError, match="must be positive"):
            round_mantissa(1, 0, RoundRule.TRUNCATE)
