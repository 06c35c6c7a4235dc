"""
Number — Десятичное число с фиксированной точкой (mantissa * 10^exponent)

Точное десятичное значение как масштабированное целое: мантисса — знаковый
64-битный int, экспонента — степень десяти. Используется для значений
DECIMAL/NUMERIC колонок и денежных сумм без артефактов двоичного float.

Immutable Pydantic модель (frozen=True): каждая операция возвращает новый
экземпляр, ни одна операция не изменяет существующий.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Значение = mantissa * 10^exponent, каноническая форма НЕ навязывается:
   Number(50, -1) ("5.0") и Number(5, 0) ("5") — разные представления
   одного значения (экспонента хранит "точность отображения")
2. Мантисса всегда в [INT64_MIN, INT64_MAX]; любое переполнение →
   DecimalOverflowError, никакого wraparound и никакого big-integer fallback
3. Сложение/сравнение выравнивают операнды к меньшей (более точной) экспоненте
4. Умножение не округляет; округление — отдельная явная операция round()

Деление намеренно отсутствует: в общем случае результат не представим
точно. Для деления используйте to_fraction() и from_fraction().
"""

import logging
import math
import sys
from decimal import Decimal
from fractions import Fraction
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, StrictInt, field_validator, model_validator

from fixdec.core.codec.floats import float_to_parts, number_to_float
from fixdec.core.codec.text import LiteralGrammar, format_number, parse_number
from fixdec.core.errors import DecimalOverflowError, NonFiniteError, PrecisionLossError
from fixdec.core.math.rounding import RoundRule, round_mantissa, truncate_divmod
from fixdec.core.math.scale_table import (
    MAX_SCALE_DIGITS,
    check_int64,
    fits_int64,
    pow10,
)

logger = logging.getLogger(__name__)

_LOG10_2 = math.log10(2)


# =============================================================================
# NUMBER MODEL
# =============================================================================


class Number(BaseModel):
    """
    Десятичное число mantissa * 10^exponent.

    Создание:
        Number(1234, -2)            # 12.34
        Number.from_string("12.34")
        Number.from_int(5)
        Number.from_float(0.1)
        Number.zero()

    В Pydantic полях принимает также str/bytes (строгий парсинг),
    int, float (best-effort) и decimal.Decimal.
    """

    mantissa: StrictInt = Field(0, description="Знаковая мантисса (int64)")
    exponent: StrictInt = Field(0, description="Экспонента (степень десяти)")

    model_config = {"frozen": True}

    def __init__(self, *args: int, **data: Any) -> None:
        """Позиционное создание: Number(mantissa, exponent)."""
        if len(args) > 2:
            raise TypeError(f"Number takes at most 2 positional arguments ({len(args)} given)")
        data.update(zip(("mantissa", "exponent"), args))
        super().__init__(**data)

    @model_validator(mode="before")
    @classmethod
    def coerce_scalar(cls, data: Any) -> Any:
        """Приведение скалярного ввода (литерал, int, float, Decimal) к полям."""
        if isinstance(data, (str, bytes, bytearray)):
            mantissa, exponent = parse_number(data)
            return {"mantissa": mantissa, "exponent": exponent}
        if isinstance(data, bool):
            return data
        if isinstance(data, int):
            return {"mantissa": data, "exponent": 0}
        if isinstance(data, float):
            mantissa, exponent = float_to_parts(data)
            return {"mantissa": mantissa, "exponent": exponent}
        if isinstance(data, Decimal):
            mantissa, exponent = _decimal_parts(data)
            return {"mantissa": mantissa, "exponent": exponent}
        return data

    @field_validator("mantissa")
    @classmethod
    def validate_mantissa_width(cls, v: int) -> int:
        """Мантисса обязана помещаться в int64 (DecimalOverflowError, не ValidationError)."""
        return check_int64(v, "construct")

    @classmethod
    def _new(cls, mantissa: int, exponent: int, operation: str) -> "Number":
        # Результат арифметики: проверка ширины без повторной валидации полей
        return cls.model_construct(
            mantissa=check_int64(mantissa, operation), exponent=exponent
        )

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls) -> "Number":
        """Ноль: Number(0, 0)."""
        return cls._new(0, 0, "zero")

    @classmethod
    def from_int(cls, value: int) -> "Number":
        """Целое значение с нулевой экспонентой."""
        return cls._new(_require_int(value, "value"), 0, "from_int")

    @classmethod
    def from_string(
        cls,
        text: Union[str, bytes, bytearray],
        grammar: Optional[LiteralGrammar] = None,
    ) -> "Number":
        """
        Строгий парсинг литерала [sign] digits ['.' digits].

        Raises:
            ParseError: Если литерал не соответствует грамматике
        """
        mantissa, exponent = parse_number(text, grammar)
        return cls._new(mantissa, exponent, "from_string")

    @classmethod
    def from_float(cls, value: float) -> "Number":
        """
        Best-effort конверсия из float по кратчайшему repr.

        Raises:
            NonFiniteError: Если value — NaN или ±Inf
        """
        mantissa, exponent = float_to_parts(value)
        return cls._new(mantissa, exponent, "from_float")

    @classmethod
    def from_decimal(cls, value: Decimal) -> "Number":
        """
        Точная конверсия из decimal.Decimal с сохранением экспоненты.

        Decimal("5.0") → Number(50, -1).

        Raises:
            NonFiniteError: Если value — NaN или ±Infinity
            MantissaOverflowError: Если цифры не помещаются в int64
        """
        mantissa, exponent = _decimal_parts(value)
        return cls._new(mantissa, exponent, "from_decimal")

    @classmethod
    def from_fraction(cls, value: Union[Fraction, int, Decimal], exponent: int) -> "Number":
        """
        Рациональное число с усечением к нулю на экспоненте exponent.

        Если мантисса на exponent не помещается в int64, экспонента
        огрубляется на один разряд до тех пор, пока мантисса не поместится.

        Args:
            value: Рациональное значение (Fraction, int или Decimal)
            exponent: Желаемая экспонента результата

        Returns:
            Number с экспонентой >= exponent

        Examples:
            >>> Number.from_fraction(Fraction(1234, 100), -1)
            Number(123, -1)
            >>> Number.from_fraction(Fraction(10**9, 3), -11)
            Number(3333333333333333333, -10)
        """
        rational = Fraction(value)
        requested = exponent = _require_int(exponent, "exponent")
        while True:
            mantissa = math.trunc(rational * Fraction(10) ** -exponent)
            if fits_int64(mantissa):
                break
            exponent += 1
        if exponent != requested:
            logger.debug(
                "from_fraction: exponent %d not representable, using %d",
                requested,
                exponent,
            )
        return cls._new(mantissa, exponent, "from_fraction")

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        """True если mantissa == 0 (при любой экспоненте)."""
        return self.mantissa == 0

    def cmp(self, other: "Number") -> int:
        """
        Сравнение значений.

        Returns:
            -1 если self < other, 0 если равны, +1 если self > other

        Raises:
            DecimalOverflowError: Если выравнивание экспонент не представимо
        """
        a, b, _ = self._aligned(other)
        if a < b:
            return -1
        if a > b:
            return 1
        return 0

    def same_representation(self, other: "Number") -> bool:
        """Совпадение хранимой пары (mantissa, exponent), а не только значения."""
        return (self.mantissa, self.exponent) == (other.mantissa, other.exponent)

    def to_float(self) -> float:
        """Best-effort приближение float64 (насыщение до ±inf, схлопывание в 0)."""
        return number_to_float(self.mantissa, self.exponent)

    def to_fraction(self) -> Fraction:
        """Точное рациональное представление."""
        if self.exponent < 0:
            return Fraction(self.mantissa, 10 ** -self.exponent)
        return Fraction(self.mantissa * 10**self.exponent, 1)

    def to_decimal(self) -> Decimal:
        """Точное decimal.Decimal с той же экспонентой: Number(50, -1) → Decimal("5.0")."""
        digits = tuple(int(c) for c in str(abs(self.mantissa)))
        return Decimal((1 if self.mantissa < 0 else 0, digits, self.exponent))

    def scaled_val(self, exponent: int) -> int:
        """
        Мантисса, какой она была бы на экспоненте exponent.

        К более точной экспоненте — точное умножение, к более грубой —
        деление с усечением к нулю (отброшенные цифры теряются без
        округления).

        Examples:
            >>> Number(1299, -2).scaled_val(-4)
            129900
            >>> Number(1299, -2).scaled_val(0)
            12
        """
        _require_int(exponent, "exponent")
        if exponent < self.exponent:
            return self.rescale(exponent).mantissa
        if exponent > self.exponent:
            k = exponent - self.exponent
            if k > MAX_SCALE_DIGITS:
                # |mantissa| < 10^19: все цифры отброшены
                return 0
            return truncate_divmod(self.mantissa, k)[0]
        return self.mantissa

    # -------------------------------------------------------------------------
    # Преобразования
    # -------------------------------------------------------------------------

    def rescale(self, exponent: int) -> "Number":
        """
        Lossless сдвиг к более точной экспоненте (denormalize).

        mantissa *= 10^k, где k = self.exponent - exponent.

        Raises:
            PrecisionLossError: Если exponent > self.exponent
            ScaleOverflowError: Если k вне таблицы степеней десяти
            MantissaOverflowError: Если мантисса переполняет int64
        """
        _require_int(exponent, "exponent")
        if exponent > self.exponent:
            raise PrecisionLossError(
                f"rescale of {self} to exponent {exponent} loses precision, use round()"
            )
        if exponent == self.exponent:
            return self
        scale = pow10(self.exponent - exponent)
        return self._new(self.mantissa * scale, exponent, "rescale")

    def round(self, exponent: int, rule: RoundRule = RoundRule.TRUNCATE) -> "Number":
        """
        Приведение к экспоненте exponent с правилом округления rule.

        exponent <= self.exponent: точный rescale, rule не применяется.
        exponent > self.exponent: отбрасывание разрядов по правилу rule.

        Examples:
            >>> Number(450000, -6).round(-1, RoundRule.BANKERS)
            Number(4, -1)
            >>> Number(-12345, -2).round(-1, RoundRule.FLOOR)
            Number(-1235, -1)
        """
        _require_int(exponent, "exponent")
        if exponent <= self.exponent:
            return self.rescale(exponent)
        mantissa = round_mantissa(self.mantissa, exponent - self.exponent, rule)
        return self._new(mantissa, exponent, "round")

    def add(self, other: "Number") -> "Number":
        """Сумма на общей (более точной) экспоненте."""
        a, b, exponent = self._aligned(other)
        return self._new(a + b, exponent, "add")

    def sub(self, other: "Number") -> "Number":
        """Разность: self + (-other) на общей экспоненте."""
        a, b, exponent = self._aligned(other)
        return self._new(a - b, exponent, "sub")

    def mul(self, other: "Number") -> "Number":
        """Точное произведение: мантиссы умножаются, экспоненты складываются."""
        return self._new(
            self.mantissa * other.mantissa, self.exponent + other.exponent, "mul"
        )

    def mul_int(self, n: int) -> "Number":
        """self * n с сохранением экспоненты."""
        return self._new(self.mantissa * _require_int(n, "n"), self.exponent, "mul_int")

    def neg(self) -> "Number":
        """-self с сохранением экспоненты."""
        return self._new(-self.mantissa, self.exponent, "neg")

    def _aligned(self, other: "Number") -> tuple[int, int, int]:
        # Выравнивание к меньшей экспоненте; исходные значения не меняются
        exponent = min(self.exponent, other.exponent)
        return (
            self.rescale(exponent).mantissa,
            other.rescale(exponent).mantissa,
            exponent,
        )

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return format_number(self.mantissa, self.exponent)

    def __repr__(self) -> str:
        return f"Number({self.mantissa}, {self.exponent})"

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __round__(self, ndigits: Optional[int] = None) -> Union["Number", int]:
        # Семантика builtin round(): banker's rounding
        if ndigits is None:
            return self.round(0, RoundRule.BANKERS).scaled_val(0)
        return self.round(-ndigits, RoundRule.BANKERS)

    def __neg__(self) -> "Number":
        return self.neg()

    def __add__(self, other: Any) -> "Number":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "Number":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other: Any) -> "Number":
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return other.sub(self)

    def __mul__(self, other: Any) -> "Number":
        if isinstance(other, Number):
            return self.mul(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return self.mul_int(other)
        return NotImplemented

    __rmul__ = __mul__

    # Операторы сравнения не бросают на валидных значениях: при
    # непредставимом выравнивании сравнение идёт без ограничения int64
    def _compare(self, other: Any) -> Optional[int]:
        if isinstance(other, Number):
            try:
                return self.cmp(other)
            except DecimalOverflowError:
                return _compare_unbounded(
                    self.mantissa, self.exponent, other.mantissa, other.exponent
                )
        if isinstance(other, int) and not isinstance(other, bool):
            return _compare_unbounded(self.mantissa, self.exponent, other, 0)
        return None

    def __eq__(self, other: Any) -> bool:
        result = self._compare(other)
        if result is None:
            return NotImplemented
        return result == 0

    def __ne__(self, other: Any) -> bool:
        result = self._compare(other)
        if result is None:
            return NotImplemented
        return result != 0

    def __lt__(self, other: Any) -> bool:
        result = self._compare(other)
        if result is None:
            return NotImplemented
        return result < 0

    def __le__(self, other: Any) -> bool:
        result = self._compare(other)
        if result is None:
            return NotImplemented
        return result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self._compare(other)
        if result is None:
            return NotImplemented
        return result > 0

    def __ge__(self, other: Any) -> bool:
        result = self._compare(other)
        if result is None:
            return NotImplemented
        return result >= 0

    def __hash__(self) -> int:
        # Равные значения (5.0 и 5) обязаны иметь равный hash;
        # целые значения хэшируются как int без построения 10^exponent
        mantissa, exponent = self.mantissa, self.exponent
        if mantissa == 0:
            return hash(0)
        while mantissa % 10 == 0:
            mantissa //= 10
            exponent += 1
        if exponent >= 0:
            modulus = sys.hash_info.modulus
            reduced = abs(mantissa) * pow(10, exponent, modulus) % modulus
            return hash(reduced if mantissa > 0 else -reduced)
        return hash((mantissa, exponent))


# =============================================================================
# HELPERS
# =============================================================================


def _coerce(value: Any) -> Optional[Number]:
    """Операнд арифметики: Number или int (не bool)."""
    if isinstance(value, Number):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Number.from_int(value)
    return None


def _decimal_parts(value: Decimal) -> tuple[int, int]:
    if not value.is_finite():
        logger.debug("non-finite Decimal rejected: %r", value)
        raise NonFiniteError(f"cannot convert {value!r} to decimal number")
    sign, digits, exponent = value.as_tuple()
    mantissa = int("".join(map(str, digits)))
    if sign:
        mantissa = -mantissa
    return check_int64(mantissa, "from_decimal"), exponent


def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    return value


def _digit_count(n: int) -> int:
    # Без str(n): преобразование int → str ограничено 4300 цифрами
    digits = int((n.bit_length() - 1) * _LOG10_2) + 1
    if n >= 10**digits:
        digits += 1
    return digits


def _compare_unbounded(a_mantissa: int, a_exponent: int, b_mantissa: int, b_exponent: int) -> int:
    """Сравнение a_mantissa * 10^a_exponent и b_mantissa * 10^b_exponent без границ int64."""
    a_sign = (a_mantissa > 0) - (a_mantissa < 0)
    b_sign = (b_mantissa > 0) - (b_mantissa < 0)
    if a_sign != b_sign:
        return 1 if a_sign > b_sign else -1
    if a_sign == 0:
        return 0

    # Одинаковый знак: сначала порядок величины
    a_order = _digit_count(abs(a_mantissa)) + a_exponent
    b_order = _digit_count(abs(b_mantissa)) + b_exponent
    if a_order != b_order:
        return a_sign if a_order > b_order else -a_sign

    # Порядки равны: разница экспонент не больше разницы длин мантисс
    exponent = min(a_exponent, b_exponent)
    a = a_mantissa * 10 ** (a_exponent - exponent)
    b = b_mantissa * 10 ** (b_exponent - exponent)
    return (a > b) - (a < b)
