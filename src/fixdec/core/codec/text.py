"""
TextCodec — Каноническое форматирование и строгий парсинг литералов

Грамматика литерала: [sign] digits [ '.' digits ]

Форматирование — чистая функция от хранимой пары (mantissa, exponent),
а не от нормализованного значения: "5.0" и "5" остаются различными.
Формат lossless: parse(format(m, e)) == (m, e).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только ASCII-цифры, без пробелов, без экспоненциальной записи
2. Ошибка парсинга всегда содержит исходный ввод без изменений
3. Конкатенация цифр вне int64 → ParseError (не молчаливое усечение)
4. Одинокая точка "." (нет ни одной цифры) отклоняется при любой грамматике
"""

import logging
import re
from typing import Final, Optional, Union

from pydantic import BaseModel, Field

from fixdec.core.errors import ParseError
from fixdec.core.math.scale_table import INT64_MAX, fits_int64

logger = logging.getLogger(__name__)


# =============================================================================
# КОНФИГУРАЦИЯ ГРАММАТИКИ
# =============================================================================


class LiteralGrammar(BaseModel):
    """
    Настройки грамматики литерала.

    Immutable модель (frozen=True). По умолчанию:
    - "+1" принимается (явный плюс)
    - ".5" и "-.4" принимаются (пустая целая часть)
    - "1." отклоняется (пустая дробная часть)
    """

    allow_plus_sign: bool = Field(True, description="Разрешить явный знак '+'")
    allow_leading_point: bool = Field(
        True, description="Разрешить пустую целую часть перед точкой ('.5')"
    )
    allow_trailing_point: bool = Field(
        False, description="Разрешить пустую дробную часть после точки ('1.')"
    )

    model_config = {"frozen": True}


# Грамматика по умолчанию
DEFAULT_GRAMMAR: Final[LiteralGrammar] = LiteralGrammar()

# [sign] digits [ '.' digits ] — полная проверка пустых частей ниже
_LITERAL_RE: Final[re.Pattern[str]] = re.compile(
    r"(?P<sign>[+-]?)(?P<int>[0-9]*)(?:(?P<point>\.)(?P<frac>[0-9]*))?"
)


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_number(mantissa: int, exponent: int) -> str:
    """
    Каноническая строка для mantissa * 10^exponent.

    Правила:
    - exponent == 0: цифры |mantissa| со знаком
    - exponent > 0: цифры |mantissa| и exponent нулей
    - exponent < 0: точка на -exponent разрядов справа, при нехватке
      цифр — "0." и ведущие нули

    Args:
        mantissa: Знаковая мантисса
        exponent: Экспонента

    Returns:
        Каноническая строка

    Examples:
        >>> format_number(1234, -6)
        '0.001234'
        >>> format_number(-1234, 2)
        '-123400'
        >>> format_number(50, -1)
        '5.0'
    """
    sign = "-" if mantissa < 0 else ""
    digits = str(abs(mantissa))

    if exponent == 0:
        return sign + digits
    if exponent > 0:
        return sign + digits + "0" * exponent

    pos = len(digits) + exponent
    if pos > 0:
        return sign + digits[:pos] + "." + digits[pos:]
    return sign + "0." + "0" * -pos + digits


# =============================================================================
# ПАРСИНГ
# =============================================================================


def parse_number(
    text: Union[str, bytes, bytearray],
    grammar: Optional[LiteralGrammar] = None,
) -> tuple[int, int]:
    """
    Строгий парсинг литерала в пару (mantissa, exponent).

    Мантисса — конкатенация целой и дробной частей как знаковое целое,
    экспонента — минус длина дробной части.

    Args:
        text: Литерал (str или ASCII bytes)
        grammar: Настройки грамматики (default: DEFAULT_GRAMMAR)

    Returns:
        (mantissa, exponent)

    Raises:
        ParseError: Если ввод не соответствует грамматике или мантисса
            не помещается в int64

    Examples:
        >>> parse_number("123.456")
        (123456, -3)
        >>> parse_number("-.4")
        (-4, -1)
        >>> parse_number("1.")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ParseError: ...
    """
    grammar = grammar or DEFAULT_GRAMMAR

    if isinstance(text, (bytes, bytearray)):
        try:
            source = bytes(text).decode("ascii")
        except UnicodeDecodeError:
            raise _fail(text, "non-ASCII input") from None
    elif isinstance(text, str):
        source = text
    else:
        raise TypeError(f"expected str or bytes, got {type(text).__name__}")

    match = _LITERAL_RE.fullmatch(source)
    if match is None:
        raise _fail(text, "invalid syntax")

    sign = match.group("sign")
    int_digits = match.group("int")
    frac_digits = match.group("frac") or ""
    has_point = match.group("point") is not None

    if not int_digits and not frac_digits:
        raise _fail(text, "no digits")
    if sign == "+" and not grammar.allow_plus_sign:
        raise _fail(text, "explicit '+' sign is not allowed")
    if has_point and not frac_digits and not grammar.allow_trailing_point:
        raise _fail(text, "empty fractional part")
    if has_point and not int_digits and not grammar.allow_leading_point:
        raise _fail(text, "empty integer part")

    # Ведущие нули не значащие; больше 19 значащих цифр не помещается в int64
    significant = (int_digits + frac_digits).lstrip("0")
    if len(significant) > len(str(INT64_MAX)):
        raise _fail(text, "value out of range")

    mantissa = int(significant or "0")
    if sign == "-":
        mantissa = -mantissa
    if not fits_int64(mantissa):
        raise _fail(text, "value out of range")

    return mantissa, -len(frac_digits)


def _fail(text: Union[str, bytes, bytearray], reason: str) -> ParseError:
    logger.debug("decimal literal rejected: %r (%s)", text, reason)
    return ParseError(text, reason)
