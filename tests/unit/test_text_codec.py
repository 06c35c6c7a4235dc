"""
Тесты для модуля TextCodec

Проверяет:
1. Каноническое форматирование (положительная/нулевая/отрицательная экспонента)
2. Строгий парсинг: принимаемые и отклоняемые литералы
3. Настройки грамматики LiteralGrammar (точка в начале/в конце, знак '+')
4. Round-trip format(parse(s)) == s для канонических литералов
5. Диагностику: ошибка содержит исходный ввод
"""

import pytest
from pydantic import ValidationError

from fixdec.core.codec.text import (
    DEFAULT_GRAMMAR,
    LiteralGrammar,
    format_number,
    parse_number,
)
from fixdec.core.domain import Number
from fixdec.core.errors import ParseError


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


class TestFormat:
    """Тесты для format_number"""

    @pytest.mark.parametrize(
        "mantissa, exponent, expected",
        [
            (1234, 2, "123400"),
            (1234, 1, "12340"),
            (1234, 0, "1234"),
            (1234, -1, "123.4"),
            (1234, -2, "12.34"),
            (1234, -3, "1.234"),
            (1234, -4, "0.1234"),
            (1234, -6, "0.001234"),
            (0, 0, "0"),
            (-1234, 2, "-123400"),
            (-1234, 1, "-12340"),
            (-1234, 0, "-1234"),
            (-1234, -1, "-123.4"),
            (-1234, -2, "-12.34"),
            (-1234, -3, "-1.234"),
            (-1234, -4, "-0.1234"),
            (-1234, -6, "-0.001234"),
        ],
    )
    def test_format_table(self, mantissa: int, exponent: int, expected: str) -> None:
        """Таблица форматирования"""
        assert format_number(mantissa, exponent) == expected
        assert str(Number(mantissa, exponent)) == expected

    def test_zero_keeps_precision(self) -> None:
        """Ноль сохраняет экспоненту"""
        assert format_number(0, -3) == "0.000"
        assert format_number(0, 2) == "000"

    def test_display_precision_preserved(self) -> None:
        """5.0 и 5 форматируются по-разному"""
        assert format_number(50, -1) == "5.0"
        assert format_number(5, 0) == "5"

    def test_int64_extremes(self) -> None:
        """Границы int64 форматируются без переполнения"""
        assert format_number(-(2**63), -18) == "-9.223372036854775808"
        assert format_number(2**63 - 1, 0) == "9223372036854775807"


# =============================================================================
# ПАРСИНГ
# =============================================================================


class TestParse:
    """Тесты для parse_number с грамматикой по умолчанию"""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("-12340", (-12340, 0)),
            ("-1234", (-1234, 0)),
            ("-123.4", (-1234, -1)),
            ("-12.34", (-1234, -2)),
            ("-1.234", (-1234, -3)),
            ("-0.1234", (-1234, -4)),
            ("-0.01234", (-1234, -5)),
            ("-0.001234", (-1234, -6)),
            ("-0.0012340", (-12340, -7)),
            ("-0.0000000", (0, -7)),
            ("-00", (0, 0)),
            ("-0", (0, 0)),
            ("0", (0, 0)),
            ("00", (0, 0)),
            ("0.0000000", (0, -7)),
            ("0.0012340", (12340, -7)),
            ("0.001234", (1234, -6)),
            ("0.01234", (1234, -5)),
            ("0.1234", (1234, -4)),
            ("1.234", (1234, -3)),
            ("12.34", (1234, -2)),
            ("123.4", (1234, -1)),
            ("1234", (1234, 0)),
            ("12340", (12340, 0)),
            ("123.456", (123456, -3)),
            (".2", (2, -1)),
            (".0", (0, -1)),
            ("-.4", (-4, -1)),
            ("+.5", (5, -1)),
            ("+1", (1, 0)),
            ("+1.2", (12, -1)),
            ("9223372036854775807", (2**63 - 1, 0)),
            ("-9223372036854775808", (-(2**63), 0)),
            ("-922337203.6854775808", (-(2**63), -10)),
        ],
    )
    def test_valid(self, text: str, expected: tuple[int, int]) -> None:
        """Принимаемые литералы"""
        assert parse_number(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "",
            " 1",
            "1 ",
            "1 2",
            "1\n",
            "1,2",
            "1.+2",
            "--1",
            "+-1",
            "-+1",
            ".-2",
            ".",
            "-.",
            "+.",
            "+",
            "-",
            "1.-2",
            "1.-",
            "1.",
            "-1.",
            "1.2.3",
            "..5",
            "a1",
            "1.a2",
            "a3.9",
            "1e5",
            "1.5E-3",
            "0x10",
            "1_000",
            "١٢٣",  # не-ASCII цифры
            "NaN",
            "inf",
            "9223372036854775808",
            "-9223372036854775809",
            "92233720368.54775808",
        ],
    )
    def test_invalid(self, text: str) -> None:
        """Отклоняемые литералы"""
        with pytest.raises(ParseError):
            parse_number(text)

    @pytest.mark.parametrize(
        "text",
        ["1" * 5000, "-" + "9" * 5000, "0." + "1" * 5000, "1" * 20, "1" * 19 + "." + "0"],
    )
    def test_too_many_digits_is_parse_error(self, text: str) -> None:
        """Слишком длинная мантисса → ParseError с исходным вводом"""
        with pytest.raises(ParseError, match="value out of range") as exc_info:
            parse_number(text)
        assert exc_info.value.text == text

    def test_leading_zeros_are_not_significant(self) -> None:
        """Длинные ведущие нули не влияют на диапазон"""
        assert parse_number("0" * 5000 + "12.5") == (125, -1)
        assert parse_number("0." + "0" * 5000) == (0, -5000)
        assert parse_number("-" + "0" * 30 + "9223372036854775808") == (-(2**63), 0)

    def test_error_carries_input_verbatim(self) -> None:
        """Ошибка содержит исходный ввод"""
        with pytest.raises(ParseError) as exc_info:
            parse_number(" 1.5")
        assert exc_info.value.text == " 1.5"
        assert "' 1.5'" in str(exc_info.value)

    def test_error_reason_for_trailing_point(self) -> None:
        """Причина отклонения '1.'"""
        with pytest.raises(ParseError, match="empty fractional part"):
            parse_number("1.")

    def test_parse_error_is_value_error(self) -> None:
        """ParseError совместим с ValueError"""
        with pytest.raises(ValueError):
            parse_number("abc")

    def test_bytes_input(self) -> None:
        """ASCII bytes принимаются"""
        assert parse_number(b"12.3") == (123, -1)
        assert parse_number(bytearray(b"-0.5")) == (-5, -1)

    def test_non_ascii_bytes(self) -> None:
        """Не-ASCII bytes → ParseError с исходным вводом"""
        with pytest.raises(ParseError) as exc_info:
            parse_number(b"\xff1")
        assert exc_info.value.text == b"\xff1"

    def test_unsupported_type(self) -> None:
        """Не текстовый ввод → TypeError"""
        with pytest.raises(TypeError):
            parse_number(12)


class TestLiteralGrammar:
    """Тесты настроек грамматики"""

    def test_defaults(self) -> None:
        """Значения по умолчанию"""
        assert DEFAULT_GRAMMAR.allow_plus_sign is True
        assert DEFAULT_GRAMMAR.allow_leading_point is True
        assert DEFAULT_GRAMMAR.allow_trailing_point is False

    def test_grammar_is_frozen(self) -> None:
        """Immutable конфигурация"""
        with pytest.raises(ValidationError):
            DEFAULT_GRAMMAR.allow_trailing_point = True

    def test_trailing_point_allowed(self) -> None:
        """allow_trailing_point: '1.' → (1, 0)"""
        grammar = LiteralGrammar(allow_trailing_point=True)
        assert parse_number("1.", grammar) == (1, 0)
        assert parse_number("-12.", grammar) == (-12, 0)
        assert parse_number("1.5", grammar) == (15, -1)

    @pytest.mark.parametrize("text", [".", "-.", "+.", "1.-", "1..", "1. "])
    def test_trailing_point_grammar_still_rejects(self, text: str) -> None:
        """Даже с allow_trailing_point одинокая точка отклоняется"""
        grammar = LiteralGrammar(allow_trailing_point=True)
        with pytest.raises(ParseError):
            parse_number(text, grammar)

    @pytest.mark.parametrize("text", [".5", "-.4", "+.5", ".0"])
    def test_leading_point_disallowed(self, text: str) -> None:
        """allow_leading_point=False: '.5' отклоняется"""
        grammar = LiteralGrammar(allow_leading_point=False)
        with pytest.raises(ParseError, match="empty integer part"):
            parse_number(text, grammar)

    def test_leading_point_disallowed_accepts_full_literal(self) -> None:
        """allow_leading_point=False: '0.5' принимается"""
        grammar = LiteralGrammar(allow_leading_point=False)
        assert parse_number("0.5", grammar) == (5, -1)

    def test_plus_sign_disallowed(self) -> None:
        """allow_plus_sign=False: '+1' отклоняется, '-1' принимается"""
        grammar = LiteralGrammar(allow_plus_sign=False)
        with pytest.raises(ParseError):
            parse_number("+1", grammar)
        assert parse_number("-1", grammar) == (-1, 0)

    def test_from_string_uses_grammar(self) -> None:
        """Number.from_string передаёт грамматику парсеру"""
        grammar = LiteralGrammar(allow_trailing_point=True)
        assert str(Number.from_string("7.", grammar)) == "7"
        with pytest.raises(ParseError):
            Number.from_string("7.")


class TestRoundTrip:
    """Round-trip format(parse(s)) == s"""

    @pytest.mark.parametrize(
        "text",
        [
            "0",
            "5",
            "5.0",
            "-5.00",
            "0.000",
            "123.456",
            "-0.001234",
            "123456.78",
            "9223372036854775807",
            "-9.223372036854775808",
        ],
    )
    def test_canonical_literals(self, text: str) -> None:
        """Канонический литерал восстанавливается дословно"""
        mantissa, exponent = parse_number(text)
        assert format_number(mantissa, exponent) == text

    def test_representation_roundtrip(self) -> None:
        """parse(format(m, e)) == (m, e) для отрицательных экспонент"""
        for mantissa, exponent in [(1234, -6), (-1, -1), (0, -7), (12340, -7)]:
            assert parse_number(format_number(mantissa, exponent)) == (mantissa, exponent)

    def test_non_canonical_input_is_normalized_text(self) -> None:
        """Лишние ведущие нули и знак '+' не восстанавливаются"""
        assert str(Number.from_string("007.50")) == "7.50"
        assert str(Number.from_string("+1.2")) == "1.2"
        assert str(Number.from_string(".5")) == "0.5"
        assert str(Number.from_string("-0.0")) == "0.0"
