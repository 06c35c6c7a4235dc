"""
Errors — Типизированные ошибки десятичных чисел

Все ошибки возвращаются вызывающему коду как исключения конкретных типов.
Ни одна операция не делает retry, не деградирует и не подавляет ошибку.

Иерархия:
- DecimalError — базовый класс
  - ParseError — текст не соответствует грамматике литерала
  - DecimalOverflowError — результат не помещается в int64
    - ScaleOverflowError — сдвиг за пределы таблицы степеней десяти
    - MantissaOverflowError — переполнение мантиссы в арифметике
  - PrecisionLossError — rescale к более грубой экспоненте
  - NonFiniteError — NaN/Inf не имеют десятичного представления
  - UnsupportedSourceTypeError — scan получил не байтовую строку
  - ContractError — JSON-представление нарушает JSON Schema контракт
"""

from typing import Any, List


class DecimalError(Exception):
    """Базовая ошибка пакета fixdec."""

    pass


class ParseError(DecimalError, ValueError):
    """
    Текст не соответствует грамматике литерала.

    Атрибут text хранит исходный ввод без изменений (для диагностики).
    """

    def __init__(self, text: Any, reason: str = "invalid syntax"):
        self.text = text
        self.reason = reason
        super().__init__(f"cannot parse {text!r} as decimal number: {reason}")


class DecimalOverflowError(DecimalError, OverflowError):
    """Результат не представим в 64-битной мантиссе."""

    pass


class ScaleOverflowError(DecimalOverflowError):
    """Сдвиг на digits десятичных разрядов выходит за пределы таблицы 10^k."""

    def __init__(self, digits: int):
        self.digits = digits
        super().__init__(
            f"scale shift of {digits} decimal digits is not representable "
            f"in a 64-bit mantissa"
        )


class MantissaOverflowError(DecimalOverflowError):
    """Арифметическая операция operation переполнила int64 мантиссу."""

    def __init__(self, operation: str, value: int):
        self.operation = operation
        self.value = value
        super().__init__(f"{operation}: result {value} overflows 64-bit mantissa")


class PrecisionLossError(DecimalError, ValueError):
    """Lossless rescale запрошен к более грубой экспоненте."""

    pass


class NonFiniteError(DecimalError, ValueError):
    """NaN и бесконечности не имеют десятичного представления."""

    pass


class UnsupportedSourceTypeError(DecimalError, TypeError):
    """Scan hook принимает только байтовые строки."""

    def __init__(self, src: Any):
        self.src = src
        super().__init__(
            f"cannot convert {type(src).__name__} to Number, only bytes is supported"
        )


class ContractError(DecimalError, ValueError):
    """
    JSON-представление нарушает контракт schema_name.

    Атрибут violations — все нарушения как "<json path>: <message>".
    """

    def __init__(self, schema_name: str, violations: List[str]):
        self.schema_name = schema_name
        self.violations = list(violations)
        super().__init__(f"{schema_name} contract violated: " + "; ".join(self.violations))
