"""
Interchange — Адаптеры Number для байтовых и JSON потребителей

Тонкие адаптеры внешней границы: все они сводятся к паре
format_number / parse_number.

- text:   marshal_text / unmarshal_text (bytes ↔ Number)
- JSON:   marshal_json выдаёт литерал БЕЗ кавычек; unmarshal_json принимает
          как голое число, так и строку в кавычках
- DB:     scan принимает только байтовые строки; value возвращает
          каноническую строку как bytes
- Документы: dumps / loads для вложенных dict/list, где каждое JSON-число
          декодируется точно в Number, а Number кодируется без кавычек
- Структура: marshal_parts / unmarshal_parts для {"mantissa", "exponent"};
          unmarshal_value принимает любую из JSON-форм. Входные данные
          проверяются JSON Schema контрактами (ContractError)
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from fixdec.core.codec.text import LiteralGrammar
from fixdec.core.contracts import validate_number_literal, validate_number_parts
from fixdec.core.domain.number import Number
from fixdec.core.errors import UnsupportedSourceTypeError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


# =============================================================================
# TEXT
# =============================================================================


def marshal_text(number: Number) -> bytes:
    """Каноническая строка как ASCII bytes."""
    return str(number).encode("ascii")


def unmarshal_text(
    data: Union[str, BytesLike], grammar: Optional[LiteralGrammar] = None
) -> Number:
    """
    Строгий парсинг литерала из bytes (или str).

    Raises:
        ParseError: Если литерал не соответствует грамматике
    """
    if isinstance(data, memoryview):
        data = data.tobytes()
    return Number.from_string(data, grammar)


# =============================================================================
# JSON
# =============================================================================


def marshal_json(number: Number) -> bytes:
    """JSON-представление: канонический литерал без кавычек."""
    return marshal_text(number)


def unmarshal_json(
    data: Union[str, BytesLike], grammar: Optional[LiteralGrammar] = None
) -> Number:
    """
    Декодирование JSON-значения: 123.456 или "123.456".

    Raises:
        ParseError: Если содержимое не соответствует грамматике
    """
    if isinstance(data, memoryview):
        data = data.tobytes()
    quote = b'"' if isinstance(data, (bytes, bytearray)) else '"'
    if len(data) >= 2 and data[:1] == quote and data[-1:] == quote:
        data = data[1:-1]
    return unmarshal_text(data, grammar)


# =============================================================================
# DB DRIVER HOOKS
# =============================================================================


def scan(src: Any) -> Number:
    """
    Scan hook драйвера БД: DECIMAL колонка приходит как байтовая строка.

    Raises:
        UnsupportedSourceTypeError: Если src не bytes/bytearray/memoryview
        ParseError: Если содержимое не соответствует грамматике
    """
    if not isinstance(src, (bytes, bytearray, memoryview)):
        logger.debug("scan rejected source of type %s", type(src).__name__)
        raise UnsupportedSourceTypeError(src)
    return unmarshal_text(src)


def value(number: Number) -> bytes:
    """Значение для сохранения в БД: каноническая строка как bytes."""
    return marshal_text(number)


# =============================================================================
# JSON ДОКУМЕНТЫ
# =============================================================================


def loads(text: Union[str, bytes], grammar: Optional[LiteralGrammar] = None) -> Any:
    """
    json.loads, где каждое JSON-число становится Number без потери точности.

    Литерал числа передаётся в строгий парсер как есть, поэтому "1.10"
    сохраняет экспоненту -2, а экспоненциальная запись ("1e5") отклоняется.

    Raises:
        ParseError: Если числовой литерал не соответствует грамматике
        json.JSONDecodeError: Если документ не является валидным JSON
    """

    def _number(literal: str) -> Number:
        return Number.from_string(literal, grammar)

    return json.loads(text, parse_float=_number, parse_int=_number)


def dumps(
    obj: Any,
    *,
    indent: Union[int, str, None] = None,
    separators: Optional[Tuple[str, str]] = None,
    sort_keys: bool = False,
    **kwargs: Any,
) -> str:
    """
    json.dumps, где каждый Number кодируется каноническим литералом без кавычек.

    Контейнеры (dict с ключами str/int/float/bool/None/Number, list, tuple)
    обходятся здесь и учитывают indent, separators и sort_keys так же, как
    json.dumps. Остальные значения кодируются json.dumps с kwargs
    (ensure_ascii, allow_nan, default, ...).

    Examples:
        >>> dumps({"num": Number(123456, -3)})
        '{"num": 123.456}'
        >>> dumps([Number(5, -1), None], separators=(",", ":"))
        '[0.5,null]'
    """
    if separators is None:
        separators = (", ", ": ") if indent is None else (",", ": ")
    item_separator, key_separator = separators
    if isinstance(indent, int):
        indent = " " * indent

    def wrap(opening: str, chunks: List[str], closing: str, level: int) -> str:
        if indent is None:
            return opening + item_separator.join(chunks) + closing
        inner = "\n" + indent * (level + 1)
        body = (item_separator + inner).join(chunks)
        return opening + inner + body + "\n" + indent * level + closing

    def key(k: Any) -> str:
        if isinstance(k, str):
            text = k
        elif isinstance(k, Number):
            text = str(k)
        elif k is None or isinstance(k, (bool, int, float)):
            text = json.dumps(k)
        else:
            raise TypeError(f"keys must be str, int, float, bool or None, not {type(k).__name__}")
        return json.dumps(text, ensure_ascii=kwargs.get("ensure_ascii", True))

    def encode(value: Any, level: int) -> str:
        if isinstance(value, Number):
            return str(value)
        if isinstance(value, dict):
            if not value:
                return "{}"
            items = sorted(value.items()) if sort_keys else value.items()
            chunks = [key(k) + key_separator + encode(v, level + 1) for k, v in items]
            return wrap("{", chunks, "}", level)
        if isinstance(value, (list, tuple)):
            if not value:
                return "[]"
            return wrap("[", [encode(v, level + 1) for v in value], "]", level)
        return json.dumps(value, **kwargs)

    return encode(obj, 0)


# =============================================================================
# СТРУКТУРНОЕ ПРЕДСТАВЛЕНИЕ
# =============================================================================


def marshal_parts(number: Number) -> Dict[str, int]:
    """Структура {"mantissa", "exponent"} по контракту number_parts."""
    return {"mantissa": number.mantissa, "exponent": number.exponent}


def unmarshal_parts(data: Any) -> Number:
    """
    Number из декодированной структуры {"mantissa", "exponent"}.

    Raises:
        ContractError: Если data не соответствует number_parts (лишние поля,
            не-int значения, мантисса вне int64)
    """
    validate_number_parts(data)
    return Number(data["mantissa"], data["exponent"])


def unmarshal_value(data: Any, grammar: Optional[LiteralGrammar] = None) -> Number:
    """
    Number из уже декодированного JSON-значения: число, строка-литерал
    или структура {"mantissa", "exponent"}.

    Числа и строки проверяются контрактом number_literal, структуры —
    number_parts. float декодируется best-effort (как from_float); для
    точного чтения документа используйте loads().

    Raises:
        ContractError: Если значение не соответствует ни одной из форм
        ParseError: Если строка не принимается грамматикой grammar
    """
    if isinstance(data, dict):
        return unmarshal_parts(data)
    if isinstance(data, str) and grammar is not None:
        # Нестандартная грамматика шире number_literal
        return Number.from_string(data, grammar)
    validate_number_literal(data)
    if isinstance(data, str):
        return Number.from_string(data)
    if isinstance(data, int):
        return Number.from_int(data)
    return Number.from_float(data)
