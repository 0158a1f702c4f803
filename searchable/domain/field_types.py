"""Типы полей документа и тотальное приведение значений.

Классы:
    FieldType
        Перечисление поддерживаемых типов полей.

Функции:
    resolve_field_type(tag: Any) -> FieldType | None
        Нормализует тег типа (включая алиасы int/bool).
    coerce(value: Any, tag: Any) -> Any
        Приводит значение к типу тега, никогда не бросая исключений.
"""

import math
import re
from enum import Enum
from typing import Any, Callable, Mapping, Optional


class FieldType(str, Enum):
    """Тип поля в поисковом документе.

    Attributes:
        INTEGER: Целое число.
        STRING: Строка.
        FLOAT: Число с плавающей точкой.
        BOOLEAN: Логическое значение.
    """

    INTEGER = "integer"
    STRING = "string"
    FLOAT = "float"
    BOOLEAN = "boolean"


# Короткие написания, принятые в таблицах типов
_ALIASES: dict[str, FieldType] = {
    "int": FieldType.INTEGER,
    "bool": FieldType.BOOLEAN,
}

# Ведущий числовой префикс строки: "12abc" -> 12, " 3.5e2x" -> 350.0
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def resolve_field_type(tag: Any) -> Optional[FieldType]:
    """Нормализует тег типа.

    Args:
        tag: Значение из таблицы типов (строка или FieldType).

    Returns:
        FieldType или None для неизвестного/некорректного тега.
    """
    if isinstance(tag, FieldType):
        return tag
    if not isinstance(tag, str):
        return None

    normalized = tag.strip().lower()
    if normalized in _ALIASES:
        return _ALIASES[normalized]
    try:
        return FieldType(normalized)
    except ValueError:
        return None


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return 0.0
        try:
            return float(match.group(0))
        except (ValueError, OverflowError):
            return 0.0
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")

    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return 0
        literal = match.group(0).strip()
        # Целая запись разбирается точно, без потерь выше 2**53
        if not any(char in literal for char in ".eE"):
            return int(literal)
        number = _to_float(literal)
    elif isinstance(value, float):
        number = value
    else:
        # Decimal, Fraction и прочие типы с __int__
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            number = _to_float(value)

    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number)


def _to_bool(value: Any) -> bool:
    # "0" считается ложью, как в исходных данных из БД
    if isinstance(value, (str, bytes)):
        return value not in ("", "0", b"", b"0")
    try:
        return bool(value)
    except Exception:
        return False


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:
        return repr(value)


_COERCERS: Mapping[FieldType, Callable[[Any], Any]] = {
    FieldType.INTEGER: _to_int,
    FieldType.STRING: _to_str,
    FieldType.FLOAT: _to_float,
    FieldType.BOOLEAN: _to_bool,
}


def coerce(value: Any, tag: Any) -> Any:
    """Приводит значение к типу тега.

    Приведение тотальное: нечисловой ввод даёт 0 / 0.0, строка
    получается всегда. Неизвестный тег оставляет значение как есть.

    Args:
        value: Исходное значение атрибута.
        tag: Тег типа из таблицы типов.

    Returns:
        Приведённое значение.

    Examples:
        >>> coerce("7", "integer")
        7
        >>> coerce("1", "boolean")
        True
        >>> coerce("x", "float")
        0.0
    """
    field_type = resolve_field_type(tag)
    if field_type is None:
        return value
    return _COERCERS[field_type](value)
