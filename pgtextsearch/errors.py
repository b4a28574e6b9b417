"""Ошибки разбора и кодирования значений tsvector."""

from typing import Optional


class TSVectorError(Exception):
    """Базовая ошибка пакета."""


class FormatError(TSVectorError, ValueError):
    """Некорректное текстовое представление tsvector.

    В ``fragment`` хранится токен или фрагмент входа, на котором споткнулся разбор.
    """

    def __init__(self, message: str, fragment: Optional[str] = None) -> None:
        self.fragment = fragment
        if fragment is not None:
            message = f"{message}: {fragment!r}"
        super().__init__(message)


class UnsupportedSourceType(TSVectorError, TypeError):
    """На вход разбора пришла не строка и не байты."""

    def __init__(self, value: object) -> None:
        self.source_type = type(value)
        super().__init__(f"Неожиданный тип значения из БД: {type(value).__name__}")


class ArityError(TSVectorError, TypeError):
    """to_tsvector() вызван с неверным числом аргументов (ошибка программиста)."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Ожидается от 1 до 2 аргументов, получено: {count}")


class EncodingUnsupported(TSVectorError):
    """У SearchVector нет значения для обычного параметра запроса."""
