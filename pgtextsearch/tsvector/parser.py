"""
Разбор и сборка текстового представления tsvector.

PostgreSQL отдает tsvector в виде строки:

    'brown' 'fox':8,13 'jump':9 'it''s':1

Каждый токен - лексема в одинарных кавычках и необязательный список позиций
после двоеточия. Кавычка внутри лексемы удваивается, обратный слэш экранирует
следующий символ. Веса позиций (A, B, C, D) отбрасываются.

https://www.postgresql.org/docs/current/datatype-textsearch.html#DATATYPE-TSVECTOR
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Mapping, Sequence, Union

from ..errors import FormatError, UnsupportedSourceType


logger = logging.getLogger(__name__)

# Пустой JSON-объект, которым некоторые клиенты кодируют незаполненное поле
EMPTY_SENTINEL = "{}"

QUOTE = "'"

# Лексема в кавычках (внутри допустимы пробелы, '' и \x) и необязательные позиции
_TOKEN_RE = re.compile(r"'((?:[^'\\]|''|\\.)*)'(?::(\S*))?", re.DOTALL)
_ESCAPE_RE = re.compile(r"''|\\(.)", re.DOTALL)
_POSITION_RE = re.compile(r"([0-9]+)([A-Da-d]?)")
_WHITESPACE_RE = re.compile(r"\s*")

Source = Union[str, bytes, bytearray, memoryview]


def to_text(value: Source) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            fragment = raw[max(0, e.start - 16):e.end + 16].decode("utf-8", "replace")
            raise FormatError("tsvector не является корректной строкой UTF-8", fragment) from e
    raise UnsupportedSourceType(value)


def _fragment(text: str, pos: int) -> str:
    """Вырезает токен, начинающийся с pos (до ближайшего пробела)."""
    end = pos
    while end < len(text) and not text[end].isspace():
        end += 1
    return text[pos:end]


def _unescape(raw: str) -> str:
    return _ESCAPE_RE.sub(lambda m: QUOTE if m.group(1) is None else m.group(1), raw)


def _parse_positions(part: str, token: str) -> List[int]:
    positions: List[int] = []
    for entry in part.split(","):
        match = _POSITION_RE.fullmatch(entry)
        if match is None:
            raise FormatError(f"Некорректная позиция {entry!r} в токене", token)
        positions.append(int(match.group(1)))
    return positions


def parse_tsvector(value: Source) -> Dict[str, List[int]]:
    """
    Разбирает текстовое представление tsvector в словарь лексема -> позиции.

    Args:
        value: Строка или байты, как их вернул драйвер БД

    Returns:
        Словарь лексем; для лексем без позиций - пустой список

    Raises:
        FormatError: токен не соответствует формату
        UnsupportedSourceType: на вход пришла не строка и не байты
    """
    text = to_text(value)
    if text == EMPTY_SENTINEL:
        return {}

    lexemes: Dict[str, List[int]] = {}
    pos = _WHITESPACE_RE.match(text).end()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise FormatError("Ожидалась лексема в одинарных кавычках", _fragment(text, pos))

        end = match.end()
        if end < len(text) and not text[end].isspace():
            # После закрывающей кавычки допустимо только двоеточие или пробел
            raise FormatError("Лишние символы после лексемы", text[pos:end] + _fragment(text, end))

        token = match.group(0)
        lexeme = _unescape(match.group(1))
        if not lexeme:
            raise FormatError("Пустая лексема", token)

        part = match.group(2)
        positions = _parse_positions(part, token) if part is not None else []

        # Повтор лексемы перезаписывает предыдущее значение
        lexemes[lexeme] = positions
        pos = _WHITESPACE_RE.match(text, end).end()

    logger.debug(f"tsvector разобран: {len(lexemes)} лексем")
    return lexemes


def quote_lexeme(lexeme: str) -> str:
    if not lexeme:
        raise FormatError("Пустая лексема", lexeme)
    return QUOTE + lexeme.replace("\\", "\\\\").replace(QUOTE, QUOTE * 2) + QUOTE


def format_tsvector(lexemes: Mapping[str, Sequence[int]]) -> str:
    """Собирает текстовое представление tsvector из словаря лексем (обратно к parse_tsvector)."""
    tokens = []
    for lexeme, positions in lexemes.items():
        token = quote_lexeme(lexeme)
        if positions:
            token += ":" + ",".join(str(int(p)) for p in positions)
        tokens.append(token)
    return " ".join(tokens)
