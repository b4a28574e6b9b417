"""Построение выражения to_tsvector(...) для записи значения в БД."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

from sqlalchemy import String, Text, cast, func, literal, literal_column
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.sql.expression import ColumnElement


logger = logging.getLogger(__name__)


class EncodeStrategy(str, Enum):
    # to_tsvector(CAST(:p1 AS REGCONFIG), :p2) - значения уходят параметрами
    BIND = "bind"
    # to_tsvector('english', '...') - готовый SQL-фрагмент (триггеры, generated columns)
    LITERAL = "literal"


def quote_literal(value: str) -> str:
    """
    Экранирует строку как строковый литерал PostgreSQL.

    Кавычки удваиваются. Если в строке есть обратный слэш, он тоже удваивается,
    а литерал записывается как E'...', чтобы результат не зависел от
    standard_conforming_strings.
    """
    if "\x00" in value:
        raise ValueError("Строка для PostgreSQL не может содержать символ NUL")
    quoted = value.replace("'", "''")
    if "\\" in quoted:
        return "E'" + quoted.replace("\\", "\\\\") + "'"
    return "'" + quoted + "'"


def to_tsvector_sql(document: str, config: Optional[str] = None) -> str:
    """Возвращает SQL-фрагмент to_tsvector(...) с уже подставленными литералами."""
    if config:
        return f"to_tsvector({quote_literal(config)}, {quote_literal(document)})"
    return f"to_tsvector({quote_literal(document)})"


def to_tsvector_expression(
    document: str,
    config: Optional[str] = None,
    strategy: Union[EncodeStrategy, str] = EncodeStrategy.BIND,
) -> ColumnElement:
    """
    Строит выражение SQLAlchemy, вычисляющее tsvector на стороне БД.

    Args:
        document: Исходный текст
        config: Конфигурация текстового поиска; None - конфигурация сессии
        strategy: bind (параметры запроса) или literal (SQL-фрагмент)

    Returns:
        Выражение с типом TSVector
    """
    from .types import TSVector

    strategy = EncodeStrategy(strategy)
    if strategy is EncodeStrategy.LITERAL:
        sql = to_tsvector_sql(document, config)
        logger.debug(f"to_tsvector как литерал: {len(sql)} символов SQL")
        return literal_column(sql, type_=TSVector())

    args = []
    if config:
        args.append(cast(literal(config, String()), REGCONFIG))
    args.append(literal(document, Text()))
    return func.to_tsvector(*args, type_=TSVector())
