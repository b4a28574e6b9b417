"""
Колонка tsvector для SQLAlchemy и PostgreSQL.

Чтение: значение из БД разбирается в словарь лексема -> позиции.
Запись: to_tsvector("english", text) - БД сама строит вектор из текста.
"""

from .errors import ArityError, EncodingUnsupported, FormatError, TSVectorError, UnsupportedSourceType
from .tsvector import (
    EncodeStrategy,
    SearchVector,
    TSVector,
    format_tsvector,
    parse_tsvector,
    to_tsvector,
)

__all__ = [
    'ArityError',
    'EncodeStrategy',
    'EncodingUnsupported',
    'FormatError',
    'SearchVector',
    'TSVector',
    'TSVectorError',
    'UnsupportedSourceType',
    'format_tsvector',
    'parse_tsvector',
    'to_tsvector',
]
