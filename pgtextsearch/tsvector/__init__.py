"""
Тип tsvector PostgreSQL: разбор текстового представления и запись через to_tsvector().
"""

from .encoder import EncodeStrategy, quote_literal, to_tsvector_expression, to_tsvector_sql
from .parser import format_tsvector, parse_tsvector
from .types import TSVector
from .value import SearchVector, to_tsvector

__all__ = [
    'EncodeStrategy',
    'SearchVector',
    'TSVector',
    'format_tsvector',
    'parse_tsvector',
    'quote_literal',
    'to_tsvector',
    'to_tsvector_expression',
    'to_tsvector_sql',
]
