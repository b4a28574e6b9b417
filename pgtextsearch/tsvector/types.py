"""Тип колонки TSVECTOR для SQLAlchemy."""

from __future__ import annotations

from typing import Any

from sqlalchemy.types import UserDefinedType

from ..errors import EncodingUnsupported
from .value import SearchVector


class TSVector(UserDefinedType):
    """
    Колонка tsvector.

    Читаются значения как SearchVector со словарем лексем. Записываются только
    через to_tsvector(...): SearchVector сам превращается в SQL-выражение,
    обычный параметр запроса для этого типа не поддерживается.
    """

    cache_ok = True

    def get_col_spec(self, **kw: Any) -> str:  # noqa: ARG002
        return "TSVECTOR"

    @property
    def python_type(self) -> type:
        return SearchVector

    def bind_processor(self, dialect: Any) -> Any:  # noqa: ARG002
        def process(value: Any) -> Any:
            if value is None:
                return None
            if isinstance(value, SearchVector):
                return value.bind_value()
            raise EncodingUnsupported(
                f"Значение {type(value).__name__} нельзя записать в tsvector параметром, используйте to_tsvector()"
            )

        return process

    def result_processor(self, dialect: Any, coltype: Any) -> Any:  # noqa: ARG002
        def process(value: Any) -> Any:
            if value is None or isinstance(value, SearchVector):
                return value
            return SearchVector.decode(value)

        return process
