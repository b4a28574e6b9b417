from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from sqlalchemy.sql.expression import ColumnElement

from ..errors import ArityError, EncodingUnsupported, FormatError, UnsupportedSourceType
from .encoder import EncodeStrategy, to_tsvector_expression, to_tsvector_sql
from .parser import EMPTY_SENTINEL, Source, format_tsvector, parse_tsvector, to_text


@dataclass
class SearchVector:
    """
    Значение колонки tsvector.

    Находится в одном из двух состояний:
    - ожидает записи: заданы document (и, возможно, config), БД посчитает
      вектор сама через to_tsvector(...);
    - прочитано из БД: заполнен resolved - словарь лексема -> позиции.
    """

    config: Optional[str] = None
    document: Optional[str] = None
    strategy: EncodeStrategy = EncodeStrategy.BIND
    resolved: Optional[Dict[str, List[int]]] = None

    sql_type_name = "tsvector"

    @property
    def is_pending(self) -> bool:
        return self.resolved is None and self.document is not None

    def lexemes(self) -> Dict[str, List[int]]:
        """Лексемы прочитанного вектора; пустой словарь, если вектор не читался."""
        if self.resolved is None:
            return {}
        return {lexeme: list(positions) for lexeme, positions in self.resolved.items()}

    # Чтение

    def scan(self, value: Source) -> None:
        """Разбирает значение из БД и заменяет им текущее содержимое."""
        self.resolved = parse_tsvector(value)
        self.config = None
        self.document = None

    @classmethod
    def decode(cls, value: Source) -> "SearchVector":
        vector = cls()
        vector.scan(value)
        return vector

    @classmethod
    def from_json(cls, data: Source) -> "SearchVector":
        """
        Разбирает tsvector, пришедший строкой в JSON.

        Пустой объект {} означает незаполненное поле и дает пустой вектор.
        """
        # Байты декодируются как UTF-8 до разбора JSON
        text = to_text(data)
        if text == EMPTY_SENTINEL:
            return cls()
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as e:
            raise FormatError("Некорректный JSON для tsvector", e.doc[:64]) from e
        if not isinstance(decoded, str):
            raise UnsupportedSourceType(decoded)
        return cls.decode(decoded)

    def to_json(self) -> str:
        return json.dumps(format_tsvector(self.lexemes()), ensure_ascii=False)

    # Запись

    def _require_pending(self) -> None:
        if not self.is_pending:
            raise EncodingUnsupported(
                "SearchVector без исходного текста нельзя записать: создайте его через to_tsvector()"
            )

    def sql(self) -> str:
        """SQL-фрагмент to_tsvector(...) с экранированными литералами."""
        self._require_pending()
        return to_tsvector_sql(self.document, self.config)

    def expression(self, strategy: Optional[EncodeStrategy] = None) -> ColumnElement:
        self._require_pending()
        return to_tsvector_expression(self.document, self.config, strategy or self.strategy)

    def __clause_element__(self) -> ColumnElement:
        # SQLAlchemy подставляет это выражение в INSERT/UPDATE вместо параметра
        return self.expression()

    def bind_value(self) -> None:
        raise EncodingUnsupported(
            "tsvector нельзя передать обычным параметром: значение вычисляется через to_tsvector()"
        )


def to_tsvector(*args: str, strategy: Union[EncodeStrategy, str] = EncodeStrategy.BIND) -> SearchVector:
    """
    Создает SearchVector для записи.

    to_tsvector(document) - конфигурация сессии;
    to_tsvector(config, document) - явная конфигурация, например "english".
    """
    strategy = EncodeStrategy(strategy)
    if len(args) == 1:
        return SearchVector(document=args[0], strategy=strategy)
    if len(args) == 2:
        return SearchVector(config=args[0], document=args[1], strategy=strategy)
    raise ArityError(len(args))
