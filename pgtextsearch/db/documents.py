"""Запись документов с tsvector и чтение их лексем"""
import logging
from typing import Dict, List, Optional

from sqlalchemy import select

from ..tsvector import SearchVector, to_tsvector, to_tsvector_expression
from .models import Document
from .session import Database

logger = logging.getLogger(__name__)


def _build_vector(db: Database, content: str, config: Optional[str]) -> SearchVector:
    """Собирает to_tsvector(...) с учетом конфигурации и стратегии из настроек."""
    if config is None:
        config = db.settings.ts_config or None
    strategy = db.settings.tsvector_strategy
    if config:
        return to_tsvector(config, content, strategy=strategy)
    return to_tsvector(content, strategy=strategy)


async def add_document(db: Database, title: str, content: str, config: Optional[str] = None) -> Document:
    """
    Сохранить документ; search_vector посчитает PostgreSQL.

    Args:
        db: Подключение к БД
        title: Заголовок документа
        content: Текст документа
        config: Конфигурация текстового поиска (например, "english").
            Если не указана, берется TS_CONFIG, а если и он пуст - конфигурация сессии

    Returns:
        Сохраненный документ с уже прочитанным search_vector
    """
    vector = _build_vector(db, content, config)
    async with db.session() as session:
        try:
            document = Document(title=title, content=content, search_vector=vector)
            session.add(document)
            await session.commit()
            # search_vector был SQL-выражением, перечитываем вычисленное значение
            await session.refresh(document)
            logger.info(f"Документ {document.id} сохранен, лексем: {len(document.search_vector.lexemes())}")
            return document
        except Exception as e:
            logger.error(f"Ошибка при сохранении документа '{title}': {e}", exc_info=True)
            await session.rollback()
            raise


async def get_lexemes(db: Database, document_id: int) -> Optional[Dict[str, List[int]]]:
    """Лексемы документа или None, если документа нет или вектор не заполнен."""
    async with db.session() as session:
        result = await session.execute(
            select(Document.search_vector).where(Document.id == document_id)
        )
        vector = result.scalar_one_or_none()
        if vector is None:
            return None
        return vector.lexemes()


async def compute_lexemes(db: Database, text: str, config: Optional[str] = None) -> Dict[str, List[int]]:
    """Посчитать to_tsvector для произвольного текста, ничего не сохраняя."""
    if config is None:
        config = db.settings.ts_config or None
    async with db.session() as session:
        expression = to_tsvector_expression(text, config, db.settings.tsvector_strategy)
        result = await session.execute(select(expression))
        vector = result.scalar_one()
        return vector.lexemes()
