"""
Скрипт для проверки того, какие лексемы PostgreSQL строит из текста.

Использование:
    python -m pgtextsearch.check_vector "The quick brown fox" --config english

Этот скрипт:
1. Подключается к БД из настроек (DB_URL)
2. Выполняет SELECT to_tsvector(...) для переданного текста
3. Печатает лексемы и их позиции

Ничего в БД не записывает.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import Settings, load_settings
from .db.documents import compute_lexemes
from .db.session import Database
from .tsvector import format_tsvector


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Показать лексемы to_tsvector для текста")
    parser.add_argument("text", help="Исходный текст")
    parser.add_argument("--config", default=None, help="Конфигурация текстового поиска, например english")
    return parser.parse_args(argv)


async def check_vector(settings: Settings, text: str, config: Optional[str] = None) -> str:
    """Возвращает tsvector для текста в текстовом представлении."""
    db = Database(settings)
    try:
        lexemes = await compute_lexemes(db, text, config)
    finally:
        await db.dispose()
    return format_tsvector(lexemes)


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    _configure_logging(settings)
    logger = logging.getLogger(__name__)
    args = _parse_args(argv)

    try:
        result = asyncio.run(check_vector(settings, args.text, args.config))
    except Exception as e:
        logger.error(f"Не удалось получить tsvector: {e}", exc_info=True)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
