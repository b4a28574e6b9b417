"""Tests for the TSVector SQLAlchemy column type."""

import re

import pytest
from sqlalchemy import insert, update
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from pgtextsearch.db.models import Document
from pgtextsearch.errors import EncodingUnsupported, FormatError
from pgtextsearch.tsvector.encoder import EncodeStrategy
from pgtextsearch.tsvector.types import TSVector
from pgtextsearch.tsvector.value import SearchVector, to_tsvector

DIALECT = postgresql.dialect()


class TestTSVectorType:
    """Processors and DDL."""

    def test_column_spec(self) -> None:
        ddl = str(CreateTable(Document.__table__).compile(dialect=DIALECT))
        assert "search_vector TSVECTOR" in ddl

    def test_python_type(self) -> None:
        assert TSVector().python_type is SearchVector

    def test_result_processor_decodes_string(self) -> None:
        process = TSVector().result_processor(DIALECT, None)
        vector = process("'fox':8,13 'jump':9")
        assert isinstance(vector, SearchVector)
        assert vector.lexemes() == {"fox": [8, 13], "jump": [9]}

    def test_result_processor_decodes_bytes(self) -> None:
        process = TSVector().result_processor(DIALECT, None)
        assert process(b"'fox'").lexemes() == {"fox": []}

    def test_result_processor_passes_none(self) -> None:
        process = TSVector().result_processor(DIALECT, None)
        assert process(None) is None

    def test_result_processor_propagates_format_error(self) -> None:
        process = TSVector().result_processor(DIALECT, None)
        with pytest.raises(FormatError):
            process("'fox':x")

    def test_bind_processor_passes_none(self) -> None:
        process = TSVector().bind_processor(DIALECT)
        assert process(None) is None

    @pytest.mark.parametrize("value", [to_tsvector("fox"), "'fox':1", {"fox": [1]}])
    def test_bind_processor_rejects_values(self, value: object) -> None:
        process = TSVector().bind_processor(DIALECT)
        with pytest.raises(EncodingUnsupported):
            process(value)


class TestStatements:
    """A pending SearchVector is embedded as SQL in INSERT and UPDATE."""

    def test_insert_binds_config_and_document(self) -> None:
        stmt = insert(Document).values(
            title="fox", content="a quick fox", search_vector=to_tsvector("english", "a quick fox")
        )
        compiled = stmt.compile(dialect=DIALECT)
        match = re.search(r"to_tsvector\(CAST\(%\((\w+)\)s AS REGCONFIG\), %\((\w+)\)s\)", str(compiled))
        assert match is not None
        assert compiled.params[match.group(1)] == "english"
        assert compiled.params[match.group(2)] == "a quick fox"

    def test_insert_literal_strategy(self) -> None:
        vector = to_tsvector("english", "a 'fox'", strategy=EncodeStrategy.LITERAL)
        stmt = insert(Document).values(title="fox", content="a 'fox'", search_vector=vector)
        assert "to_tsvector('english', 'a ''fox''')" in str(stmt.compile(dialect=DIALECT))

    def test_update(self) -> None:
        vector = to_tsvector("simple", "fox", strategy="literal")
        stmt = update(Document).where(Document.id == 1).values(search_vector=vector)
        assert "search_vector=to_tsvector('simple', 'fox')" in str(stmt.compile(dialect=DIALECT))
