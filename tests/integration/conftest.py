import os
from collections.abc import Callable, Generator
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import close_pool, ensure_schema, get_connection, init_pool
from app.database.models import Document
from app.database.repositories.document_repository import DocumentRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docprocessor_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        ensure_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def repository(integration_pool: None) -> DocumentRepository:
    return DocumentRepository()


@pytest.fixture
def seed_document(
    repository: DocumentRepository,
    make_document: Callable[..., Document],
) -> Generator[Callable[..., Document], None, None]:
    created: list[Document] = []

    def _seed(**kwargs: Any) -> Document:
        document = make_document(id=None, **kwargs)
        repository.add(document)
        created.append(document)
        return document

    yield _seed

    with get_connection() as conn:
        for document in created:
            conn.execute("DELETE FROM documents WHERE id = %s", (document.id,))
        conn.commit()
