import os
from collections.abc import Generator

import pytest

from contract_analyzer.config.settings import Settings
from contract_analyzer.database.connection import Database
from contract_analyzer.database.repositories.contract_repository import ContractRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "contracts_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_db(test_settings: Settings) -> Generator[Database, None, None]:
    database = Database(test_settings)
    try:
        database.open()
        with database.connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        database.close()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DATABASE_URL or DB_* env to point at a disposable database"
        )
    try:
        yield database
    finally:
        database.close()


@pytest.fixture
def contract_repo(integration_db: Database) -> ContractRepository:
    repo = ContractRepository(integration_db)
    repo.ensure_schema()
    return repo


@pytest.fixture
def integration_cleanup(integration_db: Database) -> Generator[list[str], None, None]:
    created: list[str] = []
    yield created
    if not created:
        return
    with integration_db.connection() as conn:
        conn.execute("DELETE FROM contracts WHERE id = ANY(%s::uuid[])", (created,))
        conn.commit()
