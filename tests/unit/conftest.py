from collections.abc import Generator

import pytest
from fakes import ScriptedClient, make_container
from fastapi.testclient import TestClient

from contract_analyzer.api.app import create_app
from contract_analyzer.api.container import AppContainer

_PROVIDER_ENV = (
    "APP_ENV",
    "PROCESSING_MODE",
    "EXTRACTION_PROVIDER",
    "GEMINI_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "DATABASE_URL",
    "PROVIDER_REQUESTS_PER_MINUTE",
    "CORS_ALLOWED_ORIGINS",
    "WORKER_CONCURRENCY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scripted_client() -> ScriptedClient:
    return ScriptedClient()


@pytest.fixture
def async_container(scripted_client: ScriptedClient) -> AppContainer:
    return make_container(scripted_client, processing_mode="async")


@pytest.fixture
def sync_container(scripted_client: ScriptedClient) -> AppContainer:
    return make_container(scripted_client, processing_mode="sync")


@pytest.fixture
def async_client(async_container: AppContainer) -> Generator[TestClient, None, None]:
    with TestClient(create_app(async_container.settings, async_container)) as client:
        yield client


@pytest.fixture
def sync_client(sync_container: AppContainer) -> Generator[TestClient, None, None]:
    with TestClient(create_app(sync_container.settings, sync_container)) as client:
        yield client
