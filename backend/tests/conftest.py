from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.app import app, get_llm_config, get_store
from backend.catalog.local_store import LocalCatalogStore
from backend.llm.config import LLMConfig
from backend.recommendations.models import Movie

SAMPLE_MOVIES = [
    Movie(id="1", title="Nova", genre="Sci-Fi", year=2021, description="A star collapses.", rating=4.8),
    Movie(id="2", title="Echo", genre="Drama", year=2019, description="A voice returns.", rating=4.5),
    Movie(id="3", title="Harbor Lights", genre="Drama", year=2015, description="A town by the sea.", rating=4.2),
    Movie(id="4", title="Zero Hour", genre="Action", year=2018, description="A bomb, a clock.", rating=3.9),
    Movie(id="5", title="Quiet Orbit", genre="Sci-Fi", year=2022, description="Drifting alone.", rating=3.5),
]


@pytest.fixture
def store() -> LocalCatalogStore:
    return LocalCatalogStore(list(SAMPLE_MOVIES))


@pytest.fixture
def llm_config() -> LLMConfig:
    return LLMConfig(api_key="test-key")


@pytest.fixture
def client(store, llm_config):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_llm_config] = lambda: llm_config
    yield TestClient(app)
    app.dependency_overrides.clear()
