"""Shared test fixtures and factories."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from taskgraph.config.models import TaskgraphConfig
from taskgraph.config.paths import get_taskgraph_home
from taskgraph.graph.graph import EntityGraph
from taskgraph.server.app import create_app
from taskgraph.store import EntityStore, RelationshipIndex, TaskStore

# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture
def graph() -> EntityGraph:
    return EntityGraph()


@pytest.fixture
def relationships(graph: EntityGraph) -> RelationshipIndex:
    return RelationshipIndex(graph)


@pytest.fixture
def entities(graph: EntityGraph, relationships: RelationshipIndex) -> EntityStore:
    return EntityStore(graph, relationships)


@pytest.fixture
def store() -> TaskStore:
    return TaskStore()


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def config() -> TaskgraphConfig:
    return TaskgraphConfig()


@pytest.fixture
def client(store: TaskStore, config: TaskgraphConfig) -> Iterator[TestClient]:
    app = create_app(store=store, config=config)
    with TestClient(app) as test_client:
        yield test_client


def create_via_api(client: TestClient, collection: str, **fields: Any) -> dict:
    """POST an entity and return the created JSON body."""
    response = client.post(f"/{collection}", json=fields)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def test_project(client: TestClient) -> dict:
    return create_via_api(client, "projects", title="testProject")


@pytest.fixture
def test_todo(client: TestClient) -> dict:
    return create_via_api(client, "todos", title="testTodo")


@pytest.fixture
def test_category(client: TestClient) -> dict:
    return create_via_api(client, "categories", title="testCategory")


# =============================================================================
# CLI / Config Fixtures
# =============================================================================


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(
        """
default_format = "xml"

[server]
host = "0.0.0.0"
port = 8080

[logging]
level = "DEBUG"
"""
    )
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep TASKGRAPH_* settings from the developer's shell out of tests."""
    for name in ("TASKGRAPH_HOST", "TASKGRAPH_PORT", "TASKGRAPH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TASKGRAPH_HOME", str(tmp_path / "home"))
    get_taskgraph_home.cache_clear()
    yield
    get_taskgraph_home.cache_clear()
