"""Shared test fixtures and factories."""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from dew.config.paths import ENV_VAR
from dew.todos import TodoRecord, TodoService, TodoStatus, TodoStore

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

# =============================================================================
# Environment isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path) -> Path:
    """Point DEW_HOME at a temp dir and clear config overrides."""
    home = tmp_path / "dew-home"
    monkeypatch.setenv(ENV_VAR, str(home))
    for var in (
        "DEW_SNAPSHOT_PATH",
        "DEW_SNAPSHOT_INTERVAL",
        "DEW_LOG_LEVEL",
        "SSL_CERT",
        "SSL_KEY",
    ):
        monkeypatch.delenv(var, raising=False)
    # Keep ./config.toml lookups away from the repository checkout
    monkeypatch.chdir(tmp_path)
    return home


# =============================================================================
# Todo Factories
# =============================================================================


def make_record(
    id: str = "a",
    title: str = "buy milk",
    status: TodoStatus = TodoStatus.ACTIVE,
    created: datetime | None = None,
    offset_minutes: int = 0,
) -> TodoRecord:
    """Factory for creating todo records with deterministic timestamps."""
    return TodoRecord(
        id=id,
        title=title,
        status=status,
        created=(created or BASE_TIME) + timedelta(minutes=offset_minutes),
    )


@pytest.fixture
def store() -> TodoStore:
    return TodoStore()


@pytest.fixture
def service(store: TodoStore) -> TodoService:
    return TodoService(store)


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "todos.json"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config_toml_content(tmp_path: Path) -> str:
    """Valid TOML config content."""
    return f"""
[server]
host = "0.0.0.0"
port = 9000

[snapshot]
path = "{(tmp_path / "snap.json").as_posix()}"
interval = 30

[logging]
level = "DEBUG"
"""


@pytest.fixture
def config_file(tmp_path: Path, config_toml_content: str) -> Path:
    """Create a temporary config file."""
    config_path = tmp_path / "custom.toml"
    config_path.write_text(config_toml_content)
    return config_path


# =============================================================================
# CLI Test Helpers
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})
