import pytest
from click.testing import CliRunner

from task_registry.core.store import TaskStore
from task_registry.models.config import RegistryConfig
from task_registry.registry import TaskRegistry


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clear_data_dir_env(monkeypatch):
    """Keep a developer's TASK_REGISTRY_DATA_DIR out of the tests."""
    monkeypatch.delenv("TASK_REGISTRY_DATA_DIR", raising=False)


@pytest.fixture
def data_dir(tmp_path):
    """Registry data directory inside the test's temp dir."""
    return tmp_path / ".task-registry"


@pytest.fixture
def registry_config(data_dir):
    """Default configuration for the temp data directory."""
    return RegistryConfig(data_dir=data_dir)


@pytest.fixture
def store(registry_config):
    """Task store backed by the temp data directory."""
    return TaskStore(registry_config)


@pytest.fixture
def registry(registry_config):
    """Fully wired registry backed by the temp data directory."""
    return TaskRegistry(registry_config)
