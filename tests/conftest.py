"""
Shared pytest fixtures for Code-Launcher tests.
"""

import json
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from code_launcher.cache import CatalogCache
from code_launcher.config import AppConfig, CacheConfig, LauncherConfig, LogConfig, PathsConfig

SAMPLE_SSH_CONFIG = """# Personal hosts
Host build
  HostName 10.0.0.5
  User ci
Host home
  HostName 192.168.1.2
"""


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog_cache(clock: FakeClock) -> CatalogCache:
    """A 5 minute cache driven by the fake clock."""
    return CatalogCache(ttl_seconds=300, clock=clock)


@pytest.fixture
def workspace_store(tmp_path: Path) -> Path:
    """An empty workspaceStorage directory."""
    store = tmp_path / "workspaceStorage"
    store.mkdir()
    return store


@pytest.fixture
def write_record(workspace_store: Path) -> Callable[..., Path]:
    """
    Returns a helper that writes workspace.json into a new record directory.

    Pass a dict to write it as JSON, or a str to write it verbatim.
    """

    def _write(record_id: str, document) -> Path:
        record_dir = workspace_store / record_id
        record_dir.mkdir()
        content = document if isinstance(document, str) else json.dumps(document)
        (record_dir / "workspace.json").write_text(content, encoding="utf-8")
        return record_dir

    return _write


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A real local project directory."""
    path = tmp_path / "projects" / "my-app"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def ssh_config_file(tmp_path: Path) -> Generator[Path, None, None]:
    """A small ssh config with two hosts."""
    path = tmp_path / "ssh_config"
    path.write_text(SAMPLE_SSH_CONFIG, encoding="utf-8")
    yield path


@pytest.fixture
def tmp_config_file(tmp_path: Path) -> Generator[Path, None, None]:
    """
    Creates a temporary INI configuration file for config tests.

    Returns:
        Path to the temporary config file.
    """
    config_content = f"""[paths]
workspace_storage = {tmp_path / "storage"}
ssh_config = {tmp_path / "ssh" / "config"}

[cache]
ttl_seconds = 60

[launcher]
editor = codium
terminal = xterm -e
agent = opencode --continue

[logging]
level = DEBUG
file = test.log
console = false
"""
    config_path = tmp_path / "test_config.ini"
    config_path.write_text(config_content, encoding="utf-8")
    yield config_path


@pytest.fixture
def app_config(workspace_store: Path, ssh_config_file: Path) -> AppConfig:
    """Creates a complete AppConfig pointing at the temporary sources."""
    return AppConfig(
        paths=PathsConfig(workspace_storage=workspace_store, ssh_config=ssh_config_file),
        cache=CacheConfig(ttl_seconds=300),
        launcher=LauncherConfig(editor="code", terminal="xterm -e", agent="opencode"),
        logging=LogConfig(level="WARNING", file="", console=False),
    )
