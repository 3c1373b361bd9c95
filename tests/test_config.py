"""
Unit tests for code_launcher.config module.

Tests cover:
- Loading configuration from INI files
- Defaults when no file is given
- CLI override precedence (CLI wins over INI)
- Missing config file handling
- ttl_seconds validation
"""

from pathlib import Path

import pytest

from code_launcher.config import (
    AppConfig,
    CacheConfig,
    LauncherConfig,
    LogConfig,
    PathsConfig,
    default_ssh_config,
    default_workspace_storage,
    load_config,
)


class TestLoadConfigWithINIFile:
    """Tests for load_config with INI file."""

    def test_load_config_reads_all_sections(self, tmp_config_file: Path, tmp_path: Path):
        """Test that load_config correctly reads all sections from INI file."""
        config = load_config(str(tmp_config_file))

        assert config.paths.workspace_storage == tmp_path / "storage"
        assert config.paths.ssh_config == tmp_path / "ssh" / "config"
        assert config.cache.ttl_seconds == 60
        assert config.launcher.editor == "codium"
        assert config.launcher.terminal == "xterm -e"
        assert config.launcher.agent == "opencode --continue"
        assert config.logging.level == "DEBUG"
        assert config.logging.file == "test.log"
        assert config.logging.console is False

    def test_load_config_returns_appconfig_type(self, tmp_config_file: Path):
        """Test that load_config returns correct types."""
        config = load_config(str(tmp_config_file))

        assert isinstance(config, AppConfig)
        assert isinstance(config.paths, PathsConfig)
        assert isinstance(config.cache, CacheConfig)
        assert isinstance(config.launcher, LauncherConfig)
        assert isinstance(config.logging, LogConfig)

    def test_partial_file_keeps_defaults(self, tmp_path: Path):
        """Test that sections absent from the file use defaults."""
        config_path = tmp_path / "partial.ini"
        config_path.write_text("[launcher]\neditor = code-insiders\n", encoding="utf-8")

        config = load_config(str(config_path))

        assert config.launcher.editor == "code-insiders"
        assert config.launcher.agent == "opencode"
        assert config.cache.ttl_seconds == 300
        assert config.paths.ssh_config == default_ssh_config()

    def test_invalid_ttl_raises(self, tmp_path: Path):
        """Test that a non-integer ttl_seconds raises ValueError."""
        config_path = tmp_path / "bad.ini"
        config_path.write_text("[cache]\nttl_seconds = soon\n", encoding="utf-8")

        with pytest.raises(ValueError, match="ttl_seconds"):
            load_config(str(config_path))

    def test_non_positive_ttl_raises(self, tmp_path: Path):
        config_path = tmp_path / "bad.ini"
        config_path.write_text("[cache]\nttl_seconds = -1\n", encoding="utf-8")

        with pytest.raises(ValueError, match="positive"):
            load_config(str(config_path))

    def test_missing_config_file_raises(self, tmp_path: Path):
        """Test that an explicit but missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_config(str(tmp_path / "nonexistent.ini"))


class TestLoadConfigDefaults:
    """Tests for load_config without a file."""

    def test_defaults(self):
        config = load_config()

        assert config.paths.workspace_storage == default_workspace_storage()
        assert config.paths.ssh_config == default_ssh_config()
        assert config.cache.ttl_seconds == 300
        assert config.launcher.editor is None
        assert config.logging.level == "WARNING"

    def test_default_workspace_storage_layout(self):
        path = default_workspace_storage()

        assert path.parts[-3:] == ("Code", "User", "workspaceStorage")

    def test_default_workspace_storage_honours_xdg(self, monkeypatch, tmp_path):
        monkeypatch.setattr("code_launcher.config.sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert default_workspace_storage() == tmp_path / "Code" / "User" / "workspaceStorage"

    def test_default_ssh_config(self):
        assert default_ssh_config() == Path.home() / ".ssh" / "config"


class TestCLIOverridePrecedence:
    """Tests for CLI override precedence over INI file."""

    def test_cli_overrides_paths(self, tmp_config_file: Path, tmp_path: Path):
        config = load_config(
            str(tmp_config_file),
            workspace_storage=str(tmp_path / "other"),
            ssh_config=str(tmp_path / "other_ssh"),
        )

        assert config.paths.workspace_storage == tmp_path / "other"
        assert config.paths.ssh_config == tmp_path / "other_ssh"

    def test_cli_overrides_editor(self, tmp_config_file: Path):
        config = load_config(str(tmp_config_file), editor="vim")

        assert config.launcher.editor == "vim"

    def test_none_cli_values_do_not_override(self, tmp_config_file: Path):
        config = load_config(str(tmp_config_file), editor=None, workspace_storage=None)

        assert config.launcher.editor == "codium"

    def test_debug_flag_sets_console_and_level(self, tmp_config_file: Path):
        """Test that debug=True sets console=True and level=DEBUG."""
        config = load_config(str(tmp_config_file), debug=True)

        assert config.logging.level == "DEBUG"
        assert config.logging.console is True
