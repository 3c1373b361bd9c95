import configparser
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .cache import DEFAULT_TTL_SECONDS


def default_workspace_storage() -> Path:
    """Location of the editor's workspaceStorage directory on this platform."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return base / "Code" / "User" / "workspaceStorage"


def default_ssh_config() -> Path:
    return Path.home() / ".ssh" / "config"


def default_terminal() -> str:
    if sys.platform == "win32":
        return "cmd.exe /c start"
    return "x-terminal-emulator -e"


@dataclass
class PathsConfig:
    workspace_storage: Path = field(default_factory=default_workspace_storage)
    ssh_config: Path = field(default_factory=default_ssh_config)


@dataclass
class CacheConfig:
    ttl_seconds: int = DEFAULT_TTL_SECONDS


@dataclass
class LauncherConfig:
    editor: str | None = None  # Auto-detected when unset
    terminal: str = field(default_factory=default_terminal)
    agent: str = "opencode"  # Command run by "open in terminal"


@dataclass
class LogConfig:
    level: str = "WARNING"
    file: str = ""
    console: bool = True


@dataclass
class AppConfig:
    paths: PathsConfig
    cache: CacheConfig
    launcher: LauncherConfig
    logging: LogConfig


def _parse_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def load_config(config_path: str | None = None, **cli_args) -> AppConfig:
    """
    Load configuration from an INI file and/or CLI arguments.
    CLI arguments take precedence over config file.

    Args:
        config_path: Path to the INI configuration file.
        **cli_args: Key-value pairs from command line arguments.

    Returns:
        AppConfig: The populated configuration object.

    Raises:
        FileNotFoundError: If config_path is provided but does not exist.
        ValueError: If ttl_seconds is not a positive integer.
    """
    paths = PathsConfig()
    cache = CacheConfig()
    launcher = LauncherConfig()
    log = LogConfig()

    if config_path is not None:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        parser = configparser.ConfigParser()
        parser.read(config_file, encoding="utf-8")

        # Load [paths] section
        if parser.has_section("paths"):
            paths_section = parser["paths"]
            if paths_section.get("workspace_storage"):
                paths.workspace_storage = Path(paths_section.get("workspace_storage")).expanduser()
            if paths_section.get("ssh_config"):
                paths.ssh_config = Path(paths_section.get("ssh_config")).expanduser()

        # Load [cache] section
        if parser.has_section("cache"):
            cache_section = parser["cache"]
            if cache_section.get("ttl_seconds"):
                try:
                    cache.ttl_seconds = int(cache_section.get("ttl_seconds"))
                except ValueError:
                    raise ValueError(
                        f"Invalid ttl_seconds value in config: '{cache_section.get('ttl_seconds')}' - must be an integer"
                    )

        # Load [launcher] section
        if parser.has_section("launcher"):
            launcher_section = parser["launcher"]
            if launcher_section.get("editor"):
                launcher.editor = launcher_section.get("editor")
            if launcher_section.get("terminal"):
                launcher.terminal = launcher_section.get("terminal")
            if launcher_section.get("agent"):
                launcher.agent = launcher_section.get("agent")

        # Load [logging] section
        if parser.has_section("logging"):
            log_section = parser["logging"]
            if log_section.get("level"):
                log.level = log_section.get("level")
            if log_section.get("file"):
                log.file = log_section.get("file")
            if log_section.get("console"):
                log.console = _parse_bool(log_section.get("console", "true"))

    # Override with CLI arguments (cli_args take precedence)
    if cli_args.get("workspace_storage") is not None:
        paths.workspace_storage = Path(cli_args["workspace_storage"]).expanduser()
    if cli_args.get("ssh_config") is not None:
        paths.ssh_config = Path(cli_args["ssh_config"]).expanduser()
    if cli_args.get("editor") is not None:
        launcher.editor = cli_args["editor"]
    if cli_args.get("debug"):
        log.level = "DEBUG"
        log.console = True

    if cache.ttl_seconds <= 0:
        raise ValueError(f"Invalid ttl_seconds: {cache.ttl_seconds}. Must be positive.")

    return AppConfig(paths=paths, cache=cache, launcher=launcher, logging=log)
