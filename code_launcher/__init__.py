__version__ = "0.1.0"

# Public API exports
from .cache import CatalogCache
from .config import (
    AppConfig,
    CacheConfig,
    LauncherConfig,
    LogConfig,
    PathsConfig,
    load_config,
)
from .host_config import HostConfigCatalog, parse_host_config
from .models import HostEntry, Loaded, ProjectEntry, Skipped, WorkspaceRecord
from .search import Dispatcher, SearchResult
from .workspace_catalog import WorkspaceCatalog

__all__ = [
    "__version__",
    # Configuration
    "AppConfig",
    "PathsConfig",
    "CacheConfig",
    "LauncherConfig",
    "LogConfig",
    "load_config",
    # Catalogs
    "CatalogCache",
    "WorkspaceCatalog",
    "HostConfigCatalog",
    "parse_host_config",
    # Models
    "ProjectEntry",
    "HostEntry",
    "WorkspaceRecord",
    "Loaded",
    "Skipped",
    # Dispatch
    "Dispatcher",
    "SearchResult",
]
