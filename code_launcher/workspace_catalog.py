"""
Discovery of recently opened editor workspaces.

The editor keeps one subdirectory per workspace under its workspaceStorage
directory. Each may hold a workspace.json naming the opened folder as a URI:

    {"folder": "file:///c%3A/Users/me/src/app"}
    {"folder": "vscode-remote://ssh-remote%2Bbuildbox/home/me/app"}

Only local folders that still exist and remote folders are reported.
"""

import json
import logging
import ntpath
import os
import re
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .cache import CatalogCache
from .models import REMOTE_SUFFIX, Loaded, ProjectEntry, ScanOutcome, Skipped, WorkspaceRecord

logger = logging.getLogger(__name__)

RECORD_FILE = "workspace.json"
LOCAL_SCHEME = "file"
REMOTE_SCHEME = "vscode-remote"

# "/c:/Users/..." as found in file URIs written on Windows
_DRIVE_PATH = re.compile(r"^/[A-Za-z]:")


def local_path_from_uri(uri: str) -> str:
    """
    Convert a file:// URI to a normalized local path.

    Windows drive paths come out with an upper-case drive letter and
    backslash separators regardless of the host platform.
    """
    parts = urlsplit(uri)
    path = unquote(parts.path)

    if _DRIVE_PATH.match(path):
        path = path[1].upper() + path[2:]
        return ntpath.normpath(path)

    if parts.netloc and parts.netloc.lower() != "localhost":
        # UNC share: file://server/share/dir
        path = f"//{parts.netloc}{path}"

    return os.path.abspath(os.path.normpath(path))


def remote_name(location: str) -> str:
    """Last path segment of a decoded remote URI."""
    trimmed = location.rstrip("/")
    segment = trimmed.rsplit("/", 1)[-1]
    return segment or location


def deduplicate(entries: Iterable[ProjectEntry]) -> list[ProjectEntry]:
    """
    Collapse entries sharing a location (case-insensitive), keeping the most
    recently opened one, and order the result newest first.

    Ties on last_opened are ordered by location, then name.
    """
    latest: dict[str, ProjectEntry] = {}
    for entry in entries:
        current = latest.get(entry.dedup_key)
        if current is None or entry.last_opened > current.last_opened:
            latest[entry.dedup_key] = entry

    ordered = sorted(latest.values(), key=lambda e: (e.location, e.name))
    # Stable sort keeps the tie order from above
    return sorted(ordered, key=lambda e: e.last_opened, reverse=True)


def _mtime(path: str | Path) -> datetime:
    return datetime.fromtimestamp(os.stat(path).st_mtime)


def _from_millis(millis: int) -> datetime | None:
    try:
        return datetime.fromtimestamp(millis / 1000)
    except (OverflowError, OSError, ValueError):
        return None


class WorkspaceCatalog:
    """
    Cached list of recently opened workspaces.

    load() never raises: a missing storage directory is an empty catalog, a
    broken record is skipped, and a failure to list the storage directory
    yields an empty result for that refresh.
    """

    def __init__(self, base_path: str | Path, cache: CatalogCache[ProjectEntry] | None = None):
        """
        Args:
            base_path: The editor's workspaceStorage directory.
            cache: Cache to serve results from. A 5 minute cache is created if omitted.
        """
        self.base_path = Path(base_path)
        self._cache = cache if cache is not None else CatalogCache()

    def load(self) -> list[ProjectEntry]:
        """
        Return known workspaces, most recently opened first.

        Served from cache inside the validity window; otherwise rescans.
        """
        return self._cache.get(self._load_entries)

    def invalidate_cache(self) -> None:
        """Force the next load() to rescan."""
        self._cache.invalidate()

    def scan(self) -> list[tuple[Path, ScanOutcome]]:
        """
        Read every workspace record once, bypassing the cache.

        Returns:
            (record directory, outcome) pairs in directory-name order.

        Raises:
            OSError: If the storage directory exists but cannot be listed.
        """
        if not self.base_path.is_dir():
            logger.debug("Workspace storage not found: %s", self.base_path)
            return []

        with os.scandir(self.base_path) as it:
            record_dirs = sorted(Path(e.path) for e in it if e.is_dir())

        return [(record_dir, self._read_record(record_dir)) for record_dir in record_dirs]

    def _load_entries(self) -> list[ProjectEntry]:
        entries = []
        for record_dir, outcome in self.scan():
            if isinstance(outcome, Loaded):
                entries.append(outcome.entry)
            else:
                logger.debug("Skipping %s: %s", record_dir.name, outcome.reason)

        projects = deduplicate(entries)
        logger.info("Loaded %d workspaces from %s", len(projects), self.base_path)
        return projects

    def _read_record(self, record_dir: Path) -> ScanOutcome:
        record_file = record_dir / RECORD_FILE
        if not record_file.is_file():
            return Skipped(f"no {RECORD_FILE}")

        try:
            document = json.loads(record_file.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            return Skipped(f"unreadable {RECORD_FILE}: {e}")

        record = WorkspaceRecord.from_document(document)
        if record.folder is None:
            return Skipped("no folder reference")

        try:
            return self._build_entry(record_dir, record)
        except (OSError, ValueError) as e:
            return Skipped(f"bad folder reference {record.folder!r}: {e}")

    def _build_entry(self, record_dir: Path, record: WorkspaceRecord) -> ScanOutcome:
        folder = record.folder.strip()
        scheme = folder.split("://", 1)[0].lower() if "://" in folder else ""

        if scheme == LOCAL_SCHEME:
            location = local_path_from_uri(folder)
            if not os.path.isdir(location):
                return Skipped(f"folder no longer exists: {location}")
            name = record.label or os.path.basename(location.rstrip("\\/")) or location
            is_remote = False
        elif scheme == REMOTE_SCHEME:
            location = unquote(folder)
            name = (record.label or remote_name(location)) + REMOTE_SUFFIX
            is_remote = True
        else:
            return Skipped(f"unrecognized folder reference: {folder}")

        last_opened = None
        if record.timestamp is not None:
            last_opened = _from_millis(record.timestamp)
        if last_opened is None and not is_remote:
            try:
                last_opened = _mtime(location)
            except OSError:
                last_opened = None
        if last_opened is None:
            last_opened = _mtime(record_dir)

        return Loaded(
            ProjectEntry(
                name=name,
                location=location,
                is_remote=is_remote,
                last_opened=last_opened,
            )
        )
