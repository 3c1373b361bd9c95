"""
Value types produced by the workspace and host catalogs.

All entries are immutable once built; catalogs construct fresh instances on
every refresh and discard the old ones wholesale.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

REMOTE_SUFFIX = " (Remote)"


@dataclass(frozen=True)
class ProjectEntry:
    """A recently opened editor workspace, local or remote."""

    name: str
    location: str  # Local path, or vscode-remote:// URI
    is_remote: bool
    last_opened: datetime

    @property
    def dedup_key(self) -> str:
        return self.location.lower()


@dataclass(frozen=True)
class HostEntry:
    """One `Host` block from an OpenSSH-style config file."""

    alias: str
    host_name: str | None = None
    user: str | None = None
    port: int | None = None
    identity_file: str | None = None

    @property
    def display_label(self) -> str:
        if self.user:
            return f"{self.user}@{self.host_name or self.alias}"
        return self.host_name or self.alias

    @property
    def ssh_command(self) -> str:
        return f"ssh {self.alias}"


@dataclass(frozen=True)
class WorkspaceRecord:
    """
    Typed view of a workspace.json document.

    The editor does not guarantee a schema, so every field is optional and
    anything of the wrong type is treated as absent.
    """

    folder: str | None = None
    label: str | None = None
    timestamp: int | None = None  # milliseconds since the epoch

    @classmethod
    def from_document(cls, document: Any) -> "WorkspaceRecord":
        if not isinstance(document, dict):
            return cls()

        folder = document.get("folder")
        if not isinstance(folder, str) or not folder.strip():
            folder = None

        label = None
        for key in ("name", "label"):
            value = document.get(key)
            if isinstance(value, str) and value.strip():
                label = value
                break

        timestamp = document.get("timestamp")
        # bool is an int subclass; a JSON true is not a timestamp
        if isinstance(timestamp, bool) or not isinstance(timestamp, int) or timestamp <= 0:
            timestamp = None

        return cls(folder=folder, label=label, timestamp=timestamp)


@dataclass(frozen=True)
class Loaded:
    """A workspace record that produced an entry."""

    entry: ProjectEntry


@dataclass(frozen=True)
class Skipped:
    """A workspace record that was dropped, and why."""

    reason: str


ScanOutcome = Loaded | Skipped
