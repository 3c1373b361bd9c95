"""
Query dispatch over the workspace and host catalogs.

    "ssh <term>"     hosts whose alias or HostName contains term
    "open"           every workspace, to be opened in a terminal
    "vscode <term>"  workspaces whose name or location contains term
    "<term>"         same as "vscode <term>"
"""

import logging
from dataclasses import dataclass

from .host_config import HostConfigCatalog
from .models import HostEntry, ProjectEntry
from .workspace_catalog import WorkspaceCatalog

logger = logging.getLogger(__name__)

SSH_KEYWORD = "ssh"
OPEN_KEYWORD = "open"
VSCODE_KEYWORD = "vscode"

OPEN_EDITOR = "open_editor"
OPEN_SSH = "open_ssh"
OPEN_TERMINAL = "open_terminal"
NO_ACTION = "none"


@dataclass(frozen=True)
class SearchResult:
    title: str
    subtitle: str
    action: str = NO_ACTION
    target: ProjectEntry | HostEntry | None = None


def _split_keyword(search: str, keyword: str) -> str | None:
    """Return the text after keyword, or None if search does not start with it."""
    if search == keyword:
        return ""
    if search.startswith(keyword + " "):
        return search[len(keyword) :].strip()
    return None


def copy_text(result: SearchResult) -> str | None:
    """Text placed on the clipboard by the "copy" context action."""
    if isinstance(result.target, ProjectEntry):
        return result.target.location
    if isinstance(result.target, HostEntry):
        return result.target.ssh_command
    return None


class Dispatcher:
    """Routes a query string to the matching catalog and formats results."""

    def __init__(self, workspaces: WorkspaceCatalog, hosts: HostConfigCatalog):
        self.workspaces = workspaces
        self.hosts = hosts

    def query(self, text: str) -> list[SearchResult]:
        search = text.strip().lower()
        logger.debug("Dispatching query %r", search)

        term = _split_keyword(search, SSH_KEYWORD)
        if term is not None:
            return self.search_hosts(term)

        if _split_keyword(search, OPEN_KEYWORD) is not None:
            return self.open_in_terminal_results()

        term = _split_keyword(search, VSCODE_KEYWORD)
        if term is not None:
            return self.search_projects(term)

        return self.search_projects(search)

    def search_projects(self, term: str) -> list[SearchResult]:
        term = term.lower()
        results = [
            SearchResult(
                title=project.name,
                subtitle=project.location,
                action=OPEN_EDITOR,
                target=project,
            )
            for project in self.workspaces.load()
            if not term or term in project.name.lower() or term in project.location.lower()
        ]

        if not results and not term:
            results.append(
                SearchResult(
                    title="No VS Code projects found",
                    subtitle="Open a folder in VS Code to see it here",
                )
            )
        return results

    def search_hosts(self, term: str) -> list[SearchResult]:
        term = term.lower()
        return [
            SearchResult(
                title=host.alias,
                subtitle=host.display_label,
                action=OPEN_SSH,
                target=host,
            )
            for host in self.hosts.parse()
            if not term
            or term in host.alias.lower()
            or (host.host_name is not None and term in host.host_name.lower())
        ]

    def open_in_terminal_results(self) -> list[SearchResult]:
        results = [
            SearchResult(
                title="Open in terminal",
                subtitle="Select a project to open it in a terminal",
            )
        ]
        results.extend(
            SearchResult(
                title=project.name,
                subtitle=f"Open in terminal: {project.location}",
                action=OPEN_TERMINAL,
                target=project,
            )
            for project in self.workspaces.load()
        )

        if len(results) == 1:
            results.append(
                SearchResult(
                    title="No VS Code projects found",
                    subtitle="Open a folder in VS Code to see it here",
                )
            )
        return results
