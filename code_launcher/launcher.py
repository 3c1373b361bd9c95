"""
Building and spawning the external programs a search result opens.
"""

import logging
import os
import shlex
import shutil
import subprocess
import sys
from pathlib import Path

from .models import HostEntry, ProjectEntry

logger = logging.getLogger(__name__)

_WINDOWS_EDITOR_PATHS = (
    r"%ProgramFiles%\Microsoft VS Code\Code.exe",
    r"%ProgramFiles(x86)%\Microsoft VS Code\Code.exe",
    r"%LocalAppData%\Programs\Microsoft VS Code\Code.exe",
    r"%UserProfile%\.vscode\bin\code.cmd",
)


def find_editor(configured: str | None = None) -> str | None:
    """
    Locate the editor executable.

    Tries the configured command, then the usual Windows install
    locations, then `code` on PATH.

    Returns:
        The executable path, or None if the editor cannot be found.
    """
    if configured:
        if Path(configured).expanduser().is_file():
            return str(Path(configured).expanduser())
        found = shutil.which(configured)
        if found:
            return found
        logger.warning("Configured editor not found: %s", configured)

    if sys.platform == "win32":
        for candidate in _WINDOWS_EDITOR_PATHS:
            path = os.path.expandvars(candidate)
            if os.path.isfile(path):
                return path

    return shutil.which("code")


def _split_command(command: str) -> list[str]:
    return shlex.split(command, posix=sys.platform != "win32")


def editor_command(editor: str, project: ProjectEntry) -> list[str]:
    """Arguments that open a project in the editor."""
    if project.is_remote:
        return [editor, "--folder-uri", project.location]
    return [editor, project.location]


def ssh_command(terminal: str, host: HostEntry) -> list[str]:
    """Arguments that open an ssh session to host in a new terminal."""
    return [*_split_command(terminal), "ssh", host.alias]


def terminal_command(terminal: str, agent: str, project: ProjectEntry) -> list[str]:
    """
    Arguments that open a terminal running agent; launch with cwd=project.location.

    Raises:
        ValueError: If the project is remote.
        FileNotFoundError: If the project directory no longer exists.
    """
    if project.is_remote:
        raise ValueError(f"Remote projects cannot be opened in a local terminal: {project.location}")
    if not os.path.isdir(project.location):
        raise FileNotFoundError(f"Project directory no longer exists: {project.location}")
    return [*_split_command(terminal), *_split_command(agent)]


def reveal_command(project: ProjectEntry) -> list[str]:
    """
    Arguments that show a local project in the platform file manager.

    Raises:
        ValueError: If the project is remote.
        FileNotFoundError: If the project directory no longer exists.
    """
    if project.is_remote:
        raise ValueError(f"Remote projects cannot be shown in a file manager: {project.location}")
    if not os.path.isdir(project.location):
        raise FileNotFoundError(f"Project directory no longer exists: {project.location}")

    if sys.platform == "win32":
        return ["explorer.exe", project.location]
    if sys.platform == "darwin":
        return ["open", project.location]
    return ["xdg-open", project.location]


def launch(argv: list[str], cwd: str | None = None) -> subprocess.Popen:
    """
    Start a detached process.

    Raises:
        OSError: If the program cannot be started.
    """
    logger.info("Launching: %s", " ".join(argv))
    kwargs: dict = {
        "cwd": cwd,
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
    }
    if sys.platform == "win32":
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True
    return subprocess.Popen(argv, **kwargs)
