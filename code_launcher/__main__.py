"""
Code-Launcher - Main Entry Point

This module provides the CLI interface: it wires the workspace and ssh host
catalogs to the query dispatcher and launches the selected result.
"""

import argparse
import logging
import sys

from .cache import CatalogCache
from .config import AppConfig, load_config
from .host_config import HostConfigCatalog
from .launcher import (
    editor_command,
    find_editor,
    launch,
    reveal_command,
    ssh_command,
    terminal_command,
)
from .logger import setup_logging
from .models import Loaded, ProjectEntry
from .search import OPEN_EDITOR, OPEN_SSH, OPEN_TERMINAL, Dispatcher, SearchResult, copy_text
from .workspace_catalog import WorkspaceCatalog

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Code-Launcher - Find and open recent VS Code projects and SSH hosts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  code-launcher search api
  code-launcher search ssh build
  code-launcher open api --index 2
  code-launcher open api --action copy
  code-launcher open api --action reveal
  code-launcher diagnose --limit 5
        """,
    )
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--workspace-storage", help="Editor workspaceStorage directory")
    parser.add_argument("--ssh-config", help="SSH config file")
    parser.add_argument("--editor", help="Editor executable")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    search_parser = subparsers.add_parser("search", help="List results for a query")
    search_parser.add_argument("query", nargs="*", help="Query text")

    open_parser = subparsers.add_parser("open", help="Launch a result for a query")
    open_parser.add_argument("query", nargs="+", help="Query text")
    open_parser.add_argument(
        "--index", type=int, default=1, help="Which result to open (1-based, default: 1)"
    )
    open_parser.add_argument(
        "--action",
        choices=["open", "copy", "reveal"],
        default="open",
        help="open: launch it (default), copy: print its path or ssh command, "
        "reveal: show a local project in the file manager",
    )

    diagnose_parser = subparsers.add_parser("diagnose", help="Show how each record was read")
    diagnose_parser.add_argument("--limit", type=int, help="Only inspect the first N records")

    return parser.parse_args(argv)


def build_dispatcher(config: AppConfig) -> Dispatcher:
    """Create catalogs and dispatcher for a configuration."""
    workspaces = WorkspaceCatalog(
        config.paths.workspace_storage, CatalogCache(config.cache.ttl_seconds)
    )
    hosts = HostConfigCatalog(config.paths.ssh_config, CatalogCache(config.cache.ttl_seconds))
    return Dispatcher(workspaces, hosts)


def _load(args) -> AppConfig:
    config = load_config(
        config_path=args.config,
        workspace_storage=args.workspace_storage,
        ssh_config=args.ssh_config,
        editor=args.editor,
        debug=args.verbose,
    )
    setup_logging(config.logging)
    return config


def cmd_search(args, config: AppConfig) -> int:
    """Handle the search command."""
    results = build_dispatcher(config).query(" ".join(args.query))
    if not results:
        print("No results.")
        return 0

    for i, result in enumerate(results, start=1):
        print(f"{i:3}. {result.title}")
        print(f"     {result.subtitle}")
    return 0


def run_result(result: SearchResult, config: AppConfig) -> int:
    """Launch the program a result stands for."""
    if result.action == OPEN_EDITOR:
        editor = find_editor(config.launcher.editor)
        if editor is None:
            print("[ERROR] VS Code could not be found on your system.")
            print("        Install it from https://code.visualstudio.com/ or add it to PATH.")
            return 1
        launch(editor_command(editor, result.target))
    elif result.action == OPEN_SSH:
        launch(ssh_command(config.launcher.terminal, result.target))
    elif result.action == OPEN_TERMINAL:
        argv = terminal_command(config.launcher.terminal, config.launcher.agent, result.target)
        launch(argv, cwd=result.target.location)
    else:
        print(f"[ERROR] Nothing to open for: {result.title}")
        return 1

    print(f"[OK] Opened {result.title}")
    return 0


def reveal_result(result: SearchResult) -> int:
    """Show a project result in the file manager."""
    if not isinstance(result.target, ProjectEntry):
        raise ValueError(f"Only projects can be revealed: {result.title}")
    launch(reveal_command(result.target))
    print(f"[OK] Revealed {result.target.location}")
    return 0


def cmd_open(args, config: AppConfig) -> int:
    """Handle the open command."""
    results = [
        r for r in build_dispatcher(config).query(" ".join(args.query)) if r.target is not None
    ]
    if not results:
        print("[ERROR] No matching projects or hosts")
        return 1
    if not 1 <= args.index <= len(results):
        print(f"[ERROR] Index {args.index} out of range (1-{len(results)})")
        return 1

    result = results[args.index - 1]
    if args.action == "copy":
        print(copy_text(result))
        return 0

    try:
        if args.action == "reveal":
            return reveal_result(result)
        return run_result(result, config)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1
    except FileNotFoundError as e:
        print(f"[ERROR] {e}")
        return 1
    except OSError as e:
        logger.error("Launch failed: %s", e)
        print(f"[ERROR] Failed to open {result.title}: {e}")
        return 1


def cmd_diagnose(args, config: AppConfig) -> int:
    """
    Handle the diagnose command.

    Reads the workspace store without the cache and reports every record.
    """
    catalog = WorkspaceCatalog(config.paths.workspace_storage)
    base = catalog.base_path
    print(f"Workspace path: {base}")
    print(f"Exists: {base.is_dir()}")

    try:
        outcomes = catalog.scan()
    except OSError as e:
        print(f"[ERROR] Cannot read workspace storage: {e}")
        return 1

    if args.limit is not None:
        outcomes = outcomes[: args.limit]

    success = 0
    for record_dir, outcome in outcomes:
        if isinstance(outcome, Loaded):
            success += 1
            kind = "REMOTE" if outcome.entry.is_remote else "LOCAL"
            print(f"[OK] {record_dir.name}: {kind} {outcome.entry.location}")
        else:
            print(f"[SKIP] {record_dir.name}: {outcome.reason}")

    print()
    print("=== Summary ===")
    print(f"Processed: {len(outcomes)}")
    print(f"Success: {success}")
    print(f"Failed: {len(outcomes) - success}")

    hosts = HostConfigCatalog(config.paths.ssh_config).parse()
    print()
    print(f"SSH config: {config.paths.ssh_config} ({len(hosts)} hosts)")
    for host in hosts:
        print(f"  {host.alias}: {host.display_label}")
    return 0


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    commands = {
        "search": cmd_search,
        "open": cmd_open,
        "diagnose": cmd_diagnose,
    }
    handler = commands.get(args.command)
    if handler is None:
        print("Usage: code-launcher <command> [options]")
        print()
        print("Commands:")
        print("  search    List matching projects or ssh hosts")
        print("  open      Open a matching project or ssh host")
        print("  diagnose  Show how workspace records are read")
        print()
        print("Run 'code-launcher <command> --help' for more information.")
        return 1

    try:
        config = _load(args)
    except ValueError as e:
        print(f"[ERROR] Configuration error: {e}")
        return 1
    except FileNotFoundError as e:
        print(f"[ERROR] {e}")
        return 1

    return handler(args, config)


if __name__ == "__main__":
    sys.exit(main() or 0)
