"""
Parser for OpenSSH client config files (~/.ssh/config).

Only the keywords needed to list and launch connections are read:
Host, HostName, User, Port and IdentityFile. Everything else is ignored.
"""

import locale
import logging
from collections.abc import Iterable
from pathlib import Path

from .cache import CatalogCache
from .models import HostEntry

logger = logging.getLogger(__name__)

# Config keyword -> HostEntry field
_FIELDS = {
    "hostname": "host_name",
    "user": "user",
    "port": "port",
    "identityfile": "identity_file",
}


def parse_host_config(lines: Iterable[str]) -> list[HostEntry]:
    """
    Build host entries from config lines.

    A Host line seals the previous record and opens a new one; value lines
    seen before the first Host line have nothing to attach to and are dropped.
    A Port that is not an integer leaves the port unset.

    Args:
        lines: Lines of the config file.

    Returns:
        Host entries in file order.
    """
    entries: list[HostEntry] = []
    current: dict | None = None

    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        parts = stripped.split()
        if len(parts) < 2:
            continue

        keyword = parts[0].lower()
        value = " ".join(parts[1:])

        if keyword == "host":
            if current is not None:
                entries.append(HostEntry(**current))
            current = {"alias": value}
            continue

        field = _FIELDS.get(keyword)
        if field is None or current is None:
            continue

        if field == "port":
            try:
                current["port"] = int(value)
            except ValueError:
                logger.debug("Ignoring invalid port %r for host %s", value, current["alias"])
            continue

        current[field] = value

    if current is not None:
        entries.append(HostEntry(**current))

    return entries


class HostConfigCatalog:
    """Cached host entries from one config file. parse() never raises."""

    def __init__(self, config_path: str | Path, cache: CatalogCache[HostEntry] | None = None):
        """
        Args:
            config_path: Path to the ssh config file.
            cache: Cache to serve results from. A 5 minute cache is created if omitted.
        """
        self.config_path = Path(config_path)
        self._cache = cache if cache is not None else CatalogCache()

    def parse(self) -> list[HostEntry]:
        """Return configured hosts in file order, from cache when fresh."""
        return self._cache.get(self._load_entries)

    def invalidate_cache(self) -> None:
        """Force the next parse() to re-read the file."""
        self._cache.invalidate()

    def _load_entries(self) -> list[HostEntry]:
        if not self.config_path.is_file():
            logger.debug("SSH config not found: %s", self.config_path)
            return []

        entries = parse_host_config(self._read_lines())
        logger.info("Loaded %d hosts from %s", len(entries), self.config_path)
        return entries

    def _read_lines(self) -> list[str]:
        data = self.config_path.read_bytes()
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            encoding = locale.getpreferredencoding(False)
            logger.debug("%s is not UTF-8, decoding as %s", self.config_path, encoding)
            text = data.decode(encoding, errors="replace")
        return text.splitlines()
