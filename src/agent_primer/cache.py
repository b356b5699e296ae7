"""Flat on-disk cache of resolved package descriptions.

One entry per line in ``name|description`` form. The whole file is read
when the cache is opened and written back when it is closed, including
when the run is aborted by an exception.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

from .logging import logger


class PackageCache:
    """Case-insensitive package name -> description store.

    Use as a context manager::

        with PackageCache(settings.cache_path) as cache:
            description = cache.get("Newtonsoft.Json")
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._entries: dict[str, tuple[str, str]] = {}
        self._dirty = False

    def __enter__(self) -> PackageCache:
        self.load()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.flush()

    def __contains__(self, name: str) -> bool:
        return name.casefold() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> None:
        """Read every entry from disk. A missing or unreadable file is an empty cache."""
        self._entries.clear()
        self._dirty = False
        if not self.path.is_file():
            return

        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Package cache '%s' could not be read: %s", self.path, e)
            return

        for line in text.splitlines():
            name, sep, description = line.partition("|")
            name = name.strip()
            if not sep or not name:
                continue
            self._entries[name.casefold()] = (name, description)

        logger.debug("Loaded %d cached package descriptions", len(self._entries))

    def get(self, name: str) -> str | None:
        entry = self._entries.get(name.casefold())
        return entry[1] if entry else None

    def add(self, name: str, description: str) -> None:
        """Record a description. Newlines are folded so the file stays one entry per line."""
        description = " ".join(description.splitlines()).strip()
        self._entries[name.casefold()] = (name, description)
        self._dirty = True

    def items(self) -> list[tuple[str, str]]:
        return list(self._entries.values())

    def flush(self) -> None:
        """Write the cache back to disk if it changed since it was loaded."""
        if not self._dirty:
            return

        lines = [f"{name}|{description}" for name, description in self._entries.values()]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("\n".join(lines) + "\n", encoding="utf-8")
            self._dirty = False
        except OSError as e:
            logger.warning("Package cache '%s' could not be written: %s", self.path, e)
