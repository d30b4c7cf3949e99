"""Change watcher for site source files.

Monitors the site directory and re-reads files when they change. Loaded
files are never refreshed in place: every change produces a new LoadedFile.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from watchfiles import Change, awatch

from sitesource.core.file import LoadedFile
from sitesource.core.loader import KIND_ROOTS, SiteLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceEvent:
    """A change to one site source file.

    ``file`` is set for added and modified files that loaded, ``error`` for
    those that did not. Both are None for deletions.
    """

    change: Change
    path: Path
    file: LoadedFile | None = None
    error: Exception | None = None


class SourceWatcher:
    """Watches a site directory and reloads changed files."""

    def __init__(
        self,
        loader: SiteLoader,
        on_event: Callable[[SourceEvent], None],
        patterns: list[str] | None = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            loader: Loader used to re-read changed files
            on_event: Called once per change, in path order within a batch
            patterns: Glob patterns relative to the site directory
                      (default: every file under the kind roots)
        """
        self._loader = loader
        self._on_event = on_event
        self._patterns = patterns

    async def run(self) -> None:
        """Watch until cancelled.

        Changed files are re-read in a worker thread so the event loop
        stays free while a batch is loaded.
        """
        async for changes in awatch(self._loader.source_dir):
            events = await asyncio.to_thread(self.process, changes)
            for event in events:
                self._on_event(event)

    def process(self, changes: Iterable[tuple[Change, str]]) -> list[SourceEvent]:
        """Turn a batch of raw file changes into source events.

        Args:
            changes: (change type, absolute path) pairs from watchfiles

        Returns:
            Events for changes under the kind roots, sorted by path
        """
        root = self._loader.source_dir.resolve()
        events: list[SourceEvent] = []

        for change_type, path_str in sorted(changes, key=lambda c: c[1]):
            relative = self._to_relative(root, Path(path_str))
            if relative is None:
                continue

            if change_type == Change.deleted:
                events.append(SourceEvent(change=change_type, path=relative))
                continue

            if not (root / relative).is_file():
                continue

            try:
                loaded = self._loader.load(relative)
            except (ValueError, OSError) as e:
                logger.warning(f"Failed to reload {relative}: {e}")
                events.append(SourceEvent(change=change_type, path=relative, error=e))
                continue

            logger.debug(f"Reloaded {relative}")
            events.append(SourceEvent(change=change_type, path=relative, file=loaded))

        return events

    def _to_relative(self, root: Path, path: Path) -> Path | None:
        """Path relative to the site directory, or None if it is not watched."""
        try:
            relative = path.resolve().relative_to(root)
        except ValueError:
            return None

        if len(relative.parts) < 2 or relative.parts[0].lower() not in KIND_ROOTS:
            return None
        if any(part.startswith(".") for part in relative.parts):
            return None
        if self._patterns is not None and not any(relative.match(p) for p in self._patterns):
            return None
        return relative
