"""Site loader.

Walks the kind roots of a site directory and loads every file found there.
Per-file failures are collected rather than raised, so one bad file does not
stop a whole site from loading.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from sitesource.core.file import LoadedFile, StrPath
from sitesource.core.meta import MetadataExtractor, extract_front_matter
from sitesource.core.types import ContentKind

logger = logging.getLogger(__name__)

KIND_ROOTS = frozenset(kind.root for kind in ContentKind)


@dataclass(frozen=True)
class LoadFailure:
    """A file that could not be loaded."""

    path: Path
    error: Exception


@dataclass
class LoadResult:
    """Outcome of loading a site."""

    files: list[LoadedFile] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every file loaded."""
        return not self.failures

    def by_kind(self, kind: ContentKind) -> list[LoadedFile]:
        """Loaded files of one content kind, in load order."""
        return [f for f in self.files if f.descriptor.kind is kind]


class SiteLoader:
    """Loads site source files from a directory.

    The directory is expected to hold ``includes/``, ``layouts/`` and
    ``pages/`` roots. Anything else in it is ignored.
    """

    def __init__(
        self,
        source_dir: Path,
        *,
        extractor: MetadataExtractor = extract_front_matter,
    ) -> None:
        """Initialize loader.

        Args:
            source_dir: Site directory containing the kind roots
            extractor: Metadata extractor passed to every file read
        """
        self._source_dir = source_dir
        self._extractor = extractor

    @property
    def source_dir(self) -> Path:
        """Site directory."""
        return self._source_dir

    def iter_source_paths(self) -> Iterator[Path]:
        """Yield files under the kind roots, relative to source_dir.

        Hidden files and directories are skipped. Order is sorted so that
        repeated loads of an unchanged site are identical.
        """
        if not self._source_dir.is_dir():
            return

        for root in sorted(self._source_dir.iterdir()):
            if not root.is_dir() or root.name.lower() not in KIND_ROOTS:
                continue
            for path in sorted(root.rglob("*")):
                relative = path.relative_to(self._source_dir)
                if any(part.startswith(".") for part in relative.parts):
                    continue
                if path.is_file():
                    yield relative

    def load(self, path: StrPath) -> LoadedFile:
        """Load one file.

        Args:
            path: File path relative to source_dir (e.g. "pages/about.md")

        Returns:
            LoadedFile
        """
        return LoadedFile.read(path, root=self._source_dir, extractor=self._extractor)

    def load_all(self, *, strict: bool = False) -> LoadResult:
        """Load every file in the site.

        Args:
            strict: Raise the first error instead of collecting failures

        Returns:
            LoadResult with loaded files and failures
        """
        result = LoadResult()
        for path in self.iter_source_paths():
            try:
                loaded = self.load(path)
            except (ValueError, OSError) as e:
                if strict:
                    raise
                logger.warning(f"Skipping {path}: {e}")
                result.failures.append(LoadFailure(path=path, error=e))
                continue
            descriptor = loaded.descriptor
            logger.debug(f"Loaded {path} as {descriptor.kind.value}/{descriptor.format.value}")
            result.files.append(loaded)

        logger.info(
            f"Loaded {len(result.files)} files from {self._source_dir}, "
            f"{len(result.failures)} failed",
        )
        return result
