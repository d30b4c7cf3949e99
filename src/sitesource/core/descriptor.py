"""Path classification for site source files.

A site source tree keeps every file under one of three roots::

    includes/          # fragments pulled into other files
    layouts/           # templates wrapping pages
    pages/             # content
        guides/
            setup.en-US.md

A path is classified into its content kind, optional directory, base name,
optional locale suffix and file format. The descriptor keeps the original
path string and records the directory and name as spans into it.
"""

import os
import re
from dataclasses import dataclass
from typing import Any

from sitesource.core.errors import InvalidPathError, PathUnrecognizedError
from sitesource.core.types import ContentKind, FileFormat, LocaleTag

# root/[dir/]name[.locale...].ext, either separator style
_PATH_PATTERN = re.compile(
    r"(?P<kind>includes|layouts|pages)"
    r"[/\\]"
    r"(?:(?P<dir>[^/\\]+(?:[/\\][^/\\]+)*)[/\\])?"
    r"(?P<name>[^/\\.]+)"
    r"(?P<locale>(?:\.[a-z0-9_-]+)+)?"
    r"\.(?P<ext>[a-z]+)",
    re.IGNORECASE | re.ASCII,
)

Span = tuple[int, int]


@dataclass(frozen=True)
class PathDescriptor:
    """Classification of a single site source path.

    Use ``parse()`` or ``from_path()`` to build one. ``directory`` and
    ``name`` are sliced from ``path`` on access.
    """

    kind: ContentKind
    path: str
    directory_span: Span | None
    name_span: Span
    locale: LocaleTag | None
    format: FileFormat

    @classmethod
    def parse(cls, raw_path: str) -> "PathDescriptor":
        """Classify a path string.

        The whole string must match; paths with a leading prefix before the
        kind root are rejected.

        Args:
            raw_path: Path such as ``pages/guides/setup.en-US.md``

        Returns:
            Fully populated PathDescriptor

        Raises:
            PathUnrecognizedError: If the path does not match the layout
            FormatUnrecognizedError: If the extension is unknown
        """
        match = _PATH_PATTERN.fullmatch(raw_path)
        if match is None:
            raise PathUnrecognizedError(raw_path)

        kind = ContentKind.from_token(match["kind"])
        file_format = FileFormat.from_extension(match["ext"])

        locale = None
        if match["locale"] is not None:
            locale = LocaleTag(match["locale"])

        directory_span = None
        if match["dir"] is not None:
            directory_span = match.span("dir")

        return cls(
            kind=kind,
            path=raw_path,
            directory_span=directory_span,
            name_span=match.span("name"),
            locale=locale,
            format=file_format,
        )

    @classmethod
    def from_path(
        cls,
        path: str | bytes | os.PathLike[str] | os.PathLike[bytes],
    ) -> "PathDescriptor":
        """Classify a path object, bytes path or string.

        Raises:
            InvalidPathError: If the path is not valid UTF-8 text
            PathUnrecognizedError: If the path does not match the layout
            FormatUnrecognizedError: If the extension is unknown
        """
        raw = os.fspath(path)
        if isinstance(raw, bytes):
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidPathError(raw) from e
        else:
            text = raw
            # undecodable file names come back from the OS as lone surrogates
            try:
                text.encode("utf-8")
            except UnicodeEncodeError as e:
                raise InvalidPathError(raw) from e
        return cls.parse(text)

    @property
    def directory(self) -> str | None:
        """Directory between the kind root and the name, if any."""
        if self.directory_span is None:
            return None
        start, end = self.directory_span
        return self.path[start:end]

    @property
    def name(self) -> str:
        """Base name without locale and extension."""
        start, end = self.name_span
        return self.path[start:end]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "path": self.path,
            "directory": self.directory,
            "name": self.name,
            "locale": str(self.locale) if self.locale is not None else None,
            "format": self.format.value,
        }
