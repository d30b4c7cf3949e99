"""Loaded site source file.

A LoadedFile is read once: its descriptor, its metadata block and the
remaining content are captured at construction and never refreshed.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from sitesource.core.descriptor import PathDescriptor
from sitesource.core.meta import Metadata, MetadataExtractor, extract_front_matter

StrPath = str | os.PathLike[str]
AnyPath = StrPath | bytes | os.PathLike[bytes]


@dataclass(frozen=True)
class LoadedFile:
    """Site source file with its descriptor, metadata and content."""

    descriptor: PathDescriptor
    metadata: Metadata | None
    content: bytes

    @classmethod
    def read(
        cls,
        path: AnyPath,
        *,
        root: StrPath | None = None,
        extractor: MetadataExtractor = extract_front_matter,
    ) -> "LoadedFile":
        """Classify and read a file.

        Args:
            path: File path. Classified as given, so it must start at a kind
                  root (e.g. ``pages/about.md``) unless ``root`` is set.
            root: Optional site directory; ``path`` is relative to it
            extractor: Metadata extractor, called with the file format and
                       a mutable copy of the content

        Returns:
            LoadedFile with metadata trimmed from the content

        Raises:
            InvalidPathError: If the path is not valid UTF-8 text
            PathUnrecognizedError: If the path does not match the site layout
            FormatUnrecognizedError: If the extension is unknown
            OSError: If the file cannot be read
            MetadataError: If the default extractor fails on the metadata block
        """
        descriptor = PathDescriptor.from_path(path)
        # read from the decoded text so bytes paths resolve like str paths
        source_path = Path(descriptor.path)
        if root is not None:
            source_path = Path(root) / source_path
        return cls.from_descriptor(descriptor, source_path, extractor=extractor)

    @classmethod
    def from_descriptor(
        cls,
        descriptor: PathDescriptor,
        source_path: StrPath | None = None,
        *,
        extractor: MetadataExtractor = extract_front_matter,
    ) -> "LoadedFile":
        """Read the file a descriptor points at.

        Args:
            descriptor: Parsed descriptor
            source_path: Location to read from (default: descriptor.path)
            extractor: Metadata extractor

        Returns:
            LoadedFile for the descriptor
        """
        location = Path(source_path) if source_path is not None else Path(descriptor.path)
        content = bytearray(location.read_bytes())
        metadata = extractor(descriptor.format, content)
        return cls(descriptor=descriptor, metadata=metadata, content=bytes(content))

    @property
    def text(self) -> str:
        """Content decoded as UTF-8."""
        return self.content.decode("utf-8")
