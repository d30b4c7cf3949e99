"""Metadata blocks at the head of site source files.

Markdown and HTML files may open with a front matter block::

    ---
    title: Setup
    layout: guide
    ---

``---`` fences hold YAML, ``+++`` fences hold TOML. The extractor parses the
block and trims it off the content buffer. Other formats never carry a block.
"""

import tomllib
from dataclasses import dataclass, field
from typing import Any, Protocol

import yaml

from sitesource.core.errors import MetadataError
from sitesource.core.types import FileFormat

_BOM = b"\xef\xbb\xbf"

_FENCES: dict[bytes, str] = {
    b"---": "yaml",
    b"+++": "toml",
}

_FRONT_MATTER_FORMATS = frozenset({FileFormat.MARKDOWN, FileFormat.HTML})


@dataclass(frozen=True)
class Metadata:
    """Parsed metadata block."""

    data: dict[str, Any] = field(default_factory=dict)
    syntax: str = "yaml"

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a top-level key."""
        return self.data.get(key, default)


class MetadataExtractor(Protocol):
    """Callable that pulls a metadata block out of file content.

    Implementations may trim the block off ``content`` in place.
    """

    def __call__(self, fmt: FileFormat, content: bytearray) -> Metadata | None: ...


def no_metadata(fmt: FileFormat, content: bytearray) -> Metadata | None:
    """Extractor that leaves content untouched and finds nothing."""
    return None


def extract_front_matter(fmt: FileFormat, content: bytearray) -> Metadata | None:
    """Extract a leading front matter block.

    Args:
        fmt: Format of the file the content belongs to
        content: Raw file content, trimmed in place when a block is found

    Returns:
        Metadata if the content opens with a fenced block, None otherwise

    Raises:
        MetadataError: If the block is unterminated or does not parse to a mapping
    """
    if fmt not in _FRONT_MATTER_FORMATS:
        return None

    start = len(_BOM) if content.startswith(_BOM) else 0
    first_newline = content.find(b"\n", start)
    if first_newline == -1:
        return None

    fence = bytes(content[start:first_newline]).rstrip()
    syntax = _FENCES.get(fence)
    if syntax is None:
        return None

    body_start = first_newline + 1
    body_end, block_end = _find_closing_fence(content, fence, body_start)

    try:
        text = bytes(content[body_start:body_end]).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MetadataError(f"metadata block is not valid UTF-8: {e}") from e

    data = _parse_block(text, syntax)
    del content[:block_end]
    return Metadata(data=data, syntax=syntax)


def _find_closing_fence(content: bytearray, fence: bytes, pos: int) -> tuple[int, int]:
    """Locate the closing fence line.

    Returns:
        Tuple of (end of block body, end of closing fence line incl. newline)
    """
    while True:
        newline = content.find(b"\n", pos)
        line_end = len(content) if newline == -1 else newline
        if bytes(content[pos:line_end]).rstrip() == fence:
            return pos, line_end if newline == -1 else newline + 1
        if newline == -1:
            raise MetadataError(f"unterminated metadata block, missing closing {fence.decode()}")
        pos = newline + 1


def _parse_block(text: str, syntax: str) -> dict[str, Any]:
    if syntax == "toml":
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise MetadataError(f"invalid TOML metadata: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MetadataError(f"invalid YAML metadata: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MetadataError("metadata block must be a mapping")
    return data
