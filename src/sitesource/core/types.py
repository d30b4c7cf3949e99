"""Classification types for site source files.

Content kinds and file formats are closed sets: every lookup either returns
a member or raises, there is no fallback member.
"""

from dataclasses import dataclass
from enum import Enum

from sitesource.core.errors import FormatUnrecognizedError, KindUnrecognizedError


class ContentKind(Enum):
    """Authoring role of a file, taken from its root directory."""

    INCLUDE = "include"
    LAYOUT = "layout"
    PAGE = "page"

    @classmethod
    def from_token(cls, token: str) -> "ContentKind":
        """Resolve a root directory name such as ``pages``.

        Raises:
            KindUnrecognizedError: If the token is not a known root
        """
        kind = _KIND_ROOTS.get(token.lower())
        if kind is None:
            raise KindUnrecognizedError(token)
        return kind

    @property
    def root(self) -> str:
        """Directory name this kind lives under."""
        return f"{self.value}s"


_KIND_ROOTS: dict[str, ContentKind] = {
    "includes": ContentKind.INCLUDE,
    "layouts": ContentKind.LAYOUT,
    "pages": ContentKind.PAGE,
}


class FileFormat(Enum):
    """Format of a file, taken from its extension."""

    HTML = "html"
    MARKDOWN = "markdown"
    YAML = "yaml"
    JSON = "json"
    SCRIPT = "script"
    SHELL = "shell"

    @classmethod
    def from_extension(cls, extension: str) -> "FileFormat":
        """Resolve an extension (without the dot), ignoring case.

        Raises:
            FormatUnrecognizedError: If the extension is not in the alias table
        """
        fmt = _EXTENSIONS.get(extension.lower())
        if fmt is None:
            raise FormatUnrecognizedError(extension)
        return fmt

    @property
    def extensions(self) -> tuple[str, ...]:
        """All extensions that map to this format."""
        return tuple(ext for ext, fmt in _EXTENSIONS.items() if fmt is self)


_EXTENSIONS: dict[str, FileFormat] = {
    "html": FileFormat.HTML,
    "htm": FileFormat.HTML,
    "xhtml": FileFormat.HTML,
    "xml": FileFormat.HTML,
    "yaml": FileFormat.YAML,
    "yml": FileFormat.YAML,
    "json": FileFormat.JSON,
    "rhai": FileFormat.SCRIPT,
    "md": FileFormat.MARKDOWN,
    "markdown": FileFormat.MARKDOWN,
    "mdown": FileFormat.MARKDOWN,
    "mkdn": FileFormat.MARKDOWN,
    "mdwn": FileFormat.MARKDOWN,
    "mdtxt": FileFormat.MARKDOWN,
    "mdtext": FileFormat.MARKDOWN,
    "text": FileFormat.MARKDOWN,
    "rmd": FileFormat.MARKDOWN,
    "sh": FileFormat.SHELL,
}


@dataclass(frozen=True)
class LocaleTag:
    """Locale hint carried verbatim from a file name (e.g. ``.en-US``)."""

    raw: str

    def __str__(self) -> str:
        return self.raw
