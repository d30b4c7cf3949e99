"""Error types for path classification and file loading.

Storage failures are not wrapped: they surface as the native ``OSError``
raised by the read.
"""


class SiteSourceError(Exception):
    """Base class for site source errors."""


class PathError(SiteSourceError, ValueError):
    """A path could not be turned into a descriptor."""


class PathUnrecognizedError(PathError):
    """Path does not follow the ``root/[dir/]name[.locale].ext`` layout."""

    def __init__(self, raw_path: str) -> None:
        self.raw_path = raw_path
        super().__init__(f"unexpected file path: {raw_path}")


class KindUnrecognizedError(PathError):
    """Root segment is not one of includes, layouts or pages."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"unexpected content kind: {token}")


class FormatUnrecognizedError(PathError):
    """File extension has no known format."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"unexpected file format: {extension}")


class InvalidPathError(PathError):
    """Path cannot be represented as UTF-8 text."""

    def __init__(self, raw_path: object = None) -> None:
        self.raw_path = raw_path
        super().__init__("invalid file path")


class MetadataError(SiteSourceError, ValueError):
    """Metadata block is present but cannot be parsed."""
