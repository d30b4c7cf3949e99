"""Configuration management for sitesource.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from sitesource.core.meta import MetadataExtractor, extract_front_matter, no_metadata

CONFIG_FILENAME = "sitesource.toml"


@dataclass
class SourceConfig:
    """Site source configuration."""

    source_dir: Path = field(default_factory=lambda: Path("site"))


@dataclass
class MetadataConfig:
    """Metadata extraction configuration."""

    extract: bool = True


@dataclass
class WatchConfig:
    """Change watcher configuration."""

    enabled: bool = True
    patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    source: SourceConfig
    metadata: MetadataConfig
    watch: WatchConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for sitesource.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(
            source=SourceConfig(),
            metadata=MetadataConfig(),
            watch=WatchConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid configuration file {path}: {e}") from e

        config_dir = path.parent

        return cls(
            source=cls._parse_source(data.get("source"), config_dir),
            metadata=cls._parse_metadata(data.get("metadata")),
            watch=cls._parse_watch(data.get("watch")),
            config_path=path,
        )

    @classmethod
    def _parse_source(cls, data: object, config_dir: Path) -> SourceConfig:
        """Parse source configuration section.

        Args:
            data: Raw source section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SourceConfig instance
        """
        if data is None:
            return SourceConfig(source_dir=config_dir / "site")

        if not isinstance(data, dict):
            raise ValueError("source section must be a dictionary")

        source_dir = data.get("dir", "site")
        if not isinstance(source_dir, str):
            raise ValueError("source.dir must be a string")

        return SourceConfig(source_dir=config_dir / source_dir)

    @classmethod
    def _parse_metadata(cls, data: object) -> MetadataConfig:
        if data is None:
            return MetadataConfig()

        if not isinstance(data, dict):
            raise ValueError("metadata section must be a dictionary")

        extract = data.get("extract", True)
        if not isinstance(extract, bool):
            raise ValueError("metadata.extract must be a boolean")

        return MetadataConfig(extract=extract)

    @classmethod
    def _parse_watch(cls, data: object) -> WatchConfig:
        """Parse watch configuration section.

        Args:
            data: Raw watch section data

        Returns:
            WatchConfig instance
        """
        if data is None:
            return WatchConfig()

        if not isinstance(data, dict):
            raise ValueError("watch section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("watch.enabled must be a boolean")

        patterns_raw = data.get("patterns")
        patterns: list[str] | None = None
        if patterns_raw is not None:
            if not isinstance(patterns_raw, list):
                raise ValueError("watch.patterns must be a list")
            patterns = []
            for item in patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("watch.patterns items must be strings")
                patterns.append(item)

        return WatchConfig(enabled=enabled, patterns=patterns)

    def extractor(self) -> MetadataExtractor:
        """Metadata extractor selected by the metadata section."""
        return extract_front_matter if self.metadata.extract else no_metadata

    def with_overrides(
        self,
        *,
        source_dir: Path | None = None,
        extract_metadata: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            source_dir: Override source.dir
            extract_metadata: Override metadata.extract

        Returns:
            New Config instance with overrides applied
        """
        source = self.source
        if source_dir is not None:
            source = replace(self.source, source_dir=source_dir)

        metadata = self.metadata
        if extract_metadata is not None:
            metadata = replace(self.metadata, extract=extract_metadata)

        return replace(self, source=source, metadata=metadata)
