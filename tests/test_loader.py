"""Tests for SiteLoader."""

import logging
from pathlib import Path

import pytest
from sitesource.core.errors import FormatUnrecognizedError
from sitesource.core.loader import SiteLoader
from sitesource.core.meta import no_metadata
from sitesource.core.types import ContentKind


class TestIterSourcePaths:
    """Tests for SiteLoader.iter_source_paths()."""

    def test__site__yields_sorted_relative_paths(self, site_dir: Path) -> None:
        """List files under the kind roots, relative and sorted."""
        loader = SiteLoader(site_dir)

        paths = list(loader.iter_source_paths())

        assert paths == [
            Path("includes/footer.html"),
            Path("layouts/default.html"),
            Path("pages/guides/setup.en-US.md"),
            Path("pages/index.md"),
        ]

    def test__other_directories__ignored(self, site_dir: Path) -> None:
        """Skip files outside the kind roots."""
        (site_dir / "assets").mkdir()
        (site_dir / "assets" / "logo.svg").write_text("<svg/>")
        (site_dir / "README.md").write_text("readme")

        paths = list(SiteLoader(site_dir).iter_source_paths())

        assert Path("assets/logo.svg") not in paths
        assert Path("README.md") not in paths

    def test__hidden_files__ignored(self, site_dir: Path) -> None:
        """Skip dotfiles and dot directories."""
        (site_dir / "pages" / ".DS_Store").write_text("")
        (site_dir / "pages" / ".drafts").mkdir()
        (site_dir / "pages" / ".drafts" / "wip.md").write_text("wip")

        paths = list(SiteLoader(site_dir).iter_source_paths())

        assert len(paths) == 4

    def test__missing_source_dir__yields_nothing(self, tmp_path: Path) -> None:
        """Return no paths when the site directory is missing."""
        assert list(SiteLoader(tmp_path / "nope").iter_source_paths()) == []


class TestLoadAll:
    """Tests for SiteLoader.load_all()."""

    def test__valid_site__loads_every_file(self, site_dir: Path) -> None:
        """Load all files and group them by kind."""
        result = SiteLoader(site_dir).load_all()

        assert result.ok
        assert len(result.files) == 4
        assert len(result.by_kind(ContentKind.INCLUDE)) == 1
        assert len(result.by_kind(ContentKind.LAYOUT)) == 1
        pages = result.by_kind(ContentKind.PAGE)
        assert [page.descriptor.name for page in pages] == ["setup", "index"]

    def test__bad_file__collected_as_failure(
        self, site_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Collect failures and keep loading the rest."""
        (site_dir / "pages" / "notes.txt").write_text("plain")

        with caplog.at_level(logging.WARNING):
            result = SiteLoader(site_dir).load_all()

        assert not result.ok
        assert len(result.files) == 4
        assert len(result.failures) == 1
        assert result.failures[0].path == Path("pages/notes.txt")
        assert isinstance(result.failures[0].error, FormatUnrecognizedError)
        assert "Skipping" in caplog.text

    def test__strict__raises_first_error(self, site_dir: Path) -> None:
        """Raise instead of collecting in strict mode."""
        (site_dir / "pages" / "notes.txt").write_text("plain")

        with pytest.raises(FormatUnrecognizedError):
            SiteLoader(site_dir).load_all(strict=True)

    def test__extractor__used_for_every_file(self, site_dir: Path) -> None:
        """Pass the configured extractor to every read."""
        result = SiteLoader(site_dir, extractor=no_metadata).load_all()

        assert all(f.metadata is None for f in result.files)


class TestLoad:
    """Tests for SiteLoader.load()."""

    def test__relative_path__loaded(self, site_dir: Path) -> None:
        """Load one file relative to the site directory."""
        loaded = SiteLoader(site_dir).load("pages/index.md")

        assert loaded.descriptor.path == "pages/index.md"
        assert loaded.metadata is not None
        assert loaded.metadata.get("title") == "Home"

    def test__source_dir__exposed(self, site_dir: Path) -> None:
        """Expose the site directory."""
        assert SiteLoader(site_dir).source_dir == site_dir
