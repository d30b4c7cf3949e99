"""Shared test fixtures."""

from pathlib import Path

import pytest
from sitesource.config import Config, MetadataConfig, SourceConfig, WatchConfig


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create a small site with one file of each kind.

    Layout::

        site/
        ├── includes/footer.html
        ├── layouts/default.html
        └── pages/
            ├── index.md
            └── guides/setup.en-US.md
    """
    site = tmp_path / "site"
    (site / "includes").mkdir(parents=True)
    (site / "layouts").mkdir()
    (site / "pages" / "guides").mkdir(parents=True)

    (site / "includes" / "footer.html").write_text("<footer>Bye</footer>\n")
    (site / "layouts" / "default.html").write_text("<html>{{ content }}</html>\n")
    (site / "pages" / "index.md").write_text("---\ntitle: Home\n---\n# Welcome\n")
    (site / "pages" / "guides" / "setup.en-US.md").write_text(
        "+++\ntitle = \"Setup\"\norder = 2\n+++\nInstall it.\n",
    )
    return site


@pytest.fixture
def test_config(site_dir: Path) -> Config:
    """Create a test configuration pointing at site_dir."""
    return Config(
        source=SourceConfig(source_dir=site_dir),
        metadata=MetadataConfig(),
        watch=WatchConfig(),
    )
