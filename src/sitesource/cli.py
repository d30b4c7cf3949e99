"""CLI interface for sitesource.

Command-line tool for classifying and loading site source files.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from sitesource.config import Config
from sitesource.core.descriptor import PathDescriptor
from sitesource.core.errors import PathError, SiteSourceError
from sitesource.core.file import LoadedFile
from sitesource.core.loader import SiteLoader
from sitesource.core.meta import extract_front_matter, no_metadata
from sitesource.core.types import ContentKind
from sitesource.live.watch import SourceEvent, SourceWatcher

_CONFIG_OPTION = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover sitesource.toml)",
)

_SOURCE_DIR_OPTION = click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Site source directory (overrides config)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """sitesource - classify and load site source files."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@cli.command()
@click.argument("paths", nargs=-1, required=True)
def classify(paths: tuple[str, ...]) -> None:
    """Classify paths such as pages/guides/setup.en-US.md."""
    failed = False
    for raw_path in paths:
        try:
            descriptor = PathDescriptor.parse(raw_path)
        except PathError as e:
            click.echo(click.style(f"{raw_path}: {e}", fg="red"), err=True)
            failed = True
            continue

        click.echo(
            "\t".join(
                [
                    descriptor.kind.value,
                    descriptor.directory or "-",
                    descriptor.name,
                    str(descriptor.locale) if descriptor.locale else "-",
                    descriptor.format.value,
                ],
            ),
        )

    if failed:
        sys.exit(1)


@cli.command()
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Site directory FILE is relative to",
)
@click.option(
    "--metadata/--no-metadata",
    default=True,
    help="Extract the front matter block (default: enabled)",
)
def show(file: Path, root: Path | None, metadata: bool) -> None:
    """Load one file and print it as JSON."""
    extractor = extract_front_matter if metadata else no_metadata
    try:
        loaded = LoadedFile.read(file, root=root, extractor=extractor)
    except (SiteSourceError, OSError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    payload = {
        "descriptor": loaded.descriptor.to_dict(),
        "metadata": (
            {"syntax": loaded.metadata.syntax, "data": _json_keys(loaded.metadata.data)}
            if loaded.metadata is not None
            else None
        ),
        "content_length": len(loaded.content),
    }
    click.echo(json.dumps(payload, indent=2, default=str))


@cli.command()
@_CONFIG_OPTION
@_SOURCE_DIR_OPTION
@click.option("--strict", is_flag=True, help="Stop at the first file that fails to load")
def scan(config_path: Path | None, source_dir: Path | None, strict: bool) -> None:
    """Load every file of a site and report what was found."""
    config = _load_config(config_path, source_dir)
    _require_source_dir(config)
    loader = SiteLoader(config.source.source_dir, extractor=config.extractor())

    try:
        result = loader.load_all(strict=strict)
    except (SiteSourceError, OSError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Source directory: {loader.source_dir}")
    for kind in ContentKind:
        click.echo(f"{kind.root}: {len(result.by_kind(kind))}")

    if not result.ok:
        click.echo(click.style(f"\n{len(result.failures)} file(s) failed:", fg="red"), err=True)
        for failure in result.failures:
            click.echo(f"  {failure.path}: {failure.error}", err=True)
        sys.exit(1)


@cli.command()
@_CONFIG_OPTION
@_SOURCE_DIR_OPTION
def watch(config_path: Path | None, source_dir: Path | None) -> None:
    """Watch a site and report changed files."""
    config = _load_config(config_path, source_dir)
    if not config.watch.enabled:
        click.echo("Watching disabled in configuration")
        return
    _require_source_dir(config)

    loader = SiteLoader(config.source.source_dir, extractor=config.extractor())
    watcher = SourceWatcher(loader, _echo_event, patterns=config.watch.patterns)

    click.echo(f"Watching {loader.source_dir} (Ctrl+C to stop)")
    try:
        asyncio.run(watcher.run())
    except KeyboardInterrupt:
        click.echo("Stopped")


def _load_config(config_path: Path | None, source_dir: Path | None) -> Config:
    try:
        config = Config.load(config_path)
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    return config.with_overrides(source_dir=source_dir)


def _require_source_dir(config: Config) -> None:
    source_dir = config.source.source_dir
    if not source_dir.is_dir():
        click.echo(
            click.style(f"Error: source directory not found: {source_dir}", fg="red"),
            err=True,
        )
        sys.exit(1)


def _json_keys(value: object) -> object:
    """Stringify mapping keys, e.g. YAML dates, so json.dumps accepts them."""
    if isinstance(value, dict):
        return {str(k): _json_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_keys(v) for v in value]
    return value


def _echo_event(event: SourceEvent) -> None:
    if event.error is not None:
        click.echo(click.style(f"{event.change.name}\t{event.path}\t{event.error}", fg="red"))
        return
    if event.file is None:
        click.echo(f"{event.change.name}\t{event.path}")
        return
    descriptor = event.file.descriptor
    kind_format = f"{descriptor.kind.value}/{descriptor.format.value}"
    click.echo(f"{event.change.name}\t{event.path}\t{kind_format}")
