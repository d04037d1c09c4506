"""Command-line interface for mediameta."""

import json
import sys
from pathlib import Path

import click

from mediameta import __version__
from mediameta.config import load_config
from mediameta.metadata.exiftool import parse_exiftool_json
from mediameta.metadata.picasa import parse_picasa_ini, sidecar_for_file
from mediameta.metadata.resolver import MetadataResolver
from mediameta.utils.logger import get_logger, setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (defaults to built-in defaults)",
)
@click.pass_context
def cli(ctx, config):
    """mediameta - normalize photo and video metadata."""
    try:
        cfg = load_config(config)
        ctx.ensure_object(dict)
        ctx.obj["config"] = cfg

        setup_logging(cfg.logging)

    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("exiftool_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--picasa",
    "-p",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Picasa.ini with captions, keywords and stars for files in its folder",
)
@click.option(
    "--embed-exif/--no-embed-exif",
    default=None,
    help="Attach the merged EXIF snapshot (default: from config)",
)
@click.pass_context
def resolve(ctx, exiftool_json, picasa, embed_exif):
    """Resolve normalized records from exiftool JSON output.

    Prints one JSON object per file.
    """
    config = ctx.obj["config"]
    logger = get_logger(__name__)

    options = config.resolution
    if embed_exif is not None:
        options = options.model_copy(update={"embed_exif": embed_exif})

    try:
        files = parse_exiftool_json(exiftool_json.read_bytes())
        sidecars = parse_picasa_ini(picasa.read_text(encoding="utf-8")) if picasa else {}
    except (OSError, ValueError) as e:
        click.secho(f"✗ {e}", fg="red", err=True)
        sys.exit(1)

    logger.info(
        "Resolving metadata",
        file_count=len(files),
        sidecar_count=len(sidecars),
        embed_exif=options.embed_exif,
    )

    resolver = MetadataResolver(options)
    for path, raw_tags in files.items():
        sidecar = sidecar_for_file(sidecars, picasa.parent, path) if picasa else None
        record = resolver.resolve(raw_tags, sidecar)
        click.echo(json.dumps({"file": path, **record.to_dict()}, default=str))


@cli.command()
@click.pass_context
def version(ctx):
    """Show version information."""
    click.echo(f"mediameta v{__version__}")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
