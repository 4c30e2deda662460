"""CLI entry point for entratel-receipt."""

import logging
import sys
import tomllib
from pathlib import Path

import click
from pydantic import ValidationError

from .adapters.metadata import PikePdfAdapter
from .adapters.pdf import FpdfRenderer
from .config import Settings, load_settings
from .domain.errors import ReceiptError
from .domain.services import ConversionService

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_conversion_service(settings: Settings) -> ConversionService:
    """Create a ConversionService with configured adapters."""
    return ConversionService(
        renderer_factory=lambda: FpdfRenderer(logo=settings.render.logo),
        metadata=PikePdfAdapter(),
        on_error=settings.parsing.on_error,
        strict_fields=settings.parsing.strict_fields,
        stamp_metadata=settings.output.metadata,
        write_sidecar=settings.output.sidecar,
    )


@click.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-c", "--config", type=click.Path(exists=True, path_type=Path), help="Config file path"
)
def cli(file: Path, verbose: bool, config: Path | None) -> None:
    """Convert an Entratel receipt file into a PDF notice next to it."""
    setup_logging(verbose)
    try:
        settings = load_settings(config)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(1)
    service = create_conversion_service(settings)

    try:
        result = service.convert(file)
    except (ReceiptError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"records: {result.record_count}")
    if result.skipped_lines:
        click.echo(f"skipped: {len(result.skipped_lines)}")
    click.echo(f"output: {result.output_path}")
    if result.sidecar_path:
        click.echo(f"sidecar: {result.sidecar_path}")

    if not result.success:
        click.echo(f"Errors: {result.errors}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
