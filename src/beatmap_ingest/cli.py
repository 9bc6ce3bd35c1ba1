"""CLI interface for beatmap_ingest."""

from pathlib import Path
from uuid import uuid4

import typer

from .errors import UploadError
from .interfaces.cli_handlers import process_archive_file, process_archive_to_dir, resolve_policy

app = typer.Typer(help="Beatmap ingest command line interface")


@app.command("process")
def process_command(
    archive: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to the zipped beatmap"),
    output_dir: Path = typer.Option(
        ..., "--output-dir", "-o", help="Directory for the repackaged archive, cover and metadata"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Optional JSON or YAML ingest config."
    ),
) -> None:
    """Validate a beatmap archive and write the normalized outputs."""

    correlation_id = str(uuid4())
    try:
        written = process_archive_to_dir(archive, output_dir, config_path=config, correlation_id=correlation_id)
    except UploadError as error:
        typer.echo(f"{error.code}: {error.message}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(f"Hash: {written.result.parsed.hash}")
    typer.echo(f"Archive written to: {written.archive_path}")
    typer.echo(f"Cover written to: {written.cover_path}")
    typer.echo(f"Metadata written to: {written.metadata_path}")
    typer.echo(f"Correlation ID: {correlation_id}")


@app.command("fingerprint")
def fingerprint_command(
    archive: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to the zipped beatmap"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Optional JSON or YAML ingest config."
    ),
) -> None:
    """Print the content fingerprint of a beatmap archive."""

    try:
        result = process_archive_file(archive, policy=resolve_policy(config))
    except UploadError as error:
        typer.echo(f"{error.code}: {error.message}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(result.parsed.hash)


if __name__ == "__main__":
    app()
