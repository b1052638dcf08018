"""CLI commands using Typer."""

import time
from pathlib import Path
from typing import Optional

import typer
from bs4 import FeatureNotFound
from rich.console import Console

from mhtml2html.cli.config import Config, create_default_config, load_config, validate_config
from mhtml2html.cli.output import RichOutput
from mhtml2html.models.archive import BatchResult, ConversionResult
from mhtml2html.processor.converter import MHTMLConverter, make_tree_builder
from mhtml2html.processor.errors import MHTMLError
from mhtml2html.utils.logging import OperationLogger, setup_logging

app = typer.Typer(
    name="mhtml2html",
    help="Convert MHTML web archives into self-contained HTML files.",
    add_completion=False,
)
console = Console()
output = RichOutput(console)


def get_config(config_path: Optional[Path]) -> Config:
    """Load and validate configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Loaded Config object; issues are printed as warnings.
    """
    config = load_config(config_path)
    issues = validate_config(config)

    if issues:
        for issue in issues:
            output.print_warning(issue)

    return config


def build_converter(
    config: Config,
    frames: Optional[bool] = None,
    charset: Optional[str] = None,
) -> MHTMLConverter:
    """Create a converter from configuration and command-line overrides."""
    return MHTMLConverter(
        recurse_frames=config.conversion.recurse_frames if frames is None else frames,
        charset_default=charset or config.conversion.charset_default,
        tree_builder=make_tree_builder(config.conversion.parser),
        max_frame_depth=config.conversion.max_frame_depth,
    )


def output_path_for(
    source: Path,
    config: Config,
    destination: Optional[Path] = None,
    single: bool = True,
) -> Path:
    """Work out where the converted HTML for an archive goes.

    Args:
        source: Archive path.
        config: Configuration with output defaults.
        destination: --output value; a file for a single input, else a directory.
        single: Whether only one archive is being converted.

    Returns:
        Output file path.
    """
    filename = source.stem + config.output.suffix

    if destination is not None:
        if single and destination.suffix and not destination.is_dir():
            return destination
        return destination / filename

    if config.output.directory is not None:
        return config.output.directory / filename

    return source.with_name(filename)


def convert_file(
    converter: MHTMLConverter,
    source: Path,
    target: Path,
    overwrite: bool = False,
    op_logger: Optional[OperationLogger] = None,
) -> ConversionResult:
    """Convert one archive file and write the HTML.

    Args:
        converter: Configured converter.
        source: Archive path.
        target: Output HTML path.
        overwrite: Replace an existing output file.
        op_logger: Operation logger recording the outcome.

    Returns:
        ConversionResult describing the outcome.
    """
    op_logger = op_logger or OperationLogger()

    if target.exists() and not overwrite:
        error = f"Output exists: {target} (use --force to overwrite)"
        op_logger.log_operation("convert", source.name, success=False, details={"error": error})
        return ConversionResult(source=str(source), success=False, error=error)

    try:
        archive = converter.parse(source.read_bytes())
        document = converter.convert(archive)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(str(document), encoding="utf-8")
    except (MHTMLError, OSError) as e:
        op_logger.log_error("convert", source.name, e)
        return ConversionResult(source=str(source), success=False, error=str(e))
    except FeatureNotFound as e:
        # Raised by BeautifulSoup when the configured parser is not installed
        op_logger.log_error("convert", source.name, e)
        return ConversionResult(
            source=str(source),
            success=False,
            error=f"HTML parser unavailable: {e}",
        )

    op_logger.log_operation(
        "convert",
        source.name,
        success=True,
        details={"output": str(target), **archive.to_dict()},
    )

    warnings = [f"Ignored duplicate part: {location}" for location in archive.duplicates]
    return ConversionResult(
        source=str(source),
        success=True,
        output=str(target),
        assets=len(archive.assets),
        warnings=warnings,
    )


@app.command()
def convert(
    inputs: list[Path] = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="MHTML archives to convert",
    ),
    destination: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (single input) or directory",
    ),
    frames: Optional[bool] = typer.Option(
        None,
        "--frames/--no-frames",
        help="Embed nested frames as data URIs",
    ),
    charset: Optional[str] = typer.Option(
        None,
        "--charset",
        "-c",
        help="Charset for parts that declare none (default: utf-8)",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to config file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing output files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """Convert MHTML archives into self-contained HTML files."""
    config = get_config(config_path)
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        verbose=verbose,
    )
    op_logger = OperationLogger(config.logging.operations_log)
    converter = build_converter(config, frames=frames, charset=charset)

    batch = BatchResult()
    start = time.monotonic()

    for source in inputs:
        target = output_path_for(source, config, destination, single=len(inputs) == 1)
        result = convert_file(
            converter,
            source,
            target,
            overwrite=force or config.output.overwrite,
            op_logger=op_logger,
        )
        batch.results.append(result)

        output.print_conversion(result)
        for warning in result.warnings:
            output.print_warning(warning)

    batch.duration_seconds = time.monotonic() - start
    op_logger.log_batch_complete(batch.successful, batch.failed, batch.duration_seconds)

    if len(inputs) > 1:
        output.print_batch_result(batch)

    if batch.failed:
        raise typer.Exit(1)


@app.command("inspect")
def inspect_archive(
    source: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="MHTML archive to inspect",
    ),
    charset: Optional[str] = typer.Option(
        None,
        "--charset",
        "-c",
        help="Charset for parts that declare none (default: utf-8)",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to config file",
    ),
) -> None:
    """List the parts of an MHTML archive."""
    config = get_config(config_path)
    converter = build_converter(config, charset=charset)

    try:
        archive = converter.parse(source.read_bytes())
    except MHTMLError as e:
        output.print_error(f"Cannot parse {source}", str(e))
        raise typer.Exit(1)

    output.console.print(f"Root document: [cyan]{archive.index}[/cyan]")
    output.print_archive(archive)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(
        Path("mhtml2html.yaml"),
        help="Where to write the configuration file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing file",
    ),
) -> None:
    """Write a default configuration file."""
    if path.exists() and not force:
        output.print_error(f"{path} already exists", "Use --force to overwrite it")
        raise typer.Exit(1)

    create_default_config(path)
    output.print_success(f"Configuration written to {path}")


if __name__ == "__main__":
    app()
