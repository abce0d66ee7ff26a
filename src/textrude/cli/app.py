"""CLI application entry point for textrude.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from textrude import __version__
from textrude.cli.output import (
    console,
    print_cancellation_notice,
    print_error,
    print_font_info,
    print_header,
    print_missing_glyphs,
    print_step,
    print_success,
)
from textrude.config import (
    FontConfig,
    GeometryConfig,
    LayoutConfig,
    LoggingConfig,
    Orientation,
    OutputConfig,
    PlateConfig,
    ProcessingConfig,
    TextrudeSettings,
)
from textrude.core import TextProcessor
from textrude.exceptions import ConfigurationError, FontLoadError, MeshWriteError, TextrudeError

DEFAULT_LOG_LEVEL = "ERROR"

# Create the Typer app
app = typer.Typer(
    name="textrude",
    help="Turn a line of text into an extruded 3D mesh (ASCII STL).",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Textrude[/bold blue] v{__version__}")
        raise typer.Exit()


def build_settings(
    font: Path,
    face_index: int = 0,
    size: float = 72.0,
    tolerance: float | None = None,
    depth: float = 10.0,
    spacing: float = 0.0,
    kerning: bool = True,
    escape: bool = True,
    plate: float = 0.0,
    plate_margin: float = 2.0,
    orient: Orientation = Orientation.FRONT,
    center: bool = True,
    output: Path | None = None,
    workers: int | None = None,
    log_file: Path | None = None,
    log_level: str = DEFAULT_LOG_LEVEL,
) -> TextrudeSettings:
    """Validate CLI values into settings.

    Raises:
        ConfigurationError: If any value is out of range
    """
    try:
        return TextrudeSettings(
            font=FontConfig(path=font, face_index=face_index),
            layout=LayoutConfig(size=size, spacing=spacing, kerning=kerning, escape=escape),
            geometry=GeometryConfig(tolerance=tolerance, depth=depth),
            plate=PlateConfig(thickness=plate, margin=plate_margin),
            output=OutputConfig(orient=orient, center=center, path=output),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(log_file=log_file, log_level=log_level.upper()),
        )
    except ValidationError as e:
        raise ConfigurationError(_describe_validation_error(e)) from e


def _describe_validation_error(error: ValidationError) -> str:
    """First validation problem as a single readable line."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"Invalid value for {field}: {first['msg']}" if field else first["msg"]


@app.command()
def extrude(
    text: Annotated[
        str,
        typer.Argument(
            help="Text to render (a literal \\n starts a new line)",
            show_default=False,
        ),
    ],
    font: Annotated[
        Path,
        typer.Option(
            "--font",
            "-f",
            help="Path to a TTF/OTF/TTC font file",
            show_default=False,
        ),
    ],
    face_index: Annotated[
        int,
        typer.Option(
            "--face-index",
            help="Face index inside a font collection",
        ),
    ] = 0,
    size: Annotated[
        float,
        typer.Option(
            "--size",
            help="Font size (one em) in output units",
        ),
    ] = 72.0,
    tolerance: Annotated[
        float | None,
        typer.Option(
            "--tolerance",
            help="Curve flattening tolerance (default: scaled with size)",
        ),
    ] = None,
    depth: Annotated[
        float,
        typer.Option(
            "--depth",
            help="Extrusion depth",
        ),
    ] = 10.0,
    spacing: Annotated[
        float,
        typer.Option(
            "--spacing",
            help="Extra spacing after every glyph",
        ),
    ] = 0.0,
    kerning: Annotated[
        bool,
        typer.Option(
            "--kerning/--no-kerning",
            help="Apply kerning pairs from the font",
        ),
    ] = True,
    plate: Annotated[
        float,
        typer.Option(
            "--plate",
            help="Backing plate thickness (0 = no plate)",
        ),
    ] = 0.0,
    plate_margin: Annotated[
        float,
        typer.Option(
            "--plate-margin",
            help="Plate extent past the text on each side",
        ),
    ] = 2.0,
    orient: Annotated[
        Orientation,
        typer.Option(
            "--orient",
            help="Text plane: flat (XY, on the bed) or front (XZ, standing)",
            case_sensitive=False,
        ),
    ] = Orientation.FRONT,
    no_escape: Annotated[
        bool,
        typer.Option(
            "--no-escape",
            help="Keep literal backslash-n instead of breaking the line",
        ),
    ] = False,
    no_center: Annotated[
        bool,
        typer.Option(
            "--no-center",
            help="Keep layout coordinates instead of centering on the origin",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output STL path (default: stdout)",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Worker processes for extrusion (default: in-process)",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level on stderr (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = DEFAULT_LOG_LEVEL,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="No console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Extrude TEXT into a 3D mesh and write it as ASCII STL.

    Every glyph becomes a closed solid of the given depth. Glyphs missing
    from the font are skipped with a warning.

    Example:
        textrude "HELLO" --font Roboto-Regular.ttf -o hello.stl
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if verbose and log_level.upper() == DEFAULT_LOG_LEVEL:
        log_level = "INFO"

    try:
        settings = build_settings(
            font=font,
            face_index=face_index,
            size=size,
            tolerance=tolerance,
            depth=depth,
            spacing=spacing,
            kerning=kerning,
            escape=not no_escape,
            plate=plate,
            plate_margin=plate_margin,
            orient=orient,
            center=not no_center,
            output=output,
            workers=workers,
            log_file=log_file,
            log_level=log_level,
        )

        if not quiet:
            print_header(__version__)

        processor = TextProcessor(settings, quiet=quiet)
        result = processor.process(text, progress_callback=None if quiet else print_step)

        if not quiet:
            print_font_info(
                font_path=result.font.path,
                font_type=result.font.format,
                upm=result.font.units_per_em,
                face_index=result.font.face_index,
                face_count=result.font.face_count,
            )
            print_step("Writing STL")

        processor.write(result)
        stats = result.stats

        if not quiet:
            print_missing_glyphs(result.layout.warnings, verbose=verbose)
            print_success(
                destination=str(output) if output is not None else "<stdout>",
                file_size=_format_file_size(output) if output is not None else None,
                total_time_s=stats.duration_seconds,
                glyphs=stats.glyph_count,
                solids=stats.solid_count,
                triangles=result.mesh.triangle_count - stats.skipped_facets,
                skipped_facets=stats.skipped_facets,
            )

    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except MeshWriteError as e:
        print_error(f"Could not write mesh: {e.reason}", details=e.destination)
        raise typer.Exit(code=1)
    except TextrudeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
