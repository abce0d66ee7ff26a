"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library.
Everything goes to stderr: stdout is reserved for the STL stream.
"""

from rich.console import Console
from rich.text import Text

from textrude.domain import MissingGlyph

console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_WARN = "!"  # Warning
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

MAX_LISTED_WARNINGS = 20


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Textrude[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(
    font_path: str,
    font_type: str,
    upm: int,
    face_index: int = 0,
    face_count: int = 1,
) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        upm: Units per em value
        face_index: Selected face
        face_count: Faces in the file
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)

    details = f"  {upm:,} UPM"
    if face_count > 1:
        details += f" {SYM_DOT} face {face_index} of {face_count}"
    console.print(details)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_missing_glyphs(missing: tuple[MissingGlyph, ...] | list[MissingGlyph], verbose: bool) -> None:
    """Print characters that were skipped because the font lacks them.

    Args:
        missing: Missing glyph warnings in text order
        verbose: List every occurrence instead of distinct characters
    """
    if not missing:
        return

    console.print(
        f"\n[bold yellow]{SYM_WARN} {len(missing)} character(s) not in font[/bold yellow]"
    )
    if verbose:
        entries = [f"{m.label} at {m.index}" for m in missing]
    else:
        entries = list(dict.fromkeys(f"{m.char!r} {m.label}" for m in missing))

    for entry in entries[:MAX_LISTED_WARNINGS]:
        console.print(f"  {entry}", markup=False)
    if len(entries) > MAX_LISTED_WARNINGS:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(entries) - MAX_LISTED_WARNINGS} more)")


def print_success(
    destination: str,
    file_size: str | None,
    total_time_s: float,
    glyphs: int,
    solids: int,
    triangles: int,
    skipped_facets: int = 0,
) -> None:
    """Print success message with summary.

    Args:
        destination: Output path or "<stdout>"
        file_size: Human-readable file size string, None for stdout
        total_time_s: Total processing time in seconds
        glyphs: Number of glyphs placed
        solids: Number of solids in the mesh
        triangles: Number of facets written
        skipped_facets: Zero-area facets left out
    """
    time_str = _format_time(total_time_s)

    # Success header
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    # Output file info
    line = Text("  ")
    line.append(destination, style="bold")
    if file_size is not None:
        line.append(f" ({file_size})")
    console.print(line)

    # Stats line
    stats = f"  {glyphs} glyphs {SYM_DOT} {solids} solids {SYM_DOT} {triangles:,} triangles"
    if skipped_facets:
        stats += f" {SYM_DOT} {skipped_facets} degenerate skipped"
    console.print(stats)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] ", end="")
    console.print(message, markup=False)
    if details:
        console.print(f"  {details}", markup=False)


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print("  No output file created")
