"""Logging utilities for textrude."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from textrude.exceptions import ConfigurationError


@dataclass
class ProcessingStats:
    """Statistics from a text-to-mesh run."""

    glyph_count: int = 0
    missing_count: int = 0
    solid_count: int = 0
    triangle_count: int = 0
    skipped_facets: int = 0
    warnings: list[str] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "ERROR",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Log records go to standard error (never standard output, which may be
    carrying the STL) and, when requested, to a log file.

    Args:
        log_file: Path to log file; no file is written if None
        console_level: Logging level for stderr output
        file_level: Logging level for file output
        quiet: If True, suppress stderr output entirely

    Returns:
        Configured structlog logger

    Raises:
        ConfigurationError: If the log file cannot be opened
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguration replaces handlers from a previous call
    for handler in list(root_logger.handlers):
        if getattr(handler, "_textrude", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot open log file {log_file}: {e.strerror or e}") from e
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._textrude = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler._textrude = True  # type: ignore[attr-defined]
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logger = structlog.get_logger("textrude")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking pipeline progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_font_loaded(
        self,
        path: Path,
        font_format: str,
        upm: int,
        face_index: int,
        face_count: int,
    ) -> None:
        """Log font metadata after loading."""
        self._logger.info(
            "Font loaded",
            path=str(path),
            format=font_format,
            upm=upm,
            face_index=face_index,
            face_count=face_count,
        )

    def log_glyph_placed(self, char: str, offset: tuple[float, float]) -> None:
        """Log a glyph placed by the layout."""
        self._logger.debug(
            "Glyph placed",
            char=char,
            x=round(offset[0], 3),
            y=round(offset[1], 3),
        )
        self._stats.glyph_count += 1

    def log_glyph_missing(self, char: str, label: str) -> None:
        """Log a character the font cannot render."""
        self._logger.warning("Glyph missing", char=char, code_point=label)
        self._stats.missing_count += 1
        self._stats.warnings.append(f"missing glyph for {char!r} ({label})")

    def log_solid_built(self, label: str, triangles: int) -> None:
        """Log an extruded solid."""
        self._logger.debug("Solid built", label=label, triangles=triangles)
        self._stats.solid_count += 1
        self._stats.triangle_count += triangles

    def log_facets_skipped(self, count: int) -> None:
        """Log zero-area facets left out of the output."""
        if count:
            self._logger.info("Zero-area facets skipped", count=count)
        self._stats.skipped_facets += count

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
