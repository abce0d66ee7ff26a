"""Processing orchestration for the text-to-mesh pipeline.

This module coordinates the full workflow: load the font, lay out the text,
extrude every placed glyph (optionally in worker processes), add the
backing plate and assemble the final mesh.

Key components:
- extrude_instance: Top-level picklable function for parallel execution
- TextProcessor: Main orchestrator class
- TextResult: Everything a run produced
"""

import time
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import partial

from textrude.config import TextrudeSettings
from textrude.core.assemble import assemble_mesh
from textrude.core.extrude import extrude_instance
from textrude.core.layout import LayoutEngine, LayoutResult, unescape_newlines
from textrude.core.plate import build_plate
from textrude.domain import Mesh, Solid
from textrude.io.reader import FontReader
from textrude.utils import ProcessingLogger, ProcessingStats, configure_logging


@dataclass(frozen=True)
class FontInfo:
    """Metadata of the loaded face, for reporting."""

    path: str
    format: str
    units_per_em: int
    face_index: int
    face_count: int


@dataclass
class TextResult:
    """Output of a processing run.

    Attributes:
        mesh: Assembled, oriented and centered mesh
        layout: Layout result (placed glyphs and warnings)
        font: Metadata of the face used
        plate: Plate solid in layout space, if one was built
        stats: Counts and timing of the run
    """

    mesh: Mesh
    layout: LayoutResult
    font: FontInfo
    plate: Solid | None
    stats: ProcessingStats


class TextProcessor:
    """Orchestrates text-to-mesh processing.

    Manages the complete workflow:
    1. Load font file (selecting the configured face)
    2. Lay out the text, collecting missing-glyph warnings
    3. Extrude glyphs, in worker processes when configured
    4. Build the backing plate
    5. Merge, orient and center the mesh
    6. Optionally write the STL

    Example:
        settings = get_default_settings(Path("font.ttf"))
        processor = TextProcessor(settings)
        result = processor.process("HELLO")
        processor.write(result)
    """

    def __init__(self, config: TextrudeSettings, quiet: bool = False) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Textrude settings
            quiet: Suppress log output on stderr
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        text: str,
        progress_callback: Callable[[str], None] | None = None,
    ) -> TextResult:
        """Turn text into a mesh.

        Args:
            text: Text to render; literal ``\\n`` is a line break unless
                escaping is disabled
            progress_callback: Optional callback(step_name) for progress
                reporting

        Returns:
            TextResult with mesh, layout and statistics

        Raises:
            FontLoadError: If the font cannot be loaded
            FaceIndexError: If the face index is out of range
            TriangulationError: If a region has non-finite coordinates
        """
        stats = self.processing_logger.stats
        stats.start_time = time.time()
        config = self.config

        if config.layout.escape:
            text = unescape_newlines(text)

        tolerance = config.tolerance
        self.logger.info(
            "Starting text processing",
            font=str(config.font.path),
            characters=len(text),
            size=config.layout.size,
            tolerance=tolerance,
            depth=config.geometry.depth,
        )

        _notify(progress_callback, "Loading font")
        with FontReader(config.font.path, config.font.face_index) as reader:
            font = FontInfo(
                path=str(config.font.path),
                format=reader.format,
                units_per_em=reader.units_per_em,
                face_index=config.font.face_index,
                face_count=reader.face_count,
            )
            self.processing_logger.log_font_loaded(
                config.font.path,
                font.format,
                font.units_per_em,
                font.face_index,
                font.face_count,
            )

            _notify(progress_callback, "Laying out text")
            engine = LayoutEngine(
                source=reader,
                size=config.layout.size,
                tolerance=tolerance,
                spacing=config.layout.spacing,
                kerning=config.layout.kerning,
            )
            layout = engine.layout(text)

        for instance in layout.instances:
            self.processing_logger.log_glyph_placed(instance.char, instance.offset)
        for missing in layout.warnings:
            self.processing_logger.log_glyph_missing(missing.char, missing.label)

        _notify(progress_callback, "Extruding glyphs")
        solids = self._extrude(layout)

        plate = None
        if config.plate.enabled:
            _notify(progress_callback, "Building plate")
            plate = build_plate(
                layout.bounds,
                config.plate.thickness,
                config.plate.margin,
                config.geometry.depth,
            )
            if plate is not None:
                self.processing_logger.log_solid_built(plate.label, len(plate))

        _notify(progress_callback, "Assembling mesh")
        mesh = assemble_mesh(
            solids,
            plate=plate,
            orient=config.output.orient,
            center=config.output.center,
        )

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            glyphs=stats.glyph_count,
            missing=stats.missing_count,
            solids=stats.solid_count,
            triangles=mesh.triangle_count,
            duration_seconds=round(stats.duration_seconds, 3),
        )

        return TextResult(mesh=mesh, layout=layout, font=font, plate=plate, stats=stats)

    def write(self, result: TextResult) -> None:
        """Write the mesh of a run to the configured destination.

        Args:
            result: Result returned by process()

        Raises:
            MeshWriteError: If the destination cannot be written
        """
        from textrude.io.writer import StlWriter

        writer = StlWriter(self.config.output.path)
        summary = writer.save(result.mesh)
        self.processing_logger.log_facets_skipped(summary.facets_skipped)

    def _extrude(self, layout: LayoutResult) -> list[Solid]:
        """Extrude placed glyphs, keeping text order.

        Args:
            layout: Layout result

        Returns:
            One solid per glyph with geometry
        """
        instances = layout.solid_instances
        depth = self.config.geometry.depth
        max_workers = self.config.processing.max_workers
        extrude = partial(extrude_instance, depth=depth)

        if max_workers is not None and max_workers > 1 and len(instances) > 1:
            self.logger.info(
                "Extruding glyphs in parallel",
                glyphs=len(instances),
                max_workers=max_workers,
            )
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                built = list(executor.map(extrude, instances))
        else:
            built = [extrude(instance) for instance in instances]

        solids: list[Solid] = []
        for solid in built:
            if solid is None:
                continue
            self.processing_logger.log_solid_built(solid.label, len(solid))
            solids.append(solid)
        return solids


def _notify(callback: Callable[[str], None] | None, step: str) -> None:
    if callback is not None:
        callback(step)
