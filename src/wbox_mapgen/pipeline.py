"""
Conversion pipeline: image + palette + laws + template -> .wbox map.

Independent inputs are loaded concurrently; the freeze map waits for the
primary image because it must match its size. Any failure aborts the whole
conversion and no output appears under the final file names.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

from .imaging.loader import PixelGrid, load_pixel_grid
from .imaging.preview import save_preview
from .laws.law_set import WorldLawSet
from .maps.assembler import MapAssembler
from .maps.freeze_mask import FreezeMask
from .maps.serializer import MapSerializer
from .maps.template import MapTemplate
from .palette.models import ResolutionPolicy
from .palette.table import PaletteTable
from .swatches.exporter import SwatchExporter

PathLike = Union[str, Path]


@dataclass
class ConversionRequest:
    """Everything one conversion needs.

    Optional inputs left as None are skipped: no template gives an empty
    document, no laws file gives the default laws, no freeze map freezes
    nothing.
    """

    image_path: Path
    palette_path: Path
    output_path: Path
    policy: ResolutionPolicy = ResolutionPolicy.STRICT
    map_data_path: Optional[Path] = None
    world_laws_path: Optional[Path] = None
    freeze_map_path: Optional[Path] = None
    swatch_path: Optional[Path] = None
    preview_path: Optional[Path] = None
    workers: int = 1
    compression_level: int = 1


@dataclass
class ConversionResult:
    """Summary of a finished conversion."""

    output_path: Path
    width: int
    height: int
    tile_count: int
    frozen_count: int
    law_warnings: Tuple[str, ...] = ()
    swatch_path: Optional[Path] = None
    preview_path: Optional[Path] = None
    elapsed: float = 0.0
    terrain_ids: Tuple[str, ...] = field(default_factory=tuple)


class ConversionPipeline:
    """Runs one conversion end to end."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def convert(self, request: ConversionRequest) -> ConversionResult:
        """Convert an image to a map container.

        Raises:
            MapConversionError: Any load, assembly, encoding or write failure
        """
        start = time.perf_counter()

        pixels, palette, laws, template = self._load_inputs(request)
        self.logger.info(f"Inputs loaded in {time.perf_counter() - start:.3f}s")

        freeze = FreezeMask.load(request.freeze_map_path, pixels.width, pixels.height)

        assembler = MapAssembler(workers=request.workers)
        document = assembler.assemble(pixels, palette, freeze, laws, template)
        self.logger.info(f"Map assembled in {time.perf_counter() - start:.3f}s")

        serializer = MapSerializer(compression_level=request.compression_level)
        data = serializer.encode(document)

        # Side artifacts first: the map only appears once everything else succeeded
        preview_path = None
        if request.preview_path is not None:
            preview_path = save_preview(pixels, palette, request.preview_path)

        swatch_path = None
        if request.swatch_path is not None:
            swatch_path = SwatchExporter().export(palette, request.swatch_path)

        output_path = serializer.write_encoded(data, request.output_path)

        elapsed = time.perf_counter() - start
        self.logger.info(f"Total execution time: {elapsed:.3f}s")

        return ConversionResult(
            output_path=output_path,
            width=document.width,
            height=document.height,
            tile_count=document.tile_count,
            frozen_count=document.frozen_count,
            law_warnings=laws.warnings,
            swatch_path=swatch_path,
            preview_path=preview_path,
            elapsed=elapsed,
            terrain_ids=tuple(document.terrain_ids()),
        )

    def _load_inputs(
        self, request: ConversionRequest
    ) -> Tuple[PixelGrid, PaletteTable, WorldLawSet, MapTemplate]:
        """Load image, palette, laws and template in parallel."""
        with ThreadPoolExecutor(max_workers=4) as executor:
            image_future = executor.submit(load_pixel_grid, request.image_path)
            palette_future = executor.submit(PaletteTable.load, request.palette_path, request.policy)
            laws_future = executor.submit(WorldLawSet.load, request.world_laws_path)
            template_future = executor.submit(MapTemplate.load, request.map_data_path)

            # Surface failures in a fixed order so errors are reproducible
            palette = palette_future.result()
            pixels = image_future.result()
            laws = laws_future.result()
            template = template_future.result()

        self.logger.debug(
            f"Image {pixels.width}x{pixels.height}, palette {len(palette)} entries, "
            f"{len(laws)} laws, template keys {list(template.keys())}"
        )
        return pixels, palette, laws, template


def export_swatches(
    palette_path: PathLike,
    destination: PathLike,
    policy: ResolutionPolicy = ResolutionPolicy.STRICT,
) -> Path:
    """Load a palette and write its swatch table, without any image."""
    palette = PaletteTable.load(palette_path, policy)
    return SwatchExporter().export(palette, destination)
