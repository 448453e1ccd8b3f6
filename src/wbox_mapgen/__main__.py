"""
Command line entry point for wbox-mapgen.
Usage: python -m wbox_mapgen IMAGE [options]

The image is a positional argument so the tool also works by dropping an
image file onto it.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .errors import MapConversionError
from .palette.models import ResolutionPolicy
from .pipeline import ConversionPipeline, ConversionRequest, export_swatches
from .settings import AppSettings
from .utils.logging_config import setup_logging


def parse_args(argv: Optional[List[str]], settings: AppSettings) -> argparse.Namespace:
    paths = settings.paths
    conversion = settings.conversion

    p = argparse.ArgumentParser(
        prog="wbox-mapgen",
        description="Convert an image into a WorldBox map using a color palette",
    )
    p.add_argument("image", nargs="?", type=Path, metavar="IMAGE_FILE",
                   help="Input image file (ex: images/example.png)")
    p.add_argument("-p", "--palette", type=Path, default=paths.palette_path,
                   help=f"Color palette file (default: {paths.palette_path})")
    p.add_argument("-m", "--map-data", type=Path, default=None, metavar="MAP_JSON",
                   help=f"JSON map data template (default: {paths.map_data_path} if present)")
    p.add_argument("-o", "--output", type=Path, default=paths.output_path,
                   help=f"Output map file (default: {paths.output_path})")
    p.add_argument("-w", "--world-laws", type=Path, default=paths.world_laws_path,
                   metavar="WORLD_LAWS_FILE",
                   help=f"World laws file (default: {paths.world_laws_path})")
    p.add_argument("-f", "--freeze-map", type=Path, default=None, metavar="FREEZE_MAP_IMAGE",
                   help="Optional freeze map image; white pixels mark frozen tiles")
    p.add_argument("--policy", choices=[policy.value for policy in ResolutionPolicy],
                   default=conversion.palette_policy.value,
                   help=f"Handling of colors missing from the palette (default: {conversion.palette_policy.value})")
    p.add_argument("-s", "--swatches", type=Path, default=None, metavar="SWATCH_FILE",
                   help="Also export palette swatches (.ase, or .gpl for GIMP)")
    p.add_argument("--export-swatches-only", action="store_true",
                   help="Only export swatches from the palette; no image needed")
    p.add_argument("--preview", type=Path, default=None, metavar="PREVIEW_IMAGE",
                   help="Save the image snapped to palette colors")
    p.add_argument("--workers", type=int, default=conversion.workers,
                   help=f"Threads for tile resolution (default: {conversion.workers})")
    p.add_argument("-n", "--no-pause", dest="pause", action="store_false",
                   default=conversion.pause_on_exit,
                   help="Don't wait for Enter before exiting")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug output on the console")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = p.parse_args(argv)
    if args.workers < 1:
        p.error("--workers must be at least 1")
    if args.image is None and not args.export_swatches_only:
        p.error("no input image given")
    if args.export_swatches_only and args.swatches is None:
        p.error("--export-swatches-only needs --swatches")
    return args


def build_request(args: argparse.Namespace, settings: AppSettings) -> ConversionRequest:
    logger = logging.getLogger(f"{__name__}.build_request")

    map_data = args.map_data
    if map_data is None:
        default_map_data = settings.paths.map_data_path
        if default_map_data.exists():
            map_data = default_map_data
        else:
            logger.warning(
                f"Default map data {default_map_data} not found, starting from an empty template"
            )

    return ConversionRequest(
        image_path=args.image,
        palette_path=args.palette,
        output_path=args.output,
        policy=ResolutionPolicy.parse(args.policy),
        map_data_path=map_data,
        world_laws_path=args.world_laws,
        freeze_map_path=args.freeze_map,
        swatch_path=args.swatches,
        preview_path=args.preview,
        workers=args.workers,
        compression_level=settings.conversion.compression_level,
    )


def pause_before_exit() -> None:
    if not sys.stdin or not sys.stdin.isatty():
        return
    try:
        input("Press Enter to exit...")
    except EOFError:
        pass


def run(args: argparse.Namespace, settings: AppSettings) -> int:
    logger = logging.getLogger(f"{__name__}.run")

    try:
        if args.export_swatches_only:
            export_swatches(args.palette, args.swatches, ResolutionPolicy.parse(args.policy))
            return 0

        result = ConversionPipeline().convert(build_request(args, settings))
    except MapConversionError as e:
        logger.error(f"Error: {e}")
        return 1

    settings.paths.add_recent_output(result.output_path)
    for warning in result.law_warnings:
        logger.debug(f"World laws: {warning}")
    logger.info(
        f"Conversion successful: {result.width}x{result.height} map, "
        f"{result.frozen_count} frozen tile(s), written to {result.output_path}"
    )
    return 0


def main(argv: Optional[List[str]] = None, settings: Optional[AppSettings] = None) -> int:
    """Main application entry point."""
    settings = settings if settings is not None else AppSettings()
    args = parse_args(argv, settings)

    setup_logging(settings, verbose=args.verbose)
    logger = logging.getLogger(f"{__name__}.main")
    logger.debug(f"Configuration loaded from {settings.get_settings_file_path()}")
    if settings.is_first_run:
        logger.info(f"Default settings written to {settings.get_settings_file_path()}")
        settings.set_first_run_complete()

    validation = settings.validate()
    for warning in validation.warnings:
        logger.debug(f"Configuration: {warning}")
    if not validation.is_valid:
        for error in validation.errors:
            logger.error(f"Configuration: {error}")
        exit_code = 1
    else:
        exit_code = run(args, settings)

    if args.pause:
        pause_before_exit()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
