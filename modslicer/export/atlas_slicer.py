"""
Atlas slicing functionality.

This module cuts individual 16x16 textures out of a 256x256 texture atlas
according to a mapping from grid position to output name.
"""

import logging
from pathlib import Path

from modslicer.coordinates.grid_position import CELL_SIZE, GRID_SIZE, GridPosition
from modslicer.errors import OutOfBoundsError
from modslicer.image_ops import IMAGE_EXTENSION, decode_image, save_image

logger = logging.getLogger("modslicer.export.atlas_slicer")

ATLAS_SIZE = GRID_SIZE * CELL_SIZE


def slice_atlas(image_bytes, mapping, output_dir, source="<atlas>"):
    """
    Write one image per mapped atlas cell.

    Args:
        image_bytes: PNG content of the atlas
        mapping: Dict of GridPosition (or its hex text) -> output base name
            without extension
        output_dir: Existing directory to write the slices into
        source: Atlas name used in log and error messages

    Returns:
        List of paths to the written slices, in grid order

    Raises:
        DecodeError: If the bytes are not a PNG image
        OutOfBoundsError: If the image is smaller than 256x256, or a mapped
            cell extends past the image edges
        ResourceIOError: If a slice cannot be written
    """
    image = decode_image(image_bytes, source)
    width, height = image.size
    if mapping and (width < ATLAS_SIZE or height < ATLAS_SIZE):
        raise OutOfBoundsError(
            f"Atlas {source} is {width}x{height}, "
            f"must be at least {ATLAS_SIZE}x{ATLAS_SIZE}"
        )
    if (width, height) != (ATLAS_SIZE, ATLAS_SIZE):
        logger.warning(
            f"Atlas {source} is {width}x{height}, expected {ATLAS_SIZE}x{ATLAS_SIZE}"
        )

    output_dir = Path(output_dir)
    output_paths = []

    cells = sorted(
        (GridPosition.coerce(position), name) for position, name in mapping.items()
    )
    for position, name in cells:
        left, top, right, bottom = position.pixel_box(CELL_SIZE)
        if right > width or bottom > height:
            raise OutOfBoundsError(
                f"Cell {position} of {source} ({left},{top})-({right},{bottom}) "
                f"is outside the {width}x{height} image"
            )

        tile = image.crop((left, top, right, bottom))
        # Names are base names; the extension is appended, never substituted.
        output_path = output_dir / f"{name}{IMAGE_EXTENSION}"
        save_image(tile, output_path)
        output_paths.append(output_path)

    logger.info(f"Sliced {len(output_paths)} textures from {source} into {output_dir}")
    return output_paths
