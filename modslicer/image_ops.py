"""
Basic image operations module.
"""

import io
import logging

from PIL import Image, UnidentifiedImageError

from modslicer.errors import DecodeError, ResourceIOError

logger = logging.getLogger("modslicer.image_ops")

IMAGE_FORMAT = "PNG"
IMAGE_EXTENSION = ".png"


def decode_image(data, source="<memory>"):
    """
    Decode PNG bytes into an RGBA image.

    Args:
        data: Raw file content
        source: Name used in error messages

    Returns:
        PIL Image object in RGBA mode

    Raises:
        DecodeError: If the data is not a readable PNG image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.format != IMAGE_FORMAT:
                raise DecodeError(f"{source} is {img.format}, expected {IMAGE_FORMAT}")
            return img.convert("RGBA")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        raise DecodeError(f"Cannot decode image {source}: {e}") from e


def save_image(img, output_path):
    """
    Save an image as PNG.

    Args:
        img: PIL Image object to save
        output_path: Destination file path

    Raises:
        ResourceIOError: If the file cannot be written
    """
    try:
        img.save(output_path, format=IMAGE_FORMAT)
    except OSError as e:
        raise ResourceIOError(f"Failed to write image {output_path}: {e}") from e
    logger.debug(f"Saved image as: {output_path}")

