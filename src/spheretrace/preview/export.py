"""Pixel packing and image export.

This module converts the renderer's floating-point color buffer into the
8-bit interleaved RGB pixel buffer consumed by displays, and writes it to
disk.

Supported formats:
    - PNG (8-bit RGB via Pillow)

No tone mapping or gamma is applied: colors are scaled by 255, clamped and
truncated, so the bytes match the shading values directly.

Example:
    >>> import math
    >>> from spheretrace.core.renderer import render_framebuffer
    >>> from spheretrace.preview.export import convert_framebuffer_to_pixels, save_png
    >>>
    >>> buffer = render_framebuffer(640, 480, math.pi / 3)
    >>> pixels = convert_framebuffer_to_pixels(buffer, 640, 480)
    >>> save_png(pixels, 640, 480, "noisy_sphere.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

# Interleaved RGB bytes, shape (width * height * 3,), row-major
PixelBuffer = npt.NDArray[np.uint8]


def convert_framebuffer_to_pixels(
    buffer: npt.ArrayLike,
    width: int,
    height: int,
) -> PixelBuffer:
    """Convert a float color buffer to 8-bit interleaved RGB.

    Each component is multiplied by 255, clamped to [0, 255] and truncated.
    Out-of-range colors (negative, above 1) are absorbed by the clamp.

    Args:
        buffer: Color buffer with width * height RGB triples, row-major.
            Any shape holding that many values is accepted, e.g.
            (width * height, 3) or (height, width, 3).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        uint8 array of shape (width * height * 3,) in R, G, B order.

    Raises:
        ValueError: If the buffer size does not match width * height * 3.
    """
    colors = np.asarray(buffer, dtype=np.float32)
    expected = width * height * 3
    if colors.size != expected:
        raise ValueError(
            f"Buffer holds {colors.size} values, expected {expected} for {width}x{height} RGB"
        )

    scaled = np.clip(colors.reshape(-1) * 255.0, 0.0, 255.0)
    return scaled.astype(np.uint8)


def pixels_to_image(pixels: npt.ArrayLike, width: int, height: int) -> npt.NDArray[np.uint8]:
    """View a pixel buffer as an image array of shape (height, width, 3).

    Raises:
        ValueError: If the buffer size does not match width * height * 3.
    """
    data = np.asarray(pixels, dtype=np.uint8)
    expected = width * height * 3
    if data.size != expected:
        raise ValueError(
            f"Pixel buffer holds {data.size} bytes, expected {expected} for {width}x{height} RGB"
        )
    return data.reshape(height, width, 3)


def save_png(
    pixels: npt.ArrayLike,
    width: int,
    height: int,
    filepath: str | Path,
) -> None:
    """Save a pixel buffer as an 8-bit RGB PNG file.

    Args:
        pixels: Interleaved RGB bytes of length width * height * 3.
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path (should end in .png).
    """
    image = pixels_to_image(pixels, width, height)

    # Save using Pillow
    pil_image = PILImage.fromarray(image, mode="RGB")
    pil_image.save(filepath)

    logger.debug("Saved %dx%d image to %s", width, height, filepath)
