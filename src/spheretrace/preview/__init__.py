"""Preview module for output and visualization.

Components:
    export: Pixel packing (float color -> RGB24) and PNG export via Pillow
    display: Matplotlib-based static preview
    window: Taichi GGUI window that presents a pixel buffer

The preview layer only consumes finished pixel buffers; it never renders.

Example:
    >>> from spheretrace.preview import convert_framebuffer_to_pixels, save_png
    >>>
    >>> pixels = convert_framebuffer_to_pixels(buffer, 640, 480)
    >>> save_png(pixels, 640, 480, "noisy_sphere.png")
"""

from spheretrace.preview.display import show_preview
from spheretrace.preview.export import (
    PixelBuffer,
    convert_framebuffer_to_pixels,
    pixels_to_image,
    save_png,
)
from spheretrace.preview.window import PreviewWindow

__all__ = [
    # Window
    "PreviewWindow",
    # Display functions
    "show_preview",
    # Export functions
    "PixelBuffer",
    "convert_framebuffer_to_pixels",
    "pixels_to_image",
    "save_png",
]
