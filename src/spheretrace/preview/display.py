"""Matplotlib-based preview display for rendered images.

Example:
    >>> from spheretrace.preview.display import show_preview
    >>>
    >>> show_preview(pixels, 640, 480)
"""

from __future__ import annotations

import numpy.typing as npt

from spheretrace.preview.export import pixels_to_image


def show_preview(
    pixels: npt.ArrayLike,
    width: int,
    height: int,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a pixel buffer as a Matplotlib figure.

    Args:
        pixels: Interleaved RGB bytes of length width * height * 3.
        width: Image width in pixels.
        height: Image height in pixels.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    image = pixels_to_image(pixels, width, height)

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Sphere Trace - {width}x{height}")

    plt.tight_layout()
    plt.show(block=block)
