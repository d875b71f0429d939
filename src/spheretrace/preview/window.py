"""Preview window using Taichi GGUI.

This module shows a finished pixel buffer in a window until the user
closes it. It owns no rendering logic: it only uploads the bytes produced
by convert_framebuffer_to_pixels() to a display field and presents it
every frame.

Example:
    >>> from spheretrace.preview.window import PreviewWindow
    >>>
    >>> window = PreviewWindow(640, 480)
    >>> window.update_pixels(pixels)
    >>> window.run()
"""

from __future__ import annotations

import os

import numpy as np
import numpy.typing as npt
import taichi as ti

from spheretrace.preview.export import pixels_to_image


class PreviewWindow:
    """Window that presents an RGB24 pixel buffer.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(self, width: int, height: int, *, title: str = "Sphere Trace") -> None:
        """Create the display field.

        The GGUI window itself is created lazily on first use, so the
        object can be built and filled in headless environments.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            title: Window title.
        """
        self.width = width
        self.height = height
        self._title = title

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        # Taichi fields use (x, y) indexing, i.e. (width, height)
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        if self._window is not None:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()

    def update_pixels(self, pixels: npt.ArrayLike) -> None:
        """Load an interleaved RGB pixel buffer into the display field.

        Args:
            pixels: uint8 buffer of length width * height * 3, row-major
                with row 0 at the top.

        Raises:
            ValueError: If the buffer size doesn't match the window.
        """
        image = pixels_to_image(pixels, self.width, self.height)

        # NumPy images are (height, width, channels) with a top-left origin,
        # Taichi canvases are (width, height) with a bottom-left origin
        normalized = image.astype(np.float32) / 255.0
        transposed = np.ascontiguousarray(np.transpose(np.flipud(normalized), (1, 0, 2)))
        self.display_image.from_numpy(transposed)

    def is_running(self) -> bool:
        """Check if the window is still open."""
        self._initialize_window()
        assert self._window is not None
        return self._window.running

    def show_frame(self) -> None:
        """Present the display image once."""
        self._initialize_window()
        assert self._window is not None and self._canvas is not None
        self._canvas.set_image(self.display_image)
        self._window.show()

    def run(self) -> None:
        """Present the image every frame until the window is closed."""
        while self.is_running():
            self.show_frame()

    def close(self) -> None:
        """Stop any running event loop."""
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.name == "nt":
            return True

        # On macOS, display is always available unless in SSH without X
        if os.uname().sysname == "Darwin":
            return not (os.environ.get("SSH_CONNECTION") and not display)

        return bool(display or wayland)
