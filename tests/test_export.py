"""Tests for pixel packing and image export.

Tests cover:
- convert_framebuffer_to_pixels scaling, clamping and truncation
- Interleaved row-major layout
- pixels_to_image reshaping
- PNG export via Pillow
- Size validation
"""

import numpy as np
import pytest
from PIL import Image as PILImage


class TestConvertFramebufferToPixels:
    """Test float color to RGB24 packing."""

    def test_white_packs_to_255(self):
        """Test (1, 1, 1) maps to (255, 255, 255)."""
        from spheretrace.preview.export import convert_framebuffer_to_pixels

        buffer = np.ones((4, 3), dtype=np.float32)
        pixels = convert_framebuffer_to_pixels(buffer, 2, 2)

        assert pixels.dtype == np.uint8
        assert pixels.shape == (12,)
        assert np.all(pixels == 255)

    def test_out_of_range_values_are_clamped(self):
        """Test (-1, 2, 0.5) maps to (0, 255, 127)."""
        from spheretrace.preview.export import convert_framebuffer_to_pixels

        buffer = np.array([[-1.0, 2.0, 0.5]], dtype=np.float32)
        pixels = convert_framebuffer_to_pixels(buffer, 1, 1)

        assert pixels.tolist() == [0, 255, 127]

    def test_values_are_truncated_not_rounded(self):
        """Test fractional byte values are truncated toward zero."""
        from spheretrace.preview.export import convert_framebuffer_to_pixels

        # 0.999 * 255 = 254.745
        buffer = np.array([[0.999, 0.0, 0.3]], dtype=np.float32)
        pixels = convert_framebuffer_to_pixels(buffer, 1, 1)

        assert pixels[0] == 254
        assert pixels[1] == 0
        assert pixels[2] == 76

    def test_layout_is_interleaved_row_major(self):
        """Test pixel (i, j) lands at byte offset (i + j * width) * 3."""
        from spheretrace.preview.export import convert_framebuffer_to_pixels

        width, height = 3, 2
        buffer = np.zeros((width * height, 3), dtype=np.float32)
        # Pixel (2, 1): red
        buffer[2 + 1 * width] = (1.0, 0.0, 0.0)
        # Pixel (0, 1): blue
        buffer[0 + 1 * width] = (0.0, 0.0, 1.0)

        pixels = convert_framebuffer_to_pixels(buffer, width, height)

        assert pixels[(2 + 1 * width) * 3 : (2 + 1 * width) * 3 + 3].tolist() == [255, 0, 0]
        assert pixels[(0 + 1 * width) * 3 : (0 + 1 * width) * 3 + 3].tolist() == [0, 0, 255]
        assert int(pixels.sum()) == 510

    def test_accepts_image_shaped_buffer(self):
        """Test a (height, width, 3) buffer is accepted too."""
        from spheretrace.preview.export import convert_framebuffer_to_pixels

        buffer = np.full((2, 3, 3), 0.5, dtype=np.float32)
        pixels = convert_framebuffer_to_pixels(buffer, 3, 2)

        assert pixels.shape == (18,)
        assert np.all(pixels == 127)

    def test_size_mismatch_raises(self):
        """Test a buffer of the wrong size is rejected."""
        from spheretrace.preview.export import convert_framebuffer_to_pixels

        buffer = np.zeros((5, 3), dtype=np.float32)
        with pytest.raises(ValueError, match="expected 18"):
            convert_framebuffer_to_pixels(buffer, 3, 2)


class TestPixelsToImage:
    """Test pixel buffer reshaping."""

    def test_reshape_to_height_width_channels(self):
        """Test the image view has shape (height, width, 3)."""
        from spheretrace.preview.export import pixels_to_image

        pixels = np.arange(2 * 4 * 3, dtype=np.uint8)
        image = pixels_to_image(pixels, 4, 2)

        assert image.shape == (2, 4, 3)
        # Second row, first pixel
        assert image[1, 0].tolist() == [12, 13, 14]

    def test_size_mismatch_raises(self):
        """Test a pixel buffer of the wrong size is rejected."""
        from spheretrace.preview.export import pixels_to_image

        with pytest.raises(ValueError):
            pixels_to_image(np.zeros(10, dtype=np.uint8), 2, 2)


class TestSavePng:
    """Test PNG export."""

    def test_save_png_roundtrip_pixels(self, tmp_path):
        """Test the saved file holds exactly the packed bytes."""
        from spheretrace.preview.export import save_png

        width, height = 5, 3
        pixels = (np.arange(width * height * 3) * 7 % 256).astype(np.uint8)
        filepath = tmp_path / "out.png"

        save_png(pixels, width, height, filepath)

        assert filepath.exists()
        with PILImage.open(filepath) as img:
            assert img.size == (width, height)
            assert img.mode == "RGB"
            loaded = np.asarray(img)
        assert np.array_equal(loaded.reshape(-1), pixels)
