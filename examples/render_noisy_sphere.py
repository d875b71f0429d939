#!/usr/bin/env python3
"""Render the noise-displaced sphere.

This script renders the rocky sphere scene end to end: it traces every
pixel, packs the result to 8-bit RGB, saves a PNG and optionally shows the
image in a Taichi GGUI window.

Usage:
    python examples/render_noisy_sphere.py [options]

Options:
    --width WIDTH           Image width in pixels (default: 640)
    --height HEIGHT         Image height in pixels (default: 480)
    --fov DEGREES           Vertical field of view in degrees (default: 60)
    --radius RADIUS         Sphere radius (default: 1.5)
    --amplitude AMPLITUDE   Noise displacement depth (default: 1.0)
    --output OUTPUT         Output file path (default: noisy_sphere.png)
    --show                  Open a preview window after rendering
    --gpu                   Run on the GPU backend instead of the CPU
    --quiet                 Suppress progress output

Example:
    python examples/render_noisy_sphere.py --width 320 --height 240 --show
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the noise-displaced sphere.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=640, help="Image width in pixels (default: 640)")
    parser.add_argument("--height", type=int, default=480, help="Image height in pixels (default: 480)")
    parser.add_argument(
        "--fov",
        type=float,
        default=60.0,
        help="Vertical field of view in degrees (default: 60)",
    )
    parser.add_argument("--radius", type=float, default=1.5, help="Sphere radius (default: 1.5)")
    parser.add_argument(
        "--amplitude",
        type=float,
        default=1.0,
        help="Noise displacement depth (default: 1.0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="noisy_sphere.png",
        help="Output file path (default: noisy_sphere.png)",
    )
    parser.add_argument("--show", action="store_true", help="Open a preview window after rendering")
    parser.add_argument("--gpu", action="store_true", help="Run on the GPU backend instead of the CPU")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args(argv)


def render_noisy_sphere(
    width: int = 640,
    height: int = 480,
    fov_degrees: float = 60.0,
    radius: float = 1.5,
    amplitude: float = 1.0,
    output_path: str = "noisy_sphere.png",
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Render the scene, save it as PNG and optionally show it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Vertical field of view in degrees.
        radius: Sphere radius.
        amplitude: Noise displacement depth.
        output_path: Output file path (PNG).
        show: If True, open a preview window after saving.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretrace.core.renderer import render_framebuffer
    from spheretrace.preview.export import convert_framebuffer_to_pixels, save_png
    from spheretrace.preview.window import PreviewWindow
    from spheretrace.scene.params import SceneParams

    params = SceneParams(radius=radius, amplitude=amplitude)

    if not quiet:
        print(f"Rendering noisy sphere ({width}x{height}, fov {fov_degrees:g} deg)...")

    start_time = time.time()
    framebuffer = render_framebuffer(width, height, math.radians(fov_degrees), params)
    pixels = convert_framebuffer_to_pixels(framebuffer, width, height)

    output_file = Path(output_path)
    save_png(pixels, width, height, output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    if show:
        if not PreviewWindow.is_display_available():
            raise RuntimeError("No display available, cannot open preview window")
        window = PreviewWindow(width, height)
        window.update_pixels(pixels)
        try:
            window.run()
        finally:
            window.close()

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    ti.init(arch=ti.gpu if args.gpu else ti.cpu)

    try:
        render_noisy_sphere(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            radius=args.radius,
            amplitude=args.amplitude,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
