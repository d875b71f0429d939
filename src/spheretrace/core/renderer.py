"""Framebuffer renderer for the noisy sphere.

This module ties the pipeline together: for every pixel it builds the
primary camera ray, sphere-traces it against the displaced sphere, and
shades the result.

Shading is deliberately simple:
    - hit: surface_color * max(ambient, dot(light_dir, normal))
    - miss: the flat background color

The render kernel's outer loop runs over image rows and is parallelised by
Taichi. Each pixel depends only on the kernel arguments and writes exactly
one slot of the output array, so the image is identical for any schedule.
Scene parameters are passed to the kernel by value and the output array is
allocated per call; there is no global render state.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.renderer import render_framebuffer
    >>>
    >>> buffer = render_framebuffer(640, 480, math.pi / 3)
    >>> buffer.shape
    (307200, 3)
"""

import logging
import math
import numbers
import time
from typing import Optional

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from spheretrace.camera.pinhole import primary_ray
from spheretrace.core.sdf import Surface, distance_field_normal
from spheretrace.core.tracer import sphere_trace
from spheretrace.core.vector import dot, normalize, scale, sub, vec3
from spheretrace.scene.params import SceneParams

logger = logging.getLogger(__name__)

# Float RGB color per pixel, shape (width * height, 3), row-major
ColorBuffer = npt.NDArray[np.float32]


# =============================================================================
# Per-pixel Shading
# =============================================================================


@ti.func
def shade_pixel(
    i: ti.i32,
    j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov: ti.f32,
    eye: vec3,
    light_position: vec3,
    background: vec3,
    surface_color: vec3,
    ambient: ti.f32,
    surface: Surface,
) -> vec3:
    """Trace and shade the pixel (i, j).

    Args:
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.
        eye: Camera position.
        light_position: Point light position.
        background: Color returned when the ray misses.
        surface_color: Surface color at full intensity.
        ambient: Lower bound on the light intensity of a hit.
        surface: Sphere radius and displacement amplitude.

    Returns:
        The RGB color of the pixel.
    """
    ray = primary_ray(i, j, width, height, fov, eye)
    trace = sphere_trace(ray.origin, ray.direction, surface)

    color = background
    if trace.hit == 1:
        light_dir = normalize(sub(light_position, trace.position))
        normal = distance_field_normal(trace.position, surface)
        intensity = tm.max(ambient, dot(light_dir, normal))
        color = scale(surface_color, intensity)
    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(
    framebuffer: ti.types.ndarray(dtype=ti.f32, ndim=3),
    width: ti.i32,
    height: ti.i32,
    fov: ti.f32,
    eye: vec3,
    light_position: vec3,
    background: vec3,
    surface_color: vec3,
    ambient: ti.f32,
    radius: ti.f32,
    amplitude: ti.f32,
):
    """Render every pixel into framebuffer, indexed [row, column, channel].

    The outermost loop (rows) is the parallel one.
    """
    for j in range(height):
        surface = Surface(radius=radius, amplitude=amplitude)
        for i in range(width):
            color = shade_pixel(
                i, j, width, height, fov, eye, light_position,
                background, surface_color, ambient, surface,
            )
            for c in ti.static(range(3)):
                framebuffer[j, i, c] = color[c]


@ti.kernel
def _render_single_pixel(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov: ti.f32,
    eye: vec3,
    light_position: vec3,
    background: vec3,
    surface_color: vec3,
    ambient: ti.f32,
    radius: ti.f32,
    amplitude: ti.f32,
) -> vec3:
    """Render a single pixel. Used for testing and debugging."""
    color = vec3(0.0, 0.0, 0.0)
    ti.loop_config(serialize=True)
    for _ in range(1):
        color = shade_pixel(
            pixel_i, pixel_j, width, height, fov, eye, light_position,
            background, surface_color, ambient,
            Surface(radius=radius, amplitude=amplitude),
        )
    return color


# =============================================================================
# Public Rendering API
# =============================================================================


def _validate_view(width: int, height: int, fov: float) -> None:
    """Reject image sizes and fields of view the camera cannot handle."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")

    if not math.isfinite(fov) or not 0.0 < fov < math.pi:
        raise ValueError(f"fov must be in (0, pi) radians, got {fov}")


def _kernel_scene_args(params: SceneParams) -> tuple:
    return (
        vec3(*params.eye),
        vec3(*params.light_position),
        vec3(*params.background),
        vec3(*params.surface_color),
        params.ambient,
        params.radius,
        params.amplitude,
    )


def render_framebuffer(
    width: int,
    height: int,
    fov: float,
    params: Optional[SceneParams] = None,
) -> ColorBuffer:
    """Render the scene into a floating-point color buffer.

    Args:
        width: Image width in pixels (positive).
        height: Image height in pixels (positive).
        fov: Vertical field of view in radians, in (0, pi).
        params: Scene parameters (default: SceneParams()).

    Returns:
        Float32 array of shape (width * height, 3). Pixel (i, j) is at
        index i + j * width, with row 0 at the top of the image.

    Raises:
        ValueError: If the dimensions or field of view are invalid.
    """
    _validate_view(width, height, fov)
    if params is None:
        params = SceneParams()

    start_time = time.perf_counter()

    framebuffer = np.zeros((height, width, 3), dtype=np.float32)
    _render_kernel(framebuffer, width, height, fov, *_kernel_scene_args(params))

    logger.debug(
        "Rendered %dx%d framebuffer in %.3fs", width, height, time.perf_counter() - start_time
    )

    return framebuffer.reshape(width * height, 3)


def render_pixel(
    pixel_i: int,
    pixel_j: int,
    width: int,
    height: int,
    fov: float,
    params: Optional[SceneParams] = None,
) -> tuple[float, float, float]:
    """Render a single pixel of the image described by width, height, fov.

    This is a Python-callable function for testing. For full images, use
    render_framebuffer() which processes all rows in parallel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.
        params: Scene parameters (default: SceneParams()).

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        ValueError: If the view is invalid or the pixel lies outside it.
    """
    _validate_view(width, height, fov)
    if not (0 <= pixel_i < width and 0 <= pixel_j < height):
        raise ValueError(f"Pixel ({pixel_i}, {pixel_j}) outside {width}x{height} image")
    if params is None:
        params = SceneParams()

    color = _render_single_pixel(
        pixel_i, pixel_j, width, height, fov, *_kernel_scene_args(params)
    )
    return (float(color[0]), float(color[1]), float(color[2]))
