"""Pinhole camera model for primary ray generation.

The camera sits at a fixed eye position and looks down the -Z axis with +Y
up. Rays pass through pixel centers of a virtual image plane placed so that
the image height subtends the vertical field of view:

    direction = normalize(i + 0.5 - width / 2,
                          -(j + 0.5) + height / 2,
                          -height / (2 * tan(fov / 2)))

Pixel (0, 0) is the top-left corner of the image, matching the row-major
layout of the color buffer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.camera.pinhole import camera_direction
    >>>
    >>> @ti.kernel
    ... def center_ray() -> ti.math.vec3:
    ...     return camera_direction(0, 0, 1, 1, 1.0471975)
"""

import taichi as ti

from spheretrace.core.vector import Ray, make_ray, normalize, vec3


@ti.func
def camera_direction(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32, fov: ti.f32) -> vec3:
    """Unit direction of the ray through the center of pixel (i, j).

    Args:
        i: Pixel column (0 = left).
        j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.

    Returns:
        The normalized camera-space ray direction.
    """
    fw = ti.cast(width, ti.f32)
    fh = ti.cast(height, ti.f32)
    dir_x = (ti.cast(i, ti.f32) + 0.5) - fw / 2.0
    dir_y = -(ti.cast(j, ti.f32) + 0.5) + fh / 2.0
    dir_z = -fh / (2.0 * ti.tan(fov / 2.0))
    return normalize(vec3(dir_x, dir_y, dir_z))


@ti.func
def primary_ray(
    i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32, fov: ti.f32, eye: vec3
) -> Ray:
    """Generate the primary ray for pixel (i, j), starting at eye."""
    return make_ray(eye, camera_direction(i, j, width, height, fov))
