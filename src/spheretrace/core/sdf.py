"""Signed distance field of a noise-displaced sphere.

The surface is a sphere of ``radius`` whose boundary is pushed inward by
``amplitude * fbm(p * 3.4)``, giving a rocky, pitted look. The usual sign
convention applies: negative inside, positive outside, zero on the surface.

Because the displacement warps the field, ``signed_distance`` is not a true
Euclidean distance. The sphere tracer compensates by taking conservative
steps.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.sdf import Surface, signed_distance, vec3
    >>>
    >>> @ti.kernel
    ... def center_distance() -> ti.f32:
    ...     surface = Surface(radius=1.5, amplitude=1.0)
    ...     return signed_distance(vec3(0.0, 0.0, 0.0), surface)
"""

import taichi as ti

from spheretrace.core.noise import fractal_brownian_motion
from spheretrace.core.vector import add, length, normalize, scale, vec3

# Spatial frequency of the displacement noise
DISPLACEMENT_FREQUENCY = 3.4

# Forward-difference step for normal estimation. Larger values smooth the
# normal over the noise detail.
NORMAL_EPSILON = 0.1


@ti.dataclass
class Surface:
    """Parameters of the displaced sphere.

    Attributes:
        radius: Radius of the undisplaced sphere.
        amplitude: Depth scale of the inward fbm displacement.
    """

    radius: ti.f32
    amplitude: ti.f32


@ti.func
def displacement(p: vec3, surface: Surface) -> ti.f32:
    """Signed radial offset of the surface at p (zero or negative)."""
    return -fractal_brownian_motion(scale(p, DISPLACEMENT_FREQUENCY)) * surface.amplitude


@ti.func
def signed_distance(p: vec3, surface: Surface) -> ti.f32:
    """Evaluate the displaced-sphere distance field at p.

    Args:
        p: Query point.
        surface: Sphere radius and displacement amplitude.

    Returns:
        |p| - (radius + displacement(p)).
    """
    return length(p) - (surface.radius + displacement(p, surface))


@ti.func
def distance_field_normal(pos: vec3, surface: Surface) -> vec3:
    """Estimate the surface normal at pos from the field gradient.

    Uses a forward difference with step NORMAL_EPSILON on each axis, so the
    field is evaluated four times in total.

    Args:
        pos: Point at (or near) the surface.
        surface: Sphere radius and displacement amplitude.

    Returns:
        The normalized gradient, or the zero vector where the gradient
        vanishes.
    """
    d = signed_distance(pos, surface)
    nx = signed_distance(add(pos, vec3(NORMAL_EPSILON, 0.0, 0.0)), surface) - d
    ny = signed_distance(add(pos, vec3(0.0, NORMAL_EPSILON, 0.0)), surface) - d
    nz = signed_distance(add(pos, vec3(0.0, 0.0, NORMAL_EPSILON)), surface) - d
    return normalize(vec3(nx, ny, nz))
