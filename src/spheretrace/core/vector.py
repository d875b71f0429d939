"""Ray data structure and vector utilities for the sphere tracer.

This module provides the Ray dataclass and the small set of 3D vector
operations the rest of the pipeline is built from. All functions are Taichi
functions and are meant to be called from within kernels.

Vectors are value types: every operation returns a new vector and none of
them mutate their arguments.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.vector import make_ray, normalize, vec3
    >>>
    >>> @ti.kernel
    ... def unit_origin() -> vec3:
    ...     ray = make_ray(vec3(0.0, 0.0, 3.0), vec3(0.0, 0.0, -1.0))
    ...     return normalize(ray.origin)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Rays built by the
            camera are unit length.
    """

    origin: vec3
    direction: vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Componentwise sum a + b."""
    return vec3(a.x + b.x, a.y + b.y, a.z + b.z)


@ti.func
def sub(a: vec3, b: vec3) -> vec3:
    """Componentwise difference a - b."""
    return vec3(a.x - b.x, a.y - b.y, a.z - b.z)


@ti.func
def scale(v: vec3, s: ti.f32) -> vec3:
    """Multiply every component of v by the scalar s."""
    return vec3(v.x * s, v.y * s, v.z * s)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Unlike tm.normalize, a zero-length input does not produce NaNs: the
    zero vector is returned instead, and callers are expected to tolerate
    it.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v, or (0, 0, 0) if v has
        zero length.
    """
    n = length(v)
    result = vec3(0.0, 0.0, 0.0)
    if n > 0.0:
        result = vec3(v.x / n, v.y / n, v.z / n)
    return result
