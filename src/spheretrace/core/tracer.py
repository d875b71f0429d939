"""Sphere tracing against the displaced-sphere distance field.

The tracer marches a ray forward in conservative steps until the field
changes sign or the step budget runs out:

- step length is ``max(d * STEP_SCALE, MIN_STEP)``: a tenth of the distance
  estimate, since the field is warped by the displacement and overestimates
  distances, with a floor so the march always makes progress
- a hit returns the first sample found inside the surface; it is not
  refined toward the exact crossing, so shading shows slight banding
- running out of steps is a miss, which is an ordinary outcome

Inside kernels the outcome is a ``TraceResult`` struct with a ``hit`` flag.
From Python, ``trace_ray`` returns a ``Hit`` or ``Miss`` value.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.tracer import Hit, trace_ray
    >>>
    >>> outcome = trace_ray((0.0, 0.0, 3.0), (0.0, 0.0, -1.0))
    >>> isinstance(outcome, Hit)
    True
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

import taichi as ti
import taichi.math as tm

from spheretrace.core.sdf import Surface, signed_distance
from spheretrace.core.vector import add, scale, vec3
from spheretrace.scene.params import SceneParams

# =============================================================================
# Tracing Constants
# =============================================================================

MAX_TRACE_STEPS = 128
STEP_SCALE = 0.1
MIN_STEP = 0.01


@ti.dataclass
class TraceResult:
    """Outcome of a sphere trace.

    Attributes:
        hit: 1 if the ray crossed the surface, 0 if the step budget ran out.
        position: First sample inside the surface. Only valid if hit == 1.
    """

    hit: ti.i32
    position: vec3


@ti.func
def sphere_trace(origin: vec3, direction: vec3, surface: Surface) -> TraceResult:
    """March a ray through the distance field.

    Args:
        origin: Ray origin.
        direction: Unit ray direction.
        surface: Sphere radius and displacement amplitude.

    Returns:
        A TraceResult. Check the hit field before using position.
    """
    pos = origin
    did_hit = 0
    hit_position = vec3(0.0, 0.0, 0.0)

    # Active flag instead of break keeps the loop shape fixed
    for _ in range(MAX_TRACE_STEPS):
        if did_hit == 0:
            d = signed_distance(pos, surface)
            if d < 0.0:
                did_hit = 1
                hit_position = pos
            else:
                pos = add(pos, scale(direction, tm.max(d * STEP_SCALE, MIN_STEP)))

    return TraceResult(hit=did_hit, position=hit_position)


# =============================================================================
# Python-side Trace Outcome
# =============================================================================


@dataclass(frozen=True)
class Hit:
    """The ray crossed the surface at position."""

    position: tuple[float, float, float]


@dataclass(frozen=True)
class Miss:
    """The ray did not reach the surface within the step budget."""


TraceOutcome = Union[Hit, Miss]


@ti.kernel
def _trace_single_ray(
    origin: vec3, direction: vec3, radius: ti.f32, amplitude: ti.f32
) -> tm.vec4:
    """Trace one ray, packing (position, hit) into a vec4."""
    packed = tm.vec4(0.0, 0.0, 0.0, 0.0)
    # The march loop must not end up as the kernel's parallel outer loop
    ti.loop_config(serialize=True)
    for _ in range(1):
        result = sphere_trace(origin, direction, Surface(radius=radius, amplitude=amplitude))
        p = result.position
        packed = tm.vec4(p.x, p.y, p.z, ti.cast(result.hit, ti.f32))
    return packed


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    params: Optional[SceneParams] = None,
) -> TraceOutcome:
    """Trace a single ray from Python.

    This is a convenience for testing and probing the scene. Full images
    should go through render_framebuffer(), which traces every pixel in
    parallel.

    Args:
        origin: Ray origin.
        direction: Ray direction. Normalized before tracing.
        params: Scene parameters (default: SceneParams()).

    Returns:
        Hit with the first inside sample, or Miss.

    Raises:
        ValueError: If origin or direction is not a 3-vector, direction has
            zero length, or any value is non-finite.
    """
    if params is None:
        params = SceneParams()

    if len(origin) != 3 or len(direction) != 3:
        raise ValueError(f"origin and direction must be 3-vectors, got {origin}, {direction}")
    if not all(math.isfinite(c) for c in (*origin, *direction)):
        raise ValueError(f"origin and direction must be finite 3-vectors, got {origin}, {direction}")

    norm = math.sqrt(sum(c * c for c in direction))
    if norm == 0.0:
        raise ValueError("direction must have non-zero length")
    unit = tuple(c / norm for c in direction)

    packed = _trace_single_ray(vec3(*origin), vec3(*unit), params.radius, params.amplitude)
    if packed[3] == 0.0:
        return Miss()

    return Hit(position=(float(packed[0]), float(packed[1]), float(packed[2])))
