"""Core rendering module.

Components:
    vector: Ray data structure and vector utilities
    noise: Hash-based value noise and fractal Brownian motion
    sdf: Displaced-sphere signed distance field and normal estimation
    tracer: Sphere tracing with hit/miss outcomes
    renderer: Per-pixel shading and the framebuffer kernel

All compute-intensive operations are Taichi functions called from kernels.
"""

from .noise import fractal_brownian_motion, hash, lerp, noise, rotate
from .sdf import Surface, distance_field_normal, signed_distance
from .tracer import Hit, Miss, TraceOutcome, TraceResult, sphere_trace, trace_ray
from .vector import Ray, add, dot, length, make_ray, normalize, scale, sub, vec3

# Note: renderer is NOT imported here, it depends on camera which imports
# core.vector. Import it from spheretrace.core.renderer directly.

__all__ = [
    "Ray",
    "make_ray",
    "vec3",
    "add",
    "sub",
    "scale",
    "dot",
    "length",
    "normalize",
    "hash",
    "lerp",
    "noise",
    "rotate",
    "fractal_brownian_motion",
    "Surface",
    "signed_distance",
    "distance_field_normal",
    "TraceResult",
    "sphere_trace",
    "Hit",
    "Miss",
    "TraceOutcome",
    "trace_ray",
]
