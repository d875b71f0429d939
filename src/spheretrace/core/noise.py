"""Hash-based value noise and fractal Brownian motion.

This module implements the procedural noise that roughens the sphere:

- hash: a sin-based pseudo-random scalar hash
- noise: smoothed trilinear value noise over the integer lattice
- rotate / fractal_brownian_motion: four rotated, rescaled octaves of noise

Everything is deterministic in position and keeps no state between calls,
so the same point always yields the same value on every backend run.

The hash is the classic ``fract(sin(n) * 43758.5453)``. It is cheap but
imperfect: lattice seeds are float32, so for large ``n`` neighbouring
seeds collapse and the output becomes visibly correlated. It is kept
as-is so renders stay comparable with the classic reference images.
The hash itself runs in f64, so the backend must support f64 (the
default CPU backend does).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.noise import fractal_brownian_motion, vec3
    >>>
    >>> @ti.kernel
    ... def sample() -> ti.f32:
    ...     return fractal_brownian_motion(vec3(0.25, 0.5, 0.75))
"""

import taichi as ti
import taichi.math as tm

from spheretrace.core.vector import dot, scale, vec3

# =============================================================================
# Noise Constants
# =============================================================================

HASH_MULTIPLIER = 43758.5453

# Strides that linearize a 3D lattice cell into a 1D hash seed
LATTICE_STRIDES = (1.0, 57.0, 113.0)

# Octave weights, and the lacunarity applied after each of the first three
OCTAVE_WEIGHTS = (0.5, 0.25, 0.125, 0.0625)
OCTAVE_LACUNARITY = (2.32, 3.03, 2.61)

# Sum of OCTAVE_WEIGHTS, keeps the fbm output nominally in [0, 1]
OCTAVE_WEIGHT_SUM = 0.9375


@ti.func
def hash(n: ti.f32) -> ti.f32:
    """Pseudo-random scalar for a lattice seed.

    The product is formed in f64. In f32 the fractional part keeps only a
    few bits, and fast-math lets each inlined call site round it
    differently, so the same seed would hash to different values in
    neighbouring cells.

    Args:
        n: Lattice seed.

    Returns:
        The fractional part of sin(n) * 43758.5453. Nominally in [0, 1),
        but see the module docstring on precision for large n.
    """
    s = ti.sin(ti.cast(n, ti.f64)) * HASH_MULTIPLIER
    return ti.cast(s - ti.floor(s), ti.f32)


@ti.func
def lerp(a: ti.f32, b: ti.f32, t: ti.f32) -> ti.f32:
    """Linear interpolation with t clamped to [0, 1].

    The clamp is part of the contract: an out-of-range t never extrapolates
    past a or b.
    """
    return a + (b - a) * tm.clamp(t, 0.0, 1.0)


@ti.func
def smooth_weights(f: vec3) -> vec3:
    """Hermite smoothstep f * f * (3 - 2f) applied to each axis."""
    return f * f * (3.0 - 2.0 * f)


@ti.func
def noise(x: vec3) -> ti.f32:
    """Smoothed value noise at x.

    Trilinearly interpolates the hashes of the eight corners of the unit
    lattice cell containing x, first along x, then y, then z. The corner
    seeds are n + {0, 1, 57, 58, 113, 114, 170, 171}, where n is the cell
    origin dotted with LATTICE_STRIDES.

    Args:
        x: Sample position.

    Returns:
        A continuous scalar, approximately in [0, 1].
    """
    p = ti.floor(x)
    w = smooth_weights(x - p)
    n = dot(p, vec3(LATTICE_STRIDES[0], LATTICE_STRIDES[1], LATTICE_STRIDES[2]))

    near = lerp(
        lerp(hash(n + 0.0), hash(n + 1.0), w.x),
        lerp(hash(n + 57.0), hash(n + 58.0), w.x),
        w.y,
    )
    far = lerp(
        lerp(hash(n + 113.0), hash(n + 114.0), w.x),
        lerp(hash(n + 170.0), hash(n + 171.0), w.x),
        w.y,
    )
    return lerp(near, far, w.z)


@ti.func
def rotate(v: vec3) -> vec3:
    """Apply the fixed orthonormal rotation used to decorrelate octaves."""
    return vec3(
        dot(vec3(0.00, 0.80, 0.60), v),
        dot(vec3(-0.80, 0.36, -0.48), v),
        dot(vec3(-0.60, -0.48, 0.64), v),
    )


@ti.func
def fractal_brownian_motion(x: vec3) -> ti.f32:
    """Four-octave fractal Brownian motion.

    The input is rotated once, then each octave samples noise and rescales
    the position by an irregular lacunarity so octaves never line up.

    Args:
        x: Sample position.

    Returns:
        The weighted octave sum divided by OCTAVE_WEIGHT_SUM.
    """
    p = rotate(x)
    f = 0.0
    for octave in ti.static(range(4)):
        f += OCTAVE_WEIGHTS[octave] * noise(p)
        if ti.static(octave < 3):
            p = scale(p, OCTAVE_LACUNARITY[octave])
    return f / OCTAVE_WEIGHT_SUM
