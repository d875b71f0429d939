"""Scene configuration for the noisy sphere render.

All scene constants live in one immutable dataclass that is passed to the
render entry points explicitly. Nothing here is stored in module-level
Taichi fields, so two renders with different parameters never interfere.

Example:
    >>> from dataclasses import replace
    >>> from spheretrace.scene.params import SceneParams
    >>>
    >>> params = SceneParams()
    >>> params.radius
    1.5
    >>> smooth = replace(params, amplitude=0.0)  # plain sphere
"""

import math
from dataclasses import dataclass

# =============================================================================
# Reference Scene Constants
# =============================================================================

SPHERE_RADIUS = 1.5
NOISE_AMPLITUDE = 1.0

EYE_POSITION = (0.0, 0.0, 3.0)
LIGHT_POSITION = (0.0, 10.0, 10.0)

# Miss color (green) and lit surface color (white)
BACKGROUND_COLOR = (0.3, 0.9, 0.2)
SURFACE_COLOR = (1.0, 1.0, 1.0)

# Lambertian term never drops below this, so no hit pixel is fully black
AMBIENT_FLOOR = 0.4


def _check_vector(name: str, value: tuple[float, float, float]) -> None:
    if len(value) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(value)}")
    if not all(math.isfinite(c) for c in value):
        raise ValueError(f"{name} must be finite, got {value}")


@dataclass(frozen=True)
class SceneParams:
    """Parameters describing the scene, camera and lighting.

    Attributes:
        radius: Radius of the undisplaced sphere (positive).
        amplitude: Depth of the inward noise displacement. 0 gives a plain
            sphere.
        eye: Camera position. The camera looks down -Z.
        light_position: Position of the point light.
        background: Color of pixels whose ray misses the surface.
        surface_color: Color of the surface at full light intensity.
        ambient: Minimum light intensity on a hit (in [0, 1]).

    Raises:
        ValueError: If any value is non-finite or out of range.
    """

    radius: float = SPHERE_RADIUS
    amplitude: float = NOISE_AMPLITUDE
    eye: tuple[float, float, float] = EYE_POSITION
    light_position: tuple[float, float, float] = LIGHT_POSITION
    background: tuple[float, float, float] = BACKGROUND_COLOR
    surface_color: tuple[float, float, float] = SURFACE_COLOR
    ambient: float = AMBIENT_FLOOR

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius) or self.radius <= 0.0:
            raise ValueError(f"radius must be positive and finite, got {self.radius}")
        if not math.isfinite(self.amplitude):
            raise ValueError(f"amplitude must be finite, got {self.amplitude}")
        if not math.isfinite(self.ambient) or self.ambient < 0.0:
            raise ValueError(f"ambient must be non-negative, got {self.ambient}")

        _check_vector("eye", self.eye)
        _check_vector("light_position", self.light_position)
        _check_vector("background", self.background)
        _check_vector("surface_color", self.surface_color)
