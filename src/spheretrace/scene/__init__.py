"""Scene module for render configuration.

Components:
    params: Immutable SceneParams dataclass and the reference scene constants
"""

from .params import (
    AMBIENT_FLOOR,
    BACKGROUND_COLOR,
    EYE_POSITION,
    LIGHT_POSITION,
    NOISE_AMPLITUDE,
    SPHERE_RADIUS,
    SURFACE_COLOR,
    SceneParams,
)

__all__ = [
    "SceneParams",
    "SPHERE_RADIUS",
    "NOISE_AMPLITUDE",
    "EYE_POSITION",
    "LIGHT_POSITION",
    "BACKGROUND_COLOR",
    "SURFACE_COLOR",
    "AMBIENT_FLOOR",
]
