"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole (perspective) camera looking down -Z from a fixed eye

The camera maps pixel indices to unit ray directions inside Taichi kernels.
"""

from .pinhole import camera_direction, primary_ray

__all__ = [
    "camera_direction",
    "primary_ray",
]
