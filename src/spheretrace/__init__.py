"""Sphere tracer for a noise-displaced implicit sphere, built on Taichi.

This package renders a single still image by marching camera rays through a
signed distance field until they cross the surface, then shading the hit
point with a point light. It provides:
- Deterministic value noise and fractal Brownian motion
- A displaced-sphere signed distance field with normal estimation
- Bounded sphere tracing with explicit hit/miss outcomes
- A row-parallel framebuffer renderer and an 8-bit pixel packer

Subpackages:
    core: Vector utilities, noise, distance field, tracer, and renderer
    camera: Pinhole primary-ray generation
    scene: Immutable scene configuration
    preview: Pixel packing, PNG export, and preview windows
"""

__version__ = "0.1.0"
