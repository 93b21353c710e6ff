"""
Surface materials.

A material is a small set of shading coefficients:
- color: base RGB color
- ambient: fraction of the base color always visible
- diffuse: Lambertian weight applied per unoccluded light
- reflect: fraction of the reflected ray's color carried back

All coefficients are conventionally in [0, 1]; this is not enforced.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .vec3 import Color


@dataclass(frozen=True)
class Material:
    """Shading coefficients attached to a primitive."""
    color: Color = field(default_factory=lambda: Color(0.0, 0.0, 0.0))
    ambient: float = 0.0
    diffuse: float = 0.0
    reflect: float = 0.0

    def ambient_color(self) -> Color:
        return self.color * self.ambient


# Materials of the demo scene
MIRROR = Material(color=Color(0.9, 1.0, 0.9), ambient=0.01, diffuse=0.99, reflect=0.99)
MATTE = Material(color=Color(1.0, 0.8, 0.6), ambient=0.3, diffuse=0.7, reflect=0.2)
