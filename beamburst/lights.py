"""
Light sources for the ray tracer.

Only point lights are supported. They have no falloff: the light color
doubles as its intensity weight, and they produce hard shadows.
"""

from __future__ import annotations
from dataclasses import dataclass

from .vec3 import Vec3, Point3, Color


@dataclass(frozen=True)
class PointLight:
    """A point light source.

    Attributes:
        position: Position of the light
        color: Color of the light, also used as its brightness
    """
    position: Point3
    color: Color

    def direction_from(self, point: Point3) -> Vec3:
        """Unit direction from a surface point towards the light."""
        return (self.position - point).normalize()
