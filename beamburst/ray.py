"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point and a direction vector.
Ray(t) = origin + t * direction

Besides its geometry a ray carries ``t``, the distance to the closest
intersection accepted so far. Intersection tests only ever lower it, so
after a pass over every primitive it holds the nearest hit.
"""

from __future__ import annotations
import math

from .vec3 import Vec3, Point3


class Ray:
    """A ray with origin, direction and closest-hit distance.

    The parametric form is: P(t) = origin + t * direction
    where t >= 0 represents points along the ray.
    """

    __slots__ = ('origin', 'direction', 't')

    def __init__(self, origin: Point3, direction: Vec3, t: float = math.inf):
        """Create a ray with given origin and direction.

        Args:
            origin: The starting point of the ray
            direction: The direction vector. Intersection and reflection
                math assume unit length.
            t: Closest hit distance so far (default +inf, i.e. no hit)
        """
        self.origin = origin
        self.direction = direction
        self.t = t

    def at(self, t: float) -> Point3:
        """Get the point along the ray at parameter t.

        Args:
            t: The parameter value (distance if direction is normalized)

        Returns:
            The point at origin + t * direction
        """
        return self.origin + self.direction * t

    def hit_position(self) -> Point3:
        """Point of the closest accepted intersection."""
        return self.at(self.t)

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction}, t={self.t})"
