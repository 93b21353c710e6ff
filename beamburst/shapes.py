"""
Geometric shapes for the ray tracer.

Each shape implements the Primitive interface: ``intersect`` finds the
distance to an acceptable hit without side effects, ``hit`` additionally
records that distance on the ray, and ``normal`` gives the surface normal
at a point on the shape.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional
import math
import sys

import numpy as np

from .vec3 import Vec3, Point3
from .ray import Ray
from .materials import Material


# Self-intersection guard for rays leaving a surface. Absolute, not scaled
# to the scene.
EPSILON = float(np.finfo(np.float32).eps) * 250.0


def _is_normal(value: float) -> bool:
    """True for finite, nonzero, non-subnormal floats (C ``isnormal``)."""
    return math.isfinite(value) and abs(value) >= sys.float_info.min


@dataclass
class HitRecord:
    """The nearest intersection found along a ray.

    Attributes:
        primitive: The primitive that was hit
        t: Distance along the ray to the hit
    """
    primitive: Primitive
    t: float

    @property
    def material(self) -> Material:
        return self.primitive.material


class Primitive(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    material: Material

    @abstractmethod
    def intersect(self, ray: Ray) -> Optional[float]:
        """Find the distance to the nearest acceptable intersection.

        A distance is acceptable when it lies strictly between EPSILON and
        the ray's current closest hit ``ray.t``. The ray is not modified.

        Args:
            ray: The ray to test

        Returns:
            The distance if an acceptable intersection exists, None otherwise
        """
        pass

    @abstractmethod
    def normal(self, point: Point3) -> Vec3:
        """Unit surface normal at a point on the primitive."""
        pass

    def hit(self, ray: Ray) -> bool:
        """Test the ray and lower ``ray.t`` to the hit distance on success.

        Returns:
            True if an intersection closer than ``ray.t`` was accepted
        """
        t = self.intersect(ray)
        if t is None:
            return False
        ray.t = t
        return True


class Sphere(Primitive):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Material):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere
            material: Material for shading
        """
        self.center = center
        self.radius = radius
        self.material = material

    def intersect(self, ray: Ray) -> Optional[float]:
        """Geometric ray-sphere test.

        With h = C - O and m the projection of h on the (unit) direction,
        the ray enters and leaves the sphere at m -/+ sqrt(m² - h·h + r²).
        """
        h = self.center - ray.origin
        m = h.dot(ray.direction)
        g = m * m - h.dot(h) + self.radius * self.radius
        if g < 0:
            return None

        sqrt_g = math.sqrt(g)
        t0 = m - sqrt_g
        t1 = m + sqrt_g

        if EPSILON < t0 < ray.t:
            return t0
        if EPSILON < t1 < ray.t:
            return t1
        return None

    def normal(self, point: Point3) -> Vec3:
        return (point - self.center).normalize()

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class Triangle(Primitive):
    """A triangle defined by three vertices."""

    def __init__(self, v0: Point3, v1: Point3, v2: Point3, material: Material):
        """Create a triangle from three vertices.

        Args:
            v0, v1, v2: The three vertices
            material: Material for shading
        """
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.material = material

        # Pre-compute edges and the (unnormalized) supporting plane
        self.e1 = v1 - v0
        self.e2 = v2 - v0
        self.plane_normal = self.e1.cross(self.e2)
        self.plane_offset = -v0.dot(self.plane_normal)

    @property
    def vertices(self) -> tuple[Point3, Point3, Point3]:
        return (self.v0, self.v1, self.v2)

    def intersect(self, ray: Ray) -> Optional[float]:
        """Intersect the supporting plane, then test barycentric containment.

        The edges count as inside: beta, gamma and beta + gamma may each
        equal 0 or 1.
        """
        denominator = self.plane_normal.dot(ray.direction)

        # Ray is parallel to the plane (or the triangle is degenerate)
        if not _is_normal(denominator):
            return None

        time = -(self.plane_offset + self.plane_normal.dot(ray.origin)) / denominator
        if math.copysign(1.0, time) < 0:
            return None
        if not EPSILON < time < ray.t:
            return None

        ep = ray.at(time) - self.v0
        d11 = self.e1.dot(self.e1)
        d12 = self.e1.dot(self.e2)
        d22 = self.e2.dot(self.e2)
        d1p = self.e1.dot(ep)
        d2p = self.e2.dot(ep)
        det = d11 * d22 - d12 * d12
        if not _is_normal(det):
            return None

        beta = (d22 * d1p - d12 * d2p) / det
        gamma = (d11 * d2p - d12 * d1p) / det
        if not (0.0 <= beta <= 1.0 and 0.0 <= gamma <= 1.0 and 0.0 <= beta + gamma <= 1.0):
            return None

        return time

    def normal(self, point: Point3) -> Vec3:
        # Not oriented towards the viewer; shading treats a back-facing
        # normal as unlit.
        return (point - self.v0).cross(self.v2 - self.v0).normalize()

    def __repr__(self) -> str:
        return f"Triangle({self.v0}, {self.v1}, {self.v2})"


def closest_hit(primitives: Iterable[Primitive], ray: Ray) -> Optional[HitRecord]:
    """Find the nearest primitive along a ray.

    Every accepted hit is strictly closer than the previous one, so the
    last primitive to accept is the nearest. On return ``ray.t`` holds the
    nearest distance.
    """
    nearest: Optional[Primitive] = None
    for primitive in primitives:
        if primitive.hit(ray):
            nearest = primitive

    if nearest is None:
        return None
    return HitRecord(primitive=nearest, t=ray.t)
