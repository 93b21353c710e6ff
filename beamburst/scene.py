"""
Scene container.

A scene owns every primitive and light. It is filled once at startup and
only queried afterwards: objects and lights are exposed as tuples in
insertion order.
"""

from __future__ import annotations
import logging
from typing import Iterable, Iterator, Optional

from .vec3 import Vec3, Point3
from .ray import Ray
from .shapes import Primitive, HitRecord, closest_hit
from .lights import PointLight

logger = logging.getLogger(__name__)


class Scene:
    """A collection of primitives and point lights."""

    def __init__(
        self,
        objects: Optional[Iterable[Primitive]] = None,
        lights: Optional[Iterable[PointLight]] = None
    ):
        self._objects: list[Primitive] = list(objects) if objects is not None else []
        self._lights: list[PointLight] = list(lights) if lights is not None else []

    def add(self, obj: Primitive) -> None:
        """Add a primitive to the scene."""
        self._objects.append(obj)
        logger.debug("Added %r", obj)

    def add_light(self, light: PointLight) -> None:
        """Add a point light to the scene."""
        self._lights.append(light)
        logger.debug("Added light at %s", light.position)

    @property
    def objects(self) -> tuple[Primitive, ...]:
        return tuple(self._objects)

    @property
    def lights(self) -> tuple[PointLight, ...]:
        return tuple(self._lights)

    def closest_hit(self, ray: Ray) -> Optional[HitRecord]:
        """Find the nearest primitive along the ray, updating ``ray.t``."""
        return closest_hit(self._objects, ray)

    def occluded(self, origin: Point3, direction: Vec3) -> bool:
        """Whether anything lies along the ray from origin.

        Hits are not limited to the segment towards a light, so a primitive
        behind the light also shadows the point.
        """
        shadow_ray = Ray(origin, direction)
        return any(obj.hit(shadow_ray) for obj in self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self._objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)}, lights={len(self._lights)})"
