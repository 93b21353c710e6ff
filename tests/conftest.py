"""Shared fixtures for the renderer tests."""

import pytest

from beamburst.vec3 import Color, Point3
from beamburst.materials import Material
from beamburst.shapes import Sphere
from beamburst.lights import PointLight
from beamburst.scene import Scene


class CountingScene(Scene):
    """Scene that counts nearest-hit queries (one per shaded bounce)."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.queries = 0

    def closest_hit(self, ray):
        self.queries += 1
        return super().closest_hit(ray)


@pytest.fixture
def single_sphere_scene():
    """Sphere at (0, 0, -10), radius 2, lit from 45 degrees off the +x axis."""
    material = Material(Color(1.0, 0.5, 0.25), ambient=0.3, diffuse=0.7, reflect=0.0)
    scene = Scene()
    scene.add(Sphere(Point3(0, 0, -10), 2.0, material))
    scene.add_light(PointLight(Point3(1e6, 0, -1e6 - 12), Color(1, 1, 1)))
    return scene


@pytest.fixture
def mirror_corridor():
    """Factory for two spheres facing each other across the origin along x."""
    def build(reflect: float) -> CountingScene:
        mirror = Material(Color(1, 1, 1), ambient=0.1, diffuse=0.0, reflect=reflect)
        scene = CountingScene()
        scene.add(Sphere(Point3(-10, 0, 0), 5.0, mirror))
        scene.add(Sphere(Point3(10, 0, 0), 5.0, mirror))
        return scene
    return build
