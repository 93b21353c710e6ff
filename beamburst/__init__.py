"""
BeamBurst - A minimal Python ray tracer

A small offline ray tracer with:
- Spheres and triangles
- Point lights with hard shadows
- Ambient + diffuse shading
- Bounded mirror reflection
- PNG output
"""

__version__ = "0.1.0"
__author__ = "BeamBurst Team"

from .vec3 import Vec3, Point3, Color, dot, cross, normalize
from .ray import Ray
from .materials import Material, MIRROR, MATTE
from .shapes import EPSILON, Primitive, Sphere, Triangle, HitRecord, closest_hit
from .lights import PointLight
from .scene import Scene
from .renderer import Renderer, RenderSettings, primary_ray, trace, MIN_INTENSITY
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
