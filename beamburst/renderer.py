"""
Renderer module - the heart of the ray tracer.

Implements:
- The fixed orthographic camera (one ray per pixel, no anti-aliasing)
- The shading loop: ambient + shadow-tested diffuse lighting with
  bounded mirror reflection
- Conversion to 8-bit RGBA and PNG output
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable
import numpy as np

from .vec3 import Vec3, Color
from .ray import Ray
from .scene import Scene
from .shapes import EPSILON

logger = logging.getLogger(__name__)

# Reflection stops once the carried weight falls below this
MIN_INTENSITY = 0.01


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 512
    height: int = 512
    max_depth: int = 10
    min_intensity: float = MIN_INTENSITY
    camera_z: float = -1000.0
    alpha: bool = True

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


def primary_ray(i: int, j: int, width: int, height: int, camera_z: float = -1000.0) -> Ray:
    """Camera ray for pixel (i, j).

    Rays start on the plane z = camera_z, offset so the image center maps
    to x = y = 0, and all travel along +z.
    """
    origin = Vec3(float(i - width // 2), float(j - height // 2), camera_z)
    return Ray(origin, Vec3(0.0, 0.0, 1.0))


def trace(scene: Scene, ray: Ray, max_depth: int, min_intensity: float = MIN_INTENSITY) -> Color:
    """Compute the color seen along a ray.

    Each iteration shades the nearest hit and continues with the mirror
    reflection, weighted by the product of the reflectivities so far. The
    loop ends on a miss, after max_depth hits, or once that weight drops
    below min_intensity. Misses contribute black.

    Args:
        scene: The scene to trace against
        ray: The starting ray; its direction should be unit length
        max_depth: Maximum number of surfaces to shade
        min_intensity: Reflection weight below which tracing stops

    Returns:
        The accumulated linear color (not clamped)
    """
    color = Color(0.0, 0.0, 0.0)
    intensity = 1.0

    for _ in range(max_depth):
        hit = scene.closest_hit(ray)
        if hit is None:
            return color

        hit_position = ray.hit_position()
        normal = hit.primitive.normal(hit_position)
        # Lift off the surface so shadow and reflected rays don't re-hit it
        hit_position = hit_position + normal * EPSILON

        material = hit.material

        # Ambient
        color += material.ambient_color() * intensity

        # Diffuse
        for light in scene.lights:
            light_direction = light.direction_from(hit_position)
            cos_theta = normal.dot(light_direction)
            if cos_theta <= 0.0:
                continue
            if scene.occluded(hit_position, light_direction):
                continue
            color += light.color * material.color * (intensity * material.diffuse * cos_theta)

        intensity *= material.reflect
        if intensity < min_intensity:
            return color

        ray = Ray(hit_position, ray.direction.reflect(normal).normalize())

    return color


class Renderer:
    """Single-threaded renderer for the fixed orthographic camera."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render_pixel(self, scene: Scene, i: int, j: int) -> Color:
        """Trace the camera ray of a single pixel."""
        settings = self.settings
        ray = primary_ray(i, j, settings.width, settings.height, settings.camera_z)
        return trace(scene, ray, settings.max_depth, settings.min_intensity)

    def render(self, scene: Scene) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        The image is indexed ``image[i, j]``: i picks the camera x offset,
        j the y offset.

        Args:
            scene: The scene to render

        Returns:
            Linear color image as numpy array of shape (width, height, 3)
        """
        width = self.settings.width
        height = self.settings.height

        logger.info(
            "Rendering %dx%d, max depth %d, %d objects, %d lights",
            width, height, self.settings.max_depth, len(scene), len(scene.lights)
        )
        start_time = time.perf_counter()

        image = np.zeros((width, height, 3), dtype=np.float64)
        for i in range(width):
            for j in range(height):
                image[i, j] = self.render_pixel(scene, i, j).to_array()

            if self._progress_callback:
                self._progress_callback((i + 1) / width)

        logger.info("Render finished in %.2f s", time.perf_counter() - start_time)
        return image

    def to_uint8(self, image: np.ndarray) -> np.ndarray:
        """Convert a linear color image to 8-bit channels.

        Each channel becomes round(clamp(c, 0, 1) * 255), rounding halves
        up. NaN channels become 0. When ``settings.alpha`` is set an opaque
        alpha channel is appended.

        Args:
            image: Float image array of shape (..., 3)

        Returns:
            uint8 array with 3 or 4 channels
        """
        clamped = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 1.0)
        ldr = np.floor(clamped * 255.0 + 0.5).astype(np.uint8)

        if self.settings.alpha:
            alpha = np.full(ldr.shape[:-1] + (1,), 255, dtype=np.uint8)
            ldr = np.concatenate([ldr, alpha], axis=-1)
        return ldr

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: Image array (float linear color or uint8)
            filename: Output filename (extension determines format)
        """
        from PIL import Image as PILImage

        if image.dtype != np.uint8:
            image = self.to_uint8(image)

        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)

        PILImage.fromarray(image).save(path)
        logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
