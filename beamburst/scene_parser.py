"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Render settings
- Materials library
- Objects (spheres and triangles with materials)
- Point lights

Example scene file:
```yaml
render:
  width: 512
  height: 512
  max_depth: 10

materials:
  mirror:
    color: [0.9, 1.0, 0.9]
    ambient: 0.01
    diffuse: 0.99
    reflect: 0.99

objects:
  - type: sphere
    center: [-87, -50, 0]
    radius: 100
    material: mirror

  - type: triangle
    vertices: [[-1000, -1000, 0], [1000, -1000, 0], [1000, 1000, 0]]
    material: {color: "#ffcc99", ambient: 0.3, diffuse: 0.7, reflect: 0.2}

lights:
  - position: [-500, 0, 100]
    color: [1, 0, 0]
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Tuple

import yaml

from .vec3 import Vec3, Color
from .shapes import Sphere, Triangle
from .materials import Material
from .lights import PointLight
from .scene import Scene
from .renderer import RenderSettings

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.scene: Scene = Scene()
        self.settings: RenderSettings = RenderSettings()

    def parse_file(self, filepath: str) -> Tuple[Scene, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Invalid scene file {filepath}: {e}") from e

        logger.info("Loading scene from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene description must be a mapping, got {type(data).__name__}")

        # Parse materials first (objects reference them)
        if 'materials' in data:
            self._parse_materials(data['materials'])

        if 'objects' in data:
            self._parse_objects(data['objects'])

        if 'lights' in data:
            self._parse_lights(data['lights'])

        if 'render' in data:
            self._parse_settings(data['render'])

        logger.info(
            "Parsed scene with %d objects, %d lights",
            len(self.scene), len(self.scene.lights)
        )
        return self.scene, self.settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from various formats."""
        try:
            if isinstance(data, (list, tuple)):
                if len(data) != 3:
                    raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
                return Vec3(float(data[0]), float(data[1]), float(data[2]))
            elif isinstance(data, dict):
                return Vec3(
                    float(data.get('x', 0)),
                    float(data.get('y', 0)),
                    float(data.get('z', 0))
                )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}") from e
        raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from various formats."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return self._parse_vec3(data)
        elif isinstance(data, dict):
            try:
                return Color(
                    float(data.get('r', 0)),
                    float(data.get('g', 0)),
                    float(data.get('b', 0))
                )
            except (TypeError, ValueError) as e:
                raise SceneParseError(f"Cannot parse Color from: {data}") from e
        elif isinstance(data, str):
            # Handle hex colors
            if data.startswith('#'):
                hex_color = data[1:]
                if len(hex_color) == 6:
                    try:
                        r = int(hex_color[0:2], 16) / 255.0
                        g = int(hex_color[2:4], 16) / 255.0
                        b = int(hex_color[4:6], 16) / 255.0
                    except ValueError as e:
                        raise SceneParseError(f"Cannot parse color from string: {data}") from e
                    return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_material(self, mat_data: Dict[str, Any]) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Invalid material definition: {mat_data}")
        try:
            return Material(
                color=self._parse_color(mat_data.get('color', [1, 1, 1])),
                ambient=float(mat_data.get('ambient', 0.0)),
                diffuse=float(mat_data.get('diffuse', 0.0)),
                reflect=float(mat_data.get('reflect', 0.0))
            )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid material coefficients: {mat_data}") from e

    def _section_entries(self, section: str, data: Any) -> List[Dict[str, Any]]:
        """Check that a section is a list of mappings."""
        if not isinstance(data, list):
            raise SceneParseError(f"'{section}' must be a list, got {type(data).__name__}")
        for entry in data:
            if not isinstance(entry, dict):
                raise SceneParseError(f"Each entry of '{section}' must be a mapping, got: {entry}")
        return data

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        if not isinstance(materials_data, dict):
            raise SceneParseError(
                f"'materials' must be a mapping of names, got {type(materials_data).__name__}"
            )
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)
            logger.debug("Material %s: %s", name, self.materials[name])

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            raise SceneParseError("Object has no material")
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in self._section_entries('objects', objects_data):
            obj_type = str(obj_data.get('type', 'sphere')).lower()
            material = self._get_material(obj_data.get('material'))

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                try:
                    radius = float(obj_data.get('radius', 1.0))
                except (TypeError, ValueError) as e:
                    raise SceneParseError(f"Invalid sphere radius: {obj_data.get('radius')}") from e
                self.scene.add(Sphere(center, radius, material))

            elif obj_type == 'triangle':
                if 'vertices' in obj_data:
                    vertices = obj_data['vertices']
                else:
                    vertices = [obj_data.get(key) for key in ('v0', 'v1', 'v2')]
                if (not isinstance(vertices, (list, tuple)) or len(vertices) != 3
                        or any(v is None for v in vertices)):
                    raise SceneParseError(f"Triangle needs exactly 3 vertices: {obj_data}")
                v0, v1, v2 = (self._parse_vec3(v) for v in vertices)
                self.scene.add(Triangle(v0, v1, v2, material))

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_lights(self, lights_data: list) -> None:
        """Parse lights section."""
        for light_data in self._section_entries('lights', lights_data):
            light_type = str(light_data.get('type', 'point')).lower()
            if light_type != 'point':
                raise SceneParseError(f"Unknown light type: {light_type}")

            position = self._parse_vec3(light_data.get('position', [0, 0, 0]))
            color = self._parse_color(light_data.get('color', [1, 1, 1]))
            self.scene.add_light(PointLight(position, color))

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        if not isinstance(settings_data, dict):
            raise SceneParseError(f"'render' must be a mapping, got {type(settings_data).__name__}")

        alpha = settings_data.get('alpha', True)
        if not isinstance(alpha, bool):
            raise SceneParseError(f"Invalid render settings: alpha must be true or false, got {alpha!r}")

        try:
            self.settings = RenderSettings(
                width=int(settings_data.get('width', 512)),
                height=int(settings_data.get('height', 512)),
                max_depth=int(settings_data.get('max_depth', 10)),
                min_intensity=float(settings_data.get('min_intensity', 0.01)),
                alpha=alpha
            )
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: str) -> Tuple[Scene, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
