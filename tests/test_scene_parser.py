"""Tests for the scene description parser."""

import pytest
import json

from beamburst.vec3 import Vec3, Point3, Color
from beamburst.shapes import Sphere, Triangle
from beamburst.lights import PointLight
from beamburst.scene_parser import SceneParser, SceneParseError, load_scene, parse_scene


SCENE_DATA = {
    'render': {'width': 32, 'height': 24, 'max_depth': 4},
    'materials': {
        'mirror': {'color': [0.9, 1.0, 0.9], 'ambient': 0.01, 'diffuse': 0.99, 'reflect': 0.99},
    },
    'objects': [
        {'type': 'sphere', 'center': [-87, -50, 0], 'radius': 100, 'material': 'mirror'},
        {
            'type': 'triangle',
            'vertices': [[-1000, -1000, 0], [1000, -1000, 0], [1000, 1000, 0]],
            'material': {'color': '#ffcc99', 'ambient': 0.3, 'diffuse': 0.7, 'reflect': 0.2},
        },
    ],
    'lights': [
        {'position': [-500, 0, 100], 'color': [1, 0, 0]},
        {'type': 'point', 'position': {'x': 0, 'y': 0, 'z': 100}, 'color': {'r': 1, 'g': 1}},
    ],
}


class TestParseDict:
    """Test parsing scene dictionaries."""

    def test_settings(self):
        _, settings = parse_scene(SCENE_DATA)
        assert settings.width == 32
        assert settings.height == 24
        assert settings.max_depth == 4

    def test_default_settings(self):
        _, settings = parse_scene({})
        assert settings.width == 512
        assert settings.max_depth == 10

    def test_objects_in_order(self):
        scene, _ = parse_scene(SCENE_DATA)
        sphere, triangle = scene.objects

        assert isinstance(sphere, Sphere)
        assert sphere.center == Point3(-87, -50, 0)
        assert sphere.radius == 100.0
        assert sphere.material.reflect == 0.99

        assert isinstance(triangle, Triangle)
        assert triangle.vertices[2] == Point3(1000, 1000, 0)
        assert triangle.material.color == Color(1.0, 0.8, 0.6)

    def test_lights(self):
        scene, _ = parse_scene(SCENE_DATA)
        first, second = scene.lights

        assert first == PointLight(Point3(-500, 0, 100), Color(1, 0, 0))
        assert second.position == Point3(0, 0, 100)
        assert second.color == Color(1, 1, 0)

    def test_shared_material_instance(self):
        data = {
            'materials': {'m': {'color': [1, 1, 1], 'ambient': 1.0}},
            'objects': [
                {'type': 'sphere', 'center': [0, 0, 0], 'radius': 1, 'material': 'm'},
                {'type': 'sphere', 'center': [5, 0, 0], 'radius': 1, 'material': 'm'},
            ],
        }
        scene, _ = parse_scene(data)
        a, b = scene.objects
        assert a.material is b.material

    def test_triangle_with_named_vertices(self):
        data = {'objects': [{
            'type': 'triangle', 'v0': [0, 0, 0], 'v1': [1, 0, 0], 'v2': [0, 1, 0],
            'material': {'color': [1, 1, 1]},
        }]}
        scene, _ = parse_scene(data)
        assert scene.objects[0].vertices[1] == Point3(1, 0, 0)

    def test_parser_keeps_state(self):
        parser = SceneParser()
        scene, settings = parser.parse_dict(SCENE_DATA)
        assert parser.scene is scene
        assert parser.settings is settings
        assert 'mirror' in parser.materials


class TestParseErrors:
    """Test error reporting."""

    @pytest.mark.parametrize("data, message", [
        ({'objects': [{'type': 'cube', 'material': {'color': [1, 1, 1]}}]}, "Unknown object type"),
        ({'objects': [{'type': 'sphere', 'material': 'missing'}]}, "Unknown material"),
        ({'objects': [{'type': 'sphere'}]}, "no material"),
        ({'objects': [{'type': 'sphere', 'material': 5}]}, "Invalid material reference"),
        ({'objects': [{'type': 'sphere', 'center': [0, 0], 'material': {}}]}, "3 components"),
        ({'objects': [{'type': 'sphere', 'center': 'origin', 'material': {}}]}, "Cannot parse Vec3"),
        ({'objects': [{'type': 'sphere', 'radius': 'big', 'material': {}}]}, "radius"),
        ({'objects': [{'type': 'triangle', 'vertices': [[0, 0, 0]], 'material': {}}]}, "3 vertices"),
        ({'lights': [{'type': 'area'}]}, "Unknown light type"),
        ({'lights': [{'color': '#zzzzzz'}]}, "Cannot parse color"),
        ({'lights': [{'color': 'red'}]}, "Cannot parse color"),
        ({'materials': {'m': {'color': [1, 1, 1], 'ambient': 'lots'}}}, "Invalid material"),
        ({'render': {'width': 0}}, "Invalid render settings"),
        ({'render': {'width': 'wide'}}, "Invalid render settings"),
        ([1, 2, 3], "must be a mapping"),
    ])
    def test_invalid_scene(self, data, message):
        with pytest.raises(SceneParseError, match=message):
            parse_scene(data)

    @pytest.mark.parametrize("data, message", [
        ({'objects': ['sphere']}, "entry of 'objects' must be a mapping"),
        ({'objects': None}, "'objects' must be a list"),
        ({'objects': {'type': 'sphere'}}, "'objects' must be a list"),
        ({'materials': [{'color': [1, 1, 1]}]}, "'materials' must be a mapping"),
        ({'lights': [[0, 0, 0]]}, "entry of 'lights' must be a mapping"),
        ({'lights': 'sun'}, "'lights' must be a list"),
        ({'render': 512}, "'render' must be a mapping"),
    ])
    def test_malformed_section(self, data, message):
        with pytest.raises(SceneParseError, match=message):
            parse_scene(data)

    @pytest.mark.parametrize("alpha", ["false", 0, None])
    def test_alpha_must_be_boolean(self, alpha):
        with pytest.raises(SceneParseError, match="alpha must be true or false"):
            parse_scene({'render': {'alpha': alpha}})

    def test_alpha_false(self):
        _, settings = parse_scene({'render': {'alpha': False}})
        assert settings.alpha is False


class TestParseFile:
    """Test loading scene files."""

    def test_json_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(SCENE_DATA))

        scene, settings = load_scene(str(path))

        assert len(scene) == 2
        assert len(scene.lights) == 2
        assert settings.width == 32

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text(
            "render:\n"
            "  width: 8\n"
            "  height: 8\n"
            "materials:\n"
            "  matte: {color: [1.0, 0.8, 0.6], ambient: 0.3, diffuse: 0.7, reflect: 0.2}\n"
            "objects:\n"
            "  - type: sphere\n"
            "    center: [0, 100, 0]\n"
            "    radius: 100\n"
            "    material: matte\n"
            "lights:\n"
            "  - position: [0, 0, 100]\n"
            "    color: [1, 1, 0]\n"
        )

        scene, settings = load_scene(str(path))

        assert settings.width == 8
        assert scene.objects[0].center == Point3(0, 100, 0)
        assert scene.lights[0].color == Color(1, 1, 0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SceneParseError, match="not found"):
            load_scene(str(tmp_path / "nope.yaml"))

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SceneParseError, match="Invalid scene file"):
            load_scene(str(path))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("objects: [\n  - : :\n")
        with pytest.raises(SceneParseError, match="Invalid scene file"):
            load_scene(str(path))

    def test_wrong_section_shape_in_yaml(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_text("objects: [sphere]\n")
        with pytest.raises(SceneParseError, match="must be a mapping"):
            load_scene(str(path))

    def test_directory(self, tmp_path):
        with pytest.raises(SceneParseError, match="Cannot read scene file"):
            load_scene(str(tmp_path))

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "scene.yaml"
        path.write_bytes(b"objects: \xff\xfe\n")
        with pytest.raises(SceneParseError, match="Cannot read scene file"):
            load_scene(str(path))
