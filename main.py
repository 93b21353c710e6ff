#!/usr/bin/env python3
"""
BeamBurst - A minimal Python ray tracer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time

from beamburst.vec3 import Color, Point3
from beamburst.shapes import Sphere, Triangle
from beamburst.materials import MIRROR, MATTE
from beamburst.lights import PointLight
from beamburst.scene import Scene
from beamburst.renderer import Renderer, RenderSettings
from beamburst.scene_parser import SceneParseError, load_scene


def create_demo_scene() -> Scene:
    """Create the demo scene: three spheres over a floor, five colored lights."""
    scene = Scene()

    scene.add_light(PointLight(Point3(-500, 0, 100), Color(1, 0, 0)))
    scene.add_light(PointLight(Point3(500, 0, 100), Color(0, 1, 0)))
    scene.add_light(PointLight(Point3(0, 500, -100), Color(0, 0, 1)))
    scene.add_light(PointLight(Point3(0, -500, -100), Color(0, 1, 1)))
    scene.add_light(PointLight(Point3(0, 0, 100), Color(1, 1, 0)))

    # Two mirror spheres side by side, a matte one above them
    scene.add(Sphere(Point3(-87, -50, 0), 100, MIRROR))
    scene.add(Sphere(Point3(87, -50, 0), 100, MIRROR))
    scene.add(Sphere(Point3(0, 100, 0), 100, MATTE))

    # Floor
    scene.add(Triangle(
        Point3(-1000, -1000, 0),
        Point3(1000, -1000, 0),
        Point3(1000, 1000, 0),
        MATTE
    ))

    return scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='BeamBurst - A minimal Python ray tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output example.png
  python main.py --width 128 --height 128 --depth 4 --output small.png
  python main.py --scene scene.yaml --output scene.png
        '''
    )

    parser.add_argument('--scene', type=str, default=None,
                        help='Scene file (YAML or JSON); default is the built-in demo scene')
    parser.add_argument('--width', type=int, default=None,
                        help='Camera x extent (default: 512); becomes the row count of the '
                             'saved file, so non-square images come out transposed')
    parser.add_argument('--height', type=int, default=None,
                        help='Camera y extent (default: 512); becomes the column count of the '
                             'saved file')
    parser.add_argument('--depth', type=int, default=None, help='Max reflection depth (default: 10)')
    parser.add_argument('--output', type=str, default='example.png', help='Output filename')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    print("=" * 60)
    print("BeamBurst Ray Tracer")
    print("=" * 60)

    if args.scene:
        print(f"\nLoading scene: {args.scene}")
        try:
            scene, settings = load_scene(args.scene)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        print("\nCreating scene: demo")
        scene, settings = create_demo_scene(), RenderSettings()

    try:
        settings = RenderSettings(
            width=args.width if args.width is not None else settings.width,
            height=args.height if args.height is not None else settings.height,
            max_depth=args.depth if args.depth is not None else settings.max_depth,
            min_intensity=settings.min_intensity,
            camera_z=settings.camera_z,
            alpha=settings.alpha
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"  Objects in scene: {len(scene)}")
    print(f"  Lights in scene: {len(scene.lights)}")
    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Max Depth: {settings.max_depth}")
    if settings.width != settings.height:
        print(f"  Note: saved file will be {settings.height} pixels wide and "
              f"{settings.width} tall (transposed)")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(scene)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")

    print(f"\nSaving to: {args.output}")
    try:
        renderer.save_image(image, args.output)
    except (OSError, ValueError) as e:
        print(f"Error: could not write {args.output}: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
