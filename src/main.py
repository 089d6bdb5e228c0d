# main.py
"""Render a scene of spheres to an image file.

Usage:
    python src/main.py [options] SCENE

SCENE is a JSON scene file or builtin:<name> (builtin:cover, builtin:three_spheres).

Example:
    python src/main.py -W 400 -H 225 -s 50 -j 8 -o spheres.png scenes/three_spheres.json
"""
import argparse
import os
import random
import sys
from typing import List, Optional

from renderer.image import ImageWriteError, save_image
from renderer.raytracer import MAX_BOUNCES, Renderer
from scene.builtin import BUILTIN_SCENES
from scene.loader import Scene, SceneError, load_scene

BUILTIN_PREFIX = "builtin:"


def _at_least(minimum: int):
    def parse(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
        if value < minimum:
            raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {value}")
        return value
    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Path trace a scene of spheres into an image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Built-in scenes: " + ", ".join(BUILTIN_PREFIX + name for name in BUILTIN_SCENES),
    )
    parser.add_argument("scene", help="JSON scene file, or builtin:<name>")
    parser.add_argument("-o", "--output", default="output",
                        help="Output file name; .ppm is added when there is no extension "
                             "(default: output)")
    parser.add_argument("-W", "--width", type=_at_least(1), default=400,
                        help="Image width in pixels (default: 400)")
    parser.add_argument("-H", "--height", type=_at_least(1), default=225,
                        help="Image height in pixels (default: 225)")
    parser.add_argument("-s", "--samples", type=_at_least(1), default=10,
                        help="Samples per pixel (default: 10)")
    parser.add_argument("-d", "--depth", type=_at_least(0), default=MAX_BOUNCES,
                        help=f"Maximum ray bounces (default: {MAX_BOUNCES})")
    parser.add_argument("-j", "--threads", type=_at_least(1), default=os.cpu_count() or 1,
                        help="Number of render threads (default: number of CPUs)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible renders")
    parser.add_argument("--preview", action="store_true",
                        help="Show the finished image in a window")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Suppress progress output")
    return parser


def resolve_scene(source: str, width: int, height: int, seed: Optional[int]) -> Scene:
    """
    Load a scene file, or build a named built-in scene sized for the image.
    """
    if source.startswith(BUILTIN_PREFIX):
        name = source[len(BUILTIN_PREFIX):]
        if name not in BUILTIN_SCENES:
            known = ", ".join(sorted(BUILTIN_SCENES))
            raise SceneError(f"unknown built-in scene {name!r} (known: {known})")
        return BUILTIN_SCENES[name](random.Random(seed), aspect_ratio=width / height)
    return load_scene(source)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        scene = resolve_scene(args.scene, args.width, args.height, args.seed)
    except SceneError as e:
        print(f"Error loading scene: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Rendering {scene.name}: {len(scene.world)} objects, "
              f"{args.width}x{args.height}, {args.samples} spp, depth {args.depth}, "
              f"{args.threads} threads", file=sys.stderr)

    renderer = Renderer(args.width, args.height,
                        samples_per_pixel=args.samples,
                        max_depth=args.depth,
                        threads=args.threads,
                        seed=args.seed,
                        quiet=args.quiet)
    pixels = renderer.render(scene.world, scene.camera)

    try:
        path = save_image(pixels, args.output)
    except ImageWriteError as e:
        print(f"Error writing image: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Wrote {path}", file=sys.stderr)

    if args.preview:
        from renderer.preview import show_image
        show_image(pixels, title=f"{scene.name} ({path})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
