#!/usr/bin/env python3
"""
minitracer - A minimal interactive Python ray tracer

Main entry point: opens the interactive window, or renders a single
frame to an image file.
"""

import argparse
import sys
import time
from dataclasses import replace
from pathlib import Path

from minitracer.config import Config, ConfigError, load_config
from minitracer.renderer import Renderer
from minitracer.scene import create_default_scene

# Aspect ratio of the demo camera when it is not fitted to the frame
FIXED_ASPECT_RATIO = 16.0 / 9.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='minitracer - A minimal interactive Python ray tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py
  python main.py --width 320 --height 180 --output render.png
  python main.py --config tracer.yaml --fixed-aspect
        '''
    )

    parser.add_argument('--width', type=int, default=None, help='Image width (default: from config, 640)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: from config, 360)')
    parser.add_argument('--config', type=str, default=None, help='YAML or JSON settings file')
    parser.add_argument('--output', type=str, default=None,
                        help='Render one frame to this file instead of opening a window')
    parser.add_argument('--fixed-aspect', action='store_true',
                        help='Keep a 16:9 camera regardless of the frame shape')
    parser.add_argument('--verbose', action='store_true', help='Print per-frame render times')
    parser.add_argument('--info', action='store_true', help='Show the effective settings and exit')
    return parser


def render_to_file(config: Config, output: str, fixed_aspect: bool) -> None:
    """Render the demo scene once and save it."""
    settings = config.render
    aspect_ratio = FIXED_ASPECT_RATIO if fixed_aspect else settings.width / settings.height
    scene = create_default_scene(aspect_ratio, config.camera)

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

    print(f"\nRendering {settings.width}x{settings.height}, {len(scene)} objects...")
    start_time = time.time()

    buffer = renderer.render(scene, settings.width, settings.height)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    print(f"  Rays per second: {(settings.width * settings.height) / max(elapsed, 1e-9):.0f}")

    # Ensure output directory exists
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {output}")
    renderer.save_image(buffer, settings.width, settings.height, output)


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else Config()
        overrides = {}
        if args.width is not None:
            overrides['width'] = args.width
        if args.height is not None:
            overrides['height'] = args.height
        if overrides:
            config = replace(config, render=replace(config.render, **overrides))
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.info:
        print("minitracer Settings:")
        print(f"  Resolution: {config.render.width}x{config.render.height}")
        print(f"  Field of view: {config.camera.vfov}")
        print(f"  Near / far: {config.camera.near} / {config.camera.far}")
        print(f"  Light: {config.render.light_position}")
        print(f"  Background: {config.render.background:#08x}")
        return 0

    # Print header
    print("=" * 60)
    print("minitracer")
    print("=" * 60)

    try:
        if args.output:
            render_to_file(config, args.output, args.fixed_aspect)
        else:
            from minitracer.window import Viewer

            settings = config.render
            aspect_ratio = FIXED_ASPECT_RATIO if args.fixed_aspect else settings.width / settings.height
            scene = create_default_scene(aspect_ratio, config.camera)
            print("Press Escape or close the window to quit.")
            Viewer(
                scene,
                Renderer(settings),
                fit_aspect=not args.fixed_aspect,
                verbose=args.verbose
            ).run()
    except ValueError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
