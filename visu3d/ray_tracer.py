import argparse
import logging
import sys
import time
from typing import List, Optional, Tuple

from visu3d.errors import Visu3dError
from visu3d.render_settings import RenderSettings
from visu3d.renderer import RayTracer
from visu3d.scene_parser import parse_scene_file
from visu3d.utils.image import check_output_path

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _pixel(text: str) -> Tuple[int, int]:
    try:
        column, row = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError("expected COLUMN,ROW, got {!r}".format(text))
    return column, row


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Python Ray Tracer')
    parser.add_argument('scene_file', type=str, nargs='?', default='scene.json', help='Path to the JSON scene file')
    parser.add_argument('--output', type=str, default=None, help='Output image, overrides the camera `fichier`')
    parser.add_argument('--max-reflections', type=int, default=None, help='Overrides RayTracer.nbMaxReflexions')
    parser.add_argument('--sequential', action='store_true', help='Render rows in this process only')
    parser.add_argument('--processes', type=int, default=None, help='Number of worker processes')
    parser.add_argument(
        '--debug-pixel',
        type=_pixel,
        action='append',
        default=[],
        metavar='COLUMN,ROW',
        help='Log every ray cast for this pixel (implies --log-level DEBUG)',
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        default='WARNING',
        choices=LOG_LEVELS,
        help='Logging level',
    )
    parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log_level = 'DEBUG' if args.debug_pixel else args.log_level
    logging.basicConfig(level=log_level, format='%(levelname)s %(name)s: %(message)s')

    def log_phase(label: str, seconds: float) -> None:
        print(f"[phase] {label}: {seconds:.2f}s")

    try:
        parse_start = time.perf_counter()
        settings, camera, scene = parse_scene_file(args.scene_file)
        log_phase("parse_scene", time.perf_counter() - parse_start)

        if args.output is not None:
            camera.output_path = args.output
        # fail on a bad extension before spending time on the render
        check_output_path(camera.output_path)

        settings = RenderSettings(
            max_reflections=settings.max_reflections if args.max_reflections is None else args.max_reflections,
            multithread=settings.multithread and not args.sequential,
            processes=args.processes,
        )

        tracer = RayTracer(scene, camera, settings, debug_pixels=args.debug_pixel)
        print(tracer)
        print(scene)
        print(camera)

        render_start = time.perf_counter()
        image = tracer.render(show_progress=not args.no_progress)
        log_phase("render", time.perf_counter() - render_start)

        save_start = time.perf_counter()
        image.save(camera.output_path)
        log_phase("save_image", time.perf_counter() - save_start)
    except Visu3dError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Image saved as «{camera.output_path}»")
    return 0


def run() -> None:
    program_start = time.time()
    readable_start = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(program_start))
    print(f"[timer] Program started at {readable_start}")
    try:
        status = main()
    finally:
        program_end = time.time()
        readable_end = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(program_end))
        elapsed = program_end - program_start
        print(f"[timer] Program ended at {readable_end} (elapsed {elapsed:.2f}s)")
    sys.exit(status)


if __name__ == '__main__':
    run()
