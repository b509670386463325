from __future__ import annotations

import logging
from multiprocessing import Pool
from typing import Iterable, Optional, Set, Tuple

import numpy as np
from tqdm import tqdm

from visu3d.camera import Camera
from visu3d.render_settings import RenderSettings
from visu3d.scene import Scene
from visu3d.typings.color import Color, blend_colors
from visu3d.utils.image import Image
from visu3d.utils.vector_operations import Point3, Vector3, reflect_vector, vector_dot

PROGRESS_LABEL: str = "Rendu de l'image"

# Tracer shared with pool workers (set by the pool initializer)
_worker_tracer: Optional[RayTracer] = None


def _init_worker(tracer: RayTracer) -> None:
    global _worker_tracer
    _worker_tracer = tracer


def _render_row_in_worker(row: int) -> Tuple[int, np.ndarray]:
    assert _worker_tracer is not None
    return row, _worker_tracer.render_row(row)


class RayTracer:
    """Computes the color of every camera pixel by casting rays into the scene.

    When a ray hits an object whose impact point and normal are known, a
    reflected ray is cast from that point. Reflections are therefore
    recursive; the number of bounces a ray may take is bounded by
    settings.max_reflections and decreases by one at each bounce.

    Rows can be rendered in parallel worker processes (settings.multithread),
    which is best avoided while debugging.
    """

    def __init__(
        self,
        scene: Scene,
        camera: Camera,
        settings: RenderSettings | None = None,
        logger: logging.Logger | None = None,
        debug_pixels: Iterable[Tuple[int, int]] = (),
    ) -> None:
        self.scene = scene
        self.camera = camera
        self.settings = settings if settings is not None else RenderSettings()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.debug_pixels: Set[Tuple[int, int]] = set(debug_pixels)

    def trace(self, origin: Point3, direction: Vector3, remaining_depth: int, debug: bool = False) -> Color:
        """Color seen from origin along the unit vector direction."""
        if debug:
            self.logger.debug("  trace(%s, %s, %d)", origin, direction, remaining_depth)

        # 1. Nearest impact, object or background
        impact = self.scene.intersect(origin, direction)
        if debug:
            self.logger.debug("%s", impact)

        # 2. Lighting: only the viewing angle attenuates the color
        color = impact.color
        normal = impact.normal
        if normal is not None:
            color = color.scaled(max(0.0, -vector_dot(direction, normal)))

        # 3. Reflection
        if (
            remaining_depth > 0
            and impact.reflectivity > 0.0
            and impact.position is not None
            and normal is not None
        ):
            # mirror of the incoming ray, i.e. 2(n.v)n - v with v = -direction pointing back to the eye
            reflect_dir = reflect_vector(direction, normal)
            reflected_color = self.trace(impact.position, reflect_dir, remaining_depth - 1, debug)
            color = blend_colors(color, reflected_color, impact.reflectivity)

        return color

    def render_pixel(self, column: int, row: int) -> Color:
        debug = (column, row) in self.debug_pixels
        pixel_position = self.camera.pixel_position(column, row)
        if debug:
            self.logger.debug("Pixel (%d, %d) at %s", column, row, pixel_position)
        direction = (pixel_position - self.camera.position).normalize()
        return self.trace(self.camera.position, direction, self.settings.max_reflections, debug)

    def render_row(self, row: int) -> np.ndarray:
        values = np.zeros((self.camera.columns, 3), dtype=np.uint8)
        for column in range(self.camera.columns):
            color = self.render_pixel(column, row)
            values[column] = color.to_array()
        return values

    def render(self, show_progress: bool = True) -> Image:
        """Renders every row of the camera image and returns it."""
        image = Image(self.camera.columns, self.camera.rows)
        rows = range(self.camera.rows)

        with tqdm(total=self.camera.rows, desc=PROGRESS_LABEL, unit="row", disable=not show_progress) as progress:
            if self.settings.multithread:
                # only this process writes rows and advances the bar
                with Pool(
                    processes=self.settings.processes,
                    initializer=_init_worker,
                    initargs=(self,),
                ) as pool:
                    for row, values in pool.imap_unordered(_render_row_in_worker, rows):
                        image.set_row(row, values)
                        progress.update(1)
            else:
                for row in rows:
                    image.set_row(row, self.render_row(row))
                    progress.update(1)

        self.logger.info("Rendered %dx%d image", self.camera.columns, self.camera.rows)
        return image

    def __str__(self) -> str:
        return str(self.settings)
