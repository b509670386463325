import logging

import numpy as np
import pytest

from visu3d.backgrounds import MonochromeBackground
from visu3d.errors import ConfigurationError
from visu3d.render_settings import RenderSettings
from visu3d.renderer import RayTracer
from visu3d.scene import Scene
from visu3d.surfaces import Rectangle, Sphere
from visu3d.typings.color import Color
from visu3d.utils.vector_operations import Point3, Vector3

ORIGIN = Point3(0, 0, 0)
PLUS_X = Vector3(1, 0, 0)
SKY = Color(100, 200, 50)


def mirror(x, facing, color=Color(0, 0, 0), reflectivity=1.0):
    """2x2 square in the plane at `x`, visible from the side `facing` (+1 or -1) along x."""
    if facing < 0:
        corners = (Point3(x, -1, 1), Point3(x, -1, -1), Point3(x, 1, -1), Point3(x, 1, 1))
    else:
        corners = (Point3(x, 1, 1), Point3(x, 1, -1), Point3(x, -1, -1), Point3(x, -1, 1))
    return Rectangle(*corners, color, reflectivity)


def make_scene(*visibles, background=SKY):
    scene = Scene()
    scene.background = MonochromeBackground(background)
    for visible in visibles:
        scene.add(visible)
    return scene


def sequential(max_reflections=0):
    return RenderSettings(max_reflections=max_reflections, multithread=False)


class TestTrace:
    def test_background_color_is_not_shaded(self, front_camera):
        tracer = RayTracer(make_scene(), front_camera, sequential())
        assert tracer.trace(ORIGIN, PLUS_X, 0) == SKY

    def test_head_on_hit_keeps_full_color(self, front_camera):
        scene = make_scene(Sphere(Point3(5, 0, 0), 1.0, Color(255, 0, 0)))
        tracer = RayTracer(scene, front_camera, sequential())
        assert tracer.trace(ORIGIN, PLUS_X, 0) == Color(255, 0, 0)

    def test_oblique_hit_is_darkened_by_the_viewing_angle(self, front_camera):
        scene = make_scene(mirror(5, -1, color=Color(200, 200, 200), reflectivity=0.0))
        tracer = RayTracer(scene, front_camera, sequential())
        direction = (Point3(5, 0.5, 0) - ORIGIN).normalize()
        # 200 * cos = 200 * 5 / sqrt(25.25) = 199.007...
        assert tracer.trace(ORIGIN, direction, 0) == Color(199, 199, 199)

    def test_reflection_blends_with_reflected_color(self, front_camera):
        scene = make_scene(mirror(5, -1, reflectivity=0.5))
        tracer = RayTracer(scene, front_camera, sequential(1))
        # the reflected ray heads back to -x and only sees the background
        assert tracer.trace(ORIGIN, PLUS_X, 1) == Color(50, 100, 25)

    def test_depth_zero_ignores_reflectivity(self, front_camera):
        scene = make_scene(mirror(5, -1, reflectivity=0.5))
        tracer = RayTracer(scene, front_camera, sequential())
        assert tracer.trace(ORIGIN, PLUS_X, 0) == Color(0, 0, 0)

    def test_facing_mirrors_stop_at_max_depth(self, front_camera, monkeypatch):
        scene = make_scene(mirror(5, -1), mirror(-5, 1))
        calls = []
        original = scene.intersect

        def counting_intersect(origin, direction):
            calls.append(origin)
            return original(origin, direction)

        monkeypatch.setattr(scene, "intersect", counting_intersect)
        tracer = RayTracer(scene, front_camera, sequential(3))
        color = tracer.trace(ORIGIN, PLUS_X, 3)

        assert len(calls) == 4
        assert color == Color(0, 0, 0)
        assert calls[1].x == pytest.approx(5.0)
        assert calls[2].x == pytest.approx(-5.0)


class TestRender:
    def test_background_only(self, front_camera):
        image = RayTracer(make_scene(), front_camera, sequential()).render(show_progress=False)
        assert (image.columns, image.rows) == (4, 4)
        assert np.all(image.pixels == np.array((100, 200, 50), dtype=np.uint8))

    def test_sphere_in_the_middle(self, front_camera):
        scene = make_scene(Sphere(Point3(5, 0, 0), 1.0, Color(255, 0, 0)))
        image = RayTracer(scene, front_camera, sequential()).render(show_progress=False)
        # shaded by the viewing angle, but still pure red
        center = image.get_pixel(1, 1)
        assert center.red > 0 and center.green == 0 and center.blue == 0
        assert image.get_pixel(0, 0) == SKY
        assert image.get_pixel(3, 3) == SKY

    def test_parallel_matches_sequential(self, front_camera):
        scene = make_scene(
            Sphere(Point3(5, 0.2, 0.1), 1.0, Color(255, 0, 0), 0.3),
            mirror(-3, 1, color=Color(0, 0, 200), reflectivity=0.5),
        )
        expected = RayTracer(scene, front_camera, sequential(2)).render(show_progress=False)
        settings = RenderSettings(max_reflections=2, multithread=True, processes=2)
        actual = RayTracer(scene, front_camera, settings).render(show_progress=False)
        np.testing.assert_array_equal(actual.pixels, expected.pixels)

    def test_debug_pixels_are_logged(self, front_camera, caplog):
        scene = make_scene(Sphere(Point3(5, 0, 0), 1.0, Color(255, 0, 0)))
        tracer = RayTracer(scene, front_camera, sequential(), debug_pixels=[(1, 2)])
        with caplog.at_level(logging.DEBUG, logger="visu3d.renderer"):
            tracer.render(show_progress=False)
        assert "Pixel (1, 2)" in caplog.text
        assert "Pixel (0, 0)" not in caplog.text
        assert "Rendered 4x4 image" in caplog.text

    def test_injected_logger(self, front_camera, caplog):
        logger = logging.getLogger("tests.render")
        tracer = RayTracer(make_scene(), front_camera, sequential(), logger=logger)
        with caplog.at_level(logging.INFO, logger="tests.render"):
            tracer.render(show_progress=False)
        assert [record.name for record in caplog.records] == ["tests.render"]


class TestSettings:
    def test_defaults(self):
        settings = RenderSettings()
        assert settings.max_reflections == 0
        assert settings.multithread is True
        assert settings.processes is None

    def test_negative_depth(self):
        with pytest.raises(ConfigurationError):
            RenderSettings(max_reflections=-1)

    def test_non_positive_processes(self):
        with pytest.raises(ConfigurationError):
            RenderSettings(processes=0)

    def test_description(self):
        text = str(RenderSettings(max_reflections=3, multithread=False))
        assert "RayTracer" in text
        assert "3" in text
