"""
Tests for the pygame viewer.

These tests never open a display: drawing goes to an off-screen surface.
"""

import pytest
import pygame

from minitracer.vec3 import Point3
from minitracer.camera import Camera
from minitracer.shapes import Sphere
from minitracer.scene import Scene
from minitracer.renderer import Renderer, RenderSettings
from minitracer.window import Viewer, is_exit_event, WINDOW_TITLE


@pytest.fixture
def scene():
    camera = Camera(Point3(0, 0, 0), Point3(0, 0, -1), 1.0)
    return Scene(camera, [Sphere(Point3(0, 0, -3), 2.0)])


@pytest.fixture
def renderer():
    return Renderer(RenderSettings(width=4, height=2, light_position=(0.0, 0.0, 5.0)))


class TestExitEvents:
    """Test is_exit_event()."""

    def test_quit(self):
        assert is_exit_event(pygame.event.Event(pygame.QUIT))

    def test_escape(self):
        assert is_exit_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))

    def test_other_key(self):
        assert not is_exit_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))

    def test_escape_release(self):
        assert not is_exit_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_ESCAPE))

    def test_resize(self):
        assert not is_exit_event(pygame.event.Event(pygame.VIDEORESIZE, w=10, h=10, size=(10, 10)))


class TestViewer:
    """Test Viewer drawing."""

    def test_defaults(self, scene, renderer):
        viewer = Viewer(scene, renderer)
        assert viewer.size == (4, 2)
        assert viewer.title == WINDOW_TITLE
        assert viewer.fit_aspect

    def test_draw_blits_frame(self, scene, renderer):
        surface = pygame.Surface((4, 2))
        viewer = Viewer(scene, renderer, fit_aspect=False)
        viewer.draw(surface)

        # Pixel (2, 1) lies on the view axis and faces the light
        color = surface.get_at((2, 1))
        assert (color.r, color.g, color.b) == (255, 255, 255)
        assert renderer.size == (4, 2)

    def test_fit_aspect_rebuilds_camera(self, scene, renderer):
        viewer = Viewer(scene, renderer)
        viewer.draw(pygame.Surface((4, 2)))
        assert viewer.scene.camera.aspect_ratio == pytest.approx(2.0)
        assert viewer.scene.objects == scene.objects

    def test_fixed_aspect_keeps_camera(self, scene, renderer):
        viewer = Viewer(scene, renderer, fit_aspect=False)
        viewer.draw(pygame.Surface((4, 2)))
        assert viewer.scene.camera is scene.camera
