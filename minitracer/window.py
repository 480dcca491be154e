"""
Interactive window for the tracer, built on pygame.

The window is redrawn whenever it is exposed or resized; nothing is
rendered in between. Escape or closing the window ends the session.
"""

from __future__ import annotations
import time
from typing import Tuple

import pygame

from .scene import Scene
from .renderer import Renderer

WINDOW_TITLE = "Python Raytracer"

REDRAW_EVENTS = (pygame.VIDEORESIZE, pygame.VIDEOEXPOSE, pygame.WINDOWEXPOSED)


def is_exit_event(event: pygame.event.Event) -> bool:
    """True for window close requests and the Escape key."""
    if event.type == pygame.QUIT:
        return True
    return event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE


class Viewer:
    """Displays the renderer's frame buffer in a resizable window."""

    def __init__(
        self,
        scene: Scene,
        renderer: Renderer = None,
        size: Tuple[int, int] = None,
        title: str = WINDOW_TITLE,
        fit_aspect: bool = True,
        verbose: bool = False
    ):
        """Create a viewer.

        Args:
            scene: Scene to display
            renderer: Renderer to draw with (defaults if None)
            size: Initial window size, taken from the renderer settings if None
            title: Window caption
            fit_aspect: Rebuild the camera to match the window shape on resize
            verbose: Print the render time of each frame
        """
        self.scene = scene
        self.renderer = renderer if renderer else Renderer()
        self.size = size if size else (self.renderer.settings.width, self.renderer.settings.height)
        self.title = title
        self.fit_aspect = fit_aspect
        self.verbose = verbose

    def run(self) -> None:
        """Open the window and process events until the user quits."""
        pygame.init()
        try:
            screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
            pygame.display.set_caption(self.title)
            self.draw(screen)
            pygame.display.flip()

            while True:
                # Take every queued event before redrawing
                events = [pygame.event.wait()] + pygame.event.get()
                if any(is_exit_event(event) for event in events):
                    break
                if any(event.type in REDRAW_EVENTS for event in events):
                    self.draw(pygame.display.get_surface())
                    pygame.display.flip()
        finally:
            pygame.quit()

    def draw(self, surface: pygame.Surface) -> None:
        """Render a frame at the surface's size and blit it."""
        width, height = surface.get_size()
        if width == 0 or height == 0:
            # Minimized window
            return

        if self.fit_aspect and self.scene.camera.aspect_ratio != width / height:
            camera = self.scene.camera.with_aspect_ratio(width / height)
            self.scene = self.scene.with_camera(camera)

        start_time = time.time()
        buffer = self.renderer.render(self.scene, width, height)
        if self.verbose:
            print(f"Frame {width}x{height} rendered in {time.time() - start_time:.2f}s")

        # surfarray indexes (x, y), the image is (row, column)
        rgb = Renderer.to_rgb(buffer, width, height).swapaxes(0, 1)
        surface.blit(pygame.surfarray.make_surface(rgb), (0, 0))
