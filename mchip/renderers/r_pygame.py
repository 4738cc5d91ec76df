#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Used by a Framebuffer object to draw the screen.  This draws graphics onto an
SDL window surface via PyGame.  Note that the surface is allocated at the size
which matches the emulated screen, and then the contents are stretched (using
'Nearest Neighbour' translation) to fit the window itself.  This means we don't
have to draw the same pixel multiple times.

Lit pixels are drawn in the configured foreground colour, on black.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import Renderer as RendererBase
from ..constants import APP_NAME, VID_WIDTH, VID_HEIGHT

BACKGROUND_COLOUR = (0, 0, 0)


class Renderer(RendererBase):
    def __init__(self, scale=None, colour=None, **kwargs):
        if scale is None:
            scale = 10  # Default size of each emulated pixel, in host pixels

        pygame.display.init()
        self.rgb_buffer = None
        self.scaled_size = (VID_WIDTH * scale, VID_HEIGHT * scale)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        super().__init__(scale, colour)
        self.set_title(APP_NAME)

        # Split RGB values for faster byte-based lookup later
        self.rgb_map = [memoryview(bytearray(BACKGROUND_COLOUR)), memoryview(bytearray(self.colour))]

    def set_resolution(self, width, height):
        total_pixels = width * height
        self.rgb_buffer = memoryview(bytearray(total_pixels * 3))  # 24-bit, all background to start with
        super().set_resolution(width, height)

        if total_pixels:
            self.scaled_size = (width * self.scale, height * self.scale)
            self.display_surface = pygame.display.set_mode(self.scaled_size)

            # Force a refresh now, in case nothing else is drawn afterwards
            self.refresh_display(True)

    def set_pixel(self, x, y, lit):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_map[1 if lit else 0]

    def refresh_display(self, content_changed=False):
        if content_changed and self.width:
            # Blit the bytearray straight to the surface.  This is much faster than frequent PixelArray updates.
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame can segfault if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
