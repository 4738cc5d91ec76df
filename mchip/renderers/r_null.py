#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output.  Without a renderer, performance data will also not be shown.

Renderers are only ever handed complete frames.  The Framebuffer sends changed
pixels with 'set_pixel' (1 for lit, 0 for unlit), then calls 'refresh_display'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import DEFAULT_COLOUR


class RendererError(Exception):
    pass


def parse_colour(colour):
    # Accepts "R,G,B" with each part 0-255, or an existing 3-tuple
    if colour is None:
        colour = DEFAULT_COLOUR

    if isinstance(colour, str):
        colour_split = colour.split(",")
    else:
        colour_split = list(colour)

    if len(colour_split) != 3:
        raise RendererError("Colours must have exactly 3 parts: red, green and blue.")

    try:
        rgb = tuple(int(part) for part in colour_split)
    except ValueError:
        raise RendererError("Colour parts must be integers.") from None

    if any(part < 0 or part > 0xFF for part in rgb):
        raise RendererError("Colour parts must be between 0 and 255.")

    return rgb


class Renderer:
    def __init__(self, scale=None, colour=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.colour = parse_colour(colour)
        self.title = ""
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def set_pixel(self, x, y, lit):  # pylint: disable=unused-argument
        pass

    def refresh_display(self, content_changed=False):
        pass

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
