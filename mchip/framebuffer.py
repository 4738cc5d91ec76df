#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are usually only drawn to the actual display (the
host rendering system) at 60Hz.  Programs for this system cannot write directly
into video RAM.  Instead, sprites are drawn to the screen using an XOR method,
and the whole screen can be cleared.  Nothing else changes a pixel.

Collisions (where any pixel was set, but was unset by an XOR) are reported back
to the CPU, which stores the result in the flag register.

The live grid is only ever touched by the CPU, in between instructions.  Once a
tick completes, the Scheduler calls 'publish', which takes an immutable copy of
the grid.  Anything else (such as a renderer on another thread) should read that
copy through 'snapshot', so it never sees a sprite half-drawn.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_NAME, VID_WIDTH, VID_HEIGHT


class Framebuffer:
    def __init__(self, renderer, vid_width=VID_WIDTH, vid_height=VID_HEIGHT, allow_wrapping=True):
        self.renderer = renderer
        self.allow_wrapping = allow_wrapping
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.pixels = bytearray(self.vid_size)  # One byte per pixel, 0 or 1
        self.published = bytes(self.vid_size)
        self.rendered = bytes(self.vid_size)
        self.dirty = False
        self.renderer.set_resolution(vid_width, vid_height)
        self.report_perf()

    def clear(self):
        self.pixels[:] = bytes(self.vid_size)
        self.dirty = True

    def draw(self, x, y, sprite):
        # XOR each row of the sprite onto the screen, most significant bit on the left.  The sprite's start always
        # wraps.  Pixels running off the right or bottom either wrap around, or are clipped.
        vid_width = self.vid_width
        vid_height = self.vid_height
        pixels = self.pixels
        x %= vid_width
        y %= vid_height
        collision = False

        for row, spr_data in enumerate(sprite):
            scr_y = y + row

            if scr_y >= vid_height:
                if not self.allow_wrapping:
                    break

                scr_y %= vid_height

            row_loc = scr_y * vid_width

            for col in range(8):
                if not spr_data & (0x80 >> col):
                    continue

                scr_x = x + col

                if scr_x >= vid_width:
                    if not self.allow_wrapping:
                        break

                    scr_x %= vid_width

                vram_loc = row_loc + scr_x

                if pixels[vram_loc]:
                    # Don't stop drawing.  Once set, the flag stays set for the rest of the sprite.
                    collision = True

                pixels[vram_loc] ^= 1

        self.dirty = True
        return collision

    def get_pixel(self, x, y):
        return bool(self.pixels[y * self.vid_width + x])

    def publish(self):
        # Only called between ticks, so the copy is always a complete frame
        if self.dirty:
            self.published = bytes(self.pixels)
            self.dirty = False

    def snapshot(self):
        return self.published

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def refresh_display(self):
        # Send only the pixels changed since the last refresh to the renderer, then let it paint
        frame = self.published
        last_frame = self.rendered
        content_changed = frame is not last_frame

        if content_changed:
            vid_width = self.vid_width

            for vram_loc in range(self.vid_size):
                pixel = frame[vram_loc]

                if pixel != last_frame[vram_loc]:
                    self.renderer.set_pixel(vram_loc % vid_width, vram_loc // vid_width, pixel)

            self.rendered = frame

        self.renderer.refresh_display(content_changed)

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
