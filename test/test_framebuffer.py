#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.renderers.r_null import Renderer
from mchip.framebuffer import Framebuffer


class RecordingRenderer(Renderer):
    def __init__(self):
        self.pixels_set = []
        self.refreshes = []
        super().__init__()

    def set_pixel(self, x, y, lit):
        self.pixels_set.append((x, y, lit))

    def refresh_display(self, content_changed=False):
        self.refreshes.append(content_changed)


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.renderer = RecordingRenderer()
        self.framebuffer = Framebuffer(self.renderer)
        self.framebuffer_clip = Framebuffer(Renderer(), allow_wrapping=False)

    def _lit_pixels(self, framebuffer):
        width, height = framebuffer.get_vid_size()
        return {(x, y) for y in range(height) for x in range(width) if framebuffer.get_pixel(x, y)}

    def test_framebuffer_size(self):
        self.assertEqual((64, 32), self.framebuffer.get_vid_size())
        self.assertEqual((64, 32), (self.renderer.width, self.renderer.height))
        self.assertEqual(64 * 32, len(self.framebuffer.snapshot()))

    def test_framebuffer_draw(self):
        fb = self.framebuffer
        self.assertFalse(fb.draw(2, 3, b"\xC0\x01"))
        self.assertEqual({(2, 3), (3, 3), (9, 4)}, self._lit_pixels(fb))

    def test_framebuffer_collision(self):
        fb = self.framebuffer
        fb.draw(0, 0, b"\x80")
        self.assertTrue(fb.draw(0, 0, b"\xC0"))
        self.assertEqual({(1, 0)}, self._lit_pixels(fb))
        self.assertFalse(fb.draw(2, 0, b"\x80"))

    def test_framebuffer_draw_twice_restores(self):
        fb = self.framebuffer
        fb.draw(10, 10, b"\x3C")
        before = bytes(fb.pixels)
        sprite = b"\xF0\x90\x90\x90\xF0"
        fb.draw(8, 9, sprite)
        self.assertNotEqual(before, bytes(fb.pixels))
        fb.draw(8, 9, sprite)
        self.assertEqual(before, bytes(fb.pixels))

    def test_framebuffer_wrap(self):
        fb = self.framebuffer
        fb.draw(62, 31, b"\xF0\xF0")
        self.assertEqual(
            {(62, 31), (63, 31), (0, 31), (1, 31), (62, 0), (63, 0), (0, 0), (1, 0)},
            self._lit_pixels(fb)
        )

    def test_framebuffer_origin_always_wraps(self):
        for fb in self.framebuffer, self.framebuffer_clip:
            fb.draw(64 + 5, 32 + 6, b"\x80")
            self.assertEqual({(5, 6)}, self._lit_pixels(fb))

    def test_framebuffer_clip(self):
        fb = self.framebuffer_clip
        fb.draw(62, 31, b"\xF0\xF0")
        self.assertEqual({(62, 31), (63, 31)}, self._lit_pixels(fb))

    def test_framebuffer_clear(self):
        fb = self.framebuffer
        fb.draw(0, 0, b"\xFF\xFF")
        fb.clear()
        self.assertEqual(set(), self._lit_pixels(fb))
        cleared = bytes(fb.pixels)
        fb.clear()
        self.assertEqual(cleared, bytes(fb.pixels))
        self.assertEqual(bytes(64 * 32), cleared)

    def test_framebuffer_snapshot_only_changes_on_publish(self):
        fb = self.framebuffer
        blank = fb.snapshot()
        fb.draw(0, 0, b"\x80")
        self.assertIs(blank, fb.snapshot())
        fb.publish()
        self.assertEqual(1, fb.snapshot()[0])
        self.assertEqual(0, blank[0])

    def test_framebuffer_refresh_sends_deltas(self):
        fb = self.framebuffer
        fb.draw(1, 2, b"\x80")
        fb.publish()
        fb.refresh_display()
        self.assertEqual([(1, 2, 1)], self.renderer.pixels_set)
        self.assertEqual([True], self.renderer.refreshes)

        # Nothing new published, so nothing is resent
        fb.refresh_display()
        self.assertEqual([(1, 2, 1)], self.renderer.pixels_set)
        self.assertEqual([True, False], self.renderer.refreshes)

        fb.clear()
        fb.publish()
        fb.refresh_display()
        self.assertEqual([(1, 2, 1), (1, 2, 0)], self.renderer.pixels_set)

    def test_framebuffer_report_perf(self):
        self.framebuffer.report_perf(60, 400)
        self.assertIn("60 FPS, 400 OPS", self.renderer.title)
