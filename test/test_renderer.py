#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.framebuffer import Framebuffer
from pchip.renderers.r_null import Renderer


class RecordingRenderer(Renderer):
    def __init__(self):
        self.pixels = {}
        self.refreshes = []
        super().__init__()

    def set_pixel(self, x, y, colour):
        self.pixels[(x, y)] = colour

    def refresh_display(self, content_changed=False):
        self.refreshes.append(content_changed)


class TestRenderer(unittest.TestCase):
    def test_renderer_init(self):
        renderer = Renderer()
        self.assertEqual(1, renderer.scale)
        self.assertEqual((0, 0), (renderer.width, renderer.height))
        self.assertEqual(3, Renderer(scale=3).scale)

    def test_renderer_draw_framebuffer(self):
        renderer = RecordingRenderer()
        framebuffer = Framebuffer(4, 2)
        framebuffer.xor_pixel(3, 1)
        renderer.draw_framebuffer(framebuffer)
        self.assertEqual((4, 2), (renderer.width, renderer.height))
        self.assertEqual(8, len(renderer.pixels))
        self.assertEqual(1, renderer.pixels[(3, 1)])
        self.assertEqual(0, renderer.pixels[(0, 0)])
        self.assertEqual([True], renderer.refreshes)

    def test_renderer_null_calls(self):
        # Only checks the calls run
        renderer = Renderer()
        renderer.draw_framebuffer(Framebuffer())
        renderer.set_title("Title")
        renderer.shutdown()
