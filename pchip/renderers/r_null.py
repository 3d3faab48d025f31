#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if no display is
wanted, such as when running ROMs headless.  Without a renderer, performance
data will also not be shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height

    def set_pixel(self, x, y, colour):  # pylint: disable=unused-argument
        pass

    def draw_framebuffer(self, framebuffer):
        # Copy every cell across, then show the result
        vid_width, vid_height = framebuffer.get_vid_size()

        if (vid_width, vid_height) != (self.width, self.height):
            self.set_resolution(vid_width, vid_height)

        cells = framebuffer.get_cells()

        for y in range(vid_height):
            row = y * vid_width

            for x in range(vid_width):
                self.set_pixel(x, y, cells[row + x])

        self.refresh_display(True)

    def refresh_display(self, content_changed=False):
        pass

    def set_title(self, title):
        pass

    def shutdown(self):
        pass
