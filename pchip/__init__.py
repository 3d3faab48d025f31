#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the interpreter, replacing args with a
dictionary of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_KEYMAP, DISPLAY_WIDTH, DISPLAY_HEIGHT
from .cpu import CPU
from .host import Host, HostError
from .hostio import Loader

RENDERERS = ["pygame", "curses", "null"]


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = args[quirk_label]
        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    opt_renderer = args["renderer"]
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then Curses.

    if not auto_select_renderer and opt_renderer not in RENDERERS:
        raise StartupError("Unknown renderer '{}'.".format(opt_renderer))

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            opt_renderer = "pygame"
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer

    # Read the ROM before anything is shown on screen, so a bad path fails cleanly
    try:
        rom = Loader().load_binary(args["filename"])
    except OSError as e:
        raise StartupError("Unable to read ROM '{}': {}".format(args["filename"], e.strerror)) from None

    # Create a new CPU and write the ROM into its RAM
    cpu = CPU(**quirk_settings)
    cpu.load(rom)

    # Set up a new rendering system for the 64x32 display
    renderer = Renderer(
        scale=args["scale"],
        pygame_palette=args["pygame_palette"],
        curses_cursor_mode=args["curses_cursor_mode"],
        smoothing=args["smoothing"]
    )

    try:
        renderer.set_resolution(DISPLAY_WIDTH, DISPLAY_HEIGHT)

        # Set up host inputs, feeding the CPU's keypad, and link to the chosen rendering module in case it provides
        # inputs too
        inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, renderer, cpu.set_key)

        try:
            Host(cpu, renderer, inputs, cycles_per_frame=args["cycles_per_frame"]).run()
        except HostError as e:
            raise StartupError(str(e)) from None
        finally:
            # The loop has quit.  __del__ cannot be relied upon when using PyPy
            inputs.shutdown()
    finally:
        renderer.shutdown()
