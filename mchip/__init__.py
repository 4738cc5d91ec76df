#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.

Returns the process exit status: 0 on a normal quit, 1 if the ROM could not be
loaded or the emulated CPU faulted.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import sys
from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_CLOCK_SPEED, DEFAULT_KEYMAP
from .cpu import CPU, CPUError
from .debugger import Debugger
from .framebuffer import Framebuffer
from .hostio import Loader, ROMError
from .inputs.i_null import InputsError
from .machine import Machine
from .renderers.r_null import RendererError, parse_colour
from .scheduler import Scheduler


class StartupError(Exception):
    pass


def select_plugins(opt_renderer, mute_audio):
    # If necessary, try PyGame first, then Curses.  Returns the Renderer, Inputs and Audio classes.
    auto_select_renderer = opt_renderer is None

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
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

            return Renderer, Inputs, Audio

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

            # Terminals can handle fixed-length beeps, but not sampled sound
            if mute_audio or mute_audio is None:
                from .audio.a_null import Audio
            else:
                from .audio.a_curses import Audio

            return Renderer, Inputs, Audio

    # pylint: disable=import-outside-toplevel
    from .inputs.i_null import Inputs
    from .renderers.r_null import Renderer
    from .audio.a_null import Audio

    return Renderer, Inputs, Audio


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_settings[quirk_label] = bool(args.get(quirk_label))

    screen_wrap_quirks = args.get("screen_wrap_quirks")
    clock_speed = args.get("clock_speed")

    # Read the ROM and check the colour before touching the host display, so mistakes are reported cleanly
    try:
        loader = Loader()
        program = loader.load_rom(args["filename"])
        colour = parse_colour(args.get("colour"))
    except (ROMError, RendererError) as err:
        print(err, file=sys.stderr)
        return 1

    Renderer, Inputs, Audio = select_plugins(args.get("renderer"), args.get("mute"))

    # Set up a new rendering system, and attach a framebuffer to it
    renderer = Renderer(
        scale=args.get("scale"),
        colour=colour,
        curses_cursor_mode=args.get("curses_cursor_mode") or 0
    )

    try:
        framebuffer = Framebuffer(renderer, allow_wrapping=(True if screen_wrap_quirks is None else
                                                            bool(screen_wrap_quirks)))

        # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
        inputs = Inputs(args.get("keymap") or DEFAULT_KEYMAP, renderer)
    except InputsError as err:
        renderer.shutdown()
        print(err, file=sys.stderr)
        return 1
    except Exception:
        renderer.shutdown()
        raise

    audio = Audio()

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(bool(args.get("debug")))

    # Build the machine with the font and ROM in RAM, plug a CPU into it, and hand both to the scheduler
    machine = Machine(framebuffer, program, font=loader.load_system_font())
    cpu = CPU(machine, debugger, **quirk_settings)
    scheduler = Scheduler(
        cpu, inputs, audio, clock_speed=(DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed)
    )

    try:
        scheduler.run()
    except CPUError as err:
        fault = err
    else:
        fault = None
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()

    if fault is not None:
        # Only reported once the terminal is restored, so Curses can't hide it
        print(fault, file=sys.stderr)
        return 1

    return 0
