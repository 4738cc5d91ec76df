#!/usr/bin/env python3

"""
Scheduler

Drives the CPU and the timers on two separate cadences:

    * CPU ticks at the configured clock speed (400 operations/second by
      default, or as fast as possible if the clock speed is 0).
    * Timer decay at a fixed 60Hz, whatever the clock speed, and whether or not
      the CPU is waiting for a key.

A third 60Hz cadence polls the host inputs, publishes the framebuffer, repaints
the display, and switches the buzzer on or off from the sound timer.

Each cadence has its own deadline.  Between deadlines, the Scheduler sleeps
until the earliest one is due, rather than spinning.  If the host falls badly
behind (such as when the window is dragged), the deadlines are pulled forward
to the present instead of trying to catch up on every missed tick.

The clock and sleep functions can be swapped out, so tests can run whole
seconds of emulated time instantly.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from threading import Event
from time import perf_counter, sleep
from .constants import DEFAULT_CLOCK_SPEED, DISPLAY_FREQ, TIMER_FREQ

TIMER_INTERVAL = 1.0 / TIMER_FREQ
DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ
MAX_LAG = 0.25  # Seconds behind schedule before deadlines are resynchronised


class Scheduler:
    def __init__(self, cpu, inputs, audio, clock_speed=DEFAULT_CLOCK_SPEED, clock=perf_counter, sleeper=sleep):
        self.cpu = cpu
        self.framebuffer = cpu.machine.framebuffer
        self.timers = cpu.machine.timers
        self.keypad = cpu.machine.keypad
        self.inputs = inputs
        self.audio = audio
        self.clock = clock
        self.sleeper = sleeper
        self.stop_event = Event()

        # User can specify 0 for uncapped
        self.core_interval = None if not clock_speed or clock_speed <= 0 else 1.0 / clock_speed

        self.next_step_time = 0.0
        self.next_timer_time = 0.0
        self.next_display_update_time = 0.0
        self.next_perf_report_time = 0.0
        self.buzzer_enabled = False

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0

    def stop(self):
        # Safe to call from any thread.  The loop exits before the next tick starts.
        self.stop_event.set()

    def is_stopped(self):
        return self.stop_event.is_set()

    def run(self, duration=None):
        # Run until stopped, until the input plugin asks to quit, or for 'duration' seconds of clock time
        start_time = self.clock()
        end_time = None if duration is None else start_time + duration
        self.next_step_time = start_time
        self.next_timer_time = start_time + TIMER_INTERVAL
        self.next_display_update_time = start_time
        self.next_perf_report_time = start_time + 1.0

        try:
            while not self.stop_event.is_set():
                this_time = self.clock()

                if end_time is not None and this_time >= end_time:
                    break

                if self._run_due(this_time):
                    break

                self._wait(end_time)
        finally:
            self._set_buzzer(False)

    def _run_due(self, this_time):
        # Timers first, so a tick at the same instant sees the decayed value.  Returns True if quitting.
        if this_time - self.next_timer_time > MAX_LAG:
            self.next_timer_time = this_time  # Too far behind, so drop the missed decays

        while this_time >= self.next_timer_time:
            self.timers.decrement()
            self.next_timer_time += TIMER_INTERVAL

        if this_time >= self.next_perf_report_time:
            # Reporting the performance should be done before a refresh, as refreshing will likely show the report
            self.framebuffer.report_perf(self.perf_counter_fps, self.perf_counter_ops)
            self.perf_counter_fps = 0
            self.perf_counter_ops = 0
            self.next_perf_report_time = this_time + 1.0

        if this_time >= self.next_display_update_time:
            if self.inputs.process_messages():
                return True

            self.next_display_update_time = this_time + DISPLAY_INTERVAL
            self.refresh()
            self.perf_counter_fps += 1

        if self.core_interval is None:
            self.tick()
        elif this_time >= self.next_step_time:
            if this_time - self.next_step_time > MAX_LAG:
                self.next_step_time = this_time

            self.tick()
            self.next_step_time += self.core_interval

        return False

    def tick(self):
        # Key levels must be up to date before any key-dependent instruction is evaluated
        self.keypad.set_state(self.inputs.get_key_levels())
        self.cpu.step()
        self.framebuffer.publish()  # Only whole ticks are ever visible to the renderer
        self.perf_counter_ops += 1

    def refresh(self):
        self.framebuffer.publish()
        self.framebuffer.refresh_display()
        self._set_buzzer(self.timers.is_sound_active())

    def _set_buzzer(self, enabled):
        if enabled != self.buzzer_enabled:
            self.audio.enable_buzzer(enabled)
            self.buzzer_enabled = enabled

    def _wait(self, end_time):
        if self.core_interval is None:
            return  # Uncapped, so never sleep

        next_time = min(self.next_step_time, self.next_timer_time, self.next_display_update_time)

        if end_time is not None:
            next_time = min(next_time, end_time)

        delay = next_time - self.clock()

        if delay > 0:
            self.sleeper(delay)
