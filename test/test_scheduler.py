#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.audio.a_null import Audio
from mchip.constants import DEFAULT_KEYMAP
from mchip.cpu import CPU, OpcodeError
from mchip.framebuffer import Framebuffer
from mchip.inputs.i_null import Inputs
from mchip.machine import Machine
from mchip.renderers.r_null import Renderer
from mchip.scheduler import Scheduler


class FakeClock:
    # Time only moves when the scheduler sleeps, plus an optional nudge on every read
    def __init__(self, step=0.0):
        self.now = 0.0
        self.step = step
        self.sleeps = []

    def clock(self):
        self.now += self.step
        return self.now

    def sleep(self, delay):
        self.sleeps.append(delay)
        self.now += delay


class FakeInputs(Inputs):
    def __init__(self, renderer, clock, presses=None, quit_after=None):
        super().__init__(DEFAULT_KEYMAP, renderer)
        self.clock = clock
        self.presses = presses or {}  # Key -> time it goes down
        self.quit_after = quit_after
        self.polls = 0

    def process_messages(self):
        self.polls += 1
        return self.quit_after is not None and self.polls >= self.quit_after

    def get_key_levels(self):
        return [key in self.presses and self.clock.now >= self.presses[key] for key in range(16)]


class RecordingAudio(Audio):
    def __init__(self):
        super().__init__()
        self.calls = []

    def enable_buzzer(self, enabled):
        self.calls.append(enabled)
        super().enable_buzzer(enabled)


class TestScheduler(unittest.TestCase):
    def _build(self, program, clock_speed=400, step=0.0, presses=None, quit_after=None):
        self.fake_clock = FakeClock(step)
        renderer = Renderer()
        self.framebuffer = Framebuffer(renderer)
        self.machine = Machine(self.framebuffer, bytes(program))
        self.cpu = CPU(self.machine)
        self.inputs = FakeInputs(renderer, self.fake_clock, presses, quit_after)
        self.audio = RecordingAudio()
        self.scheduler = Scheduler(
            self.cpu, self.inputs, self.audio, clock_speed=clock_speed, clock=self.fake_clock.clock,
            sleeper=self.fake_clock.sleep
        )

    def test_scheduler_instruction_rate(self):
        # ADD V0, 1 then jump back: V0 counts every other tick
        self._build(b"\x70\x01\x12\x00")
        self.scheduler.run(duration=0.5)
        self.assertTrue(99 <= self.machine.registers.v[0x0] <= 101)

    def test_scheduler_sleeps_instead_of_spinning(self):
        self._build(b"\x12\x00")
        self.scheduler.run(duration=0.1)
        self.assertTrue(self.fake_clock.sleeps)
        self.assertTrue(all(delay > 0 for delay in self.fake_clock.sleeps))

    def test_scheduler_timer_decay(self):
        self._build(b"\x12\x00")
        self.machine.timers.set_delay(10)
        self.scheduler.run(duration=0.09)
        self.assertEqual(5, self.machine.timers.delay)
        self.scheduler.run(duration=1.0)
        self.assertEqual(0, self.machine.timers.delay)

    def test_scheduler_timer_rate_ignores_clock_speed(self):
        for clock_speed in 60, 400, 2000:
            self._build(b"\x12\x00", clock_speed=clock_speed)
            self.machine.timers.set_delay(200)
            self.scheduler.run(duration=0.5)
            self.assertTrue(169 <= self.machine.timers.delay <= 171)

    def test_scheduler_timers_decay_while_awaiting_key(self):
        self._build(b"\xF0\x0A")
        self.machine.timers.set_delay(10)
        self.machine.timers.set_sound(10)
        self.scheduler.run(duration=1.0)
        self.assertTrue(self.cpu.is_awaiting_key())
        self.assertEqual(0x200, self.machine.registers.pc)
        self.assertEqual(0, self.machine.timers.delay)
        self.assertEqual(0, self.machine.timers.sound)

    def test_scheduler_key_resumes_execution(self):
        # LD V3, K, then spin
        self._build(b"\xF3\x0A\x12\x02", presses={0x5: 0.1})
        self.scheduler.run(duration=0.2)
        self.assertFalse(self.cpu.is_awaiting_key())
        self.assertEqual(0x5, self.machine.registers.v[0x3])
        self.assertEqual(0x202, self.machine.registers.pc)

    def test_scheduler_buzzer(self):
        # LD V0, 5 / LD ST, V0 / spin
        self._build(b"\x60\x05\xF0\x18\x12\x04")
        self.scheduler.run(duration=0.5)
        self.assertEqual([True, False], self.audio.calls)
        self.assertFalse(self.audio.buzzer_enabled)

    def test_scheduler_publishes_frames(self):
        # LD I, font 0 / DRW V0, V0, 5 / spin
        self._build(b"\xA0\x50\xD0\x05\x12\x04")
        self.scheduler.run(duration=0.1)
        frame = self.framebuffer.snapshot()
        self.assertEqual(1, frame[0])
        self.assertEqual(1, frame[3])
        self.assertEqual(0, frame[4])

    def test_scheduler_input_quit(self):
        self._build(b"\x12\x00", clock_speed=0, step=0.001, quit_after=3)
        self.scheduler.run()
        self.assertEqual(3, self.inputs.polls)
        self.assertFalse(self.fake_clock.sleeps)

    def test_scheduler_stop(self):
        self._build(b"\x70\x01\x12\x00")
        self.scheduler.stop()
        self.assertTrue(self.scheduler.is_stopped())
        self.scheduler.run()
        self.assertEqual(0, self.machine.registers.v[0x0])

    def test_scheduler_fault_propagates(self):
        self._build(b"\x60\x05\xF0\x18\xFF\xFF")
        self.assertRaises(OpcodeError, self.scheduler.run, 1.0)
        self.assertFalse(self.audio.buzzer_enabled)

    def test_scheduler_tick(self):
        self._build(b"\x61\x07")
        self.scheduler.tick()
        self.assertEqual(0x07, self.machine.registers.v[0x1])
        self.assertEqual(1, self.scheduler.perf_counter_ops)
