#!/usr/bin/env python3

"""
Host Frame Loop

Drives the CPU in fixed frames, normally 60 per second.  Each frame:
    * Host inputs are processed (and may ask to quit)
    * A fixed number of instructions are executed
    * The CPU timers are ticked once
    * The framebuffer is drawn, but only if the CPU flagged a change

If the CPU is waiting for a keypress, the rest of the frame's instructions are
skipped, since they would only re-run the same wait.

Performance (frames and instructions per second) is shown in the window title
once a second.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, DEFAULT_CYCLES_PER_FRAME, FRAME_RATE, STEP_AWAITING_KEY


class HostError(Exception):
    pass


class Host:
    def __init__(self, cpu, renderer, inputs, cycles_per_frame=None, frame_rate=FRAME_RATE):
        if cycles_per_frame is None:
            cycles_per_frame = DEFAULT_CYCLES_PER_FRAME

        if cycles_per_frame < 1:
            raise HostError("At least one instruction must be executed per frame")

        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.cycles_per_frame = cycles_per_frame
        self.frame_interval = 1.0 / frame_rate

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self):
        while True:
            this_time = perf_counter()  # Do this first for maximum precision

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if self.inputs.process_messages():
                return

            self.perf_counter_ops += self.run_frame()
            self.perf_counter_fps += 1

            # Wait for the next frame.  Do this last so time spent on this frame is taken into account.
            remaining = this_time + self.frame_interval - perf_counter()

            if remaining > 0:
                sleep(remaining)

    def run_frame(self):
        # Returns the number of instructions executed
        cpu = self.cpu
        ops = 0

        for _ in range(self.cycles_per_frame):
            ops += 1

            if cpu.step() == STEP_AWAITING_KEY:
                break

        cpu.tick_timers()

        if cpu.draw_flag:
            self.renderer.draw_framebuffer(cpu.framebuffer)
            cpu.clear_draw_flag()

        return ops

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
