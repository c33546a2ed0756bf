"""
Real-time clock for the simulator.

A SimPy environment that paces event processing against the wall clock,
so the same elevator and dispatcher code can drive a live display. With
a speed factor of 0 it behaves like a plain simpy.Environment.
"""

import time

import simpy


class RealtimeEnvironment(simpy.Environment):
    """
    SimPy environment synchronised with real time.

    Args:
        speed_factor (float): Simulated seconds per real second
            - 1.0 = real-time
            - 10.0 = ten times faster than real time
            - 0.0 = no pacing (as fast as possible)
    """

    def __init__(self, speed_factor: float = 1.0, initial_time: float = 0):
        if speed_factor < 0:
            raise ValueError("speed_factor cannot be negative")
        super().__init__(initial_time=initial_time)
        self.speed_factor = speed_factor
        self.real_start_time = time.monotonic()
        self.sim_start_time = self.now

    def step(self):
        """
        Process the next event, then sleep until the wall clock catches up
        with the simulation clock.
        """
        super().step()

        if self.speed_factor > 0:
            sim_elapsed = self.now - self.sim_start_time
            target_real_time = self.real_start_time + (sim_elapsed / self.speed_factor)
            sleep_time = target_real_time - time.monotonic()
            if sleep_time > 0:
                time.sleep(sleep_time)


def create_environment(realtime_factor: float = 0.0) -> simpy.Environment:
    """
    Build the clock for a run: a plain SimPy environment when no pacing is
    wanted, a RealtimeEnvironment otherwise.
    """
    if realtime_factor > 0:
        return RealtimeEnvironment(speed_factor=realtime_factor)
    return simpy.Environment()
