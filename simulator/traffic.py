"""
Hall call traffic generators

SimPy processes that press hall buttons over simulated time, either
from a fixed script or at random.
"""

import random
from typing import Dict, Iterable, Optional, Tuple

import simpy

from .core.direction import Direction
from .core.hall_button import HallButton

HallButtons = Dict[Tuple[int, Direction], HallButton]


def scripted_call_generator(env: simpy.Environment, hall_buttons: HallButtons,
                            calls: Iterable[dict]):
    """
    Press the button for each scripted call at its time.

    Args:
        calls: Dicts with 'floor', 'direction' and optional 'time' (default 0)
    """
    for call in sorted(calls, key=lambda c: c.get('time', 0.0)):
        delay = call.get('time', 0.0) - env.now
        if delay > 0:
            yield env.timeout(delay)

        key = (call['floor'], Direction.parse(call['direction']))
        button = hall_buttons.get(key)
        if button is None:
            print(f"{env.now:.2f} [Traffic] No hall button for floor {key[0]} {key[1].value}, call skipped")
            continue
        button.press()


def random_call_generator(env: simpy.Environment, hall_buttons: HallButtons,
                          call_rate: float, rng: Optional[random.Random] = None):
    """
    Press a random hall button with exponentially distributed gaps.

    Args:
        call_rate: Mean calls per unit of simulated time; 0 generates nothing
        rng: Random source (seed it for reproducible runs)
    """
    if call_rate <= 0 or not hall_buttons:
        return

    rng = rng or random.Random()
    keys = sorted(hall_buttons.keys(), key=lambda key: (key[0], key[1].value))

    while True:
        yield env.timeout(rng.expovariate(call_rate))
        hall_buttons[rng.choice(keys)].press()
