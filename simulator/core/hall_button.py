import simpy

from .direction import Direction
from ..infrastructure.message_broker import MessageBroker


class HallButton:
    """
    Hall call button on one floor for one direction.

    Pressing an unlit button lights it and posts a call to the group
    control system; pressing a lit button does nothing.
    """
    CALL_TOPIC = "gcs/hall_call"

    def __init__(self, env: simpy.Environment, floor: int, direction: Direction, broker: MessageBroker):
        """
        Args:
            env (simpy.Environment): SimPy environment
            floor (int): Floor where the button is installed
            direction (Direction): Direction the button requests
            broker (MessageBroker): Message broker that carries the call
        """
        self.env = env
        self.floor = floor
        self.direction = Direction.parse(direction)
        self.broker = broker
        self.is_pressed = False
        self.pressed_at = None

    def is_lit(self):
        return self.is_pressed

    def press(self):
        """
        Returns:
            True if this press registered a new call, False if already lit
        """
        if self.is_pressed:
            return False

        self.is_pressed = True
        self.pressed_at = self.env.now
        self.broker.put(self.CALL_TOPIC, {
            'timestamp': self.env.now,
            'floor': self.floor,
            'direction': self.direction.value,
        })
        return True

    def serve(self):
        """
        Turn the light off; the button can be pressed again.

        The call_off message carries how long the button was lit.
        """
        if self.is_pressed:
            wait_time = self.env.now - self.pressed_at
            self.is_pressed = False
            self.pressed_at = None
            self.broker.put(f"hall_button/floor_{self.floor}/call_off", {
                'timestamp': self.env.now,
                'floor': self.floor,
                'direction': self.direction.value,
                'wait_time': wait_time,
            })


def create_hall_buttons(env: simpy.Environment, total_floors: int, broker: MessageBroker) -> dict:
    """
    Buttons for every floor: UP everywhere but the top floor, DOWN
    everywhere but the bottom floor. A single-floor building gets one UP
    button.

    Returns:
        {(floor, Direction): HallButton}
    """
    buttons = {}
    for floor in range(1, total_floors + 1):
        if floor < total_floors or total_floors == 1:
            buttons[(floor, Direction.UP)] = HallButton(env, floor, Direction.UP, broker)
        if floor > 1:
            buttons[(floor, Direction.DOWN)] = HallButton(env, floor, Direction.DOWN, broker)
    return buttons
