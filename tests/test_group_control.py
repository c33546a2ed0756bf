"""
Dispatch tests

Covers nearest-car scoring, assignment side effects, dropped calls,
call validation and the broker-driven hall call process.
"""

import pytest

from controller.algorithms.nearest_car import NearestCarStrategy
from controller.group_control import GroupControlSystem, InvalidCallError
from simulator.core.direction import Direction
from simulator.core.fleet import Fleet
from simulator.core.hall_button import create_hall_buttons


def make_fleet(env, count=2, total_floors=10, travel=1.0, stop=1.0, log=None, broker=None):
    return Fleet(env, total_floors=total_floors, total_elevators=count,
                 floor_travel_time=travel, stop_duration=stop, log=log, broker=broker)


def make_gcs(fleet, log=None, broker=None):
    return GroupControlSystem("GCS", fleet, NearestCarStrategy(), broker=broker, log=log)


def place(elevator, floor, busy=False, direction=None, queue=()):
    elevator.current_floor = floor
    elevator.busy = busy
    elevator.direction = direction
    elevator.queue = list(queue)


# --- Strategy scoring ---

def test_nearest_idle_elevator_wins(env):
    fleet = make_fleet(env)
    place(fleet[0], 3)
    place(fleet[1], 7)

    assert NearestCarStrategy().select_elevator(5, Direction.UP, fleet.elevators) is fleet[0]


def test_tie_goes_to_first_elevator(env):
    fleet = make_fleet(env, count=3)
    place(fleet[0], 9)
    place(fleet[1], 3)
    place(fleet[2], 7)

    assert NearestCarStrategy().select_elevator(5, Direction.UP, fleet.elevators) is fleet[1]


def test_busy_elevator_going_other_way_is_never_chosen(env):
    fleet = make_fleet(env)
    place(fleet[0], 6, busy=True, direction=Direction.DOWN, queue=[1])
    place(fleet[1], 10)

    assert NearestCarStrategy().select_elevator(7, Direction.UP, fleet.elevators) is fleet[1]


def test_not_idle_but_not_busy_elevator_is_not_a_candidate(env):
    fleet = make_fleet(env, count=1)
    place(fleet[0], 5, queue=[8])

    assert NearestCarStrategy().select_elevator(5, Direction.UP, fleet.elevators) is None


# --- Assignment ---

def test_assignment_queues_floor_and_starts_idle_elevator(env, event_log):
    fleet = make_fleet(env, log=event_log)
    place(fleet[0], 3)
    place(fleet[1], 7)
    gcs = make_gcs(fleet, log=event_log)

    chosen = gcs.assign_elevator(5, Direction.UP, fleet.elevators)

    assert chosen is fleet[0]
    assert fleet[0].queue == [5]
    assert fleet[0].busy is True
    assert fleet[1].queue == []
    assert fleet[1].is_idle()

    env.run()
    assert fleet[0].current_floor == 5
    assert fleet[0].is_idle()


def test_busy_elevator_on_the_way_takes_call_without_restart(env, event_log):
    fleet = make_fleet(env, log=event_log)
    place(fleet[0], 3)
    place(fleet[1], 7, busy=True, direction=Direction.UP, queue=[10])
    gcs = make_gcs(fleet, log=event_log)

    def fail_start():
        pytest.fail("start_moving must not be called on a busy elevator")

    fleet[1].start_moving = fail_start

    chosen = gcs.assign_elevator(8, Direction.UP, fleet.elevators)

    assert chosen is fleet[1]
    assert fleet[1].queue == [10, 8]
    assert fleet[0].queue == []


def test_busy_elevator_going_down_takes_call_strictly_below(env, event_log):
    fleet = make_fleet(env, log=event_log)
    place(fleet[0], 1)
    place(fleet[1], 6, busy=True, direction=Direction.DOWN, queue=[1])
    gcs = make_gcs(fleet, log=event_log)

    def fail_start():
        pytest.fail("start_moving must not be called on a busy elevator")

    fleet[1].start_moving = fail_start

    chosen = gcs.assign_elevator(4, Direction.DOWN, fleet.elevators)

    assert chosen is fleet[1]
    assert fleet[1].queue == [1, 4]
    assert fleet[0].queue == []


def test_busy_elevator_going_down_at_call_floor_is_not_on_the_way(env, event_log):
    fleet = make_fleet(env, count=1, log=event_log)
    place(fleet[0], 6, busy=True, direction=Direction.DOWN, queue=[2])
    gcs = make_gcs(fleet, log=event_log)

    assert gcs.assign_elevator(6, Direction.DOWN, fleet.elevators) is None
    assert fleet[0].queue == [2]


def test_call_behind_busy_elevator_is_dropped(env, event_log):
    fleet = make_fleet(env, count=1, log=event_log)
    place(fleet[0], 7, busy=True, direction=Direction.UP, queue=[9])
    gcs = make_gcs(fleet, log=event_log)

    chosen = gcs.assign_elevator(5, Direction.UP, fleet.elevators)

    assert chosen is None
    assert fleet[0].queue == [9]
    fleet_entries = event_log.for_elevator(None)
    assert "No suitable elevator for floor 5 going Up. Call dropped." == fleet_entries[0].message


def test_busy_elevator_at_call_floor_is_not_on_the_way(env, event_log):
    # A moving car standing exactly at the call floor does not take the
    # call, even though its own sweep would serve that floor.
    fleet = make_fleet(env, count=1, log=event_log)
    place(fleet[0], 5, busy=True, direction=Direction.UP, queue=[9])
    gcs = make_gcs(fleet, log=event_log)

    assert gcs.assign_elevator(5, Direction.UP, fleet.elevators) is None


def test_duplicate_call_is_absorbed(env, event_log):
    fleet = make_fleet(env, count=1, log=event_log)
    place(fleet[0], 1)
    gcs = make_gcs(fleet, log=event_log)

    gcs.assign_elevator(6, Direction.UP, fleet.elevators)
    gcs.assign_elevator(6, Direction.UP, fleet.elevators)

    assert fleet[0].queue == [6]


def test_assignment_and_drop_are_published(env, broker, event_log):
    fleet = make_fleet(env, count=1, log=event_log)
    place(fleet[0], 4)
    gcs = make_gcs(fleet, log=event_log, broker=broker)

    gcs.assign_elevator(6, Direction.UP, fleet.elevators)
    gcs.assign_elevator(2, Direction.UP, fleet.elevators)

    assignments = broker.get_pipe(GroupControlSystem.ASSIGNMENT_TOPIC).items
    dropped = broker.get_pipe(GroupControlSystem.DROPPED_TOPIC).items
    assert [(a['floor'], a['assigned_elevator']) for a in assignments] == [(6, 1)]
    assert [(d['floor'], d['direction']) for d in dropped] == [(2, 'UP')]


def test_published_timestamps_follow_the_simulation_clock(env, broker, event_log):
    fleet = make_fleet(env, count=1, log=event_log, broker=broker)
    gcs = make_gcs(fleet, log=event_log, broker=broker)

    env.run(until=3.5)
    gcs.assign_elevator(6, Direction.UP, fleet.elevators)

    assignment = broker.get_pipe(GroupControlSystem.ASSIGNMENT_TOPIC).items[-1]
    assert assignment["timestamp"] == broker.get_current_time() == 3.5


# --- Call intake ---

@pytest.mark.parametrize("floor", [0, 11, -3])
def test_out_of_range_floor_is_rejected(env, event_log, floor):
    fleet = make_fleet(env, log=event_log)
    gcs = make_gcs(fleet, log=event_log)

    with pytest.raises(InvalidCallError):
        gcs.submit_call(floor, Direction.UP)
    assert all(elevator.is_idle() for elevator in fleet)


def test_unknown_direction_is_rejected(env, event_log):
    gcs = make_gcs(make_fleet(env, log=event_log), log=event_log)

    with pytest.raises(InvalidCallError):
        gcs.submit_call(3, "sideways")


def test_submit_call_accepts_direction_strings(env, event_log):
    fleet = make_fleet(env, log=event_log)
    gcs = make_gcs(fleet, log=event_log)

    assert gcs.submit_call(10, "down") is fleet[0]
    assert fleet[0].queue == [10]


def test_hall_button_press_is_dispatched_and_turned_off_on_arrival(env, broker, event_log):
    fleet = make_fleet(env, count=1, log=event_log, broker=broker)
    gcs = make_gcs(fleet, log=event_log, broker=broker)
    buttons = create_hall_buttons(env, fleet.total_floors, broker)
    gcs.register_hall_buttons(buttons)
    env.process(gcs.run())
    env.process(gcs.start_service_listener(fleet[0]))

    button = buttons[(3, Direction.UP)]
    assert button.press() is True
    assert button.press() is False

    # 1 -> 3 takes 2.0, then 1.0 of dwell
    env.run(until=2.5)
    assert fleet[0].current_floor == 3
    assert button.is_lit()

    env.run(until=3.5)
    assert not button.is_lit()
    assert fleet[0].is_idle()


def test_dropped_hall_call_turns_button_off(env, broker, event_log):
    fleet = make_fleet(env, count=1, log=event_log, broker=broker)
    place(fleet[0], 7, busy=True, direction=Direction.UP, queue=[9])
    gcs = make_gcs(fleet, log=event_log, broker=broker)
    buttons = create_hall_buttons(env, fleet.total_floors, broker)
    gcs.register_hall_buttons(buttons)
    env.process(gcs.run())

    buttons[(5, Direction.UP)].press()
    env.run(until=0.5)

    assert not buttons[(5, Direction.UP)].is_lit()
    assert fleet[0].queue == [9]


def test_run_requires_broker(env, event_log):
    gcs = make_gcs(make_fleet(env, log=event_log), log=event_log)

    with pytest.raises(RuntimeError):
        next(gcs.run())


def test_button_turns_off_when_first_of_several_assigned_cars_arrives(env, broker, event_log):
    fleet = make_fleet(env, log=event_log, broker=broker)
    place(fleet[0], 3)
    place(fleet[1], 10)
    gcs = make_gcs(fleet, log=event_log, broker=broker)
    buttons = create_hall_buttons(env, fleet.total_floors, broker)
    gcs.register_hall_buttons(buttons)
    env.process(gcs.run())
    for elevator in fleet:
        env.process(gcs.start_service_listener(elevator))

    button = buttons[(5, Direction.UP)]
    button.press()

    # Car 1 reaches 5 at 2.0 and dwells until 3.0
    env.run(until=2.5)
    assert fleet[0].loading

    # Resubmitted while car 1 dwells, so car 2 is given the same call
    assert gcs.submit_call(5, Direction.UP) is fleet[1]
    assert gcs.pending_calls[(5, Direction.UP)] == {1, 2}

    env.run(until=3.5)
    assert not button.is_lit()
    assert (5, Direction.UP) not in gcs.pending_calls
    assert 5 in fleet[1].queue
