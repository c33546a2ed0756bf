import random
import sys
from pathlib import Path

# Configuration
from config import load_group_control_config, load_simulation_config

# Simulator components
from simulator.core.fleet import Fleet
from simulator.core.hall_button import create_hall_buttons
from simulator.infrastructure.event_log import EventLog
from simulator.infrastructure.message_broker import MessageBroker
from simulator.infrastructure.realtime_env import create_environment
from simulator.traffic import random_call_generator, scripted_call_generator

# Controller and allocation strategy
from controller.group_control import GroupControlSystem
from controller.algorithms import create_allocation_strategy

# Analyzer
from analyzer.statistics import Statistics

SCENARIO_DIR = Path(__file__).parent / "scenarios"
DEFAULT_SIM_CONFIG = SCENARIO_DIR / "simulation" / "default.yaml"
DEFAULT_GC_CONFIG = SCENARIO_DIR / "group_control" / "nearest_car.yaml"


def run_simulation(sim_config_path=DEFAULT_SIM_CONFIG, gc_config_path=DEFAULT_GC_CONFIG,
                   plot_path=None, event_log_path=None, echo_log=True):
    """
    Set up and run the entire simulation

    Args:
        sim_config_path: Path to simulation configuration YAML file
        gc_config_path: Path to group control configuration YAML file
        plot_path: Save the trajectory diagram here when given
        event_log_path: Save the JSON Lines event log here when given
        echo_log: Print log entries as they happen

    Returns:
        Statistics recorder holding the results of the run
    """
    print("--- Loading Configuration ---")

    sim_config = load_simulation_config(sim_config_path)
    gc_config = load_group_control_config(gc_config_path)

    print(f"Simulation Config: {sim_config_path}")
    print(f"Group Control Config: {gc_config_path}")

    rng = random.Random(sim_config.random_seed)
    if sim_config.random_seed is not None:
        print(f"Random seed fixed to {sim_config.random_seed} for reproducible results")

    print("\n--- Simulation Setup ---")
    env = create_environment(sim_config.realtime_factor)
    broker = MessageBroker(env)
    event_log = EventLog(env, broker=broker, echo=echo_log)

    stats = Statistics(env, broker.get_broadcast_pipe())
    stats.set_simulation_metadata(sim_config.to_dict())
    env.process(stats.start_listening())

    fleet = Fleet.from_config(env, sim_config, log=event_log, broker=broker)
    strategy = create_allocation_strategy(gc_config.allocation_strategy)
    gcs = GroupControlSystem("GCS", fleet, strategy, broker=broker, log=event_log)

    hall_buttons = create_hall_buttons(env, sim_config.building.total_floors, broker)
    gcs.register_hall_buttons(hall_buttons)

    print(f"Building: {sim_config.building.total_floors} floors, {len(fleet)} elevators "
          f"(travel {sim_config.elevator.floor_travel_time}s/floor, stop {sim_config.elevator.stop_duration}s)")

    env.process(gcs.run())
    for elevator in fleet:
        env.process(gcs.start_service_listener(elevator))

    traffic = sim_config.traffic
    if traffic.pattern == "scripted":
        env.process(scripted_call_generator(env, hall_buttons, traffic.calls))
    else:
        env.process(random_call_generator(env, hall_buttons, traffic.call_rate, rng))

    print("\n--- Simulation Start ---")
    env.run(until=traffic.simulation_duration)
    print("--- Simulation End ---")

    stats.print_summary()
    if plot_path:
        stats.plot_trajectory_diagram(plot_path)
    if event_log_path:
        stats.save_event_log(event_log_path)

    return stats


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    sim_config_path = argv[0] if len(argv) > 0 else DEFAULT_SIM_CONFIG
    gc_config_path = argv[1] if len(argv) > 1 else DEFAULT_GC_CONFIG
    run_simulation(sim_config_path, gc_config_path,
                   plot_path='elevator_trajectory_diagram.png',
                   event_log_path='simulation_log.jsonl')
    return 0


if __name__ == '__main__':
    sys.exit(main())
