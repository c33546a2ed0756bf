import json
import re
from datetime import datetime

import matplotlib.pyplot as plt
import numpy as np


class Statistics:
    """
    Listens to every broker publication as an independent "recorder".

    Records elevator trajectories, hall call assignments, dropped calls,
    serviced floors and how long hall buttons stayed lit, and collects all events in JSON Lines format for
    offline playback.
    """
    def __init__(self, env, broadcast_pipe):
        self.env = env
        self.broadcast_pipe = broadcast_pipe
        self.elevator_trajectories = {}  # {elevator_id: [(timestamp, floor), ...]}
        self.hall_calls = []  # Calls received by GCS
        self.assignments = []  # {'timestamp', 'floor', 'direction', 'elevator'}
        self.dropped_calls = []  # {'timestamp', 'floor', 'direction'}
        self.serviced_floors = []  # {'timestamp', 'floor', 'elevator'}
        self.button_wait_times = []  # seconds each hall button stayed lit

        self.event_log = []
        self.simulation_metadata = {}

    def _add_event_log(self, event_type, event_data):
        self.event_log.append({
            "time": self.env.now,
            "type": event_type,
            "data": event_data
        })

    def set_simulation_metadata(self, metadata):
        """
        Args:
            metadata (dict): Simulation configuration (floors, elevators, timings)
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    def start_listening(self):
        """
        Main process intercepting global broadcasts.
        """
        while True:
            data = yield self.broadcast_pipe.get()
            self.record(data.get('topic', ''), data.get('message', {}))

    def record(self, topic, message):
        status_match = re.fullmatch(r'elevator/(.*?)/status', topic)
        if status_match:
            elevator_id = message.get('elevator_id')
            trajectory = self.elevator_trajectories.setdefault(elevator_id, [])
            point = (message.get('timestamp'), message.get('current_floor'))

            # Only floor changes matter for the travel diagram
            if not trajectory or trajectory[-1][1] != point[1]:
                trajectory.append(point)
                self._add_event_log('elevator_status', message)
            return

        serviced_match = re.fullmatch(r'elevator/(.*?)/floor_serviced', topic)
        if serviced_match:
            self.serviced_floors.append({
                'timestamp': message.get('timestamp'),
                'floor': message.get('floor'),
                'elevator': message.get('elevator_id')
            })
            self._add_event_log('floor_serviced', message)
            return

        if re.fullmatch(r'hall_button/floor_(.*?)/call_off', topic):
            if message.get('wait_time') is not None:
                self.button_wait_times.append(message['wait_time'])
            self._add_event_log('hall_call_off', message)
            return

        if topic == 'gcs/hall_call':
            self.hall_calls.append(message)
            self._add_event_log('hall_call', message)
        elif topic == 'gcs/hall_call_assignment':
            self.assignments.append({
                'timestamp': message.get('timestamp'),
                'floor': message.get('floor'),
                'direction': message.get('direction'),
                'elevator': message.get('assigned_elevator')
            })
            self._add_event_log('hall_call_assignment', message)
        elif topic == 'gcs/hall_call_dropped':
            self.dropped_calls.append(message)
            self._add_event_log('hall_call_dropped', message)
        elif topic == 'log':
            self._add_event_log('log', message)

    def get_service_times(self):
        """
        Time from assignment until the assigned elevator finished dwelling
        at the call floor. Calls still pending are left out.
        """
        service_times = []
        for assignment in self.assignments:
            for serviced in self.serviced_floors:
                if (serviced['elevator'] == assignment['elevator']
                        and serviced['floor'] == assignment['floor']
                        and serviced['timestamp'] >= assignment['timestamp']):
                    service_times.append(serviced['timestamp'] - assignment['timestamp'])
                    break
        return service_times

    def get_floors_travelled(self):
        """{elevator_id: number of floors travelled}"""
        travelled = {}
        for elevator_id, trajectory in self.elevator_trajectories.items():
            floors = np.array([floor for _, floor in trajectory], dtype=float)
            travelled[elevator_id] = int(np.abs(np.diff(floors)).sum()) if floors.size > 1 else 0
        return travelled

    def summary(self):
        service_times = np.array(self.get_service_times(), dtype=float)
        button_waits = np.array(self.button_wait_times, dtype=float)
        result = {
            'calls_assigned': len(self.assignments),
            'calls_dropped': len(self.dropped_calls),
            'floors_serviced': len(self.serviced_floors),
            'floors_travelled': self.get_floors_travelled(),
            'service_time_count': int(service_times.size),
            'button_wait_count': int(button_waits.size),
        }
        if service_times.size:
            result.update({
                'service_time_mean': float(np.mean(service_times)),
                'service_time_max': float(np.max(service_times)),
                'service_time_p90': float(np.percentile(service_times, 90)),
            })
        if button_waits.size:
            result.update({
                'button_wait_mean': float(np.mean(button_waits)),
                'button_wait_max': float(np.max(button_waits)),
            })
        return result

    def print_summary(self):
        summary = self.summary()
        print("\n" + "=" * 60)
        print("   SIMULATION SUMMARY")
        print("=" * 60)
        print(f"Calls assigned:  {summary['calls_assigned']:>6}")
        print(f"Calls dropped:   {summary['calls_dropped']:>6}")
        print(f"Floors serviced: {summary['floors_serviced']:>6}")
        if summary['service_time_count']:
            print(f"\nService Time (assignment to end of dwell):")
            print(f"  Count:   {summary['service_time_count']:>6} calls")
            print(f"  Average: {summary['service_time_mean']:>6.2f} seconds")
            print(f"  90th %:  {summary['service_time_p90']:>6.2f} seconds")
            print(f"  Max:     {summary['service_time_max']:>6.2f} seconds")
        if summary['button_wait_count']:
            print(f"\nHall Button Wait (press to light off):")
            print(f"  Count:   {summary['button_wait_count']:>6} calls")
            print(f"  Average: {summary['button_wait_mean']:>6.2f} seconds")
            print(f"  Max:     {summary['button_wait_max']:>6.2f} seconds")
        print("\nFloors travelled:")
        for elevator_id, floors in sorted(summary['floors_travelled'].items()):
            print(f"  Elevator {elevator_id}: {floors}")
        print("=" * 60)

    def plot_trajectory_diagram(self, output_filename='elevator_trajectory_diagram.png', show=False):
        """
        Draw the travel diagram (floor against time per elevator) and save it.

        Assigned calls are marked with arrows, dropped calls with crosses.
        """
        fig, ax = plt.subplots(figsize=(14, 8))

        elevator_colors = ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd', '#8c564b']
        colors = {}
        for idx, elevator_id in enumerate(sorted(self.elevator_trajectories)):
            trajectory = self.elevator_trajectories[elevator_id]
            if not trajectory:
                continue
            # Extend the last floor to the end of the run
            times, floors = zip(*(trajectory + [(self.env.now, trajectory[-1][1])]))
            color = elevator_colors[idx % len(elevator_colors)]
            colors[elevator_id] = color
            ax.step(times, floors, where='post', label=f"Elevator {elevator_id}",
                    linewidth=2.5, color=color, alpha=0.8)

        for assignment in self.assignments:
            marker = '^' if assignment['direction'] == 'UP' else 'v'
            ax.scatter(assignment['timestamp'], assignment['floor'], marker=marker,
                       color=colors.get(assignment['elevator'], 'black'), s=80, zorder=5)

        for dropped in self.dropped_calls:
            ax.scatter(dropped['timestamp'], dropped['floor'], marker='x', color='black', s=80, zorder=5)

        ax.set_title("Elevator Trajectory Diagram (Travel Diagram)")
        ax.set_xlabel("Time (s)")
        ax.set_ylabel("Floor")
        ax.grid(True, which='both', linestyle='--', alpha=0.7)

        all_floors = [floor for trajectory in self.elevator_trajectories.values() for _, floor in trajectory]
        if all_floors:
            ax.set_yticks(range(int(min(all_floors)), int(max(all_floors)) + 2))
        if colors:
            ax.legend(loc='upper right', fontsize=10)

        fig.savefig(output_filename, dpi=150, bbox_inches='tight')
        print(f"Trajectory diagram saved to: {output_filename}")

        if show:
            plt.show()
        plt.close(fig)
        return output_filename

    def save_event_log(self, filename='simulation_log.jsonl'):
        """
        Save the event log to a JSON Lines file, metadata first.
        """
        with open(filename, 'w', encoding='utf-8') as f:
            if self.simulation_metadata:
                f.write(json.dumps({
                    "type": "metadata",
                    "data": self.simulation_metadata
                }) + '\n')

            for event in self.event_log:
                f.write(json.dumps(event, ensure_ascii=False) + '\n')

        print(f"Event log saved: {len(self.event_log)} events written to {filename}")
        return filename
