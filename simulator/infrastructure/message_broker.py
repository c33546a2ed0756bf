import simpy


class MessageBroker:
    """
    Topic-based publish-subscribe between simulation components.

    Each topic is backed by an unbounded simpy.Store, so publishing never
    blocks. Every message is also copied to a broadcast pipe that
    recorders (see analyzer.Statistics) read to observe the whole system.

    Topics in use:
        gcs/hall_call               hall call intake
        gcs/hall_call_assignment    call assigned to an elevator
        gcs/hall_call_dropped       call with no suitable elevator
        elevator/<id>/status        elevator snapshot after each change
        elevator/<id>/floor_serviced  dwell finished at a floor
        log                         event log entries
    """
    def __init__(self, env: simpy.Environment, verbose: bool = False):
        """
        Args:
            env: SimPy environment
            verbose: Print every publication (debugging aid)
        """
        self.env = env
        self.verbose = verbose
        self.topics = {}
        self.broadcast_pipe = simpy.Store(self.env)

    def get_pipe(self, topic: str) -> simpy.Store:
        """Get or create the Store for a topic"""
        if topic not in self.topics:
            self.topics[topic] = simpy.Store(self.env)
        return self.topics[topic]

    def put(self, topic: str, message):
        """Publish a message to a topic (and to the broadcast pipe)"""
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")
        pipe = self.get_pipe(topic)
        self.broadcast_pipe.put({'topic': topic, 'message': message})
        return pipe.put(message)

    def get(self, topic: str):
        """Event that fires with the next message on a topic"""
        return self.get_pipe(topic).get()

    def get_broadcast_pipe(self) -> simpy.Store:
        return self.broadcast_pipe

    def get_current_time(self) -> float:
        """
        Current simulation time, so controllers can timestamp messages
        without holding the SimPy environment themselves.
        """
        return self.env.now
