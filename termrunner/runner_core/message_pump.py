"""
Message Pump
============

Timer threads and a single serialized inbox that feed the engine.

The pump stands in for the host runtime's scheduler: one thread emits Tick
at the frame rate, another emits Spawn at a fixed interval, and the host
sends KeyPress messages into the same queue. Exactly one consumer drains
the inbox, so engine state is never mutated concurrently.

Example:
    pump = MessagePump(fps=30, spawn_interval=4.0)
    pump.start()
    for message in pump.messages():
        if game.update(message) is not None:
            break
    pump.stop()
"""

from __future__ import annotations

import queue
import threading
from typing import Iterator, List, Optional

from termrunner.runner_core.messages import Message, Quit, Spawn, Tick


class MessagePump:
    """
    Delivers timer and input messages in arrival order.

    Timers never block on the consumer: a slow tick just lets messages
    queue up.
    """

    def __init__(
        self,
        fps: int = 30,
        spawn_interval: float = 4.0,
        spawn_immediately: bool = True
    ):
        """
        Initialize pump.

        Args:
            fps: Tick messages per second.
            spawn_interval: Seconds between Spawn messages.
            spawn_immediately: Send the first Spawn on start instead of
                after one interval.
        """
        if fps <= 0 or spawn_interval <= 0:
            raise ValueError("fps and spawn_interval must be positive")

        self._tick_interval = 1.0 / fps
        self._spawn_interval = spawn_interval
        self._spawn_immediately = spawn_immediately

        self._inbox: queue.Queue = queue.Queue()
        self._stopped = threading.Event()
        self._threads: List[threading.Thread] = []

    @property
    def running(self) -> bool:
        return bool(self._threads) and not self._stopped.is_set()

    def start(self) -> None:
        """Start the timer threads (non-blocking)."""
        if self._threads:
            return

        if self._stopped.is_set():
            self._drain()
        self._stopped.clear()
        self._threads = [
            threading.Thread(
                target=self._run_timer,
                args=(Tick(), self._tick_interval, False),
                name="tick-timer",
                daemon=True
            ),
            threading.Thread(
                target=self._run_timer,
                args=(Spawn(), self._spawn_interval, self._spawn_immediately),
                name="spawn-timer",
                daemon=True
            ),
        ]
        for thread in self._threads:
            thread.start()

    def stop(self) -> None:
        """Stop the timers and wake any blocked consumer. Idempotent."""
        if self._stopped.is_set():
            return

        self._stopped.set()
        for thread in self._threads:
            thread.join(timeout=2.0)
        self._threads = []
        self._inbox.put(Quit())

    def send(self, message: Message) -> None:
        """Enqueue a message from any thread."""
        self._inbox.put(message)

    def get(self, timeout: Optional[float] = None) -> Optional[Message]:
        """
        Take the next message.

        Args:
            timeout: Seconds to wait. None blocks until a message arrives.

        Returns:
            The message, or None if the timeout expired.
        """
        try:
            return self._inbox.get(timeout=timeout)
        except queue.Empty:
            return None

    def messages(self) -> Iterator[Message]:
        """Yield messages in delivery order until a Quit is taken."""
        while True:
            message = self._inbox.get()
            yield message
            if isinstance(message, Quit):
                return

    def _drain(self) -> None:
        """Discard messages left over from a previous run."""
        while True:
            try:
                self._inbox.get_nowait()
            except queue.Empty:
                return

    def _run_timer(self, message: Message, interval: float, fire_first: bool) -> None:
        """Timer loop (runs in background thread)."""
        if fire_first:
            self._inbox.put(message)
        # Event.wait returns True once stop() is called
        while not self._stopped.wait(interval):
            self._inbox.put(message)
