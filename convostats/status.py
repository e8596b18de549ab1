"""
Progress/Status Channel.

Ordered, non-blocking stream of status events from a run to its caller.
"""

import logging
import queue
import threading
from typing import Callable, Iterator, List, Optional

from convostats.models.status import RunState, StatusEvent

logger = logging.getLogger(__name__)

StatusListener = Callable[[StatusEvent], None]


class StatusChannel:
    """
    Carries StatusEvents from the pipeline to the caller.

    publish() never blocks. Callers either iterate events() or register
    listeners with subscribe(); listeners run on the publishing thread in
    publish order, before the event is queued for events().
    """

    def __init__(self):
        self._queue: "queue.Queue[StatusEvent]" = queue.Queue()
        self._listeners: List[StatusListener] = []
        self._history: List[StatusEvent] = []
        self._lock = threading.Lock()
        self._closed = threading.Event()

    def subscribe(self, listener: StatusListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def publish(self, state: RunState, message: str) -> StatusEvent:
        """
        Emit one event.

        Raises:
            RuntimeError: If the channel already carried a terminal event
        """
        event = StatusEvent(state=state, message=message)
        with self._lock:
            if self._closed.is_set():
                raise RuntimeError("Status channel is closed")
            self._history.append(event)
            listeners = list(self._listeners)
            if event.terminal:
                self._closed.set()

        logger.debug(f"[{state.value}] {message}")
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.warning(f"Status listener failed: {e}")

        # Listeners see the event before events() consumers do
        self._queue.put_nowait(event)
        return event

    def events(self, timeout: Optional[float] = None) -> Iterator[StatusEvent]:
        """
        Yield events in publish order until the terminal one.

        Args:
            timeout: Seconds to wait for each event (None waits forever)

        Raises:
            queue.Empty: If no event arrives within timeout
        """
        while True:
            event = self._queue.get(timeout=timeout)
            yield event
            if event.terminal:
                return

    @property
    def history(self) -> List[StatusEvent]:
        with self._lock:
            return list(self._history)

    @property
    def latest(self) -> Optional[StatusEvent]:
        with self._lock:
            return self._history[-1] if self._history else None

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def wait_closed(self, timeout: Optional[float] = None) -> bool:
        return self._closed.wait(timeout)
