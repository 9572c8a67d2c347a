"""Background polling of the memory status line."""

import logging
import threading
from queue import Queue

from memline.models import StatusOutput
from memline.status import MemoryStatus

logger = logging.getLogger(__name__)


class StatusMonitor:
    """
    Periodically renders the memory status line.

    Runs in a separate daemon thread and pushes each ``StatusOutput`` to a
    thread-safe Queue.
    """

    def __init__(
        self,
        status: MemoryStatus,
        update_queue: Queue[StatusOutput],
        poll_rate: float = 5.0,
    ) -> None:
        """
        Initialize the StatusMonitor.

        Args:
            status: The memory status module to render.
            update_queue: Thread-safe queue to push updates to.
            poll_rate: How often to render (in seconds). Default 5.0s.
        """
        self._status = status
        self._queue = update_queue
        self._poll_rate = max(0.1, poll_rate)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    @poll_rate.setter
    def poll_rate(self, value: float) -> None:
        """Set the poll rate."""
        self._poll_rate = max(0.1, value)  # Minimum 0.1 seconds

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the monitoring thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            daemon=True,
            name="StatusMonitor",
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop the monitoring thread.

        Args:
            timeout: How long to wait for thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _poll_loop(self) -> None:
        """Main polling loop running in the background thread."""
        while not self._stop_event.is_set():
            try:
                self._queue.put(self._status.render())
            except Exception:
                logger.exception("Unexpected error while rendering memory status")

            # Wait for poll_rate seconds or until stop is requested
            self._stop_event.wait(timeout=self._poll_rate)
