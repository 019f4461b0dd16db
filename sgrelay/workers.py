"""Base class for a worker that runs its body on a background thread."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod


class ThreadBase(ABC):
    """Starts :meth:`execute` on a thread; :meth:`stop` asks it to finish.

    Subclasses implement :meth:`execute` and poll :attr:`terminated`, sleeping
    :attr:`polling_time` milliseconds between rounds.
    """

    def __init__(self, polling_time_ms: int = 20) -> None:
        self.lock = threading.Lock()
        self._terminated = False
        self._running = False
        self._thread: threading.Thread | None = None
        self.polling_time = 0
        self.set_polling_time(polling_time_ms)

    @property
    def terminated(self) -> bool:
        """Whether the worker has been asked to stop."""
        return self._terminated

    @property
    def running(self) -> bool:
        """Whether the worker has been started and not stopped."""
        return self._running

    def set_polling_time(self, time_ms: int) -> None:
        """Set the pause between polling rounds, in milliseconds."""
        if time_ms < 0:
            raise ValueError("polling time must not be negative")
        self.polling_time = time_ms

    def start(self) -> None:
        """Start the worker thread unless it is already running."""
        with self.lock:
            self._terminated = False
            if self._running:
                return
            self._running = True
            self._thread = threading.Thread(target=self.execute, daemon=True)
            self._thread.start()

    def stop(self) -> None:
        """Ask the worker to finish."""
        with self.lock:
            self._terminated = True
            self._running = False

    def wait_for_completion(self) -> None:
        """Block until the worker thread has finished."""
        with self.lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    @abstractmethod
    def execute(self) -> None:
        """Body of the worker thread."""