"""
=============================================================================
REQUEST STATISTICS
=============================================================================

Counts page requests and their durations for status reporting.

    stats = RequestStatistics()

    ticket = stats.request_started()
    ...invoke procedure, render page...
    stats.request_completed(ticket)

    stats.snapshot()
    # {"startup": "2026-10-19 17:30:00", "running": "5m",
    #  "requestStartedCount": "12", "requestCompletedCount": "11",
    #  "activeRequestCount": "1", "averageRequestTime": "42ms"}

Worker threads record requests concurrently, so every counter update
happens under one lock.

=============================================================================
"""

import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Dict


@dataclass(frozen=True)
class RequestTicket:
    """Handed out by request_started(), returned to request_completed()."""

    id: int
    start: float  # time.monotonic() at start


# Largest unit first; (suffix, milliseconds)
_DURATION_UNITS = (
    ("d", 24 * 60 * 60 * 1000),
    ("h", 60 * 60 * 1000),
    ("m", 60 * 1000),
    ("s", 1000),
)


def format_duration(ms: float) -> str:
    """
    Format a duration in milliseconds in the largest whole unit.

    Examples:
        format_duration(250)        # "250ms"
        format_duration(3000)       # "3s"
        format_duration(90000)      # "2m"
        format_duration(7200000)    # "2h"
    """
    ms = abs(ms)
    for suffix, size in _DURATION_UNITS:
        if ms >= size:
            return f"{int(ms / size + 0.5)}{suffix}"
    return f"{int(ms + 0.5)}ms"


class RequestStatistics:
    """
    Thread-safe request counters.

    Attributes:
        startup: When the gateway started (local time).
        started_count: Requests begun.
        completed_count: Requests finished.
        total_duration_ms: Sum of durations of finished requests.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._next_id = 0
        self.started_count = 0
        self.completed_count = 0
        self.total_duration_ms = 0.0
        self.set_startup()

    def set_startup(self) -> None:
        """Mark the current moment as the gateway start time."""
        with self._lock:
            self.startup = datetime.now()
            self._startup_monotonic = time.monotonic()

    def request_started(self) -> RequestTicket:
        """Count a new request and return its ticket."""
        with self._lock:
            self.started_count += 1
            self._next_id += 1
            return RequestTicket(id=self._next_id, start=time.monotonic())

    def request_completed(self, ticket: RequestTicket) -> float:
        """
        Count a finished request.

        Returns:
            The request duration in milliseconds.
        """
        duration_ms = (time.monotonic() - ticket.start) * 1000
        with self._lock:
            self.completed_count += 1
            self.total_duration_ms += duration_ms
        return duration_ms

    @property
    def active_count(self) -> int:
        """Requests started but not yet completed."""
        with self._lock:
            return self.started_count - self.completed_count

    def snapshot(self) -> Dict[str, str]:
        """
        Current values formatted for display.

        Counts are strings; a value that does not exist yet (no request
        completed, for example) is an empty string.
        """
        with self._lock:
            started = self.started_count
            completed = self.completed_count
            total = self.total_duration_ms
            running_ms = (time.monotonic() - self._startup_monotonic) * 1000
            startup = self.startup

        return {
            "startup": startup.strftime("%Y-%m-%d %H:%M:%S"),
            "running": format_duration(running_ms),
            "requestStartedCount": str(started) if started else "",
            "requestCompletedCount": str(completed) if completed else "",
            "activeRequestCount": str(started - completed) if started else "",
            "averageRequestTime": format_duration(total / completed) if completed else "",
        }
