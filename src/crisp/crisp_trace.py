"""Crisp trace watcher implementations.

A trace watcher attached to an evaluator receives one message for every
step of the reduction loop, which is useful for watching tail calls and
partial applications unfold.
"""

from typing import List, Protocol


class CrispTraceWatcher(Protocol):
    """Protocol for Crisp trace watchers."""
    def on_trace(self, message: str) -> None:
        """
        Called when a trace message is emitted.

        Args:
            message: The trace message as a string (Crisp formatted)
        """


class CrispStdoutTraceWatcher:
    """Watcher that prints trace messages to stdout."""

    def on_trace(self, message: str) -> None:
        print(message)


class CrispBufferingTraceWatcher:
    """Watcher that buffers trace messages for programmatic access."""

    def __init__(self) -> None:
        """Initialize buffering trace watcher."""
        self.traces: List[str] = []

    def on_trace(self, message: str) -> None:
        """
        Buffer trace message.

        Args:
            message: The trace message as a string (Crisp formatted)
        """
        self.traces.append(message)

    def get_traces(self) -> List[str]:
        """
        Get all buffered traces.

        Returns:
            List of trace messages
        """
        return self.traces.copy()

    def clear(self) -> None:
        """Clear all buffered traces."""
        self.traces.clear()
