"""Registry of structured logging event identifiers."""

from __future__ import annotations

from enum import Enum, auto

__all__ = ["LogEvents"]


class LogEvents(str, Enum):
    """Dotted event names emitted by the client and the CLI.

    Members declared with :func:`enum.auto` derive their value from the member
    name: ``HTTP_REQUEST_RETRY`` becomes ``"http.request.retry"``.
    """

    @staticmethod
    def _generate_next_value_(name: str, start: int, count: int, _last_values: list[str]) -> str:
        parts = name.lower().split("_")
        namespace = parts[0] if parts else "event"
        suffix = parts[-1] if len(parts) > 1 else "event"
        action_parts = parts[1:-1] if len(parts) > 2 else ["event"]
        return ".".join((namespace, ".".join(action_parts), suffix))

    def __str__(self) -> str:
        return str(self.value)

    HTTP_REQUEST_RETRY = auto()
    HTTP_REQUEST_EXCEPTION = auto()
    HTTP_REQUEST_FAILED = auto()
    HTTP_REQUEST_COMPLETED = auto()
    HTTP_DEADLINE_EXCEEDED = auto()
    HTTP_RESPONSE_DECODE_FAILED = auto()
    CLIENT_HANDLE_CREATED = auto()
    CLIENT_HANDLE_CLOSED = auto()
    CLI_COMMAND_FAILED = auto()
