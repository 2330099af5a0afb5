"""
Append-only diagnostic trace of wallet operations.

Entries are kept in emission order and read back most recent first, the
order the debugger displays them in. Payloads are stored as given and only
serialized when an entry is rendered, so reporting an odd object (a
circular structure, an exception, a connector handle) can never make the
reporting operation fail.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple


CONSOLE_LOGGER = "wallet_debugger.console"

logger = logging.getLogger(CONSOLE_LOGGER)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


def _json_default(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, BaseException):
        return _describe_exception(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return repr(value)


def _describe_exception(exc: BaseException) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


def render_payload(payload: Any) -> Optional[str]:
    """Render a payload for display; never raises."""
    if payload is None:
        return None
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (bool, int, float)):
        return str(payload)
    if isinstance(payload, BaseException):
        return _describe_exception(payload)
    try:
        return json.dumps(payload, indent=2, default=_json_default)
    except (TypeError, ValueError, RecursionError):
        pass
    try:
        return repr(payload)
    except Exception:
        return f"<unrenderable {type(payload).__name__}>"


class _DeferredPayload:
    """Renders the payload only when the console handler formats the record."""

    __slots__ = ("payload",)

    def __init__(self, payload: Any):
        self.payload = payload

    def __str__(self) -> str:
        return render_payload(self.payload) or ""


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    severity: Severity
    message: str
    payload: Any = None
    sequence: int = 0

    @property
    def has_payload(self) -> bool:
        return self.payload is not None

    def render(self) -> str:
        line = f"[{self.timestamp.astimezone().strftime('%H:%M:%S')}] {self.message}"
        rendered = render_payload(self.payload)
        if rendered:
            return f"{line}\n{rendered}"
        return line


@dataclass
class DiagnosticLog:
    """Ordered record of operation outcomes.

    ``entries()`` is most recent first; ``chronological()`` is oldest first.
    """

    clock: Clock = utc_now
    mirror: bool = True
    _entries: List[LogEntry] = field(default_factory=list, repr=False)
    _sequence: int = field(default=0, repr=False)
    _last_timestamp: Optional[datetime] = field(default=None, repr=False)

    def append(self, severity: Severity, message: str, payload: Any = None) -> LogEntry:
        severity = Severity(severity)
        timestamp = self._next_timestamp()
        self._sequence += 1
        entry = LogEntry(
            timestamp=timestamp,
            severity=severity,
            message=message,
            payload=payload,
            sequence=self._sequence,
        )
        self._entries.append(entry)
        if self.mirror:
            self._mirror(entry)
        return entry

    def info(self, message: str, payload: Any = None) -> LogEntry:
        return self.append(Severity.INFO, message, payload)

    def success(self, message: str, payload: Any = None) -> LogEntry:
        return self.append(Severity.SUCCESS, message, payload)

    def error(self, message: str, payload: Any = None) -> LogEntry:
        return self.append(Severity.ERROR, message, payload)

    def clear(self) -> None:
        self._entries = []
        self.info("Logs cleared")

    def entries(self) -> Tuple[LogEntry, ...]:
        return tuple(reversed(self._entries))

    def chronological(self) -> Tuple[LogEntry, ...]:
        return tuple(self._entries)

    def count(self, severity: Optional[Severity] = None) -> int:
        if severity is None:
            return len(self._entries)
        return sum(1 for entry in self._entries if entry.severity == severity)

    def __len__(self) -> int:
        return len(self._entries)

    def _next_timestamp(self) -> datetime:
        try:
            now = self.clock()
        except Exception:
            now = utc_now()
        # Wall-clock can step backwards; entries must not
        if self._last_timestamp is not None and now < self._last_timestamp:
            now = self._last_timestamp
        self._last_timestamp = now
        return now

    def _mirror(self, entry: LogEntry) -> None:
        try:
            level = logging.ERROR if entry.severity is Severity.ERROR else logging.INFO
            if entry.has_payload:
                logger.log(
                    level, "[%s] %s %s",
                    entry.timestamp.isoformat(), entry.message, _DeferredPayload(entry.payload),
                )
            else:
                logger.log(level, "[%s] %s", entry.timestamp.isoformat(), entry.message)
        except Exception:
            # Console mirroring is best-effort
            pass
