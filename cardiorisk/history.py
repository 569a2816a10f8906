# cardiorisk/history.py
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, MutableMapping, Optional, Protocol

from pydantic import TypeAdapter, ValidationError

from . import config
from .schemas import AssessmentInput, HistoryEntry, PredictionOutcome

log = logging.getLogger(__name__)

_LOG_ADAPTER = TypeAdapter(List[HistoryEntry])


class HistoryBackend(Protocol):
    def read(self) -> Optional[str]: ...
    def write(self, data: str) -> None: ...
    def clear(self) -> None: ...


class MemoryBackend:
    """Keeps the serialized log in a plain attribute."""

    def __init__(self, data: Optional[str] = None):
        self.data = data

    def read(self) -> Optional[str]:
        return self.data

    def write(self, data: str) -> None:
        self.data = data

    def clear(self) -> None:
        self.data = None


class SessionStateBackend:
    """Stores the serialized log under one key of a session-scoped mapping
    (``st.session_state`` in the app)."""

    def __init__(self, state: MutableMapping, key: str = None):
        self.state = state
        self.key = key or config.HISTORY_KEY

    def read(self) -> Optional[str]:
        return self.state.get(self.key)

    def write(self, data: str) -> None:
        self.state[self.key] = data

    def clear(self) -> None:
        self.state.pop(self.key, None)


Listener = Callable[["HistoryStore"], None]


class Subscription:
    def __init__(self, store: "HistoryStore", callback: Listener):
        self._store = store
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._store._listeners.remove(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.unsubscribe()
        return False


class HistoryStore:
    """Bounded, newest-first log of past assessments."""

    def __init__(self, backend: HistoryBackend, capacity: int = None,
                 clock: Callable[[], datetime] = None,
                 id_factory: Callable[[], str] = None):
        self.backend = backend
        self.capacity = config.HISTORY_CAPACITY if capacity is None else capacity
        if not 1 <= self.capacity <= config.MAX_HISTORY_CAPACITY:
            raise ValueError(
                f"History capacity must be between 1 and {config.MAX_HISTORY_CAPACITY}, got {self.capacity}")
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._new_id = id_factory or (lambda: uuid.uuid4().hex)
        self._entries: List[HistoryEntry] = []
        self._listeners: List[Subscription] = []
        self.load()

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self.entries)

    def load(self) -> List[HistoryEntry]:
        raw = self.backend.read()
        entries: List[HistoryEntry] = []
        if isinstance(raw, (str, bytes)) and raw:
            try:
                entries = _LOG_ADAPTER.validate_json(raw)
            except ValidationError as e:
                # corrupt storage is not user-actionable: start over empty
                log.warning("Discarding unreadable history (%d errors)", e.error_count())
                entries = []

        seen = set()
        unique = []
        for entry in entries:
            if entry.id not in seen:
                seen.add(entry.id)
                unique.append(entry)
        self._entries = unique[: self.capacity]
        return self.entries

    def append(self, assessment: AssessmentInput, outcome: PredictionOutcome) -> HistoryEntry:
        entry = HistoryEntry(
            id=self._new_id(),
            created_at=self._clock(),
            input=assessment,
            outcome=outcome,
        )
        self._entries = ([entry] + [e for e in self._entries if e.id != entry.id])[: self.capacity]
        self._persist()
        self._notify()
        return entry

    def clear(self) -> None:
        self._entries = []
        self.backend.clear()
        log.info("History cleared")
        self._notify()

    def subscribe(self, callback: Listener) -> Subscription:
        sub = Subscription(self, callback)
        self._listeners.append(sub)
        return sub

    def _persist(self) -> None:
        self.backend.write(_LOG_ADAPTER.dump_json(self._entries).decode("utf-8"))

    def _notify(self) -> None:
        for sub in list(self._listeners):
            if sub.active:
                sub.callback(self)
