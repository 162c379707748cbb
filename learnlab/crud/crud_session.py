import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional, Tuple

from learnlab.schemas.simulation import HistoryEntry, TurnResult


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SimulationSession:
    seed_prompt: str
    turn: TurnResult
    history: Tuple[HistoryEntry, ...] = ()
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


class SessionStore:
    """
    Process-local registry of running simulations. Nothing is written to disk;
    a restart discards every session.
    """

    def __init__(self):
        self._sessions: Dict[str, SimulationSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def add(self, session: SimulationSession):
        self._sessions[session.id] = session

    def get(self, session_id: str) -> Optional[SimulationSession]:
        return self._sessions.get(session_id)

    def pop(self, session_id: str) -> Optional[SimulationSession]:
        return self._sessions.pop(session_id, None)

    def all(self):
        return list(self._sessions.values())


session_store = SessionStore()

def get_store() -> SessionStore:
    """
    Dependency to get the session store.
    """
    return session_store


def create_session(store: SessionStore, seed_prompt: str, turn: TurnResult) -> SimulationSession:
    """
    Registers a new simulation that has produced its opening turn.
    """
    session = SimulationSession(seed_prompt=seed_prompt, turn=turn)
    store.add(session)
    return session

def get_session(store: SessionStore, session_id: str) -> Optional[SimulationSession]:
    """
    Retrieves a simulation by its ID.
    """
    return store.get(session_id)

def record_turn(store: SessionStore, session_id: str, history: Tuple[HistoryEntry, ...], turn: TurnResult) -> Optional[SimulationSession]:
    """
    Replaces the history and current turn after a turn succeeded.
    """
    session = store.get(session_id)
    if session:
        session.history = tuple(history)
        session.turn = turn
        session.updated_at = _now()
    return session

def delete_session(store: SessionStore, session_id: str) -> bool:
    """
    Resets a simulation by discarding its prompt and history.
    """
    return store.pop(session_id) is not None

def remove_inactive_sessions(store: SessionStore, inactive_hours: int) -> int:
    """
    Deletes simulations that have not advanced for a specified number of hours.

    :param store: The session store.
    :param inactive_hours: The threshold in hours for a simulation to be considered inactive.
    :return: The number of simulations deleted.
    """
    threshold = _now() - timedelta(hours=inactive_hours)
    inactive = [s for s in store.all() if s.updated_at < threshold]
    for session in inactive:
        store.pop(session.id)
    return len(inactive)
