import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from shopchat.logger import get_logger
from shopchat.models.schemas import Message, Session

logger = get_logger("sessions")

_SESSIONS = TypeAdapter(dict[str, Session])


class SessionStore:
    """Session id -> rolling message history, written through to one JSON file.

    There is no locking. Two requests on the same session id race on the
    in-memory mapping and on the file; the last write wins.
    """

    def __init__(self, path: str | Path, max_messages: int = 10):
        self.path = Path(path)
        self.max_messages = max_messages
        self._sessions: dict[str, Session] = {}

    def load(self) -> None:
        """Read the persisted mapping. A missing or unreadable file starts empty."""
        if not self.path.exists():
            self._sessions = {}
            return
        try:
            self._sessions = _SESSIONS.validate_json(self.path.read_bytes())
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning(f"Ignoring unreadable session file {self.path}: {exc}")
            self._sessions = {}
            return
        logger.info(f"Loaded {len(self._sessions)} sessions from {self.path}")

    def find(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def get(self, session_id: str) -> Session:
        """Fetch a session, creating an empty one on first reference."""
        session = self._sessions.get(session_id)
        if session is None:
            session = Session()
            self._sessions[session_id] = session
        return session

    def append(self, session_id: str, message: Message) -> Session:
        """Add a message, keep only the newest `max_messages`, then persist."""
        session = self.get(session_id)
        session.messages = [*session.messages, message][-self.max_messages:]
        self.persist()
        return session

    def persist(self) -> None:
        # Overwrites in place: no temp file, no rename.
        data = {sid: s.model_dump(mode="json") for sid, s in self._sessions.items()}
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def __len__(self) -> int:
        return len(self._sessions)
