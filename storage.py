# storage.py - JSON-file session and history store
import os
import threading
from typing import List, Optional, Tuple

from config import (
    SESSIONS_FILE,
    HISTORY_FILE_TEMPLATE,
    WELCOME_RESPONSE,
    WELCOME_PREVIEW,
    FEEDBACK_VALUES,
    session_title,
    logger,
)
from models import Session, Message
from responder import MockResponder
from utils import now_ms, new_message_id, read_json, write_json_atomic


class StoreError(Exception):
    pass


class StorageError(StoreError):
    """Reading or writing a backing file failed on a write path."""


class NotFoundError(StoreError):
    pass


class SessionNotFound(NotFoundError):
    pass


class MessageNotFound(NotFoundError):
    pass


class SessionStore:
    """Sessions in ``sessions.json`` plus one ``history-<id>.json`` per session.

    Nothing is cached between calls: every operation re-reads the files it
    needs and rewrites them whole. A single re-entrant lock serializes all
    read-modify-write sequences in this process, and files are replaced
    atomically so readers never observe a partial write.
    """

    def __init__(self, data_dir, responder=None, clock=now_ms):
        self.data_dir = data_dir
        self.responder = responder or MockResponder()
        self.clock = clock
        self.sessions_path = os.path.join(data_dir, SESSIONS_FILE)
        self._lock = threading.RLock()

    # ---------- files ----------
    def ensure_data_files(self):
        with self._lock:
            if not os.path.isdir(self.data_dir):
                os.makedirs(self.data_dir, exist_ok=True)
                logger.info("✅ Created data directory: %s", self.data_dir)
            if not os.path.exists(self.sessions_path):
                write_json_atomic(self.sessions_path, [])
                logger.info("✅ Created %s with empty array", SESSIONS_FILE)

    def history_path(self, session_id: str) -> str:
        return os.path.join(self.data_dir, HISTORY_FILE_TEMPLATE.format(session_id=session_id))

    def _read_sessions(self) -> List[Session]:
        try:
            payload = read_json(self.sessions_path)
        except FileNotFoundError:
            return []
        except (OSError, ValueError):
            logger.exception("❌ Error reading %s", SESSIONS_FILE)
            return []
        if not isinstance(payload, list):
            logger.warning("%s does not hold an array, treating as empty", SESSIONS_FILE)
            return []
        return [Session.from_dict(item) for item in payload if isinstance(item, dict)]

    def _write_sessions(self, sessions: List[Session]):
        try:
            write_json_atomic(self.sessions_path, [s.to_dict() for s in sessions])
        except OSError as e:
            logger.error("❌ Error writing %s: %s", SESSIONS_FILE, e)
            raise StorageError(f"failed to write {SESSIONS_FILE}") from e

    def _read_history(self, session_id: str) -> List[Message]:
        path = self.history_path(session_id)
        try:
            payload = read_json(path)
        except (OSError, ValueError) as e:
            raise StorageError(f"failed to read history for {session_id}") from e
        if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
            raise StorageError(f"history for {session_id} is not an array of messages")
        return [Message.from_dict(item) for item in payload]

    def _write_history(self, session_id: str, history: List[Message]):
        try:
            write_json_atomic(self.history_path(session_id), [m.to_dict() for m in history])
        except OSError as e:
            raise StorageError(f"failed to write history for {session_id}") from e

    def _next_timestamp(self, history: List[Message]) -> int:
        ts = self.clock()
        previous = [m.timestamp for m in history if isinstance(m.timestamp, (int, float))]
        if previous and ts <= max(previous):
            ts = int(max(previous)) + 1
        return ts

    # ---------- operations ----------
    def list_sessions(self) -> List[Session]:
        with self._lock:
            return self._read_sessions()

    def create_session(self) -> Tuple[Session, List[Message]]:
        with self._lock:
            sessions = self._read_sessions()
            taken = {s.id for s in sessions}
            ts = self.clock()
            session_id = f"session-{ts}"
            while session_id in taken or os.path.exists(self.history_path(session_id)):
                ts += 1
                session_id = f"session-{ts}"

            session = Session(id=session_id, title=session_title(len(sessions) + 1), preview=WELCOME_PREVIEW)
            sessions.append(session)
            self._write_sessions(sessions)

            welcome = Message(
                id=new_message_id(),
                role="system",
                question=None,
                response=WELCOME_RESPONSE,
                table=[],
                timestamp=self._next_timestamp([]),
            )
            history = [welcome]
            self._write_history(session_id, history)
            logger.info("Created session %s", session_id)
            return session, history

    def get_or_create_history(self, session_id: str) -> List[Message]:
        with self._lock:
            if not os.path.exists(self.history_path(session_id)):
                sessions = self._read_sessions()
                if not any(s.id == session_id for s in sessions):
                    sessions.append(Session(id=session_id, title=session_title(len(sessions) + 1)))
                    self._write_sessions(sessions)
                    logger.info("Registered unknown session %s", session_id)
                self._write_history(session_id, [])
                return []
            try:
                return self._read_history(session_id)
            except StorageError:
                logger.exception("❌ Error reading history file for %s", session_id)
                return []

    def append_message(self, session_id: str, question: str) -> Message:
        response_text, table = self.responder.generate_response(question)
        with self._lock:
            if os.path.exists(self.history_path(session_id)):
                history = self._read_history(session_id)
            else:
                history = []
            message = Message(
                id=new_message_id(),
                role="assistant",
                question=question,
                response=response_text,
                table=table,
                timestamp=self._next_timestamp(history),
            )
            history.append(message)
            self._write_history(session_id, history)
            return message

    def set_feedback(
        self,
        session_id: str,
        feedback: str,
        *,
        message_id: Optional[str] = None,
        timestamp: Optional[float] = None,
    ) -> Message:
        if feedback not in FEEDBACK_VALUES:
            raise ValueError(f"unsupported feedback: {feedback!r}")
        if message_id is None and timestamp is None:
            raise ValueError("message_id or timestamp is required")

        with self._lock:
            if not os.path.exists(self.history_path(session_id)):
                raise SessionNotFound(session_id)
            history = self._read_history(session_id)

            target = None
            if message_id is not None:
                target = next((m for m in history if m.id == message_id), None)
            if target is None and timestamp is not None:
                target = next((m for m in history if m.matches_timestamp(timestamp)), None)
            if target is None:
                raise MessageNotFound(message_id if message_id is not None else timestamp)

            target.feedback = feedback
            target.feedbackAt = self.clock()
            self._write_history(session_id, history)
            return target
