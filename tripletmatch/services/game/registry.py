import logging
import random
import string
import threading
import time
from typing import Dict, Optional

from .errors import RoomCodesExhausted
from .rules import GameRules
from .session import GameSession

logger = logging.getLogger(__name__)


def normalize_room_id(room_id) -> str:
    return str(room_id or '').strip().upper()


class RoomRegistry:
    """Owns every live room and which member sits in which room.

    Rooms live until their last player leaves. A room nobody has joined
    within ``unjoined_ttl`` seconds is dropped the next time a room is
    looked up or created.
    """

    def __init__(
        self,
        rules: Optional[GameRules] = None,
        code_length: int = 4,
        rng=None,
        deck_factory=None,
        unjoined_ttl: float = 300.0,
        max_code_attempts: int = 100,
        clock=time.monotonic,
    ):
        self.rules = rules or GameRules()
        self.code_length = code_length
        # Passed to every new session; None means a freshly shuffled deck per game
        self.deck_factory = deck_factory
        self.unjoined_ttl = unjoined_ttl
        self.max_code_attempts = max_code_attempts
        self._clock = clock
        self._rng = rng or random.Random()
        self._rooms: Dict[str, GameSession] = {}
        self._members: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, room_id) -> Optional[GameSession]:
        with self._lock:
            return self._rooms.get(normalize_room_id(room_id))

    def get_or_create(self, room_id) -> GameSession:
        code = normalize_room_id(room_id)
        if not code:
            raise ValueError('room id is required')
        with self._lock:
            self._sweep_unjoined()
            session = self._rooms.get(code)
            if session is None:
                session = self._open(code)
            return session

    def create(self) -> GameSession:
        """Open a room under a fresh, unused code."""
        with self._lock:
            self._sweep_unjoined()
            for _ in range(self.max_code_attempts):
                code = ''.join(
                    self._rng.choices(string.ascii_uppercase + string.digits, k=self.code_length)
                )
                if code not in self._rooms:
                    return self._open(code)
        raise RoomCodesExhausted()

    def _open(self, code: str) -> GameSession:
        session = GameSession(code, self.rules, deck_factory=self.deck_factory)
        session.created_at = self._clock()
        self._rooms[code] = session
        logger.info('room=%s created', code)
        return session

    def _sweep_unjoined(self) -> None:
        # Caller holds self._lock. Rooms emptied by a leave are evicted at once,
        # so an empty room here is one nobody ever joined.
        deadline = self._clock() - self.unjoined_ttl
        stale = [
            code for code, session in self._rooms.items()
            if session.is_empty() and session.created_at <= deadline
        ]
        for code in stale:
            del self._rooms[code]
            logger.info('room=%s evicted, never joined', code)

    def evict(self, room_id) -> Optional[GameSession]:
        code = normalize_room_id(room_id)
        with self._lock:
            session = self._rooms.pop(code, None)
            for member, member_room in list(self._members.items()):
                if member_room == code:
                    del self._members[member]
        if session is not None:
            logger.info('room=%s evicted', code)
        return session

    # ---- member index ----

    def bind(self, member_id: str, room_id) -> None:
        with self._lock:
            self._members[member_id] = normalize_room_id(room_id)

    def room_of(self, member_id: str) -> Optional[str]:
        with self._lock:
            return self._members.get(member_id)

    def unbind(self, member_id: str) -> Optional[str]:
        with self._lock:
            return self._members.pop(member_id, None)

    def __contains__(self, room_id) -> bool:
        with self._lock:
            return normalize_room_id(room_id) in self._rooms

    def __len__(self):
        with self._lock:
            return len(self._rooms)
