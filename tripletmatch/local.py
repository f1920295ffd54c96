"""In-process game for one room, driven by direct method calls.

Emits the same event names and payloads as the Socket.IO handlers, but to
listener callbacks registered with ``on``. Every listener sees every event;
``wrongGuess`` carries the player id so a front end can tell whether it is
the one who guessed.

Events are collected while the session lock is held and delivered after it
is released, so a listener may call straight back into the game.
"""

import logging
import uuid
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Tuple

from tripletmatch.models import Player
from tripletmatch.services.game import (
    GameInProgress,
    GameRules,
    GameSession,
    InvalidGuess,
    RoomFull,
    Unauthorized,
)

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class LocalGame:
    def __init__(self, room_id: str = 'LOCAL', rules: Optional[GameRules] = None, **session_kwargs):
        self.session = GameSession(room_id, rules, **session_kwargs)
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def on(self, event: str, callback: Listener) -> None:
        self._listeners[event].append(callback)

    def emit(self, event: str, data: Any) -> None:
        for callback in list(self._listeners[event]):
            callback(data)

    def join(self, name: str) -> Optional[Player]:
        events = []
        player = None
        with self.session.lock:
            try:
                player = self.session.join(uuid.uuid4().hex[:9], name)
            except (RoomFull, GameInProgress) as exc:
                events.append(('error', {'message': exc.message}))
            else:
                events.append(self._state_event())
        self._deliver(events)
        return player

    def start(self, player_id: str) -> None:
        events = []
        with self.session.lock:
            try:
                self.session.start(player_id)
            except Unauthorized:
                logger.debug('start ignored for non-host %s', player_id)
            else:
                events.append(self._state_event())
        self._deliver(events)

    def guess(self, player_id: str, card_ids) -> None:
        events = []
        with self.session.lock:
            try:
                result = self.session.guess(player_id, card_ids)
            except InvalidGuess as exc:
                logger.debug('guess ignored for %s: %s', player_id, exc.message)
            else:
                if result.matched:
                    events.append(('correctGuess', {'playerId': player_id, 'cardIds': result.card_ids}))
                    events.append(self._state_event())
                else:
                    events.append(('wrongGuess', {'playerId': player_id}))
        self._deliver(events)

    def leave(self, player_id: str) -> None:
        events = []
        with self.session.lock:
            if self.session.leave(player_id):
                events.append(self._state_event())
        self._deliver(events)

    def _state_event(self) -> Tuple[str, dict]:
        return 'gameState', self.session.snapshot()

    def _deliver(self, events: List[Tuple[str, Any]]) -> None:
        for event, data in events:
            self.emit(event, data)
