"""Per-room game state and the transitions player actions trigger.

A ``GameSession`` never talks to the network. Every operation mutates the
session and returns (or raises) something the caller turns into events, so
the Socket.IO handlers and the local simulation share the same rules.

Callers must hold ``session.lock`` around an operation and the emits that
follow it; that is what keeps two guesses on the same card from both
landing and keeps snapshots going out in the order they were produced.
"""

import logging
import random
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from tripletmatch.models import Card, Player, RoomStatus
from .deck import Deck, generate_deck
from .errors import GameInProgress, InvalidGuess, RoomFull, Unauthorized
from .grid import RoundGrid
from .matching import find_match
from .rules import GameRules
from .symbols import AVATARS

logger = logging.getLogger(__name__)

TRIPLET = 3


@dataclass
class GuessResult:
    player_id: str
    card_ids: List[int] = field(default_factory=list)
    symbol: Optional[str] = None
    drawn: List[Card] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.symbol is not None


class GameSession:
    def __init__(
        self,
        room_id: str,
        rules: Optional[GameRules] = None,
        rng: Optional[random.Random] = None,
        deck_factory: Optional[Callable[[], Sequence[Card]]] = None,
    ):
        self.room_id = room_id
        self.rules = rules or GameRules()
        self._rng = rng or random.Random()
        self._deck_factory = deck_factory or self._default_deck
        self.lock = threading.Lock()
        self.created_at = time.monotonic()

        self.players: List[Player] = []
        self.status = RoomStatus.LOBBY
        self.grid = RoundGrid(self.rules.grid_size)
        self.deck = Deck()
        self.last_match_symbol: Optional[str] = None
        self.winner: Optional[Player] = None

    def _default_deck(self) -> List[Card]:
        return generate_deck(self.rules.order, rng=self._rng)

    # ---- queries ----

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    @property
    def host(self) -> Optional[Player]:
        return next((p for p in self.players if p.is_host), None)

    def is_empty(self) -> bool:
        return not self.players

    def snapshot(self) -> dict:
        """State safe to send to every member; upcoming cards are never included."""
        return {
            'roomId': self.room_id,
            'players': [p.to_dict() for p in self.players],
            'status': self.status.value,
            'grid': self.grid.to_list(),
            'deckSize': len(self.deck),
            'lastMatchSymbol': self.last_match_symbol,
            'winner': self.winner.to_dict() if self.winner else None,
        }

    # ---- transitions ----

    def join(self, player_id: str, name: str, avatar: Optional[str] = None) -> Player:
        existing = self.get_player(player_id)
        if existing:
            return existing
        if self.status == RoomStatus.PLAYING:
            raise GameInProgress()
        if len(self.players) >= self.rules.max_players:
            raise RoomFull()
        player = Player(
            id=player_id,
            name=name,
            is_host=not self.players,
            avatar=avatar or self._rng.choice(AVATARS),
        )
        self.players.append(player)
        logger.info('room=%s player=%s joined host=%s', self.room_id, player_id, player.is_host)
        return player

    def start(self, player_id: str) -> None:
        player = self.get_player(player_id)
        if not player or not player.is_host:
            raise Unauthorized()
        self.deck = Deck(self._deck_factory())
        for p in self.players:
            p.score = 0
        self.grid.clear()
        self.last_match_symbol = None
        self.winner = None
        self.status = RoomStatus.PLAYING
        self.grid.fill(self.deck)
        logger.info('room=%s started grid=%s deck=%s', self.room_id, len(self.grid), len(self.deck))

    def guess(self, player_id: str, card_ids) -> GuessResult:
        if self.status != RoomStatus.PLAYING:
            raise InvalidGuess('No game in progress')
        player = self.get_player(player_id)
        if not player:
            raise InvalidGuess('Unknown player')
        ids = _parse_card_ids(card_ids)
        located = self.grid.locate(ids)
        if len(located) != TRIPLET:
            raise InvalidGuess(f'{len(located)} of the selected cards are on the grid')

        slots = [slot for slot, _ in located]
        cards = [card for _, card in located]
        result = GuessResult(player_id=player_id, card_ids=[c.id for c in cards])
        symbol = find_match(cards)
        if symbol is None:
            logger.debug('room=%s player=%s wrong guess %s', self.room_id, player_id, result.card_ids)
            return result

        player.score += self.rules.match_reward
        self.last_match_symbol = symbol
        result.symbol = symbol
        result.drawn = self.grid.replace(slots, self.deck)
        self._check_finished()
        return result

    def leave(self, player_id: str) -> Optional[Player]:
        """Drop a player; the earliest remaining player inherits host."""
        player = self.get_player(player_id)
        if not player:
            return None
        self.players.remove(player)
        if player.is_host and self.players:
            self.players[0].is_host = True
            logger.info('room=%s host %s left, promoted %s', self.room_id, player_id, self.players[0].id)
        return player

    def _check_finished(self) -> None:
        if len(self.grid) < TRIPLET and not self.deck:
            self.status = RoomStatus.FINISHED
            # max keeps the first of equal scores, so ties go to join order
            self.winner = max(self.players, key=lambda p: p.score) if self.players else None
            logger.info(
                'room=%s finished winner=%s',
                self.room_id,
                self.winner.id if self.winner else None,
            )


def _parse_card_ids(card_ids) -> List[int]:
    if not isinstance(card_ids, (list, tuple)):
        raise InvalidGuess('cardIds must be a list')
    ids = []
    for card_id in card_ids:
        if isinstance(card_id, bool) or not isinstance(card_id, int):
            raise InvalidGuess('cardIds must be integers')
        if card_id not in ids:
            ids.append(card_id)
    return ids
