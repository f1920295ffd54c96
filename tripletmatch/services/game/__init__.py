"""Game domain services: deck, matching, grid and room sessions.

This package contains pure game logic that is imported by socket handlers,
HTTP routes and the local simulation, keeping transport concerns separated
from core game mechanics.
"""

from .deck import Deck, generate_deck
from .errors import GameError, GameInProgress, InvalidGuess, RoomCodesExhausted, RoomFull, Unauthorized
from .grid import RoundGrid
from .matching import find_match
from .registry import RoomRegistry, normalize_room_id
from .rules import GameRules
from .session import GameSession, GuessResult
