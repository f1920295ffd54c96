from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class RoomStatus(str, Enum):
    LOBBY = 'LOBBY'
    PLAYING = 'PLAYING'
    FINISHED = 'FINISHED'


@dataclass(frozen=True)
class Card:
    id: int
    symbols: Tuple[str, ...]
    # Display angle in degrees; never read by the game rules
    rotation: float = 0.0

    def to_dict(self):
        return {
            'id': self.id,
            'symbols': list(self.symbols),
            'rotation': self.rotation,
        }


@dataclass
class Player:
    id: str
    name: str
    score: int = 0
    is_host: bool = False
    avatar: str = '👤'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'isHost': self.is_host,
            'avatar': self.avatar,
        }
