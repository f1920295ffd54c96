from dataclasses import dataclass

from .deck import check_order
from .symbols import SYMBOLS


@dataclass(frozen=True)
class GameRules:
    max_players: int = 8
    grid_size: int = 9
    match_reward: int = 3
    order: int = 7

    def __post_init__(self):
        if self.max_players < 1:
            raise ValueError('max_players must be at least 1')
        if self.grid_size < 3:
            raise ValueError('grid_size must hold at least one triplet')
        check_order(self.order, len(SYMBOLS))

    @classmethod
    def from_config(cls, config) -> 'GameRules':
        """Build rules from a Flask config (or any mapping) with defaults."""
        return cls(
            max_players=int(config.get('MAX_PLAYERS', 8)),
            grid_size=int(config.get('GRID_SIZE', 9)),
            match_reward=int(config.get('MATCH_REWARD', 3)),
            order=int(config.get('DECK_ORDER', 7)),
        )
