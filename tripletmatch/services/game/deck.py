import logging
import random
from typing import List, Optional, Sequence

from tripletmatch.models import Card
from .symbols import SYMBOLS

logger = logging.getLogger(__name__)


def deck_size(order: int) -> int:
    return order * order + order + 1


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


def check_order(order: int, alphabet_size: int) -> None:
    """Raise ValueError unless ``order`` can produce a valid deck.

    Every pair of cards shares exactly one symbol only when the order is
    prime and no two symbol indices map onto the same alphabet entry.
    """
    if not _is_prime(order):
        raise ValueError(f'deck order must be prime, got {order}')
    needed = deck_size(order)
    if alphabet_size < needed:
        raise ValueError(
            f'order {order} needs at least {needed} symbols, alphabet has {alphabet_size}'
        )


def card_indices(order: int) -> List[List[int]]:
    """Symbol indices of every card, in generation order."""
    n = order
    cards = [list(range(n + 1))]
    for j in range(n):
        cards.append([0] + [n + 1 + n * j + k for k in range(n)])
    for i in range(n):
        for j in range(n):
            cards.append([i + 1] + [n + 1 + n * k + (i * k + j) % n for k in range(n)])
    return cards


def generate_deck(
    order: int = 7,
    alphabet: Sequence[str] = SYMBOLS,
    rng: Optional[random.Random] = None,
    shuffle: bool = True,
) -> List[Card]:
    """Build the full card set for one game.

    Card ids follow generation order; with ``shuffle`` the list is then put
    through ``rng.shuffle`` so the draw order is a uniform permutation.
    """
    check_order(order, len(alphabet))
    rng = rng or random.Random()
    cards = [
        Card(
            id=idx,
            symbols=tuple(alphabet[i % len(alphabet)] for i in indices),
            rotation=rng.uniform(0, 360),
        )
        for idx, indices in enumerate(card_indices(order))
    ]
    if shuffle:
        rng.shuffle(cards)
    logger.debug('generated deck order=%s cards=%s', order, len(cards))
    return cards


def shares_one_symbol_pairwise(cards: Sequence[Card]) -> bool:
    for a in range(len(cards)):
        first = set(cards[a].symbols)
        for b in range(a + 1, len(cards)):
            if len(first & set(cards[b].symbols)) != 1:
                return False
    return True


class Deck:
    """Undrawn cards. Draws come off the front and the deck never grows."""

    def __init__(self, cards=None):
        self._cards: List[Card] = list(cards or [])

    def draw(self, count: int) -> List[Card]:
        if count <= 0:
            return []
        drawn = self._cards[:count]
        del self._cards[:count]
        return drawn

    def __len__(self):
        return len(self._cards)

    def __bool__(self):
        return bool(self._cards)
