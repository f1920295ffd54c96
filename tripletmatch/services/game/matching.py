from typing import Optional, Sequence

from tripletmatch.models import Card


def find_match(cards: Sequence[Card]) -> Optional[str]:
    """Return the one symbol shared by exactly three cards, else None.

    An empty intersection and one with several symbols both count as no
    match; the latter cannot come out of a valid deck.
    """
    if len(cards) != 3:
        return None
    common = set(cards[0].symbols)
    for card in cards[1:]:
        common &= set(card.symbols)
    if len(common) == 1:
        return next(iter(common))
    return None
