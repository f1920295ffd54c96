from typing import Iterable, List, Optional, Tuple

from tripletmatch.models import Card
from .deck import Deck


class RoundGrid:
    """The visible play area.

    Cards keep their slot when other cards are replaced. A slot is only ever
    dropped when the deck runs out, which shrinks the grid for the endgame.
    """

    def __init__(self, capacity: int = 9):
        self.capacity = capacity
        self._slots: List[Card] = []

    def fill(self, deck: Deck, count: Optional[int] = None) -> List[Card]:
        """Draw up to ``count`` cards (default: the free capacity) onto the end."""
        if count is None:
            count = self.capacity - len(self._slots)
        drawn = deck.draw(count)
        self._slots.extend(drawn)
        return drawn

    def locate(self, card_ids: Iterable[int]) -> List[Tuple[int, Card]]:
        wanted = set(card_ids)
        return [(slot, card) for slot, card in enumerate(self._slots) if card.id in wanted]

    def replace(self, slot_indices: Iterable[int], deck: Deck) -> List[Card]:
        slots = sorted(set(slot_indices))
        for slot in slots:
            if not 0 <= slot < len(self._slots):
                raise IndexError(f'grid slot {slot} out of range')
        drawn = deck.draw(len(slots))
        for slot, card in zip(slots, drawn):
            self._slots[slot] = card
        # Slots the deck could not refill are removed, highest first so the
        # remaining indices stay valid while deleting.
        for slot in reversed(slots[len(drawn):]):
            del self._slots[slot]
        return drawn

    def clear(self) -> None:
        self._slots = []

    @property
    def cards(self) -> List[Card]:
        return list(self._slots)

    def to_list(self):
        return [card.to_dict() for card in self._slots]

    def __len__(self):
        return len(self._slots)

    def __iter__(self):
        return iter(list(self._slots))

    def __getitem__(self, slot: int) -> Card:
        return self._slots[slot]
