from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from spider_core.cards import Card
from spider_core.errors import ErrorKind, PileError


@dataclass(slots=True)
class CardInPile:
    card: Card
    face_up: bool = False

    def copy(self) -> CardInPile:
        return CardInPile(self.card, self.face_up)


class Pile:
    """
    An ordered stack of cards. Index 0 is the bottom, the last index is the top.
    """

    def __init__(self, cards: Iterable[CardInPile] = ()):
        self._cards: list[CardInPile] = [c.copy() for c in cards]

    def add_card(self, card: Card, face_up: bool):
        self._cards.append(CardInPile(card, face_up))

    def add_cards(self, cards: Iterable[CardInPile]):
        self._cards.extend(c.copy() for c in cards)

    def top_card(self) -> CardInPile:
        if not self._cards:
            raise PileError(ErrorKind.EMPTY_PILE)
        return self._cards[-1].copy()

    def cards(self) -> list[CardInPile]:
        """
        A copy of the pile, card entries included, so callers can never flip engine cards.
        """
        return [c.copy() for c in self._cards]

    def size(self) -> int:
        return len(self._cards)

    def __len__(self):
        return len(self._cards)

    def can_accept(self, sequence: list[CardInPile]) -> bool:
        if len(sequence) == 0:
            return False
        if len(self._cards) == 0:
            return True
        # Suit does not matter for placement, only for runs.
        return self._cards[-1].card.suitable_as_base_for(sequence[0].card)

    def remove_cards_from(self, start: int) -> list[CardInPile]:
        if start < 0 or start >= len(self._cards):
            raise PileError(ErrorKind.INVALID_START_INDEX, f"{start} not in [0, {len(self._cards)})")
        removed = self._cards[start:]
        del self._cards[start:]
        return removed

    def flip_top_card_if_face_down(self) -> bool:
        if not self._cards:
            return False
        top = self._cards[-1]
        if top.face_up:
            return False
        top.face_up = True
        return True

    def clone(self) -> Pile:
        return Pile(self._cards)

    def __eq__(self, other):
        if not isinstance(other, Pile):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self):
        return f"Pile({self._cards!r})"
