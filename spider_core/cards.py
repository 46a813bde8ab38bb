from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

NUM_PER_SUIT = 13

ACE = 1
KING = 13

RANK_NAMES = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
RANK_LONG_NAMES = ("Ace", "2", "3", "4", "5", "6", "7", "8", "9", "10", "Jack", "Queen", "King")


class Suit(IntEnum):
    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    @property
    def symbol(self) -> str:
        return "♠♥♦♣"[self]

    @property
    def letter(self) -> str:
        return "SHDC"[self]

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card value. Orientation lives on the pile, not here."""

    suit: Suit
    rank: int

    def __post_init__(self):
        if not ACE <= self.rank <= KING:
            raise ValueError(f"rank out of range: {self.rank}")
        # Accept plain ints for the suit and normalise them.
        object.__setattr__(self, "suit", Suit(self.suit))

    @property
    def rank_name(self) -> str:
        return RANK_NAMES[self.rank - 1]

    def game_str(self, unicode: bool = True) -> str:
        suit = self.suit.symbol if unicode else self.suit.letter
        return f"{self.rank_name}{suit}"

    def suitable_as_base_for(self, upper: Card) -> bool:
        return self.rank == upper.rank + 1

    def suitable_as_sequence_for(self, upper: Card) -> bool:
        return self.suit == upper.suit and self.rank == upper.rank + 1

    def __str__(self):
        return f"{RANK_LONG_NAMES[self.rank - 1]} of {self.suit.label}"
