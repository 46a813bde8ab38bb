from __future__ import annotations

import random
from enum import Enum

from spider_core.cards import ACE, KING, Card, Suit
from spider_core.errors import ErrorKind, SetupError

TOTAL_SPIDER_CARDS = 104


class SuitVariant(Enum):
    """How many distinct suits fill the 104-card pool. Fewer suits is easier."""

    ONE = 1
    TWO = 2
    FOUR = 4

    @property
    def suits(self) -> tuple[Suit, ...]:
        return tuple(Suit(i) for i in range(self.value))

    @property
    def copies(self) -> int:
        # 8 single-suit packs, 4 two-suit packs or 2 full packs.
        return 8 // self.value

    @staticmethod
    def from_count(count) -> SuitVariant:
        try:
            return SuitVariant(int(count))
        except (TypeError, ValueError):
            raise ValueError(f"unsupported suit count: {count!r} (expected 1, 2 or 4)") from None


def build_spider_deck(variant: SuitVariant) -> list[Card]:
    cards = []
    for suit in variant.suits:
        for rank in range(ACE, KING + 1):
            for _ in range(variant.copies):
                cards.append(Card(suit, rank))
    return cards


def deck_composition(variant: SuitVariant) -> dict[Card, int]:
    counts: dict[Card, int] = {}
    for card in build_spider_deck(variant):
        counts[card] = counts.get(card, 0) + 1
    return counts


class SpiderDeck:
    """The dealing pool. The end of the list is the top of the deck."""

    def __init__(self, variant: SuitVariant = SuitVariant.TWO, cards: list[Card] | None = None):
        self.variant = variant
        self._cards = list(cards) if cards is not None else build_spider_deck(variant)

    def shuffle(self, rng: random.Random | None = None):
        if rng is None:
            rng = random.Random()
        # random.shuffle is a Fisher-Yates shuffle.
        rng.shuffle(self._cards)

    def draw(self) -> Card:
        if not self._cards:
            raise SetupError(ErrorKind.EMPTY_DECK)
        return self._cards.pop()

    def draw_all(self) -> list[Card]:
        remaining = self._cards
        self._cards = []
        return remaining

    def size(self) -> int:
        return len(self._cards)

    def __len__(self):
        return len(self._cards)

    def cards(self) -> list[Card]:
        return list(self._cards)
