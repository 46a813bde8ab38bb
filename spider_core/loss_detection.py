from __future__ import annotations

from typing import Sequence

from spider_core.cards import ACE, KING, NUM_PER_SUIT
from spider_core.pile import CardInPile, Pile


def is_valid_sequence(cards: Sequence[CardInPile]) -> bool:
    """Single suit, each card exactly one rank below the one beneath it."""
    for i in range(len(cards) - 1):
        if not cards[i].card.suitable_as_sequence_for(cards[i + 1].card):
            return False
    return True


def is_complete_run(cards: Sequence[CardInPile]) -> bool:
    if len(cards) != NUM_PER_SUIT:
        return False
    if not all(c.face_up for c in cards):
        return False
    return cards[0].card.rank == KING and cards[-1].card.rank == ACE and is_valid_sequence(cards)


def movable_suffix(cards: Sequence[CardInPile]) -> list[CardInPile]:
    """
    The longest face-up, same-suit, descending run ending at the top of the pile.
    :param cards: pile cards, bottom first
    :return: the run, bottom first; empty if the top card is face down
    """
    if len(cards) == 0 or not cards[-1].face_up:
        return []
    idx = len(cards) - 1
    while idx > 0:
        below = cards[idx - 1]
        if not below.face_up or not below.card.suitable_as_sequence_for(cards[idx].card):
            break
        idx -= 1
    return list(cards[idx:])


def has_empty_pile(piles: Sequence[Pile]) -> bool:
    return any(p.size() == 0 for p in piles)


def has_any_valid_move(piles: Sequence[Pile]) -> bool:
    for i, pile in enumerate(piles):
        suffix = movable_suffix(pile.cards())
        # Every card of the suffix may lead a moved group, not only the deepest one.
        for start in range(len(suffix)):
            moving = suffix[start:]
            for j, target in enumerate(piles):
                if j == i:
                    continue
                if target.can_accept(moving):
                    return True
    return False


def is_lost(piles: Sequence[Pile], stock: Sequence) -> bool:
    if len(stock) > 0:
        return False
    if has_empty_pile(piles):
        return False
    return not has_any_valid_move(piles)
