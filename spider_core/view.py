from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CardView:
    rank: int
    suit: int
    face_up: bool


@dataclass(frozen=True, slots=True)
class PileView:
    cards: tuple[CardView, ...]


@dataclass(frozen=True, slots=True)
class GameView:
    piles: tuple[PileView, ...]
    stock_count: int
    completed_count: int
    won: bool
    lost: bool


class ViewProjector:
    """Turns engine state into plain immutable values for renderers."""

    @staticmethod
    def snapshot(state) -> GameView:
        piles = []
        for pile in state.tableau:
            cards = tuple(
                CardView(rank=c.card.rank, suit=int(c.card.suit), face_up=c.face_up)
                for c in pile.cards()
            )
            piles.append(PileView(cards=cards))
        return GameView(
            piles=tuple(piles),
            stock_count=len(state.stock),
            completed_count=len(state.completed),
            won=state.won,
            lost=state.lost,
        )
