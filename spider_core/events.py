from __future__ import annotations

from dataclasses import dataclass

from spider_core.cards import Suit


class GameEvent:
    pass


@dataclass(frozen=True, slots=True)
class DealEvent(GameEvent):
    count: int


@dataclass(frozen=True, slots=True)
class MoveEvent(GameEvent):
    source: int
    start: int
    dest: int
    moved: int


@dataclass(frozen=True, slots=True)
class RevealEvent(GameEvent):
    pile: int


@dataclass(frozen=True, slots=True)
class RunCompletedEvent(GameEvent):
    pile: int
    suit: Suit


@dataclass(frozen=True, slots=True)
class UndoEvent(GameEvent):
    # Snapshots still available after this undo.
    remaining: int
