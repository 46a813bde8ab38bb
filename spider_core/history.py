from __future__ import annotations

from dataclasses import dataclass

from spider_core.cards import Card
from spider_core.errors import ErrorKind, HistoryError
from spider_core.tableau import Tableau

DEFAULT_HISTORY_LIMIT = 25


@dataclass(slots=True)
class Snapshot:
    """Deep copy of everything undo restores. History itself is never part of a snapshot."""

    tableau: Tableau
    stock: list[Card]
    completed: list[list[Card]]
    won: bool
    lost: bool

    @staticmethod
    def capture(tableau: Tableau, stock, completed, won: bool, lost: bool) -> Snapshot:
        return Snapshot(
            tableau=tableau.clone(),
            stock=list(stock),
            completed=[list(run) for run in completed],
            won=won,
            lost=lost,
        )


class HistoryRecorder:
    """
    A bounded stack of snapshots. Pushing past the limit evicts the oldest entry.
    There is no redo: undo pops, and a new operation simply pushes on top.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError(f"history limit must be positive, got {limit}")
        self.limit = limit
        self.lst: list[Snapshot] = []

    def push(self, snapshot: Snapshot):
        self.lst.append(snapshot)
        if len(self.lst) > self.limit:
            del self.lst[0]

    def pop(self) -> Snapshot:
        if not self.lst:
            raise HistoryError(ErrorKind.NO_HISTORY)
        return self.lst.pop()

    def __len__(self):
        return len(self.lst)
