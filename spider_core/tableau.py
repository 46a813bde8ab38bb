from __future__ import annotations

from typing import Iterable

from spider_core.pile import Pile

TABLEAU_PILES = 10


class Tableau:
    """The ten playable piles. The number of piles never changes."""

    def __init__(self, piles: Iterable[Pile] | None = None):
        if piles is None:
            self.piles = [Pile() for _ in range(TABLEAU_PILES)]
        else:
            self.piles = list(piles)
            if len(self.piles) != TABLEAU_PILES:
                raise ValueError(f"a tableau holds exactly {TABLEAU_PILES} piles, got {len(self.piles)}")

    def __getitem__(self, idx: int) -> Pile:
        return self.piles[idx]

    def __len__(self):
        return len(self.piles)

    def __iter__(self):
        return iter(self.piles)

    def clone(self) -> Tableau:
        return Tableau(p.clone() for p in self.piles)

    def card_count(self) -> int:
        return sum(p.size() for p in self.piles)

    def __eq__(self, other):
        if not isinstance(other, Tableau):
            return NotImplemented
        return self.piles == other.piles
