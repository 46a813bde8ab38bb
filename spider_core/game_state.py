from __future__ import annotations

import random
from collections import Counter
from contextlib import contextmanager

from spider_core.cards import Card, NUM_PER_SUIT
from spider_core.deck import TOTAL_SPIDER_CARDS, SpiderDeck, SuitVariant, deck_composition
from spider_core.errors import (
    CardFaceDownError,
    ErrorKind,
    HistoryError,
    InternalError,
    MoveError,
    PileError,
    SetupError,
)
from spider_core.events import DealEvent, MoveEvent, RevealEvent, RunCompletedEvent, UndoEvent
from spider_core.history import DEFAULT_HISTORY_LIMIT, HistoryRecorder, Snapshot
from spider_core.loss_detection import is_complete_run, is_lost, is_valid_sequence, movable_suffix
from spider_core.observer import GameObserver
from spider_core.pile import CardInPile, Pile
from spider_core.tableau import TABLEAU_PILES, Tableau
from spider_core.view import GameView, ViewProjector

FIRST_PILE_COUNT = 4  # piles that get the longer initial column
FIRST_PILE_CARDS = 6
REST_PILE_CARDS = 5
INITIAL_DEALT = FIRST_PILE_COUNT * FIRST_PILE_CARDS + (TABLEAU_PILES - FIRST_PILE_COUNT) * REST_PILE_CARDS
WINNING_RUNS = 8


class GameState:
    """
    deal_row and move_sequence validate, mutate, then record the pre-mutation snapshot.
    _do_* methods are the raw mutations and assume validation already happened.
    """

    def __init__(
        self,
        tableau: Tableau | None = None,
        stock: list[Card] | None = None,
        completed: list[list[Card]] | None = None,
        won: bool = False,
        lost: bool = False,
        variant: SuitVariant = SuitVariant.TWO,
        observer: GameObserver | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.tableau = tableau if tableau is not None else Tableau()
        self.stock: list[Card] = list(stock) if stock is not None else []
        self.completed: list[list[Card]] = [list(run) for run in completed] if completed else []
        self.won = won
        self.lost = lost
        self.variant = variant
        self.observer = observer if observer is not None else GameObserver()
        self.history = HistoryRecorder(history_limit)

    # ---- queries ----

    def can_deal_row(self) -> bool:
        return len(self.stock) >= TABLEAU_PILES

    def view(self) -> GameView:
        return ViewProjector.snapshot(self)

    def snapshot(self) -> Snapshot:
        return Snapshot.capture(self.tableau, self.stock, self.completed, self.won, self.lost)

    def movable_start(self, pile: int) -> int | None:
        """Index of the deepest card that can lead a move out of the pile, None when nothing can move."""
        if pile < 0 or pile >= len(self.tableau):
            raise MoveError(ErrorKind.INVALID_SOURCE_INDEX, str(pile))
        cards = self.tableau[pile].cards()
        suffix = movable_suffix(cards)
        if not suffix:
            return None
        return len(cards) - len(suffix)

    def card_count(self) -> int:
        return len(self.stock) + self.tableau.card_count() + sum(len(run) for run in self.completed)

    def validate(self):
        """
        Checks card conservation against the deck composition of this game's variant.
        Only meaningful for states that hold a full deck.
        """
        total = self.card_count()
        if total != TOTAL_SPIDER_CARDS:
            raise InternalError(ErrorKind.CARD_CONSERVATION, f"expected {TOTAL_SPIDER_CARDS} cards, got {total}")
        counts = Counter(self.stock)
        for pile in self.tableau:
            counts.update(c.card for c in pile.cards())
        for run in self.completed:
            counts.update(run)
        expected = deck_composition(self.variant)
        if counts != expected:
            wrong = sorted(str(card) for card in set(counts) | set(expected) if counts[card] != expected.get(card, 0))
            raise InternalError(ErrorKind.CARD_CONSERVATION, "unexpected counts for " + ", ".join(wrong))

    # ---- operations ----

    def deal_row(self):
        if not self.can_deal_row():
            error = MoveError(ErrorKind.INSUFFICIENT_STOCK, f"{len(self.stock)} left")
            self.observer.on_error(error)
            raise error
        with self._atomic():
            self._do_deal()
        self.observer.on_event(DealEvent(TABLEAU_PILES))
        self._after_mutation()

    def move_sequence(self, source: int, start: int, dest: int):
        try:
            self._validate_move_indices(source, start, dest)
            sequence = self._validate_move_sequence(self.tableau[source], start)
            if not self.tableau[dest].can_accept(sequence):
                raise MoveError(ErrorKind.DESTINATION_NOT_ACCEPTING)
        except MoveError as e:
            self.observer.on_error(e)
            raise

        with self._atomic():
            revealed = self._do_move(self.tableau[source], self.tableau[dest], start, sequence)
        self.observer.on_event(MoveEvent(source, start, dest, len(sequence)))
        if revealed:
            self.observer.on_event(RevealEvent(source))
        self._after_mutation()

    def undo(self):
        try:
            snapshot = self.history.pop()
        except HistoryError as e:
            self.observer.on_error(e)
            raise
        self._restore(snapshot)
        self.observer.on_undo(UndoEvent(len(self.history)))

    def scan_completed_runs(self) -> int:
        removed = 0
        for idx, pile in enumerate(self.tableau):
            if pile.size() < NUM_PER_SUIT:
                continue
            if not is_complete_run(pile.cards()[-NUM_PER_SUIT:]):
                continue
            run = pile.remove_cards_from(pile.size() - NUM_PER_SUIT)
            self.completed.append([c.card for c in run])
            removed += 1
            self.observer.on_event(RunCompletedEvent(idx, run[0].card.suit))
            if pile.flip_top_card_if_face_down():
                self.observer.on_event(RevealEvent(idx))
        self.check_win()
        return removed

    def check_win(self) -> bool:
        if not self.won and len(self.completed) >= WINNING_RUNS:
            self.won = True
            self.observer.on_win()
        return self.won

    def check_loss(self) -> bool:
        if not self.lost and is_lost(self.tableau.piles, self.stock):
            self.lost = True
            self.observer.on_loss()
        return self.lost

    # ---- internals ----

    def _after_mutation(self):
        self.scan_completed_runs()
        if len(self.stock) == 0:
            self.check_loss()

    @contextmanager
    def _atomic(self):
        # Pushed only after the mutation succeeds.
        snapshot = self.snapshot()
        try:
            yield
        except InternalError as e:
            self._restore(snapshot)
            self.observer.on_error(e)
            raise
        self.history.push(snapshot)

    def _restore(self, snapshot: Snapshot):
        # The snapshot is no longer held by the history, so its objects can be adopted directly.
        self.tableau = snapshot.tableau
        self.stock = snapshot.stock
        self.completed = snapshot.completed
        self.won = snapshot.won
        self.lost = snapshot.lost

    def _validate_move_indices(self, source: int, start: int, dest: int):
        if source < 0 or source >= len(self.tableau):
            raise MoveError(ErrorKind.INVALID_SOURCE_INDEX, str(source))
        if dest < 0 or dest >= len(self.tableau):
            raise MoveError(ErrorKind.INVALID_DESTINATION_INDEX, str(dest))
        if source == dest:
            raise MoveError(ErrorKind.SAME_PILE_MOVE)
        size = self.tableau[source].size()
        if start < 0 or start >= size:
            raise MoveError(ErrorKind.INVALID_START_INDEX, f"{start} not in [0, {size})")

    @staticmethod
    def _validate_move_sequence(src: Pile, start: int) -> list[CardInPile]:
        sequence = src.cards()[start:]
        if len(sequence) == 0:
            raise MoveError(ErrorKind.NO_CARDS_TO_MOVE)
        for offset, c in enumerate(sequence):
            if not c.face_up:
                raise CardFaceDownError(start + offset)
        if not is_valid_sequence(sequence):
            raise MoveError(ErrorKind.INVALID_SEQUENCE)
        return sequence

    def _do_deal(self):
        for pile in self.tableau:
            pile.add_card(self.stock.pop(), True)

    def _do_move(self, src: Pile, dst: Pile, start: int, sequence: list[CardInPile]) -> bool:
        try:
            removed = src.remove_cards_from(start)
        except PileError as e:
            raise InternalError(ErrorKind.REMOVE_CARDS_FAILED, str(e)) from e
        if removed != sequence:
            src.add_cards(removed)
            raise InternalError(ErrorKind.SEQUENCE_MISMATCH)
        dst.add_cards(removed)
        try:
            return src.flip_top_card_if_face_down()
        except PileError as e:
            raise InternalError(ErrorKind.FLIP_FAILED, str(e)) from e


def new_game(
    variant: SuitVariant = SuitVariant.TWO,
    seed: int | None = None,
    observer: GameObserver | None = None,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
    deck: SpiderDeck | None = None,
) -> GameState:
    """
    Builds and shuffles a 104-card deck for the variant and lays out a fresh game.
    :param seed: fixes the shuffle; None draws from the system source
    :param deck: a prepared deck to deal from instead of building one
    :return: the new game, with empty history
    """
    if deck is None:
        deck = SpiderDeck(variant)
        deck.shuffle(random.Random(seed))
    if deck.size() != TOTAL_SPIDER_CARDS:
        raise SetupError(ErrorKind.INSUFFICIENT_CARDS, f"deck holds {deck.size()} of {TOTAL_SPIDER_CARDS}")

    tableau = Tableau()
    for i, pile in enumerate(tableau):
        count = FIRST_PILE_CARDS if i < FIRST_PILE_COUNT else REST_PILE_CARDS
        for j in range(count):
            pile.add_card(deck.draw(), j == count - 1)

    state = GameState(
        tableau=tableau,
        stock=deck.draw_all(),
        variant=variant,
        observer=observer,
        history_limit=history_limit,
    )
    state.observer.on_start(state)
    return state
