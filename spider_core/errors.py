from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    # setup
    INSUFFICIENT_CARDS = "not enough cards to start spider"
    EMPTY_DECK = "deck is empty"
    # validation
    INSUFFICIENT_STOCK = "not enough cards in stock to deal a row"
    INVALID_SOURCE_INDEX = "invalid source pile index"
    INVALID_DESTINATION_INDEX = "invalid destination pile index"
    SAME_PILE_MOVE = "cannot move cards within the same pile"
    INVALID_START_INDEX = "invalid start index"
    NO_CARDS_TO_MOVE = "no cards to move"
    CARD_FACE_DOWN = "card is face down"
    INVALID_SEQUENCE = "invalid move: sequence not ordered"
    DESTINATION_NOT_ACCEPTING = "invalid move: destination cannot accept"
    EMPTY_PILE = "pile is empty"
    NO_HISTORY = "no history to undo"
    # internal consistency
    SEQUENCE_MISMATCH = "internal error: removed cards don't match expected sequence"
    REMOVE_CARDS_FAILED = "failed to remove cards from the pile"
    FLIP_FAILED = "failed to flip source card"
    CARD_CONSERVATION = "internal error: card conservation violated"


class SpiderError(Exception):
    """Base class of every engine error. Branch on ``kind``, not on the message."""

    def __init__(self, kind: ErrorKind, detail: str | None = None):
        self.kind = kind
        self.detail = detail
        message = kind.value if detail is None else f"{kind.value}: {detail}"
        super().__init__(message)


class SetupError(SpiderError):
    pass


class MoveError(SpiderError):
    """A rejected request. State is left exactly as it was."""


class CardFaceDownError(MoveError):
    def __init__(self, position: int):
        self.position = position
        super().__init__(ErrorKind.CARD_FACE_DOWN, f"position {position}")


class PileError(SpiderError):
    pass


class HistoryError(SpiderError):
    pass


class InternalError(SpiderError):
    """A post-condition failed. Indicates an engine bug; state has been rolled back."""
