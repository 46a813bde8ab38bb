from __future__ import annotations

import logging

from spider_core.errors import InternalError, SpiderError
from spider_core.events import GameEvent

LOGGER_NAME = "spider_core"


class GameObserver:
    """
    Receives notifications from a game. Injected by the host; the engine keeps no global logging state.
    Every hook is a no-op here, so subclasses override only what they need.
    """

    def on_start(self, state):
        pass

    def on_event(self, event: GameEvent):
        """
        Invoked after a game event is performed.
        :param event:
        :return:
        """
        pass

    def on_undo(self, event: GameEvent):
        pass

    def on_error(self, error: SpiderError):
        pass

    def on_win(self):
        pass

    def on_loss(self):
        pass


class LoggingObserver(GameObserver):
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def on_start(self, state):
        self.logger.info(
            "new game: stock=%d completed=%d won=%s lost=%s",
            len(state.stock), len(state.completed), state.won, state.lost,
        )

    def on_event(self, event: GameEvent):
        self.logger.info("event: %s", event)

    def on_undo(self, event: GameEvent):
        self.logger.info("undo: %s", event)

    def on_error(self, error: SpiderError):
        if isinstance(error, InternalError):
            self.logger.error("internal error: %s", error, exc_info=error)
        else:
            self.logger.warning("rejected: %s", error)

    def on_win(self):
        self.logger.info("game won")

    def on_loss(self):
        self.logger.info("game lost: no moves left")
