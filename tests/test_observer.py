import logging
import unittest
from unittest.mock import patch

from spider_core.cards import Card, Suit
from spider_core.deck import SuitVariant
from spider_core.errors import ErrorKind, InternalError, MoveError, PileError
from spider_core.game_state import GameState, new_game
from spider_core.observer import LOGGER_NAME, LoggingObserver
from spider_core.pile import CardInPile, Pile
from spider_core.tableau import Tableau


class LoggingObserverTestCase(unittest.TestCase):
    def test_game_flow_is_logged(self):
        with self.assertLogs(LOGGER_NAME, level=logging.INFO) as logs:
            state = new_game(SuitVariant.ONE, seed=2, observer=LoggingObserver())
            state.deal_row()
            state.undo()
        self.assertIn("INFO:spider_core:new game: stock=50 completed=0 won=False lost=False", logs.output)
        self.assertIn("INFO:spider_core:event: DealEvent(count=10)", logs.output)
        self.assertIn("INFO:spider_core:undo: UndoEvent(remaining=0)", logs.output)

    def test_rejected_request_is_a_warning(self):
        state = GameState(observer=LoggingObserver())
        with self.assertLogs(LOGGER_NAME, level=logging.WARNING) as logs:
            with self.assertRaises(MoveError):
                state.move_sequence(0, 0, 1)
        self.assertEqual(1, len(logs.records))
        self.assertEqual(logging.WARNING, logs.records[0].levelno)
        self.assertIn(ErrorKind.INVALID_START_INDEX.value, logs.output[0])

    def test_internal_error_is_logged_with_traceback(self):
        tableau = Tableau()
        tableau[0].add_cards([CardInPile(Card(Suit.SPADES, 7), True)])
        tableau[1].add_cards([CardInPile(Card(Suit.SPADES, 8), True)])
        state = GameState(tableau=tableau, observer=LoggingObserver())
        failure = PileError(ErrorKind.INVALID_START_INDEX)
        with patch.object(Pile, "remove_cards_from", side_effect=failure):
            with self.assertLogs(LOGGER_NAME, level=logging.ERROR) as logs:
                with self.assertRaises(InternalError):
                    state.move_sequence(0, 0, 1)
        record = logs.records[0]
        self.assertEqual(logging.ERROR, record.levelno)
        self.assertIsNotNone(record.exc_info)

    def test_custom_logger(self):
        logger = logging.getLogger("spider_test_table")
        run = [Card(Suit.SPADES, r) for r in range(13, 0, -1)]
        state = GameState(completed=[run] * 8, observer=LoggingObserver(logger))
        with self.assertLogs(logger, level=logging.INFO) as logs:
            state.check_win()
            state.check_win()
        self.assertEqual(["INFO:spider_test_table:game won"], logs.output)


if __name__ == "__main__":
    unittest.main()
