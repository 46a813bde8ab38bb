import dataclasses
import unittest

from spider_core.cards import Card, Suit
from spider_core.deck import SuitVariant
from spider_core.game_state import GameState, new_game
from spider_core.pile import CardInPile
from spider_core.tableau import Tableau
from spider_core.view import CardView, GameView, PileView, ViewProjector


class ViewProjectorTestCase(unittest.TestCase):
    def test_view_mirrors_state(self):
        state = new_game(SuitVariant.FOUR, seed=11)
        view = state.view()
        self.assertIsInstance(view, GameView)
        self.assertEqual(50, view.stock_count)
        self.assertEqual(0, view.completed_count)
        self.assertFalse(view.won)
        self.assertFalse(view.lost)
        self.assertEqual(10, len(view.piles))
        for pile, pile_view in zip(state.tableau, view.piles):
            expected = tuple(
                CardView(c.card.rank, int(c.card.suit), c.face_up) for c in pile.cards()
            )
            self.assertEqual(expected, pile_view.cards)

    def test_initial_layout_shape(self):
        view = new_game(SuitVariant.TWO, seed=5).view()
        self.assertEqual([6, 6, 6, 6, 5, 5, 5, 5, 5, 5], [len(p.cards) for p in view.piles])
        for pile in view.piles:
            self.assertTrue(pile.cards[-1].face_up)
            self.assertFalse(any(c.face_up for c in pile.cards[:-1]))

    def test_view_is_immutable(self):
        view = new_game(SuitVariant.ONE, seed=1).view()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            view.stock_count = 0
        with self.assertRaises(dataclasses.FrozenInstanceError):
            view.piles[0].cards[0].face_up = True
        self.assertIsInstance(view.piles, tuple)
        self.assertIsInstance(view.piles[0].cards, tuple)

    def test_view_does_not_follow_later_changes(self):
        state = new_game(SuitVariant.ONE, seed=1)
        view = state.view()
        state.deal_row()
        self.assertEqual(50, view.stock_count)
        self.assertEqual(6, len(view.piles[0].cards))
        self.assertEqual(40, state.view().stock_count)

    def test_empty_state(self):
        view = ViewProjector.snapshot(GameState())
        self.assertEqual(GameView(tuple(PileView(()) for _ in range(10)), 0, 0, False, False), view)

    def test_flags_and_completed_count(self):
        run = [Card(Suit.CLUBS, r) for r in range(13, 0, -1)]
        tableau = Tableau()
        tableau[2].add_cards([CardInPile(Card(Suit.HEARTS, 7), False)])
        state = GameState(tableau=tableau, completed=[run, run], won=True, lost=True)
        view = state.view()
        self.assertEqual(2, view.completed_count)
        self.assertTrue(view.won)
        self.assertTrue(view.lost)
        self.assertEqual(CardView(7, int(Suit.HEARTS), False), view.piles[2].cards[0])


if __name__ == "__main__":
    unittest.main()
