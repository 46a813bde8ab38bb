from spider_core.cards import RANK_NAMES, Suit
from spider_core.view import CardView, GameView

FACE_DOWN = "##"


def format_card(card: CardView, unicode_suits=True) -> str:
    if not card.face_up:
        return FACE_DOWN
    suit = Suit(card.suit)
    return RANK_NAMES[card.rank - 1] + (suit.symbol if unicode_suits else suit.letter)


def render(view: GameView, unicode_suits=True) -> str:
    lines = [
        f"Stock: {view.stock_count} | Completed: {view.completed_count} | Won: {view.won} | Lost: {view.lost}"
    ]
    # one line per pile, bottom to top
    for i, pile in enumerate(view.piles):
        cards = ", ".join(format_card(c, unicode_suits) for c in pile.cards)
        lines.append(f"p{i}: {cards}".rstrip())
    return "\n".join(lines) + "\n"
