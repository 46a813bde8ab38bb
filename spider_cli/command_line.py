from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Iterator

from spider_cli.printer import render
from spider_core.config import GameConfig, load_config
from spider_core.errors import InternalError, SpiderError
from spider_core.game_state import GameState, new_game
from spider_core.observer import LoggingObserver

HELP = """commands:
  mv <src> [start] <dest>  move the cards of pile src from index start onto pile dest
                           (without start, the whole movable run is moved)
  deal                     deal a row from the stock
  undo                     take back the last deal or move
  new                      start a new game with the same settings
  show                     print the table
  help                     print this help
  quit                     leave the game
"""


class ConsoleObserver(LoggingObserver):
    def __init__(self, out=None, logger: logging.Logger | None = None):
        super().__init__(logger)
        self.out = out if out is not None else sys.stdout

    def on_win(self):
        super().on_win()
        print("You win!", file=self.out)

    def on_loss(self):
        super().on_loss()
        print("No moves left. Game over!", file=self.out)


class CommandLine:
    def __init__(self, state: GameState, out=None, unicode_suits=True):
        self.state = state
        self.out = out if out is not None else sys.stdout
        self.unicode_suits = unicode_suits
        self.quit = False

    def print_all(self):
        print(render(self.state.view(), self.unicode_suits), file=self.out)

    def new_game(self):
        state = self.state
        self.state = new_game(state.variant, None, state.observer, state.history.limit)
        self.print_all()

    def game_over(self) -> bool:
        # Not on loss: undo and new stay available.
        return self.quit or self.state.won

    def execute(self, line: str):
        words = line.split()
        if not words:
            return
        command, params = words[0].lower(), words[1:]
        try:
            if command == "mv":
                self._move(params)
            elif command == "deal":
                self.state.deal_row()
                self.print_all()
            elif command == "new":
                self.new_game()
            elif command == "undo":
                self.state.undo()
                self.print_all()
            elif command == "show":
                self.print_all()
            elif command == "help":
                print(HELP, file=self.out, end="")
            elif command in ("quit", "exit"):
                self.quit = True
            else:
                print(f"Invalid command: {command} (try 'help')", file=self.out)
        except InternalError:
            # Already logged by the observer; the engine rolled the state back.
            print("Something went wrong, nothing was changed.", file=self.out)
        except SpiderError as e:
            print(f"Cannot do that: {e}", file=self.out)

    def _move(self, params):
        try:
            indices = [int(p) for p in params]
        except ValueError:
            print("Invalid index!", file=self.out)
            return
        if len(indices) == 3:
            src, start, dest = indices
        elif len(indices) == 2:
            src, dest = indices
            start = self.state.movable_start(src)
            if start is None:
                print("Nothing to move!", file=self.out)
                return
        else:
            print("Usage: mv <src> [start] <dest>", file=self.out)
            return
        self.state.move_sequence(src, start, dest)
        self.print_all()

    def run(self, commands: Iterable[str] | None = None):
        print("Game started!", file=self.out)
        self.print_all()
        for line in commands if commands is not None else _read_input():
            self.execute(line)
            if self.game_over():
                break


def _read_input() -> Iterator[str]:
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Spider Solitaire in the terminal.")
    parser.add_argument("--suits", type=int, choices=(1, 2, 4), default=None, help="Distinct suits in the deck.")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed for a reproducible deal.")
    parser.add_argument("--ascii", action="store_true", help="Use S/H/D/C instead of suit symbols.")
    parser.add_argument("--config", type=str, default="", help="Optional INI file with a [game] section.")
    parser.add_argument("--debug", action="store_true", help="Log engine events to stderr.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> GameConfig:
    config = load_config(args.config or None)
    if args.suits is not None:
        config.suits = args.suits
    if args.seed is not None:
        config.seed = args.seed
    if args.ascii:
        config.unicode_suits = False
    if args.debug:
        config.debug = True
    return config


def main(argv=None) -> int:
    config = build_config(parse_args(argv))
    logging.basicConfig(
        level=logging.INFO if config.debug else logging.ERROR,
        format="%(levelname)s: %(message)s",
    )
    try:
        state = new_game(config.variant, config.seed, ConsoleObserver(), config.history_limit)
    except SpiderError as e:
        print(f"deal failed: {e}", file=sys.stderr)
        return 1
    CommandLine(state, unicode_suits=config.unicode_suits).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
