import curses
import logging

import pytest

from conftest import FixedRng
from termtris.board import Board
from termtris.game_state import Action, GameState, TickResult
from termtris.run_curses import GameRunner, draw_board, init_colors, key_to_action
from termtris.tetromino import Tetromino, TetrominoKind


class FakeWindow:
    def __init__(self, height: int = 24, width: int = 80) -> None:
        self.size = (height, width)
        self.calls = []
        self.refreshed = 0

    def erase(self) -> None:
        self.calls.clear()

    def getmaxyx(self):
        return self.size

    def addstr(self, row, col, text, attr=0) -> None:
        self.calls.append((row, col, text, attr))

    def refresh(self) -> None:
        self.refreshed += 1


ATTRS = {kind: i for i, kind in enumerate(TetrominoKind, start=1)}
ATTRS[None] = 0


def test_key_bindings():
    assert key_to_action(curses.KEY_LEFT) is Action.MOVE_LEFT
    assert key_to_action(curses.KEY_RIGHT) is Action.MOVE_RIGHT
    assert key_to_action(curses.KEY_DOWN) is Action.SOFT_DROP
    assert key_to_action(curses.KEY_UP) is Action.ROTATE_CCW
    assert key_to_action(ord("x")) is Action.ROTATE_CW
    assert key_to_action(ord("z")) is Action.ROTATE_CCW
    assert key_to_action(ord("a")) is None


def test_draw_board_paints_double_width_cells():
    board = Board()
    board.place(Tetromino.spawn(TetrominoKind.O))
    window = FakeWindow()
    draw_board(window, board, ATTRS, top=1, left=4)
    assert len(window.calls) == 200
    assert (1, 4 + 5 * 2, "  ", ATTRS[TetrominoKind.O]) in window.calls
    assert (1, 4, "  ", 0) in window.calls
    assert max(col for _, col, _, _ in window.calls) == 4 + 9 * 2


def test_handle_key_applies_action_and_quits():
    state = GameState(rng=FixedRng(TetrominoKind.T))
    state.tick()
    runner = GameRunner(state)
    runner.running = True
    runner.handle_key(curses.KEY_RIGHT)
    assert state.active.position == (20, 5)
    runner.handle_key(ord("?"))
    assert runner.running
    runner.handle_key(ord("q"))
    assert not runner.running


def test_step_resets_after_game_over(clock, caplog):
    state = GameState(clock=clock, rng=FixedRng(TetrominoKind.O))
    for col in range(state.board.width):
        state.board.fill(20, col, TetrominoKind.I)
    runner = GameRunner(state)
    clock.advance(1.0)
    with caplog.at_level(logging.INFO, logger="termtris.run_curses"):
        assert runner.step() is TickResult.GAME_OVER
    assert runner.games_played == 1
    assert not state.board.grid.any()
    assert "Game over" in caplog.text
    assert runner.step() is None


def test_draw_centres_board_and_shows_help():
    runner = GameRunner(GameState())
    window = FakeWindow(24, 60)
    runner.draw(window, ATTRS)
    assert window.refreshed == 1
    cols = [col for row, col, _, _ in window.calls if row < 20]
    assert min(cols) == 20
    assert any(row == 20 and "quit" in text for row, _, text, _ in window.calls)


def test_draw_on_small_terminal():
    runner = GameRunner(GameState())
    window = FakeWindow(10, 40)
    runner.draw(window, ATTRS)
    assert window.calls == [(0, 0, "Terminal too small", 0)]


class FakeColors:
    """Records the colour set-up calls that ``init_colors`` makes."""

    def __init__(self, monkeypatch, *, can_change: bool, colors: int) -> None:
        self.pairs = {}
        self.custom = {}
        monkeypatch.setattr(curses, "start_color", lambda: None)
        monkeypatch.setattr(curses, "can_change_color", lambda: can_change)
        monkeypatch.setattr(curses, "COLORS", colors, raising=False)
        monkeypatch.setattr(curses, "init_pair", self.init_pair)
        monkeypatch.setattr(curses, "init_color", self.init_color)
        monkeypatch.setattr(curses, "color_pair", lambda pair: pair << 8)

    def init_pair(self, pair, fg, bg) -> None:
        self.pairs[pair] = (fg, bg)

    def init_color(self, color, r, g, b) -> None:
        self.custom[color] = (r, g, b)


def test_basic_colours_keep_pieces_distinct_from_background(monkeypatch):
    colors = FakeColors(monkeypatch, can_change=False, colors=8)
    attrs = init_colors()

    backgrounds = {kind: colors.pairs[attrs[kind] >> 8][1] for kind in attrs}
    empty = backgrounds.pop(None)
    assert colors.custom == {}
    assert len(set(backgrounds.values())) == len(TetrominoKind)
    assert empty not in backgrounds.values()


def test_custom_colours_use_piece_rgb(monkeypatch):
    colors = FakeColors(monkeypatch, can_change=True, colors=256)
    attrs = init_colors()

    assert len(colors.custom) == len(TetrominoKind)
    i_color = colors.pairs[attrs[TetrominoKind.I] >> 8][1]
    assert colors.custom[i_color] == (11, 254, 682)
    assert colors.pairs[attrs[None] >> 8][1] not in colors.custom


def test_runner_rejects_non_positive_fps():
    with pytest.raises(ValueError):
        GameRunner(GameState(), fps=0)
