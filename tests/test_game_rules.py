"""Tests for Connect 4 boards, results and states."""

import numpy as np
import pytest

from connect4tree.game import (
    ROWS,
    COLS,
    DRAW,
    ONGOING,
    Board,
    ColumnFullError,
    GameState,
    InvalidTurnError,
    Player,
    Result,
)

R, Y = Player.RED, Player.YELLOW


class TestBoard:
    def test_empty_board(self):
        board = Board.empty()
        assert board.cells.shape == (COLS, ROWS)
        assert np.all(board.cells == Player.EMPTY)

    def test_custom_size(self):
        board = Board.empty(4, 3)
        assert board.width == 4
        assert board.height == 3

    def test_invalid_size_raises(self):
        with pytest.raises(ValueError):
            Board.empty(0, 6)

    def test_piece_drops_to_bottom(self):
        board = Board.empty()
        row = board.play(3, R)
        assert row == 0
        assert board[3, 0] == R

    def test_pieces_stack(self):
        board = Board.empty()
        board.play(3, R)
        row = board.play(3, Y)
        assert row == 1
        assert board[3, 1] == Y

    def test_column_full_raises(self):
        board = Board.empty()
        player = R
        for _ in range(ROWS):
            board.play(0, player)
            player = player.flip()

        assert board.is_column_full(0)
        with pytest.raises(ColumnFullError):
            board.play(0, player)

    def test_column_full_is_value_error(self):
        board = Board.from_columns([[1, 2]], height=2)
        with pytest.raises(ValueError):
            board.play(0, R)

    def test_from_turn_full_column(self):
        board = Board.from_columns([[1, 2], []], height=2)
        assert board.from_turn(0, R) is None
        assert board.from_turn(1, R) is not None

    def test_from_turn_copies(self):
        board = Board.empty()
        new_board = board.from_turn(2, R)
        assert board[2, 0] == Player.EMPTY
        assert new_board[2, 0] == R

    def test_invalid_column_raises(self):
        board = Board.empty()
        with pytest.raises(ValueError):
            board.play(-1, R)
        with pytest.raises(ValueError):
            board.play(COLS, R)

    def test_empty_piece_raises(self):
        with pytest.raises(ValueError):
            Board.empty().play(0, Player.EMPTY)

    def test_from_moves_alternates(self):
        board = Board.from_moves([3, 3, 4])
        assert list(board.column(3)) == [R, Y]
        assert list(board.column(4)) == [R]

    def test_count_pieces(self):
        board = Board.from_moves([0, 1, 2, 3, 4])
        assert board.count_pieces() == (3, 2)


class TestCanonical:
    def test_mirror_is_equal(self):
        left = Board.from_moves([0, 1])
        right = Board.from_moves([6, 5])
        assert left == right
        assert hash(left) == hash(right)
        assert left.canonical().cells.tobytes() == right.canonical().cells.tobytes()

    def test_canonical_idempotent(self):
        for moves in ([], [0], [6], [2, 4, 4], [6, 6, 5, 0]):
            board = Board.from_moves(moves)
            once = board.canonical()
            twice = once.canonical()
            assert np.array_equal(once.cells, twice.cells)

    def test_canonical_is_smaller(self):
        board = Board.from_moves([6])
        canonical = board.canonical()
        assert canonical.cells.tobytes() <= board.mirror().cells.tobytes()
        assert canonical.cells.tobytes() <= board.cells.tobytes()

    def test_different_boards_not_equal(self):
        assert Board.from_moves([0]) != Board.from_moves([1])

    def test_different_sizes_not_equal(self):
        assert Board.empty(7, 6) != Board.empty(6, 7)

    def test_usable_as_dict_key(self):
        table = {Board.from_moves([1, 2]): 5}
        assert table[Board.from_moves([5, 4])] == 5

    def test_mirror_reverses_columns(self):
        board = Board.from_moves([0])
        assert board.mirror()[COLS - 1, 0] == R


class TestWinDetection:
    def test_horizontal_win(self):
        board = Board.from_columns([[1], [1], [1], [1], [], [], []])
        assert Result.from_board(board) == Result.win(R)

    def test_vertical_win(self):
        board = Board.from_columns([[2, 2, 2, 2], [], [], [], [], [], []])
        assert Result.from_board(board) == Result.win(Y)

    def test_diagonal_up_right_win(self):
        board = Board.from_columns([[1], [2, 1], [2, 2, 1], [2, 2, 2, 1], [], [], []])
        assert Result.from_board(board) == Result.win(R)

    def test_diagonal_up_left_win(self):
        board = Board.from_columns([[2, 2, 2, 1], [2, 2, 1], [2, 1], [1], [], [], []])
        assert Result.from_board(board) == Result.win(R)

    def test_no_win_three_in_row(self):
        board = Board.from_columns([[1], [1], [1], [], [], [], []])
        assert Result.from_board(board) == ONGOING

    def test_empty_board_ongoing(self):
        result = Result.from_board(Board.empty())
        assert result.is_ongoing
        assert not result.is_terminal

    def test_win_at_right_edge(self):
        board = Board.from_columns([[], [], [], [2], [2], [2], [2]])
        assert Result.from_board(board) == Result.win(Y)


class TestDrawDetection:
    def test_full_small_board_draw(self):
        board = Board.from_columns([[1, 2], [2, 1], [1, 2]], height=2)
        result = Result.from_board(board)
        assert result == DRAW
        assert result.is_terminal

    def test_full_board_with_line_is_win(self):
        board = Board.from_columns([[1, 2], [1, 2], [1, 2], [1, 2]], height=2)
        assert Result.from_board(board) == Result.win(R)


class TestResult:
    def test_win_requires_winner(self):
        from connect4tree.game import Outcome

        with pytest.raises(ValueError):
            Result(Outcome.WIN)
        with pytest.raises(ValueError):
            Result(Outcome.DRAW, R)

    def test_str(self):
        assert str(Result.win(Y)) == "yellow won"
        assert str(DRAW) == "draw"


class TestPlayer:
    def test_flip(self):
        assert R.flip() == Y
        assert Y.flip() == R

    def test_flip_empty_is_fatal(self):
        with pytest.raises(InvalidTurnError):
            Player.EMPTY.flip()

    def test_parse(self):
        assert Player.parse("Red") == R
        assert Player.parse("yellow") == Y
        with pytest.raises(ValueError):
            Player.parse("green")


class TestGameState:
    def test_from_board_computes_result(self):
        board = Board.from_columns([[1], [1], [1], [1], [], [], []])
        state = GameState.from_board(board, Y)
        assert state.result == Result.win(R)
        assert state.children == []
        assert state.index is None

    def test_empty_turn_rejected(self):
        with pytest.raises(ValueError):
            GameState.from_board(Board.empty(), Player.EMPTY)

    def test_from_turn_flips_turn(self):
        state = GameState.from_board(Board.empty(), R)
        child = state.from_turn(3)
        assert child.turn == Y
        assert child.board[3, 0] == R
        assert child.result.is_ongoing
        assert child.index is None
        # Parent untouched
        assert state.board[3, 0] == Player.EMPTY

    def test_from_turn_full_column(self):
        board = Board.from_columns([[1, 2], []], height=2)
        state = GameState.from_board(board, R)
        assert state.from_turn(0) is None
        assert state.from_turn(1) is not None

    def test_completing_three_wins(self):
        board = Board.from_columns([[1], [1], [1], [], [], [], []])
        state = GameState.from_board(board, R)
        child = state.from_turn(3)
        assert child.result == Result.win(R)

    def test_flip_on_empty_turn_is_fatal(self):
        state = GameState(board=Board.empty(), turn=Player.EMPTY, result=ONGOING)
        with pytest.raises(InvalidTurnError):
            state.from_turn(0)

    def test_count_pieces(self):
        state = GameState.from_board(Board.from_moves([0, 0, 1]), Y)
        assert state.count_pieces() == (2, 1)


class TestRender:
    def test_render_empty(self):
        output = Board.empty().render()
        assert "." in output
        assert "X" not in output
        assert "O" not in output

    def test_render_with_pieces(self):
        output = Board.from_moves([3, 3]).render()
        assert "X" in output
        assert "O" in output

    def test_bottom_row_printed_last(self):
        lines = Board.from_moves([0]).render().splitlines()
        assert lines[-2].startswith("|X|")

    def test_state_str(self):
        state = GameState.from_board(Board.empty(), R)
        assert "State: ?" in str(state)
        assert "red to move" in str(state)
