import pytest

from polymacher.game import (
    Block,
    BoardState,
    Color,
    Goal,
    WallGrid,
    apply_move,
    can_move,
    is_satisfied,
    load_level,
    propagate_absorption,
)
from polymacher.game.rules import DIRECTIONS, GoalStatus, goal_status


def _bare_board(poly, inert=(), goals=()):
    return BoardState(walls=WallGrid(9, 9), poly=list(poly), inert=list(inert), goals=list(goals))


# --- movement ---------------------------------------------------------------

def test_move_into_wall_is_rejected_and_changes_nothing(make_board):
    board = make_board([1, 4, "red"], [["block", 5, 5, "red"], ["goal", 6, 6, "any"]])
    before = board.copy()
    assert not can_move(board, -1, 0)
    outcome = apply_move(board, -1, 0)
    assert outcome.rejected
    assert not outcome.moved
    assert board == before


def test_move_off_the_board_is_rejected():
    board = _bare_board([Block(0, 0, Color.RED), Block(1, 0, Color.RED)])
    before = board.copy()
    for dx, dy in [(-1, 0), (0, -1)]:
        assert apply_move(board, dx, dy).rejected
    assert board == before
    assert can_move(board, 1, 0)
    assert can_move(board, 0, 1)


def test_any_cluster_member_hitting_a_wall_blocks_the_whole_move(make_board):
    board = make_board([3, 3, "red"], [["wall", 5, 4]])
    board.poly.append(Block(4, 4, Color.RED))
    assert can_move(board, 0, -1)
    assert not can_move(board, 1, 0)
    assert apply_move(board, 1, 0).rejected
    assert board.poly == [Block(3, 3, Color.RED), Block(4, 4, Color.RED)]


def test_can_move_does_not_mutate(make_board):
    board = make_board([4, 4, "red"], [["block", 5, 4, "red"]])
    before = board.copy()
    for dx, dy in DIRECTIONS:
        can_move(board, dx, dy)
    assert board == before


@pytest.mark.parametrize("vector", [(1, 1), (0, 0), (2, 0), (0, -2)])
def test_only_unit_orthogonal_moves_are_accepted(make_board, vector):
    board = make_board([4, 4, "red"])
    with pytest.raises(ValueError):
        can_move(board, *vector)
    with pytest.raises(ValueError):
        apply_move(board, *vector)


def test_valid_move_translates_the_cluster_rigidly(make_board):
    board = make_board([3, 3, "red"])
    board.poly.extend([Block(4, 3, Color.RED), Block(4, 4, Color.BLUE)])
    offsets = [(b.x - board.parent.x, b.y - board.parent.y) for b in board.poly]
    before = list(board.poly)

    outcome = apply_move(board, 0, 1)
    assert outcome.moved
    assert not outcome.absorbed_any
    for old, new in zip(before, board.poly):
        assert (new.x - old.x, new.y - old.y) == (0, 1)
        assert new.color is old.color
    assert [(b.x - board.parent.x, b.y - board.parent.y) for b in board.poly] == offsets


def test_open_path_scenario_reaches_the_goal(make_level):
    level = make_level(
        [1, 6, "red"],
        [
            ["walls", 0, 0, 8, 8],
            ["clears", 1, 6, 7, 6],
            ["clears", 7, 2, 7, 6],
            ["goal", 7, 2, "any"],
        ],
    )
    board = load_level(level)
    for _ in range(6):
        assert apply_move(board, 1, 0).moved
        assert not is_satisfied(board)
    for _ in range(4):
        assert apply_move(board, 0, -1).moved
    assert board.parent.pos == (7, 2)
    assert is_satisfied(board)


# --- absorption -------------------------------------------------------------

def test_moving_next_to_an_inert_block_absorbs_it(make_board):
    board = make_board([4, 4, "red"], [["block", 4, 6, "red"]])
    outcome = apply_move(board, 0, 1)
    assert outcome.moved
    assert outcome.absorbed_any
    assert board.inert == []
    assert board.poly == [Block(4, 5, Color.RED), Block(4, 6, Color.RED)]


def test_diagonal_neighbours_are_not_absorbed(make_board):
    board = make_board([2, 2, "red"], [["block", 4, 3, "red"]])
    outcome = apply_move(board, 1, 0)
    assert outcome.moved
    assert not outcome.absorbed_any
    assert board.parent.pos == (3, 2)
    assert board.parent.distance_sq(board.inert[0]) == 2
    assert board.inert == [Block(4, 3, Color.RED)]


def test_block_on_the_same_cell_is_absorbed():
    board = _bare_board([Block(3, 3, Color.RED)], inert=[Block(3, 3, Color.BLUE)])
    assert propagate_absorption(board)
    assert board.poly == [Block(3, 3, Color.RED), Block(3, 3, Color.BLUE)]


def test_chain_is_absorbed_within_one_move(make_board):
    # listed far end first so the scan has to restart after each absorption
    board = make_board(
        [1, 4, "red"],
        [["block", 5, 4, "blue"], ["block", 4, 4, "green"], ["block", 3, 4, "red"]],
    )
    outcome = apply_move(board, 1, 0)
    assert outcome.absorbed_any
    assert board.inert == []
    assert board.poly == [
        Block(2, 4, Color.RED),
        Block(3, 4, Color.RED),
        Block(4, 4, Color.GREEN),
        Block(5, 4, Color.BLUE),
    ]


def test_absorption_follows_inert_list_order():
    board = _bare_board(
        [Block(4, 4, Color.RED)],
        inert=[Block(8, 8, Color.RED), Block(4, 3, Color.GREEN), Block(5, 4, Color.BLUE)],
    )
    assert propagate_absorption(board)
    assert board.poly[1:] == [Block(4, 3, Color.GREEN), Block(5, 4, Color.BLUE)]
    assert board.inert == [Block(8, 8, Color.RED)]


def test_propagation_reaches_a_fixpoint():
    board = _bare_board([Block(4, 4, Color.RED)], inert=[Block(4, 5, Color.RED), Block(7, 7, Color.RED)])
    assert propagate_absorption(board)
    snapshot = board.copy()
    assert not propagate_absorption(board)
    assert board == snapshot


def test_absorbed_blocks_move_with_the_cluster(make_board):
    board = make_board([4, 4, "red"], [["block", 4, 6, "red"]])
    apply_move(board, 0, 1)
    apply_move(board, 0, -1)
    assert board.poly == [Block(4, 4, Color.RED), Block(4, 5, Color.RED)]


# --- goals ------------------------------------------------------------------

def test_wildcard_goal_accepts_any_color():
    for color in (Color.RED, Color.GREEN, Color.BLUE):
        board = _bare_board([Block(2, 2, color)], goals=[Goal(2, 2, Color.ANY)])
        assert is_satisfied(board)


def test_colored_goal_rejects_wrong_color():
    board = _bare_board([Block(2, 2, Color.BLUE)], goals=[Goal(2, 2, Color.RED)])
    assert goal_status(board, board.goals[0]) is GoalStatus.MISMATCHED
    assert not is_satisfied(board)


def test_colored_goal_accepts_matching_color():
    board = _bare_board(
        [Block(2, 2, Color.BLUE), Block(3, 2, Color.RED)],
        goals=[Goal(2, 2, Color.BLUE), Goal(3, 2, Color.RED)],
    )
    assert is_satisfied(board)


def test_uncovered_goal_is_unoccupied():
    board = _bare_board([Block(2, 2, Color.RED)], goals=[Goal(2, 2, Color.ANY), Goal(5, 5, Color.ANY)])
    assert goal_status(board, board.goals[0]) is GoalStatus.SATISFIED
    assert goal_status(board, board.goals[1]) is GoalStatus.UNOCCUPIED
    assert not is_satisfied(board)


def test_inert_blocks_never_satisfy_goals():
    board = _bare_board([Block(0, 0, Color.RED)], inert=[Block(5, 5, Color.RED)], goals=[Goal(5, 5, Color.ANY)])
    assert not is_satisfied(board)


def test_goal_evaluation_is_idempotent(make_board):
    board = make_board([4, 4, "red"], [["goal", 4, 4, "any"], ["goal", 5, 5, "red"]])
    first = is_satisfied(board)
    before = board.copy()
    assert is_satisfied(board) == first
    assert board == before
