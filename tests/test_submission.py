import unittest

from arrowword.core.constants import Direction
from arrowword.core.models import Arrow, Cell, Grid, Puzzle
from arrowword.engine.play_state import PlayState
from arrowword.engine.submission import is_solved, submit


def make_puzzle() -> Puzzle:
    cells = (Cell(fixed="Arc"), Cell(), Cell(), Cell(fixed="Gale"), Cell(), Cell())
    arrows = (
        Arrow(source=0, target=1, direction=Direction.RIGHT),
        Arrow(source=1, target=2, direction=Direction.RIGHT),
    )
    return Puzzle(
        id="2024-05-01",
        date="2024-05-01",
        grid=Grid(rows=2, cols=3, cells=cells, arrows=arrows),
        solutions={1: "bow", 2: "storm"},
    )


class SubmitScenarioTests(unittest.TestCase):
    def test_partial_then_full_solve(self) -> None:
        puzzle = make_puzzle()
        state = PlayState()
        state.set_entry(1, "bow")
        state.set_entry(2, "strom")

        first = submit(puzzle, state)
        self.assertFalse(first.all_correct)
        self.assertEqual(state.locked_cells, {1})
        self.assertEqual(state.incorrect_cells, {2})
        self.assertEqual(state.entries[2], "")
        self.assertEqual(first.newly_locked, [1])
        self.assertEqual(first.newly_incorrect, [2])

        state.set_entry(2, "storm")
        second = submit(puzzle, state)
        self.assertTrue(second.all_correct)
        self.assertEqual(state.locked_cells, {1, 2})
        self.assertEqual(state.incorrect_cells, set())
        self.assertEqual(state.attempts, 2)
        self.assertEqual(second.newly_locked, [2])

    def test_untouched_cells_are_not_flagged(self) -> None:
        puzzle = make_puzzle()
        state = PlayState()
        state.set_entry(1, "bow")
        result = submit(puzzle, state)
        self.assertFalse(result.all_correct)
        self.assertEqual(state.incorrect_cells, set())
        self.assertNotIn(2, state.locked_cells)

    def test_revealed_prefix_counts_towards_answer(self) -> None:
        puzzle = make_puzzle()
        state = PlayState(focused_cell=2)
        state.reveal_letter(puzzle)
        state.reveal_letter(puzzle)
        state.set_entry(2, "STORM")
        state.set_entry(1, "bow")
        self.assertTrue(submit(puzzle, state).all_correct)

    def test_wrong_value_with_only_reveal_is_not_flagged(self) -> None:
        puzzle = make_puzzle()
        state = PlayState(focused_cell=2)
        state.reveal_letter(puzzle)
        submit(puzzle, state)
        self.assertNotIn(2, state.incorrect_cells)
        self.assertEqual(state.reveals[2], "s")

    def test_lock_iff_display_matches(self) -> None:
        puzzle = make_puzzle()
        state = PlayState(entries={1: "bow", 2: "storms"})
        submit(puzzle, state)
        for index, word in puzzle.solutions.items():
            self.assertEqual(state.display_value(index) == word, index in state.locked_cells)

    def test_submit_after_solved_still_counts(self) -> None:
        puzzle = make_puzzle()
        state = PlayState(entries={1: "bow", 2: "storm"})
        submit(puzzle, state)
        locked = set(state.locked_cells)
        result = submit(puzzle, state)
        self.assertTrue(result.all_correct)
        self.assertEqual(state.attempts, 2)
        self.assertEqual(state.locked_cells, locked)
        self.assertEqual(result.newly_locked, [])

    def test_submit_without_puzzle_is_noop(self) -> None:
        state = PlayState()
        result = submit(None, state)
        self.assertFalse(result.all_correct)
        self.assertEqual(state.attempts, 0)


class IsSolvedTests(unittest.TestCase):
    def test_is_solved_is_side_effect_free(self) -> None:
        puzzle = make_puzzle()
        state = PlayState(entries={1: "bow", 2: "storm"})
        self.assertFalse(is_solved(puzzle, state))
        self.assertEqual(state.attempts, 0)
        submit(puzzle, state)
        self.assertTrue(is_solved(puzzle, state))
        self.assertTrue(is_solved(puzzle, state))

    def test_is_solved_without_puzzle(self) -> None:
        self.assertFalse(is_solved(None, PlayState()))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
