"""Unit tests for puzzle generator."""

import os

import pytest

from wfc_sudoku.core.grid import Grid
from wfc_sudoku.core.parser import load_grid
from wfc_sudoku.core.validator import has_unique_solution, is_consistent, is_valid_solution
from wfc_sudoku.generator import SudokuGenerator, Difficulty


class TestSudokuGenerator:
    """Tests for SudokuGenerator class."""

    def test_generate_creates_valid_puzzle(self):
        """Test that generated puzzles are valid."""
        generator = SudokuGenerator(seed=42)
        puzzle = generator.generate(Difficulty.EASY)

        assert is_consistent(puzzle)
        assert puzzle.count_superposed() > 0
        assert puzzle.count_fixed() >= Difficulty.EASY.clue_range[0]
        assert has_unique_solution(puzzle)

    def test_generate_with_solution(self):
        """Test generating puzzle with solution."""
        generator = SudokuGenerator(seed=7)
        puzzle, solution = generator.generate_with_solution(Difficulty.MEDIUM)

        assert is_valid_solution(solution)
        # Every clue agrees with the solution
        clues = puzzle.values != 0
        assert (puzzle.values[clues] == solution.values[clues]).all()

    def test_clues_are_givens(self):
        """Generated clues are marked as givens."""
        puzzle = SudokuGenerator(seed=1).generate(Difficulty.EASY)
        assert (puzzle.givens == (puzzle.values != 0)).all()

    def test_generate_batch(self):
        """Test batch generation."""
        generator = SudokuGenerator(seed=42)
        puzzles = generator.generate_batch(2, Difficulty.EASY)

        assert len(puzzles) == 2
        for puzzle in puzzles:
            assert is_consistent(puzzle)

    def test_same_seed_same_puzzle(self):
        """Seeded generators are reproducible."""
        a = SudokuGenerator(seed=123).generate(Difficulty.EASY)
        b = SudokuGenerator(seed=123).generate(Difficulty.EASY)
        assert a.to_string() == b.to_string()

    def test_save_to_folder(self, tmp_path):
        """Saved puzzles load back unchanged."""
        puzzles = SudokuGenerator(seed=3).generate_batch(2, Difficulty.EASY)
        folder = str(tmp_path / "easy")
        SudokuGenerator.save_to_folder(puzzles, folder, prefix="easy")

        assert sorted(os.listdir(folder)) == ["easy_1.txt", "easy_2.txt"]
        loaded = load_grid(os.path.join(folder, "easy_1.txt"))
        assert loaded.to_string() == puzzles[0].to_string()


class TestDifficultyLevels:
    """Test difficulty level clue ranges."""

    def test_easy_clue_range(self):
        """Easy should have 36-45 clues."""
        assert Difficulty.EASY.clue_range == (36, 45)

    def test_expert_clue_range(self):
        """Expert never goes below 17 clues."""
        min_clues, max_clues = Difficulty.EXPERT.clue_range
        assert min_clues >= 17
        assert max_clues <= 22

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_ranges_ordered(self, difficulty):
        min_clues, max_clues = difficulty.clue_range
        assert min_clues <= max_clues


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
