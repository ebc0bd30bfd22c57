"""Shared fixtures for the test suite."""

import matplotlib
import pytest

matplotlib.use("Agg")


# Classic example puzzle and its unique solution
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def as_lines(flat: str) -> str:
    """Nine-line text form of an 81-character puzzle."""
    return "\n".join(flat[i:i + 9] for i in range(0, 81, 9)) + "\n"


@pytest.fixture
def puzzle_file(tmp_path):
    """Write a puzzle (81 chars or free text) to a file and return its path."""
    def write(text: str, name: str = "puzzle.txt") -> str:
        if len(text) == 81 and "\n" not in text:
            text = as_lines(text)
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return write
