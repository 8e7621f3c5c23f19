"""Grid sizing policy."""

from __future__ import annotations

import logging

import pytest

from backend.models.grid import (
    MAX_COLS,
    MAX_ROWS,
    clamp_level,
    compute_dimensions,
)


@pytest.mark.parametrize("level", range(1, 31))
def test_dimensions_follow_level_formula(level: int) -> None:
    dims = compute_dimensions(level)
    assert dims.cols == min(5 + (level - 1) * 2, 14)
    assert dims.rows == min(4 + (level - 1) * 2, 12)
    assert 1 <= dims.cols <= MAX_COLS
    assert 1 <= dims.rows <= MAX_ROWS


def test_level_one_is_five_by_four() -> None:
    dims = compute_dimensions(1)
    assert (dims.cols, dims.rows) == (5, 4)
    assert not dims.capped
    assert dims.note(1) == ""


def test_last_uncapped_level_has_no_note() -> None:
    dims = compute_dimensions(5)
    assert (dims.cols, dims.rows) == (13, 12)
    assert not dims.capped


def test_capped_level_explains_itself() -> None:
    dims = compute_dimensions(6)
    assert (dims.cols, dims.rows) == (14, 12)
    assert dims.capped
    assert dims.note(6) == (
        "Level 6 requested 15x14 but capped to 14x12 for usability."
    )


def test_capping_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="backend.models.grid"):
        compute_dimensions(8)
    assert "capped to 14x12" in caplog.text


def test_level_below_one_is_rejected() -> None:
    with pytest.raises(ValueError):
        compute_dimensions(0)


@pytest.mark.parametrize("level, expected", [(-3, 1), (0, 1), (7, 7), (20, 20), (21, 20)])
def test_clamp_level(level: int, expected: int) -> None:
    assert clamp_level(level) == expected
