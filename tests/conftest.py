"""Pytest configuration and shared fixtures for plumb tests."""

import pytest

from plumb.geometry import Box


@pytest.fixture
def left_box():
    """Box on the left of a horizontal pair."""
    return Box.from_xywh(0, 0, 100, 50)


@pytest.fixture
def right_box():
    """Box 200 units to the right of left_box, on the same row."""
    return Box.from_xywh(300, 0, 100, 50)


@pytest.fixture
def row_boxes(left_box, right_box):
    """Node boxes keyed by id for the horizontal pair."""
    return {"a": left_box, "b": right_box}


@pytest.fixture
def obstacle():
    """Box sitting above the chord of the horizontal pair."""
    return Box.from_xywh(170, -40, 60, 30)
