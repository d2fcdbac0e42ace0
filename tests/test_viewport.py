import pytest

from sitefx.core.state import Rect
from sitefx.services.viewport import ManualViewportSource, Margin, intersection_entry

ROOT = Rect(0, 0, 1000, 800)
SHRUNK = Margin(bottom=-40)


def test_box_fully_inside_root():
    entry = intersection_entry(Rect(100, 100, 200, 100), ROOT, Margin())
    assert entry.is_intersecting
    assert entry.ratio == 1.0


def test_partial_overlap_ratio():
    entry = intersection_entry(Rect(0, 750, 100, 100), ROOT, Margin())
    assert entry.is_intersecting
    assert entry.ratio == pytest.approx(0.5)


def test_box_outside_root():
    entry = intersection_entry(Rect(0, 900, 100, 100), ROOT, Margin())
    assert not entry.is_intersecting
    assert entry.ratio == 0.0


def test_negative_bottom_margin_needs_more_than_40px():
    assert intersection_entry(Rect(0, 759, 100, 100), ROOT, SHRUNK).is_intersecting
    assert not intersection_entry(Rect(0, 760, 100, 100), ROOT, SHRUNK).is_intersecting
    assert not intersection_entry(Rect(0, 761, 100, 100), ROOT, SHRUNK).is_intersecting


def test_positive_margin_grows_root():
    entry = intersection_entry(Rect(0, 810, 100, 100), ROOT, Margin(bottom=20))
    assert entry.is_intersecting
    assert entry.ratio == pytest.approx(0.1)


def test_empty_box_never_intersects():
    entry = intersection_entry(Rect(10, 10, 0, 50), ROOT, Margin())
    assert not entry.is_intersecting


def test_place_applies_each_subscribers_margin():
    source = ManualViewportSource()
    target = object()
    plain, shrunk = [], []
    source.observe(target, 0.0, Margin(), plain.append)
    source.observe(target, 0.0, SHRUNK, shrunk.append)
    source.place(target, Rect(0, 770, 100, 100), ROOT)
    assert plain[0].is_intersecting
    assert plain[0].ratio == pytest.approx(0.3)
    assert not shrunk[0].is_intersecting
