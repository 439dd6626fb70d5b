from __future__ import annotations

from uvremap.io.report import format_markers


def test_format_markers_lists_every_position():
    assert format_markers("source", [(1, 2), (3, 4)]) == "source markers [2]: [(1, 2), (3, 4)]"
    assert format_markers("target", []) == "target markers [0]: []"


def test_format_markers_truncates_with_count():
    pts = [(1, 2), (3, 4), (5, 6)]
    assert format_markers("s", pts, limit=1) == "s markers [3]: [(1, 2), ... (+2 more)]"
    assert format_markers("s", pts, limit=-1) == "s markers [3]: [(1, 2), (3, 4), (5, 6)]"


def test_format_markers_limit_zero_has_no_leading_separator():
    assert format_markers("s", [(1, 2), (3, 4)], limit=0) == "s markers [2]: [... (+2 more)]"
