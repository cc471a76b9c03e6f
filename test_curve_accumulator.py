#!/usr/bin/env python3
"""
Tests for the per-(node, property) curve accumulator
"""

import pytest

from unity2maya.core.curve_accumulator import CurveAccumulator
from unity2maya.core.curve_data import PropertyKind, PositionTrack
from unity2maya.core.exceptions import MalformedTrackLength
from unity2maya.core.scene_data import CurveFragment, CurveSourceType, ExportReport


def fragment(path, prop, values):
    keys = [(i / 30.0, v) for i, v in enumerate(values)]
    return CurveFragment(path, CurveSourceType.TRANSFORM, prop, keys)


def merge(acc, path, kind, label, values):
    prop = f"{kind.value}.{label}"
    return acc.begin_or_merge(path, kind, label, fragment(path, prop, values), "Root")


def test_track_completes_on_last_axis():
    acc = CurveAccumulator(30)
    track, complete = merge(acc, "/Head", PropertyKind.POSITION, "x", [1.0])
    assert isinstance(track, PositionTrack)
    assert not complete
    assert acc.is_collecting("/Head", PropertyKind.POSITION)

    _, complete = merge(acc, "/Head", PropertyKind.POSITION, "y", [2.0])
    assert not complete
    same, complete = merge(acc, "/Head", PropertyKind.POSITION, "z", [3.0])
    assert complete
    assert same is track
    assert not acc.is_collecting("/Head", PropertyKind.POSITION)


def test_interleaved_nodes_do_not_mix():
    acc = CurveAccumulator(30)
    head, _ = merge(acc, "/Head", PropertyKind.POSITION, "x", [1.0])
    arm, _ = merge(acc, "/Arm", PropertyKind.POSITION, "x", [5.0, 6.0])
    merge(acc, "/Head", PropertyKind.POSITION, "y", [1.0])
    merge(acc, "/Arm", PropertyKind.POSITION, "y", [5.0, 6.0])

    assert head is not arm
    assert len(acc.pending()) == 2

    _, complete = merge(acc, "/Head", PropertyKind.POSITION, "z", [1.0])
    assert complete
    assert acc.pending() == [arm]


def test_properties_of_one_node_are_separate_slots():
    acc = CurveAccumulator(30)
    position, _ = merge(acc, "/Head", PropertyKind.POSITION, "x", [0.0])
    scale, _ = merge(acc, "/Head", PropertyKind.SCALE, "x", [1.0])
    assert position is not scale
    assert acc.is_collecting("/Head", PropertyKind.SCALE)


def test_malformed_length_discards_slot():
    acc = CurveAccumulator(30)
    merge(acc, "/Head", PropertyKind.POSITION, "x", [1.0, 2.0])

    with pytest.raises(MalformedTrackLength):
        merge(acc, "/Head", PropertyKind.POSITION, "y", [1.0])

    assert not acc.is_collecting("/Head", PropertyKind.POSITION)


def test_unrecognized_axis_is_reported():
    report = ExportReport()
    acc = CurveAccumulator(30, report)
    _, complete = merge(acc, "/Head", PropertyKind.POSITION, "w", [1.0])

    assert not complete
    assert len(report.by_kind('unrecognized_axis')) == 1


def test_finish_reports_incomplete_tracks():
    report = ExportReport()
    acc = CurveAccumulator(30, report)
    merge(acc, "/Head", PropertyKind.ROTATION, "x", [0.0])
    merge(acc, "/Head", PropertyKind.ROTATION, "y", [0.0])

    leftovers = acc.finish()

    assert len(leftovers) == 1
    assert acc.pending() == []
    anomalies = report.by_kind('incomplete_track')
    assert len(anomalies) == 1
    assert "missing z, w" in anomalies[0].message


def test_progress_callback_receives_warnings():
    messages = []
    acc = CurveAccumulator(30, progress_callback=messages.append)
    merge(acc, "/Head", PropertyKind.SCALE, "x", [1.0])
    acc.finish()
    assert any("incomplete" in m for m in messages)


def test_merging_an_axis_twice_does_not_complete():
    acc = CurveAccumulator(30)
    merge(acc, "/Head", PropertyKind.POSITION, "x", [1.0])
    _, complete = merge(acc, "/Head", PropertyKind.POSITION, "x", [1.0])
    assert not complete
    _, complete = merge(acc, "/Head", PropertyKind.POSITION, "y", [2.0])
    assert not complete
    assert acc.is_collecting("/Head", PropertyKind.POSITION)

    _, complete = merge(acc, "/Head", PropertyKind.POSITION, "z", [3.0])
    assert complete
    assert acc.pending() == []
