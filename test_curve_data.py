#!/usr/bin/env python3
"""
Tests for multi-axis curve tracks
"""

import pytest

from unity2maya.core.curve_data import (
    CurveAxis, PropertyKind, PositionTrack, RotationTrack, ScaleTrack,
    create_track, split_property_name,
)
from unity2maya.core.exceptions import MalformedTrackLength, IncompleteTrack
from unity2maya.core.scene_data import CurveFragment, CurveSourceType


def fragment(prop, values, path="/Head"):
    keys = [(i / 30.0, v) for i, v in enumerate(values)]
    return CurveFragment(path, CurveSourceType.TRANSFORM, prop, keys)


def test_split_property_name():
    assert split_property_name("m_LocalPosition.x") == ("m_LocalPosition", "x")
    assert split_property_name("m_IsActive") == ("m_IsActive", "")


def test_parse_helpers():
    assert PropertyKind.parse("m_LocalRotation") is PropertyKind.ROTATION
    assert PropertyKind.parse("m_Color") is None
    assert CurveAxis.parse("w") is CurveAxis.W
    assert CurveAxis.parse("q") is None


def test_create_track_picks_class():
    first = fragment("m_LocalPosition.x", [0.0])
    assert isinstance(create_track(PropertyKind.POSITION, first, 30, "Root"), PositionTrack)
    assert isinstance(create_track(PropertyKind.ROTATION, first, 30, "Root"), RotationTrack)
    assert isinstance(create_track(PropertyKind.SCALE, first, 30, "Root"), ScaleTrack)


def test_position_track_completes_and_converts():
    track = PositionTrack(fragment("m_LocalPosition.x", [1.0, 2.0]), 30, "Root")
    assert track.data_size == 2
    assert not track.set_axis(CurveAxis.X, fragment("m_LocalPosition.x", [1.0, 2.0]))
    assert not track.set_axis(CurveAxis.Y, fragment("m_LocalPosition.y", [3.0, 4.0]))
    assert track.missing_axes() == [CurveAxis.Z]
    assert track.set_axis(CurveAxis.Z, fragment("m_LocalPosition.z", [5.0, 6.0]))

    track.convert_to_maya()
    assert track.get_value(CurveAxis.X, 1) == -2.0
    assert track.get_value(CurveAxis.Y, 0) == 3.0
    assert track.get_value(CurveAxis.Z, 1) == 6.0
    assert track.frame_indices() == [1, 2]


def test_position_track_unit_scale():
    track = PositionTrack(fragment("m_LocalPosition.x", [1.0]), 30, "Root")
    for axis, prop in ((CurveAxis.X, "x"), (CurveAxis.Y, "y"), (CurveAxis.Z, "z")):
        track.set_axis(axis, fragment(f"m_LocalPosition.{prop}", [1.0]))
    track.convert_to_maya(unit_scale=100.0)
    assert track.get_value(CurveAxis.X, 0) == -100.0
    assert track.get_value(CurveAxis.Y, 0) == 100.0


def test_mismatched_length_leaves_track_unchanged():
    track = PositionTrack(fragment("m_LocalPosition.x", [1.0, 2.0]), 30, "Root")
    track.set_axis(CurveAxis.X, fragment("m_LocalPosition.x", [1.0, 2.0]))

    with pytest.raises(MalformedTrackLength) as excinfo:
        track.set_axis(CurveAxis.Y, fragment("m_LocalPosition.y", [1.0, 2.0, 3.0]))

    assert excinfo.value.expected == 2
    assert excinfo.value.actual == 3
    assert track.missing_axes() == [CurveAxis.Y, CurveAxis.Z]


def test_empty_fragment_rejected():
    with pytest.raises(MalformedTrackLength):
        PositionTrack(fragment("m_LocalPosition.x", []), 30, "Root")


def test_rotation_track_needs_w():
    track = RotationTrack(fragment("m_LocalRotation.x", [0.0]), 30, "Root")
    for label in "xyz":
        track.set_axis(CurveAxis.parse(label), fragment(f"m_LocalRotation.{label}", [0.0]))
    assert not track.is_complete()
    assert track.set_axis(CurveAxis.W, fragment("m_LocalRotation.w", [1.0]))

    track.convert_to_maya()
    assert track.get_value(CurveAxis.X, 0) == pytest.approx(0.0)
    assert track.get_value(CurveAxis.Z, 0) == pytest.approx(0.0)


def test_position_track_rejects_w():
    track = PositionTrack(fragment("m_LocalPosition.x", [0.0]), 30, "Root")
    assert not track.accepts(CurveAxis.W)
    with pytest.raises(ValueError):
        track.set_axis(CurveAxis.W, fragment("m_LocalPosition.w", [0.0]))


def test_scale_track_is_identity():
    track = ScaleTrack(fragment("m_LocalScale.x", [2.0]), 30, "Root")
    track.set_axis(CurveAxis.X, fragment("m_LocalScale.x", [2.0]))
    track.set_axis(CurveAxis.Y, fragment("m_LocalScale.y", [3.0]))
    track.set_axis(CurveAxis.Z, fragment("m_LocalScale.z", [4.0]))
    track.convert_to_maya(unit_scale=100.0)
    assert [track.get_value(a, 0) for a in (CurveAxis.X, CurveAxis.Y, CurveAxis.Z)] == [2.0, 3.0, 4.0]


def test_incomplete_track_cannot_be_read():
    track = PositionTrack(fragment("m_LocalPosition.x", [1.0]), 30, "Root")
    track.set_axis(CurveAxis.X, fragment("m_LocalPosition.x", [1.0]))

    with pytest.raises(IncompleteTrack):
        track.convert_to_maya()
    with pytest.raises(IncompleteTrack):
        track.get_value(CurveAxis.X, 0)


def test_get_value_out_of_range():
    track = ScaleTrack(fragment("m_LocalScale.x", [1.0]), 30, "Root")
    for label in "xyz":
        track.set_axis(CurveAxis.parse(label), fragment(f"m_LocalScale.{label}", [1.0]))
    track.convert_to_maya()
    with pytest.raises(IndexError):
        track.get_value(CurveAxis.X, 1)


def test_repeated_axis_does_not_complete_track():
    track = PositionTrack(fragment("m_LocalPosition.x", [1.0]), 30, "Root")
    assert not track.set_axis(CurveAxis.X, fragment("m_LocalPosition.x", [1.0]))
    assert not track.set_axis(CurveAxis.X, fragment("m_LocalPosition.x", [2.0]))
    assert not track.set_axis(CurveAxis.Y, fragment("m_LocalPosition.y", [3.0]))
    assert not track.is_complete()
    assert track.set_axis(CurveAxis.Z, fragment("m_LocalPosition.z", [4.0]))


def test_repeated_w_does_not_complete_rotation():
    track = RotationTrack(fragment("m_LocalRotation.x", [0.0]), 30, "Root")
    for label in ("x", "y", "w", "w"):
        assert not track.set_axis(CurveAxis.parse(label), fragment(f"m_LocalRotation.{label}", [0.0]))
    assert track.missing_axes() == [CurveAxis.Z]
