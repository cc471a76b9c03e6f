#!/usr/bin/env python3
"""
Curve Data Module
Multi-component animation tracks assembled from single-axis curves.

The host delivers one curve per component ("m_LocalPosition.x",
"m_LocalPosition.y", ...). A track gathers the components of one
property, and once every component is present converts the samples
to Maya space and serves per-axis values to the curve writer.
"""

from enum import Enum

import numpy as np

from .coordinates import convert_position, convert_rotation, convert_scale, frame_index
from .exceptions import MalformedTrackLength, IncompleteTrack


class CurveAxis(Enum):
    """Component label of a single-axis curve"""
    X = "x"
    Y = "y"
    Z = "z"
    W = "w"

    @classmethod
    def parse(cls, label):
        """Return the axis for a label, or None if unrecognized"""
        for axis in cls:
            if axis.value == label:
                return axis
        return None


class PropertyKind(Enum):
    """Transform property a track animates (value is the host property prefix)"""
    POSITION = "m_LocalPosition"
    ROTATION = "m_LocalRotation"
    SCALE = "m_LocalScale"

    @classmethod
    def parse(cls, prefix):
        """Return the kind for a property prefix, or None if unrecognized"""
        for kind in cls:
            if kind.value == prefix:
                return kind
        return None


def split_property_name(property_name):
    """Split "m_LocalPosition.x" into ("m_LocalPosition", "x")

    Args:
        property_name: Host property name

    Returns:
        tuple: (prefix, axis label); the label is "" when there is no dot
    """
    prefix, _, label = property_name.partition('.')
    return prefix, label


class CurveTrack:
    """Base track: keyframe times plus one raw column per required axis

    Attributes:
        path: Animated object path (e.g. "Sloth_Head2")
        type_name: Declared component type (e.g. "Transform")
        property_name: Property of the first merged fragment
        parent_name: Substituted for an empty first path segment
        data_size: Number of keyframes, fixed by the first fragment
        keyframe_times: Key times in seconds
        frame_rate: Clip frame rate
    """

    required_axes = (CurveAxis.X, CurveAxis.Y, CurveAxis.Z)

    def __init__(self, fragment, frame_rate, parent_name):
        if len(fragment) == 0:
            raise MalformedTrackLength(fragment.path, fragment.property_name, 1, 0)

        self.path = fragment.path
        self.type_name = fragment.declared_type.value
        self.property_name = fragment.property_name
        self.parent_name = parent_name
        self.data_size = len(fragment)
        self.keyframe_times = np.array(fragment.times, dtype=float)
        self.frame_rate = float(frame_rate)

        self._raw = np.zeros((self.data_size, len(self.required_axes)))
        self._added = {axis: False for axis in self.required_axes}
        self._converted = None

    @property
    def inter_frame_time(self):
        return 1.0 / self.frame_rate

    def accepts(self, axis):
        return axis in self._added

    def set_axis(self, axis, fragment):
        """Store one axis' values

        Args:
            axis: CurveAxis of the fragment
            fragment: CurveFragment with the same key count as the track

        Returns:
            bool: True when every required axis has been stored

        Raises:
            MalformedTrackLength: Key count differs (track left unchanged)
            ValueError: Axis is not part of this track
        """
        if len(fragment) != self.data_size:
            raise MalformedTrackLength(self.path, fragment.property_name,
                                       self.data_size, len(fragment))
        if not self.accepts(axis):
            raise ValueError(f"{type(self).__name__} has no '{axis.value}' component")

        column = self.required_axes.index(axis)
        self._raw[:, column] = fragment.values
        self._added[axis] = True
        self._converted = None
        return self.is_complete()

    def is_complete(self):
        return all(self._added.values())

    def missing_axes(self):
        return [axis for axis, added in self._added.items() if not added]

    def convert_to_maya(self, unit_scale=1.0):
        """Convert all samples to Maya space

        Raises:
            IncompleteTrack: If an axis is still missing
        """
        if not self.is_complete():
            raise IncompleteTrack(
                f"Cannot convert '{self.path}:{self.property_name}', missing "
                f"{', '.join(a.value for a in self.missing_axes())}"
            )
        self._converted = self._convert(self._raw, unit_scale)

    def _convert(self, raw, unit_scale):
        raise NotImplementedError

    def get_value(self, axis, index):
        """Converted value of one axis at one keyframe

        Args:
            axis: CurveAxis X, Y or Z
            index: Keyframe index (0 <= index < data_size)

        Returns:
            float: Converted value
        """
        if self._converted is None:
            raise IncompleteTrack(
                f"'{self.path}:{self.property_name}' has not been converted"
            )
        if not 0 <= index < self.data_size:
            raise IndexError(f"Keyframe {index} out of range (size {self.data_size})")
        column = (CurveAxis.X, CurveAxis.Y, CurveAxis.Z).index(axis)
        return float(self._converted[index][column])

    def frame_indices(self):
        """1-based Maya frame numbers of every keyframe"""
        return [frame_index(t, self.frame_rate) for t in self.keyframe_times]

    def __repr__(self):
        return f"{type(self).__name__}({self.path!r}, {self.data_size} keys)"


class PositionTrack(CurveTrack):
    """m_LocalPosition track, converted with the X mirror and unit scale"""

    kind = PropertyKind.POSITION

    def _convert(self, raw, unit_scale):
        return convert_position(raw, unit_scale)


class ScaleTrack(CurveTrack):
    """m_LocalScale track (conversion is the identity)"""

    kind = PropertyKind.SCALE

    def _convert(self, raw, unit_scale):
        return convert_scale(raw)


class RotationTrack(CurveTrack):
    """m_LocalRotation quaternion track, converted to Euler angles"""

    kind = PropertyKind.ROTATION
    required_axes = (CurveAxis.X, CurveAxis.Y, CurveAxis.Z, CurveAxis.W)

    def _convert(self, raw, unit_scale):
        return convert_rotation(raw)


TRACK_TYPES = {
    PropertyKind.POSITION: PositionTrack,
    PropertyKind.ROTATION: RotationTrack,
    PropertyKind.SCALE: ScaleTrack,
}


def create_track(kind, fragment, frame_rate, parent_name):
    """Factory function to create the track class for a property kind"""
    return TRACK_TYPES[kind](fragment, frame_rate, parent_name)
