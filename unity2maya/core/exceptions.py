#!/usr/bin/env python3
"""
Exceptions Module
Typed failures raised by the curve pass and the node writer.
"""


class ExportError(RuntimeError):
    """Base class for every export failure."""


class MalformedTrackLength(ExportError):
    """An axis fragment's sample count disagrees with its track's size.

    Non-fatal: the track is discarded and the clip pass carries on.
    """

    def __init__(self, path, property_name, expected, actual):
        self.path = path
        self.property_name = property_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Curve '{path}:{property_name}' has {actual} keys, "
            f"track expects {expected}"
        )


class UnrecognizedPropertyPath(ExportError):
    """A transform curve targets a property other than position/rotation/scale."""


class UnsupportedNodeKind(ExportError):
    """No writer is registered for a scene node's kind."""


class IncompleteTrack(ExportError):
    """A track was read or converted before all of its axes were merged."""


class SceneReadError(ExportError):
    """The scene description document could not be read."""
