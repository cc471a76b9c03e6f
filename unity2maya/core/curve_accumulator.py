#!/usr/bin/env python3
"""
Curve Accumulator Module
Gathers single-axis curves into complete position/rotation/scale tracks.

One slot exists per (node, property kind). A slot is Idle until the first
axis of a property arrives, Collecting while further axes are merged, and
goes back to Idle the moment the track is complete; the completed track is
handed back to the caller for conversion and emission and is not reused.
Curves of different nodes may arrive interleaved.
"""

from .curve_data import CurveAxis, create_track
from .exceptions import MalformedTrackLength


class CurveAccumulator:
    """Per-(node, property kind) state machine over incoming axis curves"""

    def __init__(self, frame_rate, report=None, progress_callback=None):
        """Initialize accumulator

        Args:
            frame_rate: Clip frame rate stored on every track
            report: Optional ExportReport receiving anomalies
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
        """
        self.frame_rate = frame_rate
        self.report = report
        self.progress_callback = progress_callback
        self._slots = {}

    def log(self, message):
        """Send progress/status message"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def is_collecting(self, node_key, kind):
        return (node_key, kind) in self._slots

    def pending(self):
        """Tracks currently in the Collecting state"""
        return list(self._slots.values())

    def begin_or_merge(self, node_key, kind, axis_label, fragment, parent_name):
        """Start a track for (node_key, kind) or merge an axis into it

        Args:
            node_key: Identity of the animated node (the curve path)
            kind: PropertyKind of the fragment
            axis_label: "x", "y", "z" or "w"
            fragment: CurveFragment holding the axis' keyframes
            parent_name: Name used for an empty first path segment

        Returns:
            tuple: (track, is_complete). A complete track has left its slot.

        Raises:
            MalformedTrackLength: Key count differs from the track's size;
                                  the slot is discarded
        """
        key = (node_key, kind)
        track = self._slots.get(key)
        if track is None:
            track = create_track(kind, fragment, self.frame_rate, parent_name)
            self._slots[key] = track

        axis = CurveAxis.parse(axis_label)
        if axis is None or not track.accepts(axis):
            message = (f"Ignoring unrecognized axis '{axis_label}' on "
                       f"'{fragment.path}:{fragment.property_name}'")
            self.log(f"  ⚠ {message}")
            if self.report is not None:
                self.report.add('unrecognized_axis', fragment.path,
                                fragment.property_name, message)
            return track, False

        try:
            complete = track.set_axis(axis, fragment)
        except MalformedTrackLength:
            del self._slots[key]
            raise

        if complete:
            del self._slots[key]
        return track, complete

    def finish(self):
        """End the clip: report and drop every track still collecting

        Returns:
            list: The discarded incomplete tracks
        """
        leftovers = list(self._slots.values())
        self._slots.clear()

        for track in leftovers:
            missing = ', '.join(axis.value for axis in track.missing_axes())
            message = (f"Track '{track.path}:{track.kind.value}' incomplete at "
                       f"end of clip (missing {missing})")
            self.log(f"  ⚠ {message}")
            if self.report is not None:
                self.report.add('incomplete_track', track.path,
                                track.property_name, message)
        return leftovers
