#!/usr/bin/env python3
"""
Animation Curve Writer Module
Emits Maya animCurve nodes for an animation clip.

Transform curves arrive one axis at a time and are assembled into
position/rotation/scale tracks by the CurveAccumulator; each completed
track becomes three animCurve nodes wired to the target transform's
.t/.r/.s channels. Blend shape weight curves are scalar and are written
directly, then wired to the blendShape node's weight array.

Every function here only appends to the line buffer it is given.
"""

from unity2maya.core.coordinates import frame_index
from unity2maya.core.curve_accumulator import CurveAccumulator
from unity2maya.core.curve_data import CurveAxis, PropertyKind, split_property_name
from unity2maya.core.exceptions import MalformedTrackLength, UnrecognizedPropertyPath
from unity2maya.core.naming import UniqueNameRegistry, resolve, sanitize_name
from unity2maya.core.scene_data import CurveSourceType
from .mel_format import format_float

# Key tangent type written on every curve (auto)
TANGENT_TYPE = 18

BLEND_SHAPE_PROPERTY = "blendShape"
# Host blend shape weights are percentages, Maya weights are 0..1
BLEND_SHAPE_WEIGHT_FACTOR = 0.01

# Per property kind: (animCurve node type, [(axis, node postfix, attribute postfix), ...])
CURVE_CHANNELS = {
    PropertyKind.POSITION: ("animCurveTL", [
        (CurveAxis.X, "_LocalPositionx", ".tx"),
        (CurveAxis.Y, "_LocalPositiony", ".ty"),
        (CurveAxis.Z, "_LocalPositionz", ".tz"),
    ]),
    PropertyKind.ROTATION: ("animCurveTA", [
        (CurveAxis.X, "_LocalRotationx", ".rx"),
        (CurveAxis.Y, "_LocalRotationy", ".ry"),
        (CurveAxis.Z, "_LocalRotationz", ".rz"),
    ]),
    PropertyKind.SCALE: ("animCurveTU", [
        (CurveAxis.X, "_LocalScalex", ".sx"),
        (CurveAxis.Y, "_LocalScaley", ".sy"),
        (CurveAxis.Z, "_LocalScalez", ".sz"),
    ]),
}


def _keyframe_table(frames, values):
    count = len(frames)
    keys = ' '.join(f"{frame} {format_float(value)}" for frame, value in zip(frames, values))
    return f'    setAttr -s {count} ".ktv[0:{count - 1}]" {keys};'


def _curve_header(node_type, node_name):
    return [
        f'createNode {node_type} -n "{node_name}";',
        f'    setAttr ".tan" {TANGENT_TYPE};',
        f'    setAttr ".wgt" no;',
    ]


def emit_curve(lines, track, scheme, node_type, axis, node_postfix, attr_postfix):
    """Append one animCurve node for one axis of a converted track

    Args:
        lines: Output line buffer
        track: Complete, converted CurveTrack
        scheme: NameScheme of the track
        node_type: animCurveTL / animCurveTA / animCurveTU
        axis: CurveAxis to read from the track
        node_postfix: Appended to the node name prefix (e.g. "_LocalPositionx")
        attr_postfix: Appended to the attribute prefix (e.g. ".tx")
    """
    node_name = scheme.node_name(node_postfix)
    frames = track.frame_indices()
    values = [track.get_value(axis, k) * scheme.key_value_factor
              for k in range(track.data_size)]

    lines.extend(_curve_header(node_type, node_name))
    lines.append(_keyframe_table(frames, values))
    lines.append(f'connectAttr "{node_name}.o" "{scheme.attr_path(attr_postfix)}";')
    return node_name


def emit_track(lines, track):
    """Append the three per-axis animCurve nodes of a converted track

    Returns:
        list: Names of the emitted animCurve nodes
    """
    scheme = resolve(track.path, track.property_name, track.parent_name)
    node_type, channels = CURVE_CHANNELS[track.kind]
    return [emit_curve(lines, track, scheme, node_type, axis, node_postfix, attr_postfix)
            for axis, node_postfix, attr_postfix in channels]


def emit_scalar_curve(lines, node_name, node_type, keyframes, frame_rate, key_value_factor=1.0):
    """Append a single-channel animCurve node (no connection)

    Args:
        lines: Output line buffer
        node_name: animCurve node name
        node_type: animCurve node type
        keyframes: (time, value) pairs
        frame_rate: Clip frame rate
        key_value_factor: Multiplier applied to every value
    """
    frames = [frame_index(time, frame_rate) for time, _ in keyframes]
    values = [value * key_value_factor for _, value in keyframes]

    lines.extend(_curve_header(node_type, node_name))
    lines.append(_keyframe_table(frames, values))


class ClipCurveWriter:
    """Writes one clip's curves during a single export pass"""

    def __init__(self, clip, frame_rate, settings, report, progress_callback=None, registry=None):
        """Initialize writer

        Args:
            clip: AnimationClip to export
            frame_rate: Frame rate used for time -> frame conversion
            settings: ExportSettings (unit scale for positions)
            report: ExportReport receiving non-fatal anomalies
            progress_callback: Optional function to call for progress updates
            registry: UniqueNameRegistry holding the names already in the scene
        """
        self.clip = clip
        self.frame_rate = frame_rate
        self.settings = settings
        self.report = report
        self.progress_callback = progress_callback
        self.registry = registry if registry is not None else UniqueNameRegistry()
        self.transform_curves_written = False
        self._claimed = set()

    def log(self, message):
        """Send progress/status message"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def write_transform_curves(self, lines, parent_name):
        """Assemble and emit every transform curve of the clip (once per pass)

        Args:
            lines: Output line buffer
            parent_name: Name substituted for the clip root's empty path

        Returns:
            int: Number of tracks emitted

        Raises:
            UnrecognizedPropertyPath: A transform curve animates an unsupported property
        """
        if self.transform_curves_written:
            return 0
        self.transform_curves_written = True

        accumulator = CurveAccumulator(self.frame_rate, self.report, self.progress_callback)
        emitted = 0

        for index, fragment in enumerate(self.clip.curves):
            if fragment.declared_type != CurveSourceType.TRANSFORM:
                continue
            self._claimed.add(index)

            prefix, axis_label = split_property_name(fragment.property_name)
            kind = PropertyKind.parse(prefix)
            if kind is None:
                raise UnrecognizedPropertyPath(
                    f"Unsupported transform property '{fragment.property_name}' "
                    f"on '{fragment.path}'"
                )

            try:
                track, complete = accumulator.begin_or_merge(
                    fragment.path, kind, axis_label, fragment, parent_name
                )
            except MalformedTrackLength as e:
                self.log(f"  ⚠ Skipping track: {e}")
                self.report.add('malformed_track_length', fragment.path,
                                fragment.property_name, str(e))
                continue

            if complete:
                track.convert_to_maya(self.settings.unit_scale)
                for node_name in emit_track(lines, track):
                    self.registry.reserve(node_name)
                emitted += 1

        accumulator.finish()
        self.log(f"  Transform tracks exported: {emitted}")
        return emitted

    def write_blend_shape_curves(self, lines, blend_shape_node):
        """Emit the weight curves of one blendShape node and connect them

        Args:
            lines: Output line buffer
            blend_shape_node: BLEND_SHAPE SceneNode

        Returns:
            int: Number of weight curves emitted
        """
        data = blend_shape_node.data
        curve_names = {}

        for index, fragment in enumerate(self.clip.curves):
            if fragment.declared_type != CurveSourceType.SKINNED_MESH:
                continue
            if fragment.path != data.mesh_path:
                continue
            self._claimed.add(index)

            prefix, _, target = fragment.property_name.partition('.')
            if prefix != BLEND_SHAPE_PROPERTY or target not in data.targets:
                self._skip(fragment, 'unmatched_curve',
                           f"'{fragment.path}:{fragment.property_name}' matches no "
                           f"target of {blend_shape_node.name}")
                continue
            if target in curve_names:
                self._skip(fragment, 'unmatched_curve',
                           f"Duplicate weight curve for target '{target}'")
                continue
            if len(fragment) == 0:
                self._skip(fragment, 'malformed_track_length',
                           f"'{fragment.path}:{fragment.property_name}' has no keys")
                continue

            curve_name = self._weight_curve_name(blend_shape_node.name, target)
            emit_scalar_curve(lines, curve_name, "animCurveTU", fragment.keyframes,
                              self.frame_rate, BLEND_SHAPE_WEIGHT_FACTOR)
            curve_names[target] = curve_name

        for weight_index, target in enumerate(data.targets):
            if target in curve_names:
                lines.append(f'connectAttr "{curve_names[target]}.o" '
                             f'"{blend_shape_node.name}.w[{weight_index}]";')

        self.log(f"  Blend shape curves exported for {blend_shape_node.name}: {len(curve_names)}")
        return len(curve_names)

    def _weight_curve_name(self, blend_shape_name, target):
        """Target name, or "<blendShape>_<target>" when another node already has it"""
        base = sanitize_name(target.split('.')[-1])
        if base in self.registry:
            base = f"{blend_shape_name}_{base}"
        return self.registry.claim(base)

    def report_unclaimed(self):
        """Record curves no node consumed during the pass"""
        for index, fragment in enumerate(self.clip.curves):
            if index in self._claimed:
                continue
            self._skip(fragment, 'unmatched_curve',
                       f"'{fragment.path}:{fragment.property_name}' was not exported "
                       f"(no matching {fragment.declared_type.value} node)")

    def _skip(self, fragment, kind, message):
        self.log(f"  ⚠ {message}")
        self.report.add(kind, fragment.path, fragment.property_name, message)
