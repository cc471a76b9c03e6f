#!/usr/bin/env python3
"""
Scene Data Module
Normalized scene description consumed by the Maya ASCII exporter.

The host editor walks its own scene and hands over these structures:
an ordered list of SceneNodes (one per exported entity), the extra
connections created while walking, and the animation clip whose curves
are turned into Maya animCurve nodes. Nothing in here knows about the
host's object model.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Any
from enum import Enum

from .coordinates import frame_index

Vector2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]
Color = Tuple[float, float, float]


class NodeKind(Enum):
    """Closed set of exportable node kinds, one writer each"""
    TRANSFORM = "transform"
    MESH = "mesh"
    SKINNED_MESH = "skinned_mesh"
    MATERIAL = "material"
    TEXTURE = "texture"
    SPOT_LIGHT = "spot_light"
    POINT_LIGHT = "point_light"
    DIRECTIONAL_LIGHT = "directional_light"
    AREA_LIGHT = "area_light"
    CAMERA = "camera"
    OBJECT_SET = "object_set"
    TWEAK = "tweak"
    GROUP_PARTS = "group_parts"
    GROUP_ID = "group_id"
    SHADING_ENGINE = "shading_engine"
    RAMP = "ramp"
    PLACE_2D_TEXTURE = "place_2d_texture"
    LAYERED_TEXTURE = "layered_texture"
    BUMP_2D = "bump_2d"
    MATERIAL_INFO = "material_info"
    BLEND_SHAPE = "blend_shape"
    TERRAIN_ALPHA = "terrain_alpha"


class CurveSourceType(Enum):
    """Component type a curve was recorded on"""
    SKINNED_MESH = "SkinnedMeshRenderer"
    TRANSFORM = "Transform"


@dataclass
class TransformData:
    """Local transform in host (Unity) space

    Attributes:
        position: [x, y, z] local translation
        rotation: (x, y, z, w) local rotation quaternion
        scale: [sx, sy, sz] local scale
    """
    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Quaternion = (0.0, 0.0, 0.0, 1.0)
    scale: Vector3 = (1.0, 1.0, 1.0)


@dataclass
class MeshGeometry:
    """Mesh geometry in host space

    Attributes:
        positions: List of vertex positions as [x, y, z] tuples
        indices: Face vertex indices (flattened)
        counts: Number of vertices per face
    """
    positions: List[Vector3]
    indices: List[int]
    counts: List[int]


@dataclass
class MeshData:
    """Mesh shape payload (plain and skinned meshes)

    Attributes:
        geometry: Vertex and face data
        shading_engine: Shading group the shape joins, None for the default group
        intermediate: True for the hidden "Orig" shape feeding a deformer chain
        blend_shape_targets: Names of the blend shape targets on this mesh
    """
    geometry: MeshGeometry
    shading_engine: Optional[str] = None
    intermediate: bool = False
    blend_shape_targets: List[str] = field(default_factory=list)


@dataclass
class MaterialData:
    """Blinn material payload

    Attributes:
        regular: False for materials whose colors are driven by textures only
        color: Main color (_Color)
        specular_color: Specular color (_SpecColor)
        emission_color: Incandescence color (_EmissionColor)
    """
    regular: bool = True
    color: Optional[Color] = None
    specular_color: Optional[Color] = None
    emission_color: Optional[Color] = None


@dataclass
class TextureFileData:
    """File texture payload, file_name is relative to the texture directory"""
    file_name: str


@dataclass
class RampData:
    colors: List[Color] = field(default_factory=list)


@dataclass
class Place2dTextureData:
    tiling: Vector2 = (1.0, 1.0)
    offset: Vector2 = (0.0, 0.0)


@dataclass
class LayeredTextureData:
    input_count: int = 0


@dataclass
class Bump2dData:
    bump_amount: float = 1.0


@dataclass
class GroupPartsData:
    """Group parts payload

    Attributes:
        force_all_verts: True for blend shape group parts (all vertices)
        face_indices: Faces of a sub-mesh, None to select all vertices
    """
    force_all_verts: bool = False
    face_indices: Optional[List[int]] = None


@dataclass
class LightData:
    """Light payload shared by the four light kinds

    Attributes:
        color: Light color
        intensity: Light intensity
        spot_angle: Cone angle in degrees (spot lights only)
        shadows: False when the light casts no shadows
    """
    color: Color = (1.0, 1.0, 1.0)
    intensity: float = 1.0
    spot_angle: float = 30.0
    shadows: bool = True


@dataclass
class CameraData:
    """Camera payload

    Attributes:
        field_of_view: Vertical field of view in degrees
        near_clip_plane: Near clip distance
        far_clip_plane: Far clip distance
    """
    field_of_view: float = 60.0
    near_clip_plane: float = 0.3
    far_clip_plane: float = 1000.0


@dataclass
class BlendShapeData:
    """Blend shape deformer payload

    Attributes:
        mesh_path: Host path of the skinned mesh the deformer drives; the
                   clip's blend shape weight curves are recorded on this path
        targets: Target names in declaration order (weight index order)
        weights: Static weights (0.0 to 1.0), defaults to all zero
    """
    mesh_path: str
    targets: List[str] = field(default_factory=list)
    weights: List[float] = field(default_factory=list)


@dataclass
class TerrainAlphaData:
    """Terrain splatmap payload, written as <image_name>.png"""
    image_name: str


@dataclass
class SceneNode:
    """One exported entity

    Attributes:
        name: Unique Maya node name
        kind: Node kind tag, selects the writer
        source_path: Host hierarchy path (e.g. "Sloth/Head")
        parent: Parent node for DAG placement (lookup only, not owned)
        data: Kind-specific payload
    """
    name: str
    kind: NodeKind
    source_path: str = ""
    parent: Optional['SceneNode'] = None
    data: Any = None

    @property
    def dag_path(self) -> str:
        """Full DAG path, e.g. "|Sloth|Head" """
        parts = []
        current = self
        while current is not None:
            parts.insert(0, current.name)
            current = current.parent
        return "|" + "|".join(parts)


@dataclass
class Connection:
    """A connectAttr statement

    Attributes:
        source: Source plug, e.g. "blendShape1.og[0]"
        destination: Destination plug
        next_available: Append -na (connect to next free array element)
    """
    source: str
    destination: str
    next_available: bool = False

    def to_mel(self) -> str:
        suffix = " -na" if self.next_available else ""
        return f'connectAttr "{self.source}" "{self.destination}"{suffix};'


@dataclass
class CurveFragment:
    """Single-component animation curve as delivered by the host

    Attributes:
        path: Animated object path relative to the clip root ("" is the root)
        declared_type: Component type the property belongs to
        property_name: e.g. "m_LocalPosition.x" or "blendShape.eyeBlink_L"
        keyframes: Ordered (time in seconds, value) pairs
    """
    path: str
    declared_type: CurveSourceType
    property_name: str
    keyframes: List[Tuple[float, float]] = field(default_factory=list)

    @property
    def times(self) -> List[float]:
        return [t for t, _ in self.keyframes]

    @property
    def values(self) -> List[float]:
        return [v for _, v in self.keyframes]

    def __len__(self):
        return len(self.keyframes)


@dataclass
class AnimationClip:
    """Curve-bearing clip

    Attributes:
        name: Clip name
        frame_rate: Samples per second
        curves: Fragments in host delivery order
    """
    name: str
    frame_rate: float
    curves: List[CurveFragment] = field(default_factory=list)

    @property
    def last_frame(self) -> int:
        """1-based index of the last keyed frame (1 for an empty clip)"""
        last = 1
        for curve in self.curves:
            for time, _ in curve.keyframes:
                last = max(last, frame_index(time, self.frame_rate))
        return last


@dataclass
class ExportAnomaly:
    """Non-fatal problem found during the curve pass

    Attributes:
        kind: One of 'malformed_track_length', 'incomplete_track',
              'unrecognized_axis', 'unmatched_curve'
        path: Curve path
        property_name: Curve property
        message: Human-readable description
    """
    kind: str
    path: str
    property_name: str
    message: str


@dataclass
class ExportReport:
    """Anomalies collected over one export pass"""
    anomalies: List[ExportAnomaly] = field(default_factory=list)

    def add(self, kind, path, property_name, message):
        self.anomalies.append(ExportAnomaly(kind, path, property_name, message))

    def by_kind(self, kind) -> List[ExportAnomaly]:
        return [a for a in self.anomalies if a.kind == kind]

    def summary_lines(self) -> List[str]:
        """Generate human-readable summary of skipped/incomplete tracks"""
        if not self.anomalies:
            return []
        lines = [f"Skipped or incomplete curves: {len(self.anomalies)}"]
        for anomaly in self.anomalies:
            lines.append(f"  - [{anomaly.kind}] {anomaly.message}")
        return lines


@dataclass
class SceneMetadata:
    """Scene-level metadata

    Attributes:
        scene_name: Host scene name
        source_file_path: Path of the scene description that was read
        application: Host application name, written as fileInfo
    """
    scene_name: str
    source_file_path: str = ""
    application: str = "Unity"


@dataclass
class SceneData:
    """Complete scene description handed to the exporter

    Attributes:
        metadata: Scene-level information
        nodes: Nodes in host enumeration order (must be preserved)
        connections: Connections collected while walking the scene
        clip: Animation clip to export, None for a static export
    """
    metadata: SceneMetadata
    nodes: List[SceneNode] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    clip: Optional[AnimationClip] = None

    def get_node_by_name(self, name: str) -> Optional[SceneNode]:
        """Find node by name

        Args:
            name: Node name to find

        Returns:
            SceneNode if found, None otherwise
        """
        for node in self.nodes:
            if node.name == name:
                return node
        return None
