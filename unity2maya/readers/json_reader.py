#!/usr/bin/env python3
"""
JSON Reader Module
Reads the scene description dumped by the Unity editor script

Document layout:

    {
      "scene": {"name": "Sloth", "application": "Unity"},
      "nodes": [
        {"name": "Sloth", "kind": "transform", "path": "Sloth", "parent": null,
         "data": {"position": [0, 0, 0], "rotation": [0, 0, 0, 1], "scale": [1, 1, 1]}},
        {"name": "SlothShape", "kind": "skinned_mesh", "path": "Sloth",
         "parent": "Sloth", "data": {"positions": [...], "indices": [...],
         "counts": [...], "blend_shape_targets": ["eyeBlink_L"]}}
      ],
      "connections": [{"source": "a.o", "destination": "b.i", "next_available": false}],
      "clip": {"name": "Take 001", "frame_rate": 30,
               "curves": [{"path": "Sloth", "type": "Transform",
                           "property": "m_LocalPosition.x", "keys": [[0, 1], [1, 2]]}]}
    }

Parents are referenced by name and must appear before their children.
"""

import json
from dataclasses import fields
from typing import List, Optional

from unity2maya.core.exceptions import SceneReadError
from unity2maya.core.scene_data import (
    SceneMetadata, SceneNode, NodeKind, Connection, AnimationClip, CurveFragment,
    CurveSourceType, TransformData, MeshGeometry, MeshData, MaterialData,
    TextureFileData, RampData, Place2dTextureData, LayeredTextureData, Bump2dData,
    GroupPartsData, LightData, CameraData, BlendShapeData, TerrainAlphaData,
)
from .base_reader import BaseReader

MESH_GEOMETRY_KEYS = ('positions', 'indices', 'counts')

# Payload dataclass per node kind (None = no payload)
PAYLOAD_TYPES = {
    NodeKind.TRANSFORM: TransformData,
    NodeKind.MESH: MeshData,
    NodeKind.SKINNED_MESH: MeshData,
    NodeKind.MATERIAL: MaterialData,
    NodeKind.TEXTURE: TextureFileData,
    NodeKind.SPOT_LIGHT: LightData,
    NodeKind.POINT_LIGHT: LightData,
    NodeKind.DIRECTIONAL_LIGHT: LightData,
    NodeKind.AREA_LIGHT: LightData,
    NodeKind.CAMERA: CameraData,
    NodeKind.OBJECT_SET: None,
    NodeKind.TWEAK: None,
    NodeKind.GROUP_PARTS: GroupPartsData,
    NodeKind.GROUP_ID: None,
    NodeKind.SHADING_ENGINE: None,
    NodeKind.RAMP: RampData,
    NodeKind.PLACE_2D_TEXTURE: Place2dTextureData,
    NodeKind.LAYERED_TEXTURE: LayeredTextureData,
    NodeKind.BUMP_2D: Bump2dData,
    NodeKind.MATERIAL_INFO: None,
    NodeKind.BLEND_SHAPE: BlendShapeData,
    NodeKind.TERRAIN_ALPHA: TerrainAlphaData,
}


class JSONSceneReader(BaseReader):
    """Reader for .json scene descriptions"""

    def __init__(self, file_path: str, progress_callback=None):
        super().__init__(file_path, progress_callback)
        self._document = None
        self._nodes_cache = None

    def get_format_name(self) -> str:
        return "Unity JSON"

    @property
    def document(self) -> dict:
        """Parsed document (cached)"""
        if self._document is None:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    self._document = json.load(f)
            except OSError as e:
                raise SceneReadError(f"Cannot read scene file {self.file_path}: {e}")
            except json.JSONDecodeError as e:
                raise SceneReadError(f"Invalid JSON in {self.file_path.name}: {e}")
            if not isinstance(self._document, dict):
                raise SceneReadError(f"{self.file_path.name}: top level must be an object")
        return self._document

    def get_metadata(self) -> SceneMetadata:
        scene = self.document.get('scene', {})
        return SceneMetadata(
            scene_name=scene.get('name', self.file_path.stem),
            source_file_path=str(self.file_path),
            application=scene.get('application', 'Unity'),
        )

    def get_nodes(self) -> List[SceneNode]:
        """Build SceneNodes in document order, resolving parent names (cached)"""
        if self._nodes_cache is not None:
            return self._nodes_cache

        nodes = []
        by_name = {}
        for index, entry in enumerate(self.document.get('nodes', [])):
            name = entry.get('name')
            if not name:
                raise SceneReadError(f"Node #{index} has no name")
            if name in by_name:
                raise SceneReadError(f"Duplicate node name '{name}'")

            try:
                kind = NodeKind(entry.get('kind'))
            except ValueError:
                raise SceneReadError(f"Node '{name}' has unknown kind {entry.get('kind')!r}")

            parent = None
            parent_name = entry.get('parent')
            if parent_name:
                parent = by_name.get(parent_name)
                if parent is None:
                    raise SceneReadError(
                        f"Node '{name}' references parent '{parent_name}' "
                        f"that is not declared before it"
                    )

            node = SceneNode(
                name=name,
                kind=kind,
                source_path=entry.get('path', ''),
                parent=parent,
                data=self._parse_payload(name, kind, entry.get('data')),
            )
            nodes.append(node)
            by_name[name] = node

        self._nodes_cache = nodes
        return nodes

    def _parse_payload(self, name, kind, payload):
        payload_type = PAYLOAD_TYPES[kind]
        if payload_type is None:
            return None
        payload = dict(payload or {})

        if payload_type is MeshData:
            geometry_args = {key: payload.pop(key, []) for key in MESH_GEOMETRY_KEYS}
            counts = geometry_args['counts']
            if sum(counts) != len(geometry_args['indices']):
                raise SceneReadError(
                    f"Mesh '{name}': face counts cover {sum(counts)} indices, "
                    f"got {len(geometry_args['indices'])}"
                )
            payload['geometry'] = MeshGeometry(
                positions=[tuple(p) for p in geometry_args['positions']],
                indices=list(geometry_args['indices']),
                counts=list(counts),
            )

        known = {f.name for f in fields(payload_type)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise SceneReadError(f"Node '{name}' ({kind.value}): unknown data keys {unknown}")

        try:
            return payload_type(**payload)
        except TypeError as e:
            raise SceneReadError(f"Node '{name}' ({kind.value}): {e}")

    def get_connections(self) -> List[Connection]:
        connections = []
        for entry in self.document.get('connections', []):
            try:
                connections.append(Connection(
                    source=entry['source'],
                    destination=entry['destination'],
                    next_available=bool(entry.get('next_available', False)),
                ))
            except KeyError as e:
                raise SceneReadError(f"Connection is missing {e}")
        return connections

    def get_clip(self, frame_rate: Optional[float] = None) -> Optional[AnimationClip]:
        """Build the animation clip

        Args:
            frame_rate: Overrides the clip's own frame rate when given

        Returns:
            AnimationClip, or None if the document has no clip
        """
        clip = self.document.get('clip')
        if not clip:
            return None

        curves = []
        for index, entry in enumerate(clip.get('curves', [])):
            try:
                declared_type = CurveSourceType(entry['type'])
            except KeyError as e:
                raise SceneReadError(f"Curve #{index} is missing {e}")
            except ValueError:
                raise SceneReadError(f"Curve #{index} has unsupported type {entry['type']!r}")

            try:
                keyframes = [(float(t), float(v)) for t, v in entry.get('keys', [])]
            except (TypeError, ValueError):
                raise SceneReadError(f"Curve #{index}: keys must be [time, value] pairs")

            curves.append(CurveFragment(
                path=entry.get('path', ''),
                declared_type=declared_type,
                property_name=entry.get('property', ''),
                keyframes=keyframes,
            ))

        rate = frame_rate or clip.get('frame_rate', 30.0)
        if rate <= 0:
            raise SceneReadError(f"Clip frame rate must be positive, got {rate}")

        return AnimationClip(
            name=clip.get('name', 'clip'),
            frame_rate=float(rate),
            curves=curves,
        )
