#!/usr/bin/env python3
"""
Node Writer Module
Writes the Maya ASCII block of each scene node.

Dispatch is a table keyed by NodeKind; the table is checked against the
enum at import time so every kind has exactly one writer. Skinned mesh
and blend shape nodes also drive the clip's curve export.
"""

from unity2maya.core.coordinates import convert_position, convert_rotation, convert_scale, convert_winding
from unity2maya.core.exceptions import UnsupportedNodeKind
from unity2maya.core.naming import sanitize_name
from unity2maya.core.scene_data import NodeKind
from .mel_format import format_float, format_vector, format_bool, mel_escape_string

# Rough Unity vertical FOV (degrees) -> Maya focal length (mm) factor
FOCAL_LENGTH_PER_FOV_DEGREE = 0.3458333333333333

DEFAULT_SHADING_GROUP = ":initialShadingGroup"


class NodeWriter:
    """Appends one text block per SceneNode to the output buffer"""

    WRITERS = {
        NodeKind.TRANSFORM: '_write_transform',
        NodeKind.MESH: '_write_mesh',
        NodeKind.SKINNED_MESH: '_write_skinned_mesh',
        NodeKind.MATERIAL: '_write_material',
        NodeKind.TEXTURE: '_write_texture',
        NodeKind.SPOT_LIGHT: '_write_spot_light',
        NodeKind.POINT_LIGHT: '_write_point_light',
        NodeKind.DIRECTIONAL_LIGHT: '_write_directional_light',
        NodeKind.AREA_LIGHT: '_write_area_light',
        NodeKind.CAMERA: '_write_camera',
        NodeKind.OBJECT_SET: '_write_object_set',
        NodeKind.TWEAK: '_write_tweak',
        NodeKind.GROUP_PARTS: '_write_group_parts',
        NodeKind.GROUP_ID: '_write_group_id',
        NodeKind.SHADING_ENGINE: '_write_shading_engine',
        NodeKind.RAMP: '_write_ramp',
        NodeKind.PLACE_2D_TEXTURE: '_write_place_2d_texture',
        NodeKind.LAYERED_TEXTURE: '_write_layered_texture',
        NodeKind.BUMP_2D: '_write_bump_2d',
        NodeKind.MATERIAL_INFO: '_write_material_info',
        NodeKind.BLEND_SHAPE: '_write_blend_shape',
        NodeKind.TERRAIN_ALPHA: '_write_terrain_alpha',
    }

    def __init__(self, settings, curve_writer=None, progress_callback=None):
        """Initialize node writer

        Args:
            settings: ExportSettings for the pass
            curve_writer: ClipCurveWriter, None when no clip is exported
            progress_callback: Optional function to call for progress updates
        """
        self.settings = settings
        self.curve_writer = curve_writer
        self.progress_callback = progress_callback
        self.mesh_shapes = []  # (shape DAG path, shading engine) for shading connections

    def log(self, message):
        """Send progress/status message"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def write(self, lines, node):
        """Append the block for one node

        Args:
            lines: Output line buffer
            node: SceneNode to write

        Raises:
            UnsupportedNodeKind: No writer is registered for node.kind
        """
        method_name = self.WRITERS.get(node.kind)
        if method_name is None:
            raise UnsupportedNodeKind(f"No writer for node '{node.name}' of kind {node.kind!r}")
        getattr(self, method_name)(lines, node)

    # === DAG NODES ===

    def _create_dag_node(self, node_type, node):
        if node.parent is not None:
            return f'createNode {node_type} -n "{node.name}" -p "{node.parent.dag_path}";'
        return f'createNode {node_type} -n "{node.name}";'

    def _write_transform(self, lines, node):
        lines.append(self._create_dag_node('transform', node))
        data = node.data
        if data is None:
            return
        pos = convert_position(data.position, self.settings.unit_scale)
        rot = convert_rotation(data.rotation)
        scale = convert_scale(data.scale)
        lines.append(f'    setAttr ".t" -type "double3" {format_vector(pos)};')
        lines.append(f'    setAttr ".r" -type "double3" {format_vector(rot)};')
        lines.append(f'    setAttr ".s" -type "double3" {format_vector(scale)};')

    def _write_mesh(self, lines, node):
        """Export mesh shape with native Maya geometry"""
        mesh_data = node.data
        lines.append(self._create_dag_node('mesh', node))
        lines.append(f'    setAttr -k off ".v";')
        if mesh_data.intermediate:
            lines.append(f'    setAttr ".io" yes;')
        lines.append(f'    setAttr ".vir" yes;')
        lines.append(f'    setAttr ".vif" yes;')
        lines.extend(self._mesh_geometry_lines(mesh_data.geometry))

        if not mesh_data.intermediate:
            self.mesh_shapes.append((node.dag_path, mesh_data.shading_engine))

    def _write_skinned_mesh(self, lines, node):
        self._write_mesh(lines, node)
        if self.curve_writer is not None:
            self.curve_writer.write_transform_curves(lines, self._clip_root_name(node))

    def _clip_root_name(self, node):
        """Name of the object the clip's root path ("") refers to

        Clip paths are relative to the parent of the animated mesh's transform,
        or to the transform itself when it sits at the top of the scene. A
        shape without a transform stands for itself.
        """
        transform = node.parent
        if transform is None:
            self.log(f"  ⚠ Skinned mesh '{node.name}' has no transform, "
                     f"clip root resolves to the shape itself")
            return node.name
        if transform.parent is not None:
            return transform.parent.name
        return transform.name

    def _mesh_geometry_lines(self, geometry):
        """Build the mesh data in Maya format using setAttr -type mesh"""
        positions = convert_position(geometry.positions, self.settings.unit_scale) \
            if geometry.positions else []
        counts = geometry.counts
        # Mirrored geometry needs the opposite winding
        indices = convert_winding(geometry.indices, counts)

        # Build edges from face data
        edges = []
        edge_map = {}
        faces = []
        idx_offset = 0

        for count in counts:
            face_verts = [indices[idx_offset + i] for i in range(count)]
            faces.append(face_verts)
            for i in range(count):
                v1, v2 = face_verts[i], face_verts[(i + 1) % count]
                edge_key = (min(v1, v2), max(v1, v2))
                if edge_key not in edge_map:
                    edge_map[edge_key] = len(edges)
                    edges.append((v1, v2))
            idx_offset += count

        mesh_data_parts = [f'"v" {len(positions)}']
        for pos in positions:
            mesh_data_parts.append(format_vector(pos))

        # Vertex normals: "vn" 0 (required, set to 0)
        mesh_data_parts.append('"vn" 0')

        mesh_data_parts.append(f'"e" {len(edges)}')
        for v1, v2 in edges:
            mesh_data_parts.append(f'{v1} {v2} "smooth"')

        for face_verts in faces:
            count = len(face_verts)
            face_edges = []
            for i in range(count):
                v1, v2 = face_verts[i], face_verts[(i + 1) % count]
                edge_idx = edge_map[(min(v1, v2), max(v1, v2))]
                # Negative index means the edge is walked backwards
                if edges[edge_idx][0] == v1:
                    face_edges.append(edge_idx)
                else:
                    face_edges.append(-edge_idx - 1)
            edge_str = ' '.join(str(e) for e in face_edges)
            mesh_data_parts.append(f'"face" "l" {count} {edge_str}')

        return [
            f'    setAttr ".o" -type "mesh"',
            f'        {" ".join(mesh_data_parts)};',
        ]

    # === LIGHTS / CAMERA ===

    def _light_header(self, lines, light_type, node):
        data = node.data
        lines.append(self._create_dag_node(light_type, node))
        lines.append(f'    setAttr -k off ".v";')
        lines.append(f'    setAttr ".cl" -type "float3" {format_vector(data.color)};')
        lines.append(f'    setAttr ".in" {format_float(data.intensity)};')
        lines.append(f'    setAttr ".de" 1;')

    def _light_shadows(self, lines, node):
        lines.append(f'    setAttr ".urs" {"on" if node.data.shadows else "off"};')

    def _write_spot_light(self, lines, node):
        self._light_header(lines, 'spotLight', node)
        lines.append(f'    setAttr ".dro" 20;')
        lines.append(f'    setAttr ".ca" {format_float(node.data.spot_angle)};')
        lines.append(f'    setAttr ".pa" 5;')
        self._light_shadows(lines, node)

    def _write_directional_light(self, lines, node):
        self._light_header(lines, 'directionalLight', node)
        self._light_shadows(lines, node)

    def _write_point_light(self, lines, node):
        self._light_header(lines, 'pointLight', node)
        self._light_shadows(lines, node)

    def _write_area_light(self, lines, node):
        self._light_header(lines, 'areaLight', node)
        self._light_shadows(lines, node)

    def _write_camera(self, lines, node):
        data = node.data
        focal_length = data.field_of_view * FOCAL_LENGTH_PER_FOV_DEGREE
        lines.extend([
            self._create_dag_node('camera', node),
            f'    setAttr -k off ".v";',
            f'    setAttr ".cap" -type "double2" 1.41732 0.94488;',
            f'    setAttr ".ff" 3;',
            f'    setAttr ".fl" {format_float(focal_length)};',
            f'    setAttr ".ncp" {format_float(data.near_clip_plane)};',
            f'    setAttr ".fcp" {format_float(data.far_clip_plane)};',
            f'    setAttr ".ow" 30;',
            f'    setAttr ".imn" -type "string" "{node.name}";',
            f'    setAttr ".den" -type "string" "{node.name}_depth";',
            f'    setAttr ".man" -type "string" "{node.name}_mask";',
        ])

    # === DEFORMER PLUMBING ===

    def _write_object_set(self, lines, node):
        lines.append(f'createNode objectSet -n "{node.name}";')
        lines.append(f'    setAttr ".ihi" 0;')
        lines.append(f'    setAttr ".vo" yes;')

    def _write_tweak(self, lines, node):
        lines.append(f'createNode tweak -n "{node.name}";')

    def _write_group_parts(self, lines, node):
        """Tells Maya which components are part of the group"""
        data = node.data
        lines.append(f'createNode groupParts -n "{node.name}";')
        lines.append(f'    setAttr ".ihi" 0;')
        if data is None or data.force_all_verts or data.face_indices is None:
            lines.append(f'    setAttr ".ic" -type "componentList" 1 "vtx[*]";')
        else:
            faces = ' '.join(f'"f[{i}]"' for i in data.face_indices)
            lines.append(f'    setAttr ".ic" -type "componentList" {len(data.face_indices)} {faces};')

    def _write_group_id(self, lines, node):
        lines.append(f'createNode groupId -n "{node.name}";')
        lines.append(f'    setAttr ".ihi" 0;')

    def _write_blend_shape(self, lines, node):
        data = node.data
        targets = data.targets
        lines.append(f'createNode blendShape -n "{node.name}";')
        if targets:
            weights = list(data.weights) + [0.0] * (len(targets) - len(data.weights))
            lines.append(f'    setAttr -s {len(targets)} ".w[0:{len(targets) - 1}]" '
                         f'{format_vector(weights[:len(targets)])};')
            aliases = ','.join(f'"{sanitize_name(target)}","weight[{i}]"'
                               for i, target in enumerate(targets))
            lines.append(f'    setAttr ".aal" -type "attributeAlias" {{{aliases}}} ;')

        if self.curve_writer is not None:
            self.curve_writer.write_blend_shape_curves(lines, node)

    # === SHADING ===

    def _write_shading_engine(self, lines, node):
        lines.append(f'createNode shadingEngine -n "{node.name}";')
        lines.append(f'    setAttr ".ihi" 0;')
        lines.append(f'    setAttr ".ro" yes;')

    def _write_material(self, lines, node):
        data = node.data
        lines.append(f'createNode blinn -n "{node.name}";')
        if data is None or not data.regular:
            return
        if data.color is not None:
            lines.append(f'    setAttr ".c" -type "float3" {format_vector(data.color)};')
        if data.specular_color is not None:
            lines.append(f'    setAttr ".sc" -type "float3" {format_vector(data.specular_color)};')
        if data.emission_color is not None:
            lines.append(f'    setAttr ".ic" -type "float3" {format_vector(data.emission_color)};')

    def _texture_path(self, file_name):
        texture_dir = self.settings.texture_dir
        if texture_dir and not texture_dir.endswith(('/', '\\')):
            texture_dir += '/'
        return mel_escape_string(texture_dir + file_name)

    def _write_texture(self, lines, node):
        lines.append(f'createNode file -n "{node.name}";')
        lines.append(f'    setAttr ".ftn" -type "string" "{self._texture_path(node.data.file_name)}";')

    def _write_terrain_alpha(self, lines, node):
        lines.append(f'createNode file -n "{node.name}";')
        path = self._texture_path(f"{node.data.image_name}.png")
        lines.append(f'    setAttr ".ftn" -type "string" "{path}";')

    def _write_ramp(self, lines, node):
        lines.append(f'createNode ramp -n "{node.name}";')
        for i, color in enumerate(node.data.colors):
            lines.append(f'    setAttr ".cel[{i}].ep" 0;')
            lines.append(f'    setAttr ".cel[{i}].ec" -type "float3" {format_vector(color)};')

    def _write_place_2d_texture(self, lines, node):
        data = node.data
        lines.append(f'createNode place2dTexture -n "{node.name}";')
        lines.append(f'    setAttr ".re" -type "float2" {format_vector(data.tiling)};')
        lines.append(f'    setAttr ".of" -type "float2" {format_vector(data.offset)};')

    def _write_layered_texture(self, lines, node):
        count = node.data.input_count
        lines.append(f'createNode layeredTexture -n "{node.name}";')
        lines.append(f'    setAttr -s {count} ".cs";')
        for i in range(count):
            lines.append(f'    setAttr ".cs[{i}].a" 1;')
            lines.append(f'    setAttr ".cs[{i}].bm" 4;')
            lines.append(f'    setAttr ".cs[{i}].iv" {format_bool(True)};')
        lines.append(f'    setAttr ".ail" yes;')

    def _write_bump_2d(self, lines, node):
        lines.append(f'createNode bump2d -n "{node.name}";')
        # Interpret the input as a tangent space normal map
        lines.append(f'    setAttr ".bi" 1;')
        lines.append(f'    setAttr ".p3d" yes;')
        lines.append(f'    setAttr ".bd" {format_float(node.data.bump_amount)};')

    def _write_material_info(self, lines, node):
        lines.append(f'createNode materialInfo -n "{node.name}";')


_unwritable = [kind.name for kind in NodeKind if kind not in NodeWriter.WRITERS]
if _unwritable:
    raise UnsupportedNodeKind(f"No writer registered for: {', '.join(_unwritable)}")
