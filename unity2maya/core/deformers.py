#!/usr/bin/env python3
"""
Deformers Module
Builds the blend shape deformer chain for skinned meshes with targets.

Maya evaluates a deformed mesh as:

    <shape>Orig.worldMesh -> tweak -> groupParts -> blendShape -> <shape>.inMesh

with an objectSet/groupId pair recording which components the deformer
affects. The nodes are returned in creation order and must be written
after the skinned mesh they deform.
"""

from .scene_data import (
    SceneNode, NodeKind, MeshData, BlendShapeData, GroupPartsData, Connection
)


def build_blend_shape_rig(mesh_node, registry):
    """Create the deformer nodes and connections for one skinned mesh

    Args:
        mesh_node: SKINNED_MESH SceneNode whose MeshData lists blend shape targets
        registry: UniqueNameRegistry used for the auxiliary node names

    Returns:
        tuple: (nodes, connections) - empty lists if the mesh has no targets
    """
    mesh_data = mesh_node.data
    if not mesh_data.blend_shape_targets:
        return [], []

    orig = SceneNode(
        name=registry.claim(f"{mesh_node.name}Orig"),
        kind=NodeKind.MESH,
        source_path=mesh_node.source_path,
        parent=mesh_node.parent,
        data=MeshData(geometry=mesh_data.geometry, intermediate=True),
    )
    tweak = SceneNode(registry.claim("tweak"), NodeKind.TWEAK)
    object_set = SceneNode(registry.claim("blendShapeSet"), NodeKind.OBJECT_SET)
    group_id = SceneNode(registry.claim("blendShapeGroupId"), NodeKind.GROUP_ID)
    group_parts = SceneNode(
        registry.claim("blendShapeGroupParts"), NodeKind.GROUP_PARTS,
        data=GroupPartsData(force_all_verts=True),
    )
    blend_shape = SceneNode(
        registry.claim("blendShape"), NodeKind.BLEND_SHAPE,
        source_path=mesh_node.source_path,
        data=BlendShapeData(
            mesh_path=mesh_node.source_path,
            targets=list(mesh_data.blend_shape_targets),
        ),
    )

    shape = mesh_node.dag_path
    # First instObjGroups slot of the deformed shape
    inst_obj = f"{shape}.iog.og[0]"

    connections = [
        Connection(f"{orig.dag_path}.w", f"{tweak.name}.ip[0].ig"),
        Connection(f"{tweak.name}.og[0]", f"{group_parts.name}.ig"),
        Connection(inst_obj, f"{object_set.name}.dsm", next_available=True),
        Connection(f"{object_set.name}.mwc", f"{inst_obj}.gco"),
        Connection(f"{blend_shape.name}.msg", f"{object_set.name}.ub[0]"),
        Connection(f"{group_id.name}.msg", f"{object_set.name}.gn", next_available=True),
        Connection(f"{group_id.name}.id", f"{inst_obj}.gid"),
        Connection(f"{group_id.name}.id", f"{blend_shape.name}.ip[0].gi"),
        Connection(f"{group_id.name}.id", f"{group_parts.name}.gi"),
        Connection(f"{group_parts.name}.og", f"{blend_shape.name}.ip[0].ig"),
        Connection(f"{blend_shape.name}.og[0]", f"{shape}.i"),
    ]

    nodes = [orig, tweak, object_set, group_id, group_parts, blend_shape]
    return nodes, connections
