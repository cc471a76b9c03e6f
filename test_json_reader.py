#!/usr/bin/env python3
"""
Tests for the JSON scene reader and blend shape rig construction
"""

import json

import pytest

from unity2maya.core.exceptions import SceneReadError
from unity2maya.core.scene_data import NodeKind, CurveSourceType, MeshData, BlendShapeData
from unity2maya.readers import create_reader, is_supported_format, JSONSceneReader


def sloth_document():
    return {
        "scene": {"name": "SlothScene", "application": "Unity 2019.4"},
        "nodes": [
            {"name": "Sloth", "kind": "transform", "path": "Sloth", "parent": None,
             "data": {"position": [0, 1, 0], "rotation": [0, 0, 0, 1], "scale": [1, 1, 1]}},
            {"name": "Body", "kind": "transform", "path": "Sloth/Body", "parent": "Sloth"},
            {"name": "BodyShape", "kind": "skinned_mesh", "path": "Sloth/Body", "parent": "Body",
             "data": {"positions": [[0, 0, 0], [1, 0, 0], [0, 1, 0]], "indices": [0, 1, 2],
                      "counts": [3], "blend_shape_targets": ["smile", "blink"]}},
            {"name": "Key", "kind": "directional_light", "path": "Key", "parent": None,
             "data": {"color": [1, 1, 1], "intensity": 1.5}},
        ],
        "connections": [
            {"source": "skin.oc", "destination": "skinSG.ss"},
        ],
        "clip": {
            "name": "Idle",
            "frame_rate": 30,
            "curves": [
                {"path": "/Body", "type": "Transform", "property": "m_LocalPosition.x",
                 "keys": [[0, 0], [1, 1]]},
                {"path": "Sloth/Body", "type": "SkinnedMeshRenderer", "property": "blendShape.smile",
                 "keys": [[0, 0], [0.5, 100]]},
            ],
        },
    }


def write_document(tmp_path, document, name="scene.json"):
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding='utf-8')
    return path


def test_create_reader_by_extension(tmp_path):
    path = write_document(tmp_path, sloth_document())
    assert isinstance(create_reader(str(path)), JSONSceneReader)
    with pytest.raises(ValueError):
        create_reader(str(tmp_path / "scene.fbx"))
    assert is_supported_format("Scene.JSON")
    assert not is_supported_format("scene.fbx")


def test_nodes_and_parents(tmp_path):
    reader = JSONSceneReader(str(write_document(tmp_path, sloth_document())))
    nodes = reader.get_nodes()

    assert [n.name for n in nodes] == ["Sloth", "Body", "BodyShape", "Key"]
    assert nodes[2].parent is nodes[1]
    assert nodes[2].dag_path == "|Sloth|Body|BodyShape"
    assert isinstance(nodes[2].data, MeshData)
    assert nodes[2].data.geometry.counts == [3]
    assert nodes[3].data.intensity == 1.5
    assert nodes[1].data.scale == (1.0, 1.0, 1.0)


def test_clip_and_frame_rate_override(tmp_path):
    reader = JSONSceneReader(str(write_document(tmp_path, sloth_document())))
    clip = reader.get_clip()
    assert clip.name == "Idle"
    assert clip.frame_rate == 30.0
    assert clip.curves[1].declared_type is CurveSourceType.SKINNED_MESH
    assert clip.curves[1].keyframes == [(0.0, 0.0), (0.5, 100.0)]

    assert reader.get_clip(frame_rate=24).frame_rate == 24.0


def test_extract_scene_data_adds_blend_shape_rig(tmp_path):
    reader = JSONSceneReader(str(write_document(tmp_path, sloth_document())))
    scene = reader.extract_scene_data()

    assert scene.metadata.scene_name == "SlothScene"
    assert scene.metadata.application == "Unity 2019.4"
    assert [n.name for n in scene.nodes] == [
        "Sloth", "Body", "BodyShape",
        "BodyShapeOrig", "tweak", "blendShapeSet", "blendShapeGroupId",
        "blendShapeGroupParts", "blendShape",
        "Key",
    ]

    orig = scene.get_node_by_name("BodyShapeOrig")
    assert orig.data.intermediate
    assert orig.parent is scene.get_node_by_name("Body")

    blend_shape = scene.get_node_by_name("blendShape")
    assert isinstance(blend_shape.data, BlendShapeData)
    assert blend_shape.data.mesh_path == "Sloth/Body"
    assert blend_shape.data.targets == ["smile", "blink"]

    # Scene connection first, then the eleven deformer connections
    assert len(scene.connections) == 12
    mel = [c.to_mel() for c in scene.connections]
    assert mel[0] == 'connectAttr "skin.oc" "skinSG.ss";'
    assert 'connectAttr "|Sloth|Body|BodyShapeOrig.w" "tweak.ip[0].ig";' in mel
    assert 'connectAttr "blendShape.og[0]" "|Sloth|Body|BodyShape.i";' in mel
    assert 'connectAttr "|Sloth|Body|BodyShape.iog.og[0]" "blendShapeSet.dsm" -na;' in mel


def test_rig_names_avoid_existing_nodes(tmp_path):
    document = sloth_document()
    document["nodes"].append({"name": "tweak", "kind": "tweak", "parent": None})
    scene = JSONSceneReader(str(write_document(tmp_path, document))).extract_scene_data()
    assert scene.get_node_by_name("tweak1").kind is NodeKind.TWEAK


def test_static_mesh_gets_no_rig(tmp_path):
    document = sloth_document()
    document["nodes"][2]["data"]["blend_shape_targets"] = []
    scene = JSONSceneReader(str(write_document(tmp_path, document))).extract_scene_data()
    assert len(scene.nodes) == 4
    assert len(scene.connections) == 1


@pytest.mark.parametrize("mutate, message", [
    (lambda d: d["nodes"][1].update(kind="particles"), "unknown kind"),
    (lambda d: d["nodes"][1].update(parent="Nowhere"), "Nowhere"),
    (lambda d: d["nodes"][1].update(name="Sloth"), "Duplicate"),
    (lambda d: d["nodes"][3]["data"].update(range=10), "unknown data keys"),
    (lambda d: d["nodes"][2]["data"].update(counts=[4]), "face counts"),
    (lambda d: d["clip"]["curves"][0].update(type="Animator"), "unsupported type"),
    (lambda d: d["clip"].update(frame_rate=0), "frame rate"),
])
def test_invalid_documents(tmp_path, mutate, message):
    document = sloth_document()
    mutate(document)
    reader = JSONSceneReader(str(write_document(tmp_path, document)))
    with pytest.raises(SceneReadError, match=message):
        reader.extract_scene_data()


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ not json", encoding='utf-8')
    with pytest.raises(SceneReadError):
        JSONSceneReader(str(path)).get_nodes()


def test_missing_file(tmp_path):
    with pytest.raises(SceneReadError):
        JSONSceneReader(str(tmp_path / "missing.json")).get_nodes()
