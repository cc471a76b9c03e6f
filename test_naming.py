#!/usr/bin/env python3
"""
Tests for node name and attribute path resolution
"""

from unity2maya.core.naming import NameScheme, UniqueNameRegistry, resolve, sanitize_name


def test_resolve_nested_path():
    scheme = resolve("A/B", "m_LocalPosition.x", "Root")
    assert scheme.node_prefix == "A_B"
    assert scheme.attr_prefix == "|A|B"
    assert scheme.node_name("_LocalPositionx") == "A_B_LocalPositionx"
    assert scheme.attr_path(".tx") == "|A|B.tx"


def test_resolve_is_deterministic():
    first = resolve("A/B", "m_LocalPosition.x", "Root")
    second = resolve("A/B", "m_LocalPosition.x", "Root")
    assert first == second


def test_empty_first_segment_uses_parent_name():
    scheme = resolve("/B", "m_LocalPosition.x", "Root")
    assert scheme.node_prefix == "Root_B"
    assert scheme.attr_prefix == "|Root|B"


def test_clip_root_path():
    scheme = resolve("", "m_LocalRotation.x", "Root")
    assert scheme.node_prefix == "Root"
    assert scheme.attr_prefix == "Root"


def test_single_segment_is_used_as_is():
    scheme = resolve("Head", "m_LocalScale.x", "Root")
    assert scheme == NameScheme("Head", "Head")


def test_key_value_factor_is_carried():
    assert resolve("Body", "blendShape.smile", "Root", 0.01).key_value_factor == 0.01


def test_registry_suffixes_taken_names():
    registry = UniqueNameRegistry(["tweak"])
    assert registry.claim("tweak") == "tweak1"
    assert registry.claim("tweak") == "tweak2"
    assert registry.claim("blendShape") == "blendShape"
    assert "tweak2" in registry


def test_sanitize_name():
    assert sanitize_name("eye Blink.L") == "eye_Blink_L"
    assert sanitize_name("3dModel") == "obj_3dModel"
    assert sanitize_name("") == "unnamed"
