#!/usr/bin/env python3
"""
Core Module
Scene data structures, coordinate conversion and curve assembly.
"""

from .scene_data import (
    SceneData,
    SceneMetadata,
    SceneNode,
    NodeKind,
    Connection,
    CurveFragment,
    CurveSourceType,
    AnimationClip,
    ExportReport,
)
from .settings import ExportSettings
from .exceptions import (
    ExportError,
    MalformedTrackLength,
    UnrecognizedPropertyPath,
    UnsupportedNodeKind,
    IncompleteTrack,
    SceneReadError,
)

__all__ = [
    'SceneData',
    'SceneMetadata',
    'SceneNode',
    'NodeKind',
    'Connection',
    'CurveFragment',
    'CurveSourceType',
    'AnimationClip',
    'ExportReport',
    'ExportSettings',
    'ExportError',
    'MalformedTrackLength',
    'UnrecognizedPropertyPath',
    'UnsupportedNodeKind',
    'IncompleteTrack',
    'SceneReadError',
]
