#!/usr/bin/env python3
"""
Base Reader Module
Abstract interface for reading exported Unity scene descriptions
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from unity2maya.core.deformers import build_blend_shape_rig
from unity2maya.core.naming import UniqueNameRegistry
from unity2maya.core.scene_data import (
    SceneData, SceneMetadata, SceneNode, NodeKind, Connection, AnimationClip
)


class BaseReader(ABC):
    """Abstract base class for scene description readers

    Subclasses only deliver the raw node list, connections and clip;
    extract_scene_data() adds the derived deformer nodes.
    """

    def __init__(self, file_path: str, progress_callback=None):
        """Initialize reader with file path

        Args:
            file_path: Path to the scene description
            progress_callback: Optional function to call for progress updates
        """
        self.file_path = Path(file_path)
        self.progress_callback = progress_callback

    def log(self, message):
        """Send progress/status message"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    @abstractmethod
    def get_format_name(self) -> str:
        """Return human-readable format name (e.g., 'Unity JSON')"""
        pass

    @abstractmethod
    def get_metadata(self) -> SceneMetadata:
        pass

    @abstractmethod
    def get_nodes(self) -> List[SceneNode]:
        """Get all nodes in host enumeration order

        Returns:
            list: SceneNodes, parents before children
        """
        pass

    @abstractmethod
    def get_connections(self) -> List[Connection]:
        pass

    @abstractmethod
    def get_clip(self, frame_rate: Optional[float] = None) -> Optional[AnimationClip]:
        """Get the animation clip, None if the scene has no animation

        Args:
            frame_rate: Overrides the clip's own frame rate when given
        """
        pass

    def extract_scene_data(self, frame_rate: Optional[float] = None) -> SceneData:
        """Extract all scene data into a format-agnostic SceneData structure

        Skinned meshes with blend shape targets are followed by their
        deformer nodes, and the deformer connections are appended to the
        scene's own connections.

        Args:
            frame_rate: Clip frame rate override (None = use the scene's)

        Returns:
            SceneData: Complete scene description for the exporter
        """
        self.log(f"Reading {self.get_format_name()} scene: {self.file_path.name}")

        source_nodes = self.get_nodes()
        connections = list(self.get_connections())
        registry = UniqueNameRegistry(node.name for node in source_nodes)

        nodes = []
        for node in source_nodes:
            nodes.append(node)
            if node.kind != NodeKind.SKINNED_MESH:
                continue
            rig_nodes, rig_connections = build_blend_shape_rig(node, registry)
            if rig_nodes:
                self.log(f"  Blend shape rig for {node.name}: "
                         f"{len(node.data.blend_shape_targets)} target(s)")
            nodes.extend(rig_nodes)
            connections.extend(rig_connections)

        clip = self.get_clip(frame_rate)
        self.log(f"  Nodes: {len(nodes)}")
        self.log(f"  Connections: {len(connections)}")
        if clip is not None:
            self.log(f"  Clip '{clip.name}': {len(clip.curves)} curve(s) @ {clip.frame_rate} fps")

        return SceneData(
            metadata=self.get_metadata(),
            nodes=nodes,
            connections=connections,
            clip=clip,
        )
