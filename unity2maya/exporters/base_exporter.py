#!/usr/bin/env python3
"""
Base Exporter Module
Abstract base class ensuring consistent interface across exporters

Exporters receive SceneData, never a reader, so the same exporter works
whether the scene came from a JSON dump or straight from the host.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from unity2maya.core.scene_data import SceneData


class BaseExporter(ABC):
    """Abstract base class for all format exporters

    Provides the export interface plus shared logging and output path handling.
    """

    def __init__(self, progress_callback=None):
        """Initialize exporter

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
        """
        self.progress_callback = progress_callback

    def log(self, message):
        """Send progress/status message

        Args:
            message: Message to log
        """
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    @abstractmethod
    def export(self, scene_data: 'SceneData', output_path, shot_name):
        """Export scene data to a file

        Args:
            scene_data: SceneData with nodes, connections and the animation clip
            output_path: Output directory path (Path object or string)
            shot_name: Shot name for naming files

        Returns:
            dict: Export results, at least:
                  - 'success': bool
                  - 'files': list of created file paths
                  - 'message': str status message
        """
        pass

    @abstractmethod
    def get_format_name(self):
        """Return human-readable format name (e.g. "Maya MA")"""
        pass

    @abstractmethod
    def get_file_extension(self):
        """Return primary file extension without dot (e.g. "ma")"""
        pass

    def validate_output_path(self, output_path):
        """Validate and create output directory if needed

        Args:
            output_path: Directory path to validate

        Returns:
            Path: Validated Path object

        Raises:
            ValueError: If path is invalid
        """
        path = Path(output_path)

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValueError(f"Cannot create output directory {path}: {e}")

        if not path.is_dir():
            raise ValueError(f"Output path is not a directory: {path}")

        return path
