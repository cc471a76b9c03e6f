#!/usr/bin/env python3
"""
Readers Module
Scene description readers (Unity editor JSON dumps)
"""

from pathlib import Path

from .base_reader import BaseReader
from .json_reader import JSONSceneReader

# Supported file extensions
JSON_EXTENSIONS = {'.json'}
SUPPORTED_EXTENSIONS = JSON_EXTENSIONS


def create_reader(input_file, progress_callback=None):
    """Factory function to create appropriate reader based on file extension

    Args:
        input_file: Path to input scene description
        progress_callback: Optional function to call for progress updates

    Returns:
        BaseReader: JSONSceneReader instance

    Raises:
        ValueError: If file extension is not supported
    """
    ext = Path(input_file).suffix.lower()

    if ext in JSON_EXTENSIONS:
        return JSONSceneReader(input_file, progress_callback)
    raise ValueError(
        f"Unsupported file format: {ext}\n"
        f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
    )


def is_supported_format(input_file):
    """Check if a file has a supported format"""
    return Path(input_file).suffix.lower() in SUPPORTED_EXTENSIONS


__all__ = [
    'BaseReader',
    'JSONSceneReader',
    'create_reader',
    'is_supported_format',
    'JSON_EXTENSIONS',
    'SUPPORTED_EXTENSIONS',
]
