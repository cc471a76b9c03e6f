#!/usr/bin/env python3
"""
Exporters Module
Maya ASCII output: node blocks, animation curves and the file sink.
"""

from .base_exporter import BaseExporter
from .maya_ma_exporter import MayaMAExporter, export_clip
from .node_writer import NodeWriter
from .anim_curve_writer import ClipCurveWriter

__all__ = [
    'BaseExporter',
    'MayaMAExporter',
    'export_clip',
    'NodeWriter',
    'ClipCurveWriter',
]
