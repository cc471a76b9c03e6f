"""
Maya ASCII (.ma) exporter - produces native Maya scenes from Unity data

Export Strategy:
- Nodes: one block per SceneNode, in the host's enumeration order
- Animation: animCurve nodes built from the clip's per-axis curves
- Blend shapes: weight curves wired to the blendShape weight array
- Meshes: connected to their shading engine (or the default one)

export_clip() produces the scene body and is deterministic. The exporter
class adds the file header (with a timestamp) and writes the file once,
after the whole buffer has been built.
"""

from pathlib import Path
from datetime import datetime
from typing import List

from .base_exporter import BaseExporter
from unity2maya.core.scene_data import SceneData, ExportReport
from unity2maya.core.naming import UniqueNameRegistry
from unity2maya.core.settings import ExportSettings, time_unit_for
from .anim_curve_writer import ClipCurveWriter
from .mel_format import mel_escape_string
from .node_writer import NodeWriter, DEFAULT_SHADING_GROUP


def export_clip(scene_nodes, clip, frame_rate, settings=None, report=None,
                connections=(), progress_callback=None) -> List[str]:
    """Build the Maya ASCII body for a scene and its animation clip

    Args:
        scene_nodes: SceneNodes in host enumeration order
        clip: AnimationClip, or None for a static export
        frame_rate: Frame rate used for time -> frame conversion
        settings: ExportSettings (defaults if None)
        report: ExportReport receiving skipped/incomplete curves
        connections: Extra Connections collected while walking the scene
        progress_callback: Optional function to call for progress updates

    Returns:
        list: Output lines

    Raises:
        UnsupportedNodeKind: A node has no writer
        UnrecognizedPropertyPath: A transform curve animates an unsupported property
    """
    settings = settings or ExportSettings()
    report = report if report is not None else ExportReport()

    curve_writer = None
    if clip is not None:
        registry = UniqueNameRegistry(node.name for node in scene_nodes)
        curve_writer = ClipCurveWriter(clip, frame_rate, settings, report,
                                       progress_callback, registry)
    node_writer = NodeWriter(settings, curve_writer, progress_callback)

    lines = ['// Scene content', '']
    for node in scene_nodes:
        node_writer.write(lines, node)

    if curve_writer is not None:
        curve_writer.report_unclaimed()

    lines.append('')
    lines.append('// Scene connections')
    for connection in connections:
        lines.append(connection.to_mel())

    lines.append('')
    lines.extend(_shading_connections(node_writer.mesh_shapes))
    return lines


def _shading_connections(mesh_shapes):
    """Connect meshes to their shading group"""
    lines = ['// Shading connections']
    for shape, shading_engine in mesh_shapes:
        target = shading_engine or DEFAULT_SHADING_GROUP
        lines.append(f'connectAttr "{shape}.iog" "{target}.dsm" -na;')
    lines.append('')
    return lines


class MayaMAExporter(BaseExporter):
    """Maya ASCII (.ma) file exporter - produces native Maya files"""

    def __init__(self, progress_callback=None, settings=None):
        super().__init__(progress_callback)
        self.settings = settings or ExportSettings()
        self.shot_name = ""

    def get_format_name(self):
        return "Maya MA"

    def get_file_extension(self):
        return "ma"

    def export(self, scene_data: SceneData, output_path, shot_name):
        """Main export method using SceneData

        Args:
            scene_data: SceneData instance with nodes, connections and clip
            output_path: Output directory
            shot_name: Shot/scene name

        Returns:
            dict: 'success', 'files', 'message', 'warnings' (anomaly summary)
        """
        try:
            self.shot_name = shot_name
            self.log(f"Exporting Maya MA format...")

            output_dir = Path(output_path)
            self.validate_output_path(output_dir)
            ma_file = output_dir / f"{shot_name}.{self.get_file_extension()}"

            clip = scene_data.clip
            frame_rate = clip.frame_rate if clip else 24.0
            last_frame = clip.last_frame if clip else 1
            report = ExportReport()

            lines = []

            # === FILE HEADER ===
            lines.extend(self._generate_header())
            lines.extend(self._generate_requirements())
            lines.extend(self._generate_units(frame_rate, last_frame))
            lines.extend(self._generate_file_info(scene_data.metadata))

            # === DEFAULT MAYA NODES ===
            lines.extend(self._generate_default_nodes())

            # === SCENE CONTENT ===
            lines.extend(export_clip(
                scene_data.nodes, clip, frame_rate,
                settings=self.settings,
                report=report,
                connections=scene_data.connections,
                progress_callback=self.progress_callback,
            ))

            # === DEFAULT CONNECTIONS ===
            lines.extend(self._generate_default_connections())

            # Write file
            with open(ma_file, 'w', encoding='utf-8') as f:
                f.write('\n'.join(lines))

            self.log(f"✓ Maya MA file created: {ma_file.name}")

            warnings = report.summary_lines()
            for warning in warnings:
                self.log(f"⚠ {warning}")

            result = {
                'success': True,
                'ma_file': str(ma_file),
                'files': [str(ma_file)],
                'message': f"Maya MA export complete: {ma_file.name}",
                'warnings': warnings,
            }

            if report.anomalies:
                result['message'] += f"\n⚠ {len(report.anomalies)} curve(s) skipped or incomplete"

            return result

        except Exception as e:
            error_msg = f"Maya MA export failed: {str(e)}"
            self.log(f"✗ {error_msg}")
            import traceback
            self.log(traceback.format_exc())
            return {
                'success': False,
                'message': error_msg,
                'files': [],
                'warnings': [],
            }

    # === HEADER GENERATION ===

    def _generate_header(self):
        """Generate Maya .ma file header"""
        timestamp = datetime.now().strftime("%a, %b %d, %Y %I:%M:%S %p")
        return [
            f"//Maya ASCII {self.settings.maya_version} scene",
            f"//Name: {self.shot_name}.ma",
            f"//Last modified: {timestamp}",
            "//Codeset: UTF-8",
            ""
        ]

    def _generate_requirements(self):
        """Generate requirements section"""
        return [
            f'requires maya "{self.settings.maya_version}";',
            ""
        ]

    def _generate_units(self, frame_rate, last_frame):
        """Generate units and playback range"""
        version = self.settings.maya_version
        return [
            f'currentUnit -l {self.settings.linear_unit} -a degree -t {time_unit_for(frame_rate)};',
            'fileInfo "application" "maya";',
            f'fileInfo "product" "Maya {version}";',
            f'fileInfo "version" "{version}";',
            f'playbackOptions -min 1 -max {last_frame} -ast 1 -aet {last_frame};',
            ""
        ]

    def _generate_file_info(self, metadata):
        """Generate file metadata"""
        lines = [
            f'fileInfo "exportedFrom" "{mel_escape_string(metadata.application)}";',
            f'fileInfo "sourceScene" "{mel_escape_string(metadata.scene_name)}";',
        ]
        if metadata.source_file_path:
            lines.append(f'fileInfo "sourceFile" "{mel_escape_string(metadata.source_file_path)}";')
        lines.append("")
        return lines

    # === DEFAULT MAYA NODES ===

    def _generate_default_nodes(self):
        """Generate default Maya scene nodes"""
        lines = ['// Default Maya nodes']
        for view, translate, rotate, flag in (
            ('top', '0 1000.1 0', '-90 0 0', '-t'),
            ('front', '0 0 1000.1', None, '-f'),
            ('side', '1000.1 0 0', '0 90 0', '-s'),
        ):
            lines.append(f'createNode transform -s -n "{view}";')
            lines.append(f'    setAttr ".t" -type "double3" {translate};')
            if rotate:
                lines.append(f'    setAttr ".r" -type "double3" {rotate};')
            lines.extend([
                f'createNode camera -s -n "{view}Shape" -p "{view}";',
                f'    setAttr -k off ".v";',
                f'    setAttr ".rnd" no;',
                f'    setAttr ".coi" 1000.1;',
                f'    setAttr ".ow" 30;',
                f'    setAttr ".imn" -type "string" "{view}";',
                f'    setAttr ".den" -type "string" "{view}_depth";',
                f'    setAttr ".man" -type "string" "{view}_mask";',
                f'    setAttr ".hc" -type "string" "viewSet {flag} %camera";',
                f'    setAttr ".o" yes;',
            ])
        lines.extend([
            'createNode transform -s -n "persp";',
            '    setAttr ".t" -type "double3" 28 21 28;',
            '    setAttr ".r" -type "double3" -27.9 45 0;',
            'createNode camera -s -n "perspShape" -p "persp";',
            '    setAttr -k off ".v";',
            '    setAttr ".fl" 35;',
            '    setAttr ".coi" 44.8;',
            '    setAttr ".imn" -type "string" "persp";',
            '    setAttr ".den" -type "string" "persp_depth";',
            '    setAttr ".man" -type "string" "persp_mask";',
            '    setAttr ".hc" -type "string" "viewSet -p %camera";',
            '',
            '// Shading nodes',
            'createNode lightLinker -s -n "lightLinker1";',
            'createNode displayLayerManager -n "layerManager";',
            'createNode displayLayer -n "defaultLayer";',
            'createNode renderLayerManager -n "renderLayerManager";',
            'createNode renderLayer -n "defaultRenderLayer";',
            '    setAttr ".g" yes;',
            '',
        ])
        return lines

    def _generate_default_connections(self):
        """Generate default Maya scene connections"""
        return [
            '// Default connections',
            'connectAttr "layerManager.dli[0]" "defaultLayer.id";',
            'connectAttr "renderLayerManager.rlmi[0]" "defaultRenderLayer.rlid";',
            '// End of file',
        ]
