#!/usr/bin/env python3
"""
Unity to Maya Converter - Main Orchestrator Module
Coordinates reading a Unity scene description and exporting it to Maya ASCII
"""

from pathlib import Path

from unity2maya import __version__
from unity2maya.core.settings import ExportSettings
from unity2maya.exporters.maya_ma_exporter import MayaMAExporter
from unity2maya.readers import create_reader


class UnityToMayaConverter:
    """Scene converter (orchestrator/facade)

    This class coordinates the conversion process:
    1. Read the scene description ONCE (via readers module)
    2. Build the blend shape deformer rigs (via BaseReader.extract_scene_data)
    3. Export the Maya ASCII file (via MayaMAExporter)
    """

    def __init__(self, progress_callback=None, settings=None):
        """Initialize converter

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
            settings: ExportSettings (defaults if None)
        """
        self.progress_callback = progress_callback
        self.settings = settings or ExportSettings()

    def log(self, message):
        """Send progress updates to callback"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def convert(self, input_file, output_dir, shot_name, fps=None):
        """Convert a scene description to a Maya ASCII file

        Args:
            input_file: Path to the scene description (.json)
            output_dir: Output directory
            shot_name: Shot name, used as the .ma file name
            fps: Frame rate override (None = use the clip's)

        Returns:
            dict: Results with keys:
                - 'success': bool
                - 'maya_ma': Maya MA export results
                - 'message': Summary message
        """
        try:
            self.log(f"\n{'='*60}")
            self.log(f"Unity2Maya v{__version__}")
            self.log(f"{'='*60}")
            self.log(f"Input: {input_file}")
            self.log(f"Output: {output_dir}")
            self.log(f"Shot: {shot_name}")
            self.log(f"Maya: {self.settings.maya_version} ({self.settings.linear_unit}, "
                     f"scale {self.settings.unit_scale})")
            self.log(f"{'='*60}\n")

            output_path = Path(output_dir)
            output_path.mkdir(parents=True, exist_ok=True)

            # Step 1: Read scene description ONCE
            self.log("Step 1/2: Reading scene description...")
            reader = create_reader(input_file, self.progress_callback)
            scene_data = reader.extract_scene_data(fps)

            # Step 2: Export
            self.log("\nStep 2/2: Exporting Maya MA...")
            exporter = MayaMAExporter(self.progress_callback, self.settings)
            ma_result = exporter.export(scene_data, output_path, shot_name)

            results = {
                'success': ma_result.get('success', False),
                'maya_ma': ma_result,
                'message': ma_result.get('message', ''),
            }

            self.log(f"\n{'='*60}")
            status = "✓" if results['success'] else "✗"
            self.log(f"  {status} Maya MA: {results['message']}")
            self.log(f"{'='*60}\n")

            return results

        except Exception as e:
            self.log(f"\nERROR: {str(e)}")
            import traceback
            self.log(traceback.format_exc())
            return {
                'success': False,
                'message': f"Conversion failed: {str(e)}"
            }
