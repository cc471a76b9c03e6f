#!/usr/bin/env python3
"""
Unity2Maya - Command Line Version
Converts a Unity scene description (.json) to a Maya ASCII (.ma) file
"""

import argparse
import sys
from pathlib import Path

from unity2maya.converter import UnityToMayaConverter
from unity2maya.core.settings import ExportSettings, MAYA_VERSIONS, LINEAR_UNITS
from unity2maya.readers import SUPPORTED_EXTENSIONS, is_supported_format


def build_parser():
    parser = argparse.ArgumentParser(
        prog='u2m',
        description='Convert a Unity scene description (.json) to Maya ASCII (.ma)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export with defaults (Maya 2020, centimeters)
  u2m sloth.json --output-dir ./output

  # Target an older Maya in meters, scene units scaled by 100
  u2m sloth.json --output-dir ./output --maya-version 2018 --linear-unit meter --unit-scale 100

  # Point file textures at an exported texture folder
  u2m sloth.json --output-dir ./output --texture-dir D:/project/textures
        """
    )

    parser.add_argument('input', type=str, help='Input scene description (.json)')
    parser.add_argument('--output-dir', type=str, required=True,
                       help='Output directory for the .ma file')
    parser.add_argument('--shot-name', type=str,
                       help='Name of the .ma file (default: derived from input filename)')
    parser.add_argument('--maya-version', choices=MAYA_VERSIONS, default='2020',
                       help='Target Maya version (default: 2020)')
    parser.add_argument('--linear-unit', choices=LINEAR_UNITS, default='centimeter',
                       help='Scene linear unit (default: centimeter)')
    parser.add_argument('--unit-scale', type=float, default=1.0,
                       help='Factor applied to positions (default: 1.0)')
    parser.add_argument('--texture-dir', type=str, default='',
                       help='Directory prepended to texture file names')
    parser.add_argument('--fps', type=float,
                       help='Frame rate (default: the clip\'s own frame rate)')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate input file exists
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    if not is_supported_format(input_path):
        print(f"Error: Unsupported file format: {input_path.suffix.lower()}", file=sys.stderr)
        print(f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}", file=sys.stderr)
        sys.exit(1)

    if args.fps is not None and args.fps <= 0:
        parser.error("--fps must be positive")

    try:
        settings = ExportSettings(
            maya_version=args.maya_version,
            linear_unit=args.linear_unit,
            unit_scale=args.unit_scale,
            texture_dir=args.texture_dir,
        )
    except ValueError as e:
        parser.error(str(e))

    shot_name = args.shot_name or input_path.stem

    # Converter and exporters print their own progress
    converter = UnityToMayaConverter(settings=settings)

    try:
        results = converter.convert(
            input_file=str(input_path),
            output_dir=args.output_dir,
            shot_name=shot_name,
            fps=args.fps,
        )
    except Exception as e:
        print(f"\n✗ Conversion failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)

    if not results.get('success'):
        print("\n✗ Export failed:", file=sys.stderr)
        print(f"   {results.get('message', 'Check log above')}", file=sys.stderr)
        sys.exit(1)

    print("\n" + "="*60)
    print("✓ Export completed!")
    print(f"✓ Maya MA: {results['maya_ma']['ma_file']}")
    for warning in results['maya_ma'].get('warnings', []):
        print(f"⚠ {warning}")
    print("="*60)


if __name__ == "__main__":
    main()
