#!/usr/bin/env python3
"""
Settings Module
Export options (the choices offered by the exporter panel).
"""

from dataclasses import dataclass

MAYA_VERSIONS = ["2016", "2017", "2018", "2019", "2020", "2022", "2023", "2024"]
LINEAR_UNITS = ["millimeter", "centimeter", "meter", "inch", "foot", "yard"]

# Maya's named time units, keyed by frames per second
TIME_UNITS = {
    15: "game",
    24: "film",
    25: "pal",
    30: "ntsc",
    48: "show",
    50: "palf",
    60: "ntscf",
}


@dataclass
class ExportSettings:
    """Options shared by every writer in one export pass

    Attributes:
        maya_version: Version written to the header and requires line
        linear_unit: Maya linear unit declared by currentUnit
        unit_scale: Factor applied to host positions (1.0 keeps host units)
        texture_dir: Directory prefix for file texture paths
    """
    maya_version: str = "2020"
    linear_unit: str = "centimeter"
    unit_scale: float = 1.0
    texture_dir: str = ""

    def __post_init__(self):
        if self.maya_version not in MAYA_VERSIONS:
            raise ValueError(
                f"Unsupported Maya version: {self.maya_version}\n"
                f"Supported versions: {', '.join(MAYA_VERSIONS)}"
            )
        if self.linear_unit not in LINEAR_UNITS:
            raise ValueError(
                f"Unsupported linear unit: {self.linear_unit}\n"
                f"Supported units: {', '.join(LINEAR_UNITS)}"
            )


def time_unit_for(frame_rate):
    """Return Maya's time unit name for a frame rate

    Args:
        frame_rate: Frames per second

    Returns:
        str: Named unit ("film", "ntsc", ...) or "<rate>fps" (e.g. "29.97fps")
    """
    rounded = int(round(frame_rate))
    if abs(frame_rate - rounded) < 1e-6:
        return TIME_UNITS.get(rounded, f"{rounded}fps")
    return f"{frame_rate:g}fps"
