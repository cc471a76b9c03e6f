#!/usr/bin/env python3
"""
Unity to Maya ASCII exporter

Converts a Unity scene description and its animation clip into a native
Maya ASCII (.ma) scene.
"""

__version__ = "1.0.0"
