#!/usr/bin/env python3
"""
Naming Module
Maya node names and attribute paths derived from host hierarchy paths.
"""

import re
from dataclasses import dataclass

PATH_SEPARATOR = '/'


@dataclass(frozen=True)
class NameScheme:
    """Name prefixes shared by the per-axis curves of one track

    Attributes:
        node_prefix: Prefix of the animCurve node name (e.g. "Root_Head")
        attr_prefix: Prefix of the driven attribute path (e.g. "|Root|Head")
        key_value_factor: Multiplier applied to every key value
    """
    node_prefix: str
    attr_prefix: str
    key_value_factor: float = 1.0

    def node_name(self, postfix):
        return f"{self.node_prefix}{postfix}"

    def attr_path(self, postfix):
        return f"{self.attr_prefix}{postfix}"


def resolve(source_path, property_name, parent_name, key_value_factor=1.0):
    """Derive the curve node name and target attribute prefixes

    "A/B" becomes node prefix "A_B" and attribute prefix "|A|B". An empty
    first segment (the clip root) is replaced by parent_name, so "/B" gives
    "Root_B" and "|Root|B". A single segment is used as is.

    Args:
        source_path: Host path of the animated object
        property_name: Host property name (names are axis-agnostic)
        parent_name: Substitute for an empty first segment
        key_value_factor: Multiplier for key values (e.g. 0.01 for percentages)

    Returns:
        NameScheme: Prefixes for the caller's per-axis postfixes
    """
    segments = source_path.split(PATH_SEPARATOR)
    root = segments[0] or parent_name

    node_prefix = "_".join([root] + segments[1:])

    if len(segments) >= 2:
        attr_prefix = "|" + "|".join([root] + segments[1:])
    else:
        attr_prefix = root

    return NameScheme(node_prefix, attr_prefix, key_value_factor)


class UniqueNameRegistry:
    """Hands out globally unique node names: base, base1, base2, ..."""

    def __init__(self, reserved=None):
        self._taken = set(reserved or [])

    def reserve(self, name):
        self._taken.add(name)

    def claim(self, base):
        """Return base, or base with the lowest free numeric suffix"""
        name = base
        counter = 1
        while name in self._taken:
            name = f"{base}{counter}"
            counter += 1
        self._taken.add(name)
        return name

    def __contains__(self, name):
        return name in self._taken


def sanitize_name(name):
    """Sanitize name for Maya"""
    sanitized = re.sub(r'[^a-zA-Z0-9_]', '_', name)
    if sanitized and sanitized[0].isdigit():
        sanitized = f"obj_{sanitized}"
    return sanitized or "unnamed"

