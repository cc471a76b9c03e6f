#!/usr/bin/env python3
"""
MEL Formatting Module
Value formatting shared by the Maya ASCII writers.
"""


def format_float(value):
    """Format a number with up to 6 decimals and no trailing zeros

    1.0 -> "1", 0.25 -> "0.25", -0.0 -> "0"
    """
    text = f"{float(value):.6f}".rstrip('0').rstrip('.')
    if text in ('', '-0'):
        return '0'
    return text


def format_vector(values):
    """Space-separated formatted components"""
    return ' '.join(format_float(v) for v in values)


def format_bool(value):
    """MEL yes/no literal"""
    return 'yes' if value else 'no'


def mel_escape_string(s):
    """Escape string for MEL"""
    if s is None:
        return ""
    s = str(s).replace('\\', '/')
    s = s.replace('"', '\\"')
    return s
