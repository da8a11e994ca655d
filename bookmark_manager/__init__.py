"""
Bookmark Manager - keep named offsets in a YAML file.
"""

__version__ = "1.0.0"
