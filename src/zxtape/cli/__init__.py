"""
zxtape Command-Line Interface
=============================

- **zxtape**: list, inspect and validate TZX and TAP images

The tool is a Click application; run `zxtape --help` for usage.
"""

__all__ = ["zxtape"]
