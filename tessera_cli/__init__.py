"""
Tessera CLI - Command-line interface for puzzle files.

Usage:
    tessera blueprint puzzles/level1.json out/level1.png
    tessera validate puzzles/level1.json
    tessera catalog --shapes shapes/custom.json
"""

__version__ = "1.0.0"
