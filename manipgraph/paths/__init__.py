"""Atomic and composite configuration-space paths."""

from .path import Path, PathVector, StraightPath

__all__ = [
    "Path",
    "PathVector",
    "StraightPath",
]
