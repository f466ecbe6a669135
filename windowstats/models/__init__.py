"""
Data models package
"""

from .sample import Sample

__all__ = ["Sample"]
