"""
Adapters for the tree viewer.

Implementations of the port interfaces.
"""

from .recording_renderer import RecordingRenderer

__all__ = ["RecordingRenderer"]
