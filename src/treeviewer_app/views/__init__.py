"""
Qt view helpers for the tree viewer.
"""

from .event_adapter import QtInputBridge, pointer_event_from_qt, wheel_event_from_qt

__all__ = ["QtInputBridge", "pointer_event_from_qt", "wheel_event_from_qt"]
