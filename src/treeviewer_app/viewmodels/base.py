"""
Base ViewModel class for the tree viewer application layer.

Provides the foundation for all ViewModels with:
- PyQt6 signal support for binding a renderer or widget
- Change notification that skips no-op updates
"""

from typing import Optional, Any
from PyQt6.QtCore import QObject, pyqtSignal


class BaseViewModel(QObject):
    """
    Base class for all ViewModels.

    Pattern:
    - State held privately, exposed through read-only properties
    - Commands as methods that mutate state and emit signals
    - No widget references (UI-agnostic)
    - Core services injected via constructor

    Example:
        class ZoomVM(BaseViewModel):
            scale_changed = pyqtSignal(float)

            def __init__(self):
                super().__init__()
                self._scale = 1.0

            def set_scale(self, scale: float) -> None:
                self._set_and_notify("_scale", scale, self.scale_changed)
    """

    def __init__(self, parent: Optional[QObject] = None):
        """
        Initialize the ViewModel.

        Args:
            parent: Optional parent QObject for Qt memory management
        """
        super().__init__(parent)

    def _set_and_notify(self, attr: str, value: Any, signal: pyqtSignal) -> bool:
        """
        Assign an attribute and emit `signal(value)` if it changed.

        Returns:
            True if the value changed
        """
        if getattr(self, attr) == value:
            return False
        setattr(self, attr, value)
        signal.emit(value)
        return True
