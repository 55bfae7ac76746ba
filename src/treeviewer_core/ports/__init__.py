"""
Ports (interfaces) for the tree viewer.

These define the contracts that adapters must implement.
This enables dependency injection and testing with mocks.
"""

from .renderer_port import RendererPort

__all__ = ["RendererPort"]
