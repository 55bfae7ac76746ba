"""
Tree Viewer App - PyQt6 application layer.

ViewModels own the viewport transform, the pointer state machine, and the
refresh pipeline; views translate Qt input into core events.
"""
