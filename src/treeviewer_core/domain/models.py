"""
Domain models (DTOs) for the tree viewer.

These are pure data classes with no rendering or UI dependencies.
"""

from dataclasses import dataclass, field, fields
from typing import Optional, List, Dict, Any, Tuple, Union

from .enums import PointerTarget


NodeId = Union[str, int]
EdgeKey = Tuple[NodeId, NodeId]  # (parent_id, child_id)


@dataclass
class ViewerOptions:
    """Layout parameters and interaction toggles for one viewer."""
    # Record field names
    id_alias: str = "id"
    parent_id_alias: str = "parent_id"

    # Layout (content units)
    node_width: float = 160
    node_height: float = 100
    node_padding: float = 40        # Gap between root trees
    level_height: float = 150
    horizontal_spacing: float = 200

    # Toggles
    collapse_child: bool = False    # Collapse affordances enabled
    node_draggable: bool = True     # Drag affordances enabled

    # Connectors
    curve_factor: float = 0.5       # 0.3 - 0.5 of the vertical span

    # Viewport
    zoom_step: float = 1.1
    center_padding: float = 100
    fit_padding: float = 50
    reset_pan: Tuple[float, float] = (50, 50)
    recenter_after_drag: bool = False

    # camelCase aliases accepted by from_dict()
    _CAMEL_KEYS = {
        "idAlias": "id_alias",
        "parentIdAlias": "parent_id_alias",
        "nodeWidth": "node_width",
        "nodeHeight": "node_height",
        "nodePadding": "node_padding",
        "levelHeight": "level_height",
        "horizontalSpacing": "horizontal_spacing",
        "collapseChild": "collapse_child",
        "nodeDraggable": "node_draggable",
    }

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "ViewerOptions":
        """
        Build options from a plain mapping.

        Accepts snake_case field names and the camelCase names of the
        browser viewer. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in values.items():
            name = cls._CAMEL_KEYS.get(key, key)
            if name in known:
                kwargs[name] = value
        if "reset_pan" in kwargs:
            kwargs["reset_pan"] = tuple(kwargs["reset_pan"])
        return cls(**kwargs)


@dataclass
class TreeNode:
    """A single node of the hierarchy with layout and interaction state."""
    id: NodeId
    parent_id: Optional[NodeId]
    data: Dict[str, Any] = field(default_factory=dict)
    collapsed: bool = False

    # Position (None until the first layout pass)
    x: Optional[float] = None
    y: Optional[float] = None
    orig_x: Optional[float] = None   # Last algorithmic position
    orig_y: Optional[float] = None

    # Interaction state
    manually_positioned: bool = False
    dragging: bool = False

    @property
    def is_positioned(self) -> bool:
        return self.x is not None and self.y is not None

    def toggle_collapse(self) -> None:
        self.collapsed = not self.collapsed

    def reset_position(self) -> None:
        """Return to the position last computed by the layout engine."""
        if self.orig_x is not None and self.orig_y is not None:
            self.x = self.orig_x
            self.y = self.orig_y
            self.manually_positioned = False


@dataclass(frozen=True)
class Point:
    """A 2-D coordinate."""
    x: float
    y: float


@dataclass(frozen=True)
class TreeBounds:
    """Axis-aligned bounding box of the positioned nodes."""
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class ViewportTransform:
    """Maps content coordinates to container pixels: p * scale + pan."""
    scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0

    def to_content(self, container_x: float, container_y: float) -> Point:
        return Point(
            (container_x - self.pan_x) / self.scale,
            (container_y - self.pan_y) / self.scale,
        )

    def to_container(self, content_x: float, content_y: float) -> Point:
        return Point(
            content_x * self.scale + self.pan_x,
            content_y * self.scale + self.pan_y,
        )


@dataclass(frozen=True)
class Connection:
    """S-curve connector from a parent's bottom-center to a child's top-center."""
    parent_id: NodeId
    child_id: NodeId
    start: Point
    end: Point
    control1: Point
    control2: Point

    @property
    def key(self) -> EdgeKey:
        return (self.parent_id, self.child_id)

    @property
    def path_data(self) -> str:
        """Cubic Bezier path command string, e.g. "M 0.0 0.0 C 0.0 5.0, ..."."""
        p = [float(v) for v in (
            self.start.x, self.start.y,
            self.control1.x, self.control1.y,
            self.control2.x, self.control2.y,
            self.end.x, self.end.y,
        )]
        return f"M {p[0]} {p[1]} C {p[2]} {p[3]}, {p[4]} {p[5]}, {p[6]} {p[7]}"


@dataclass
class LayoutResult:
    """Output of one layout pass."""
    nodes: List[TreeNode] = field(default_factory=list)       # Pre-order, visible only
    widths: Dict[NodeId, float] = field(default_factory=dict)  # Reserved subtree widths

    @property
    def ids(self) -> List[NodeId]:
        return [n.id for n in self.nodes]


@dataclass(frozen=True)
class PointerEvent:
    """
    A pointer press/move/release in container coordinates.

    client_x/client_y are the raw window coordinates used for node
    dragging; they default to the container coordinates.
    """
    x: float
    y: float
    target: PointerTarget = PointerTarget.CANVAS
    node_id: Optional[NodeId] = None
    client_x: Optional[float] = None
    client_y: Optional[float] = None

    @property
    def client(self) -> Tuple[float, float]:
        cx = self.client_x if self.client_x is not None else self.x
        cy = self.client_y if self.client_y is not None else self.y
        return cx, cy


@dataclass(frozen=True)
class WheelEvent:
    """A wheel tick. delta_y > 0 means scroll down (zoom out)."""
    x: float
    y: float
    delta_y: float
