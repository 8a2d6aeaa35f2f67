"""Data models for footprint elements."""
import math
from dataclasses import asdict, dataclass, field
from typing import Optional


# Wildcard layer prefixes KiCad uses in pad layer lists
WILDCARD_PREFIX = "*."
BOTH_SIDES_PREFIX = "F&B."


@dataclass(frozen=True)
class Point2D:
    """A point (or a pair of extents) in footprint coordinates (mm)."""
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class FpLine:
    """A graphical line segment."""
    start: Point2D = field(default_factory=Point2D)
    end: Point2D = field(default_factory=Point2D)
    layer: str = ""
    width: float = 0.0


@dataclass(frozen=True)
class FpCircle:
    """A graphical circle."""
    center: Point2D = field(default_factory=Point2D)
    end: Point2D = field(default_factory=Point2D)  # Point on the circumference
    layer: str = ""
    width: float = 0.0

    @property
    def radius(self) -> float:
        """Distance from the center to the circumference point."""
        return math.hypot(self.end.x - self.center.x, self.end.y - self.center.y)


@dataclass(frozen=True)
class FpArc:
    """A graphical arc."""
    start: Point2D = field(default_factory=Point2D)
    end: Point2D = field(default_factory=Point2D)
    angle: float = 0.0  # Sweep angle (degrees)
    layer: str = ""
    width: float = 0.0


@dataclass(frozen=True)
class FpPoly:
    """A graphical polygon. Vertex order defines the boundary."""
    position: Point2D = field(default_factory=Point2D)
    points: tuple[Point2D, ...] = ()
    layer: str = ""
    width: float = 0.0


@dataclass(frozen=True)
class FpText:
    """A text annotation (reference, value or user text)."""
    kind: str = ""
    value: str = ""
    position: Point2D = field(default_factory=Point2D)
    layer: str = ""
    hidden: bool = False
    size: Point2D = field(default_factory=Point2D)
    thickness: float = 0.0


@dataclass(frozen=True)
class Drill:
    """
    Drill geometry of a pad.

    Round drills carry their size in ``scalar`` and leave ``kind`` empty.
    Slotted drills set ``kind`` (e.g. "oval") and carry both extents in
    ``ellipse``. Only one of the two is meaningful for a given drill.
    """
    kind: str = ""
    scalar: float = 0.0
    ellipse: Point2D = field(default_factory=Point2D)
    offset: Point2D = field(default_factory=Point2D)

    @property
    def is_slotted(self) -> bool:
        return self.kind != ""


@dataclass(frozen=True)
class Pad:
    """A copper pad."""
    pin: Optional[int] = None  # None for unconnected pads (no numeric pin)
    kind: str = ""  # smd, thru_hole, np_thru_hole, connect
    shape: str = ""  # circle, rect, oval, trapezoid, roundrect
    drill: Drill = field(default_factory=Drill)
    position: Point2D = field(default_factory=Point2D)
    size: Point2D = field(default_factory=Point2D)
    layers: tuple[str, ...] = ()

    @property
    def is_connected(self) -> bool:
        return self.pin is not None

    def on_layer(self, layer: str) -> bool:
        """Check layer membership, expanding wildcards like *.Cu and F&B.Cu."""
        for pad_layer in self.layers:
            if pad_layer == layer:
                return True
            if pad_layer.startswith(WILDCARD_PREFIX):
                # "*.Cu" -> any layer ending in ".Cu"
                if layer.endswith(pad_layer[1:]):
                    return True
            elif pad_layer.startswith(BOTH_SIDES_PREFIX):
                suffix = pad_layer[len(BOTH_SIDES_PREFIX):]
                if layer in (f"F.{suffix}", f"B.{suffix}"):
                    return True
        return False


# Overrides that are left out of the serialized form when not set
OPTIONAL_OVERRIDES = (
    "clearance", "solder_mask_margin", "solder_paste_margin", "solder_paste_ratio",
)


@dataclass(frozen=True)
class Module:
    """A footprint definition and everything it owns."""
    name: str
    tedit: str = ""
    description: str = ""
    layer: str = ""
    position: Point2D = field(default_factory=Point2D)
    clearance: Optional[float] = None
    solder_mask_margin: Optional[float] = None
    solder_paste_margin: Optional[float] = None
    solder_paste_ratio: Optional[float] = None
    model: str = ""  # 3D model path
    tags: tuple[str, ...] = ()
    attrs: tuple[str, ...] = ()
    lines: tuple[FpLine, ...] = ()
    arcs: tuple[FpArc, ...] = ()
    circles: tuple[FpCircle, ...] = ()
    polygons: tuple[FpPoly, ...] = ()
    texts: tuple[FpText, ...] = ()
    pads: tuple[Pad, ...] = ()

    def pads_on_layer(self, layer: str) -> list[Pad]:
        """Get all pads present on a specific layer."""
        return [p for p in self.pads if p.on_layer(layer)]

    def texts_of_kind(self, kind: str) -> list[FpText]:
        """Get text annotations of one kind (reference, value, user)."""
        return [t for t in self.texts if t.kind == kind]

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict, dropping unset overrides."""
        data = asdict(self)
        for key in OPTIONAL_OVERRIDES:
            if data[key] is None:
                del data[key]
        return data
