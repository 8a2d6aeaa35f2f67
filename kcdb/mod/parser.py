"""KiCad footprint (.kicad_mod) decoder over a generic S-expression tree."""
import logging
from pathlib import Path
from typing import Callable, TextIO, TypeVar

from .errors import (
    InvalidFieldError, MalformedStructureError, MissingPrefixError,
    NodeError, ParseError, UnrecognizedClauseError, UnsupportedPointKindError,
)
from .models import (
    Drill, FpArc, FpCircle, FpLine, FpPoly, FpText, Module, Pad, Point2D,
)
from .sexp import Node, parse, parse_text

logger = logging.getLogger(__name__)

T = TypeVar("T")

MODULE_PREFIX = "module"

# Module-level clauses that are recognized but carry nothing we model
IGNORED_CLAUSES = frozenset({
    "zone_connect", "path", "autoplace_cost90", "autoplace_cost180",
})

STRING_FIELDS = {
    "layer": "layer",
    "tedit": "tedit",
    "descr": "description",
    "model": "model",
}

FLOAT_FIELDS = {
    "clearance": "clearance",
    "solder_mask_margin": "solder_mask_margin",
    "solder_paste_margin": "solder_paste_margin",
    "solder_paste_ratio": "solder_paste_ratio",
}

LIST_FIELDS = {
    "tags": "tags",
    "attr": "attrs",
}

# Bare atoms accepted among fp_text children
TEXT_FLAGS = frozenset({"hide"})


def _field(name: str, record: str | None, read: Callable[[], T]) -> T:
    """Run a node read, reporting any navigation failure as an invalid field."""
    try:
        return read()
    except NodeError as exc:
        raise InvalidFieldError(name, record=record, detail=exc.message) from exc


def _point(clause: Node, record: str | None = None) -> Point2D:
    """Read ``(keyword X Y ...)`` as a point; trailing arguments are ignored."""
    return _field(clause.keyword() or "", record, lambda: Point2D(
        x=clause.child(1).as_float(),
        y=clause.child(2).as_float(),
    ))


def _float(clause: Node, record: str | None = None) -> float:
    return _field(clause.keyword() or "", record, lambda: clause.child(1).as_float())


def _string(clause: Node, record: str | None = None) -> str:
    return _field(clause.keyword() or "", record, lambda: clause.child(1).as_string())


def _sub_clauses(node: Node, start: int = 1):
    """Yield (keyword, clause) for list children; bare atoms are skipped."""
    for child in node.children(start):
        keyword = child.keyword()
        if keyword is not None:
            yield keyword, child


def extract_line(node: Node) -> FpLine:
    """Decode an ``fp_line`` record."""
    values = {}
    for keyword, clause in _sub_clauses(node):
        if keyword in ("start", "end"):
            values[keyword] = _point(clause, "fp_line")
        elif keyword == "layer":
            values["layer"] = _string(clause, "fp_line")
        elif keyword == "width":
            values["width"] = _float(clause, "fp_line")
    return FpLine(**values)


def extract_circle(node: Node) -> FpCircle:
    """Decode an ``fp_circle`` record."""
    values = {}
    for keyword, clause in _sub_clauses(node):
        if keyword in ("center", "end"):
            values[keyword] = _point(clause, "fp_circle")
        elif keyword == "layer":
            values["layer"] = _string(clause, "fp_circle")
        elif keyword == "width":
            values["width"] = _float(clause, "fp_circle")
    return FpCircle(**values)


def extract_arc(node: Node) -> FpArc:
    """Decode an ``fp_arc`` record."""
    values = {}
    for keyword, clause in _sub_clauses(node):
        if keyword in ("start", "end"):
            values[keyword] = _point(clause, "fp_arc")
        elif keyword == "layer":
            values["layer"] = _string(clause, "fp_arc")
        elif keyword in ("width", "angle"):
            values[keyword] = _float(clause, "fp_arc")
    return FpArc(**values)


def _decode_points(pts: Node) -> tuple[Point2D, ...]:
    points = []
    for child in pts.children(1):
        kind = child.keyword()
        if kind != "xy":
            # Anything else would silently change the boundary
            raise UnsupportedPointKindError(kind if kind is not None else repr(child.value))
        points.append(_field("pts", "fp_poly", lambda: Point2D(
            x=child.child(1).as_float(),
            y=child.child(2).as_float(),
        )))
    return tuple(points)


def extract_poly(node: Node) -> FpPoly:
    """Decode an ``fp_poly`` record, keeping vertex order."""
    values = {}
    for keyword, clause in _sub_clauses(node):
        if keyword == "at":
            values["position"] = _point(clause, "fp_poly")
        elif keyword == "pts":
            values["points"] = _decode_points(clause)
        elif keyword == "layer":
            values["layer"] = _string(clause, "fp_poly")
        elif keyword == "width":
            values["width"] = _float(clause, "fp_poly")
    return FpPoly(**values)


def _decode_effects(effects: Node, values: dict) -> None:
    """Collect size, thickness and hide from an ``effects`` clause."""
    for child in effects.children(1):
        keyword = child.keyword()
        if keyword is None:
            if child.is_scalar() and child.as_string() in TEXT_FLAGS:
                values["hidden"] = True
        elif keyword == "font":
            # (effects (font (size W H) (thickness T)))
            _decode_effects(child, values)
        elif keyword == "size":
            values["size"] = _point(child, "fp_text")
        elif keyword == "thickness":
            values["thickness"] = _float(child, "fp_text")


def extract_text(node: Node) -> FpText:
    """Decode an ``fp_text`` record; kind and value are mandatory."""
    values = {
        "kind": _field("kind", "fp_text", lambda: node.child(1).as_string()),
        "value": _field("value", "fp_text", lambda: node.child(2).as_string()),
    }
    for child in node.children(3):
        if child.is_scalar():
            if child.as_string() in TEXT_FLAGS:
                values["hidden"] = True
            continue
        keyword = child.keyword()
        if keyword == "at":
            values["position"] = _point(child, "fp_text")
        elif keyword == "layer":
            values["layer"] = _string(child, "fp_text")
        elif keyword == "effects":
            _decode_effects(child, values)
    return FpText(**values)


def extract_drill(node: Node) -> Drill:
    """
    Decode a pad ``drill`` clause.

    Round drills are written ``(drill 0.8)``, slotted ones
    ``(drill oval 1.2 0.6)``; either may carry ``(offset X Y)``. Nothing tags
    which form is used, so each atom is probed as a number first: a number is
    the round size, anything else is the slot kind followed by two extents.
    """
    values = {}
    has_geometry = False
    count = node.num_children()
    index = 1
    while index < count:
        child = node.child(index)
        if child.is_list():
            if child.keyword() == "offset":
                values["offset"] = _point(child, "pad")
            index += 1
            continue

        if has_geometry:
            raise InvalidFieldError(
                "drill", record="pad", detail="more than one drill size given",
            )
        has_geometry = True

        try:
            values["scalar"] = child.as_float()
        except NodeError as exc:
            if index + 2 >= count:
                raise InvalidFieldError(
                    "drill", record="pad",
                    detail=f"drill kind {child.as_string()!r} needs two extents",
                ) from exc
            values["kind"] = child.as_string()
            values["ellipse"] = _field("drill", "pad", lambda: Point2D(
                x=node.child(index + 1).as_float(),
                y=node.child(index + 2).as_float(),
            ))
            index += 2
        index += 1
    return Drill(**values)


def extract_pad(node: Node) -> Pad:
    """Decode a ``pad`` record."""
    values = {
        "kind": _field("kind", "pad", lambda: node.child(2).as_string()),
        "shape": _field("shape", "pad", lambda: node.child(3).as_string()),
    }
    # Pads without an integer pin (e.g. mounting holes) are unconnected
    try:
        values["pin"] = node.child(1).as_int()
    except NodeError:
        logger.debug("Pad without numeric pin: %r", node.child(1).value)

    for keyword, clause in _sub_clauses(node, start=4):
        if keyword == "at":
            values["position"] = _point(clause, "pad")
        elif keyword == "size":
            values["size"] = _point(clause, "pad")
        elif keyword == "layers":
            values["layers"] = tuple(
                _field("layers", "pad", layer.as_string) for layer in clause.children(1)
            )
        elif keyword == "drill":
            values["drill"] = extract_drill(clause)
    return Pad(**values)


# Record clauses: keyword -> (collection on Module, extractor)
RECORD_EXTRACTORS: dict[str, tuple[str, Callable[[Node], object]]] = {
    "fp_line": ("lines", extract_line),
    "fp_circle": ("circles", extract_circle),
    "fp_arc": ("arcs", extract_arc),
    "fp_poly": ("polygons", extract_poly),
    "fp_text": ("texts", extract_text),
    "pad": ("pads", extract_pad),
}


def _module_node(root: Node) -> Node:
    """Unwrap ``((module ...))`` and check the outer shape."""
    if not root.is_list():
        raise MalformedStructureError(MalformedStructureError.REASON_LIST_AT_TOP)
    if root.num_children() != 1:
        raise MalformedStructureError(
            MalformedStructureError.REASON_ONE_CHILD,
            context={"children": root.num_children()},
        )
    main = root.child(0)
    if not main.is_list():
        raise MalformedStructureError(MalformedStructureError.REASON_LIST_AT_SECOND_LEVEL)
    if main.num_children() < 3:
        raise MalformedStructureError(
            MalformedStructureError.REASON_TOO_FEW_ELEMENTS,
            context={"children": main.num_children()},
        )
    return main


def decode(root: Node) -> Module:
    """
    Decode a parsed footprint document into a Module.

    Args:
        root: List node wrapping the single ``(module ...)`` expression

    Returns:
        The fully populated Module

    Raises:
        DecodeError: on the first structural or field error encountered
    """
    main = _module_node(root)

    prefix = main.keyword()
    if prefix != MODULE_PREFIX:
        raise MissingPrefixError(prefix, expected=MODULE_PREFIX)

    name = _field("name", None, lambda: main.child(1).as_string())
    if not name:
        raise InvalidFieldError("name", detail="module name is empty")

    fields = {"name": name}
    collections: dict[str, list] = {
        "tags": [], "attrs": [],
        "lines": [], "arcs": [], "circles": [], "polygons": [], "texts": [], "pads": [],
    }

    for clause in main.children(2):
        if not clause.is_list() or clause.num_children() < 2:
            continue
        keyword = _field("clause", None, lambda: clause.child(0).as_string())

        if keyword in IGNORED_CLAUSES:
            logger.debug("Ignoring %s clause in module %s", keyword, name)
        elif keyword in STRING_FIELDS:
            fields[STRING_FIELDS[keyword]] = _string(clause)
        elif keyword in FLOAT_FIELDS:
            fields[FLOAT_FIELDS[keyword]] = _float(clause)
        elif keyword == "at":
            fields["position"] = _point(clause)
        elif keyword in LIST_FIELDS:
            collections[LIST_FIELDS[keyword]].extend(
                _field(keyword, None, item.as_string) for item in clause.children(1)
            )
        elif keyword in RECORD_EXTRACTORS:
            collection, extractor = RECORD_EXTRACTORS[keyword]
            collections[collection].append(extractor(clause))
        else:
            raise UnrecognizedClauseError(keyword)

    module = Module(**fields, **{key: tuple(items) for key, items in collections.items()})
    logger.debug(
        "Decoded module %s: %d lines, %d arcs, %d circles, %d polygons, %d texts, %d pads",
        name, len(module.lines), len(module.arcs), len(module.circles),
        len(module.polygons), len(module.texts), len(module.pads),
    )
    return module


def decode_text(text: str) -> Module:
    """Parse and decode footprint text."""
    return decode(parse_text(text))


def decode_stream(stream: TextIO) -> Module:
    """Parse and decode a footprint from an open character stream."""
    return decode(parse(stream))


def decode_file(path: str | Path) -> Module:
    """Load and decode a .kicad_mod file."""
    path = Path(path)
    logger.debug("Reading footprint %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(
            "Footprint file is not valid UTF-8",
            context={"file": str(path), "offset": exc.start},
            suggestions=["Re-save the file with UTF-8 encoding"],
        ) from exc
    return decode_text(text)
