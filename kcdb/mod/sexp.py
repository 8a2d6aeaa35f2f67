"""S-expression tree navigation on top of the kiutils reader."""
import math
import re
from typing import Iterator, TextIO, Union

from kiutils.utils import sexpr

from .errors import NodeError, ParseError

# Tree elements: nested lists of atoms. Parsed atoms are the literal source
# text (quotes stripped); int/float are accepted for trees built by hand.
RawValue = Union[list, str, int, float]


class Node:
    """
    Read-only view over one element of a parsed S-expression tree.

    A node is either a list (``(keyword arg ...)``) or a scalar atom. Atoms
    keep their source text, so ``as_string`` returns exactly what was written
    and numeric conversion happens only in ``as_int``/``as_float``.
    """

    __slots__ = ("_value",)

    def __init__(self, value: RawValue):
        self._value = value

    def __repr__(self) -> str:
        return f"Node({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self._value == other._value

    @property
    def value(self) -> RawValue:
        return self._value

    def is_list(self) -> bool:
        return isinstance(self._value, list)

    def is_scalar(self) -> bool:
        return not self.is_list()

    def num_children(self) -> int:
        if not self.is_list():
            raise NodeError("Scalar node has no children", context={"node": self._value})
        return len(self._value)

    def child(self, index: int) -> "Node":
        """Get the 0-based child at index."""
        if index < 0 or index >= self.num_children():
            raise NodeError(
                f"Child index {index} out of range",
                context={"node": self._value, "children": len(self._value)},
            )
        return Node(self._value[index])

    def children(self, start: int = 0) -> Iterator["Node"]:
        """Iterate over children, optionally skipping the first ``start``."""
        for item in self._value[start:] if self.is_list() else ():
            yield Node(item)

    def keyword(self) -> str | None:
        """Leading keyword of a list node, or None for scalars and empty lists."""
        if not self.is_list() or not self._value:
            return None
        head = self._value[0]
        if isinstance(head, list):
            return None
        return str(head)

    def as_string(self) -> str:
        if self.is_list():
            raise NodeError("Expected a string atom, got a list", context={"node": self._value})
        return str(self._value)

    def as_int(self) -> int:
        value = self._value
        if isinstance(value, bool) or isinstance(value, (list, float)):
            raise NodeError("Expected an integer atom", context={"node": value})
        if isinstance(value, int):
            return value
        # int() would also take "1_0" and surrounding whitespace
        if not _INT_LITERAL.fullmatch(value):
            raise NodeError("Expected an integer atom", context={"node": value})
        return int(value)

    def as_float(self) -> float:
        value = self._value
        if isinstance(value, (list, bool)):
            raise NodeError("Expected a numeric atom", context={"node": value})
        if isinstance(value, str) and "_" in value:
            raise NodeError("Expected a numeric atom", context={"node": value})
        try:
            result = float(value)
        except ValueError as exc:
            raise NodeError("Expected a numeric atom", context={"node": value}) from exc
        if not math.isfinite(result):
            raise NodeError("Expected a finite number", context={"node": value})
        return result


_INT_LITERAL = re.compile(r"[+-]?\d+")


def _atom_literals(text: str) -> Iterator[str]:
    """Yield the source text of every atom, in document order."""
    for match in re.finditer(sexpr.term_regex, text):
        term, value = [(t, v) for t, v in match.groupdict().items() if v][0]
        if value in ("(", ")"):
            continue
        if term == "sq":
            yield value[1:-1].replace('\\"', '"')
        else:
            yield value


def _restore_literals(tree: list, literals: Iterator[str]) -> list:
    """Replace kiutils' converted atoms with their literal text."""
    return [
        _restore_literals(item, literals) if isinstance(item, list) else next(literals)
        for item in tree
    ]


def parse_text(text: str) -> Node:
    """
    Tokenize a document into a list node holding all of its top-level forms.

    A well-formed footprint yields a root with exactly one child; empty
    documents and trailing expressions show up as a different child count.

    Raises:
        ParseError: if brackets are unbalanced
    """
    wrapped = f"({text}\n)"
    try:
        tree = sexpr.parse_sexp(wrapped)
    except (AssertionError, IndexError) as exc:
        raise ParseError(
            "Could not parse s-expression",
            context={"detail": str(exc) or type(exc).__name__},
            suggestions=["Check for missing or extra parentheses"],
        ) from exc
    return Node(_restore_literals(tree, _atom_literals(wrapped)))


def parse(stream: TextIO) -> Node:
    """Read an already-opened character stream and tokenize it."""
    return parse_text(stream.read())
