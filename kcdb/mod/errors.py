"""
Exception hierarchy for footprint decoding.

Every error carries a short message plus optional context (offending keyword,
field, record type) and suggestions, all folded into ``str(error)``::

    raise InvalidFieldError("width", record="fp_line")
    # Invalid value for field 'width' in fp_line
    #
    # Context:
    #   field: width
    #   record: fp_line
"""
from typing import Any, Optional


class FootprintError(Exception):
    """
    Base exception for all footprint reading errors.

    Attributes:
        message: Short description of the problem
        context: Dictionary of contextual information (keyword, field, ...)
        suggestions: List of hints for fixing the input
    """

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ParseError(FootprintError):
    """The text could not be tokenized into an S-expression tree."""


class NodeError(FootprintError):
    """A tree node was accessed out of range or coerced to the wrong type."""


class DecodeError(FootprintError):
    """The tree does not describe a well-formed footprint."""


class MalformedStructureError(DecodeError):
    """
    The document does not have the expected outer wrapping.

    ``reason`` is one of the REASON_* constants so callers can tell which
    expectation failed without parsing the message.
    """

    REASON_LIST_AT_TOP = "list-at-top"
    REASON_ONE_CHILD = "one-child"
    REASON_LIST_AT_SECOND_LEVEL = "list-at-second-level"
    REASON_TOO_FEW_ELEMENTS = "too-few-elements"

    _MESSAGES = {
        REASON_LIST_AT_TOP: "expected s-expression list at top level",
        REASON_ONE_CHILD: "expected exactly one top-level expression",
        REASON_LIST_AT_SECOND_LEVEL: "expected s-expression list at 1st level",
        REASON_TOO_FEW_ELEMENTS: "missing minimum elements (prefix, name, one field)",
    }

    def __init__(self, reason: str, context: Optional[dict[str, Any]] = None):
        self.reason = reason
        super().__init__(
            f"Invalid format: {self._MESSAGES[reason]}",
            context={"reason": reason, **(context or {})},
        )


class MissingPrefixError(DecodeError):
    """The top-level record does not start with the module keyword."""

    def __init__(self, found: Optional[str], expected: str = "module"):
        self.found = found
        self.expected = expected
        super().__init__(
            f"Invalid format: missing {expected} prefix",
            context={"expected": expected, "found": found},
            suggestions=[f"Check that the file is a legacy footprint rooted at ({expected} ...)"],
        )


class InvalidFieldError(DecodeError):
    """A recognized clause holds a value of the wrong type or arity."""

    def __init__(self, field: str, record: Optional[str] = None, detail: str = ""):
        self.field = field
        self.record = record
        location = f" in {record}" if record else ""
        context: dict[str, Any] = {"field": field}
        if record:
            context["record"] = record
        if detail:
            context["detail"] = detail
        super().__init__(f"Invalid value for field '{field}'{location}", context=context)


class UnrecognizedClauseError(DecodeError):
    """A module-level clause uses a keyword outside the known vocabulary."""

    def __init__(self, keyword: str):
        self.keyword = keyword
        super().__init__(
            f"Cannot handle expression: {keyword}",
            context={"keyword": keyword},
        )


class UnsupportedPointKindError(DecodeError):
    """A polygon vertex list holds something other than an (xy X Y) entry."""

    def __init__(self, keyword: str):
        self.keyword = keyword
        super().__init__(
            f"Cannot handle expression of type {keyword!r} in fp_poly.pts stanza",
            context={"keyword": keyword},
        )
