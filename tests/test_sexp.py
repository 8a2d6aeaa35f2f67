"""Tests for S-expression tree navigation."""
import io

import pytest

from kcdb.mod import Node, NodeError, ParseError, parse, parse_text


def test_parse_wraps_document():
    """The document's expression becomes the only child of the root."""
    root = parse_text("(module M (layer F.Cu))")

    assert root.is_list()
    assert root.num_children() == 1
    main = root.child(0)
    assert main.keyword() == "module"
    assert main.num_children() == 3


def test_parse_stream():
    root = parse(io.StringIO("(fp_line (start 0 0) (end 1 1))"))
    assert root.child(0).keyword() == "fp_line"


def test_parse_unbalanced_brackets():
    with pytest.raises(ParseError):
        parse_text("(module M (layer F.Cu)")


def test_quoted_strings_are_unwrapped():
    node = parse_text('(descr "Resistor (SMD)")').child(0)
    assert node.child(1).as_string() == "Resistor (SMD)"


def test_scalar_has_no_children():
    node = Node("F.Cu")
    assert node.is_scalar()
    assert not node.is_list()
    with pytest.raises(NodeError):
        node.num_children()
    with pytest.raises(NodeError):
        node.child(0)


@pytest.mark.parametrize("index", [3, -1])
def test_child_out_of_range(index):
    with pytest.raises(NodeError):
        Node(["at", 1, 2]).child(index)


def test_children_skips_leading():
    node = Node(["layers", "F.Cu", "F.Mask"])
    assert [c.as_string() for c in node.children(1)] == ["F.Cu", "F.Mask"]


def test_keyword():
    assert Node(["at", 1, 2]).keyword() == "at"
    assert Node([]).keyword() is None
    assert Node([["at"]]).keyword() is None
    assert Node("at").keyword() is None


def test_as_string():
    assert Node("REF**").as_string() == "REF**"
    assert Node(12).as_string() == "12"
    with pytest.raises(NodeError):
        Node(["x"]).as_string()


@pytest.mark.parametrize("value, expected", [
    (1, 1),
    ("1", 1),
    ("-4", -4),
])
def test_as_int(value, expected):
    assert Node(value).as_int() == expected


@pytest.mark.parametrize("value", ["", "A1", 1.5, "1.5", ["1"]])
def test_as_int_rejects(value):
    with pytest.raises(NodeError):
        Node(value).as_int()


@pytest.mark.parametrize("value, expected", [
    (1, 1.0),
    (0.25, 0.25),
    ("-0.5", -0.5),
    ("3", 3.0),
])
def test_as_float(value, expected):
    assert Node(value).as_float() == expected


@pytest.mark.parametrize("value", ["oval", "", "inf", "nan", ["0.5"]])
def test_as_float_rejects(value):
    with pytest.raises(NodeError):
        Node(value).as_float()


def test_parse_keeps_all_top_level_forms():
    root = parse_text("(module A) (module B)")
    assert root.num_children() == 2
    assert root.child(1).child(1).as_string() == "B"


def test_parse_empty_document():
    assert parse_text("").num_children() == 0


def test_atoms_keep_literal_text():
    node = parse_text("(tedit 00012345 1.0 -0.50)").child(0)
    assert [c.as_string() for c in node.children(1)] == ["00012345", "1.0", "-0.50"]
    assert node.child(1).as_int() == 12345
    assert node.child(3).as_float() == -0.5


@pytest.mark.parametrize("value", ["1_0", "1_000.5"])
def test_underscore_literals_rejected(value):
    with pytest.raises(NodeError):
        Node(value).as_float()
    with pytest.raises(NodeError):
        Node(value).as_int()
