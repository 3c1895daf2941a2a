"""Tests for the SVG document reader."""

import pytest

from plangeom.svg.document import SvgNode, SvgParseError, iter_drawable, parse_svg_document
from tests.conftest import INKSCAPE_SVG, OFFICE_FLOOR_SVG


def test_parse_tree_shape():
    root = parse_svg_document(OFFICE_FLOOR_SVG)
    assert root.tag == "svg"
    assert root.parent is None
    assert [c.id for c in root.children] == ["Salles", "Decor", ""]
    assert root.children[0].get("transform") == "translate(100,0)"


def test_parent_links():
    root = parse_svg_document(OFFICE_FLOOR_SVG)
    rect = root.children[0].children[0]
    assert rect.id == "Bureau_x20_101"
    assert rect.parent is root.children[0]
    assert list(rect.ancestors()) == [root.children[0], root]


def test_namespaced_attributes_are_prefixed():
    root = parse_svg_document(INKSCAPE_SVG)
    path = root.children[0]
    assert path.tag == "path"
    assert path.get("inkscape:original-d") == "M0,0 L20,0 L20,20 L0,20 Z"
    assert path.get("d") == "M0,0 C1,1 2,2 3,3"


def test_tags_are_lowercased():
    root = parse_svg_document('<svg xmlns="http://www.w3.org/2000/svg"><clipPath><rect/></clipPath></svg>')
    assert root.children[0].tag == "clippath"


def test_iter_drawable_skips_defs():
    root = parse_svg_document(OFFICE_FLOOR_SVG)
    ids = [n.id for n in iter_drawable(root)]
    assert "Template" not in ids
    assert ids[0] == "Bureau_x20_101"
    assert len(ids) == 7


def test_iter_drawable_skips_clip_paths_and_markers():
    svg = '''<svg xmlns="http://www.w3.org/2000/svg">
      <clipPath id="clip"><rect id="a" width="1" height="1"/></clipPath>
      <marker id="m"><path id="b" d="M0,0 L1,1"/></marker>
      <g><circle id="c" r="1"/><text id="t">label</text></g>
    </svg>'''
    assert [n.id for n in iter_drawable(parse_svg_document(svg))] == ["c"]


def test_comments_ignored():
    root = parse_svg_document('<svg><!-- note --><rect id="r"/></svg>')
    assert [c.id for c in root.children] == ["r"]


def test_iter_includes_self():
    root = parse_svg_document(OFFICE_FLOOR_SVG)
    nodes = list(root.iter())
    assert nodes[0] is root
    assert len(nodes) == 12


def test_malformed_markup():
    with pytest.raises(SvgParseError, match="Malformed SVG"):
        parse_svg_document("<svg><rect></svg>")


def test_append_sets_parent():
    root = SvgNode("svg")
    child = root.append(SvgNode("g"))
    assert child.parent is root
    assert root.children == [child]
