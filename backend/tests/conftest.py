"""Shared test fixtures."""

from __future__ import annotations

import pytest

from plangeom.engine import GeometryEngine, create_engine
from plangeom.svg.document import SvgNode


# Sample floor plans

OFFICE_FLOOR_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1000 800">
  <g id="Salles" transform="translate(100,0)">
    <rect id="Bureau_x20_101" x="10" y="10" width="50" height="50" transform="scale(2)"/>
    <polygon id="Open_space" points="200,200 400,200 400,300 200,300"/>
    <path id="Meeting_A" d="M0,0 L10,0 L10,10 L0,10 Z"/>
  </g>
  <g id="Decor">
    <rect id="Pillar" x="0" y="0" width="10" height="10" transform="rotate(45)"/>
    <circle id="Column" cx="50" cy="50" r="5"/>
    <line id="Wall" x1="0" y1="0" x2="100" y2="0"/>
    <polygon id="Sliver" points="0,0 100,0 100,0.1 0,0.1"/>
  </g>
  <defs>
    <rect id="Template" x="0" y="0" width="10" height="10"/>
  </defs>
</svg>'''

ITINERARY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 500 500">
  <g id="Itineraires">
    <polygon id="Loop" points="0,0 100,0 100,100 0,100"/>
    <path id="Corridor" d="M0,0 H50 V50"/>
    <line id="Hop" x1="0" y1="0" x2="20" y2="0"/>
  </g>
</svg>'''

INKSCAPE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg"
     xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape"
     viewBox="0 0 100 100">
  <path id="Room" d="M0,0 C1,1 2,2 3,3" inkscape:original-d="M0,0 L20,0 L20,20 L0,20 Z"/>
</svg>'''


def build_tree(*levels: tuple[str, dict[str, str]]) -> SvgNode:
    """Chain of nested nodes: root, then each (tag, attributes) level as the child of the previous one.

    Returns the innermost node.
    """
    node = SvgNode("svg")
    for tag, attrs in levels:
        node = node.append(SvgNode(tag, dict(attrs)))
    return node


@pytest.fixture
def engine() -> GeometryEngine:
    return create_engine()


@pytest.fixture
def office_floor_svg() -> str:
    return OFFICE_FLOOR_SVG


@pytest.fixture
def itinerary_svg() -> str:
    return ITINERARY_SVG
