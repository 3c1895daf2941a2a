"""Minimal SVG document tree — the node view the engine walks.

Parses with ``xml.etree.ElementTree`` and keeps only what the geometry
engine needs: tag, attributes, children and a parent link for ancestor
transform accumulation. Nodes are never modified after parsing.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_NAMESPACE_PREFIXES = {
    "http://www.inkscape.org/namespaces/inkscape": "inkscape",
    "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd": "sodipodi",
    "http://www.w3.org/1999/xlink": "xlink",
    "http://www.w3.org/XML/1998/namespace": "xml",
}

DRAWABLE_TAGS = frozenset({"rect", "line", "polygon", "polyline", "path", "circle", "ellipse"})

# Containers whose content is never rendered directly
NON_RENDERED_TAGS = frozenset({"defs", "clippath", "mask", "symbol", "pattern", "marker", "metadata"})


class SvgParseError(ValueError):
    """Raised when the markup is not well-formed XML."""


@dataclass(eq=False)
class SvgNode:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[SvgNode] = field(default_factory=list)
    parent: SvgNode | None = field(default=None, repr=False)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    def ancestors(self) -> Iterator[SvgNode]:
        """Parents from nearest to the document root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def iter(self) -> Iterator[SvgNode]:
        """Depth-first, document order, including self."""
        yield self
        for child in self.children:
            yield from child.iter()

    def append(self, child: SvgNode) -> SvgNode:
        child.parent = self
        self.children.append(child)
        return child


def _local_name(name: str) -> tuple[str | None, str]:
    if name.startswith("{"):
        uri, _, local = name[1:].partition("}")
        return uri, local
    return None, name


def _attribute_name(name: str) -> str:
    uri, local = _local_name(name)
    if uri is None:
        return local
    prefix = _NAMESPACE_PREFIXES.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _convert(element: ET.Element) -> SvgNode:
    _, tag = _local_name(element.tag)
    node = SvgNode(
        tag=tag.lower(),
        attributes={_attribute_name(k): v for k, v in element.attrib.items()},
    )
    for child in element:
        if not isinstance(child.tag, str):
            # Comments and processing instructions
            continue
        node.append(_convert(child))
    return node


def parse_svg_document(svg_text: str) -> SvgNode:
    """Parse SVG markup into an SvgNode tree rooted at the ``<svg>`` element."""
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise SvgParseError(f"Malformed SVG: {e}") from e
    doc = _convert(root)
    logger.debug("Parsed SVG document: %d nodes", sum(1 for _ in doc.iter()))
    return doc


def iter_drawable(root: SvgNode) -> Iterator[SvgNode]:
    """Drawable primitives in document order, skipping non-rendered containers."""
    for child in root.children:
        if child.tag in NON_RENDERED_TAGS:
            continue
        if child.tag in DRAWABLE_TAGS:
            yield child
        yield from iter_drawable(child)
