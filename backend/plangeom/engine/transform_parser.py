"""Transform-list parsing and ancestor transform accumulation.

``parse_transform_list("translate(5,5) rotate(45)")`` composes the functions
right-to-left: the rotation acts on the point first, then the translation.
Malformed functions contribute identity and never abort the whole list.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable

from plangeom.engine.matrix import (
    Matrix,
    compose,
    identity,
    multiply,
    rotate,
    scale,
    skew_x,
    skew_y,
    translate,
)

if TYPE_CHECKING:
    from plangeom.svg.document import SvgNode

logger = logging.getLogger(__name__)

_FUNCTION_RE = re.compile(r"([A-Za-z]+)\s*\(([^)]*)\)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _matrix_fn(args: list[float]) -> Matrix | None:
    return Matrix(*args) if len(args) == 6 else None


def _translate_fn(args: list[float]) -> Matrix | None:
    if len(args) == 1:
        return translate(args[0], 0.0)
    if len(args) == 2:
        return translate(args[0], args[1])
    return None


def _scale_fn(args: list[float]) -> Matrix | None:
    if len(args) == 1:
        return scale(args[0])
    if len(args) == 2:
        return scale(args[0], args[1])
    return None


def _rotate_fn(args: list[float]) -> Matrix | None:
    if len(args) == 1:
        return rotate(args[0])
    if len(args) == 3:
        return rotate(args[0], args[1], args[2])
    return None


def _skew_x_fn(args: list[float]) -> Matrix | None:
    return skew_x(args[0]) if len(args) == 1 else None


def _skew_y_fn(args: list[float]) -> Matrix | None:
    return skew_y(args[0]) if len(args) == 1 else None


# Keyed by lower-cased function name
_FUNCTIONS: dict[str, Callable[[list[float]], Matrix | None]] = {
    "matrix": _matrix_fn,
    "translate": _translate_fn,
    "scale": _scale_fn,
    "rotate": _rotate_fn,
    "skewx": _skew_x_fn,
    "skewy": _skew_y_fn,
}


def parse_transform_function(name: str, arg_text: str) -> Matrix:
    """Matrix for a single transform function; identity when malformed."""
    builder = _FUNCTIONS.get(name.lower())
    if builder is None:
        logger.warning("Ignoring unknown transform function %r", name)
        return identity()

    args = [float(tok) for tok in _NUMBER_RE.findall(arg_text)]
    matrix = builder(args)
    if matrix is None:
        logger.warning("Invalid arguments for %s(%s); using identity", name, arg_text.strip())
        return identity()
    return matrix


def parse_transform_list(text: str | None) -> Matrix:
    """Parse an SVG ``transform`` attribute into a single matrix."""
    if not text or not text.strip():
        return identity()

    matrices = [parse_transform_function(m.group(1), m.group(2)) for m in _FUNCTION_RE.finditer(text)]
    if not matrices:
        logger.warning("No transform functions found in %r", text)
        return identity()

    # compose() puts the rightmost function closest to the point
    return compose(*matrices)


def accumulate_ancestor_transform(node: SvgNode) -> Matrix:
    """Compose the transforms of every ancestor below the document root.

    The node's own ``transform`` is not included. The outermost ancestor's
    transform ends up leftmost, so it is applied last.
    """
    result = identity()
    parent = node.parent
    while parent is not None and parent.parent is not None:
        result = multiply(parse_transform_list(parent.get("transform")), result)
        parent = parent.parent
    return result


def calibration_matrix(
    source_rect: tuple[float, float, float, float],
    target_rect: tuple[float, float, float, float],
) -> Matrix:
    """Axis-aligned matrix mapping ``source_rect`` onto ``target_rect``.

    Rects are ``(x, y, width, height)``.
    """
    sx, sy, sw, sh = source_rect
    tx, ty, tw, th = target_rect
    if sw == 0 or sh == 0:
        raise ValueError(f"Calibration source rect has zero size: {source_rect}")
    a = tw / sw
    d = th / sh
    return Matrix(a, 0.0, 0.0, d, tx - sx * a, ty - sy * d)
