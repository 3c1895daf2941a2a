"""Geometry engine orchestrator — normalizes document nodes into geometries."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Union

from plangeom.engine.config import DEFAULT_CONFIG, EngineConfig
from plangeom.engine.context import ProcessingContext, Rejection
from plangeom.engine.geometry import Geometry
from plangeom.engine.matrix import Matrix, identity, multiply
from plangeom.engine.primitives import describe
from plangeom.engine.registry import NormalizerRegistry, get_registry
from plangeom.engine.transform_parser import accumulate_ancestor_transform, parse_transform_list
from plangeom.svg.document import SvgNode, iter_drawable

logger = logging.getLogger(__name__)

NodeResult = Union[Geometry, Rejection]


class GeometryEngine:
    """Turns drawable nodes into transformed, simplified geometries.

    ``root_matrix`` is applied on top of every node's own transform chain,
    e.g. a site calibration from ``calibration_matrix``.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        registry: NormalizerRegistry | None = None,
        root_matrix: Matrix | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.registry = registry or get_registry()
        self.registry.ensure_complete()
        self.root_matrix = root_matrix or identity()

    def effective_matrix(self, node: SvgNode) -> Matrix:
        """root ∘ ancestors ∘ node's own transform."""
        ancestors = accumulate_ancestor_transform(node)
        local = parse_transform_list(node.get("transform"))
        return multiply(self.root_matrix, multiply(ancestors, local))

    def normalize_node(
        self,
        node: SvgNode,
        context: ProcessingContext = ProcessingContext.DEFAULT,
    ) -> NodeResult:
        shape = describe(node)
        if isinstance(shape, Rejection):
            return shape
        spec = self.registry.get(shape.kind)
        return spec.fn(shape, self.effective_matrix(node), context, self.config)

    def normalize_nodes(
        self,
        nodes: Iterable[SvgNode],
        context: ProcessingContext = ProcessingContext.DEFAULT,
        max_workers: int | None = None,
    ) -> list[NodeResult]:
        """Normalize independent nodes, optionally on a thread pool. Order is preserved."""
        start = time.perf_counter()
        node_list = list(nodes)

        if max_workers and max_workers > 1 and len(node_list) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                results = list(pool.map(lambda n: self.normalize_node(n, context), node_list))
        else:
            results = [self.normalize_node(n, context) for n in node_list]

        rejected = sum(1 for r in results if isinstance(r, Rejection))
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Normalized %d nodes (%s): %d geometries, %d rejected in %.0fms",
            len(results),
            context.value,
            len(results) - rejected,
            rejected,
            elapsed,
        )
        return results

    def normalize_document(
        self,
        root: SvgNode,
        context: ProcessingContext = ProcessingContext.DEFAULT,
        max_workers: int | None = None,
    ) -> list[NodeResult]:
        return self.normalize_nodes(iter_drawable(root), context, max_workers)


def create_engine(
    config: EngineConfig | None = None,
    root_matrix: Matrix | None = None,
) -> GeometryEngine:
    """Engine with all built-in normalizers registered."""
    import plangeom.engine.shapes  # noqa: F401

    return GeometryEngine(config=config, root_matrix=root_matrix)
