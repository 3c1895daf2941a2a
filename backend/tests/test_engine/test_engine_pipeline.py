"""Tests for the normalizer registry and the engine orchestrator."""

import pytest

from plangeom.engine import (
    GeometryEngine,
    Polygon,
    Polyline,
    ProcessingContext,
    Rect,
    Rejection,
    ShapeKind,
    create_engine,
    get_registry,
)
from plangeom.engine.geometry import Circle, Line
from plangeom.engine.matrix import scale, translate
from plangeom.engine.registry import NormalizerRegistry, NormalizerSpec, normalizer
from plangeom.svg.document import SvgNode, parse_svg_document
from tests.conftest import INKSCAPE_SVG, build_tree


# --- Registry ---


def test_every_kind_has_a_normalizer():
    registry = get_registry()
    assert registry.missing() == set()
    assert registry.count == len(ShapeKind)


def test_registry_order_follows_enum():
    kinds = [spec.kind for spec in get_registry().all()]
    assert kinds == list(ShapeKind)


def test_duplicate_registration_rejected():
    registry = NormalizerRegistry()
    registry.register(NormalizerSpec(kind=ShapeKind.RECT, fn=lambda *a: None))
    with pytest.raises(ValueError, match="Duplicate"):
        registry.register(NormalizerSpec(kind=ShapeKind.RECT, fn=lambda *a: None))


def test_decorator_registers_into_given_registry():
    registry = NormalizerRegistry()

    @normalizer(kind=ShapeKind.CIRCLE, description="test", registry=registry)
    def fn(shape, matrix, context, config):
        return None

    assert registry.get(ShapeKind.CIRCLE).fn is fn
    assert registry.get(ShapeKind.CIRCLE).description == "test"
    assert get_registry().get(ShapeKind.CIRCLE).fn is not fn


def test_engine_refuses_incomplete_registry():
    registry = NormalizerRegistry()
    registry.register(NormalizerSpec(kind=ShapeKind.RECT, fn=lambda *a: None))
    with pytest.raises(ValueError, match="No normalizer registered"):
        GeometryEngine(registry=registry)


# --- Engine ---


def test_rect_under_translated_group(engine):
    node = build_tree(
        ("g", {"transform": "translate(100,0)"}),
        ("rect", {"id": "office", "x": "10", "y": "10", "width": "50", "height": "50", "transform": "scale(2)"}),
    )
    assert engine.normalize_node(node) == Rect(120, 20, 100, 100, "office")


def test_effective_matrix_applies_root_matrix_last():
    node = build_tree(("g", {"transform": "scale(2)"}), ("rect", {"transform": "translate(1,0)"}))
    engine = create_engine(root_matrix=translate(0, 50))
    m = engine.effective_matrix(node)
    # translate(1,0), then scale(2), then the root offset
    assert (m.a, m.d, m.e, m.f) == (2, 2, 2, 50)


def test_unsupported_tag_rejected(engine):
    node = build_tree(("text", {"id": "label"}))
    result = engine.normalize_node(node)
    assert isinstance(result, Rejection)
    assert "unsupported" in result.reason


def test_invalid_attribute_rejected(engine):
    node = build_tree(("rect", {"id": "r", "x": "abc", "width": "10", "height": "10"}))
    result = engine.normalize_node(node)
    assert isinstance(result, Rejection)
    assert "invalid attribute" in result.reason


def test_missing_attributes_default_to_zero(engine):
    node = build_tree(("circle", {"r": "4"}))
    assert engine.normalize_node(node) == Circle(0, 0, 4)


def test_lengths_accept_px_suffix(engine):
    node = build_tree(("line", {"x1": "0px", "y1": "0", "x2": "12.5px", "y2": " 0 "}))
    assert engine.normalize_node(node) == Line(0, 0, 12.5, 0)


def test_node_is_not_mutated(engine):
    attrs = {"id": "p", "points": "0,0 10,0 10,10 0,10", "transform": "translate(5,5)"}
    node = build_tree(("polygon", attrs))
    before = dict(node.attributes)
    engine.normalize_node(node)
    assert node.attributes == before


def test_normalize_document(engine, office_floor_svg):
    results = engine.normalize_document(parse_svg_document(office_floor_svg))
    ids = [r.source_id for r in results]
    assert ids == ["Bureau_x20_101", "Open_space", "Meeting_A", "Pillar", "Column", "Wall", "Sliver"]

    by_id = {r.source_id: r for r in results}
    assert by_id["Bureau_x20_101"] == Rect(120, 20, 100, 100, "Bureau_x20_101")
    assert by_id["Meeting_A"] == Polygon(((100, 0), (110, 0), (110, 10), (100, 10)), "Meeting_A")
    assert isinstance(by_id["Pillar"], Polygon)
    assert isinstance(by_id["Sliver"], Rejection)


def test_normalize_document_itinerary(engine, itinerary_svg):
    results = engine.normalize_document(parse_svg_document(itinerary_svg), ProcessingContext.ITINERARY)
    assert all(isinstance(r, Polyline) for r in results)
    loop, corridor, hop = results
    assert loop.points[0] == loop.points[-1]
    assert corridor.points == ((0, 0), (50, 0), (50, 50))
    assert hop.points == ((0, 0), (20, 0))


def test_inkscape_original_outline_preferred(engine):
    (result,) = engine.normalize_document(parse_svg_document(INKSCAPE_SVG))
    assert result == Polygon(((0, 0), (20, 0), (20, 20), (0, 20)), "Room")


def test_thread_pool_preserves_order(engine, office_floor_svg):
    root = parse_svg_document(office_floor_svg)
    serial = engine.normalize_document(root)
    parallel = engine.normalize_document(root, max_workers=4)
    assert parallel == serial


def test_batch_summary_logged(engine, caplog):
    nodes = [build_tree(("circle", {"r": "1"})), build_tree(("rect", {}))]
    with caplog.at_level("INFO", logger="plangeom.engine.pipeline"):
        results = engine.normalize_nodes(nodes)
    assert isinstance(results[1], Rejection)
    assert "1 geometries, 1 rejected" in caplog.text


def test_custom_config_is_used():
    from plangeom.engine.config import EngineConfig

    engine = create_engine(config=EngineConfig(proximity_threshold=20))
    node = build_tree(("line", {"x1": "0", "y1": "0", "x2": "10", "y2": "10"}))
    assert isinstance(engine.normalize_node(node), Rejection)


def test_calibrated_engine(engine):
    calibrated = create_engine(root_matrix=scale(0.5))
    node = build_tree(("rect", {"x": "10", "y": "10", "width": "20", "height": "20"}))
    assert calibrated.normalize_node(node) == Rect(5, 5, 10, 10)
    assert engine.normalize_node(node) == Rect(10, 10, 20, 20)


def test_detached_node(engine):
    node = SvgNode("rect", {"width": "3", "height": "4"})
    assert engine.normalize_node(node) == Rect(0, 0, 3, 4)
