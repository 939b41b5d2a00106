from __future__ import annotations

import pytest

from citymap import Canvas, Edge, OverlayState, PathOverlay, RenderEngine
from citymap.render import ARROW_GLYPH

from .helpers import SVG_NS, edge, node, parse_svg, root_children_signature, triangle_edges, triangle_nodes


def by_id(items):
    return {item.id: item for item in items}


def render(engine: RenderEngine, nodes=None, edges=None, width=200, height=100):
    canvas = Canvas(width, height)
    engine.redraw(
        canvas,
        by_id(triangle_nodes() if nodes is None else nodes),
        by_id(triangle_edges() if edges is None else edges),
    )
    return parse_svg(canvas.to_string())


def test_root_structure_orders_edges_before_nodes():
    root = render(RenderEngine(embed_theme=False))

    assert root_children_signature(root) == [
        ("rect", None),
        ("g", "edges"),
        ("g", "nodes"),
    ]


def test_theme_style_is_embedded_by_default():
    root = render(RenderEngine())

    style = root.find("svg:style", SVG_NS)
    assert style is not None
    assert "#nodes" in style.text


def test_custom_theme_css_replaces_bundled_theme():
    root = render(RenderEngine(theme_css="a{b:c;}"))

    style = root.find("svg:style", SVG_NS)
    assert style.text.strip() == "a{b:c;}"


def test_edges_are_quadratic_curves_in_edge_color():
    root = render(RenderEngine(embed_theme=False))

    paths = root.findall("svg:g[@id='edges']/svg:g/svg:path", SVG_NS)
    assert len(paths) == 3
    first = paths[0]
    assert first.get("d").startswith("M")
    assert "Q" in first.get("d")
    assert first.get("stroke") == "#d62728"
    assert float(first.get("stroke-width")) == 4
    assert first.get("fill") == "none"


def test_every_edge_gets_a_rotated_arrow_glyph():
    root = render(RenderEngine(embed_theme=False))

    arrows = root.findall("svg:g[@id='edges']/svg:g/svg:text", SVG_NS)
    assert len(arrows) == 3
    for arrow in arrows:
        assert arrow.text == ARROW_GLYPH
        assert "rotate" in arrow.get("transform")


def test_edge_group_ids_follow_insertion_order():
    root = render(RenderEngine(embed_theme=False))

    ids = [g.get("id") for g in root.findall("svg:g[@id='edges']/svg:g", SVG_NS)]
    assert ids == ["edge-10", "edge-11", "edge-12"]


def test_node_marker_is_centered_and_sized_by_type():
    root = render(RenderEngine(embed_theme=False))

    capital = root.find("svg:g[@id='nodes']/svg:circle[@id='node-1']", SVG_NS)
    # Capital at (0.1, 0.2) on 200x100, diameter 20.
    assert float(capital.get("cx")) == pytest.approx(20.0)
    assert float(capital.get("cy")) == pytest.approx(20.0)
    assert float(capital.get("r")) == pytest.approx(10.0)
    assert "capital" in capital.get("class")

    village = root.find("svg:g[@id='nodes']/svg:circle[@id='node-3']", SVG_NS)
    assert float(village.get("r")) == pytest.approx(3.0)


def test_overlay_draws_dashed_segments_once():
    engine = RenderEngine(embed_theme=False)
    a, b, c = triangle_nodes()
    engine.overlay.arm([a, b, c])

    first = render(engine)
    lines = first.findall("svg:g[@id='overlay']/svg:line", SVG_NS)
    assert len(lines) == 2
    assert lines[0].get("stroke") == "red"
    assert lines[0].get("stroke-dasharray") == "9"
    assert float(lines[0].get("x1")) == pytest.approx(20.0)
    assert float(lines[0].get("x2")) == pytest.approx(160.0)

    assert engine.overlay.state is OverlayState.EMPTY
    second = render(engine)
    assert second.find("svg:g[@id='overlay']", SVG_NS) is None


def test_single_node_overlay_draws_nothing_and_is_consumed():
    engine = RenderEngine(embed_theme=False)
    engine.overlay.arm(triangle_nodes()[:1])

    root = render(engine)

    assert root.find("svg:g[@id='overlay']", SVG_NS) is None
    assert not engine.overlay.is_armed


def test_redraw_replaces_previous_frame_on_same_canvas():
    engine = RenderEngine(embed_theme=False)
    canvas = Canvas(200, 100)
    nodes, edges = by_id(triangle_nodes()), by_id(triangle_edges())

    engine.redraw(canvas, nodes, edges)
    count = len(canvas.elements)
    engine.redraw(canvas, nodes, edges)

    assert len(canvas.elements) == count


def test_redraw_with_dangling_edge_is_fatal():
    engine = RenderEngine(embed_theme=False)

    with pytest.raises(KeyError):
        render(engine, nodes=[node(1, 0.1, 0.1)], edges=[edge(1, 1, 2)])


def test_style_overrides_merge_with_defaults():
    engine = RenderEngine(
        embed_theme=False,
        node_style={"fill": "navy"},
        overlay_style={"stroke": "orange"},
    )

    assert engine.node_style == {"fill": "navy"}
    assert engine.overlay_style["stroke"] == "orange"
    assert engine.overlay_style["stroke_dasharray"] == [9]


def test_path_overlay_state_machine():
    overlay = PathOverlay()
    assert overlay.state is OverlayState.EMPTY
    assert overlay.consume() == ()

    a, b, _ = triangle_nodes()
    overlay.arm([a, b])
    assert overlay.is_armed

    assert overlay.consume() == (a, b)
    assert overlay.state is OverlayState.EMPTY
    assert overlay.consume() == ()


def test_canvas_rejects_non_positive_size():
    with pytest.raises(ValueError, match="Canvas size must be positive"):
        Canvas(0, 100)


def test_pretty_output_is_indented_and_compact_is_shorter(tmp_path):
    canvas = Canvas(200, 100)
    RenderEngine(theme_css="a{b:c;}\nq{r:s;}").redraw(
        canvas, by_id(triangle_nodes()), by_id(triangle_edges())
    )

    pretty = canvas.to_string(pretty=True)
    compact = canvas.to_string(pretty=False)

    assert "\n    a{b:c;}\n" in pretty
    assert len(compact) < len(pretty)

    out = tmp_path / "map.svg"
    canvas.write(out)
    assert out.read_text(encoding="utf-8") == pretty


def test_theme_css_with_markup_characters_stays_well_formed():
    css = "a::before{content:'<&'}"
    canvas = Canvas(200, 100)
    RenderEngine(theme_css=css).redraw(canvas, by_id(triangle_nodes()), by_id(triangle_edges()))

    for text in (canvas.to_string(pretty=True), canvas.to_string(pretty=False)):
        style = parse_svg(text).find("svg:style", SVG_NS)
        assert style.text.strip() == css


def test_edge_without_color_uses_edge_style_stroke():
    nodes = [node(1, 0.1, 0.1), node(2, 0.9, 0.9)]
    plain = Edge(id=1, source=1, target=2)

    default_root = render(RenderEngine(embed_theme=False), nodes=nodes, edges=[plain])
    styled_root = render(
        RenderEngine(embed_theme=False, edge_style={"stroke": "#00ff00"}),
        nodes=nodes,
        edges=[plain],
    )

    default_path = default_root.find("svg:g[@id='edges']/svg:g/svg:path", SVG_NS)
    styled_path = styled_root.find("svg:g[@id='edges']/svg:g/svg:path", SVG_NS)
    assert default_path.get("stroke") == "#222222"
    assert styled_path.get("stroke") == "#00ff00"
