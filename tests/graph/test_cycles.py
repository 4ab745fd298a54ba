"""Tests for circular dependency detection."""

from __future__ import annotations

from assetgraph.graph import build_graph, find_cycles, has_cycles
from assetgraph.models import AssetDescriptor, Cycle


def _asset(name: str, *depends: str) -> AssetDescriptor:
    return AssetDescriptor(name=name, path=f"{name}.php", depends=list(depends))


def _graph(*assets: AssetDescriptor):
    return build_graph(list(assets))


def test_acyclic_graph_has_no_cycles() -> None:
    graph = _graph(_asset("A"), _asset("B", "A"), _asset("C", "A", "B"))

    assert find_cycles(graph) == []
    assert has_cycles(graph) is False


def test_two_node_cycle_is_closed_on_its_entry_point() -> None:
    graph = _graph(_asset("X", "Y"), _asset("Y", "X"))

    cycles = find_cycles(graph)

    assert cycles == [Cycle(("X", "Y", "X"))]
    assert set(cycles[0].members()) == {"X", "Y"}
    assert str(cycles[0]) == "X → Y → X"


def test_self_dependency_is_a_cycle() -> None:
    cycles = find_cycles(_graph(_asset("A", "A")))

    assert cycles == [Cycle(("A", "A"))]


def test_cycle_path_starts_at_reentered_node() -> None:
    graph = _graph(_asset("Entry", "A"), _asset("A", "B"), _asset("B", "C"), _asset("C", "A"))

    assert find_cycles(graph) == [Cycle(("A", "B", "C", "A"))]


def test_independent_cycles_are_all_reported() -> None:
    graph = _graph(
        _asset("A", "B"),
        _asset("B", "A"),
        _asset("C", "D"),
        _asset("D", "C"),
    )

    assert find_cycles(graph) == [Cycle(("A", "B", "A")), Cycle(("C", "D", "C"))]


def test_cycles_sharing_nodes_are_reported_per_closing_edge() -> None:
    graph = _graph(_asset("A", "B", "C"), _asset("B", "A"), _asset("C", "A"))

    assert find_cycles(graph) == [Cycle(("A", "B", "A")), Cycle(("A", "C", "A"))]


def test_unknown_and_system_dependencies_never_close_a_cycle() -> None:
    graph = _graph(_asset("A", "yii\\web\\JqueryAsset", "Missing"), _asset("B", "Missing", "A"))

    assert find_cycles(graph) == []


def test_every_cycle_starts_and_ends_with_the_same_name() -> None:
    graph = _graph(
        _asset("A", "B"),
        _asset("B", "C", "D"),
        _asset("C", "A"),
        _asset("D", "D"),
    )

    cycles = find_cycles(graph)

    assert cycles
    for cycle in cycles:
        assert len(cycle.names) >= 2
        assert cycle.names[0] == cycle.names[-1]


def test_detection_is_idempotent() -> None:
    graph = _graph(_asset("X", "Y"), _asset("Y", "Z"), _asset("Z", "X"), _asset("W", "X"))

    assert find_cycles(graph) == find_cycles(graph)


def test_long_chain_does_not_hit_recursion_limit() -> None:
    assets = [_asset(f"N{i}", f"N{i + 1}") for i in range(5000)]
    assets.append(_asset("N5000", "N0"))

    cycles = find_cycles(_graph(*assets))

    assert len(cycles) == 1
    assert cycles[0].names[0] == cycles[0].names[-1] == "N0"
    assert len(cycles[0].names) == 5002
