"""Tests for the dependency graph core."""

import pytest

from monobuild.graph import Graph
from monobuild.models import Edge, Kind

W = Kind.WEAK
S = Kind.STRONG


def _example():
    return Graph({
        "a": [Edge("b", W), Edge("c", W)],
        "b": [Edge("c", W)],
        "c": [],
        "d": [Edge("a", S)],
        "e": [Edge("a", S), Edge("b", S)],
    })


def _edge_set(graph):
    return {(v, e.target, e.kind) for v in graph.vertices() for e in graph.edges(v)}


# ── Construction ──────────────────────────────────────────────

class TestNew:
    def test_empty(self):
        graph = Graph({})
        assert graph.vertices() == []
        assert len(graph) == 0

    def test_none_is_empty(self):
        assert Graph() == Graph({})

    def test_normalises_edge_targets(self):
        graph = Graph({"a": [Edge("b")]})
        assert graph.vertices() == ["a", "b"]
        assert graph.edges("b") == []

    def test_target_is_the_dedup_key(self):
        graph = Graph({"a": [Edge("b", S), Edge("b", W)]})
        assert graph.edges("a") == [Edge("b", S)]

    def test_from_adjacency(self):
        graph = Graph.from_adjacency({"a": ["c", "b"]})
        assert graph.as_strings() == {"a": ["b", "c"], "b": [], "c": []}
        assert all(e.kind is W for e in graph.edges("a"))

    def test_vertices_sorted(self):
        graph = Graph.from_adjacency({"z": ["m"], "a": []})
        assert graph.vertices() == ["a", "m", "z"]

    def test_membership(self):
        graph = _example()
        assert "a" in graph
        assert "x" not in graph


# ── Children ──────────────────────────────────────────────────

@pytest.mark.parametrize("adjacency, vertices, expected", [
    ({}, {"foo"}, set()),
    ({"foo": []}, {"foo"}, set()),
    ({"foo": ["bar"]}, {"foo"}, {"bar"}),
    ({"foo": ["bar", "baz"]}, {"foo"}, {"bar", "baz"}),
    ({"a": ["b", "c"], "b": ["c", "d"]}, {"a", "b"}, {"b", "c", "d"}),
])
def test_children(adjacency, vertices, expected):
    assert Graph.from_adjacency(adjacency).children(vertices) == expected


def test_children_of_unknown_vertex():
    assert _example().children({"nope"}) == set()


# ── Descendants ───────────────────────────────────────────────

@pytest.mark.parametrize("adjacency, vertices, expected", [
    ({}, {"foo"}, set()),
    ({"foo": []}, {"foo"}, set()),
    ({"foo": ["bar"]}, {"foo"}, {"bar"}),
    ({"a": ["b", "c"], "b": ["c", "d"]}, {"a"}, {"b", "c", "d"}),
    (
        {"a": ["d", "e"], "b": ["f"], "c": ["h", "i"], "d": ["g"], "g": ["h"], "h": ["e"]},
        {"a", "b"},
        {"d", "e", "f", "g", "h"},
    ),
])
def test_descendants(adjacency, vertices, expected):
    assert Graph.from_adjacency(adjacency).descendants(vertices) == expected


def test_descendants_through_cycle_include_start():
    graph = Graph.from_adjacency({
        "a": ["b", "c"],
        "b": ["c", "d", "e"],
        "c": ["a", "d"],
        "d": ["b", "f"],
        "g": ["a", "b"],
    })
    assert graph.descendants({"a"}) == {"a", "b", "c", "d", "e", "f"}


def test_descendants_terminates_on_self_loop():
    graph = Graph.from_adjacency({"a": ["a"]})
    assert graph.descendants({"a"}) == {"a"}


def test_descendants_example():
    assert _example().descendants({"a"}) == {"b", "c"}


def test_descendants_only_reachable():
    graph = _example()
    for start in graph.vertices():
        found = graph.descendants({start})
        # every descendant is a child of the start or of another descendant
        assert found <= graph.children({start} | found)


# ── Roots ─────────────────────────────────────────────────────

def test_roots():
    assert _example().roots() == {"d", "e"}


def test_roots_with_cycle():
    graph = Graph.from_adjacency({"a": ["b"], "b": ["a"], "c": []})
    assert graph.roots() == {"c"}


# ── Reverse ───────────────────────────────────────────────────

@pytest.mark.parametrize("adjacency, expected", [
    ({}, {}),
    ({"a": ["b"]}, {"a": [], "b": ["a"]}),
    ({"a": ["b", "c", "d"]}, {"a": [], "b": ["a"], "c": ["a"], "d": ["a"]}),
    (
        {"a": ["b", "c"], "b": ["d"], "c": ["d"]},
        {"a": [], "b": ["a"], "c": ["a"], "d": ["b", "c"]},
    ),
])
def test_reverse(adjacency, expected):
    assert Graph.from_adjacency(adjacency).reverse().as_strings() == expected


def test_reverse_keeps_kinds():
    reversed_graph = _example().reverse()
    assert reversed_graph.edges("a") == [Edge("d", S), Edge("e", S)]
    assert reversed_graph.edges("c") == [Edge("a", W), Edge("b", W)]


def test_double_reverse_is_identity():
    graph = _example()
    assert graph.reverse().reverse() == graph


def test_reverse_does_not_mutate():
    graph = _example()
    before = graph.as_strings()
    graph.reverse()
    assert graph.as_strings() == before


# ── Subgraph ──────────────────────────────────────────────────

@pytest.mark.parametrize("adjacency, nodes, expected", [
    ({}, [], {}),
    ({"a": ["b", "c"], "b": ["c"], "c": []}, [], {}),
    ({"a": ["b", "c"], "b": ["c"], "c": []}, ["b", "c"], {"b": ["c"], "c": []}),
    ({"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": ["a"]}, ["a", "c"], {"a": ["c"], "c": []}),
])
def test_subgraph(adjacency, nodes, expected):
    assert Graph.from_adjacency(adjacency).subgraph(nodes).as_strings() == expected


def test_subgraph_edges_stay_inside():
    nodes = {"a", "b", "d"}
    sub = _example().subgraph(nodes)
    assert set(sub.vertices()) <= nodes
    for vertex, target, _ in _edge_set(sub):
        assert vertex in nodes and target in nodes


# ── FilterEdges ───────────────────────────────────────────────

def test_filter_strong_edges():
    graph = _example()
    strong = graph.filter_edges([S])
    assert strong.vertices() == graph.vertices()
    assert _edge_set(strong) == {("d", "a", S), ("e", "a", S), ("e", "b", S)}
    assert strong.edges("a") == []
    assert strong.edges("b") == []
    assert strong.edges("c") == []


@pytest.mark.parametrize("kinds", [[], [W], [S], [W, S]])
def test_filter_edges_keeps_vertices(kinds):
    graph = _example()
    assert graph.filter_edges(kinds).vertices() == graph.vertices()


def test_filter_all_kinds_is_identity():
    graph = _example()
    assert graph.filter_edges([W, S]) == graph
