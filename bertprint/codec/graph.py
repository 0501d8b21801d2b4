"""Graph views of a decoded term tree (networkx / Graphviz)."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

try:
    import networkx as nx
except ModuleNotFoundError:  # pragma: no cover
    nx = None

try:
    import pydot
except ModuleNotFoundError:  # pragma: no cover
    pydot = None

from ..constants import KIND_COLORS
from .core import Term
from .printer import PrettyPrinter
from .symtable import SymbolTable

_LABEL_LIMIT = 32


def _node_label(term: Term, symtable: SymbolTable) -> str:
    if not term.basic:
        size = len(term.keys) if term.kind == "map" else len(term.children())
        return f"{term.kind}/{size}"
    text = PrettyPrinter(term, symtable).render()
    if len(text) > _LABEL_LIMIT:
        text = text[: _LABEL_LIMIT - 3] + "..."
    return text


def _dot_quote(text: str) -> str:
    return "\"" + text.replace("\\", "\\\\").replace("\"", "\\\"") + "\""


def term_graph(term: Term, symtable: SymbolTable):
    """Build a directed tree with one node per term.

    Nodes are numbered in pre-order and carry ``kind``, ``label`` and
    ``depth`` attributes; edges carry the child ``index``.
    """

    if nx is None:
        raise RuntimeError("Term graphs require networkx to be installed")

    graph = nx.DiGraph()
    stack = [(term, None, 0, 0)]
    next_id = 0
    while stack:
        current, parent, index, depth = stack.pop()
        node_id = next_id
        next_id += 1
        graph.add_node(
            node_id,
            kind=current.kind,
            label=_node_label(current, symtable),
            depth=depth,
        )
        if parent is not None:
            graph.add_edge(parent, node_id, index=index)
        children = current.children()
        for i in range(len(children) - 1, -1, -1):
            stack.append((children[i], node_id, i, depth + 1))
    return graph


def term_stats(term: Term, symtable: SymbolTable) -> dict:
    """Summarize a term tree: node count, depth and per-kind counts."""

    graph = term_graph(term, symtable)
    kinds = Counter(data["kind"] for _, data in graph.nodes(data=True))
    return {
        "nodes": graph.number_of_nodes(),
        "depth": max(data["depth"] for _, data in graph.nodes(data=True)),
        "kinds": dict(sorted(kinds.items())),
    }


def export_graphviz(term: Term, symtable: SymbolTable, output_path):
    """Write the term tree with Graphviz; ``.dot`` files are written raw."""

    if pydot is None:
        raise RuntimeError("Graphviz export requires the optional pydot dependency")

    graph = term_graph(term, symtable)
    dot = pydot.Dot("bert_term", graph_type="digraph", rankdir="TB", fontname="Helvetica")
    for node_id, data in graph.nodes(data=True):
        dot.add_node(
            pydot.Node(
                f"t{node_id}",
                label=_dot_quote(data["label"]),
                shape="box" if data["kind"] in ("tuple", "list", "map") else "ellipse",
                style="filled",
                fillcolor=KIND_COLORS.get(data["kind"], "#B0BEC5"),
                fontname="Helvetica",
            )
        )
    for src, dst, data in graph.edges(data=True):
        dot.add_edge(pydot.Edge(f"t{src}", f"t{dst}", label=str(data["index"])))

    path = Path(output_path)
    suffix = path.suffix.lstrip(".").lower() or "dot"
    try:
        if suffix in ("dot", "gv"):
            dot.write(str(path), format="raw")
        else:
            dot.write(str(path), format=suffix)
    except OSError as exc:
        raise RuntimeError(f"Graphviz export to {path} failed: {exc}") from exc
    print(f"  ✓ Graphviz term tree exported → {path}")
    return dot


__all__ = ["export_graphviz", "term_graph", "term_stats"]
