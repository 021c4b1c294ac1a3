"""Depth-first reachability of action identifiers over a dependency graph."""
from pathlib import Path
import networkx as nx

from .graph_builder import DependencyGraph
from .models import ReachabilityResult


def get_reachable_action_dependencies(graph: DependencyGraph, entry_point: str | Path) -> ReachabilityResult:
    """Classify every action reachable from an entry point.

    ``direct`` holds the entry point's own actions. ``indirect`` maps every
    other file reached through dependency edges, in discovery order, to its
    own actions; files without actions are left out. Each file is expanded at
    most once, so cycles and diamonds are safe, and the entry point never
    appears in its own ``indirect`` map, even through a cycle.

    Args:
        graph: A built ViewDependencyGraph or ActionDependencyGraph
        entry_point: Root file (absolute or relative to the graph's base_dir)

    Returns:
        ReachabilityResult with absolute paths as indirect keys
    """
    root = graph.normalize_path(entry_point)
    result = ReachabilityResult(direct=list(graph.direct_actions(root)))

    if root not in graph.graph:
        return result

    for node in nx.dfs_preorder_nodes(graph.graph, source=root):
        if node == root:
            continue
        actions = graph.direct_actions(node)
        if actions:
            result.indirect[node] = list(actions)

    return result
