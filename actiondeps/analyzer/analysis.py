"""End-to-end action dependency analysis for one target directory."""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .entry_points import analyze_entry_points
from .extractor import TARGET_TYPES
from .file_finder import find_files, to_relative, validate_directory
from .graph_builder import ActionDependencyGraph, DependencyGraph, ViewDependencyGraph
from .models import OUTPUT_SHAPES, DependencyRecord
from .reachability import get_reachable_action_dependencies

logger = logging.getLogger(__name__)


def run_analysis(target_type: str, target_dir: str | Path,
                 entry_point_patterns: Optional[List[str]] = None,
                 output_shape: str = 'graph',
                 excluded_dirs: Optional[Iterable[str]] = None) -> Tuple[List[DependencyRecord], DependencyGraph]:
    """Analyze a directory and return the records together with the built graph.

    See analyze_action_dependencies for the arguments and raised errors.
    """
    if target_type not in TARGET_TYPES:
        raise ValueError(f"Unsupported target type: {target_type!r} (expected one of {', '.join(TARGET_TYPES)})")
    if output_shape not in OUTPUT_SHAPES:
        raise ValueError(f"Unsupported output shape: {output_shape!r}")

    target_dir = validate_directory(target_dir)
    files = find_files(target_dir, target_type, excluded_dirs)
    logger.info("Found %d %s files under %s", len(files), target_type, target_dir)

    if target_type == 'action':
        graph = build_action_graph(target_dir, files)
        records = _action_records(graph, target_dir, files, output_shape)
    else:
        graph = build_view_graph(target_dir, files)
        records = analyze_entry_points(target_dir, graph, entry_point_patterns)

    logger.debug("%s graph stats: %s", target_type, graph.get_stats())
    return records, graph


def analyze_action_dependencies(target_type: str, target_dir: str | Path,
                                entry_point_patterns: Optional[List[str]] = None,
                                output_shape: str = 'graph',
                                excluded_dirs: Optional[Iterable[str]] = None) -> List[DependencyRecord]:
    """Analyze which actions each action file or view entry point depends on.

    Args:
        target_type: 'action' for action handlers, 'view' for UI code
        target_dir: Directory to analyze; reported paths are relative to it
        entry_point_patterns: View entry-point globs (view mode only)
        output_shape: 'graph' for {direct, indirect}; 'flat' lists each action
            file's own calls (action mode only)
        excluded_dirs: Directory names skipped during file discovery

    Returns:
        List of DependencyRecord

    Raises:
        ValueError: If target_type or output_shape is invalid
        FileNotFoundError: If target_dir does not exist
        NotADirectoryError: If target_dir is not a directory
    """
    records, _ = run_analysis(target_type, target_dir, entry_point_patterns, output_shape, excluded_dirs)
    return records


def build_action_graph(target_dir: Path, files: List[Path]) -> ActionDependencyGraph:
    graph = ActionDependencyGraph(target_dir)
    for file_path in files:
        graph.add_file(file_path)
    graph.build_dependency_graph()
    return graph


def build_view_graph(target_dir: Path, files: List[Path]) -> ViewDependencyGraph:
    graph = ViewDependencyGraph(target_dir)
    for file_path in files:
        graph.add_file(file_path)
    return graph


def _action_records(graph: ActionDependencyGraph, target_dir: Path, files: List[Path],
                    output_shape: str) -> List[DependencyRecord]:
    records = []

    for file_path in files:
        entrypoint = to_relative(file_path, target_dir)

        if output_shape == 'flat':
            direct = graph.direct_actions(file_path)
            if direct:
                records.append(DependencyRecord(entrypoint=entrypoint, direct=list(direct)))
            continue

        reachable = get_reachable_action_dependencies(graph, file_path)
        # Only actions that depend on something are reported
        if reachable.is_empty:
            continue
        records.append(DependencyRecord(
            entrypoint=entrypoint,
            direct=reachable.direct,
            indirect={to_relative(path, target_dir): actions for path, actions in reachable.indirect.items()},
        ))

    return records
