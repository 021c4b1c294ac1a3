"""Entry-point discovery for view analysis."""
from pathlib import Path
from typing import Dict, List, Optional

from .file_finder import glob_files, to_relative
from .graph_builder import ViewDependencyGraph
from .import_resolver import is_source_file
from .models import DependencyRecord
from .reachability import get_reachable_action_dependencies

DEFAULT_ENTRY_POINT_PATTERNS = ['pages/**/*.{tsx,jsx,ts,js}']


def find_entry_points(views_dir: str | Path, entry_point_patterns: Optional[List[str]] = None) -> List[Path]:
    """Select entry-point files matching the given patterns.

    Within one directory an ``index.*`` file stands for the whole directory
    and its siblings are dropped; directories without one keep every match.

    Args:
        views_dir: Base directory the patterns are relative to
        entry_point_patterns: Glob patterns (default: pages/**/*.{tsx,jsx,ts,js})

    Returns:
        Absolute entry-point paths, grouped by directory in discovery order
    """
    if entry_point_patterns is None:
        entry_point_patterns = DEFAULT_ENTRY_POINT_PATTERNS
    views_dir = Path(views_dir).resolve()

    # Overlapping patterns may match the same file twice
    matches: Dict[Path, None] = {}
    for pattern in entry_point_patterns:
        for file_path in glob_files(views_dir, pattern):
            matches.setdefault(file_path.resolve(), None)

    dir_to_files: Dict[Path, List[Path]] = {}
    for file_path in matches:
        dir_to_files.setdefault(file_path.parent, []).append(file_path)

    entry_points = []
    for dir_files in dir_to_files.values():
        index_file = next((f for f in dir_files if f.name.startswith('index.')), None)
        if index_file is not None:
            entry_points.append(index_file)
        else:
            entry_points.extend(dir_files)

    return entry_points


def analyze_entry_points(views_dir: str | Path, dependency_graph: ViewDependencyGraph,
                         entry_point_patterns: Optional[List[str]] = None) -> List[DependencyRecord]:
    """Compute direct and indirect action dependencies for each entry point.

    Entry points missing from the graph are added to it first.

    Args:
        views_dir: Base directory; every reported path is relative to it
        dependency_graph: Graph to query
        entry_point_patterns: Glob patterns for entry points

    Returns:
        One DependencyRecord per entry point, including ones with no dependencies
    """
    views_dir = Path(views_dir).resolve()
    records = []

    for entry_point in find_entry_points(views_dir, entry_point_patterns):
        if is_source_file(entry_point) and entry_point not in dependency_graph:
            dependency_graph.add_file(entry_point)

        reachable = get_reachable_action_dependencies(dependency_graph, entry_point)
        records.append(DependencyRecord(
            entrypoint=to_relative(entry_point, views_dir),
            direct=reachable.direct,
            indirect={to_relative(path, views_dir): actions for path, actions in reachable.indirect.items()},
        ))

    return records
