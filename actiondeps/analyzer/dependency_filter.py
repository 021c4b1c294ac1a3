"""Narrow analysis results to the action identifiers a user asks about."""
import re
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Optional, Set

from .models import DependencyRecord, FilterResult

NO_MATCH_WARNING = "No dependencies found for the specified action identifier(s)"

_ACTION_EXTENSION = re.compile(r'\.(js|ts)$')


def not_found_warning(identifier: str) -> str:
    return f"Warning: Action identifier '{identifier}' not found in dependency graph"


def action_name_of(entrypoint: str) -> str:
    """Action identifier an action file defines: its file name without .js/.ts."""
    return _ACTION_EXTENSION.sub('', PurePosixPath(entrypoint).name)


def _narrow(record: DependencyRecord, wanted: Optional[Set[str]]) -> DependencyRecord:
    """Copy of record keeping only wanted actions; None keeps every action."""
    def keep(action):
        return wanted is None or action in wanted

    direct = [action for action in record.direct if keep(action)]
    indirect: Dict[str, List[str]] = {}
    for path, actions in record.indirect.items():
        matching = [action for action in actions if keep(action)]
        if matching:
            indirect[path] = matching
    return DependencyRecord(entrypoint=record.entrypoint, direct=direct, indirect=indirect)


def _filter(records: List[DependencyRecord], action_identifiers: Iterable[str],
            match_entrypoint_name: bool) -> FilterResult:
    # Ordered, de-duplicated wanted set
    wanted_order = list(dict.fromkeys(action_identifiers))
    wanted = set(wanted_order)

    observed: Set[str] = set()
    for record in records:
        observed.update(record.all_actions())
        if match_entrypoint_name:
            name = action_name_of(record.entrypoint)
            if name in wanted:
                observed.add(name)

    warnings = [not_found_warning(identifier) for identifier in wanted_order if identifier not in observed]

    filtered = []
    for record in records:
        if match_entrypoint_name and action_name_of(record.entrypoint) in wanted:
            # The requested action itself: keep everything it depends on
            filtered.append(_narrow(record, None))
            continue
        narrowed = _narrow(record, wanted)
        if narrowed.direct or narrowed.indirect:
            filtered.append(narrowed)

    if not filtered and wanted:
        warnings.append(NO_MATCH_WARNING)

    return FilterResult(filtered=filtered, warnings=warnings)


def filter_view_dependencies(dependencies: List[DependencyRecord],
                             action_identifiers: Iterable[str]) -> FilterResult:
    """Keep views that depend, directly or indirectly, on any requested action.

    Retained records are narrowed to the requested identifiers; indirect
    buckets left empty are dropped. A warning is emitted for every requested
    identifier that appears nowhere in ``dependencies``, plus a summary
    warning when nothing matched at all.

    Args:
        dependencies: Unfiltered view results
        action_identifiers: Identifiers to keep (OR semantics)

    Returns:
        FilterResult with narrowed records and warnings
    """
    return _filter(dependencies, action_identifiers, match_entrypoint_name=False)


def filter_action_dependencies(dependencies: List[DependencyRecord],
                               action_identifiers: Iterable[str]) -> FilterResult:
    """Keep actions that depend on any requested action, or that are one.

    Same rules as filter_view_dependencies, except that an action file whose
    name matches a requested identifier is kept whole, with every action it
    depends on, even if it calls none of the requested ones.
    Works for both the graph and the flat output shape.
    """
    return _filter(dependencies, action_identifiers, match_entrypoint_name=True)


def filter_dependencies(target_type: str, dependencies: List[DependencyRecord],
                        action_identifiers: Optional[Iterable[str]]) -> FilterResult:
    """Dispatch to the filter for a target type; no identifiers means no filtering."""
    identifiers = list(action_identifiers or [])
    if not identifiers:
        return FilterResult(filtered=list(dependencies))
    if target_type == 'action':
        return filter_action_dependencies(dependencies, identifiers)
    if target_type == 'view':
        return filter_view_dependencies(dependencies, identifiers)
    raise ValueError(f"Unsupported target type: {target_type}")
