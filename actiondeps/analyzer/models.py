"""Data carried between the analysis stages."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

OUTPUT_SHAPES = ('graph', 'flat')


@dataclass
class FileNode:
    """One analyzed source file."""
    path: Path
    direct_actions: List[str] = field(default_factory=list)  # call order, no duplicates
    import_edges: List[Path] = field(default_factory=list)  # view mode only


@dataclass
class ReachabilityResult:
    """Actions reachable from one root file (absolute paths)."""
    direct: List[str] = field(default_factory=list)
    indirect: Dict[Path, List[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.direct and not self.indirect


@dataclass
class DependencyRecord:
    """Analysis result for one entry point, paths relative to the target directory."""
    entrypoint: str
    direct: List[str] = field(default_factory=list)
    indirect: Dict[str, List[str]] = field(default_factory=dict)

    def all_actions(self) -> List[str]:
        """Direct actions followed by every indirect action, first occurrence kept."""
        seen: Dict[str, None] = dict.fromkeys(self.direct)
        for actions in self.indirect.values():
            for action in actions:
                seen.setdefault(action, None)
        return list(seen)

    def to_dict(self, shape: str = 'graph') -> Dict[str, Union[str, list, dict]]:
        """Serializable form.

        Args:
            shape: 'graph' for {direct, indirect}, 'flat' for the direct list only
        """
        if shape == 'flat':
            return {'entrypoint': self.entrypoint, 'dependencies': list(self.direct)}
        return {
            'entrypoint': self.entrypoint,
            'dependencies': {
                'direct': list(self.direct),
                'indirect': {path: list(actions) for path, actions in self.indirect.items()},
            },
        }


@dataclass
class FilterResult:
    """Records left after filtering plus warnings for the user."""
    filtered: List[DependencyRecord]
    warnings: List[str] = field(default_factory=list)
