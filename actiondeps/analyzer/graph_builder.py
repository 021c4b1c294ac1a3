"""Dependency graph builders using NetworkX.

Two variants share one storage layout: a ``FileNode`` per analyzed file plus a
directed graph whose edge (A, B) means "A depends on B".

- ``ViewDependencyGraph``: edges are resolved imports; adding a file pulls in
  everything it imports, recursively.
- ``ActionDependencyGraph``: edges come from ``executeAction("<id>")`` calls
  matched against action files named ``<id>.js`` / ``<id>.ts``; they are
  materialized by ``build_dependency_graph()`` once every file is added.

Every instance owns its caches; nothing is shared between runs.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import networkx as nx
from tree_sitter import Tree

from .extractor import ActionCallExtractor
from .import_resolver import ImportResolver, is_source_file
from .models import FileNode
from .parser import LanguageParser, read_source

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Shared storage, path normalization and parsing for both graph variants."""

    target_type = 'view'

    def __init__(self, base_dir: str | Path = "."):
        """Initialize an empty graph.

        Args:
            base_dir: Directory relative paths are resolved against
        """
        self.base_dir = Path(base_dir).resolve()
        self.graph = nx.DiGraph()
        self.files: Dict[Path, FileNode] = {}
        self._normalized_paths: Dict[str, Path] = {}
        self._parsers: Dict[str, LanguageParser] = {}
        self.extractor = ActionCallExtractor(self.target_type)

    def normalize_path(self, file_path: str | Path) -> Path:
        """Absolute, resolved form of a path; cached so repeated lookups are cheap."""
        key = str(file_path)
        normalized = self._normalized_paths.get(key)
        if normalized is None:
            normalized = (self.base_dir / file_path).resolve()
            self._normalized_paths[key] = normalized
        return normalized

    def __contains__(self, file_path) -> bool:
        return self.normalize_path(file_path) in self.files

    def __len__(self) -> int:
        return len(self.files)

    def get_node(self, file_path: str | Path) -> Optional[FileNode]:
        return self.files.get(self.normalize_path(file_path))

    def direct_actions(self, file_path: str | Path) -> List[str]:
        node = self.get_node(file_path)
        return node.direct_actions if node else []

    def _parse(self, path: Path) -> Tuple[Tree, bytes]:
        """Read and parse a file with the grammar for its extension.

        Unknown extensions fall back to the TSX grammar.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        language = LanguageParser.language_for(path) or 'tsx'
        parser = self._parsers.get(language)
        if parser is None:
            parser = self._parsers[language] = LanguageParser(language)

        source_code = read_source(path)
        tree = parser.parse_source(source_code)
        if tree.root_node.has_error:
            logger.debug("Syntax errors while parsing %s; continuing with partial tree", path)
        return tree, source_code

    def _register(self, node: FileNode):
        self.files[node.path] = node
        self.graph.add_node(node.path)

    def get_stats(self) -> Dict[str, int]:
        """Summary counts for the graph.

        Returns:
            Dict with total_files, total_dependencies,
            files_with_action_dependencies and total_action_dependencies
        """
        with_actions = [node for node in self.files.values() if node.direct_actions]
        return {
            'total_files': len(self.files),
            'total_dependencies': self.graph.number_of_edges(),
            'files_with_action_dependencies': len(with_actions),
            'total_action_dependencies': sum(len(node.direct_actions) for node in with_actions),
        }


class ViewDependencyGraph(DependencyGraph):
    """Import graph of view (UI) files."""

    target_type = 'view'

    def __init__(self, base_dir: str | Path = "."):
        super().__init__(base_dir)
        self.resolver = ImportResolver()

    def add_file(self, file_path: str | Path):
        """Analyze a file and, recursively, every source file it imports.

        Adding an already analyzed path is a no-op, which also breaks import
        cycles. A file that cannot be read is kept with no actions and no
        edges.

        Args:
            file_path: Path to the view file (absolute or relative to base_dir)
        """
        path = self.normalize_path(file_path)
        if path in self.files:
            return

        node = FileNode(path)
        # Register before descending so cycles terminate
        self._register(node)

        try:
            tree, source_code = self._parse(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error analyzing file %s: %s", path, e)
            return

        node.import_edges = self.resolver.resolve_imports(tree, source_code, path.parent)
        node.direct_actions = self.extractor.extract(tree, source_code)
        for target in node.import_edges:
            self.graph.add_edge(path, target)

        for target in node.import_edges:
            if is_source_file(target):
                self.add_file(target)


class ActionDependencyGraph(DependencyGraph):
    """Call graph of action handler files, keyed by file name."""

    target_type = 'action'

    def __init__(self, base_dir: str | Path = "."):
        super().__init__(base_dir)
        # bare file name (no extension) -> defining file
        self.action_index: Dict[str, Path] = {}

    def add_file(self, file_path: str | Path):
        """Analyze an action file and index it under its file name.

        Not recursive: edges between actions are only known once every file
        is indexed, see build_dependency_graph().

        Args:
            file_path: Path to the action file (absolute or relative to base_dir)
        """
        path = self.normalize_path(file_path)
        if path in self.files:
            return

        node = FileNode(path)
        self._register(node)

        try:
            tree, source_code = self._parse(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error analyzing file %s: %s", path, e)
            return

        node.direct_actions = self.extractor.extract(tree, source_code)
        self._index_action(path)

    def _index_action(self, path: Path):
        action_name = path.stem
        existing = self.action_index.get(action_name)
        if existing is not None:
            # First file wins; later ones with the same name are unreachable by name
            logger.warning(
                "Action name '%s' is defined by both %s and %s; keeping %s",
                action_name, existing, path, existing
            )
            return
        self.action_index[action_name] = path

    def resolve_action(self, action_name: str) -> Optional[Path]:
        return self.action_index.get(action_name)

    def build_dependency_graph(self):
        """Materialize edges from each file to the files of the actions it calls.

        Must run after every file is added. Calls to actions with no matching
        file contribute no edge.
        """
        for path, node in self.files.items():
            self.graph.remove_edges_from(list(self.graph.out_edges(path)))
            for action_name in node.direct_actions:
                target = self.resolve_action(action_name)
                if target is not None:
                    self.graph.add_edge(path, target)
