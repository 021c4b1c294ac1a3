"""Resolve the files a JS/TS source imports.

Three import shapes are recognized:

- ``import ... from './x'`` / ``import './x'``
- ``require('./x')``
- ``import('./x')``

Specifiers that start with neither ``.`` nor ``@`` are external packages and
are dropped. ``@``-prefixed specifiers are project aliases (tsconfig paths and
similar); they are recognized but left unresolved because the mapping lives in
project configuration.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional
from tree_sitter import Node, Tree

from .extractor import first_argument, node_text, string_literal_value, traverse

logger = logging.getLogger(__name__)

# Probe order matters: first existing candidate wins
SOURCE_EXTENSIONS = ('.tsx', '.ts', '.jsx', '.js')


def is_source_file(path: str | Path) -> bool:
    return Path(path).suffix in SOURCE_EXTENSIONS


class ImportResolver:
    """Turn import specifiers into absolute file paths."""

    def extract_specifiers(self, tree: Tree, source_code: bytes) -> List[str]:
        """Collect module specifiers of static, require and dynamic imports.

        Args:
            tree: Parsed tree-sitter Tree
            source_code: Original source code bytes

        Returns:
            Internal (relative or alias) specifiers in source order
        """
        specifiers = []
        for node in traverse(tree.root_node):
            specifier = self._specifier_of(node, source_code)
            if specifier is None:
                continue
            # External packages are never resolved
            if not specifier.startswith(('.', '@')):
                continue
            specifiers.append(specifier)
        return specifiers

    def _specifier_of(self, node: Node, source_code: bytes) -> Optional[str]:
        if node.type == 'import_statement':
            source_node = node.child_by_field_name('source')
            if source_node is None:
                return None
            return string_literal_value(source_node, source_code)

        if node.type == 'call_expression':
            function_node = node.child_by_field_name('function')
            if function_node is None:
                return None
            is_require = (function_node.type == 'identifier'
                          and node_text(function_node, source_code) == 'require')
            is_dynamic_import = function_node.type == 'import'
            if not (is_require or is_dynamic_import):
                return None
            arg = first_argument(node)
            if arg is None:
                return None
            return string_literal_value(arg, source_code)

        return None

    def resolve(self, specifier: str, base_dir: Path) -> Optional[Path]:
        """Resolve one specifier against the importing file's directory.

        Resolution is best effort: a relative specifier that matches no file
        on disk comes back as the joined path, unchanged.

        Args:
            specifier: Module specifier text (e.g. './utils', '../components/Form')
            base_dir: Directory of the importing file

        Returns:
            Absolute path, or None for alias/external specifiers
        """
        if specifier.startswith('.'):
            candidate = (Path(base_dir) / specifier).resolve()
            return self._probe_js_path(candidate)

        if specifier.startswith('@'):
            logger.debug("Leaving alias import unresolved: %s", specifier)
            return None

        return None

    def _probe_js_path(self, path: Path) -> Path:
        """Probe for file existence using JS resolution rules:
        1. Path with a source extension as-is
        2. Extensions appended (.tsx, .ts, .jsx, .js)
        3. Directory index files

        Probed files are returned resolved, matching the graph's node keys.
        """
        if is_source_file(path):
            return path

        for ext in SOURCE_EXTENSIONS:
            # Append rather than with_suffix: './date.utils' must become 'date.utils.ts'
            as_file = Path(f"{path}{ext}")
            if as_file.is_file():
                return as_file.resolve()

        for ext in SOURCE_EXTENSIONS:
            as_index = path / f"index{ext}"
            if as_index.is_file():
                return as_index.resolve()

        return path

    def resolve_imports(self, tree: Tree, source_code: bytes, base_dir: Path) -> List[Path]:
        """Extract and resolve every import of a file.

        Returns:
            Deduplicated absolute paths in source order
        """
        resolved: Dict[Path, None] = {}
        for specifier in self.extract_specifiers(tree, source_code):
            target = self.resolve(specifier, base_dir)
            if target is not None:
                resolved.setdefault(target, None)
        return list(resolved)
