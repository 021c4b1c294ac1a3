"""Action-call extraction from parsed syntax trees."""
from typing import Dict, Iterator, List, Optional
from tree_sitter import Node, Tree

TARGET_TYPES = ('action', 'view')


def traverse(node: Node) -> Iterator[Node]:
    """Iteratively traverse tree using a stack and yield all named nodes in pre-order.

    Args:
        node: Root node to start traversal

    Yields:
        All named nodes in tree
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        # Add children in reverse order to maintain left-to-right traversal
        stack.extend(reversed(current.named_children))


def node_text(node: Node, source_code: bytes) -> str:
    return source_code[node.start_byte:node.end_byte].decode('utf-8', errors='ignore')


_SIMPLE_ESCAPES = {
    'n': '\n', 't': '\t', 'r': '\r', 'b': '\b', 'f': '\f', 'v': '\v',
}


def decode_escape(sequence: str) -> str:
    """Decode one JS escape sequence such as ``\\n``, ``\\x41``, ``\\u00e9`` or ``\\u{1F600}``.

    Unknown escapes stand for the escaped character itself.
    """
    body = sequence[1:]
    if body.startswith('u{'):
        code_point = int(body[2:-1], 16)
        return chr(code_point) if code_point <= 0x10FFFF else sequence
    if body and all(c in '01234567' for c in body):
        # Legacy octal, including \0
        return chr(int(body, 8))
    if body[:1] in ('x', 'u') and len(body) > 1:
        return chr(int(body[1:], 16))
    if body[:1] in ('\r', '\n', '\u2028', '\u2029'):
        # Line continuation
        return ''
    return _SIMPLE_ESCAPES.get(body, body)


def string_literal_value(node: Node, source_code: bytes) -> Optional[str]:
    """Return the decoded value of a quoted string literal node, or None for anything else.

    Template strings are deliberately not treated as literals.
    """
    if node.type != 'string':
        return None
    parts = []
    for child in node.named_children:
        text = node_text(child, source_code)
        parts.append(decode_escape(text) if child.type == 'escape_sequence' else text)
    return ''.join(parts)


def first_argument(call_node: Node) -> Optional[Node]:
    """Return the first real argument of a call_expression (comments skipped)."""
    args_node = call_node.child_by_field_name('arguments')
    if args_node is None:
        return None
    for arg in args_node.named_children:
        if arg.type != 'comment':
            return arg
    return None


class ActionCallExtractor:
    """Extract the action identifiers a file invokes directly."""

    # Trigger functions per target type
    TRIGGERS = {
        'action': frozenset({'executeAction'}),
        'view': frozenset({'executeAction', 'useExecuteAction', 'useExecuteActionLazy'}),
    }

    def __init__(self, target_type: str):
        """Initialize extractor for given target type.

        Args:
            target_type: 'action' or 'view'

        Raises:
            ValueError: If target type is unknown
        """
        if target_type not in self.TRIGGERS:
            raise ValueError(f"Unsupported target type: {target_type}")
        self.target_type = target_type
        self.triggers = self.TRIGGERS[target_type]

    def extract(self, tree: Tree, source_code: bytes) -> List[str]:
        """Collect action identifiers called in a file.

        Only two argument shapes resolve: a string literal, or an identifier
        bound to a string literal by its declaration earlier in the file.
        Anything else (template strings, member access, computed values) is
        skipped without error.

        Args:
            tree: Parsed tree-sitter Tree
            source_code: Original source code bytes

        Returns:
            Deduplicated action identifiers in call order
        """
        # dict as an ordered set
        actions: Dict[str, None] = {}
        literal_bindings: Dict[str, str] = {}

        for node in traverse(tree.root_node):
            if node.type == 'variable_declarator':
                self._record_binding(node, source_code, literal_bindings)
            elif node.type == 'call_expression':
                action = self._resolve_call(node, source_code, literal_bindings)
                if action is not None:
                    actions.setdefault(action, None)

        return list(actions)

    def _record_binding(self, node: Node, source_code: bytes, bindings: Dict[str, str]):
        name_node = node.child_by_field_name('name')
        value_node = node.child_by_field_name('value')
        if name_node is None or value_node is None or name_node.type != 'identifier':
            return
        value = string_literal_value(value_node, source_code)
        if value is not None:
            bindings[node_text(name_node, source_code)] = value

    def _resolve_call(self, node: Node, source_code: bytes,
                      bindings: Dict[str, str]) -> Optional[str]:
        function_node = node.child_by_field_name('function')
        if function_node is None or function_node.type != 'identifier':
            return None
        if node_text(function_node, source_code) not in self.triggers:
            return None

        arg = first_argument(node)
        if arg is None:
            return None
        if arg.type == 'string':
            return string_literal_value(arg, source_code)
        if arg.type == 'identifier':
            # Empty bound strings are ignored, same as an unbound name
            return bindings.get(node_text(arg, source_code)) or None
        return None


def extract_dependencies(tree: Tree, source_code: bytes, target_type: str) -> List[str]:
    """Convenience wrapper around ActionCallExtractor."""
    return ActionCallExtractor(target_type).extract(tree, source_code)
