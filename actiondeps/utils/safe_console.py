"""Rich Console that keeps report glyphs printable on any terminal."""
from typing import Any
from rich.console import Console
from .logger import sanitize_for_terminal, is_utf8_capable


class SafeConsole(Console):
    """Console whose printed strings fall back to ASCII glyphs off UTF-8.

    The encoding check happens once, when the console is created. Renderables
    other than plain strings (tables, text objects) are passed through; build
    their cells with sanitize_for_terminal instead.
    """

    def __init__(self, *args, **kwargs):
        self.ascii_only = not is_utf8_capable()
        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        if self.ascii_only:
            objects = tuple(sanitize_for_terminal(obj) if isinstance(obj, str) else obj for obj in objects)
        super().print(*objects, **kwargs)
