"""Tree-sitter parser for JavaScript/TypeScript action and view sources."""
from pathlib import Path
from typing import Optional
from tree_sitter import Language, Parser, Tree
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript


def read_source(file_path: str | Path) -> bytes:
    """Read a source file as UTF-8 and return its bytes for tree-sitter.

    Args:
        file_path: Path to source file

    Returns:
        UTF-8 encoded source bytes

    Raises:
        OSError: If the file is missing or unreadable
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    text = Path(file_path).read_text(encoding='utf-8')
    return text.encode('utf-8')


class LanguageParser:
    """Multi-grammar parser using tree-sitter v0.23+ API."""

    # .js/.jsx go through the TSX grammar: handler files routinely carry
    # type annotations even with a .js extension.
    SUPPORTED_LANGUAGES = {
        '.js': 'tsx',
        '.jsx': 'tsx',
        '.ts': 'typescript',
        '.tsx': 'tsx',
    }

    def __init__(self, language: str):
        """Initialize parser for given language (typescript, tsx, javascript).

        Args:
            language: One of 'typescript', 'tsx', 'javascript'

        Raises:
            ValueError: If language is not supported
        """
        self.language = language
        self.parser = self._create_parser()

    def _create_parser(self) -> Parser:
        if self.language == 'javascript':
            lang = Language(tsjavascript.language())
        elif self.language == 'typescript':
            lang = Language(tstypescript.language_typescript())
        elif self.language == 'tsx':
            lang = Language(tstypescript.language_tsx())
        else:
            raise ValueError(f"Unsupported language: {self.language}")

        return Parser(lang)

    def parse_source(self, source_code: bytes) -> Tree:
        """Parse in-memory source bytes.

        Syntax errors never raise; they show up as ERROR nodes in the tree.
        """
        return self.parser.parse(source_code)

    def parse_file(self, file_path: str | Path) -> Tree:
        """Read and parse a file.

        Args:
            file_path: Path to source file to parse

        Returns:
            Parsed Tree object

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        return self.parse_source(read_source(file_path))

    @classmethod
    def language_for(cls, file_path: str | Path) -> Optional[str]:
        """Return the grammar name for a file extension, or None."""
        return cls.SUPPORTED_LANGUAGES.get(Path(file_path).suffix.lower())

    @classmethod
    def from_file_extension(cls, file_path: str | Path) -> Optional['LanguageParser']:
        """Create parser based on file extension.

        Args:
            file_path: Path to determine language from

        Returns:
            LanguageParser instance, or None if extension not supported
        """
        language = cls.language_for(file_path)
        if language:
            return cls(language)
        return None
