"""Shared fixtures for the action-deps test suite."""
from pathlib import Path
from typing import Callable, Dict

import pytest

from actiondeps.analyzer.parser import LanguageParser

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def parse() -> Callable:
    """Parse a source snippet with the grammar used for the given file name."""
    parsers: Dict[str, LanguageParser] = {}

    def _parse(code: str, file_name: str = 'snippet.tsx'):
        language = LanguageParser.language_for(file_name)
        if language not in parsers:
            parsers[language] = LanguageParser(language)
        source = code.encode('utf-8')
        return parsers[language].parse_source(source), source

    return _parse


@pytest.fixture
def make_tree(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Write {relative path: content} files under tmp_path and return the root."""
    def _make_tree(files: Dict[str, str]) -> Path:
        for relative, content in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding='utf-8')
        return tmp_path.resolve()

    return _make_tree
