"""Source file discovery with glob patterns."""
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional

# Files analyzed per target type
FILE_PATTERNS = {
    'action': ['**/*.js', '**/*.ts'],
    'view': ['**/*.jsx', '**/*.tsx', '**/*.js', '**/*.ts'],
}

DEFAULT_EXCLUDED_DIRS = ('node_modules', 'dist')

_BRACE_GROUP = re.compile(r'\{([^{}]*)\}')
_GLOB_CHARS = re.compile(r'[*?[]')


def expand_braces(pattern: str) -> List[str]:
    """Expand shell-style ``{a,b}`` alternations, which pathlib globbing lacks.

    >>> expand_braces('pages/**/*.{tsx,ts}')
    ['pages/**/*.tsx', 'pages/**/*.ts']
    """
    for match in _BRACE_GROUP.finditer(pattern):
        options = match.group(1).split(',')
        if len(options) < 2:
            continue
        head, tail = pattern[:match.start()], pattern[match.end():]
        expanded = []
        for option in options:
            expanded.extend(expand_braces(head + option + tail))
        return expanded
    return [pattern]


def relative_pattern(base_dir: Path, pattern: str) -> str:
    """Rewrite an absolute glob pattern relative to base_dir; relative ones pass through.

    The literal leading part of the pattern is resolved, so a pattern spelled
    through a symlinked directory still matches a resolved base_dir.

    Raises:
        ValueError: If the pattern points outside base_dir
    """
    path = Path(pattern)
    if not path.is_absolute():
        return pattern

    parts = path.parts
    first_glob = next((i for i, part in enumerate(parts) if _GLOB_CHARS.search(part)), len(parts))
    prefix = Path(*parts[:first_glob]).resolve()
    try:
        relative = prefix.relative_to(base_dir)
    except ValueError:
        raise ValueError(f"Pattern {pattern!r} is outside the target directory {base_dir}") from None
    return Path(relative, *parts[first_glob:]).as_posix()


def glob_files(base_dir: Path, pattern: str) -> List[Path]:
    """Files under base_dir matching a (brace-aware) glob pattern.

    Absolute patterns must point inside base_dir. Matches of each brace
    alternative are sorted; alternatives keep their order.

    Raises:
        ValueError: If an absolute pattern points outside base_dir
    """
    base_dir = Path(base_dir).resolve()
    files = []
    for expanded in expand_braces(pattern):
        expanded = relative_pattern(base_dir, expanded)
        if expanded == '.':
            continue
        files.extend(sorted(p for p in base_dir.glob(expanded) if p.is_file()))
    return files


def to_relative(path: Path, base_dir: Path) -> str:
    """POSIX-style path of ``path`` relative to ``base_dir``."""
    return Path(os.path.relpath(path, base_dir)).as_posix()


def validate_directory(directory: str | Path) -> Path:
    """Resolve a target directory, failing loudly if it is unusable.

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path is not a directory
    """
    directory = Path(directory).resolve()
    if not directory.exists():
        raise FileNotFoundError(f"Target directory does not exist: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Target path is not a directory: {directory}")
    return directory


def find_files(directory: str | Path, target_type: str,
               excluded_dirs: Optional[Iterable[str]] = None) -> List[Path]:
    """Find the source files to analyze for a target type.

    Args:
        directory: Root directory to search
        target_type: 'action' or 'view'
        excluded_dirs: Directory names to skip (default: node_modules, dist)

    Returns:
        Absolute file paths, deduplicated, pattern order preserved

    Raises:
        ValueError: If target_type is unknown
        FileNotFoundError: If directory does not exist
        NotADirectoryError: If directory is a file
    """
    patterns = FILE_PATTERNS.get(target_type)
    if patterns is None:
        raise ValueError(f"Unsupported target type: {target_type}")

    directory = validate_directory(directory)
    excluded = frozenset(DEFAULT_EXCLUDED_DIRS if excluded_dirs is None else excluded_dirs)

    files = {}
    for pattern in patterns:
        for file_path in glob_files(directory, pattern):
            relative_parts = file_path.relative_to(directory).parts[:-1]
            if any(part in excluded for part in relative_parts):
                continue
            # Type declaration files carry no runtime calls
            if file_path.name.endswith('.d.ts'):
                continue
            files.setdefault(file_path, None)

    return list(files)


def split_patterns(value: str) -> List[str]:
    """Split a comma-separated pattern list, ignoring commas inside braces.

    >>> split_patterns('pages/*.{tsx,ts},components/**/*.tsx')
    ['pages/*.{tsx,ts}', 'components/**/*.tsx']
    """
    patterns, current, depth = [], [], 0
    for char in value:
        if char == '{':
            depth += 1
        elif char == '}' and depth:
            depth -= 1
        elif char == ',' and depth == 0:
            patterns.append(''.join(current))
            current = []
            continue
        current.append(char)
    patterns.append(''.join(current))
    return [pattern.strip() for pattern in patterns if pattern.strip()]
