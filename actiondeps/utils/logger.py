"""Terminal-safe output helpers and logging setup.

Detects terminal encoding and provides ASCII alternatives for the Unicode
glyphs the CLI prints, so reports stay readable on non-UTF-8 terminals.
"""
import locale
import logging
import sys


# Unicode to ASCII icon mapping for terminal compatibility
ICON_MAP = {
    # Status icons
    '✓': '[OK]',
    '✗': '[FAIL]',
    '⚠': '[WARN]',

    # Arrows
    '→': '->',
    '←': '<-',

    # Tree/structure glyphs
    '├': '+',
    '└': '+',
    '│': '|',
    '─': '-',

    # Symbols
    '…': '...',
    '•': '*',
}

LOG_FORMAT = "%(message)s"


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding capability.

    Returns:
        str: Terminal encoding ('utf-8', 'cp1252', 'ascii', etc.)
    """
    # Try stdout encoding first
    if hasattr(sys.stdout, 'encoding') and sys.stdout.encoding:
        return sys.stdout.encoding.lower()

    # Fallback to locale
    encoding = locale.getpreferredencoding(False)
    if encoding:
        return encoding.lower()

    return 'ascii'


def is_utf8_capable() -> bool:
    """Check if the terminal can handle UTF-8 Unicode characters."""
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str) -> str:
    """Replace Unicode icons with ASCII equivalents if terminal doesn't support UTF-8.

    Args:
        text: Text potentially containing Unicode icons

    Returns:
        str: Sanitized text safe for current terminal
    """
    if is_utf8_capable():
        return text

    sanitized = text
    for unicode_char, ascii_replacement in ICON_MAP.items():
        sanitized = sanitized.replace(unicode_char, ascii_replacement)
    return sanitized


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Route the package's log records to stderr through rich.

    Idempotent: calling it again only changes the level.

    Args:
        level: Logging level name or number

    Returns:
        The configured 'actiondeps' logger
    """
    from rich.logging import RichHandler
    from .safe_console import SafeConsole

    logger = logging.getLogger('actiondeps')
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=SafeConsole(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
