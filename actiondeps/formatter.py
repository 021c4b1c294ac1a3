"""Rendering of analysis records as JSON, plain text or a rich table."""
import json
from typing import Dict, List
from rich.markup import escape
from rich.table import Table

from .analyzer.models import DependencyRecord
from .utils.logger import sanitize_for_terminal


def to_json(records: List[DependencyRecord], shape: str = 'graph') -> str:
    """Serialize records as an indented JSON array."""
    return json.dumps([record.to_dict(shape) for record in records], indent=2, ensure_ascii=False)


def _actions_by_source(record: DependencyRecord) -> Dict[str, List[str]]:
    """Invert indirect dependencies to action -> files it is reached through."""
    by_action: Dict[str, List[str]] = {}
    for file_path, actions in record.indirect.items():
        for action in actions:
            by_action.setdefault(action, []).append(file_path)
    return by_action


def to_text(records: List[DependencyRecord], shape: str = 'graph') -> str:
    """Plain-text report, one section per entry point.

    The flat shape has no indirect dependencies, so that section is left out.
    """
    lines = []
    for record in records:
        lines.append(f"## Entry point: {record.entrypoint}")
        lines.append("")
        lines.append("### Direct actions:")
        if record.direct:
            lines.extend(f"- {action}" for action in record.direct)
        else:
            lines.append("- none")
        lines.append("")
        if shape == 'flat':
            continue
        lines.append("### Indirect actions:")
        by_action = _actions_by_source(record)
        if by_action:
            lines.extend(f"- {action} (via: {', '.join(files)})" for action, files in by_action.items())
        else:
            lines.append("- none")
        lines.append("")
    return "\n".join(lines)


def render_table(records: List[DependencyRecord], title: str = "Action Dependencies") -> Table:
    """Build a rich Table with one row per entry point."""
    table = Table(title=title)
    table.add_column("Entry Point", style="cyan", no_wrap=False)
    table.add_column("Direct", style="green")
    table.add_column("Indirect", style="magenta")

    for record in records:
        direct = "\n".join(record.direct) or "-"
        indirect = sanitize_for_terminal("\n".join(
            f"{action} → {', '.join(files)}"
            for action, files in _actions_by_source(record).items()
        )) or "-"
        table.add_row(escape(record.entrypoint), escape(direct), escape(indirect))

    return table
