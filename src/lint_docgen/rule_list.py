import posixpath
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .columns import BaseColumn, ListContext, generate_legend, visible_columns
from .config import GenerateOptions
from .core import RuleDetails
from .emojis import ConfigEmoji
from .markdown import BEGIN_RULE_LIST_MARKER, END_RULE_LIST_MARKER, heading_level, prose_lines
from .plugin import Plugin

# (heading, rules); heading is None for the group listed first without a title.
RuleGroup = Tuple[Optional[str], List[RuleDetails]]


def _row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def generate_rules_table(
    rules: Sequence[RuleDetails], columns: Sequence[BaseColumn], context: ListContext
) -> List[str]:
    lines = [
        _row([column.header(context) for column in columns]),
        _row([column.spacer for column in columns]),
    ]
    for rule in sorted(rules, key=lambda r: r.name):
        lines.append(_row([column.cell(rule, context) for column in columns]))
    return lines


def group_rules(
    rules: Sequence[RuleDetails], plugin: Plugin, split_by: Optional[str]
) -> List[RuleGroup]:
    """
    Partitions rules by the value found at ``split_by`` in each raw rule record.

    Rules without a value (or a false one) form an untitled first group; the
    others follow in ascending order of their value. A ``True`` value is titled
    with the last segment of the path.
    """
    if not split_by:
        return [(None, list(rules))]

    untitled: List[RuleDetails] = []
    groups: Dict[str, List[RuleDetails]] = {}
    for rule in rules:
        value: Any = plugin.rule_property(rule.name, split_by)
        if value is None or value is False or value == "":
            untitled.append(rule)
            continue
        heading = split_by.split(".")[-1] if value is True else str(value)
        groups.setdefault(heading, []).append(rule)

    result: List[RuleGroup] = []
    if untitled:
        result.append((None, untitled))
    result.extend((heading, groups[heading]) for heading in sorted(groups))
    return result


def generate_rules_list_markdown(
    details: Sequence[RuleDetails],
    plugin: Plugin,
    options: GenerateOptions,
    config_emojis: Sequence[ConfigEmoji],
    *,
    list_path: str = "README.md",
    heading_depth: int = 2,
) -> str:
    """
    One table per split group (each under its own heading), then the legend.
    """
    context = ListContext(
        plugin=plugin,
        details=details,
        options=options,
        config_emojis=config_emojis,
        list_dir=posixpath.dirname(list_path),
    )
    columns = visible_columns(context)

    parts: List[str] = []
    for heading, rules in group_rules(details, plugin, options.split_by):
        if heading is not None:
            parts.append(f"{'#' * heading_depth} {heading}")
        parts.append("\n".join(generate_rules_table(rules, columns, context)))

    legend = generate_legend(columns, context)
    if legend:
        parts.append(legend)
    return "\n\n".join(parts)


def _split_heading_depth(pre_list: str) -> int:
    """One level deeper than the last heading before the list, defaulting to ``##``."""
    last: Optional[int] = None
    for line in prose_lines(pre_list):
        level = heading_level(line)
        if level is not None:
            last = level
    return min((last or 1) + 1, 6)


def update_rules_list(
    details: Sequence[RuleDetails],
    markdown: str,
    plugin: Plugin,
    options: GenerateOptions,
    config_emojis: Sequence[ConfigEmoji],
    list_path: str = "README.md",
) -> str:
    """Replaces everything between the rules list markers with a freshly rendered list."""
    begin = markdown.find(BEGIN_RULE_LIST_MARKER)
    end = markdown.find(END_RULE_LIST_MARKER)
    if begin == -1 or end == -1 or end < begin:
        raise ValueError(
            f"{list_path} is missing rules list markers: "
            f"{BEGIN_RULE_LIST_MARKER}{END_RULE_LIST_MARKER}"
        )

    pre_list = markdown[:begin]
    post_list = markdown[end + len(END_RULE_LIST_MARKER) :]
    rendered = generate_rules_list_markdown(
        details,
        plugin,
        options,
        config_emojis,
        list_path=list_path,
        heading_depth=_split_heading_depth(pre_list),
    )
    return (
        f"{pre_list}{BEGIN_RULE_LIST_MARKER}\n\n{rendered}\n\n"
        f"{END_RULE_LIST_MARKER}{post_list}"
    )
