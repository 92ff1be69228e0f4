"""
Rule list columns: header, per-rule cell, visibility and legend.

Every :class:`~lint_docgen.core.ColumnType` has exactly one renderer in
:data:`COLUMNS`. A column is only emitted when it is both selected and
populated; hidden columns never contribute legend lines.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .config import GenerateOptions
from .core import ColumnType, RuleDetails, RuleType, SeverityTier
from .emojis import (
    EMOJI_CONFIG,
    EMOJI_CONFIG_OFF,
    EMOJI_CONFIG_WARN,
    EMOJI_DEPRECATED,
    EMOJI_FIXABLE,
    EMOJI_HAS_SUGGESTIONS,
    EMOJI_OPTIONS,
    EMOJI_REQUIRES_TYPE_CHECKING,
    EMOJI_TYPE,
    EMOJI_TYPE_LAYOUT,
    EMOJI_TYPE_PROBLEM,
    EMOJI_TYPE_SUGGESTION,
    ConfigEmoji,
    emoji_for_config,
)
from .markdown import rule_doc_link
from .plugin import Plugin, configs_for_rule
from .rule_options import has_options

LEGEND_SEPARATOR = "\\\n"

LEGEND_FIXABLE = f"{EMOJI_FIXABLE} Automatically fixable by the `--fix` CLI option."
LEGEND_HAS_SUGGESTIONS = f"{EMOJI_HAS_SUGGESTIONS} Manually fixable by editor suggestions."

RULE_TYPE_EMOJIS: Dict[RuleType, str] = {
    RuleType.PROBLEM: EMOJI_TYPE_PROBLEM,
    RuleType.SUGGESTION: EMOJI_TYPE_SUGGESTION,
    RuleType.LAYOUT: EMOJI_TYPE_LAYOUT,
}

RULE_TYPE_LEGENDS: Dict[RuleType, str] = {
    RuleType.PROBLEM: f"{EMOJI_TYPE_PROBLEM} Identifies problems that could cause errors or unexpected behavior.",
    RuleType.SUGGESTION: f"{EMOJI_TYPE_SUGGESTION} Identifies potential improvements.",
    RuleType.LAYOUT: f"{EMOJI_TYPE_LAYOUT} Focuses on how code looks, not how it works.",
}


@dataclass(frozen=True)
class ListContext:
    """Plugin-wide data shared by every column of one rules list."""

    plugin: Plugin
    details: Sequence[RuleDetails]
    options: GenerateOptions
    config_emojis: Sequence[ConfigEmoji]
    # Directory of the list file, relative to the plugin root.
    list_dir: str = ""

    @property
    def config_names(self) -> List[str]:
        ignored = set(self.options.ignore_config)
        return [c for c in self.plugin.config_names if c not in ignored]

    def configs_for(self, rule: RuleDetails, tier: SeverityTier) -> List[str]:
        return configs_for_rule(self.plugin, rule.name, tier, self.options.ignore_config)


class BaseColumn(ABC):
    @property
    @abstractmethod
    def type(self) -> ColumnType:
        pass

    @abstractmethod
    def header(self, context: ListContext) -> str:
        pass

    @abstractmethod
    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        pass

    def is_populated(self, context: ListContext) -> bool:
        return any(self.cell(rule, context) for rule in context.details)

    def legend(self, context: ListContext) -> List[str]:
        """Legend lines explaining this column. Most columns have none."""
        return []

    @property
    def spacer(self) -> str:
        return ":-"


class NameColumn(BaseColumn):
    type = ColumnType.NAME

    def header(self, context: ListContext) -> str:
        return "Name"

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        options = context.options
        link = rule_doc_link(
            rule.name, context.list_dir, options.path_rule_doc, options.url_rule_doc
        )
        return f"[{rule.name}]({link})"

    def is_populated(self, context: ListContext) -> bool:
        return True

    @property
    def spacer(self) -> str:
        return ":--"


class DescriptionColumn(BaseColumn):
    type = ColumnType.DESCRIPTION

    def header(self, context: ListContext) -> str:
        return "Description"

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        if not rule.description:
            return ""
        return rule.description.replace("|", "\\|").replace("\n", " ").strip()

    @property
    def spacer(self) -> str:
        return ":--"


class _ConfigsColumn(BaseColumn):
    tier: SeverityTier

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        badges = []
        for config in self.configs(rule, context):
            emoji = emoji_for_config(context.config_emojis, config)
            badges.append(emoji if emoji else f"`{config}`")
        return " ".join(badges)

    def configs(self, rule: RuleDetails, context: ListContext) -> List[str]:
        return context.configs_for(rule, self.tier)


class ConfigsErrorColumn(_ConfigsColumn):
    type = ColumnType.CONFIGS_ERROR
    tier = SeverityTier.ERROR

    def header(self, context: ListContext) -> str:
        names = context.config_names
        if len(names) == 1:
            emoji = emoji_for_config(context.config_emojis, names[0])
            if emoji:
                return emoji
        return EMOJI_CONFIG

    def legend(self, context: ListContext) -> List[str]:
        if not context.plugin.configs:
            raise RuntimeError(
                "Should not be attempting to display configs column when there are no configs."
            )

        url = context.options.url_configs
        configs_word = f"[Configurations]({url})" if url else "Configurations"
        config_word = f"[configuration]({url})" if url else "configuration"

        names = context.config_names
        legends = []
        # The generic config emoji is used unless there is a single config with its own emoji.
        if len(names) > 1 or not any(
            emoji_for_config(context.config_emojis, name) for name in names
        ):
            legends.append(f"{EMOJI_CONFIG} {configs_word} enabled in.")
        for name in names:
            emoji = emoji_for_config(context.config_emojis, name)
            if emoji:
                legends.append(f"{emoji} Enabled in the `{name}` {config_word}.")
        return legends


class ConfigsWarnColumn(_ConfigsColumn):
    type = ColumnType.CONFIGS_WARN
    tier = SeverityTier.WARN

    def header(self, context: ListContext) -> str:
        return EMOJI_CONFIG_WARN

    def legend(self, context: ListContext) -> List[str]:
        url = context.options.url_configs
        word = f"[Configurations]({url})" if url else "Configurations"
        return [f"{EMOJI_CONFIG_WARN} {word} set to warn in."]


class ConfigsOffColumn(_ConfigsColumn):
    type = ColumnType.CONFIGS_OFF
    tier = SeverityTier.OFF

    def header(self, context: ListContext) -> str:
        return EMOJI_CONFIG_OFF

    def legend(self, context: ListContext) -> List[str]:
        url = context.options.url_configs
        word = f"[Configurations]({url})" if url else "Configurations"
        return [f"{EMOJI_CONFIG_OFF} {word} disabled in."]


class _FlagColumn(BaseColumn):
    emoji: str
    legend_text: str

    def header(self, context: ListContext) -> str:
        return self.emoji

    def legend(self, context: ListContext) -> List[str]:
        return [self.legend_text]


class DeprecatedColumn(_FlagColumn):
    type = ColumnType.DEPRECATED
    emoji = EMOJI_DEPRECATED
    legend_text = f"{EMOJI_DEPRECATED} Deprecated."

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        return self.emoji if rule.deprecated else ""


class FixableColumn(_FlagColumn):
    type = ColumnType.FIXABLE
    emoji = EMOJI_FIXABLE
    legend_text = LEGEND_FIXABLE

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        return self.emoji if rule.fixable else ""


class HasSuggestionsColumn(_FlagColumn):
    type = ColumnType.HAS_SUGGESTIONS
    emoji = EMOJI_HAS_SUGGESTIONS
    legend_text = LEGEND_HAS_SUGGESTIONS

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        return self.emoji if rule.has_suggestions else ""


class OptionsColumn(_FlagColumn):
    type = ColumnType.OPTIONS
    emoji = EMOJI_OPTIONS
    legend_text = f"{EMOJI_OPTIONS} Has configuration options."

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        return self.emoji if has_options(rule.schema) else ""


class RequiresTypeCheckingColumn(_FlagColumn):
    type = ColumnType.REQUIRES_TYPE_CHECKING
    emoji = EMOJI_REQUIRES_TYPE_CHECKING
    legend_text = f"{EMOJI_REQUIRES_TYPE_CHECKING} Requires type information."

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        return self.emoji if rule.requires_type_checking else ""


class FixableAndHasSuggestionsColumn(BaseColumn):
    type = ColumnType.FIXABLE_AND_HAS_SUGGESTIONS

    def header(self, context: ListContext) -> str:
        return f"{EMOJI_FIXABLE}{EMOJI_HAS_SUGGESTIONS}"

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        return (EMOJI_FIXABLE if rule.fixable else "") + (
            EMOJI_HAS_SUGGESTIONS if rule.has_suggestions else ""
        )

    def legend(self, context: ListContext) -> List[str]:
        return [LEGEND_FIXABLE, LEGEND_HAS_SUGGESTIONS]


class TypeColumn(BaseColumn):
    type = ColumnType.TYPE

    def header(self, context: ListContext) -> str:
        return EMOJI_TYPE

    def cell(self, rule: RuleDetails, context: ListContext) -> str:
        rule_type = rule.rule_type
        return RULE_TYPE_EMOJIS[rule_type] if rule_type else ""

    def legend(self, context: ListContext) -> List[str]:
        if not context.plugin.rules:
            raise RuntimeError(
                "Should not be attempting to display type column when there are no rules."
            )
        present = {rule.rule_type for rule in context.details}
        legends = []
        for rule_type in RuleType:
            if rule_type in present:
                if not legends:
                    legends.append(f"{EMOJI_TYPE} The type of rule.")
                legends.append(RULE_TYPE_LEGENDS[rule_type])
        return legends


COLUMNS: Dict[ColumnType, BaseColumn] = {
    column.type: column
    for column in (
        ConfigsErrorColumn(),
        ConfigsOffColumn(),
        ConfigsWarnColumn(),
        DeprecatedColumn(),
        DescriptionColumn(),
        FixableColumn(),
        FixableAndHasSuggestionsColumn(),
        HasSuggestionsColumn(),
        NameColumn(),
        OptionsColumn(),
        RequiresTypeCheckingColumn(),
        TypeColumn(),
    )
}

_missing = set(ColumnType) - set(COLUMNS)
if _missing:
    raise RuntimeError(f"No column renderer for: {sorted(m.value for m in _missing)}")


def visible_columns(context: ListContext) -> List[BaseColumn]:
    """Selected columns, in configured order, that have something to show."""
    return [
        COLUMNS[column_type]
        for column_type in context.options.rule_list_columns
        if COLUMNS[column_type].is_populated(context)
    ]


def generate_legend(columns: Sequence[BaseColumn], context: ListContext) -> str:
    lines: List[str] = []
    for column in columns:
        lines.extend(column.legend(context))
    return LEGEND_SEPARATOR.join(lines)
