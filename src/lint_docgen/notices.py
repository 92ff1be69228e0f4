from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .config import GenerateOptions
from .core import NoticeType, RuleDetails, RuleType, SeverityTier, TitleFormat
from .emojis import (
    EMOJI_CONFIG_ERROR,
    EMOJI_CONFIG_OFF,
    EMOJI_CONFIG_WARN,
    EMOJI_DEPRECATED,
    EMOJI_FIXABLE,
    EMOJI_HAS_SUGGESTIONS,
    EMOJI_OPTIONS,
    EMOJI_REQUIRES_TYPE_CHECKING,
    EMOJI_TYPE_LAYOUT,
    EMOJI_TYPE_PROBLEM,
    EMOJI_TYPE_SUGGESTION,
    ConfigEmoji,
    emoji_for_config,
)
from .markdown import END_RULE_HEADER_MARKER, rule_doc_link
from .plugin import Plugin, configs_for_rule
from .rule_options import has_options

RULE_TYPE_NOTICES: Dict[RuleType, str] = {
    RuleType.PROBLEM: f"{EMOJI_TYPE_PROBLEM} This rule identifies problems that could cause errors or unexpected behavior.",
    RuleType.SUGGESTION: f"{EMOJI_TYPE_SUGGESTION} This rule identifies potential improvements.",
    RuleType.LAYOUT: f"{EMOJI_TYPE_LAYOUT} This rule focuses on code formatting.",
}

_TIER_EMOJIS: Dict[SeverityTier, str] = {
    SeverityTier.ERROR: EMOJI_CONFIG_ERROR,
    SeverityTier.WARN: EMOJI_CONFIG_WARN,
    SeverityTier.OFF: EMOJI_CONFIG_OFF,
}

_TIER_VERBS: Dict[SeverityTier, str] = {
    SeverityTier.ERROR: "is enabled",
    SeverityTier.WARN: "_warns_",
    SeverityTier.OFF: "is _disabled_",
}


@dataclass(frozen=True)
class NoticeContext:
    """Everything a notice needs to know about one rule."""

    details: RuleDetails
    options: GenerateOptions
    config_emojis: Sequence[ConfigEmoji]
    configs_by_tier: Dict[SeverityTier, List[str]]

    @property
    def consolidated_fix_notice(self) -> bool:
        return (
            self.options.is_notice_enabled(NoticeType.FIXABLE_AND_HAS_SUGGESTIONS)
            and self.details.fixable
            and self.details.has_suggestions
        )


class BaseNotice(ABC):
    @property
    @abstractmethod
    def type(self) -> NoticeType:
        pass

    @abstractmethod
    def applies(self, context: NoticeContext) -> bool:
        pass

    @abstractmethod
    def render(self, context: NoticeContext) -> str:
        pass


class ConfigsNotice(BaseNotice):
    type = NoticeType.CONFIGS

    def applies(self, context: NoticeContext) -> bool:
        return any(context.configs_by_tier.values())

    def _sentence(
        self, context: NoticeContext, tier: SeverityTier, configs: List[str]
    ) -> str:
        url = context.options.url_configs
        names = []
        for config in configs:
            emoji = emoji_for_config(context.config_emojis, config)
            names.append(f"{emoji} `{config}`" if emoji else f"`{config}`")
        verb = _TIER_VERBS[tier]
        if len(configs) == 1:
            word = f"[config]({url})" if url else "config"
            return f"This rule {verb} in the {names[0]} {word}."
        word = f"[configs]({url})" if url else "configs"
        return f"This rule {verb} in the following {word}: {', '.join(names)}."

    def render(self, context: NoticeContext) -> str:
        emojis = []
        sentences = []
        for tier in SeverityTier:
            configs = context.configs_by_tier.get(tier) or []
            if configs:
                emojis.append(_TIER_EMOJIS[tier])
                sentences.append(self._sentence(context, tier, configs))
        return f"{''.join(emojis)} {' '.join(sentences)}"


class DeprecatedNotice(BaseNotice):
    type = NoticeType.DEPRECATED

    def applies(self, context: NoticeContext) -> bool:
        return context.details.deprecated

    def render(self, context: NoticeContext) -> str:
        replaced_by = context.details.replaced_by
        if not replaced_by:
            return f"{EMOJI_DEPRECATED} This rule is deprecated."

        options = context.options
        from_dir = options.rule_doc_path(context.details.name).rpartition("/")[0]
        links = [
            f"[`{name}`]({rule_doc_link(name, from_dir, options.path_rule_doc, options.url_rule_doc)})"
            for name in replaced_by
        ]
        if len(links) == 1:
            replacement = links[0]
        else:
            replacement = f"{', '.join(links[:-1])} and {links[-1]}"
        return f"{EMOJI_DEPRECATED} This rule is deprecated. It was replaced by {replacement}."


class FixableNotice(BaseNotice):
    type = NoticeType.FIXABLE

    def applies(self, context: NoticeContext) -> bool:
        return context.details.fixable and not context.consolidated_fix_notice

    def render(self, context: NoticeContext) -> str:
        return f"{EMOJI_FIXABLE} This rule is automatically fixable by the `--fix` CLI option."


class FixableAndHasSuggestionsNotice(BaseNotice):
    type = NoticeType.FIXABLE_AND_HAS_SUGGESTIONS

    def applies(self, context: NoticeContext) -> bool:
        return context.details.fixable and context.details.has_suggestions

    def render(self, context: NoticeContext) -> str:
        return (
            f"{EMOJI_FIXABLE}{EMOJI_HAS_SUGGESTIONS} This rule is automatically fixable by the "
            "`--fix` CLI option and manually fixable by editor suggestions."
        )


class HasSuggestionsNotice(BaseNotice):
    type = NoticeType.HAS_SUGGESTIONS

    def applies(self, context: NoticeContext) -> bool:
        return context.details.has_suggestions and not context.consolidated_fix_notice

    def render(self, context: NoticeContext) -> str:
        return f"{EMOJI_HAS_SUGGESTIONS} This rule is manually fixable by editor suggestions."


class OptionsNotice(BaseNotice):
    type = NoticeType.OPTIONS

    def applies(self, context: NoticeContext) -> bool:
        return has_options(context.details.schema)

    def render(self, context: NoticeContext) -> str:
        return f"{EMOJI_OPTIONS} This rule is configurable."


class RequiresTypeCheckingNotice(BaseNotice):
    type = NoticeType.REQUIRES_TYPE_CHECKING

    def applies(self, context: NoticeContext) -> bool:
        return context.details.requires_type_checking

    def render(self, context: NoticeContext) -> str:
        return f"{EMOJI_REQUIRES_TYPE_CHECKING} This rule requires type information."


class TypeNotice(BaseNotice):
    type = NoticeType.TYPE

    def applies(self, context: NoticeContext) -> bool:
        return context.details.rule_type is not None

    def render(self, context: NoticeContext) -> str:
        return RULE_TYPE_NOTICES[context.details.rule_type]


NOTICES: Dict[NoticeType, BaseNotice] = {
    notice.type: notice
    for notice in (
        ConfigsNotice(),
        DeprecatedNotice(),
        FixableNotice(),
        FixableAndHasSuggestionsNotice(),
        HasSuggestionsNotice(),
        OptionsNotice(),
        RequiresTypeCheckingNotice(),
        TypeNotice(),
    )
}

_missing = set(NoticeType) - set(NOTICES)
if _missing:
    raise RuntimeError(f"No notice renderer for: {sorted(m.value for m in _missing)}")


def _format_description(description: Optional[str]) -> Optional[str]:
    if not description:
        return None
    text = description.strip()
    text = text[:1].upper() + text[1:]
    return text[:-1] if text.endswith(".") else text


_TITLE_FALLBACKS: Dict[TitleFormat, TitleFormat] = {
    TitleFormat.DESC: TitleFormat.PREFIX_NAME,
    TitleFormat.DESC_PARENS_NAME: TitleFormat.NAME,
    TitleFormat.DESC_PARENS_PREFIX_NAME: TitleFormat.PREFIX_NAME,
}


def make_rule_doc_title(
    details: RuleDetails, plugin_prefix: str, title_format: TitleFormat
) -> str:
    description = _format_description(details.description)
    if description is None:
        title_format = _TITLE_FALLBACKS.get(title_format, title_format)

    prefixed = f"{plugin_prefix}/{details.name}" if plugin_prefix else details.name

    if title_format is TitleFormat.DESC:
        return f"# {description}"
    if title_format is TitleFormat.DESC_PARENS_NAME:
        return f"# {description} (`{details.name}`)"
    if title_format is TitleFormat.DESC_PARENS_PREFIX_NAME:
        return f"# {description} (`{prefixed}`)"
    if title_format is TitleFormat.NAME:
        return f"# `{details.name}`"
    return f"# `{prefixed}`"


def generate_rule_header_lines(
    details: RuleDetails,
    plugin: Plugin,
    options: GenerateOptions,
    config_emojis: Sequence[ConfigEmoji],
) -> List[str]:
    """
    Title, applicable notices in configured order, then the end-of-header marker.
    Blocks are separated by blank lines.
    """
    context = NoticeContext(
        details=details,
        options=options,
        config_emojis=config_emojis,
        configs_by_tier={
            tier: configs_for_rule(plugin, details.name, tier, options.ignore_config)
            for tier in SeverityTier
        },
    )

    lines = [make_rule_doc_title(details, plugin.prefix, options.rule_doc_title_format)]
    for notice_type in options.rule_doc_notices:
        notice = NOTICES[notice_type]
        if notice.applies(context):
            lines.extend(["", notice.render(context)])
    lines.extend(["", END_RULE_HEADER_MARKER])
    return lines
