from typing import Dict, Iterable, List, NamedTuple, Optional

# Default emojis for common config names.
EMOJI_CONFIGS: Dict[str, str] = {
    "a11y": "♿",
    "all": "🌐",
    "error": "❗",
    "recommended": "✅",
    "strict": "🔒",
    "style": "🎨",
    "stylistic": "🎨",
    "typing": "⌨️",
    "warnings": "⚠️",
}

# General configs.
EMOJI_CONFIG = "💼"
EMOJI_CONFIG_ERROR = "💼"
EMOJI_CONFIG_WARN = "⚠️"
EMOJI_CONFIG_OFF = "🚫"

# Fixers.
EMOJI_FIXABLE = "🔧"
EMOJI_HAS_SUGGESTIONS = "💡"

# Other metadata.
EMOJI_DEPRECATED = "❌"
EMOJI_OPTIONS = "⚙️"
EMOJI_REQUIRES_TYPE_CHECKING = "💭"
EMOJI_TYPE = "🗂️"

# Rule types.
EMOJI_TYPE_PROBLEM = "❗"
EMOJI_TYPE_SUGGESTION = "📖"
EMOJI_TYPE_LAYOUT = "📏"


class ConfigEmoji(NamedTuple):
    config: str
    emoji: str


def parse_config_emoji_options(
    config_names: Iterable[str], config_emoji: Optional[Iterable[str]] = None
) -> List[ConfigEmoji]:
    """
    Parses ``name,emoji`` items and merges in the default emojis.

    An item with only a name removes that config's default emoji. Items naming a
    config the plugin does not export are rejected.
    """
    known = list(config_names)
    removed: List[str] = []
    explicit: List[ConfigEmoji] = []

    for item in config_emoji or []:
        parts = item.split(",")
        if len(parts) > 2:
            raise ValueError(
                f"Invalid config-emoji option: '{item}'. Expected format: config,emoji"
            )
        config = parts[0].strip()
        emoji = parts[1].strip() if len(parts) == 2 else ""
        if config not in known:
            raise ValueError(
                f"Invalid config-emoji option: '{config}' config not found."
            )
        if any(ce.config == config for ce in explicit) or config in removed:
            raise ValueError(
                f"Invalid config-emoji option: '{config}' was given more than once."
            )
        if not emoji:
            removed.append(config)
            continue
        explicit.append(ConfigEmoji(config, emoji))

    defaults = [
        ConfigEmoji(name, EMOJI_CONFIGS[name])
        for name in known
        if name in EMOJI_CONFIGS
        and name not in removed
        and not any(ce.config == name for ce in explicit)
    ]
    return explicit + defaults


def emoji_for_config(
    config_emojis: Iterable[ConfigEmoji], config: str
) -> Optional[str]:
    for ce in config_emojis:
        if ce.config == config:
            return ce.emoji
    return None

