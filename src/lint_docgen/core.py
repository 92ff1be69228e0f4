from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class SeverityTier(str, Enum):
    ERROR = "error"
    WARN = "warn"
    OFF = "off"


_SEVERITY_ENCODINGS: Dict[Any, SeverityTier] = {
    2: SeverityTier.ERROR,
    "error": SeverityTier.ERROR,
    1: SeverityTier.WARN,
    "warn": SeverityTier.WARN,
    0: SeverityTier.OFF,
    "off": SeverityTier.OFF,
}


def severity_tier(value: Any) -> Optional[SeverityTier]:
    """
    Maps a raw severity encoding to its tier.

    Accepts the numeric and string forms (``2``/``"error"``, ``1``/``"warn"``,
    ``0``/``"off"``) as well as a list/tuple whose first item is one of those.
    Returns None for anything else.
    """
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        value = value[0]
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.lower()
    try:
        return _SEVERITY_ENCODINGS.get(value)
    except TypeError:
        # Unhashable encodings are never valid severities.
        return None


class NoticeType(str, Enum):
    """Rule doc notices."""

    CONFIGS = "configs"
    DEPRECATED = "deprecated"
    FIXABLE = "fixable"
    # Consolidated notice for space-saving.
    FIXABLE_AND_HAS_SUGGESTIONS = "fixableAndHasSuggestions"
    HAS_SUGGESTIONS = "hasSuggestions"
    OPTIONS = "options"
    REQUIRES_TYPE_CHECKING = "requiresTypeChecking"
    TYPE = "type"


class ColumnType(str, Enum):
    """Rule list columns."""

    CONFIGS_ERROR = "configsError"
    CONFIGS_OFF = "configsOff"
    CONFIGS_WARN = "configsWarn"
    DEPRECATED = "deprecated"
    DESCRIPTION = "description"
    FIXABLE = "fixable"
    FIXABLE_AND_HAS_SUGGESTIONS = "fixableAndHasSuggestions"
    HAS_SUGGESTIONS = "hasSuggestions"
    NAME = "name"
    OPTIONS = "options"
    REQUIRES_TYPE_CHECKING = "requiresTypeChecking"
    TYPE = "type"


class RuleType(str, Enum):
    # Declaration order is the canonical order used by legends.
    PROBLEM = "problem"
    SUGGESTION = "suggestion"
    LAYOUT = "layout"


class TitleFormat(str, Enum):
    DESC = "desc"
    DESC_PARENS_NAME = "desc-parens-name"
    DESC_PARENS_PREFIX_NAME = "desc-parens-prefix-name"
    NAME = "name"
    PREFIX_NAME = "prefix-name"


FIXABLE_KINDS = frozenset({"code", "whitespace"})


@dataclass(frozen=True)
class RuleDetails:
    name: str
    description: Optional[str] = None
    fixable: bool = False
    has_suggestions: bool = False
    requires_type_checking: bool = False
    deprecated: bool = False
    schema: Any = field(default_factory=list)
    type: Optional[str] = None
    replaced_by: Tuple[str, ...] = ()

    @property
    def rule_type(self) -> Optional[RuleType]:
        """The rule category, when it is one of the known types."""
        try:
            return RuleType(self.type) if self.type else None
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["replaced_by"] = list(self.replaced_by)
        return data
