from typing import Any, List, Tuple

from .core import FIXABLE_KINDS, RuleDetails
from .plugin import Plugin, lookup


def _flag(record: Any, *keys: str) -> bool:
    for key in keys:
        value = lookup(record, key)
        if value is not None:
            return bool(value)
    return False


def _replaced_by(meta: Any) -> Tuple[str, ...]:
    value = lookup(meta, "replacedBy")
    if value is None:
        value = lookup(meta, "replaced_by")
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def rule_details(name: str, rule: Any) -> RuleDetails:
    meta = lookup(rule, "meta")
    docs = lookup(meta, "docs")
    fixable = lookup(meta, "fixable")
    schema = lookup(meta, "schema")
    return RuleDetails(
        name=name,
        description=lookup(docs, "description") or None,
        fixable=isinstance(fixable, str) and fixable in FIXABLE_KINDS,
        has_suggestions=_flag(meta, "hasSuggestions", "has_suggestions"),
        requires_type_checking=_flag(
            docs, "requiresTypeChecking", "requires_type_checking"
        ),
        deprecated=_flag(meta, "deprecated"),
        schema=schema if schema is not None else [],
        type=lookup(meta, "type"),
        replaced_by=_replaced_by(meta),
    )


def gather_rule_details(
    plugin: Plugin, *, ignore_deprecated_rules: bool = False
) -> List[RuleDetails]:
    """
    Builds the canonical details of every documentable rule, in plugin order.

    Entries without ``meta`` are not rules we can document and are skipped.
    """
    details = [
        rule_details(name, rule)
        for name, rule in plugin.rules.items()
        if lookup(rule, "meta") is not None
    ]
    if ignore_deprecated_rules:
        details = [d for d in details if not d.deprecated]
    return details
