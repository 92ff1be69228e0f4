import importlib
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, List, Mapping, Optional

from .core import SeverityTier, severity_tier


def lookup(obj: Any, key: str) -> Any:
    """Reads ``key`` from a mapping or an attribute-style record."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def lookup_path(obj: Any, path: str) -> Any:
    """Follows a dotted path such as ``meta.docs.description``."""
    current = obj
    for part in path.split("."):
        current = lookup(current, part)
        if current is None:
            return None
    return current


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return value
    return dict(vars(value))


@dataclass
class Plugin:
    """
    The static-analysis plugin being documented.

    ``rules`` maps rule name to its record (a mapping or object with ``meta``).
    ``configs`` maps config name to either an object with a ``rules`` mapping or
    a plain mapping of rule key to severity.
    """

    rules: Mapping[str, Any]
    configs: Mapping[str, Any] = field(default_factory=dict)
    prefix: str = ""

    @property
    def config_names(self) -> List[str]:
        return list(self.configs)

    def config_rules(self, config_name: str) -> Mapping[str, Any]:
        config = self.configs[config_name]
        rules = lookup(config, "rules")
        if rules is not None:
            return _as_mapping(rules)
        return _as_mapping(config)

    def rule_keys(self, rule_name: str) -> List[str]:
        keys = [rule_name]
        if self.prefix:
            keys.insert(0, f"{self.prefix}/{rule_name}")
        return keys

    def rule_property(self, rule_name: str, path: str) -> Any:
        return lookup_path(self.rules.get(rule_name), path)


def configs_for_rule(
    plugin: Plugin,
    rule_name: str,
    tier: SeverityTier,
    ignore_config: Optional[Iterable[str]] = None,
) -> List[str]:
    """Sorted names of the configs that set ``rule_name`` to ``tier``."""
    ignored = set(ignore_config or ())
    found = []
    for config_name in plugin.config_names:
        if config_name in ignored:
            continue
        rules = plugin.config_rules(config_name)
        for key in plugin.rule_keys(rule_name):
            if key in rules:
                if severity_tier(rules[key]) == tier:
                    found.append(config_name)
                break
    return sorted(found)


def load_plugin(import_str: str, prefix: Optional[str] = None) -> Plugin:
    """
    Dynamically imports a plugin from a string like 'my_plugin' or
    'my_plugin.module:plugin'.
    """
    module_path, _, obj_name = import_str.partition(":")
    if not module_path:
        raise ValueError(
            f"Invalid plugin '{import_str}'. Use 'module.path' or 'module.path:attribute'"
        )

    try:
        module = importlib.import_module(module_path)
        obj = getattr(module, obj_name) if obj_name else module
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Could not load plugin '{import_str}': {e}") from None

    if isinstance(obj, Plugin):
        return obj if prefix is None else replace(obj, prefix=prefix)

    rules = lookup(obj, "rules")
    if not isinstance(rules, Mapping):
        raise ValueError(f"Plugin '{import_str}' does not expose a 'rules' mapping")

    configs = lookup(obj, "configs") or {}
    if not isinstance(configs, Mapping):
        raise ValueError(f"Plugin '{import_str}' has a 'configs' that is not a mapping")

    if prefix is None:
        prefix = lookup(obj, "prefix") or module_path.split(".")[0]
    return Plugin(rules=rules, configs=configs, prefix=prefix)
