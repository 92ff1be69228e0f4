import textwrap

import pytest

from lint_docgen.core import SeverityTier
from lint_docgen.plugin import Plugin, configs_for_rule, load_plugin, lookup_path


def test_configs_for_rule_by_tier(plugin):
    assert configs_for_rule(plugin, "no-foo", SeverityTier.ERROR) == ["all", "recommended"]
    assert configs_for_rule(plugin, "prefer-bar", SeverityTier.WARN) == ["recommended"]
    assert configs_for_rule(plugin, "old-rule", SeverityTier.OFF) == ["all"]
    assert configs_for_rule(plugin, "old-rule", SeverityTier.ERROR) == []


def test_configs_for_rule_ignores_configs(plugin):
    assert configs_for_rule(plugin, "no-foo", SeverityTier.ERROR, ["all"]) == ["recommended"]


def test_configs_accept_bare_names_and_plain_mappings():
    plugin = Plugin(
        rules={"a": {"meta": {}}},
        configs={"strict": {"a": ["error", {"max": 1}]}},
        prefix="demo",
    )

    assert configs_for_rule(plugin, "a", SeverityTier.ERROR) == ["strict"]


def test_prefixed_key_wins_over_bare_name():
    plugin = Plugin(
        rules={"a": {"meta": {}}},
        configs={"mixed": {"rules": {"demo/a": "warn", "a": "error"}}},
        prefix="demo",
    )

    assert configs_for_rule(plugin, "a", SeverityTier.WARN) == ["mixed"]
    assert configs_for_rule(plugin, "a", SeverityTier.ERROR) == []


def test_lookup_path(plugin):
    assert lookup_path(plugin.rules["no-foo"], "meta.docs.description") == "disallow foo."
    assert lookup_path(plugin.rules["no-foo"], "meta.docs.missing") is None
    assert plugin.rule_property("prefer-bar", "meta.type") == "suggestion"


@pytest.fixture
def plugin_module(tmp_path, monkeypatch):
    (tmp_path / "sample_lint_plugin.py").write_text(
        textwrap.dedent(
            """
            rules = {"no-foo": {"meta": {"docs": {"description": "No foo"}}}}
            configs = {"recommended": {"rules": {"sample/no-foo": "error"}}}
            prefix = "sample"
            not_a_plugin = 42
            """
        ),
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    yield "sample_lint_plugin"


def test_load_plugin_module(plugin_module):
    plugin = load_plugin(plugin_module)

    assert list(plugin.rules) == ["no-foo"]
    assert plugin.config_names == ["recommended"]
    assert plugin.prefix == "sample"


def test_load_plugin_prefix_override(plugin_module):
    assert load_plugin(plugin_module, prefix="other").prefix == "other"


def test_load_plugin_errors(plugin_module):
    with pytest.raises(ValueError, match="Could not load plugin"):
        load_plugin("definitely_not_a_module_xyz")

    with pytest.raises(ValueError, match="Could not load plugin"):
        load_plugin(f"{plugin_module}:missing")

    with pytest.raises(ValueError, match="does not expose a 'rules' mapping"):
        load_plugin(f"{plugin_module}:not_a_plugin")


def test_load_plugin_does_not_modify_exported_plugin(tmp_path, monkeypatch):
    (tmp_path / "exported_lint_plugin.py").write_text(
        textwrap.dedent(
            """
            from lint_docgen.plugin import Plugin

            plugin = Plugin(rules={"a": {"meta": {}}}, prefix="exported")
            """
        ),
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    loaded = load_plugin("exported_lint_plugin:plugin", prefix="other")

    assert loaded.prefix == "other"
    assert load_plugin("exported_lint_plugin:plugin").prefix == "exported"
