from types import SimpleNamespace

from lint_docgen.normalizer import gather_rule_details, rule_details
from lint_docgen.plugin import Plugin


def test_gather_skips_entries_without_meta(plugin):
    details = gather_rule_details(plugin)

    assert [d.name for d in details] == ["no-foo", "prefer-bar", "old-rule"]


def test_gather_ignores_deprecated_rules(plugin):
    details = gather_rule_details(plugin, ignore_deprecated_rules=True)

    assert "old-rule" not in [d.name for d in details]


def test_rule_details_fields(plugin):
    by_name = {d.name: d for d in gather_rule_details(plugin)}

    no_foo = by_name["no-foo"]
    assert no_foo.description == "disallow foo."
    assert no_foo.fixable is True
    assert no_foo.has_suggestions is True
    assert no_foo.type == "problem"

    prefer_bar = by_name["prefer-bar"]
    assert prefer_bar.requires_type_checking is True
    assert prefer_bar.fixable is False

    old = by_name["old-rule"]
    assert old.deprecated is True
    assert old.replaced_by == ("prefer-bar",)


def test_fixable_only_for_known_fix_kinds():
    assert rule_details("a", {"meta": {"fixable": "whitespace"}}).fixable is True
    assert rule_details("a", {"meta": {"fixable": "layout"}}).fixable is False
    assert rule_details("a", {"meta": {"fixable": True}}).fixable is False
    assert rule_details("a", {"meta": {}}).fixable is False


def test_missing_flags_default_to_false():
    details = rule_details("a", {"meta": {}})

    assert details.description is None
    assert details.has_suggestions is False
    assert details.deprecated is False
    assert details.requires_type_checking is False
    assert details.schema == []


def test_attribute_style_records_and_snake_case_keys():
    rule = SimpleNamespace(
        meta=SimpleNamespace(
            docs=SimpleNamespace(description="Checks things", requires_type_checking=True),
            has_suggestions=True,
            replaced_by="new-rule",
            deprecated=True,
        )
    )
    details = gather_rule_details(Plugin(rules={"a": rule}))[0]

    assert details.description == "Checks things"
    assert details.requires_type_checking is True
    assert details.has_suggestions is True
    assert details.replaced_by == ("new-rule",)
