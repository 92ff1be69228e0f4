import pytest

from lint_docgen.config import GenerateOptions
from lint_docgen.core import NoticeType, RuleDetails, TitleFormat
from lint_docgen.emojis import ConfigEmoji, parse_config_emoji_options
from lint_docgen.markdown import END_RULE_HEADER_MARKER
from lint_docgen.normalizer import gather_rule_details
from lint_docgen.notices import NOTICES, generate_rule_header_lines, make_rule_doc_title
from lint_docgen.plugin import Plugin


def _details(plugin, name):
    return {d.name: d for d in gather_rule_details(plugin)}[name]


def _header(plugin, name, **option_kwargs):
    options = GenerateOptions(**option_kwargs)
    emojis = parse_config_emoji_options(plugin.config_names, options.config_emoji)
    return generate_rule_header_lines(_details(plugin, name), plugin, options, emojis)


def test_every_notice_type_has_a_renderer():
    assert set(NOTICES) == set(NoticeType)
    for notice_type, notice in NOTICES.items():
        assert notice.type is notice_type


def test_default_header(plugin):
    assert _header(plugin, "no-foo") == [
        "# Disallow foo (`demo/no-foo`)",
        "",
        "💼 This rule is enabled in the following configs: 🌐 `all`, ✅ `recommended`.",
        "",
        "🔧💡 This rule is automatically fixable by the `--fix` CLI option and manually fixable by editor suggestions.",
        "",
        END_RULE_HEADER_MARKER,
    ]


def test_config_notice_combines_tiers(plugin):
    lines = _header(plugin, "prefer-bar")

    assert (
        "💼⚠️ This rule is enabled in the 🌐 `all` config. "
        "This rule _warns_ in the ✅ `recommended` config."
    ) in lines
    assert "💭 This rule requires type information." in lines


def test_deprecated_notice_links_replacement(plugin):
    lines = _header(plugin, "old-rule")

    assert lines[2] == (
        "❌ This rule is deprecated. It was replaced by [`prefer-bar`](prefer-bar.md)."
    )
    assert "🚫 This rule is _disabled_ in the 🌐 `all` config." in lines


def test_notices_follow_configured_order(plugin):
    lines = _header(
        plugin, "no-foo", rule_doc_notices=["type", "options", "fixableAndHasSuggestions"]
    )

    assert lines[2].startswith("❗ This rule identifies problems")
    assert lines[4] == "⚙️ This rule is configurable."
    assert lines[6].startswith("🔧💡")


def test_consolidated_notice_suppresses_individual_ones(plugin):
    lines = _header(
        plugin,
        "no-foo",
        rule_doc_notices=["fixable", "hasSuggestions", "fixableAndHasSuggestions"],
    )
    notices = [line for line in lines[1:-1] if line]

    assert notices == [
        "🔧💡 This rule is automatically fixable by the `--fix` CLI option and manually fixable by editor suggestions."
    ]


def test_individual_notices_without_consolidated_tag(plugin):
    lines = _header(plugin, "no-foo", rule_doc_notices=["fixable", "hasSuggestions"])

    assert "🔧 This rule is automatically fixable by the `--fix` CLI option." in lines
    assert "💡 This rule is manually fixable by editor suggestions." in lines


def test_configs_notice_not_applicable_without_configs():
    plugin = Plugin(rules={"a": {"meta": {"docs": {"description": "A"}}}}, prefix="p")
    options = GenerateOptions(rule_doc_notices=["configs"])
    details = gather_rule_details(plugin)[0]

    assert generate_rule_header_lines(details, plugin, options, []) == [
        "# A (`p/a`)",
        "",
        END_RULE_HEADER_MARKER,
    ]


def test_configs_notice_respects_ignore_config_and_url(plugin):
    lines = _header(
        plugin,
        "no-foo",
        ignore_config=["all"],
        url_configs="https://example.com/configs",
        rule_doc_notices=["configs"],
    )

    assert lines[2] == (
        "💼 This rule is enabled in the ✅ `recommended` [config](https://example.com/configs)."
    )


def test_config_without_emoji_uses_name_only(plugin):
    lines = _header(plugin, "no-foo", config_emoji=["all"], rule_doc_notices=["configs"])

    assert lines[2] == (
        "💼 This rule is enabled in the following configs: `all`, ✅ `recommended`."
    )


@pytest.mark.parametrize(
    "title_format, expected",
    [
        (TitleFormat.DESC, "# Disallow foo"),
        (TitleFormat.DESC_PARENS_NAME, "# Disallow foo (`no-foo`)"),
        (TitleFormat.DESC_PARENS_PREFIX_NAME, "# Disallow foo (`demo/no-foo`)"),
        (TitleFormat.NAME, "# `no-foo`"),
        (TitleFormat.PREFIX_NAME, "# `demo/no-foo`"),
    ],
)
def test_title_formats(title_format, expected):
    details = RuleDetails(name="no-foo", description="disallow foo.")

    assert make_rule_doc_title(details, "demo", title_format) == expected


@pytest.mark.parametrize(
    "title_format, expected",
    [
        (TitleFormat.DESC, "# `demo/no-foo`"),
        (TitleFormat.DESC_PARENS_NAME, "# `no-foo`"),
        (TitleFormat.DESC_PARENS_PREFIX_NAME, "# `demo/no-foo`"),
    ],
)
def test_title_falls_back_without_description(title_format, expected):
    details = RuleDetails(name="no-foo")

    assert make_rule_doc_title(details, "demo", title_format) == expected


def test_configs_notice_uses_explicit_config_emoji():
    details = RuleDetails(name="a", description="A")
    plugin = Plugin(
        rules={"a": {"meta": {}}},
        configs={"strict": {"rules": {"a": "error"}}},
    )
    options = GenerateOptions(rule_doc_notices=["configs"])

    lines = generate_rule_header_lines(
        details, plugin, options, [ConfigEmoji("strict", "🔥")]
    )

    assert lines[0] == "# A (`a`)"
    assert lines[2] == "💼 This rule is enabled in the 🔥 `strict` config."
