from lint_docgen.markdown import (
    END_RULE_HEADER_MARKER,
    has_heading,
    heading_level,
    heading_titles,
    prose_lines,
    replace_or_create_header,
    rule_doc_link,
)

HEADER = ["# New title", "", "❌ This rule is deprecated.", "", END_RULE_HEADER_MARKER]


def test_replaces_existing_header_up_to_marker():
    lines = ["# Old", "", "old notice", END_RULE_HEADER_MARKER, "", "Body."]

    assert replace_or_create_header(lines, HEADER, END_RULE_HEADER_MARKER) == HEADER + [
        "",
        "Body.",
    ]


def test_missing_marker_drops_leading_title():
    lines = ["# Hand-written title", "", "Body."]

    result = replace_or_create_header(lines, HEADER, END_RULE_HEADER_MARKER)

    assert result == HEADER + ["", "Body."]
    assert "# Hand-written title" not in result


def test_missing_marker_without_title_prepends():
    lines = ["Body.", "", "## Options"]

    assert replace_or_create_header(lines, HEADER, END_RULE_HEADER_MARKER) == HEADER + lines


def test_subheading_is_not_treated_as_title():
    lines = ["## Details", "Body."]

    assert replace_or_create_header(lines, HEADER, END_RULE_HEADER_MARKER) == HEADER + lines


def test_splicing_is_idempotent():
    lines = ["# Hand-written title", "", "Body.", ""]

    once = replace_or_create_header(lines, HEADER, END_RULE_HEADER_MARKER)
    twice = replace_or_create_header(once, HEADER, END_RULE_HEADER_MARKER)

    assert once == twice


def test_splicing_does_not_mutate_input():
    lines = ["# Title", "Body."]
    replace_or_create_header(lines, HEADER, END_RULE_HEADER_MARKER)

    assert lines == ["# Title", "Body."]


def test_only_first_marker_is_used():
    lines = [END_RULE_HEADER_MARKER, "Body.", END_RULE_HEADER_MARKER]

    assert replace_or_create_header(lines, HEADER, END_RULE_HEADER_MARKER) == HEADER + [
        "Body.",
        END_RULE_HEADER_MARKER,
    ]


def test_headings():
    assert heading_level("### Options") == 3
    assert heading_level("#Options") is None
    assert heading_level("Options") is None

    assert has_heading("Text\n\n## options\n", "Options") is True
    assert has_heading("Mentions Options only in text", "Options") is False


def test_rule_doc_link():
    assert rule_doc_link("no-foo", "", "docs/rules/{name}.md") == "docs/rules/no-foo.md"
    assert rule_doc_link("no-foo", "docs/rules", "docs/rules/{name}.md") == "no-foo.md"
    assert rule_doc_link("no-foo", "docs", "rules/{name}.md") == "../rules/no-foo.md"
    assert (
        rule_doc_link("no-foo", "", "docs/rules/{name}.md", "https://example.com/{name}")
        == "https://example.com/no-foo"
    )


def test_headings_inside_fenced_code_are_ignored():
    contents = "\n".join(
        [
            "## Options",
            "```python",
            "# Examples",
            "```",
            "~~~",
            "# Config",
            "~~~",
            "### Notes",
        ]
    )

    assert heading_titles(contents) == ["Options", "Notes"]
    assert has_heading(contents, "Examples") is False
    assert has_heading(contents, "Config") is False


def test_prose_lines_closes_fence_only_with_matching_marker():
    contents = "a\n~~~\n```\nb\n~~~\nc"

    assert list(prose_lines(contents)) == ["a", "c"]
