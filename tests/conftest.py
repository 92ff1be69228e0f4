import sys
from pathlib import Path

import pytest

# Allow running `pytest` without needing an editable install.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from lint_docgen.config import GenerateOptions  # noqa: E402
from lint_docgen.plugin import Plugin  # noqa: E402

NO_FOO_SCHEMA = [
    {
        "type": "object",
        "properties": {"ignoreBar": {"type": "boolean"}},
        "additionalProperties": False,
    }
]


def make_rules() -> dict:
    return {
        "no-foo": {
            "meta": {
                "docs": {"description": "disallow foo."},
                "fixable": "code",
                "hasSuggestions": True,
                "schema": NO_FOO_SCHEMA,
                "type": "problem",
            }
        },
        "prefer-bar": {
            "meta": {
                "docs": {"description": "Prefer bar", "requiresTypeChecking": True},
                "schema": [],
                "type": "suggestion",
            }
        },
        "old-rule": {
            "meta": {
                "docs": {"description": "Old rule"},
                "deprecated": True,
                "replacedBy": ["prefer-bar"],
                "schema": [],
            }
        },
        # Not a documentable rule.
        "helpers": {"create": None},
    }


def make_configs() -> dict:
    return {
        "recommended": {"rules": {"demo/no-foo": "error", "demo/prefer-bar": 1}},
        "all": {
            "rules": {
                "demo/no-foo": 2,
                "demo/prefer-bar": "error",
                "demo/old-rule": "off",
            }
        },
    }


@pytest.fixture
def plugin() -> Plugin:
    """A small plugin with two configs and one non-rule entry."""
    return Plugin(rules=make_rules(), configs=make_configs(), prefix="demo")


@pytest.fixture
def options() -> GenerateOptions:
    return GenerateOptions()


@pytest.fixture
def plugin_dir(tmp_path: Path) -> Path:
    """A plugin checkout with docs for every rule and a README with list markers."""
    docs = tmp_path / "docs" / "rules"
    docs.mkdir(parents=True)
    (docs / "no-foo.md").write_text(
        "# Old hand-written title\n\n## Options\n\nUse ignoreBar to allow bar.\n",
        encoding="utf-8",
    )
    (docs / "prefer-bar.md").write_text("Prefer bar over baz.\n", encoding="utf-8")
    (docs / "old-rule.md").write_text("Do not use.\n", encoding="utf-8")
    (tmp_path / "README.md").write_text(
        "# demo\n\n## Rules\n\n"
        "<!-- begin auto-generated rules list -->\n"
        "<!-- end auto-generated rules list -->\n\n"
        "## License\n",
        encoding="utf-8",
    )
    return tmp_path
