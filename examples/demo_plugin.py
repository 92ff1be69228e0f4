"""lint-docgen demo: document a small in-memory plugin.

This demo is self-contained; it writes a throwaway plugin checkout to a
temporary directory, generates its docs and then checks them.

Run:
  python examples/demo_plugin.py

What it demonstrates:
  - Building a `Plugin` from plain rule and config mappings
  - `generate(...)` rewriting rule doc headers and the README rules list
  - Check mode reporting drift once a doc is edited by hand
"""

import sys
import tempfile
from pathlib import Path

# Allow running this demo without installing the package.
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
if _SRC.exists():
    sys.path.insert(0, str(_SRC))

from lint_docgen import GenerateOptions, Plugin, generate
from lint_docgen.reporters.console import ConsoleReporter

RULES = {
    "no-console": {
        "meta": {
            "docs": {"description": "disallow console output."},
            "schema": [
                {
                    "type": "object",
                    "properties": {"allow": {"type": "array"}},
                    "additionalProperties": False,
                }
            ],
            "type": "suggestion",
        }
    },
    "semi": {
        "meta": {
            "docs": {"description": "require semicolons"},
            "fixable": "whitespace",
            "type": "layout",
        }
    },
    "no-var": {
        "meta": {
            "docs": {"description": "require let or const instead of var"},
            "fixable": "code",
            "hasSuggestions": True,
            "type": "suggestion",
        }
    },
    "old-semi": {
        "meta": {
            "docs": {"description": "require semicolons"},
            "deprecated": True,
            "replacedBy": ["semi"],
        }
    },
}

CONFIGS = {
    "recommended": {"rules": {"demo/no-var": "error", "demo/no-console": "warn"}},
    "stylistic": {"rules": {"demo/semi": "error", "demo/no-console": "off"}},
}


def _write_checkout(root: Path) -> None:
    docs = root / "docs" / "rules"
    docs.mkdir(parents=True)
    (docs / "no-console.md").write_text(
        "## Options\n\nUse `allow` to permit some methods.\n", encoding="utf-8"
    )
    for name in ("semi", "no-var", "old-semi"):
        (docs / f"{name}.md").write_text("## Examples\n", encoding="utf-8")
    (root / "README.md").write_text(
        "# demo\n\n## Rules\n\n"
        "<!-- begin auto-generated rules list -->\n"
        "<!-- end auto-generated rules list -->\n",
        encoding="utf-8",
    )


def run_demo() -> None:
    print("\n" + "=" * 72)
    print("📚 LINT-DOCGEN: PLUGIN DEMO")
    print("=" * 72)

    plugin = Plugin(rules=RULES, configs=CONFIGS, prefix="demo")
    reporter = ConsoleReporter()

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        _write_checkout(root)

        print("\n--- Generating ---")
        columns = GenerateOptions().rule_list_columns + ["options", "type"]
        options = GenerateOptions(rule_list_columns=columns)
        reporter.report(generate(root, options, plugin=plugin))

        print("\n--- README.md ---")
        print((root / "README.md").read_text(encoding="utf-8"))

        print("--- docs/rules/no-var.md ---")
        print((root / "docs/rules/no-var.md").read_text(encoding="utf-8"))

        print("--- Checking after a manual edit ---")
        doc = root / "docs/rules/semi.md"
        doc.write_text(doc.read_text(encoding="utf-8").replace("# ", "# My ", 1), encoding="utf-8")
        result = generate(root, GenerateOptions(check=True, rule_list_columns=columns), plugin=plugin)
        reporter.report(result)
        print(f"Exit code: {result.exit_code}")


if __name__ == "__main__":
    run_demo()
