import sys
import traceback
from pathlib import Path

import click

from .config import load_options
from .core import ColumnType, NoticeType, TitleFormat
from .generator import generate, importable, resolve_plugin
from .reporters.console import ConsoleReporter


# Helper to parse comma-separated, repeatable options
def parse_list(ctx, param, value):
    if not value:
        return None
    items = []
    for item in value:
        items.extend(part.strip() for part in item.split(",") if part.strip())
    return items


def parse_repeated(ctx, param, value):
    return list(value) if value else None


# Unset flags must not override the pyproject settings
def flag_or_none(ctx, param, value):
    return True if value else None


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
@click.option("--check", is_flag=True, callback=flag_or_none, help="Fail if any doc is out-of-date. Nothing is written.")
@click.option(
    "--config-emoji",
    multiple=True,
    callback=parse_repeated,
    help="Config and emoji as 'name,emoji'. Give only the name to remove a default emoji. Repeatable.",
)
@click.option(
    "--ignore-config",
    multiple=True,
    callback=parse_list,
    help="Configs to leave out of the docs. Can be comma-separated.",
)
@click.option("--ignore-deprecated-rules", is_flag=True, callback=flag_or_none, help="Skip deprecated rules entirely.")
@click.option("--init-rule-docs", is_flag=True, callback=flag_or_none, help="Create rule docs that don't exist yet.")
@click.option("--path-rule-doc", help="Path to each rule doc, with a {name} placeholder. Default: docs/rules/{name}.md.")
@click.option(
    "--path-rule-list",
    multiple=True,
    callback=parse_list,
    help="File(s) holding the rules list. Default: README.md.",
)
@click.option("--plugin", "plugin_import", help="Plugin to document, as 'module' or 'module:attribute'.")
@click.option("--plugin-prefix", help="Prefix of the plugin's rule names in configs and titles.")
@click.option("--postprocess", help="Formatter applied to generated files, as 'module:function'.")
@click.option(
    "--rule-doc-notices",
    multiple=True,
    callback=parse_list,
    help=f"Ordered notices for rule docs. Choices: {', '.join(n.value for n in NoticeType)}.",
)
@click.option(
    "--rule-doc-section-exclude",
    multiple=True,
    callback=parse_list,
    help="Headers that must not appear in rule docs.",
)
@click.option(
    "--rule-doc-section-include",
    multiple=True,
    callback=parse_list,
    help="Headers that must appear in rule docs.",
)
@click.option(
    "--rule-doc-section-options/--no-rule-doc-section-options",
    default=None,
    help="Require an Options section mentioning each option for rules with options.",
)
@click.option(
    "--rule-doc-title-format",
    type=click.Choice([f.value for f in TitleFormat]),
    help="Title format for rule docs. Default: desc-parens-prefix-name.",
)
@click.option(
    "--rule-list-columns",
    multiple=True,
    callback=parse_list,
    help=f"Ordered columns for the rules list. Choices: {', '.join(c.value for c in ColumnType)}.",
)
@click.option("--split-by", help="Rule property to split the rules list by, e.g. meta.type.")
@click.option("--url-configs", help="Link to documentation about the plugin's configs.")
@click.option("--url-rule-doc", help="Link to each rule doc, with a {name} placeholder.")
def main(path: str, plugin_import, **overrides):
    """
    Generate rule docs and the rules list for the static-analysis plugin in PATH.

    Options are read from [tool.lint-docgen] in PATH/pyproject.toml; flags
    given here take precedence.
    """
    overrides["plugin"] = plugin_import
    with importable(path):
        try:
            options = load_options(Path(path), overrides)
            plugin = resolve_plugin(Path(path), options)
        except (ValueError, FileNotFoundError) as e:
            click.secho(f"FATAL: {e}", fg="red", err=True)
            sys.exit(1)

        mode = "Checking" if options.check else "Generating"
        click.secho(f"🔎 {mode} docs for {len(plugin.rules)} rule(s)...", dim=True, err=True)

        try:
            result = generate(path, options, plugin=plugin)
        except (ValueError, FileNotFoundError) as e:
            click.secho(f"FATAL: {e}", fg="red", err=True)
            sys.exit(1)
        except Exception as e:
            click.secho(f"Error generating docs: {e}", err=True)
            traceback.print_exc()
            sys.exit(1)

    ConsoleReporter().report(result)
    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
