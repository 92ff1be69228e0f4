import dataclasses
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Union

from .config import (
    GenerateOptions,
    Postprocess,
    load_options,
    load_postprocess,
    project_name,
    unknown_names,
)
from .core import RuleDetails
from .emojis import ConfigEmoji, parse_config_emoji_options
from .markdown import END_RULE_HEADER_MARKER, replace_or_create_header
from .normalizer import gather_rule_details
from .notices import generate_rule_header_lines
from .plugin import Plugin, load_plugin
from .rule_list import update_rules_list
from .validation import GenerateResult, check_rule_doc, diff_contents


@contextmanager
def importable(path: Union[str, Path]) -> Iterator[None]:
    """
    Puts the plugin root (and its ``src/``) on ``sys.path`` for the duration of
    the block, so the plugin and a local postprocess module can be imported.
    Only the entries added here are removed afterwards.
    """
    root = Path(path)
    added: List[str] = []
    for candidate in (root / "src", root):
        entry = str(candidate)
        if candidate.is_dir() and entry not in sys.path:
            sys.path.insert(0, entry)
            added.append(entry)
    try:
        yield
    finally:
        for entry in added:
            if entry in sys.path:
                sys.path.remove(entry)


def resolve_plugin(path: Path, options: GenerateOptions) -> Plugin:
    """
    Loads the plugin named by the options, falling back to the project's own
    import name. Run it inside ``importable(path)`` for plugins that are not
    installed.
    """
    name = project_name(path)
    import_str = options.plugin or (name.replace("-", "_") if name else None)
    if not import_str:
        raise ValueError(
            f"Cannot determine which plugin to document in {path}. Set the 'plugin' option."
        )
    return load_plugin(import_str, prefix=options.plugin_prefix or name)


def _validate_configs(plugin: Plugin, options: GenerateOptions) -> List[ConfigEmoji]:
    missing = unknown_names(options.ignore_config, plugin.config_names)
    if missing:
        raise ValueError(f"Invalid ignore-config option: {missing[0]} config not found.")
    return parse_config_emoji_options(plugin.config_names, options.config_emoji)


class Generator:
    """
    Regenerates rule doc headers and rules lists for one plugin.

    In check mode the exact same content is rendered, compared to the files on
    disk and reported as drift; nothing is written.
    """

    def __init__(self, root: Union[str, Path], plugin: Plugin, options: GenerateOptions):
        self.root = Path(root)
        self.plugin = plugin
        self.options = options
        self.config_emojis = _validate_configs(plugin, options)
        self.postprocess: Optional[Postprocess] = (
            load_postprocess(options.postprocess)
            if isinstance(options.postprocess, str)
            else options.postprocess
        )
        self.result = GenerateResult(check=options.check)

    def _postprocess(self, content: str, path: Path) -> str:
        if self.postprocess is None:
            return content
        return self.postprocess(content, str(path))

    def _commit(self, path: Path, old: Optional[str], new: str) -> None:
        rel = path.relative_to(self.root).as_posix()
        if self.options.check:
            drift = diff_contents(rel, old or "", new)
            if drift is not None:
                self.result.drifts.append(drift)
            return
        if old != new:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(new, encoding="utf-8")
            self.result.written.append(rel)

    def update_rule_doc(self, details: RuleDetails) -> None:
        path = self.root / self.options.rule_doc_path(details.name)
        if path.exists():
            contents: Optional[str] = path.read_text(encoding="utf-8")
        elif self.options.init_rule_docs:
            contents = None
        else:
            raise FileNotFoundError(f"Could not find rule doc: {path}")

        lines = (contents or "").split("\n")
        header = generate_rule_header_lines(
            details, self.plugin, self.options, self.config_emojis
        )
        new_contents = "\n".join(
            replace_or_create_header(lines, header, END_RULE_HEADER_MARKER)
        )
        self._commit(path, contents, self._postprocess(new_contents, path))

        # Checked against the doc as it was before regeneration.
        self.result.failures.extend(
            check_rule_doc(details, contents or "", self.options)
        )

    def update_rule_list(self, details: List[RuleDetails], list_path: str) -> None:
        path = self.root / list_path
        if not path.exists():
            raise FileNotFoundError(f"Could not find rules list file: {path}")
        contents = path.read_text(encoding="utf-8")
        new_contents = update_rules_list(
            details,
            contents,
            self.plugin,
            self.options,
            self.config_emojis,
            list_path=list_path,
        )
        self._commit(path, contents, self._postprocess(new_contents, path))

    def run(self) -> GenerateResult:
        details = gather_rule_details(
            self.plugin, ignore_deprecated_rules=self.options.ignore_deprecated_rules
        )
        for rule in details:
            self.update_rule_doc(rule)
        for list_path in self.options.path_rule_list:
            self.update_rule_list(details, list_path)
        return self.result


def generate(
    path: Union[str, Path] = ".",
    options: Optional[GenerateOptions] = None,
    *,
    plugin: Optional[Plugin] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> GenerateResult:
    """
    Main entry point.

    Options default to ``[tool.lint-docgen]`` in ``path/pyproject.toml``
    (plus ``overrides``); the plugin defaults to the one those options name.
    """
    root = Path(path)
    with importable(root):
        if options is None:
            options = load_options(root, overrides)
        if plugin is None:
            plugin = resolve_plugin(root, options)
        elif options.plugin_prefix is not None:
            plugin = dataclasses.replace(plugin, prefix=options.plugin_prefix)
        return Generator(root, plugin, options).run()
