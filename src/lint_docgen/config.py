import importlib
import posixpath
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from .core import ColumnType, NoticeType, TitleFormat

TOOL_SECTION = "lint-docgen"

Postprocess = Callable[[str, str], str]

DEFAULT_RULE_DOC_NOTICES: List[NoticeType] = [
    NoticeType.DEPRECATED,
    NoticeType.CONFIGS,
    NoticeType.FIXABLE_AND_HAS_SUGGESTIONS,
    NoticeType.REQUIRES_TYPE_CHECKING,
]

DEFAULT_RULE_LIST_COLUMNS: List[ColumnType] = [
    ColumnType.NAME,
    ColumnType.DESCRIPTION,
    ColumnType.CONFIGS_ERROR,
    ColumnType.CONFIGS_WARN,
    ColumnType.CONFIGS_OFF,
    ColumnType.FIXABLE,
    ColumnType.HAS_SUGGESTIONS,
    ColumnType.REQUIRES_TYPE_CHECKING,
    ColumnType.DEPRECATED,
]

E = TypeVar("E", NoticeType, ColumnType, TitleFormat)


def split_list(value: Any) -> List[str]:
    """Accepts a comma-separated string or a list of (possibly comma-separated) strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    items: List[str] = []
    for item in value:
        items.extend(part.strip() for part in str(item).split(",") if part.strip())
    return items


def _parse_enum(enum_cls: Type[E], value: Any, option: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        raise ValueError(
            f"Invalid {option}: '{value}'. Must be one of {[e.value for e in enum_cls]}"
        ) from None


def _parse_enum_list(enum_cls: Type[E], value: Any, option: str) -> List[E]:
    if isinstance(value, str):
        value = [value]
    parsed: List[E] = []
    for item in value or []:
        if isinstance(item, enum_cls):
            parsed.append(item)
        else:
            parsed.extend(_parse_enum(enum_cls, v, option) for v in split_list(item))
    duplicates = {v.value for v in parsed if parsed.count(v) > 1}
    if duplicates:
        raise ValueError(f"Duplicate value(s) in {option}: {sorted(duplicates)}")
    return parsed


def _split_postprocess(import_str: str) -> Tuple[str, str]:
    module_path, _, obj_name = import_str.partition(":")
    if not module_path or not obj_name:
        raise ValueError(
            f"Invalid postprocess '{import_str}'. Use 'module.path:function'"
        )
    return module_path, obj_name


def _inside_root(value: str, option: str) -> None:
    normalized = posixpath.normpath(value.replace("\\", "/"))
    if posixpath.isabs(normalized) or normalized == ".." or normalized.startswith("../"):
        raise ValueError(
            f"Invalid {option}: '{value}'. It must be a path inside the plugin root."
        )


def load_postprocess(import_str: str) -> Postprocess:
    """
    Imports a formatter callable from a string like 'my_project.format:markdown'.
    It is called as ``fn(content, path)`` and must return the new content.
    """
    module_path, obj_name = _split_postprocess(import_str)
    try:
        module = importlib.import_module(module_path)
        fn = getattr(module, obj_name)
    except (ImportError, AttributeError) as e:
        raise ValueError(
            f"Could not load postprocess '{obj_name}' from '{module_path}': {e}"
        ) from None
    if not callable(fn):
        raise ValueError(f"Postprocess '{import_str}' is not callable")
    return fn


@dataclass
class GenerateOptions:
    check: bool = False

    config_emoji: List[str] = field(default_factory=list)
    ignore_config: List[str] = field(default_factory=list)
    ignore_deprecated_rules: bool = False

    init_rule_docs: bool = False
    path_rule_doc: str = "docs/rules/{name}.md"
    path_rule_list: List[str] = field(default_factory=lambda: ["README.md"])

    plugin: Optional[str] = None
    plugin_prefix: Optional[str] = None
    # "module:function" strings are imported when generation starts.
    postprocess: Union[str, Postprocess, None] = None

    rule_doc_notices: List[NoticeType] = field(
        default_factory=lambda: list(DEFAULT_RULE_DOC_NOTICES)
    )
    rule_doc_section_exclude: List[str] = field(default_factory=list)
    rule_doc_section_include: List[str] = field(default_factory=list)
    rule_doc_section_options: bool = True
    rule_doc_title_format: TitleFormat = TitleFormat.DESC_PARENS_PREFIX_NAME

    rule_list_columns: List[ColumnType] = field(
        default_factory=lambda: list(DEFAULT_RULE_LIST_COLUMNS)
    )
    split_by: Optional[str] = None

    url_configs: Optional[str] = None
    url_rule_doc: Optional[str] = None

    def __post_init__(self):
        # Items are "name,emoji" pairs so they are never split on commas.
        if isinstance(self.config_emoji, str):
            self.config_emoji = [self.config_emoji]
        self.config_emoji = [str(item) for item in self.config_emoji]
        self.ignore_config = split_list(self.ignore_config)
        self.path_rule_list = split_list(self.path_rule_list) or ["README.md"]
        self.rule_doc_section_exclude = split_list(self.rule_doc_section_exclude)
        self.rule_doc_section_include = split_list(self.rule_doc_section_include)
        self.rule_doc_notices = _parse_enum_list(
            NoticeType, self.rule_doc_notices, "rule-doc-notices"
        )
        self.rule_list_columns = _parse_enum_list(
            ColumnType, self.rule_list_columns, "rule-list-columns"
        )
        self.rule_doc_title_format = _parse_enum(
            TitleFormat, self.rule_doc_title_format, "rule-doc-title-format"
        )
        if isinstance(self.postprocess, str):
            _split_postprocess(self.postprocess)
        if "{name}" not in self.path_rule_doc:
            raise ValueError(
                f"Invalid path-rule-doc: '{self.path_rule_doc}'. It must contain the {{name}} placeholder."
            )
        _inside_root(self.path_rule_doc, "path-rule-doc")
        for list_path in self.path_rule_list:
            _inside_root(list_path, "path-rule-list")

    def is_notice_enabled(self, notice: NoticeType) -> bool:
        return notice in self.rule_doc_notices

    def rule_doc_path(self, rule_name: str) -> str:
        return self.path_rule_doc.replace("{name}", rule_name)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GenerateOptions":
        """Builds options from kebab-case (or snake_case) keys, e.g. a pyproject table."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                raise ValueError(f"Unknown option: '{key}'")
            kwargs[name] = value
        return cls(**kwargs)

    def merged(self, overrides: Mapping[str, Any]) -> "GenerateOptions":
        """Returns a copy with every non-None override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if value is None:
                continue
            values[key.replace("-", "_")] = value
        return GenerateOptions.from_mapping(values)


def read_pyproject(path: Path) -> Dict[str, Any]:
    pyproject = Path(path) / "pyproject.toml"
    if not pyproject.is_file():
        return {}
    with pyproject.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Could not parse {pyproject}: {e}") from e


def load_options(path: Path, overrides: Optional[Mapping[str, Any]] = None) -> GenerateOptions:
    """Defaults, then ``[tool.lint-docgen]`` from the plugin's pyproject.toml, then overrides."""
    data = read_pyproject(path)
    section = data.get("tool", {}).get(TOOL_SECTION, {})
    options = GenerateOptions.from_mapping(section)
    if overrides:
        options = options.merged(overrides)
    return options


def project_name(path: Path) -> Optional[str]:
    return read_pyproject(path).get("project", {}).get("name")


def unknown_names(names: Iterable[str], known: Iterable[str]) -> List[str]:
    known_set = set(known)
    return [n for n in names if n not in known_set]
