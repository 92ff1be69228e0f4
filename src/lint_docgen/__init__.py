from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("lint-docgen")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = ["__version__"]

from .config import GenerateOptions
from .core import ColumnType, NoticeType, RuleDetails, RuleType, SeverityTier, TitleFormat
from .generator import Generator, generate
from .plugin import Plugin, load_plugin
from .validation import Drift, Failure, GenerateResult

__all__ += [
    "generate",
    "Generator",
    "GenerateOptions",
    "GenerateResult",
    "Plugin",
    "load_plugin",
    "RuleDetails",
    "RuleType",
    "SeverityTier",
    "NoticeType",
    "ColumnType",
    "TitleFormat",
    "Failure",
    "Drift",
]
