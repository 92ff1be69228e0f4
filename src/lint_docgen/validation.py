import difflib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .config import GenerateOptions
from .core import RuleDetails
from .markdown import has_heading
from .rule_options import get_all_named_options, has_options

OPTIONS_SECTION_HEADINGS = ("Options", "Config")


@dataclass(frozen=True)
class Failure:
    """A rule doc that does not meet one content expectation."""

    rule_name: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"rule": self.rule_name, "message": self.message}


@dataclass(frozen=True)
class Drift:
    """A file whose generated content differs from what is on disk."""

    path: str
    diff: str


@dataclass
class GenerateResult:
    failures: List[Failure] = field(default_factory=list)
    drifts: List[Drift] = field(default_factory=list)
    written: List[str] = field(default_factory=list)
    check: bool = False

    @property
    def exit_code(self) -> int:
        return 1 if self.failures or self.drifts else 0


def expect_content(
    rule_name: str, contents: str, content: str, expected: bool = True
) -> Optional[Failure]:
    if (content in contents) == expected:
        return None
    should = "should" if expected else "should not"
    return Failure(rule_name, f"`{rule_name}` rule doc {should} have included: {content}")


def expect_section_header(
    rule_name: str,
    contents: str,
    possible_headers: Sequence[str],
    expected: bool = True,
) -> Optional[Failure]:
    found = any(has_heading(contents, header) for header in possible_headers)
    if found == expected:
        return None
    if expected:
        wanted = ", ".join(possible_headers)
        if len(possible_headers) == 1:
            message = f"`{rule_name}` rule doc should have included the header: {wanted}"
        else:
            message = f"`{rule_name}` rule doc should have included one of these headers: {wanted}"
    else:
        message = f"`{rule_name}` rule doc should not have included the header: {', '.join(possible_headers)}"
    return Failure(rule_name, message)


def check_rule_doc(
    details: RuleDetails, contents: str, options: GenerateOptions
) -> List[Failure]:
    """
    Content expectations for one rule doc. Every violation is reported
    separately; an empty list means the doc passes.
    """
    checks: List[Optional[Failure]] = []

    if options.rule_doc_section_options and has_options(details.schema):
        checks.append(
            expect_section_header(details.name, contents, OPTIONS_SECTION_HEADINGS)
        )
        for named_option in get_all_named_options(details.schema):
            checks.append(expect_content(details.name, contents, named_option))

    for header in options.rule_doc_section_include:
        checks.append(expect_section_header(details.name, contents, [header]))
    for header in options.rule_doc_section_exclude:
        checks.append(expect_section_header(details.name, contents, [header], False))

    return [failure for failure in checks if failure is not None]


def diff_contents(path: str, old: str, new: str) -> Optional[Drift]:
    if old == new:
        return None
    diff = "".join(
        difflib.unified_diff(
            old.splitlines(keepends=True),
            new.splitlines(keepends=True),
            fromfile=f"{path} (current)",
            tofile=f"{path} (generated)",
        )
    )
    return Drift(path, diff)
