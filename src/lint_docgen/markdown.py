import posixpath
import re
from typing import Iterator, List, Optional, Sequence

END_RULE_HEADER_MARKER = "<!-- end auto-generated rule header -->"
BEGIN_RULE_LIST_MARKER = "<!-- begin auto-generated rules list -->"
END_RULE_LIST_MARKER = "<!-- end auto-generated rules list -->"

_HEADING = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})")


def replace_or_create_header(
    lines: Sequence[str], new_header_lines: Sequence[str], marker: str
) -> List[str]:
    """
    Replace the header of a doc up to and including ``marker``.

    Without a marker the header is inserted at the top instead, and a leading
    ``# `` title line is dropped so it is not duplicated.
    """
    lines = list(lines)
    try:
        marker_index = lines.index(marker)
    except ValueError:
        marker_index = -1

    if marker_index == -1 and lines and lines[0].startswith("# "):
        del lines[0]

    return list(new_header_lines) + lines[marker_index + 1 :]


def heading_level(line: str) -> Optional[int]:
    match = _HEADING.match(line)
    return len(match.group(1)) if match else None


def prose_lines(contents: str) -> Iterator[str]:
    """
    Lines of the document outside fenced code blocks.

    A fence opened with ``` or ~~~ is closed by a fence of the same character
    that is at least as long. Fence lines themselves are skipped.
    """
    fence: Optional[str] = None
    for line in contents.split("\n"):
        line = line.rstrip("\r")
        match = _FENCE.match(line)
        if fence is None:
            if match:
                fence = match.group(1)
                continue
            yield line
        elif match and match.group(1)[0] == fence[0] and len(match.group(1)) >= len(fence):
            fence = None


def heading_titles(contents: str) -> List[str]:
    """Titles of every ATX heading in the document, in order, ignoring code blocks."""
    titles = []
    for line in prose_lines(contents):
        match = _HEADING.match(line)
        if match:
            titles.append(match.group(2))
    return titles


def has_heading(contents: str, title: str) -> bool:
    wanted = title.strip().lower()
    return any(t.lower() == wanted for t in heading_titles(contents))


def rule_doc_link(
    rule_name: str,
    from_dir: str,
    path_rule_doc: str,
    url_rule_doc: Optional[str] = None,
) -> str:
    """
    Link to a rule's doc, either the configured URL template or the doc path
    relative to ``from_dir`` (both relative to the plugin root).
    """
    if url_rule_doc:
        return url_rule_doc.replace("{name}", rule_name)
    target = path_rule_doc.replace("{name}", rule_name)
    return posixpath.relpath(target, from_dir or ".")
