"""Line-level helpers for outline documents.

An outline document is Markdown whose navigation hierarchy is encoded in
list lines: a heading line followed by a contiguous block of more deeply
indented entry lines. Headings are matched on whitespace-trimmed text.
"""

from typing import List, Optional


def split_lines(text: Optional[str]) -> List[str]:
    """Split a document into lines (no line terminators).

    Only ``\\n`` (optionally preceded by ``\\r``) ends a line. Other
    characters ``str.splitlines`` treats as breaks, such as U+2028 or form
    feed, stay inside their line so unrelated lines survive a merge.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def join_lines(lines: List[str]) -> str:
    """Join lines back into a document ending with a newline."""
    return "\n".join(lines) + "\n"


def find_line(lines: List[str], target: str, start: int = 0) -> Optional[int]:
    """Index of the first line equal to ``target`` once both are trimmed."""
    wanted = target.strip()
    for index in range(start, len(lines)):
        if lines[index].strip() == wanted:
            return index
    return None


def find_line_containing(lines: List[str], fragment: str) -> Optional[int]:
    """Index of the first line containing ``fragment``."""
    for index, line in enumerate(lines):
        if fragment in line:
            return index
    return None


def find_line_starting_with(lines: List[str], prefix: str) -> Optional[int]:
    """Index of the first line starting with ``prefix``."""
    for index, line in enumerate(lines):
        if line.startswith(prefix):
            return index
    return None


def entry_block_end(lines: List[str], heading_index: int, entry_prefix: str) -> int:
    """Index just past the entry lines directly below a heading.

    The block is the run of consecutive lines starting with
    ``entry_prefix``; it may be empty.
    """
    index = heading_index + 1
    while index < len(lines) and lines[index].startswith(entry_prefix):
        index += 1
    return index


def block_contains(lines: List[str], start: int, end: int, entry: str) -> bool:
    """Check whether ``lines[start:end]`` holds ``entry`` (trimmed match)."""
    wanted = entry.strip()
    return any(line.strip() == wanted for line in lines[start:end])


def insert_lines(lines: List[str], index: int, new_lines: List[str]) -> List[str]:
    """Return a copy of ``lines`` with ``new_lines`` inserted at ``index``."""
    return lines[:index] + list(new_lines) + lines[index:]
