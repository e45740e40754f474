"""Build-tag block processing

A block opens on a line ``<comment> {<tag>-`` and closes on a line
``<comment> -<tag>}``. Processing for a build tag keeps the body of every
block carrying that tag, drops every other block entirely, and leaves text
outside blocks untouched.
"""

import re
from typing import List, Optional

from ..api.exceptions import ConfigurationError
from ..constants import BLOCK_START_RE, BLOCK_END_RE, TAG_NAME_PATTERN, COMMENT_TOKEN_PATTERN


def _split_lines(content: str) -> List[str]:
    """Split on ``\\n`` only, keeping line endings"""
    lines = content.split("\n")
    result = [line + "\n" for line in lines[:-1]]
    if lines[-1]:
        result.append(lines[-1])
    return result


def _match(regex: re.Pattern, line: str) -> Optional[str]:
    """Return the tag of a marker line, or None"""
    match = regex.match(line.rstrip("\r\n"))
    return match.group("tag") if match else None


def start_marker_pattern(tag: str) -> re.Pattern:
    """Build a multiline regex matching start markers of one tag"""
    return re.compile(
        rf"^[ \t]*{COMMENT_TOKEN_PATTERN}[ \t]*\{{{re.escape(tag)}-[ \t]*\r?$",
        re.MULTILINE,
    )


def has_start_marker(content: Optional[str], tag: str) -> bool:
    """Check if content opens at least one block for the tag"""
    if not content:
        return False
    return start_marker_pattern(tag).search(content) is not None


def process(content: str, tag: str) -> str:
    """
    Filter content for a build tag

    Scans line by line with two states, outside a block and inside a block
    of some tag. When a block closes, its body is emitted if the block's tag
    is the requested one and discarded otherwise; marker lines are never
    emitted. A block left open at the end of input is emitted verbatim.
    Nested blocks are not supported: inside a block every line other than
    the matching end marker is body.

    Args:
        content: Text to process
        tag: Build tag whose blocks survive

    Returns:
        Processed text
    """
    output = []
    open_tag = None
    pending = []  # Start marker + body of the open block

    for line in _split_lines(content):
        if open_tag is None:
            start_tag = _match(BLOCK_START_RE, line)
            if start_tag is None:
                output.append(line)
            else:
                open_tag = start_tag
                pending = [line]
            continue

        if _match(BLOCK_END_RE, line) == open_tag:
            if open_tag == tag:
                output.extend(pending[1:])
            open_tag = None
            pending = []
        else:
            pending.append(line)

    # Unterminated block
    output.extend(pending)

    return "".join(output)


class TagProcessor:
    """Stateless facade bound to one build tag"""

    def __init__(self, build_tag: str):
        if not re.fullmatch(TAG_NAME_PATTERN, build_tag):
            raise ConfigurationError(f"Invalid build tag: {build_tag!r}")
        self.build_tag = build_tag

    def applies_to(self, content: Optional[str]) -> bool:
        """Check if content needs processing for this tag"""
        return has_start_marker(content, self.build_tag)

    def process(self, content: str) -> str:
        """Filter content for this tag"""
        return process(content, self.build_tag)
