"""
Text helpers for reading the cursor's surroundings.

Everything here works on plain strings: the document split into lines and a
(line, column) cursor. Nothing here knows about the editor.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from rhinolsp.completion.scope import OPENER, resolve_scope
from rhinolsp.core.manifest import ActionManifest, literal_from_key

# "--" right before the cursor, at line start or after whitespace
_FLAG_LOOKBEHIND = re.compile(r"(?:^|\s)--$")
# span text up to the cursor: opener, whitespace, anything, "--"
_FLAG_IN_SPAN = re.compile(r"\{\{\$\s+.*--$", re.DOTALL)
# "[1] verify that {" up to the method slot
_ASSERT_PREFIX = re.compile(r"^\[\d+\]\s+(verify that|assert)\s+\{")
_MACRO_KEY = re.compile(r"\{\{\$([^\s}]*)")


def split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    return [line.rstrip("\r") for line in lines]


def is_cli(line: str, column: int) -> bool:
    """True when the cursor is past a ``{{$`` that does not start the line (a CLI echo)."""
    column = max(column, 0)
    cli_start = line.find(OPENER)
    return cli_start > 0 and column > cli_start


def _annotation_pattern(keys: Iterable[str]) -> re.Pattern[str] | None:
    keys = [k for k in keys if k]
    if not keys:
        return None
    return re.compile("|".join(rf"^\[{re.escape(k)}\]" for k in keys))


def is_under_annotation(
    lines: Sequence[str],
    line_no: int,
    annotation: str,
    annotations: Iterable[str],
) -> bool:
    """
    Whether *line_no* belongs to the section opened by ``[annotation]``.

    Walks up from the cursor to the nearest line that opens any known
    section and checks it is the one asked for.
    """
    pattern = _annotation_pattern(annotations)
    if pattern is None or not lines:
        return False

    target = re.compile(rf"^\[{re.escape(annotation)}\]")
    for i in range(min(line_no, len(lines) - 1), -1, -1):
        if pattern.match(lines[i]):
            return target.match(lines[i]) is not None
    return False


def section_lines(lines: Sequence[str], annotation: str, annotations: Iterable[str]) -> list[str]:
    """The lines of the ``[annotation]`` section, header included, up to the next section."""
    others = _annotation_pattern(k for k in annotations if k != annotation)
    target = re.compile(rf"^\[{re.escape(annotation)}\]")

    start = next((i for i, line in enumerate(lines) if target.match(line)), None)
    if start is None:
        return []

    section = [lines[start]]
    for line in lines[start + 1 :]:
        if others is not None and others.match(line):
            break
        section.append(line)
    return section


@dataclass(frozen=True)
class MultilineContent:
    """
    The physical lines making up one logical action line.

    ``cursor`` is the cursor offset inside ``text``.
    """

    text: str
    cursor: int
    first_line: int


def multiline_content(lines: Sequence[str], line_no: int, column: int, marker: str = "`") -> MultilineContent:
    """
    Join the cursor line with the preceding lines it continues.

    A line continues onto the next one when it ends with whitespace and
    the continuation marker. Line breaks are preserved.
    """
    continuation = re.compile(rf"\s{re.escape(marker)}$")
    first = line_no
    while first > 0 and continuation.search(lines[first - 1]):
        first -= 1

    text = "\n".join(lines[first : line_no + 1])
    line = lines[line_no]
    cursor = len(text) - len(line) + min(column, len(line))
    return MultilineContent(text=text, cursor=cursor, first_line=first)


def plugins_pattern(manifests: Iterable[ActionManifest]) -> re.Pattern[str] | None:
    """
    Regex finding any known action literal (or alias) not preceded by a quote.

    Longer literals come first so ``send keys`` wins over ``send``.
    """
    literals: set[str] = set()
    for manifest in manifests:
        literals.add(manifest.literal)
        for alias in manifest.aliases or []:
            literals.add(literal_from_key(alias))

    literals.discard("")
    if not literals:
        return None

    ordered = sorted(literals, key=lambda s: (-len(s), s))
    return re.compile("|".join(rf"(?<!['])(?:{re.escape(lit)})" for lit in ordered))


def key_from_literal(literal: str) -> str:
    """``send keys`` -> ``SendKeys``."""
    words = [w for w in literal.lower().split(" ") if w]
    return "".join(w[0].upper() + w[1:] for w in words)


def contains_literal(text: str, literal: str) -> bool:
    return re.search(rf"(?<!['])(?:{re.escape(literal)})", text) is not None


def flag_in_span(content: MultilineContent) -> bool:
    """Cursor inside the argument span and right after a ``--`` flag prefix in it."""
    scope = resolve_scope(content.text, content.cursor)
    if not scope.enclosed or scope.start is None:
        return False
    return _FLAG_IN_SPAN.match(content.text[scope.start : content.cursor]) is not None


def flag_before_cursor(line: str, column: int) -> bool:
    """Raw lookbehind: the line ends with ``--`` right before the cursor."""
    return _FLAG_LOOKBEHIND.search(line[: max(column, 0)]) is not None


def is_assert(line: str, column: int) -> bool:
    """Cursor in the method slot of ``[n] verify that {...}``, with a closing brace after it."""
    column = max(column, 0)
    return _ASSERT_PREFIX.match(line[:column]) is not None and "}" in line[column:]


def macro_before_cursor(line: str, column: int) -> str | None:
    """
    Name of the macro whose ``{{$`` is nearest before the cursor.

    ``{{$getdata --key:`` gives ``getdata``. An opener followed by
    whitespace (an action's argument block) gives None.
    """
    start = line.rfind(OPENER, 0, max(column, 0))
    if start < 0:
        return None
    match = _MACRO_KEY.match(line, start)
    if match is None or not match.group(1):
        return None
    return match.group(1)
