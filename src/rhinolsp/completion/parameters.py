"""
Test parameters declared in the test file itself.

Two sections hold them, both as markdown-style tables:

    [test-data-provider]
    | user  | password |
    |-------|----------|
    | admin | secret   |

    [test-parameters]
    | Parameter | Description     | Default |
    |-----------|-----------------|---------|
    | timeout   | Wait time in ms | 5000    |

Data provider columns and test parameter rows are offered after ``@``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from rhinolsp.completion.context import section_lines
from rhinolsp.completion.snippets import CandidateKind, CompletionCandidate

_SEPARATOR = re.compile(r"(\|-+\|?)+\|")

DATA_DETAIL = "dynamic parameter"
PLUGIN_DETAIL = "plugin parameter"


def _cells(row: str) -> list[str]:
    return [cell.strip() for cell in row.split("|") if cell.strip()]


def _table_rows(lines: Sequence[str], annotation: str, annotations: Iterable[str]) -> list[str]:
    # non-blank rows of the section, without the [annotation] line
    section = section_lines(lines, annotation, annotations)
    return [line.strip() for line in section[1:] if line.strip()]


def _separator_index(rows: Sequence[str]) -> int:
    return next((i for i, row in enumerate(rows) if _SEPARATOR.search(row)), -1)


def data_parameters(lines: Sequence[str], annotation: str, annotations: Iterable[str]) -> list[CompletionCandidate]:
    """Column names from the header row of the data provider table."""
    rows = _table_rows(lines, annotation, annotations)
    separator = _separator_index(rows)
    if separator < 1:
        return []

    return [
        CompletionCandidate(
            label=name,
            insert_text=name,
            detail=DATA_DETAIL,
            kind=CandidateKind.TEST_PARAMETER,
        )
        for name in _cells(rows[separator - 1])
    ]


def plugin_parameters(lines: Sequence[str], annotation: str, annotations: Iterable[str]) -> list[CompletionCandidate]:
    """
    One candidate per row of the parameters table.

    Rows need a name and a description; a third cell is the default value.
    Without a separator row every row is read.
    """
    rows = _table_rows(lines, annotation, annotations)
    candidates = []
    for row in rows[_separator_index(rows) + 1 :]:
        cells = _cells(row)
        if len(cells) < 2:
            continue

        documentation = cells[1]
        if len(cells) > 2:
            documentation = f"{cells[1]}  \n\n**Default Value:** `{cells[2]}`"

        candidates.append(
            CompletionCandidate(
                label=cells[0],
                insert_text=cells[0],
                documentation=documentation,
                detail=PLUGIN_DETAIL,
                kind=CandidateKind.TEST_PARAMETER,
            )
        )
    return candidates
