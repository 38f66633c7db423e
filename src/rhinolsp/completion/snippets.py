"""Value objects produced by the completion engine."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Snippet:
    """A named, insertable template synthesized from one action manifest."""

    name: str
    template: str
    documentation: str = ""
    detail: str = ""


class CandidateKind(str, Enum):
    ACTION = "action"
    PARAMETER = "parameter"
    ANNOTATION = "annotation"
    MACRO = "macro"
    ASSERTION = "assertion"
    ASSERTION_METHOD = "assertion_method"
    TEST_PARAMETER = "test_parameter"


@dataclass(frozen=True)
class CompletionCandidate:
    """
    One entry of a completion list.

    ``insert_text`` is a snippet template when ``is_snippet`` is set,
    plain text otherwise.
    """

    label: str
    insert_text: str
    documentation: str = ""
    detail: str = ""
    kind: CandidateKind = CandidateKind.ACTION
    is_snippet: bool = False

    @classmethod
    def from_snippet(cls, snippet: Snippet, kind: CandidateKind = CandidateKind.ACTION) -> CompletionCandidate:
        return cls(
            label=snippet.name,
            insert_text=snippet.template,
            documentation=snippet.documentation,
            detail=snippet.detail,
            kind=kind,
            is_snippet=True,
        )


def dedupe_last_wins(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """
    Drop items sharing a key.

    The value of the last item with a key wins; it keeps the position where
    the key was first seen.
    """
    merged: dict[Hashable, T] = {}
    for item in items:
        merged[key(item)] = item
    return list(merged.values())
