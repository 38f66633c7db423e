"""
Argument scope resolution.

CLI-style actions carry their parameters inside ``{{$ ... }}`` blocks that
may nest:

    register parameter {{$ --name:user --value:{{$ get data --key:a}} }}

:func:`resolve_scope` tells whether an offset lies inside the first outer
block that is fully closed. An unterminated block never encloses anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field

OPENER = "{{$"
CLOSER = "}}"


@dataclass
class Span:
    start: int
    end: int | None = None

    def contains(self, position: int) -> bool:
        if self.end is None:
            return False
        return self.start + len(OPENER) <= position < self.end


@dataclass(frozen=True)
class ArgumentScope:
    """
    Result of a scope scan.

    Attributes:
        enclosed: Position is inside the first fully closed outer span
        start: Index of the outer opener, when a closed outer span was found
        end: Index of the outer closer
        inner: Nested spans seen inside the outer one
        position: The offset that was resolved
    """

    enclosed: bool
    start: int | None = None
    end: int | None = None
    inner: tuple[Span, ...] = field(default=())
    position: int = -1

    @property
    def nested(self) -> bool:
        """The position also sits inside one of the closed inner spans."""
        if not self.enclosed:
            return False
        return any(span.contains(self.position) for span in self.inner)


def resolve_scope(text: str, position: int) -> ArgumentScope:
    """
    Scan *text* for the first outer ``{{$ ... }}`` span and locate *position*.

    The scan keeps a depth counter and one span per nesting level. It stops
    at the first closer that brings the depth back to zero.
    """
    depth = 0
    outer_start = -1
    stack: dict[int, Span] = {}
    inner: list[Span] = []

    i = 0
    while i < len(text) - 1:
        if text.startswith(OPENER, i):
            if depth == 0:
                outer_start = i
                inner = []
                stack = {}
            else:
                span = Span(start=i)
                stack[depth] = span
                inner.append(span)
            depth += 1
            i += len(OPENER)
            continue

        if text.startswith(CLOSER, i):
            if depth == 0:
                # stray closer outside any span
                i += len(CLOSER)
                continue

            depth -= 1
            if depth == 0:
                outer = Span(start=outer_start, end=i)
                return ArgumentScope(
                    enclosed=outer.contains(position),
                    start=outer_start,
                    end=i,
                    inner=tuple(inner),
                    position=position,
                )

            stack[depth].end = i
            i += len(CLOSER)
            continue

        i += 1

    return ArgumentScope(enclosed=False, position=position)


def is_action_arguments(text: str, position: int) -> bool:
    """True when *position* is inside the first closed ``{{$ ... }}`` span of *text*."""
    return resolve_scope(text, position).enclosed
