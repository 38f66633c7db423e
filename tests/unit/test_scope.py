"""Tests for {{$ ... }} argument scope resolution."""

from __future__ import annotations

from rhinolsp.completion.scope import is_action_arguments, resolve_scope

NESTED = "{{$ a {{$ b}} c}}"


class TestResolveScope:
    """resolve_scope finds the first closed outer span."""

    def test_outer_content_enclosed(self) -> None:
        assert is_action_arguments(NESTED, NESTED.index("a"))
        assert is_action_arguments(NESTED, NESTED.index("c"))

    def test_inner_content_enclosed_by_outer(self) -> None:
        scope = resolve_scope(NESTED, NESTED.index("b"))
        assert scope.enclosed
        assert scope.nested

    def test_outer_content_not_nested(self) -> None:
        assert not resolve_scope(NESTED, NESTED.index("a")).nested

    def test_span_bounds(self) -> None:
        scope = resolve_scope(NESTED, 4)
        assert scope.start == 0
        assert scope.end == len(NESTED) - 2
        assert len(scope.inner) == 1
        assert scope.inner[0].start == NESTED.index("{{$", 1)

    def test_positions_past_outer_close_not_enclosed(self) -> None:
        text = NESTED + " tail"
        for position in range(len(NESTED) - 1, len(text) + 1):
            assert not is_action_arguments(text, position), position

    def test_opener_itself_not_enclosed(self) -> None:
        assert not is_action_arguments(NESTED, 0)
        assert not is_action_arguments(NESTED, 2)
        assert is_action_arguments(NESTED, 3)

    def test_unterminated_never_enclosed(self) -> None:
        text = "{{$ a"
        for position in range(len(text) + 1):
            assert not is_action_arguments(text, position)

    def test_unterminated_inner_never_enclosed(self) -> None:
        text = "{{$ a {{$ b}} c"
        for position in range(len(text) + 1):
            assert not is_action_arguments(text, position)

    def test_only_first_outer_span_counts(self) -> None:
        text = "{{$ a}} and {{$ b}}"
        assert is_action_arguments(text, text.index("a"))
        assert not is_action_arguments(text, text.index("b"))

    def test_text_before_span(self) -> None:
        text = "register parameter {{$ --name:x}}"
        assert not is_action_arguments(text, 5)
        assert is_action_arguments(text, text.index("--"))

    def test_stray_closer_ignored(self) -> None:
        text = "}} {{$ a}}"
        assert is_action_arguments(text, text.index("a"))

    def test_single_braces_are_not_spans(self) -> None:
        text = "send keys {hello} into {{x}}"
        assert not is_action_arguments(text, text.index("hello"))
        assert not is_action_arguments(text, text.index("x"))

    def test_empty_text(self) -> None:
        assert not is_action_arguments("", 0)

    def test_close_index_not_enclosed(self) -> None:
        text = "{{$ --}}"
        assert is_action_arguments(text, text.index("}}") - 1)
        assert not is_action_arguments(text, text.index("}}"))

    def test_nested_close_index_not_nested(self) -> None:
        inner_close = NESTED.index("}}")
        scope = resolve_scope(NESTED, inner_close)
        assert scope.enclosed
        assert not scope.nested
