"""
Completion dispatcher.

Decides what to offer at a cursor position:

- ``ACTION``: snippets for every known action, inside ``[test-actions]``
- ``ASSERTION``: assertion snippets, inside ``[test-expected-results]``
- ``ASSERTION_METHOD``: assertion methods, in ``[1] verify that {...}``
- ``PARAMETER``: CLI flags of the action being typed, after ``--``
- ``MACRO``: macro names, after ``{{$``
- ``MACRO_PARAMETER``: CLI flags of the macro being typed, after ``--``
- ``ANNOTATION``: section names, after a ``[`` at the start of a line
- ``TEST_PARAMETER``: parameters declared in the test's own tables, after ``@``
- ``NO_SUGGESTION``: nothing

Queries never raise. Any failure is logged and yields an empty list.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from rhinolsp.completion import context, parameters
from rhinolsp.completion.assertions import assertion_snippets
from rhinolsp.completion.snippets import CandidateKind, CompletionCandidate, dedupe_last_wins
from rhinolsp.completion.synthesizer import synthesize_all
from rhinolsp.core.catalog import Catalog
from rhinolsp.core.config import CompletionSettings
from rhinolsp.core.errors import ErrorContext, UnresolvedContextError
from rhinolsp.core.manifest import ActionManifest, Annotation, index_manifests

logger = logging.getLogger(__name__)


class RequestKind(str, Enum):
    """Which request path asked for completions."""

    ACTION = "action"
    PARAMETER = "parameter"
    ANNOTATION = "annotation"
    MACRO = "macro"
    ASSERTION_METHOD = "assertion_method"
    TEST_PARAMETER = "test_parameter"


class CompletionMode(str, Enum):
    ACTION = "action"
    ASSERTION = "assertion"
    ASSERTION_METHOD = "assertion_method"
    PARAMETER = "parameter"
    MACRO = "macro"
    MACRO_PARAMETER = "macro_parameter"
    ANNOTATION = "annotation"
    TEST_PARAMETER = "test_parameter"
    NO_SUGGESTION = "no_suggestion"


class CompletionDispatcher:
    """
    Owns the catalog it completes from.

    The catalog is read, never written, by queries; swap it with
    :meth:`update` after a refresh.
    """

    def __init__(self, catalog: Catalog | None = None, settings: CompletionSettings | None = None):
        self.settings = settings or CompletionSettings()
        self.update(catalog or Catalog())

    def update(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self._index = index_manifests(catalog.manifests)
        self._macros = {m.key.lower(): m for m in catalog.macros}
        self._pattern = context.plugins_pattern(self._index.values())

    @property
    def manifests(self) -> list[ActionManifest]:
        return list(self._index.values())

    @property
    def annotation_keys(self) -> list[str]:
        return [a.key for a in self.catalog.annotations]

    # ------------------------------------------------------------------
    # Mode selection
    # ------------------------------------------------------------------

    def select_mode(
        self, text: str, line: int, column: int, kind: RequestKind
    ) -> tuple[CompletionMode, ActionManifest | None]:
        """
        Pick the completion mode.

        The second item is the action (or macro) manifest whose flags are
        offered in the parameter modes, None otherwise.
        """
        lines = context.split_lines(text)
        if not 0 <= line < len(lines):
            return CompletionMode.NO_SUGGESTION, None
        current = lines[line]

        if kind is RequestKind.ANNOTATION:
            if self._is_annotation_start(current, column):
                return CompletionMode.ANNOTATION, None
            return CompletionMode.NO_SUGGESTION, None

        if kind is RequestKind.MACRO:
            if context.OPENER in current[: max(column, 0)]:
                return CompletionMode.MACRO, None
            return CompletionMode.NO_SUGGESTION, None

        if kind is RequestKind.ASSERTION_METHOD:
            if context.is_assert(current, column):
                return CompletionMode.ASSERTION_METHOD, None
            return CompletionMode.NO_SUGGESTION, None

        if kind is RequestKind.TEST_PARAMETER:
            return CompletionMode.TEST_PARAMETER, None

        if kind is RequestKind.ACTION:
            return self._select_section_mode(lines, line, column), None

        macro = self._macro_at(current, column)
        if macro is not None:
            return CompletionMode.MACRO_PARAMETER, macro

        try:
            manifest = self.resolve_action(lines, line, column)
        except UnresolvedContextError as e:
            logger.debug(f"No action at cursor: {e}")
            return CompletionMode.NO_SUGGESTION, None
        return CompletionMode.PARAMETER, manifest

    def _select_section_mode(self, lines: Sequence[str], line: int, column: int) -> CompletionMode:
        if context.is_cli(lines[line], column):
            return CompletionMode.NO_SUGGESTION

        annotations = self.annotation_keys
        if context.is_under_annotation(lines, line, self.settings.actions_annotation, annotations):
            return CompletionMode.ACTION
        if context.is_under_annotation(lines, line, self.settings.assertions_annotation, annotations):
            if context.is_assert(lines[line], column):
                return CompletionMode.NO_SUGGESTION
            return CompletionMode.ASSERTION
        return CompletionMode.NO_SUGGESTION

    @staticmethod
    def _is_annotation_start(line: str, column: int) -> bool:
        return column == 1 and line[:1] == "["

    def _macro_at(self, line: str, column: int) -> ActionManifest | None:
        # "{{$name ... --" with a known macro name
        if not line[: max(column, 0)].endswith("--"):
            return None
        name = context.macro_before_cursor(line, column)
        if name is None:
            return None
        return self._macros.get(name.lower())

    def resolve_action(self, lines: Sequence[str], line: int, column: int) -> ActionManifest:
        """
        Find the manifest of the action written on the cursor's logical line.

        The first known literal in the line is rebuilt into a key
        (``send keys`` -> ``SendKeys``) and looked up exactly.
        """
        content = context.multiline_content(lines, line, column, self.settings.continuation_marker)
        where = ErrorContext(line=line + 1)

        if self._pattern is None:
            raise UnresolvedContextError("No actions in catalog", where)

        match = self._pattern.search(content.text)
        if match is None:
            raise UnresolvedContextError("No action literal found", where)

        key = context.key_from_literal(match.group(0))
        manifest = self._index.get(key)
        if manifest is None:
            raise UnresolvedContextError(f"Unknown action '{key}'", ErrorContext(line=line + 1, key=key))
        return manifest

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def complete(self, text: str, line: int, column: int, kind: RequestKind) -> list[CompletionCandidate]:
        """Completion candidates at (line, column), deduplicated by label."""
        try:
            mode, manifest = self.select_mode(text, line, column, kind)

            if mode is CompletionMode.ACTION:
                candidates = self.action_candidates()
            elif mode is CompletionMode.ASSERTION:
                candidates = self.assertion_candidates()
            elif mode is CompletionMode.ASSERTION_METHOD:
                candidates = self.assertion_method_candidates()
            elif mode is CompletionMode.PARAMETER and manifest is not None:
                candidates = self.parameter_candidates(manifest, text, line, column)
            elif mode is CompletionMode.MACRO:
                candidates = self.macro_candidates()
            elif mode is CompletionMode.MACRO_PARAMETER and manifest is not None:
                candidates = self.flag_candidates(manifest, detail=manifest.key)
            elif mode is CompletionMode.ANNOTATION:
                candidates = self.annotation_candidates()
            elif mode is CompletionMode.TEST_PARAMETER:
                candidates = self.test_parameter_candidates(text)
            else:
                candidates = []

            return dedupe_last_wins(candidates, key=lambda c: c.label)
        except Exception as e:
            logger.error(f"Completion failed at {line + 1}:{column + 1}: {e}", exc_info=True)
            return []

    def action_candidates(self) -> list[CompletionCandidate]:
        snippets = synthesize_all(self.manifests, self.catalog.locator_names, self.catalog.attribute_names)
        return [CompletionCandidate.from_snippet(s) for s in snippets]

    def assertion_candidates(self) -> list[CompletionCandidate]:
        snippets = assertion_snippets(
            self.catalog.locator_names, self.catalog.attribute_names, self.catalog.operator_names
        )
        return [CompletionCandidate.from_snippet(s, CandidateKind.ASSERTION) for s in snippets]

    def assertion_method_candidates(self) -> list[CompletionCandidate]:
        return [
            CompletionCandidate(
                label=method.literal,
                insert_text=method.literal,
                documentation=method.description,
                detail="code",
                kind=CandidateKind.ASSERTION_METHOD,
            )
            for method in self.catalog.assertions
        ]

    def parameter_candidates(
        self, manifest: ActionManifest, text: str, line: int, column: int
    ) -> list[CompletionCandidate]:
        """
        CLI flags of *manifest* that may be typed at the cursor.

        A flag is offered when the action literal appears on the logical
        line and either the cursor follows ``--`` inside the action's
        ``{{$ ... }}`` span, or the raw line has `` --`` right before the
        cursor. The second path also fires outside any span, including an
        unterminated one.
        """
        if not manifest.cli_arguments:
            return []

        lines = context.split_lines(text)
        content = context.multiline_content(lines, line, column, self.settings.continuation_marker)

        if not context.contains_literal(content.text, manifest.literal):
            return []

        in_span = context.flag_in_span(content)
        raw = context.flag_before_cursor(lines[line], column)
        if not (in_span or raw):
            return []

        return self.flag_candidates(manifest, detail=manifest.literal)

    @staticmethod
    def flag_candidates(manifest: ActionManifest, detail: str) -> list[CompletionCandidate]:
        return [
            CompletionCandidate(
                label=name,
                insert_text=name,
                documentation=description,
                detail=detail,
                kind=CandidateKind.PARAMETER,
            )
            for name, description in (manifest.cli_arguments or {}).items()
        ]

    def macro_candidates(self) -> list[CompletionCandidate]:
        macros = sorted(self.catalog.macros, key=lambda m: m.key)
        return [
            CompletionCandidate(
                label=macro.key,
                insert_text=macro.key,
                documentation=macro.description,
                detail="code",
                kind=CandidateKind.MACRO,
            )
            for macro in macros
        ]

    def annotation_candidates(self) -> list[CompletionCandidate]:
        return [self._annotation_candidate(a) for a in self.catalog.annotations]

    @staticmethod
    def _annotation_candidate(annotation: Annotation) -> CompletionCandidate:
        return CompletionCandidate(
            label=annotation.key,
            insert_text=annotation.key,
            documentation=annotation.description,
            detail=annotation.literal,
            kind=CandidateKind.ANNOTATION,
        )

    def test_parameter_candidates(self, text: str) -> list[CompletionCandidate]:
        """Data provider columns first, then rows of the parameters table."""
        lines = context.split_lines(text)
        keys = self.annotation_keys
        return [
            *parameters.data_parameters(lines, self.settings.data_annotation, keys),
            *parameters.plugin_parameters(lines, self.settings.parameters_annotation, keys),
        ]

    def section(self, text: str, annotation: str) -> list[str]:
        """Lines of the ``[annotation]`` section of *text*."""
        return context.section_lines(context.split_lines(text), annotation, self.annotation_keys)
