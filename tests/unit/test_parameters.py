"""Tests for parameters declared in a test's own tables."""

from __future__ import annotations

from rhinolsp.completion.context import split_lines
from rhinolsp.completion.parameters import data_parameters, plugin_parameters

ANNOTATIONS = ["test-actions", "test-data-provider", "test-parameters"]


def _labels(candidates) -> list[str]:
    return [c.label for c in candidates]


class TestDataParameters:
    def test_header_row_columns(self, document: str) -> None:
        lines = split_lines(document)
        assert _labels(data_parameters(lines, "test-data-provider", ANNOTATIONS)) == ["user", "password"]

    def test_no_separator(self) -> None:
        lines = ["[test-data-provider]", "| user | password |"]
        assert data_parameters(lines, "test-data-provider", ANNOTATIONS) == []

    def test_separator_without_header(self) -> None:
        lines = ["[test-data-provider]", "|------|", "| admin |"]
        assert data_parameters(lines, "test-data-provider", ANNOTATIONS) == []

    def test_section_ends_at_next_annotation(self) -> None:
        lines = ["[test-data-provider]", "[test-actions]", "| a |", "|---|"]
        assert data_parameters(lines, "test-data-provider", ANNOTATIONS) == []


class TestPluginParameters:
    def test_rows_after_separator(self, document: str) -> None:
        candidates = plugin_parameters(split_lines(document), "test-parameters", ANNOTATIONS)

        assert _labels(candidates) == ["timeout", "retries"]
        assert candidates[0].documentation == "Wait time in ms  \n\n**Default Value:** `5000`"
        assert candidates[1].documentation == "Attempts"

    def test_rows_need_description(self) -> None:
        lines = ["[test-parameters]", "|---|---|", "| lonely |", "| name | Who |"]
        assert _labels(plugin_parameters(lines, "test-parameters", ANNOTATIONS)) == ["name"]

    def test_without_separator_every_row_counts(self) -> None:
        lines = ["[test-parameters]", "| name | Who |", "| age | How old |"]
        assert _labels(plugin_parameters(lines, "test-parameters", ANNOTATIONS)) == ["name", "age"]

    def test_missing_section(self) -> None:
        assert plugin_parameters(["[test-actions]"], "test-parameters", ANNOTATIONS) == []
