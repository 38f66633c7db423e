"""Tests for expected-results assertion snippets."""

from __future__ import annotations

from rhinolsp.completion.assertions import assertion_snippets

LOCATORS = ["xpath", "css selector", "id"]
ATTRIBUTES = ["value", "text", "href"]
OPERATORS = ["match", "equal"]


class TestAssertionSnippets:
    def test_four_shapes(self) -> None:
        names = [s.name for s in assertion_snippets(LOCATORS, ATTRIBUTES, OPERATORS)]
        assert names == [
            "assert w/ element",
            "assert w/ element w/ attribute",
            "assert w/ element w/ regex",
            "assert w/ element w/ attribute w/ regex",
        ]

    def test_element_shape(self) -> None:
        snippet = assertion_snippets(LOCATORS, ATTRIBUTES, OPERATORS)[0]
        assert snippet.template == (
            "[${1:step number}] verify that {${2:method}} "
            "of {${3:locator value}} by {${4|xpath,css selector,id|}} "
            "${5|equal,match|} {${6:expected result}}"
        )
        assert snippet.detail == "code"

    def test_full_shape_numbers_trailing_stops(self) -> None:
        snippet = assertion_snippets(LOCATORS, ATTRIBUTES, OPERATORS)[3]
        assert snippet.template.endswith(
            "{${6|href,text,value|}} with regex {${7:.*}} ${5|equal,match|} {${8:expected result}}"
        )

    def test_regex_shape(self) -> None:
        snippet = assertion_snippets(LOCATORS, ATTRIBUTES, OPERATORS)[2]
        assert "with regex {${6:.*}} ${5|equal,match|} {${7:expected result}}" in snippet.template

    def test_empty_catalog_renders_free_text(self) -> None:
        snippet = assertion_snippets()[1]
        assert "by {${4:locator}}" in snippet.template
        assert "{${6:attribute}}" in snippet.template
        assert "${5:operator}" in snippet.template
