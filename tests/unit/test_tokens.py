"""Tests for snippet token builders."""

from __future__ import annotations

import pytest

from rhinolsp.completion import tokens
from rhinolsp.core.errors import MalformedManifestError
from rhinolsp.core.manifest import ActionManifest


class TestLiteralFromKey:
    """literal_from_key splits on capitals and lower-cases."""

    def test_pascal_case(self) -> None:
        assert tokens.literal_from_key("SendKeys") == "send keys"

    def test_single_word(self) -> None:
        assert tokens.literal_from_key("Click") == "click"

    def test_three_words(self) -> None:
        assert tokens.literal_from_key("GoToUrl") == "go to url"


class TestActionToken:
    """action_token renders the literal or an alias choice."""

    def test_no_aliases_is_literal(self) -> None:
        manifest = ActionManifest(key="SendKeys")
        assert tokens.action_token(manifest) == "send keys"

    def test_empty_aliases_is_literal(self) -> None:
        manifest = ActionManifest(key="SendKeys", aliases=[])
        assert tokens.action_token(manifest) == "send keys"

    def test_canonical_first_then_sorted_aliases(self) -> None:
        manifest = ActionManifest(key="Click", aliases=["Tap", "Press", "DoubleTap"])
        assert tokens.action_token(manifest) == "{${1|click,double tap,press,tap|}}"

    def test_alias_equal_to_literal_is_dropped(self) -> None:
        manifest = ActionManifest(key="Click", aliases=["Click", "Tap", "Tap"])
        assert tokens.action_token(manifest) == "{${1|click,tap|}}"

    def test_only_self_alias_renders_literal(self) -> None:
        manifest = ActionManifest(key="Click", aliases=["Click"])
        assert tokens.action_token(manifest) == "click"


class TestElementToken:
    """element_token renders verb, locator value and strategies."""

    def test_locators_keep_catalog_order(self) -> None:
        manifest = ActionManifest(key="Click", verb="on", on_element=True)
        token = tokens.element_token(manifest, ["xpath", "css selector", "id"])
        assert token == "on {${5:locator value}} by {${6|xpath,css selector,id|}}"

    def test_duplicate_locators_dropped(self) -> None:
        manifest = ActionManifest(key="Click", verb="on", on_element=True)
        token = tokens.element_token(manifest, ["id", "xpath", "id"])
        assert "${6|id,xpath|}" in token

    def test_no_locators_renders_free_text(self) -> None:
        manifest = ActionManifest(key="Click", verb="on", on_element=True)
        assert tokens.element_token(manifest, []) == "on {${5:locator value}} by {${6:locator}}"

    def test_missing_verb_is_malformed(self) -> None:
        manifest = ActionManifest(key="Click", on_element=True)
        with pytest.raises(MalformedManifestError):
            tokens.element_token(manifest, ["xpath"])


class TestAttributeAndRegexTokens:
    def test_attributes_sorted_and_unique(self) -> None:
        assert tokens.attribute_token(["value", "href", "text", "href"]) == "from {${7|href,text,value|}}"

    def test_no_attributes_renders_free_text(self) -> None:
        assert tokens.attribute_token([]) == "from {${7:attribute}}"

    def test_regex(self) -> None:
        assert tokens.regex_token() == "with regex {${8:.*}}"

    def test_argument_tokens(self) -> None:
        assert tokens.ARGUMENT_TOKEN == "{${1:argument value}}"
        assert tokens.ARGUMENTS_TOKEN == "{{$ ${1:parameters values}}}"


class TestSharedFirstStop:
    def test_alias_choice_and_argument_share_stop_one(self) -> None:
        manifest = ActionManifest(key="Click", aliases=["Tap"], argument=True)
        template = f"{tokens.action_token(manifest)} {tokens.ARGUMENT_TOKEN}"

        assert template == "{${1|click,tap|}} {${1:argument value}}"
        assert tokens.ACTION_STOP == tokens.ARGUMENT_STOP == 1

    def test_action_token_ignores_payload_literal(self) -> None:
        manifest = ActionManifest(key="Click", literal="press on", aliases=["Tap"])
        assert tokens.action_token(manifest) == "{${1|click,tap|}}"
