"""
Assertion snippets for the expected-results section.

Expected results read like

    [1] verify that {text} of {//h1} by {xpath} match {Welcome}

Unlike actions they do not depend on a manifest: the same four shapes are
offered, filled with the catalog's locators, attributes and operators.
"""

from __future__ import annotations

from collections.abc import Sequence

from rhinolsp.completion import tokens
from rhinolsp.completion.snippets import Snippet

STEP_STOP = 1
METHOD_STOP = 2
LOCATOR_VALUE_STOP = 3
LOCATOR_STOP = 4
OPERATOR_STOP = 5

ASSERTION_DETAIL = "code"


def _braced(fragment: str) -> str:
    return "{" + fragment + "}"


def _subject() -> str:
    step = "[" + tokens.placeholder(STEP_STOP, "step number") + "]"
    return f"{step} verify that {_braced(tokens.placeholder(METHOD_STOP, 'method'))}"


def _element(locators: Sequence[str]) -> str:
    value = _braced(tokens.placeholder(LOCATOR_VALUE_STOP, "locator value"))
    strategy = _braced(tokens.choice_placeholder(LOCATOR_STOP, list(dict.fromkeys(locators)), "locator"))
    return f"of {value} by {strategy}"


def _operator(operators: Sequence[str]) -> str:
    return tokens.choice_placeholder(OPERATOR_STOP, sorted(set(operators)), "operator")


def _attribute(stop: int, attributes: Sequence[str]) -> str:
    return _braced(tokens.choice_placeholder(stop, sorted(set(attributes)), "attribute"))


def _expected(stop: int) -> str:
    return _braced(tokens.placeholder(stop, "expected result"))


def _regex(stop: int) -> str:
    return "with regex " + _braced(tokens.placeholder(stop, ".*"))


def assertion_snippets(
    locators: Sequence[str] = (),
    attributes: Sequence[str] = (),
    operators: Sequence[str] = (),
) -> list[Snippet]:
    """
    The four assertion shapes: element, element + attribute, element +
    regex, element + attribute + regex.

    Stops 1-5 are shared (step, method, locator value, strategy,
    operator); the optional parts and the expected result continue from 6
    in the order they appear.
    """
    subject = _subject()
    element = _element(locators)
    operator = _operator(operators)

    shapes = [
        ("assert w/ element", [element, operator, _expected(6)]),
        ("assert w/ element w/ attribute", [element, _attribute(6, attributes), operator, _expected(7)]),
        ("assert w/ element w/ regex", [element, _regex(6), operator, _expected(7)]),
        (
            "assert w/ element w/ attribute w/ regex",
            [element, _attribute(6, attributes), _regex(7), operator, _expected(8)],
        ),
    ]

    return [
        Snippet(
            name=name,
            template=" ".join([subject, *parts]),
            documentation="Verify a value read from an element.",
            detail=ASSERTION_DETAIL,
        )
        for name, parts in shapes
    ]
