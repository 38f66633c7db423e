"""
Token builders.

Each builder renders one capability of an action manifest into a fragment
of snippet syntax (``${1:text}`` free text, ``${1|a,b|}`` single choice).
Builders are pure: they see only manifest and catalog data.
"""

from __future__ import annotations

from collections.abc import Iterable

from rhinolsp.core.errors import ErrorContext, MalformedManifestError
from rhinolsp.core.manifest import ActionManifest, literal_from_key

# Tab stops. The action choice and the argument both use stop 1, so editors
# link them: with aliases, the chosen alias is mirrored into the argument slot.
ACTION_STOP = 1
ARGUMENT_STOP = 1
LOCATOR_VALUE_STOP = 5
LOCATOR_STOP = 6
ATTRIBUTE_STOP = 7
REGEX_STOP = 8

ARGUMENT_TOKEN = "{${1:argument value}}"
ARGUMENTS_TOKEN = "{{$ ${1:parameters values}}}"

__all__ = [
    "ARGUMENTS_TOKEN",
    "ARGUMENT_TOKEN",
    "action_token",
    "attribute_token",
    "choice_placeholder",
    "element_token",
    "literal_from_key",
    "placeholder",
    "regex_token",
]


def placeholder(stop: int, default: str) -> str:
    return f"${{{stop}:{default}}}"


def choice_placeholder(stop: int, choices: Iterable[str], fallback: str) -> str:
    """Single-choice placeholder; an empty choice list renders free text instead."""
    choices = [c for c in choices if c]
    if not choices:
        return placeholder(stop, fallback)
    return f"${{{stop}|{','.join(choices)}|}}"


def action_token(manifest: ActionManifest) -> str:
    """
    The action itself.

    The literal is always rebuilt from the key; a payload literal only
    serves to find the action on a line. Without aliases this is the plain
    literal. With aliases it is a choice between the canonical literal
    (always first) and the sorted alias literals.
    """
    literal = literal_from_key(manifest.key)
    if not manifest.aliases:
        return literal

    aliases = sorted({literal_from_key(alias) for alias in manifest.aliases if alias} - {literal})
    if not aliases:
        return literal
    return "{" + choice_placeholder(ACTION_STOP, [literal, *aliases], literal) + "}"


def element_token(manifest: ActionManifest, locators: Iterable[str]) -> str:
    """``<verb> {locator value} by {locator strategy}``, strategies in catalog order."""
    if not manifest.verb:
        raise MalformedManifestError(
            "Element targeting requires a verb",
            ErrorContext(key=manifest.key),
        )

    strategies = list(dict.fromkeys(locators))
    value = "{" + placeholder(LOCATOR_VALUE_STOP, "locator value") + "}"
    strategy = "{" + choice_placeholder(LOCATOR_STOP, strategies, "locator") + "}"
    return f"{manifest.verb} {value} by {strategy}"


def attribute_token(attributes: Iterable[str]) -> str:
    """``from {attribute}`` with attribute names sorted."""
    names = sorted(set(attributes))
    return "from {" + choice_placeholder(ATTRIBUTE_STOP, names, "attribute") + "}"


def regex_token() -> str:
    return "with regex {" + placeholder(REGEX_STOP, ".*") + "}"
