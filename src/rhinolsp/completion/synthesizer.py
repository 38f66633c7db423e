"""
Snippet synthesis.

Every action manifest expands into a small family of snippets, one per
capability it declares, layered on top of each other:

    send keys w/ argument
    send keys w/ argument w/ element
    send keys w/ argument w/ element w/ attribute

CLI actions get a second family where the argument is a ``{{$ ...}}``
parameters block instead of a single value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import NamedTuple

from rhinolsp.completion import tokens
from rhinolsp.completion.snippets import Snippet, dedupe_last_wins
from rhinolsp.core.errors import MalformedManifestError
from rhinolsp.core.manifest import ActionManifest

logger = logging.getLogger(__name__)


class Iteration(NamedTuple):
    suffix: str
    token: str


ARGUMENT_ITERATION = Iteration("w/ argument", tokens.ARGUMENT_TOKEN)
ARGUMENTS_ITERATION = Iteration("w/ arguments", tokens.ARGUMENTS_TOKEN)


def iterations_for(manifest: ActionManifest) -> list[Iteration]:
    if manifest.cli:
        return [ARGUMENT_ITERATION, ARGUMENTS_ITERATION]
    return [ARGUMENT_ITERATION]


def _layers(
    manifest: ActionManifest,
    iteration: Iteration,
    locators: Sequence[str],
    attributes: Sequence[str],
) -> list[tuple[bool, str, Callable[[], str]]]:
    # (enabled, name suffix, token) in the order layers are stacked
    return [
        (manifest.cli or manifest.argument, iteration.suffix, lambda: iteration.token),
        (manifest.on_element, "w/ element", lambda: tokens.element_token(manifest, locators)),
        (manifest.on_attribute, "w/ attribute", lambda: tokens.attribute_token(attributes)),
        (manifest.regex, "w/ regex", tokens.regex_token),
    ]


def _synthesize_iteration(
    manifest: ActionManifest,
    action: str,
    iteration: Iteration,
    locators: Sequence[str],
    attributes: Sequence[str],
) -> list[Snippet]:
    names = [tokens.literal_from_key(manifest.key)]
    parts = [action]
    snippets: list[Snippet] = []

    for enabled, suffix, build in _layers(manifest, iteration, locators, attributes):
        if not enabled:
            continue
        try:
            token = build()
        except MalformedManifestError as e:
            logger.warning(f"Skipping '{suffix}' for {manifest.key}: {e.message}")
            continue

        names.append(suffix)
        parts.append(token)
        snippets.append(
            Snippet(
                name=" ".join(names),
                template=" ".join(parts),
                documentation=manifest.description,
                detail=manifest.source,
            )
        )

    return dedupe_last_wins(snippets, key=lambda s: s.name)


def synthesize_snippets(
    manifest: ActionManifest,
    locators: Sequence[str] = (),
    attributes: Sequence[str] = (),
) -> list[Snippet]:
    """
    Build all snippets for one manifest.

    Args:
        manifest: The action manifest
        locators: Locator strategy names, in display order
        attributes: Element attribute names

    Returns:
        Snippets deduplicated by name, later ones winning. Empty when the
        action declares no capability at all.
    """
    if not manifest.has_capabilities:
        return []

    action = tokens.action_token(manifest)
    snippets: list[Snippet] = []
    for iteration in iterations_for(manifest):
        snippets.extend(_synthesize_iteration(manifest, action, iteration, locators, attributes))

    return dedupe_last_wins(snippets, key=lambda s: s.name)


def synthesize_all(
    manifests: Iterable[ActionManifest],
    locators: Sequence[str] = (),
    attributes: Sequence[str] = (),
) -> list[Snippet]:
    """Build the snippets of every manifest as one batch deduplicated by name."""
    snippets: list[Snippet] = []
    for manifest in manifests:
        snippets.extend(synthesize_snippets(manifest, locators, attributes))
    return dedupe_last_wins(snippets, key=lambda s: s.name)
