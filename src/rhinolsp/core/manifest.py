"""
Action manifest and catalog models.

A manifest describes one DSL action as the Rhino server publishes it:

    {
        "key": "SendKeys",
        "literal": "send keys",
        "aliases": ["TypeText"],
        "verb": "into",
        "source": "code",
        "entity": {
            "description": "Types text into an element.",
            "properties": {"argument": "...", "elementToActOn": "..."},
            "cliArguments": {"timeout": "..."}
        }
    }

Only the presence of the ``properties`` entries matters. They are turned
into fixed boolean capability flags once, when the payload is ingested.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_CAPITAL = re.compile(r"([A-Z])")

# entity.properties names -> capability flag fields
PROPERTY_FLAGS: dict[str, str] = {
    "argument": "argument",
    "elementToActOn": "on_element",
    "elementAttributeToActOn": "on_attribute",
    "regularExpression": "regex",
}


def literal_from_key(key: str) -> str:
    """Turn a PascalCase key into its DSL literal (``SendKeys`` -> ``send keys``)."""
    return _CAPITAL.sub(r" \1", key).strip().lower()


class ActionManifest(BaseModel):
    """
    Fixed-shape view of one action manifest.

    Examples:
        - ActionManifest(key="Click", on_element=True, verb="on")
        - ActionManifest.from_payload({"key": "SendKeys", "entity": {...}})
    """

    key: str
    literal: str = ""
    aliases: list[str] | None = None
    verb: str | None = None
    description: str = ""
    source: str = ""
    cli_arguments: dict[str, str] | None = None

    # capability flags
    argument: bool = False
    on_element: bool = False
    on_attribute: bool = False
    regex: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys are identifiers; surrounding whitespace is dropped."""
        v = v.strip()
        if not v:
            raise ValueError("Manifest key must not be empty")
        return v

    @model_validator(mode="before")
    @classmethod
    def default_literal(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("literal") and data.get("key"):
            data = {**data, "literal": literal_from_key(str(data["key"]).strip())}
        return data

    @property
    def cli(self) -> bool:
        """True when the action takes CLI-style ``--flag`` arguments."""
        return self.cli_arguments is not None

    @property
    def has_capabilities(self) -> bool:
        return self.cli or self.argument or self.on_element or self.on_attribute or self.regex

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ActionManifest:
        """Build a manifest from the raw server payload, computing capability flags."""
        entity = payload.get("entity") or {}
        properties = entity.get("properties") or {}

        flags = {field: name in properties for name, field in PROPERTY_FLAGS.items()}

        cli_arguments = entity.get("cliArguments")
        if cli_arguments is not None:
            cli_arguments = {str(k): str(v) if v is not None else "" for k, v in cli_arguments.items()}

        return cls(
            key=payload.get("key", ""),
            literal=payload.get("literal") or "",
            aliases=payload.get("aliases"),
            verb=payload.get("verb"),
            description=entity.get("description") or "",
            source=payload.get("source") or "",
            cli_arguments=cli_arguments,
            **flags,
        )


class Locator(BaseModel):
    """A locator strategy (``xpath``, ``css selector``...)."""

    literal: str
    verb: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        # the server publishes xpath as "x path"
        return "xpath" if self.literal == "x path" else self.literal


class ElementAttribute(BaseModel):
    """A special element attribute name (``text``, ``value``...)."""

    key: str

    model_config = ConfigDict(frozen=True)


class Annotation(BaseModel):
    """A section annotation such as ``[test-actions]``."""

    key: str
    literal: str = ""
    description: str = Field(default="")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def flatten_entity(cls, data: Any) -> Any:
        # server payloads keep the description under entity
        if isinstance(data, dict) and "entity" in data and "description" not in data:
            entity = data.get("entity") or {}
            data = {**data, "description": entity.get("description") or ""}
        return data


class AssertionMethod(Annotation):
    """A method usable inside ``verify that {...}`` (``text``, ``url``...)."""

    @model_validator(mode="before")
    @classmethod
    def default_literal(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("literal") and data.get("key"):
            data = {**data, "literal": literal_from_key(str(data["key"]).strip())}
        return data


class Operator(BaseModel):
    """A comparison operator for expected results (``match``, ``equal``...)."""

    literal: str
    description: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.literal.lower()


def index_manifests(manifests: Iterable[ActionManifest]) -> dict[str, ActionManifest]:
    """Map manifests by key. A later manifest with the same key replaces the earlier one."""
    index: dict[str, ActionManifest] = {}
    for manifest in manifests:
        index[manifest.key] = manifest
    return index
