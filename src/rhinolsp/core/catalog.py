"""
Catalog loading.

A catalog directory holds the JSON payloads the Rhino server publishes:

    manifests.json    action manifests
    macros.json       macro manifests (``{{$name --flag:value}}``)
    locators.json     locator strategies
    attributes.json   special element attributes
    operators.json    assertion operators
    assertions.json   assertion methods
    annotations.json  section annotations

Missing documents are treated as empty. Manifest records that fail
validation are skipped so one bad plugin does not hide the others.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from rhinolsp.core.errors import ErrorContext, MalformedManifestError, make_catalog_error
from rhinolsp.core.manifest import (
    ActionManifest,
    Annotation,
    AssertionMethod,
    ElementAttribute,
    Locator,
    Operator,
    index_manifests,
)

logger = logging.getLogger(__name__)

MANIFESTS_FILE = "manifests.json"
MACROS_FILE = "macros.json"
LOCATORS_FILE = "locators.json"
ATTRIBUTES_FILE = "attributes.json"
OPERATORS_FILE = "operators.json"
ASSERTIONS_FILE = "assertions.json"
ANNOTATIONS_FILE = "annotations.json"

T = TypeVar("T")


@dataclass
class Catalog:
    """Everything the completion engine reads. Populated once, then only read."""

    manifests: list[ActionManifest] = field(default_factory=list)
    locators: list[Locator] = field(default_factory=list)
    attributes: list[ElementAttribute] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)
    macros: list[ActionManifest] = field(default_factory=list)
    operators: list[Operator] = field(default_factory=list)
    assertions: list[AssertionMethod] = field(default_factory=list)

    @property
    def locator_names(self) -> list[str]:
        return [locator.name for locator in self.locators]

    @property
    def attribute_names(self) -> list[str]:
        return [attribute.key for attribute in self.attributes]

    @property
    def operator_names(self) -> list[str]:
        return [operator.name for operator in self.operators]


def _read_records(path: Path) -> list[Any]:
    if not path.exists():
        logger.debug(f"Catalog document not found: {path}")
        return []

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise make_catalog_error(f"Invalid JSON: {e.msg} (line {e.lineno})", path) from e

    if not isinstance(payload, list):
        raise make_catalog_error("Expected a JSON list of records", path)
    return payload


def _parse(path: Path, factory: Callable[[Any], T]) -> list[T]:
    items = []
    for record in _read_records(path):
        try:
            items.append(factory(record))
        except (ValidationError, TypeError, AttributeError) as e:
            raise make_catalog_error(f"Invalid record: {e}", path) from e
    return items


def parse_manifests(records: list[Any], source: Path | None = None) -> list[ActionManifest]:
    """Ingest manifest payloads, skipping malformed ones."""
    manifests = []
    for record in records:
        key = record.get("key") if isinstance(record, dict) else None
        try:
            if not isinstance(record, dict):
                raise MalformedManifestError(
                    "Manifest record must be an object", ErrorContext(file=source)
                )
            manifests.append(ActionManifest.from_payload(record))
        except (ValidationError, AttributeError, MalformedManifestError) as e:
            logger.warning(f"Skipping malformed manifest {key or '<unknown>'}: {e}")

    # same key twice: the last record wins
    return list(index_manifests(manifests).values())


def load_catalog(directory: Path) -> Catalog:
    """Load every catalog document found in *directory*."""
    if not directory.is_dir():
        logger.warning(f"Catalog directory not found: {directory}")
        return Catalog()

    manifests = parse_manifests(_read_records(directory / MANIFESTS_FILE), directory / MANIFESTS_FILE)
    macros = parse_manifests(_read_records(directory / MACROS_FILE), directory / MACROS_FILE)
    locators = _parse(directory / LOCATORS_FILE, Locator.model_validate)
    attributes = _parse(directory / ATTRIBUTES_FILE, _attribute_from_record)
    operators = _parse(directory / OPERATORS_FILE, _operator_from_record)
    assertions = _parse(directory / ASSERTIONS_FILE, AssertionMethod.model_validate)
    annotations = _parse(directory / ANNOTATIONS_FILE, Annotation.model_validate)

    logger.info(
        f"Loaded catalog from {directory}: {len(manifests)} actions, {len(macros)} macros, "
        f"{len(locators)} locators, {len(attributes)} attributes, {len(operators)} operators, "
        f"{len(assertions)} assertion methods, {len(annotations)} annotations"
    )
    return Catalog(
        manifests=manifests,
        locators=locators,
        attributes=attributes,
        annotations=annotations,
        macros=macros,
        operators=operators,
        assertions=assertions,
    )


def _attribute_from_record(record: Any) -> ElementAttribute:
    # attributes come either as {"key": ...} objects or as bare names
    if isinstance(record, str):
        return ElementAttribute(key=record)
    return ElementAttribute.model_validate(record)


def _operator_from_record(record: Any) -> Operator:
    if isinstance(record, str):
        return Operator(literal=record)
    if isinstance(record, dict) and "entity" in record and "description" not in record:
        record = {**record, "description": (record.get("entity") or {}).get("description") or ""}
    return Operator.model_validate(record)
