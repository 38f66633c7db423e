"""Shared pytest fixtures for rhinolsp tests."""

import json
from pathlib import Path

import pytest

from rhinolsp.core.catalog import Catalog
from rhinolsp.core.manifest import ActionManifest, Annotation, AssertionMethod, ElementAttribute, Locator, Operator

MANIFEST_PAYLOADS = [
    {
        "key": "SendKeys",
        "literal": "send keys",
        "verb": "into",
        "source": "code",
        "entity": {
            "description": "Types text into an element.",
            "properties": {"argument": "text to type", "elementToActOn": "target"},
        },
    },
    {
        "key": "Click",
        "literal": "click",
        "aliases": ["Press", "Tap"],
        "verb": "on",
        "source": "code",
        "entity": {
            "description": "Clicks an element.",
            "properties": {"elementToActOn": "target"},
        },
    },
    {
        "key": "RegisterParameter",
        "literal": "register parameter",
        "verb": "from",
        "source": "code",
        "entity": {
            "description": "Registers a parameter.",
            "properties": {"argument": "", "elementToActOn": "", "elementAttributeToActOn": "", "regularExpression": ""},
            "cliArguments": {"name": "Parameter name.", "value": "Parameter value."},
        },
    },
    {
        "key": "CloseBrowser",
        "literal": "close browser",
        "source": "code",
        "entity": {"description": "Closes the browser."},
    },
]

LOCATOR_PAYLOADS = [
    {"literal": "x path", "verb": "by"},
    {"literal": "css selector", "verb": "by"},
    {"literal": "id", "verb": "by"},
]

ATTRIBUTE_PAYLOADS = [{"key": "value"}, {"key": "text"}, {"key": "href"}]

OPERATOR_PAYLOADS = [{"literal": "Match"}, {"literal": "equal"}, {"literal": "greater than"}]

ASSERTION_PAYLOADS = [
    {"key": "Text", "literal": "text", "entity": {"description": "Element text."}},
    {"key": "Url", "literal": "url", "entity": {"description": "Current URL."}},
    {"key": "PageTitle", "entity": {"description": "Page title."}},
]

MACRO_PAYLOADS = [
    {
        "key": "getdata",
        "source": "code",
        "entity": {
            "description": "Reads a value from a data source.",
            "cliArguments": {"key": "Value key.", "source": "Data source name."},
        },
    },
    {"key": "date", "entity": {"description": "Current date.", "cliArguments": {"format": "Date format."}}},
]

ANNOTATION_PAYLOADS = [
    {"key": "test-id", "literal": "test id", "entity": {"description": "Unique test identifier."}},
    {"key": "test-scenario", "literal": "test scenario", "entity": {"description": "What the test checks."}},
    {"key": "test-actions", "literal": "test actions", "entity": {"description": "Steps to run."}},
    {"key": "test-expected-results", "literal": "test expected results", "entity": {"description": "Assertions."}},
    {"key": "test-data-provider", "literal": "test data provider", "entity": {"description": "Data rows."}},
    {"key": "test-parameters", "literal": "test parameters", "entity": {"description": "Declared parameters."}},
]


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def document(fixtures_dir: Path) -> str:
    """Return the sample test file."""
    return (fixtures_dir / "login.rhino").read_text()


@pytest.fixture
def manifests() -> list[ActionManifest]:
    """Return the sample action manifests."""
    return [ActionManifest.from_payload(p) for p in MANIFEST_PAYLOADS]


@pytest.fixture
def catalog(manifests: list[ActionManifest]) -> Catalog:
    """Return a catalog built from the sample payloads."""
    return Catalog(
        manifests=manifests,
        locators=[Locator.model_validate(p) for p in LOCATOR_PAYLOADS],
        attributes=[ElementAttribute.model_validate(p) for p in ATTRIBUTE_PAYLOADS],
        annotations=[Annotation.model_validate(p) for p in ANNOTATION_PAYLOADS],
        macros=[ActionManifest.from_payload(p) for p in MACRO_PAYLOADS],
        operators=[Operator.model_validate(p) for p in OPERATOR_PAYLOADS],
        assertions=[AssertionMethod.model_validate(p) for p in ASSERTION_PAYLOADS],
    )


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Write the sample payloads as catalog documents and return the directory."""
    directory = tmp_path / ".rhino"
    directory.mkdir()
    (directory / "manifests.json").write_text(json.dumps(MANIFEST_PAYLOADS))
    (directory / "locators.json").write_text(json.dumps(LOCATOR_PAYLOADS))
    (directory / "attributes.json").write_text(json.dumps(ATTRIBUTE_PAYLOADS))
    (directory / "annotations.json").write_text(json.dumps(ANNOTATION_PAYLOADS))
    (directory / "macros.json").write_text(json.dumps(MACRO_PAYLOADS))
    (directory / "operators.json").write_text(json.dumps(OPERATOR_PAYLOADS))
    (directory / "assertions.json").write_text(json.dumps(ASSERTION_PAYLOADS))
    return directory


@pytest.fixture
def project(tmp_path: Path, catalog_dir: Path, document: str) -> Path:
    """Return a project root with rhino.toml, a catalog and a test file."""
    (tmp_path / "rhino.toml").write_text('[catalog]\npath = ".rhino"\n')
    (tmp_path / "login.rhino").write_text(document)
    return tmp_path
