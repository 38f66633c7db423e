"""
Project configuration loaded from ``rhino.toml``.

Example:

    [catalog]
    path = ".rhino"

    [completion]
    actions_annotation = "test-actions"
    assertions_annotation = "test-expected-results"
    data_annotation = "test-data-provider"
    parameters_annotation = "test-parameters"
    continuation_marker = "`"

    [lsp]
    log_level = "DEBUG"
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rhinolsp.core.errors import ConfigError, ErrorContext

CONFIG_FILENAME = "rhino.toml"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class CatalogConfig:
    """Where the catalog JSON documents live."""

    path: str = ".rhino"  # relative to the project root


@dataclass
class CompletionSettings:
    """Knobs for the completion dispatcher."""

    actions_annotation: str = "test-actions"  # section where actions are offered
    assertions_annotation: str = "test-expected-results"  # section where assertions are offered
    data_annotation: str = "test-data-provider"
    parameters_annotation: str = "test-parameters"
    continuation_marker: str = "`"  # trailing marker joining physical lines


@dataclass
class LspConfig:
    """Language server options."""

    log_level: str = "INFO"


@dataclass
class ProjectConfig:
    root: Path
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    completion: CompletionSettings = field(default_factory=CompletionSettings)
    lsp: LspConfig = field(default_factory=LspConfig)

    @property
    def catalog_dir(self) -> Path:
        path = Path(self.catalog.path)
        return path if path.is_absolute() else self.root / path


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table", ErrorContext(file=path, key=name))
    return value


def _string(section: dict[str, Any], name: str, default: str, path: Path) -> str:
    value = section.get(name, default)
    if not isinstance(value, str):
        raise ConfigError(f"'{name}' must be a string", ErrorContext(file=path, key=name))
    return value


def load_config(path: Path) -> ProjectConfig:
    """Read ``rhino.toml``. The project root is the file's directory."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=path)) from e

    catalog_data = _section(data, "catalog", path)
    completion_data = _section(data, "completion", path)
    lsp_data = _section(data, "lsp", path)

    catalog = CatalogConfig(path=_string(catalog_data, "path", ".rhino", path))

    completion = CompletionSettings(
        actions_annotation=_string(completion_data, "actions_annotation", "test-actions", path),
        assertions_annotation=_string(
            completion_data, "assertions_annotation", "test-expected-results", path
        ),
        data_annotation=_string(completion_data, "data_annotation", "test-data-provider", path),
        parameters_annotation=_string(completion_data, "parameters_annotation", "test-parameters", path),
        continuation_marker=_string(completion_data, "continuation_marker", "`", path),
    )
    if not completion.continuation_marker:
        raise ConfigError(
            "'continuation_marker' must not be empty",
            ErrorContext(file=path, key="continuation_marker"),
        )

    lsp = LspConfig(log_level=_string(lsp_data, "log_level", "INFO", path).upper())
    if lsp.log_level not in LOG_LEVELS:
        raise ConfigError(
            f"'log_level' must be one of {', '.join(LOG_LEVELS)}",
            ErrorContext(file=path, key="log_level"),
        )

    return ProjectConfig(root=path.parent, catalog=catalog, completion=completion, lsp=lsp)


def find_config(root: Path) -> ProjectConfig:
    """Load ``rhino.toml`` from *root*, or defaults when there is none."""
    path = root / CONFIG_FILENAME
    if not path.exists():
        return ProjectConfig(root=root)
    return load_config(path)
